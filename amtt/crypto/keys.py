"""P-256 signing and verifying keys loaded from PEM."""

import logging
from typing import TextIO

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from pydantic import BaseModel, ConfigDict

from amtt.crypto.errors import KeyParseError
from amtt.crypto.types import KeyPairData

logger = logging.getLogger(__name__)

CURVE_NAME = ec.SECP256R1.name


def _as_bytes(pem: str | bytes) -> bytes:
    return pem.encode() if isinstance(pem, str) else pem


def _check_curve(curve: ec.EllipticCurve) -> None:
    if curve.name != CURVE_NAME:
        raise KeyParseError(f"expected curve {CURVE_NAME}, got {curve.name}")


class SigningKey(BaseModel):
    """EC private key on P-256 used to sign tokens."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: ec.EllipticCurvePrivateKey
    key_id: str | None = None

    @classmethod
    def from_pem(cls, pem: str | bytes, key_id: str | None = None) -> "SigningKey":
        """Parse an unencrypted PKCS#8 or SEC1 PEM private key."""
        try:
            loaded = serialization.load_pem_private_key(_as_bytes(pem), password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise KeyParseError(f"invalid private key: {exc}") from exc
        if not isinstance(loaded, ec.EllipticCurvePrivateKey):
            raise KeyParseError("private key is not an EC key")
        _check_curve(loaded.curve)
        logger.debug("Loaded signing key kid=%s", key_id)
        return cls(key=loaded, key_id=key_id)

    def verifying_key(self) -> "VerifyingKey":
        """Return the public counterpart carrying the same key id."""
        return VerifyingKey(key=self.key.public_key(), key_id=self.key_id)


class VerifyingKey(BaseModel):
    """EC public key on P-256 used to verify tokens."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: ec.EllipticCurvePublicKey
    key_id: str | None = None

    @classmethod
    def from_pem(cls, pem: str | bytes, key_id: str | None = None) -> "VerifyingKey":
        """Parse a SubjectPublicKeyInfo PEM public key."""
        try:
            loaded = serialization.load_pem_public_key(_as_bytes(pem))
        except (ValueError, UnsupportedAlgorithm) as exc:
            raise KeyParseError(f"invalid public key: {exc}") from exc
        if not isinstance(loaded, ec.EllipticCurvePublicKey):
            raise KeyParseError("public key is not an EC key")
        _check_curve(loaded.curve)
        logger.debug("Loaded verifying key kid=%s", key_id)
        return cls(key=loaded, key_id=key_id)


def load_signing_key(reader: TextIO, key_id: str | None = None) -> SigningKey:
    """Read a whole PEM private key from ``reader``."""
    return SigningKey.from_pem(reader.read(), key_id)


def load_verifying_key(reader: TextIO, key_id: str | None = None) -> VerifyingKey:
    """Read a whole PEM public key from ``reader``."""
    return VerifyingKey.from_pem(reader.read(), key_id)


def generate_es256_keypair(kid: str) -> KeyPairData:
    """Generate a new P-256 keypair for ES256 signing."""
    private_key = ec.generate_private_key(ec.SECP256R1())
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = (
        private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )
    return KeyPairData(
        kid=kid, private_key_pem=private_pem, public_key_pem=public_pem
    )

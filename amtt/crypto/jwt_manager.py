"""ES256 compact token issuance and verification."""

import binascii
import json
import logging
from datetime import timedelta
from typing import Any

import jwt
from jwt.algorithms import ECAlgorithm
from jwt.utils import base64url_decode
from pydantic import ValidationError

from amtt.crypto.clock import Clock, system_clock
from amtt.crypto.errors import MalformedTokenError, SigningError
from amtt.crypto.keys import SigningKey, VerifyingKey
from amtt.crypto.types import ALGORITHM, Claims, Header, VerificationResult

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH = 64

_es256 = ECAlgorithm(ECAlgorithm.SHA256)


def _tolerance_seconds(time_tolerance: timedelta | int | None) -> int:
    if time_tolerance is None:
        return 0
    if isinstance(time_tolerance, timedelta):
        return int(time_tolerance.total_seconds())
    return time_tolerance


def _decode_segment(segment: str, name: str) -> bytes:
    try:
        return base64url_decode(segment)
    except (binascii.Error, ValueError) as exc:
        raise MalformedTokenError(f"{name} segment is not base64url") from exc


def _decode_json(segment: str, name: str) -> dict[str, Any]:
    raw = _decode_segment(segment, name)
    try:
        obj = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise MalformedTokenError(f"{name} segment is not JSON") from exc
    if not isinstance(obj, dict):
        raise MalformedTokenError(f"{name} segment is not a JSON object")
    return obj


def sign_token(
    signing_key: SigningKey,
    issuer: str,
    expiration_seconds: int,
    *,
    clock: Clock = system_clock,
) -> str:
    """Create an ES256 token for ``issuer`` expiring after ``expiration_seconds``."""
    claims = Claims.create(issuer, clock(), expiration_seconds)
    headers = None
    if signing_key.key_id is not None:
        headers = {"kid": signing_key.key_id}
    try:
        token = jwt.encode(
            claims.model_dump(),
            signing_key.key,
            algorithm=ALGORITHM,
            headers=headers,
        )
    except (jwt.PyJWTError, ValueError) as exc:
        raise SigningError(f"failed to sign token: {exc}") from exc
    logger.debug(
        "Issued token kid=%s iss=%s exp=%d", signing_key.key_id, issuer, claims.exp
    )
    return token


def _check(
    verifying_key: VerifyingKey,
    token: str,
    issuer: str,
    tolerance: int,
    clock: Clock,
) -> bool:
    segments = token.split(".")
    if len(segments) != 3:
        raise MalformedTokenError(
            f"expected 3 dot-separated segments, got {len(segments)}"
        )
    header_segment, payload_segment, signature_segment = segments

    try:
        header = Header.model_validate(_decode_json(header_segment, "header"))
        claims = Claims.model_validate(_decode_json(payload_segment, "payload"))
    except ValidationError as exc:
        raise MalformedTokenError(f"unexpected token shape: {exc}") from exc
    signature = _decode_segment(signature_segment, "signature")

    if header.alg != ALGORITHM:
        logger.debug("Rejected token: algorithm %s", header.alg)
        return False

    if verifying_key.key_id is not None and header.kid != verifying_key.key_id:
        logger.debug("Rejected token: key id mismatch")
        return False

    signing_input = f"{header_segment}.{payload_segment}".encode()
    if len(signature) != SIGNATURE_LENGTH or not _es256.verify(
        signing_input, verifying_key.key, signature
    ):
        logger.debug("Rejected token: bad signature")
        return False

    if clock() > claims.exp + tolerance:
        logger.debug("Rejected token: expired at %d", claims.exp)
        return False

    if issuer and claims.iss != issuer:
        logger.debug("Rejected token: issuer mismatch")
        return False

    return True


def verify_token(
    verifying_key: VerifyingKey,
    token: str,
    issuer: str = "",
    time_tolerance: timedelta | int | None = None,
    *,
    clock: Clock = system_clock,
) -> bool:
    """Check ``token`` against ``verifying_key`` and the expected ``issuer``.

    Returns ``False`` for any token that parses but fails a trust check
    (algorithm, key id, signature, expiry, issuer), without saying which.
    Raises ``MalformedTokenError`` if ``token`` cannot be parsed at all.
    An empty ``issuer`` skips the issuer check.
    """
    return _check(
        verifying_key, token, issuer, _tolerance_seconds(time_tolerance), clock
    )


def evaluate_token(
    verifying_key: VerifyingKey,
    token: str,
    issuer: str = "",
    time_tolerance: timedelta | int | None = None,
    *,
    clock: Clock = system_clock,
) -> VerificationResult:
    """Like :func:`verify_token` but reports malformed input in the result."""
    try:
        valid = verify_token(
            verifying_key, token, issuer, time_tolerance, clock=clock
        )
    except MalformedTokenError as exc:
        return VerificationResult(valid=False, error=exc)
    return VerificationResult(valid=valid)


class JWTManager:
    """Creates and verifies ES256 tokens for one P-256 keypair."""

    def __init__(
        self,
        signing_key: SigningKey | None = None,
        verifying_key: VerifyingKey | None = None,
        clock: Clock = system_clock,
    ) -> None:
        if verifying_key is None:
            if signing_key is None:
                raise ValueError("a signing or verifying key is required")
            verifying_key = signing_key.verifying_key()
        self._signing_key = signing_key
        self._verifying_key = verifying_key
        self._clock = clock

    def sign(self, issuer: str, expiration_seconds: int) -> str:
        """Create a signed token for ``issuer``."""
        if self._signing_key is None:
            raise SigningError("no signing key configured")
        return sign_token(
            self._signing_key, issuer, expiration_seconds, clock=self._clock
        )

    def verify(
        self,
        token: str,
        issuer: str = "",
        time_tolerance: timedelta | int | None = None,
    ) -> bool:
        """Verify ``token`` with this manager's public key."""
        return verify_token(
            self._verifying_key, token, issuer, time_tolerance, clock=self._clock
        )

    def evaluate(
        self,
        token: str,
        issuer: str = "",
        time_tolerance: timedelta | int | None = None,
    ) -> VerificationResult:
        """Verify ``token``, reporting malformed input in the result."""
        return evaluate_token(
            self._verifying_key, token, issuer, time_tolerance, clock=self._clock
        )

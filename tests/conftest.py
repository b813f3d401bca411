"""Shared test fixtures for amtt."""

import pytest

from amtt.crypto.keys import SigningKey, VerifyingKey, generate_es256_keypair
from amtt.crypto.types import KeyPairData

KEY_ID = "KEYID12345"


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host AMTT_* variables out of settings."""
    for name in (
        "AMTT_DEFAULT_EXPIRATION",
        "AMTT_MAX_EXPIRATION",
        "AMTT_ID_LENGTH",
        "AMTT_TIME_TOLERANCE",
        "AMTT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def keypair() -> KeyPairData:
    return generate_es256_keypair(KEY_ID)


@pytest.fixture
def signing_key(keypair: KeyPairData) -> SigningKey:
    return SigningKey.from_pem(keypair.private_key_pem, keypair.kid)


@pytest.fixture
def verifying_key(keypair: KeyPairData) -> VerifyingKey:
    return VerifyingKey.from_pem(keypair.public_key_pem, keypair.kid)

"""Tests for token header and claims models."""

import pytest
from pydantic import ValidationError

from amtt.crypto.errors import MalformedTokenError
from amtt.crypto.types import Claims, Header, VerificationResult


class TestClaims:
    """Tests for claims construction and decoding."""

    def test_create(self) -> None:
        claims = Claims.create("TEAMID1234", 100, 50)
        assert claims.iss == "TEAMID1234"
        assert claims.iat == 100
        assert claims.exp == 150

    def test_create_does_not_bound_ttl(self) -> None:
        claims = Claims.create("TEAMID1234", 100, -10)
        assert claims.exp == 90

    def test_extra_claims_tolerated(self) -> None:
        claims = Claims.model_validate(
            {"iss": "a", "iat": 1, "exp": 2, "nbf": 1, "aud": "x"}
        )
        assert claims.exp == 2

    def test_rejects_string_timestamp(self) -> None:
        with pytest.raises(ValidationError):
            Claims.model_validate({"iss": "a", "iat": 1, "exp": "2"})

    def test_is_frozen(self) -> None:
        claims = Claims.create("a", 1, 1)
        with pytest.raises(ValidationError):
            claims.exp = 10


class TestHeader:
    """Tests for the JOSE header model."""

    def test_kid_optional(self) -> None:
        header = Header.model_validate({"alg": "ES256"})
        assert header.alg == "ES256"
        assert header.kid is None

    def test_alg_required(self) -> None:
        with pytest.raises(ValidationError):
            Header.model_validate({"kid": "K"})

    def test_typ_tolerated(self) -> None:
        header = Header.model_validate({"alg": "ES256", "typ": "JWT", "kid": "K"})
        assert header.kid == "K"

    def test_rejects_numeric_kid(self) -> None:
        with pytest.raises(ValidationError):
            Header.model_validate({"alg": "ES256", "kid": 7})


class TestVerificationResult:
    """Tests for the validation outcome."""

    def test_malformed_flag(self) -> None:
        assert VerificationResult(valid=True).malformed is False
        err = MalformedTokenError("bad")
        assert VerificationResult(valid=False, error=err).malformed is True

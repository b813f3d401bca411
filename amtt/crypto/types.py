"""Type definitions for ES256 token headers, claims, and results."""

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr

from amtt.crypto.errors import MalformedTokenError

ALGORITHM = "ES256"


class KeyPairData(BaseModel):
    """A P-256 keypair in PEM form."""

    kid: str
    private_key_pem: str
    public_key_pem: str


class Header(BaseModel):
    """JOSE header of a compact token."""

    model_config = ConfigDict(frozen=True, extra="allow")

    alg: StrictStr
    kid: StrictStr | None = None


class Claims(BaseModel):
    """Registered claims carried in the token payload.

    ``iat`` and ``exp`` are absolute Unix timestamps in seconds.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    iss: StrictStr
    iat: StrictInt
    exp: StrictInt

    @classmethod
    def create(cls, issuer: str, now: int, ttl_seconds: int) -> "Claims":
        """Build claims valid from ``now`` for ``ttl_seconds``."""
        return cls(iss=issuer, iat=now, exp=now + ttl_seconds)


class VerificationResult(BaseModel):
    """Outcome of running a token through the validation pipeline.

    ``error`` is only set when the input could not be parsed as a token;
    a parsed token that fails a trust check has ``valid=False`` and no error.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    valid: bool
    error: MalformedTokenError | None = None

    @property
    def malformed(self) -> bool:
        return self.error is not None

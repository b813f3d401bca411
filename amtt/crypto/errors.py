"""Error types raised by token signing and validation."""


class TokenError(Exception):
    """Base class for all token errors."""


class KeyParseError(TokenError):
    """PEM key material could not be loaded as a P-256 key."""


class MalformedTokenError(TokenError):
    """Input is not a structurally valid compact token."""


class SigningError(TokenError):
    """The signature could not be computed."""

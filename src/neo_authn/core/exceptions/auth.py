"""Authentication-specific exceptions for neo-authn."""

from .base import NeoAuthnError


class AuthenticationError(NeoAuthnError):
    """Base exception for authentication errors."""
    pass


class ProviderError(AuthenticationError):
    """Raised when the identity provider reports a failure or a malformed success."""
    pass


class ParseError(ProviderError):
    """Raised when a provider payload is not valid JSON or a token cannot be decoded."""
    pass


class NetworkError(AuthenticationError):
    """Raised when a request to the identity provider cannot be built or sent."""
    pass


class VerificationError(AuthenticationError):
    """Raised when an identity token fails signature, audience or time checks."""
    pass


class ClaimError(AuthenticationError):
    """Raised when a required identity claim is missing or has the wrong type."""
    pass


class ConfigError(AuthenticationError):
    """Raised when required configuration or credentials are missing."""
    pass


class StorageError(AuthenticationError):
    """Raised when the token repository fails to read or write."""
    pass


class Unauthorized(AuthenticationError):
    """Raised when a credential is unknown, expired or its secret does not match."""
    pass


class TokenNotFoundError(NeoAuthnError):
    """Raised by token repositories when no token exists for an id."""
    pass

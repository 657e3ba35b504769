"""Exceptions module for neo-authn.

Every failure in the authentication core is one of the kinds below, so the
HTTP layer can choose a response from the type alone.
"""

from .base import (
    NeoAuthnError,
    get_http_status_code,
    create_error_response,
)
from .auth import (
    AuthenticationError,
    ProviderError,
    ParseError,
    NetworkError,
    VerificationError,
    ClaimError,
    ConfigError,
    StorageError,
    Unauthorized,
    TokenNotFoundError,
)

__all__ = [
    "NeoAuthnError",
    "get_http_status_code",
    "create_error_response",
    "AuthenticationError",
    "ProviderError",
    "ParseError",
    "NetworkError",
    "VerificationError",
    "ClaimError",
    "ConfigError",
    "StorageError",
    "Unauthorized",
    "TokenNotFoundError",
]

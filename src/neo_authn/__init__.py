"""Neo-Authn - Slack OpenID Connect authentication core.

Issues, caches and validates session tokens for users who log in with
Slack, with a no-authentication mode for development deployments.
Call ``setup_logging()`` once at application startup.
"""

from .__version__ import __version__

from .config import (
    AuthSettings,
    get_settings,
    setup_logging,
    LoggingConfig,
)

from .core.exceptions import (
    NeoAuthnError,
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
    get_http_status_code,
    create_error_response,
)

from .core.value_objects import TokenId, TokenSecret

from .features.auth import (
    Token,
    OAuthConfig,
    ProviderEndpoints,
    SlackUserInfo,
    AuthStrategyProtocol,
    TokenRepositoryProtocol,
    SlackOpenIDAdapter,
    MemoryTokenCache,
    MemoryTokenRepository,
    IDTokenVerifier,
    OAuthAuthenticator,
    NoAuthnAuthenticator,
    AuthStrategyFactory,
    create_auth_strategy,
)

__all__ = [
    "__version__",
    # Configuration
    "AuthSettings",
    "get_settings",
    "setup_logging",
    "LoggingConfig",
    # Exceptions
    "NeoAuthnError",
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
    "get_http_status_code",
    "create_error_response",
    # Value objects
    "TokenId",
    "TokenSecret",
    # Auth feature
    "Token",
    "OAuthConfig",
    "ProviderEndpoints",
    "SlackUserInfo",
    "AuthStrategyProtocol",
    "TokenRepositoryProtocol",
    "SlackOpenIDAdapter",
    "MemoryTokenCache",
    "MemoryTokenRepository",
    "IDTokenVerifier",
    "OAuthAuthenticator",
    "NoAuthnAuthenticator",
    "AuthStrategyFactory",
    "create_auth_strategy",
]

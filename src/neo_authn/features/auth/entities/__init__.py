"""Auth feature entities and protocols."""

from .token import Token, DEFAULT_TOKEN_LIFETIME
from .auth_config import OAuthConfig, ProviderEndpoints
from .oidc import (
    OpenIDConfiguration,
    TokenExchangeResponse,
    IdentityClaims,
    SlackUserInfo,
    SlackUserProfile,
    UserInfoResponse,
)
from .protocols import (
    AuthStrategyProtocol,
    TokenRepositoryProtocol,
    TokenCacheProtocol,
    TokenLoader,
)

__all__ = [
    "Token",
    "DEFAULT_TOKEN_LIFETIME",
    "OAuthConfig",
    "ProviderEndpoints",
    "OpenIDConfiguration",
    "TokenExchangeResponse",
    "IdentityClaims",
    "SlackUserInfo",
    "SlackUserProfile",
    "UserInfoResponse",
    "AuthStrategyProtocol",
    "TokenRepositoryProtocol",
    "TokenCacheProtocol",
    "TokenLoader",
]

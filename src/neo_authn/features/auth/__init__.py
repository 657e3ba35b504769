"""Auth feature module - Slack OpenID Connect authentication.

This module provides:
- Login through Slack's OpenID Connect flow with ID token verification
- Per-request credential validation through a TTL token cache
- A no-authentication strategy for development and single-user deployments
- Protocol-based design so callers never branch on the active strategy

Key Components:
- OAuthAuthenticator: Login, validation and logout against Slack
- NoAuthnAuthenticator: Fixed-identity strategy
- IDTokenVerifier: Discovery + JWKS signature and claim verification
- MemoryTokenCache: Striped-lock TTL cache of validated tokens
- SlackOpenIDAdapter: All HTTP calls to Slack

Usage Example:
```python
from neo_authn.features.auth import create_auth_strategy

strategy = await create_auth_strategy()

# Login
redirect_to = strategy.get_auth_url(state)
token = await strategy.handle_callback(code)

# Per request
token = await strategy.validate_token(token_id, token_secret)

# Logout
await strategy.logout(token_id)
```
"""

from .entities import (
    Token,
    OAuthConfig,
    ProviderEndpoints,
    IdentityClaims,
    SlackUserInfo,
    AuthStrategyProtocol,
    TokenRepositoryProtocol,
    TokenCacheProtocol,
)
from .adapters import SlackOpenIDAdapter
from .repositories import MemoryTokenCache, MemoryTokenRepository
from .services import IDTokenVerifier, OAuthAuthenticator, NoAuthnAuthenticator
from .factory import AuthStrategyFactory, create_auth_strategy

__all__ = [
    # Entities
    "Token",
    "OAuthConfig",
    "ProviderEndpoints",
    "IdentityClaims",
    "SlackUserInfo",
    # Protocols
    "AuthStrategyProtocol",
    "TokenRepositoryProtocol",
    "TokenCacheProtocol",
    # Adapters
    "SlackOpenIDAdapter",
    # Repositories
    "MemoryTokenCache",
    "MemoryTokenRepository",
    # Services
    "IDTokenVerifier",
    "OAuthAuthenticator",
    "NoAuthnAuthenticator",
    # Wiring
    "AuthStrategyFactory",
    "create_auth_strategy",
]

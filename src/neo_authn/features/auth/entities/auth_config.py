"""OAuth strategy configuration entities."""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from ....core.exceptions import ConfigError

SLACK_AUTHORIZE_URL = "https://slack.com/openid/connect/authorize"
SLACK_TOKEN_URL = "https://slack.com/api/openid.connect.token"
SLACK_DISCOVERY_URL = "https://slack.com/.well-known/openid-configuration"
SLACK_USER_INFO_URL = "https://slack.com/api/users.info"


@dataclass(frozen=True)
class ProviderEndpoints:
    """Identity provider endpoints and request timeout."""
    
    authorize_url: str = SLACK_AUTHORIZE_URL
    token_url: str = SLACK_TOKEN_URL
    discovery_url: str = SLACK_DISCOVERY_URL
    user_info_url: str = SLACK_USER_INFO_URL
    http_timeout_seconds: float = 10.0
    
    def __post_init__(self):
        """Validate endpoints after initialization."""
        for name in ("authorize_url", "token_url", "discovery_url", "user_info_url"):
            value = getattr(self, name)
            if not value or not value.startswith(("https://", "http://")):
                raise ConfigError(f"{name} must be an absolute http(s) URL", details={name: value})
        
        if self.http_timeout_seconds <= 0:
            raise ConfigError("http_timeout_seconds must be positive")


@dataclass(frozen=True)
class OAuthConfig:
    """Configuration for the OpenID Connect login flow.
    
    Validated once at construction; a call never fails because of
    malformed configuration.
    """
    
    # OAuth client credentials (required)
    client_id: str
    client_secret: str
    callback_url: str
    
    # Optional workspace restriction and bot credential
    team_id: Optional[str] = None
    bot_token: Optional[str] = None
    
    # Provider settings
    endpoints: ProviderEndpoints = field(default_factory=ProviderEndpoints)
    scopes: str = "openid,email,profile"
    
    # Verification settings
    clock_skew_seconds: int = 10
    verify_issuer: bool = True
    
    # Token and cache lifetimes
    token_lifetime_seconds: int = 7 * 24 * 3600
    cache_ttl_seconds: int = 300
    
    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.client_id:
            raise ConfigError("client_id is required")
        
        if not self.client_secret:
            raise ConfigError("client_secret is required")
        
        if not self.callback_url:
            raise ConfigError("callback_url is required")
        
        if self.clock_skew_seconds < 0:
            raise ConfigError("clock_skew_seconds must not be negative")
        
        if self.token_lifetime_seconds <= 0:
            raise ConfigError("token_lifetime_seconds must be positive")
        
        if self.cache_ttl_seconds <= 0:
            raise ConfigError("cache_ttl_seconds must be positive")
        
        # Empty optionals are treated as absent
        if self.team_id == "":
            object.__setattr__(self, 'team_id', None)
        if self.bot_token == "":
            object.__setattr__(self, 'bot_token', None)
    
    @property
    def token_lifetime(self) -> timedelta:
        """Lifetime of tokens issued after login."""
        return timedelta(seconds=self.token_lifetime_seconds)

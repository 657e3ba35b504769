"""Authentication settings loaded from the environment.

All variables use the ``AUTH_`` prefix and may also come from a ``.env``
file. Which strategy a deployment runs is decided from these settings by
``create_auth_strategy``.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..features.auth.entities.auth_config import OAuthConfig, ProviderEndpoints

CALLBACK_PATH = "/api/auth/callback"


class AuthSettings(BaseSettings):
    """Environment-driven authentication settings."""
    
    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Slack OAuth client
    slack_client_id: Optional[str] = Field(default=None)
    slack_client_secret: Optional[SecretStr] = Field(default=None)
    base_url: Optional[str] = Field(default=None)
    slack_team_id: Optional[str] = Field(default=None)
    slack_bot_token: Optional[SecretStr] = Field(default=None)
    
    # No-authn mode
    no_authn_user_id: Optional[str] = Field(default=None)
    
    # Lifetimes and timeouts
    cache_ttl_seconds: int = Field(default=300, gt=0)  # 5 minutes
    token_lifetime_seconds: int = Field(default=7 * 24 * 3600, gt=0)  # 7 days
    clock_skew_seconds: int = Field(default=10, ge=0)
    http_timeout_seconds: float = Field(default=10.0, gt=0)
    
    @property
    def is_no_authn_requested(self) -> bool:
        """Check if a fixed no-authn user is configured."""
        return bool(self.no_authn_user_id)
    
    @property
    def has_oauth_credentials(self) -> bool:
        """Check if client id, client secret and base URL are all set."""
        return bool(
            self.slack_client_id
            and self.slack_client_secret
            and self.slack_client_secret.get_secret_value()
            and self.base_url
        )
    
    @property
    def has_any_oauth_setting(self) -> bool:
        """Check if any OAuth credential is set."""
        return bool(self.slack_client_id or self.slack_client_secret or self.base_url)
    
    @property
    def callback_url(self) -> Optional[str]:
        """OAuth redirect URL derived from the base URL."""
        if not self.base_url:
            return None
        return self.base_url.rstrip("/") + CALLBACK_PATH
    
    def get_bot_token(self) -> Optional[str]:
        """Plain bot token, or None when not configured."""
        if self.slack_bot_token is None:
            return None
        return self.slack_bot_token.get_secret_value() or None
    
    def to_endpoints(self) -> ProviderEndpoints:
        """Build provider endpoints with the configured timeout."""
        return ProviderEndpoints(http_timeout_seconds=self.http_timeout_seconds)
    
    def to_oauth_config(self) -> OAuthConfig:
        """Build the validated OAuth configuration.
        
        Raises:
            ConfigError: If a required OAuth setting is missing or invalid
        """
        client_secret = self.slack_client_secret.get_secret_value() if self.slack_client_secret else ""
        return OAuthConfig(
            client_id=self.slack_client_id or "",
            client_secret=client_secret,
            callback_url=self.callback_url or "",
            team_id=self.slack_team_id,
            bot_token=self.get_bot_token(),
            endpoints=self.to_endpoints(),
            clock_skew_seconds=self.clock_skew_seconds,
            token_lifetime_seconds=self.token_lifetime_seconds,
            cache_ttl_seconds=self.cache_ttl_seconds,
        )


@lru_cache()
def get_settings() -> AuthSettings:
    """Get cached authentication settings."""
    return AuthSettings()

"""Tests for auth entities."""

from datetime import datetime, timedelta, timezone

import pytest

from neo_authn.core.exceptions import ConfigError
from neo_authn.core.value_objects import TokenId, TokenSecret
from neo_authn.features.auth.entities.auth_config import (
    SLACK_AUTHORIZE_URL,
    SLACK_DISCOVERY_URL,
    SLACK_TOKEN_URL,
    SLACK_USER_INFO_URL,
    OAuthConfig,
    ProviderEndpoints,
)
from neo_authn.features.auth.entities.oidc import TokenExchangeResponse, UserInfoResponse
from neo_authn.features.auth.entities.token import DEFAULT_TOKEN_LIFETIME, Token


class TestToken:
    """Test Token entity."""

    def test_new_issues_secret_and_expiry(self):
        before = datetime.now(timezone.utc)
        token = Token.new("U123", "alice@example.com", "Alice")

        assert token.id == TokenId("U123")
        assert token.sub == "U123"
        assert token.secret.value
        assert token.created_at >= before
        assert token.expires_at == token.created_at + DEFAULT_TOKEN_LIFETIME
        assert not token.is_expired

    def test_new_tokens_have_distinct_secrets(self):
        first = Token.new("U1", "a@example.com", "A")
        second = Token.new("U1", "a@example.com", "A")

        assert first.secret != second.secret

    def test_custom_lifetime(self):
        token = Token.new("U1", "a@example.com", "A", lifetime=timedelta(hours=1))

        assert token.expires_at - token.created_at == timedelta(hours=1)

    def test_is_expired(self, expired_token):
        assert expired_token.is_expired

    def test_rejects_raw_strings(self):
        with pytest.raises(ValueError):
            Token(
                id="U1",
                secret=TokenSecret("s"),
                email="a@example.com",
                name="A",
                expires_at=datetime.now(timezone.utc),
            )

    def test_rejects_naive_expiry(self):
        with pytest.raises(ValueError):
            Token(
                id=TokenId("U1"),
                secret=TokenSecret("s"),
                email="a@example.com",
                name="A",
                expires_at=datetime.now(),
            )

    def test_dict_round_trip(self, sample_token):
        assert Token.from_dict(sample_token.to_dict()) == sample_token

    def test_safe_dict_masks_secret(self, sample_token):
        safe = sample_token.to_safe_dict()

        assert safe["secret"] != sample_token.secret.value
        assert sample_token.secret.value not in repr(sample_token)

    def test_immutable(self, sample_token):
        with pytest.raises(AttributeError):
            sample_token.email = "other@example.com"


class TestProviderEndpoints:
    """Test provider endpoint defaults and validation."""

    def test_slack_defaults(self):
        endpoints = ProviderEndpoints()

        assert endpoints.authorize_url == SLACK_AUTHORIZE_URL == "https://slack.com/openid/connect/authorize"
        assert endpoints.token_url == SLACK_TOKEN_URL == "https://slack.com/api/openid.connect.token"
        assert endpoints.discovery_url == SLACK_DISCOVERY_URL == "https://slack.com/.well-known/openid-configuration"
        assert endpoints.user_info_url == SLACK_USER_INFO_URL == "https://slack.com/api/users.info"
        assert endpoints.http_timeout_seconds == 10.0

    def test_relative_url_rejected(self):
        with pytest.raises(ConfigError):
            ProviderEndpoints(token_url="/api/token")

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ConfigError):
            ProviderEndpoints(http_timeout_seconds=0)


class TestOAuthConfig:
    """Test OAuth configuration validation."""

    def make(self, **overrides):
        values = {
            "client_id": "client",
            "client_secret": "secret",
            "callback_url": "https://app.example.com/api/auth/callback",
        }
        values.update(overrides)
        return OAuthConfig(**values)

    def test_defaults(self):
        config = self.make()

        assert config.scopes == "openid,email,profile"
        assert config.clock_skew_seconds == 10
        assert config.cache_ttl_seconds == 300
        assert config.token_lifetime == timedelta(days=7)
        assert config.verify_issuer is True
        assert config.endpoints == ProviderEndpoints()

    @pytest.mark.parametrize("field", ["client_id", "client_secret", "callback_url"])
    def test_required_fields(self, field):
        with pytest.raises(ConfigError):
            self.make(**{field: ""})

    @pytest.mark.parametrize("overrides", [
        {"clock_skew_seconds": -1},
        {"token_lifetime_seconds": 0},
        {"cache_ttl_seconds": 0},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(ConfigError):
            self.make(**overrides)

    def test_empty_optionals_become_none(self):
        config = self.make(team_id="", bot_token="")

        assert config.team_id is None
        assert config.bot_token is None


class TestProviderPayloads:
    """Test provider response models."""

    def test_exchange_success_requires_ok_without_error(self):
        assert TokenExchangeResponse(ok=True, id_token="x").is_success
        assert not TokenExchangeResponse(ok=False).is_success
        assert not TokenExchangeResponse(ok=True, error="invalid_code").is_success

    def test_exchange_ignores_unknown_fields(self):
        response = TokenExchangeResponse.model_validate({"ok": True, "warning": "superfluous_charset"})

        assert response.ok

    def test_user_info_nested_profile(self):
        response = UserInfoResponse.model_validate({
            "ok": True,
            "user": {
                "id": "U1",
                "real_name": "Ann",
                "profile": {"email": "ann@example.com", "image_72": "https://img/72"},
            },
        })

        assert response.user.profile.email == "ann@example.com"
        assert response.user.profile.image_72 == "https://img/72"

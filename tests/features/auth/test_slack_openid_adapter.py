"""Tests for the Slack OpenID Connect adapter."""

import httpx
import pytest

from neo_authn.core.exceptions import NetworkError, ParseError, ProviderError
from neo_authn.features.auth.adapters.slack_openid import SlackOpenIDAdapter
from neo_authn.features.auth.entities.auth_config import ProviderEndpoints

from fake_slack import (
    BOT_TOKEN,
    CALLBACK_URL,
    CLIENT_ID,
    CLIENT_SECRET,
    DISCOVERY_PATH,
    JWKS_PATH,
    JWKS_URI,
    TOKEN_PATH,
    USER_INFO_PATH,
)


class TestExchangeCode:
    """Test the authorization code exchange."""

    @pytest.mark.asyncio
    async def test_exchange_success(self, adapter, fake_idp):
        id_token = fake_idp.issue()

        result = await adapter.exchange_code("code", CLIENT_ID, CLIENT_SECRET, CALLBACK_URL)

        assert result.is_success
        assert result.id_token == id_token
        request = fake_idp.requests_to(TOKEN_PATH)[0]
        assert request.method == "POST"
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"

    @pytest.mark.asyncio
    async def test_exchange_failure_returned_as_decoded(self, adapter, fake_idp):
        """Judging ok/error is left to the caller."""
        fake_idp.exchange_response = {"ok": False, "error": "code_already_used"}

        result = await adapter.exchange_code("code", CLIENT_ID, CLIENT_SECRET, CALLBACK_URL)

        assert not result.is_success
        assert result.error == "code_already_used"

    @pytest.mark.asyncio
    async def test_exchange_non_json_is_parse_error(self, adapter, fake_idp):
        fake_idp.raw_bodies[TOKEN_PATH] = b"not json"

        with pytest.raises(ParseError):
            await adapter.exchange_code("code", CLIENT_ID, CLIENT_SECRET, CALLBACK_URL)

    @pytest.mark.asyncio
    async def test_exchange_wrong_shape_is_parse_error(self, adapter, fake_idp):
        fake_idp.raw_bodies[TOKEN_PATH] = b'{"ok": {"nested": true}}'

        with pytest.raises(ParseError):
            await adapter.exchange_code("code", CLIENT_ID, CLIENT_SECRET, CALLBACK_URL)

    @pytest.mark.asyncio
    async def test_exchange_json_array_is_parse_error(self, adapter, fake_idp):
        fake_idp.raw_bodies[TOKEN_PATH] = b"[1, 2]"

        with pytest.raises(ParseError):
            await adapter.exchange_code("code", CLIENT_ID, CLIENT_SECRET, CALLBACK_URL)


class TestDiscoveryAndKeys:
    """Test discovery document and key set fetches."""

    @pytest.mark.asyncio
    async def test_openid_configuration(self, adapter):
        configuration = await adapter.get_openid_configuration()

        assert configuration.jwks_uri == JWKS_URI
        assert configuration.issuer == "https://slack.com"
        assert configuration.id_token_signing_alg_values_supported == ["RS256"]

    @pytest.mark.asyncio
    async def test_discovery_non_200_is_provider_error(self, adapter, fake_idp):
        fake_idp.status_overrides[DISCOVERY_PATH] = 503

        with pytest.raises(ProviderError) as exc_info:
            await adapter.get_openid_configuration()

        assert exc_info.value.details["status"] == 503

    @pytest.mark.asyncio
    async def test_discovery_without_jwks_uri_is_parse_error(self, adapter, fake_idp):
        del fake_idp.discovery["jwks_uri"]

        with pytest.raises(ParseError):
            await adapter.get_openid_configuration()

    @pytest.mark.asyncio
    async def test_fetch_jwks(self, adapter, fake_idp):
        jwks = await adapter.fetch_jwks(JWKS_URI)

        assert jwks["keys"][0]["kid"] == fake_idp.key_id

    @pytest.mark.asyncio
    async def test_jwks_without_keys_is_parse_error(self, adapter, fake_idp):
        fake_idp.raw_bodies[JWKS_PATH] = b'{"keys": "nope"}'

        with pytest.raises(ParseError):
            await adapter.fetch_jwks(JWKS_URI)


class TestUserInfo:
    """Test the users.info lookup."""

    @pytest.mark.asyncio
    async def test_user_info_sends_bot_token(self, adapter, fake_idp):
        fake_idp.add_user("U777", "bob@example.com", "Bob")

        user = await adapter.get_user_info("U777", BOT_TOKEN)

        request = fake_idp.requests_to(USER_INFO_PATH)[0]
        assert request.headers["Authorization"] == f"Bearer {BOT_TOKEN}"
        assert request.url.params["user"] == "U777"
        assert user.profile.email == "bob@example.com"

    @pytest.mark.asyncio
    async def test_user_info_not_ok(self, adapter):
        with pytest.raises(ProviderError) as exc_info:
            await adapter.get_user_info("U777", "xoxb-wrong")

        assert exc_info.value.details["error"] == "invalid_auth"

    @pytest.mark.asyncio
    async def test_user_info_ok_without_user(self, adapter, fake_idp):
        fake_idp.raw_bodies[USER_INFO_PATH] = b'{"ok": true}'

        with pytest.raises(ProviderError):
            await adapter.get_user_info("U777", BOT_TOKEN)


class TestTransport:
    """Test transport failures and client ownership."""

    @pytest.mark.asyncio
    async def test_connection_failure_is_network_error(self, adapter, fake_idp):
        fake_idp.unreachable = True

        with pytest.raises(NetworkError) as exc_info:
            await adapter.get_openid_configuration()

        assert exc_info.value.details["method"] == "GET"

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            adapter = SlackOpenIDAdapter(client=client)

            with pytest.raises(NetworkError):
                await adapter.get_openid_configuration()

    @pytest.mark.asyncio
    async def test_custom_endpoints(self):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json={"jwks_uri": "https://idp.example.com/keys"})

        endpoints = ProviderEndpoints(discovery_url="https://idp.example.com/.well-known/openid-configuration")
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            adapter = SlackOpenIDAdapter(endpoints, client=client)
            configuration = await adapter.get_openid_configuration()

        assert seen == ["https://idp.example.com/.well-known/openid-configuration"]
        assert configuration.jwks_uri == "https://idp.example.com/keys"

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        adapter = SlackOpenIDAdapter()
        client = adapter._get_client()

        async with adapter:
            pass

        assert client.is_closed

    @pytest.mark.asyncio
    async def test_shared_client_not_closed(self, adapter, http_client):
        await adapter.aclose()

        assert not http_client.is_closed

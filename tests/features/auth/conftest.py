"""Fixtures for auth feature tests."""

import httpx
import pytest
import pytest_asyncio
from cryptography.hazmat.primitives.asymmetric import rsa

from neo_authn.features.auth.adapters.slack_openid import SlackOpenIDAdapter
from neo_authn.features.auth.entities.auth_config import OAuthConfig
from neo_authn.features.auth.repositories.memory_token_cache import MemoryTokenCache
from neo_authn.features.auth.repositories.memory_token_repository import MemoryTokenRepository
from neo_authn.features.auth.services.oauth_authenticator import OAuthAuthenticator

from fake_slack import BOT_TOKEN, CALLBACK_URL, CLIENT_ID, CLIENT_SECRET, FakeSlackIdP


@pytest.fixture(scope="session")
def rsa_private_key():
    """RSA signing key shared by the whole session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_private_key():
    """A second RSA key the provider does not publish."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def fake_idp(rsa_private_key):
    """Fresh fake Slack provider."""
    return FakeSlackIdP(rsa_private_key)


@pytest_asyncio.fixture
async def http_client(fake_idp):
    """HTTP client routed to the fake provider."""
    client = httpx.AsyncClient(transport=fake_idp.transport)
    yield client
    await client.aclose()


@pytest.fixture
def oauth_config():
    """OAuth configuration matching the fake provider."""
    return OAuthConfig(
        client_id=CLIENT_ID,
        client_secret=CLIENT_SECRET,
        callback_url=CALLBACK_URL,
        bot_token=BOT_TOKEN,
    )


@pytest.fixture
def adapter(oauth_config, http_client):
    return SlackOpenIDAdapter(oauth_config.endpoints, client=http_client)


@pytest.fixture
def token_repository():
    return MemoryTokenRepository()


@pytest.fixture
def token_cache(fake_clock):
    return MemoryTokenCache(ttl_seconds=300, clock=fake_clock)


@pytest.fixture
def authenticator(token_repository, oauth_config, adapter, token_cache):
    """OAuth authenticator wired to the fake provider."""
    return OAuthAuthenticator(
        repository=token_repository,
        config=oauth_config,
        adapter=adapter,
        cache=token_cache,
    )

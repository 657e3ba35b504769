"""Authentication strategy selection and wiring."""

import logging
from typing import TYPE_CHECKING, Optional

import httpx

from .adapters.slack_openid import SlackOpenIDAdapter
from .entities.protocols import AuthStrategyProtocol, TokenRepositoryProtocol
from .repositories.memory_token_repository import MemoryTokenRepository
from .services.noauthn_authenticator import NoAuthnAuthenticator
from .services.oauth_authenticator import OAuthAuthenticator

if TYPE_CHECKING:
    from ...config.settings import AuthSettings

logger = logging.getLogger(__name__)

DEFAULT_TEST_USER_ID = "U_DEFAULT_TEST"
DEFAULT_TEST_EMAIL = "test@example.com"
DEFAULT_TEST_NAME = "Test User"


class AuthStrategyFactory:
    """Builds the single authentication strategy a deployment runs.
    
    Selection order:
    1. AUTH_NO_AUTHN_USER_ID set: no-authn for that user, resolved through
       users.info when a bot token is configured
    2. Client id, client secret and base URL set: Slack OpenID Connect
    3. Otherwise: no-authn for a default test user
    """
    
    def __init__(
        self,
        settings: Optional["AuthSettings"] = None,
        repository: Optional[TokenRepositoryProtocol] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize strategy factory.
        
        Args:
            settings: Auth settings; loaded from the environment when omitted
            repository: Token repository; in-memory when omitted
            client: Shared HTTP client for provider calls
        """
        if settings is None:
            from ...config.settings import get_settings
            settings = get_settings()
        
        self.settings = settings
        self.client = client
        self._repository = repository
        self._strategy: Optional[AuthStrategyProtocol] = None
    
    def get_repository(self) -> TokenRepositoryProtocol:
        """Get or create token repository."""
        if self._repository is None:
            self._repository = MemoryTokenRepository()
        return self._repository
    
    def create_adapter(self) -> SlackOpenIDAdapter:
        """Create a provider adapter on the shared client."""
        return SlackOpenIDAdapter(self.settings.to_endpoints(), client=self.client)
    
    async def get_strategy(self) -> AuthStrategyProtocol:
        """Get or create the configured strategy.
        
        Raises:
            ConfigError: If OAuth settings are present but invalid
            ProviderError: If the no-authn user lookup is rejected by Slack
            NetworkError: If the no-authn user lookup cannot reach Slack
        """
        if self._strategy is None:
            if self.settings.is_no_authn_requested:
                self._strategy = await self._create_no_authn_strategy()
            elif self.settings.has_oauth_credentials:
                self._strategy = self._create_oauth_strategy()
            else:
                logger.warning(
                    "No authentication configured, running without authentication "
                    f"as default user {DEFAULT_TEST_USER_ID}"
                )
                self._strategy = NoAuthnAuthenticator(
                    DEFAULT_TEST_USER_ID,
                    DEFAULT_TEST_EMAIL,
                    DEFAULT_TEST_NAME,
                )
        return self._strategy
    
    async def _create_no_authn_strategy(self) -> NoAuthnAuthenticator:
        user_id = self.settings.no_authn_user_id
        
        if self.settings.has_any_oauth_setting:
            logger.warning("No-authn mode enabled, Slack OAuth settings are ignored")
        
        bot_token = self.settings.get_bot_token()
        if not bot_token:
            logger.warning(
                f"No bot token configured, using default identity for no-authn user {user_id}"
            )
            return NoAuthnAuthenticator(user_id, DEFAULT_TEST_EMAIL, DEFAULT_TEST_NAME)
        
        async with self.create_adapter() as adapter:
            user = await adapter.get_user_info(user_id, bot_token)
        
        logger.info(f"Resolved no-authn user {user.id} from Slack")
        return NoAuthnAuthenticator(user.id, user.profile.email or "", user.real_name or "")
    
    def _create_oauth_strategy(self) -> OAuthAuthenticator:
        config = self.settings.to_oauth_config()
        logger.info(f"Slack OAuth enabled, callback_url={config.callback_url}")
        return OAuthAuthenticator(
            repository=self.get_repository(),
            config=config,
            adapter=SlackOpenIDAdapter(config.endpoints, client=self.client),
        )
    
    async def cleanup(self) -> None:
        """Release resources held by the strategy."""
        if isinstance(self._strategy, OAuthAuthenticator):
            await self._strategy.aclose()


async def create_auth_strategy(
    settings: Optional["AuthSettings"] = None,
    repository: Optional[TokenRepositoryProtocol] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> AuthStrategyProtocol:
    """Create the authentication strategy for the given settings.
    
    Args:
        settings: Auth settings; loaded from the environment when omitted
        repository: Token repository; in-memory when omitted
        client: Shared HTTP client for provider calls
    
    Returns:
        Configured strategy (OAuthAuthenticator or NoAuthnAuthenticator)
    """
    factory = AuthStrategyFactory(settings=settings, repository=repository, client=client)
    return await factory.get_strategy()

"""OAuth / OpenID Connect authentication strategy."""

import logging
from typing import Optional, Union
from urllib.parse import urlencode

from ....core.exceptions import (
    ConfigError,
    NeoAuthnError,
    ProviderError,
    StorageError,
    TokenNotFoundError,
    Unauthorized,
)
from ....core.value_objects import TokenId, TokenSecret
from ..adapters.slack_openid import SlackOpenIDAdapter
from ..entities.auth_config import OAuthConfig
from ..entities.oidc import SlackUserInfo
from ..entities.protocols import TokenCacheProtocol, TokenRepositoryProtocol
from ..entities.token import Token
from ..repositories.memory_token_cache import MemoryTokenCache
from .id_token_verifier import IDTokenVerifier

logger = logging.getLogger(__name__)


class OAuthAuthenticator:
    """Authentication strategy backed by Slack's OpenID Connect login.
    
    Login: get_auth_url -> provider round trip -> handle_callback, which
    exchanges the code, verifies the ID token and persists a Token.
    Requests: validate_token resolves a credential pair through the cache,
    falling back to the repository. Logout removes the cache entry before
    the repository record.
    """
    
    def __init__(
        self,
        repository: TokenRepositoryProtocol,
        config: OAuthConfig,
        adapter: Optional[SlackOpenIDAdapter] = None,
        cache: Optional[TokenCacheProtocol] = None,
        verifier: Optional[IDTokenVerifier] = None,
    ):
        """Initialize OAuth authenticator.
        
        Args:
            repository: Token repository (system of record)
            config: Validated OAuth configuration
            adapter: Provider HTTP adapter; built from config when omitted
            cache: Token cache; a MemoryTokenCache with config TTL when omitted
            verifier: ID token verifier; built on the adapter when omitted
        """
        self.repository = repository
        self.config = config
        self.adapter = adapter if adapter is not None else SlackOpenIDAdapter(config.endpoints)
        # An empty MemoryTokenCache is falsy, so test against None
        self.cache = cache if cache is not None else MemoryTokenCache(ttl_seconds=config.cache_ttl_seconds)
        self.verifier = verifier if verifier is not None else IDTokenVerifier(self.adapter, config)
    
    def get_auth_url(self, state: str) -> str:
        """Build the provider authorization URL for a login."""
        params = {
            "client_id": self.config.client_id,
            "scope": self.config.scopes,
            "redirect_uri": self.config.callback_url,
            "response_type": "code",
            "state": state,
        }
        if self.config.team_id:
            params["team"] = self.config.team_id
        
        return f"{self.config.endpoints.authorize_url}?{urlencode(params)}"
    
    def is_no_authn(self) -> bool:
        """OAuth strategy always authenticates."""
        return False
    
    async def handle_callback(self, code: str) -> Token:
        """Complete a login from the provider's authorization code.
        
        Nothing is persisted unless the exchange succeeds and the ID token
        verifies.
        
        Raises:
            ProviderError: If the exchange reports failure or is malformed
            NetworkError: If the provider cannot be reached
            VerificationError: If the ID token fails verification
            ClaimError: If a required identity claim is missing or mistyped
            StorageError: If the verified token cannot be persisted
        """
        exchange = await self.adapter.exchange_code(
            code,
            self.config.client_id,
            self.config.client_secret,
            self.config.callback_url,
        )
        
        if not exchange.is_success:
            logger.warning(f"Slack OAuth exchange failed: {exchange.error}")
            raise ProviderError("Slack OAuth error", details={"error": exchange.error, "ok": exchange.ok})
        
        if not exchange.id_token:
            raise ProviderError("Slack OAuth response has no ID token")
        
        identity = await self.verifier.verify(exchange.id_token)
        
        token = Token.new(
            identity.sub,
            identity.email,
            identity.name,
            lifetime=self.config.token_lifetime,
        )
        
        async def save_to_repository() -> None:
            try:
                await self.repository.put_token(token)
            except Exception as e:
                logger.error(f"Failed to save token: {e}, token={token.to_safe_dict()}")
                raise StorageError(
                    "Failed to store token",
                    details={"token_id": token.id.value, "email": token.email, "error": str(e)},
                ) from e

        # Replace under the key's lock so a previous login's secret stops
        # validating from cache before the new token is visible
        await self.cache.invalidate(token.id, then=save_to_repository)

        logger.info(f"User logged in: {token.id.value}")
        return token
    
    async def validate_token(
        self,
        token_id: Union[TokenId, str],
        token_secret: Union[TokenSecret, str],
    ) -> Token:
        """Resolve the caller's identity from a credential pair.
        
        Raises:
            Unauthorized: If the credential is unknown, expired or mismatched
            StorageError: If the repository lookup fails
        """
        try:
            token_id = TokenId.of(token_id)
            token_secret = TokenSecret.of(token_secret)
        except ValueError as e:
            raise Unauthorized("Invalid token credential") from e
        
        async def load_from_repository() -> Optional[Token]:
            return await self._load_token(token_id, token_secret)
        
        token = await self.cache.get_or_load(token_id, token_secret, load_from_repository)
        if token is None:
            raise Unauthorized("Invalid token", details={"token_id": token_id.value})
        
        return token
    
    async def _load_token(self, token_id: TokenId, token_secret: TokenSecret) -> Optional[Token]:
        try:
            token = await self.repository.get_token(token_id)
        except TokenNotFoundError:
            return None
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(
                "Failed to get token from repository",
                details={"token_id": token_id.value, "error": str(e)},
            ) from e
        
        if not token.secret.matches(token_secret):
            logger.warning(f"Token secret mismatch: {token_id.value}")
            return None
        
        if token.is_expired:
            try:
                await self.repository.delete_token(token_id)
            except TokenNotFoundError:
                pass
            except Exception as e:
                raise StorageError(
                    "Failed to delete expired token",
                    details={"token_id": token_id.value, "error": str(e)},
                ) from e
            logger.info(f"Token expired: {token_id.value}")
            return None
        
        return token
    
    async def logout(self, token_id: Union[TokenId, str]) -> None:
        """Invalidate a credential in the cache, then in the repository.
        
        The repository delete runs while the cache still holds the key's
        lock, so no concurrent validation can re-cache the token in between.
        Logging out an unknown token is not an error.
        
        Raises:
            StorageError: If the repository delete fails
        """
        try:
            token_id = TokenId.of(token_id)
        except ValueError:
            logger.debug("Logout without a token id")
            return
        
        async def delete_from_repository() -> None:
            try:
                await self.repository.delete_token(token_id)
            except TokenNotFoundError:
                logger.debug(f"Logout of unknown token: {token_id.value}")
            except NeoAuthnError:
                raise
            except Exception as e:
                raise StorageError(
                    "Failed to delete token",
                    details={"token_id": token_id.value, "error": str(e)},
                ) from e
        
        await self.cache.invalidate(token_id, then=delete_from_repository)
        logger.info(f"User logged out: {token_id.value}")
    
    async def get_slack_user_info(self, user_id: str) -> SlackUserInfo:
        """Fetch a Slack user's profile for display.
        
        Raises:
            ConfigError: If no bot token is configured
            ProviderError: If the Slack API reports failure
            NetworkError: If Slack cannot be reached
        """
        if not self.config.bot_token:
            raise ConfigError("Bot token not configured")
        
        return await self.adapter.get_user_info(user_id, self.config.bot_token)
    
    async def aclose(self) -> None:
        """Release the provider HTTP client."""
        await self.adapter.aclose()

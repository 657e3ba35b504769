"""Protocol interfaces for auth feature."""

from typing import Awaitable, Callable, Optional, Protocol, Union, runtime_checkable

from ....core.value_objects import TokenId, TokenSecret
from .token import Token


@runtime_checkable
class AuthStrategyProtocol(Protocol):
    """Authentication strategy consumed uniformly by the rest of the system.
    
    Exactly one implementation is active per deployment; callers never branch
    on which one.
    """
    
    def get_auth_url(self, state: str) -> str:
        """Build the URL that starts a login."""
        ...
    
    async def handle_callback(self, code: str) -> Token:
        """Complete a login from the provider's authorization code."""
        ...
    
    async def validate_token(
        self,
        token_id: Union[TokenId, str],
        token_secret: Union[TokenSecret, str],
    ) -> Token:
        """Resolve the caller's identity from a credential pair."""
        ...
    
    async def logout(self, token_id: Union[TokenId, str]) -> None:
        """Invalidate a credential."""
        ...
    
    def is_no_authn(self) -> bool:
        """True when the strategy performs no authentication."""
        ...


@runtime_checkable
class TokenRepositoryProtocol(Protocol):
    """Persistence of record for issued tokens."""
    
    async def put_token(self, token: Token) -> None:
        """Store a token, replacing any token with the same id."""
        ...
    
    async def get_token(self, token_id: TokenId) -> Token:
        """Get a token; raises TokenNotFoundError when absent."""
        ...
    
    async def delete_token(self, token_id: TokenId) -> None:
        """Delete a token; raises TokenNotFoundError when absent."""
        ...


TokenLoader = Callable[[], Awaitable[Optional[Token]]]


@runtime_checkable
class TokenCacheProtocol(Protocol):
    """Process-local cache of validated tokens."""
    
    async def get(self, token_id: TokenId, token_secret: TokenSecret) -> Optional[Token]:
        """Get a fresh cached token whose secret matches."""
        ...
    
    async def put(self, token: Token) -> None:
        """Cache a validated token."""
        ...
    
    async def remove(self, token_id: TokenId) -> bool:
        """Remove a cached token."""
        ...
    
    async def get_or_load(
        self,
        token_id: TokenId,
        token_secret: TokenSecret,
        loader: TokenLoader,
    ) -> Optional[Token]:
        """Get a cached token or load and cache it under the key's lock."""
        ...
    
    async def invalidate(
        self,
        token_id: TokenId,
        then: Optional[Callable[[], Awaitable[None]]] = None,
    ) -> None:
        """Remove a cached token and run `then` before releasing the key."""
        ...

"""In-memory token repository."""

import asyncio
import logging
from typing import Any, Dict

from ....core.exceptions import TokenNotFoundError
from ....core.value_objects import TokenId
from ..entities.token import Token

logger = logging.getLogger(__name__)


class MemoryTokenRepository:
    """Token repository kept in process memory.
    
    Tokens are stored in their serialised form, the same shape a persistent
    backend would hold.
    """
    
    def __init__(self):
        self._tokens: Dict[str, Dict[str, Any]] = {}
        self._lock = asyncio.Lock()
    
    async def put_token(self, token: Token) -> None:
        """Store a token, replacing any token with the same id."""
        if not isinstance(token, Token):
            raise ValueError("Invalid token")
        
        async with self._lock:
            self._tokens[token.id.value] = token.to_dict()
    
    async def get_token(self, token_id: TokenId) -> Token:
        """Get a token by id.
        
        Raises:
            TokenNotFoundError: If no token exists for the id
        """
        token_id = TokenId.of(token_id)
        
        async with self._lock:
            data = self._tokens.get(token_id.value)
        
        if data is None:
            raise TokenNotFoundError("Token not found", details={"token_id": token_id.value})
        
        return Token.from_dict(data)
    
    async def delete_token(self, token_id: TokenId) -> None:
        """Delete a token by id.
        
        Raises:
            TokenNotFoundError: If no token exists for the id
        """
        token_id = TokenId.of(token_id)
        
        async with self._lock:
            if self._tokens.pop(token_id.value, None) is None:
                raise TokenNotFoundError("Token not found", details={"token_id": token_id.value})
        
        logger.debug(f"Deleted token: {token_id.value}")
    
    def __len__(self) -> int:
        return len(self._tokens)

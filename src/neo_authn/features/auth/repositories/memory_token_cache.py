"""Memory token cache for the authentication feature."""

import asyncio
import logging
import time
from collections import OrderedDict
from contextlib import AsyncExitStack
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ....core.value_objects import TokenId, TokenSecret
from ..entities.protocols import TokenLoader
from ..entities.token import Token

logger = logging.getLogger(__name__)


class MemoryTokenCache:
    """Process-local cache of validated tokens.
    
    Keyed by token id; a hit additionally requires the presented secret to
    match the cached token. Entries expire lazily on access once older than
    the TTL or once the token itself has expired.
    
    Each token id maps onto one of a fixed set of asyncio locks, so lookups
    and read-modify-write updates for one credential are serialised while
    unrelated credentials rarely contend.
    """
    
    def __init__(
        self,
        ttl_seconds: int = 300,
        max_size: int = 10000,
        lock_shards: int = 64,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize memory token cache.
        
        Args:
            ttl_seconds: Maximum age of a cached entry
            max_size: Maximum number of cached tokens
            lock_shards: Number of locks the key space is striped over
            clock: Monotonic clock in seconds
        """
        if ttl_seconds <= 0:
            raise ValueError("TTL must be positive")
        if max_size <= 0:
            raise ValueError("Max size must be positive")
        if lock_shards <= 0:
            raise ValueError("Lock shards must be positive")
        
        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._clock = clock
        
        # token_id -> CacheEntry, in LRU order
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._locks: List[asyncio.Lock] = [asyncio.Lock() for _ in range(lock_shards)]
        
        # Statistics
        self._hits = 0
        self._misses = 0
        self._expirations = 0
        self._evictions = 0
    
    def _lock_for(self, token_id: TokenId) -> asyncio.Lock:
        return self._locks[hash(token_id.value) % len(self._locks)]
    
    async def get(self, token_id: TokenId, token_secret: TokenSecret) -> Optional[Token]:
        """Get a fresh cached token whose secret matches.
        
        Args:
            token_id: Token identifier
            token_secret: Secret presented by the caller
            
        Returns:
            Cached token or None on miss, expiry or secret mismatch
        """
        async with self._lock_for(token_id):
            return self._lookup(token_id, token_secret)
    
    async def put(self, token: Token) -> None:
        """Cache a validated token."""
        async with self._lock_for(token.id):
            self._store(token)
    
    async def remove(self, token_id: TokenId) -> bool:
        """Remove a cached token.
        
        Returns:
            True if an entry was removed
        """
        async with self._lock_for(token_id):
            return self._entries.pop(token_id.value, None) is not None
    
    async def get_or_load(
        self,
        token_id: TokenId,
        token_secret: TokenSecret,
        loader: TokenLoader,
    ) -> Optional[Token]:
        """Get a cached token or load it while holding the key's lock.
        
        Concurrent callers for the same credential wait for the first load
        instead of each hitting the source of record.
        
        Args:
            token_id: Token identifier
            token_secret: Secret presented by the caller
            loader: Coroutine factory returning the verified token or None
            
        Returns:
            Cached or freshly loaded token, None when the loader found nothing
        """
        async with self._lock_for(token_id):
            token = self._lookup(token_id, token_secret)
            if token is not None:
                return token
            
            token = await loader()
            if token is not None:
                self._store(token)
            return token
    
    async def invalidate(
        self,
        token_id: TokenId,
        then: Optional[Callable[[], Awaitable[None]]] = None,
    ) -> None:
        """Remove a cached token, then run `then` before releasing the key.
        
        No validation of the same id can repopulate the entry until `then`
        has finished.
        """
        async with self._lock_for(token_id):
            if self._entries.pop(token_id.value, None) is not None:
                logger.debug(f"Invalidated cached token: {token_id.value}")
            if then is not None:
                await then()
    
    async def clear(self) -> None:
        """Clear all cached tokens.

        Takes every shard lock, so an in-flight load cannot store its token
        after the clear.
        """
        async with AsyncExitStack() as stack:
            for lock in self._locks:
                await stack.enter_async_context(lock)
            self._entries.clear()
        logger.debug("Cleared token cache")
    
    def _lookup(self, token_id: TokenId, token_secret: TokenSecret) -> Optional[Token]:
        key = token_id.value
        entry = self._entries.get(key)
        
        if entry is None:
            self._misses += 1
            return None
        
        if self._clock() - entry.cached_at >= self.ttl_seconds or entry.token.is_expired:
            del self._entries[key]
            self._expirations += 1
            self._misses += 1
            logger.debug(f"Cached token expired: {key}")
            return None
        
        if not entry.token.secret.matches(token_secret):
            self._misses += 1
            return None
        
        self._entries.move_to_end(key)
        self._hits += 1
        return entry.token
    
    def _store(self, token: Token) -> None:
        key = token.id.value
        self._entries[key] = CacheEntry(token=token, cached_at=self._clock())
        self._entries.move_to_end(key)
        
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)
            self._evictions += 1
    
    def __len__(self) -> int:
        return len(self._entries)
    
    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        lookups = self._hits + self._misses
        
        return {
            "size": len(self._entries),
            "max_size": self.max_size,
            "ttl_seconds": self.ttl_seconds,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self._hits / lookups if lookups > 0 else 0,
            "expirations": self._expirations,
            "evictions": self._evictions,
        }


class CacheEntry:
    """Cache entry holding a token and the instant it was cached."""
    
    __slots__ = ("token", "cached_at")
    
    def __init__(self, token: Token, cached_at: float):
        self.token = token
        self.cached_at = cached_at

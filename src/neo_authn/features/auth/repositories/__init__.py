"""Auth repositories and caches."""

from .memory_token_cache import MemoryTokenCache, CacheEntry
from .memory_token_repository import MemoryTokenRepository

__all__ = [
    "MemoryTokenCache",
    "CacheEntry",
    "MemoryTokenRepository",
]

from .keys import cache_key, freeze, CacheKey
from .ttl import cached, CacheEntry, TTLCache

__all__ = (
    # Keys
    "CacheKey",
    "cache_key",
    "freeze",
    # TTL
    "CacheEntry",
    "TTLCache",
    "cached",
)

"""
Hisaab Caching — Public API
===========================
Explicitly constructed read-through cache. No module-level instance:
callers build a TTLCache and pass it to the providers that use it.
"""

from hisaab.caching.ttl import (
    CacheEntry,
    CacheStats,
    TTLCache,
    build_cache_from_settings,
    cache_key,
)

__all__ = [
    "CacheEntry",
    "CacheStats",
    "TTLCache",
    "build_cache_from_settings",
    "cache_key",
]

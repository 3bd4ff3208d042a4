"""
Hisaab Caching — TTL Read-Through Cache
=======================================
Caches expensive, slow-changing reads (business plan rows, tax
configuration, report aggregates) per business.

Keys follow "biz:<business_id>:<module>:<params-json>" so a whole tenant
can be flushed by prefix. Time is injected; nothing here calls datetime.now().
"""

from __future__ import annotations

import json
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional


DEFAULT_TTL_SECONDS = 300


def cache_key(business_id: Any, module: str, params: Optional[Dict[str, Any]] = None) -> str:
    """Build a standardized, business-scoped cache key."""
    param_str = json.dumps(params or {}, sort_keys=True, default=str)
    return f"biz:{business_id}:{module}:{param_str}"


def _business_prefix(business_id: Any) -> str:
    return f"biz:{business_id}:"


# ══════════════════════════════════════════════════════════════
# CACHE ENTRY
# ══════════════════════════════════════════════════════════════

@dataclass
class CacheEntry:
    """A single cached value with TTL metadata."""

    key: str
    value: Any
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


# ══════════════════════════════════════════════════════════════
# CACHE STATISTICS
# ══════════════════════════════════════════════════════════════

@dataclass
class CacheStats:
    """Cache performance statistics."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    invalidations: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "invalidations": self.invalidations,
            "hit_rate": round(self.hit_rate, 4),
        }


# ══════════════════════════════════════════════════════════════
# TTL CACHE (LRU + TTL)
# ══════════════════════════════════════════════════════════════

class TTLCache:
    """
    In-memory LRU cache with TTL expiration.

    - get_or_load() is the read-through entry point
    - LRU eviction when max_size is exceeded
    - Tenant flush via invalidate_business() / invalidate_prefix()
    """

    def __init__(
        self,
        max_size: int = 1000,
        default_ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be >= 1.")
        self._max_size = max_size
        self._default_ttl = timedelta(seconds=default_ttl_seconds)
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._stats = CacheStats()

    def get(self, key: str, now: datetime) -> Optional[Any]:
        """Return a cached value, or None on miss / expired entry."""
        entry = self._entries.get(key)
        if entry is None:
            self._stats.misses += 1
            return None

        if entry.is_expired(now):
            self._evict(key)
            self._stats.misses += 1
            return None

        self._entries.move_to_end(key)
        self._stats.hits += 1
        return entry.value

    def put(
        self,
        key: str,
        value: Any,
        now: datetime,
        ttl_seconds: Optional[int] = None,
    ) -> None:
        ttl = (
            timedelta(seconds=ttl_seconds)
            if ttl_seconds is not None
            else self._default_ttl
        )

        if key not in self._entries and len(self._entries) >= self._max_size:
            self._evict_lru()

        self._entries[key] = CacheEntry(
            key=key,
            value=value,
            created_at=now,
            expires_at=now + ttl,
        )
        self._entries.move_to_end(key)

    def get_or_load(
        self,
        key: str,
        loader: Callable[[], Any],
        now: datetime,
        ttl_seconds: Optional[int] = None,
    ) -> Any:
        """
        Return the cached value for key, calling loader() on a miss.

        Loader exceptions propagate and nothing is cached.
        """
        entry = self._entries.get(key)
        if entry is not None and not entry.is_expired(now):
            self._entries.move_to_end(key)
            self._stats.hits += 1
            return entry.value

        if entry is not None:
            self._evict(key)
        self._stats.misses += 1

        value = loader()
        self.put(key, value, now, ttl_seconds=ttl_seconds)
        return value

    def invalidate(self, key: str) -> bool:
        """Invalidate a specific cache entry."""
        if key in self._entries:
            del self._entries[key]
            self._stats.invalidations += 1
            return True
        return False

    def invalidate_prefix(self, prefix: str) -> int:
        """Invalidate every key starting with prefix. Returns count removed."""
        keys = [k for k in self._entries if k.startswith(prefix)]
        for key in keys:
            del self._entries[key]
        self._stats.invalidations += len(keys)
        return len(keys)

    def invalidate_business(self, business_id: Any) -> int:
        """Tenant flush: drop every entry for one business."""
        return self.invalidate_prefix(_business_prefix(business_id))

    def clear(self) -> None:
        self._entries.clear()

    @property
    def stats(self) -> CacheStats:
        return self._stats

    @property
    def size(self) -> int:
        return len(self._entries)

    def _evict(self, key: str) -> None:
        self._entries.pop(key, None)
        self._stats.evictions += 1

    def _evict_lru(self) -> None:
        if self._entries:
            oldest_key = next(iter(self._entries))
            self._evict(oldest_key)


def build_cache_from_settings() -> TTLCache:
    """TTLCache sized from HISAAB_CACHE_* Django settings."""
    from django.conf import settings

    return TTLCache(
        max_size=getattr(settings, "HISAAB_CACHE_MAX_SIZE", 1000),
        default_ttl_seconds=getattr(settings, "HISAAB_CACHE_TTL_SECONDS", DEFAULT_TTL_SECONDS),
    )

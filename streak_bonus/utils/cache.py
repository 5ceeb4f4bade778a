"""
Caching utilities for store lookups

Implements a TTL-based in-memory cache object. Each provider (reference
table, household directory, streak settings) owns its own instance, so
invalidation is an explicit call on that instance rather than a reset of
process-wide state.
"""
import logging
import time
from typing import Any, Callable, Dict, Tuple, Optional

logger = logging.getLogger(__name__)

MISSING = object()


class CacheConfig:
    """Cache configuration constants"""
    DEFAULT_TTL = 600  # 10 minutes in seconds


class TTLCache:
    """
    In-memory key/value cache with per-entry expiry.

    Usage:
        cache = TTLCache(name="reference", default_ttl=600)
        value = cache.get("activity_reference")
        if value is None:
            value = await load()
            cache.set("activity_reference", value)
    """

    def __init__(
        self,
        name: str = "cache",
        default_ttl: int = CacheConfig.DEFAULT_TTL,
        enabled: bool = True,
        clock: Callable[[], float] = time.time
    ):
        self.name = name
        self.default_ttl = default_ttl
        self.enabled = enabled
        self._clock = clock
        # {cache_key: (value, expiry_timestamp)}
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._stats = {
            "hits": 0,
            "misses": 0,
            "invalidations": 0,
            "total_queries": 0
        }

    def __contains__(self, key: str) -> bool:
        return self.get(key, MISSING) is not MISSING

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value for key, or default when absent or expired."""
        self._stats["total_queries"] += 1

        if not self.enabled:
            self._stats["misses"] += 1
            return default

        entry = self._entries.get(key)
        if entry is None:
            self._stats["misses"] += 1
            logger.debug(f"Cache MISS: {self.name}:{key}")
            return default

        value, expiry = entry
        if self._clock() >= expiry:
            del self._entries[key]
            self._stats["misses"] += 1
            logger.debug(f"Cache EXPIRED: {self.name}:{key}")
            return default

        self._stats["hits"] += 1
        logger.debug(f"Cache HIT: {self.name}:{key}")
        return value

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Store value under key for ttl seconds (default_ttl when omitted)."""
        if not self.enabled:
            return
        ttl = self.default_ttl if ttl is None else ttl
        self._entries[key] = (value, self._clock() + ttl)
        logger.debug(f"Cache STORED: {self.name}:{key} (TTL: {ttl}s)")

    def delete(self, key: str) -> bool:
        """Remove one entry; True when it was present."""
        if self._entries.pop(key, MISSING) is MISSING:
            return False
        self._stats["invalidations"] += 1
        logger.debug(f"Cache DELETED: {self.name}:{key}")
        return True

    def invalidate(self, pattern: Optional[str] = None) -> int:
        """
        Invalidate cache entries whose key contains pattern.

        Args:
            pattern: Substring to match in cache keys; None clears everything

        Returns:
            Number of cache entries invalidated
        """
        if pattern is None:
            count = len(self._entries)
            self._entries.clear()
        else:
            keys_to_delete = [key for key in self._entries if pattern in key]
            for key in keys_to_delete:
                del self._entries[key]
            count = len(keys_to_delete)

        self._stats["invalidations"] += count
        if count > 0:
            logger.info(f"Invalidated {count} {self.name} cache entries (pattern='{pattern}')")
        return count

    def clear(self) -> int:
        """Drop every entry."""
        return self.invalidate()

    def get_stats(self) -> dict:
        """
        Get cache performance statistics.

        Returns:
            dict with hits, misses, hit_rate_percent, invalidations, total_queries, cache_size
        """
        hits = self._stats["hits"]
        total = self._stats["total_queries"]
        hit_rate = (hits / total * 100) if total > 0 else 0

        return {
            "hits": hits,
            "misses": self._stats["misses"],
            "hit_rate_percent": round(hit_rate, 2),
            "invalidations": self._stats["invalidations"],
            "total_queries": total,
            "cache_size": len(self._entries)
        }

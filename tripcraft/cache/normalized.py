"""Time-bounded cache for oracle results.

Entries are stored as JSON documents ``{"data": ..., "timestamp": ...}`` under
a common prefix in any KeyValueStore. An entry is fresh while its age is
strictly less than the TTL; stale or unreadable entries are treated as absent
and deleted when found.
"""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from tripcraft.cache.store import InMemoryKeyValueStore, KeyValueStore, RedisKeyValueStore
from tripcraft.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60
DEFAULT_PREFIX = "tripcraft-cache:"


@dataclass
class CacheEntry:
    """Cached payload with capture time."""

    data: Any
    timestamp: float

    def is_fresh(self, now: float, ttl_seconds: int) -> bool:
        """Check if cache entry is still valid."""
        return now - self.timestamp < ttl_seconds

    def dumps(self) -> str:
        return json.dumps({"data": self.data, "timestamp": self.timestamp})

    @classmethod
    def loads(cls, raw: str) -> "CacheEntry":
        doc = json.loads(raw)
        return cls(data=doc["data"], timestamp=float(doc["timestamp"]))


def make_cache_key(kind: str, *parts: str) -> str:
    """Join a request kind and its normalized parameters into a cache key."""
    return ":".join([kind, *parts])


class NormalizedCache:
    """TTL cache keyed by normalized request parameters."""

    def __init__(
        self,
        store: KeyValueStore,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        prefix: str = DEFAULT_PREFIX,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize cache.

        Args:
            store: Backing key/value store
            ttl_seconds: Validity window of an entry
            prefix: Namespace prepended to every key in the store
            clock: Injectable clock (default: datetime.now)
        """
        self._store = store
        self._ttl_seconds = ttl_seconds
        self._prefix = prefix
        self._clock = clock or datetime.now

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def _now(self) -> float:
        return self._clock().timestamp()

    def get(self, key: str) -> Any | None:
        """Get cached value if fresh, None otherwise."""
        store_key = self._prefix + key
        try:
            raw = self._store.get(store_key)
        except Exception as e:
            logger.error(f"[Cache] Read error for key {key}: {e}")
            return None
        if raw is None:
            logger.debug(f"[Cache] MISS for key: {key}")
            return None

        try:
            entry = CacheEntry.loads(raw)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"[Cache] Corrupted entry for key {key}: {e}")
            self._discard(store_key)
            return None

        if not entry.is_fresh(self._now(), self._ttl_seconds):
            logger.info(f"[Cache] STALE for key: {key}")
            self._discard(store_key)
            return None

        logger.info(f"[Cache] HIT for key: {key}")
        return entry.data

    def _discard(self, store_key: str) -> None:
        try:
            self._store.delete(store_key)
        except Exception as e:
            logger.error(f"[Cache] Delete error for key {store_key}: {e}")

    def set(self, key: str, value: Any) -> None:
        """Store value; write failures are logged and the value goes uncached."""
        entry = CacheEntry(data=value, timestamp=self._now())
        try:
            self._store.set(self._prefix + key, entry.dumps())
        except Exception as e:
            logger.error(f"[Cache] Write error for key {key}: {e}")
            return
        logger.info(f"[Cache] SET for key: {key}")

    def sweep(self) -> int:
        """Remove all stale or unreadable entries.

        Returns:
            Number of entries removed
        """
        logger.info("[Cache] Running cleanup...")
        now = self._now()
        removed = 0
        try:
            for store_key in self._store.keys(self._prefix):
                raw = self._store.get(store_key)
                if raw is None:
                    continue
                try:
                    fresh = CacheEntry.loads(raw).is_fresh(now, self._ttl_seconds)
                except (ValueError, KeyError, TypeError):
                    fresh = False
                if not fresh:
                    logger.info(f"[Cache] CLEANUP: Removing stale key {store_key}")
                    self._store.delete(store_key)
                    removed += 1
        except Exception as e:
            logger.error(f"[Cache] Cleanup error: {e}")
        return removed


def create_cache_from_settings(settings: Settings) -> NormalizedCache:
    """Build the cache, backed by Redis when configured, in-memory otherwise."""
    store: KeyValueStore
    if settings.redis_url:
        logger.info("Using Redis-backed oracle cache")
        store = RedisKeyValueStore.from_url(settings.redis_url)
    else:
        store = InMemoryKeyValueStore()
    return NormalizedCache(
        store, ttl_seconds=settings.cache_ttl_seconds, prefix=settings.cache_prefix
    )

"""Oracle result caching."""

from tripcraft.cache.normalized import (
    CacheEntry,
    NormalizedCache,
    create_cache_from_settings,
    make_cache_key,
)
from tripcraft.cache.store import InMemoryKeyValueStore, KeyValueStore, RedisKeyValueStore

__all__ = [
    "CacheEntry",
    "NormalizedCache",
    "make_cache_key",
    "create_cache_from_settings",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "RedisKeyValueStore",
]

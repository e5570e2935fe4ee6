"""Tests for the TTL cache and key/value stores."""

import json
from unittest.mock import MagicMock

from tripcraft.cache.normalized import CacheEntry, NormalizedCache, create_cache_from_settings, make_cache_key
from tripcraft.cache.store import InMemoryKeyValueStore, RedisKeyValueStore
from tripcraft.config import Settings


def test_make_cache_key_joins_parts() -> None:
    assert make_cache_key("suggestions-v2", "low", "summer", "asia") == "suggestions-v2:low:summer:asia"


def test_cache_entry_freshness_boundary() -> None:
    """Entry is valid while age is strictly less than the TTL."""
    entry = CacheEntry(data=[1], timestamp=1000.0)

    assert entry.is_fresh(now=1000.0 + 3599.999, ttl_seconds=3600)
    assert not entry.is_fresh(now=1000.0 + 3600, ttl_seconds=3600)


def test_set_then_get_returns_value(cache: NormalizedCache) -> None:
    cache.set("k", {"a": 1})

    assert cache.get("k") == {"a": 1}


def test_get_missing_key_returns_none(cache: NormalizedCache) -> None:
    assert cache.get("nope") is None


def test_entries_are_stored_under_prefix(kv_store: InMemoryKeyValueStore, cache: NormalizedCache) -> None:
    cache.set("k", [1, 2])

    raw = kv_store.get("tripcraft-cache:k")
    assert raw is not None
    doc = json.loads(raw)
    assert doc["data"] == [1, 2]
    assert isinstance(doc["timestamp"], float)


def test_stale_entry_is_absent_and_deleted(kv_store: InMemoryKeyValueStore, cache: NormalizedCache, clock) -> None:
    """Reading a stale entry reports a miss and removes it from the store."""
    cache.set("k", "v")
    clock.advance(3600)

    assert cache.get("k") is None
    assert kv_store.get("tripcraft-cache:k") is None


def test_entry_just_before_expiry_is_returned(cache: NormalizedCache, clock) -> None:
    cache.set("k", "v")
    clock.advance(3599)

    assert cache.get("k") == "v"


def test_corrupted_entry_is_deleted(kv_store: InMemoryKeyValueStore, cache: NormalizedCache) -> None:
    kv_store.set("tripcraft-cache:k", "not json")

    assert cache.get("k") is None
    assert len(kv_store) == 0


def test_write_failure_is_swallowed() -> None:
    store = MagicMock()
    store.set.side_effect = RuntimeError("quota exceeded")
    cache = NormalizedCache(store)

    cache.set("k", "v")

    store.set.assert_called_once()


def test_sweep_removes_only_stale_entries(kv_store: InMemoryKeyValueStore, cache: NormalizedCache, clock) -> None:
    cache.set("old", 1)
    clock.advance(3000)
    cache.set("new", 2)
    kv_store.set("tripcraft-cache:broken", "{")
    kv_store.set("other-app:key", "untouched")
    clock.advance(1000)

    removed = cache.sweep()

    assert removed == 2
    assert kv_store.keys() == ["tripcraft-cache:new", "other-app:key"]
    assert cache.get("new") == 2


def test_in_memory_store_keys_by_prefix() -> None:
    store = InMemoryKeyValueStore()
    store.set("a:1", "x")
    store.set("b:1", "y")
    store.delete("missing")

    assert store.keys("a:") == ["a:1"]
    assert len(store) == 2


def test_redis_store_decodes_and_scans_prefix() -> None:
    redis_client = MagicMock()
    redis_client.get.return_value = b"value"
    redis_client.scan_iter.return_value = iter([b"p:1", "p:2"])
    store = RedisKeyValueStore(redis_client)

    assert store.get("p:1") == "value"
    assert store.keys("p:") == ["p:1", "p:2"]
    redis_client.scan_iter.assert_called_once_with(match="p:*")

    store.set("p:3", "v")
    store.delete("p:3")
    redis_client.set.assert_called_once_with("p:3", "v")
    redis_client.delete.assert_called_once_with("p:3")


def test_redis_store_missing_key() -> None:
    redis_client = MagicMock()
    redis_client.get.return_value = None

    assert RedisKeyValueStore(redis_client).get("k") is None


def test_cache_from_settings_uses_memory_without_redis_url() -> None:
    cache = create_cache_from_settings(Settings(redis_url=None, cache_ttl_seconds=60))

    assert cache.ttl_seconds == 60
    cache.set("k", "v")
    assert cache.get("k") == "v"


class UnreachableStore(InMemoryKeyValueStore):
    """Store whose reads fail, as when Redis is down."""

    def get(self, key: str) -> str | None:
        raise ConnectionError("redis down")


def test_read_failure_is_a_miss() -> None:
    cache = NormalizedCache(UnreachableStore())

    assert cache.get("k") is None


def test_stale_delete_failure_is_swallowed(clock) -> None:
    store = MagicMock()
    store.get.return_value = CacheEntry(data="v", timestamp=clock().timestamp() - 7200).dumps()
    store.delete.side_effect = ConnectionError("redis down")
    cache = NormalizedCache(store, clock=clock)

    assert cache.get("k") is None
    store.delete.assert_called_once_with("tripcraft-cache:k")

"""Key/value store backends for the oracle cache."""

from typing import Protocol

import redis


class KeyValueStore(Protocol):
    """Protocol for string key/value stores."""

    def get(self, key: str) -> str | None:
        """Get raw value for key, None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store raw value under key."""
        ...

    def delete(self, key: str) -> None:
        """Remove key if present."""
        ...

    def keys(self, prefix: str = "") -> list[str]:
        """List keys starting with prefix."""
        ...


class InMemoryKeyValueStore:
    """In-memory implementation of KeyValueStore."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        return [k for k in self._data if k.startswith(prefix)]

    def __len__(self) -> int:
        return len(self._data)


class RedisKeyValueStore:
    """Redis-backed implementation of KeyValueStore."""

    def __init__(self, redis_client: redis.Redis) -> None:
        """Initialize store.

        Args:
            redis_client: Redis client created with decode_responses=True
        """
        self._redis = redis_client

    @classmethod
    def from_url(cls, url: str) -> "RedisKeyValueStore":
        """Create a store from a Redis URL."""
        return cls(redis.from_url(url, decode_responses=True))  # type: ignore[no-untyped-call]

    def get(self, key: str) -> str | None:
        value = self._redis.get(key)
        if value is None:
            return None
        return value if isinstance(value, str) else value.decode("utf-8")

    def set(self, key: str, value: str) -> None:
        self._redis.set(key, value)

    def delete(self, key: str) -> None:
        self._redis.delete(key)

    def keys(self, prefix: str = "") -> list[str]:
        return [
            k if isinstance(k, str) else k.decode("utf-8")
            for k in self._redis.scan_iter(match=f"{prefix}*")
        ]

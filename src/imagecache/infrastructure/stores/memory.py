"""In-memory key/value store implementation."""

from typing import Generic, TypeVar

from cachetools import LRUCache  # type: ignore[import-untyped]

from imagecache.core.errors import StorageError

V = TypeVar("V")


class InMemoryKeyValueStore(Generic[V]):
    """Process-local store using an LRU cache.

    Suitable for ephemeral caches and tests. Uses cachetools so the
    store stays bounded; when ``maxsize`` is reached the least recently
    used key is dropped, which the cache manager treats like any other
    missing record.
    """

    def __init__(self, maxsize: int = 1000) -> None:
        """Initialize the in-memory store.

        Args:
            maxsize: Maximum number of keys kept.
        """
        self._maxsize = maxsize
        self._cache: LRUCache[str, V] = LRUCache(maxsize=maxsize)
        self._open = False

    @property
    def is_open(self) -> bool:
        """Return True if the store is open."""
        return self._open

    async def open(self) -> None:
        """Mark the store as open."""
        self._open = True

    async def close(self) -> None:
        """Mark the store as closed. Entries are kept."""
        self._open = False

    async def get(self, key: str) -> V | None:
        """Retrieve the value stored under key."""
        self._check_open()
        return self._cache.get(key)

    async def put(self, key: str, value: V) -> None:
        """Store value under key, replacing any existing value."""
        self._check_open()
        self._cache[key] = value

    async def delete(self, key: str) -> bool:
        """Delete the value stored under key.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        self._check_open()
        try:
            del self._cache[key]
            return True
        except KeyError:
            return False

    async def contains_key(self, key: str) -> bool:
        """Check if key is present."""
        self._check_open()
        return key in self._cache

    async def keys(self) -> list[str]:
        """Return a snapshot of all keys."""
        self._check_open()
        return list(self._cache.keys())

    async def clear(self) -> None:
        """Drop all entries and reopen with a fresh cache."""
        self._cache = LRUCache(maxsize=self._maxsize)
        self._open = True

    def __len__(self) -> int:
        """Return the number of stored keys."""
        return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the store."""
        return self._maxsize

    def _check_open(self) -> None:
        if not self._open:
            raise StorageError("Store is not open")

"""Key/value store interface."""

from typing import Protocol, TypeVar

V = TypeVar("V")


class IKeyValueStore(Protocol[V]):
    """Contract for the durable stores behind the image cache.

    The cache keeps two stores addressed by the same keys: one mapping
    keys to creation timestamps and one mapping keys to image bytes.
    All writes are persisted before the coroutine returns.
    """

    @property
    def is_open(self) -> bool:
        """Return True if the store is ready for use."""
        ...

    async def open(self) -> None:
        """Open or create the underlying storage. Idempotent."""
        ...

    async def close(self) -> None:
        """Release the underlying storage handle."""
        ...

    async def get(self, key: str) -> V | None:
        """Retrieve the value stored under key.

        Args:
            key: The key to look up.

        Returns:
            The stored value, or None if the key is absent.
        """
        ...

    async def put(self, key: str, value: V) -> None:
        """Store value under key, replacing any existing value.

        Args:
            key: The key.
            value: The value to store.
        """
        ...

    async def delete(self, key: str) -> bool:
        """Delete the value stored under key.

        Args:
            key: The key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        ...

    async def contains_key(self, key: str) -> bool:
        """Check if key is present.

        Args:
            key: The key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        ...

    async def keys(self) -> list[str]:
        """Return a snapshot of all keys at call time."""
        ...

    async def clear(self) -> None:
        """Destroy all entries and reopen an empty store."""
        ...

"""Key builder interface."""

from typing import Protocol


class IKeyBuilder(Protocol):
    """Contract for deriving cache keys from image URLs.

    Keys must be deterministic: the same URL yields the same key in
    every process and every release.
    """

    def build(self, url: str) -> str:
        """Build the cache key for an image URL.

        Args:
            url: The image URL.

        Returns:
            A fixed-length key addressing both stores.
        """
        ...

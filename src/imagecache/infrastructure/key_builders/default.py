"""Default key builder implementation."""

from imagecache.utils.hashing import key_from_url


class UrlKeyBuilder:
    """Key builder mapping an image URL to a version 5 UUID.

    The same URL always maps to the same key, across restarts and
    releases, so entries written by older processes stay reachable.
    """

    def build(self, url: str) -> str:
        """Build the cache key for an image URL.

        Args:
            url: The image URL.

        Returns:
            The derived cache key.
        """
        return key_from_url(url)

"""Hashing utilities for cache key generation."""

import uuid


def key_from_url(url: str) -> str:
    """Derive a deterministic cache key from a URL.

    Uses a name-based (version 5) UUID in the URL namespace, so the
    key only depends on the URL text.

    Args:
        url: Any string, including the empty string.

    Returns:
        The 36-character hyphenated UUID string.
    """
    return str(uuid.uuid5(uuid.NAMESPACE_URL, url))

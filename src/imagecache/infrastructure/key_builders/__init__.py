"""Key builder implementations."""

from imagecache.infrastructure.key_builders.default import UrlKeyBuilder

__all__ = ["UrlKeyBuilder"]

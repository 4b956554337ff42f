"""Infrastructure layer implementations for imagecache."""

from imagecache.infrastructure.fetchers import HttpxImageFetcher
from imagecache.infrastructure.key_builders import UrlKeyBuilder
from imagecache.infrastructure.serializers import RawSerializer, TimestampSerializer
from imagecache.infrastructure.stores import InMemoryKeyValueStore, SqliteKeyValueStore

__all__ = [
    "HttpxImageFetcher",
    "UrlKeyBuilder",
    "RawSerializer",
    "TimestampSerializer",
    "InMemoryKeyValueStore",
    "SqliteKeyValueStore",
]

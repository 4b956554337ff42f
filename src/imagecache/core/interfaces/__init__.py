"""Core interfaces (Protocol classes) for imagecache."""

from imagecache.core.interfaces.image_fetcher import IImageFetcher, ProgressCallback
from imagecache.core.interfaces.key_builder import IKeyBuilder
from imagecache.core.interfaces.key_value_store import IKeyValueStore
from imagecache.core.interfaces.serializer import ISerializer

__all__ = [
    "IKeyValueStore",
    "IKeyBuilder",
    "ISerializer",
    "IImageFetcher",
    "ProgressCallback",
]

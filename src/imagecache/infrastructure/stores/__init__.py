"""Key/value store implementations."""

from imagecache.infrastructure.stores.memory import InMemoryKeyValueStore
from imagecache.infrastructure.stores.sqlite import SqliteKeyValueStore

__all__ = ["InMemoryKeyValueStore", "SqliteKeyValueStore"]

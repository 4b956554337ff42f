"""Cache configuration entity."""

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import cast

DEFAULT_CLEAR_CACHE_AFTER = timedelta(days=7)


@dataclass
class CacheConfig:
    """Cache configuration.

    Describes where the image stores live on disk and how long a
    cached image is kept before it becomes eligible for eviction.

    Storage:
        ``storage_location`` is the directory holding the metadata
        and blob stores. When omitted, ``~/.cache/imagecache`` is used.

    Retention:
        ``clear_cache_after`` is the retention period. An image stored
        longer ago than this is removed on the next eviction sweep,
        which always runs when the cache is initialized.
    """

    storage_location: str | Path | None = None
    clear_cache_after: timedelta | None = None

    # Store names (one database file each)
    metadata_store_name: str = "images_key"
    blob_store_name: str = "images"

    def __post_init__(self) -> None:
        """Apply defaults and validate the retention period."""
        if self.clear_cache_after is None:
            self.clear_cache_after = DEFAULT_CLEAR_CACHE_AFTER
        if self.clear_cache_after < timedelta(0):
            raise ValueError("clear_cache_after must not be negative")

    @property
    def resolved_location(self) -> Path:
        """Return the storage directory as an absolute path."""
        if self.storage_location is None:
            return Path.home() / ".cache" / "imagecache"
        return Path(self.storage_location).expanduser().resolve()

    @property
    def retention(self) -> timedelta:
        """Return the effective retention period."""
        return cast(timedelta, self.clear_cache_after)

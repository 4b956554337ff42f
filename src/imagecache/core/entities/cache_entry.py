"""Cache entry entity."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


@dataclass(frozen=True)
class CacheEntry:
    """Immutable view of one cached image.

    On disk an entry is split over two records addressed by the same
    key: the creation timestamp in the metadata store and the payload
    in the blob store. This value object joins them back together.
    """

    key: str
    created_at: datetime
    payload: bytes

    @property
    def size(self) -> int:
        """Return the payload size in bytes."""
        return len(self.payload)

    def age(self, now: datetime | None = None) -> timedelta:
        """Return how long ago the entry was stored.

        Args:
            now: Reference time. Defaults to the current UTC time.

        Returns:
            The elapsed time since ``created_at``.
        """
        return (now or datetime.now(timezone.utc)) - self.created_at

    def is_expired(
        self,
        retention: timedelta,
        now: datetime | None = None,
    ) -> bool:
        """Check if the entry outlived the retention period.

        Args:
            retention: The configured retention period.
            now: Reference time. Defaults to the current UTC time.

        Returns:
            True if the entry is strictly older than ``retention``.
        """
        return self.age(now) > retention

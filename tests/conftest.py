"""Pytest configuration for imagecache tests."""

from datetime import datetime, timedelta, timezone

import pytest

from imagecache import CacheConfig, CacheManager, InMemoryKeyValueStore


class FakeClock:
    """Controllable clock returning timezone-aware UTC timestamps."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock for testing."""
    return FakeClock()


@pytest.fixture
def metadata_store() -> InMemoryKeyValueStore[datetime]:
    """Create an in-memory metadata store."""
    return InMemoryKeyValueStore(maxsize=100)


@pytest.fixture
def blob_store() -> InMemoryKeyValueStore[bytes]:
    """Create an in-memory blob store."""
    return InMemoryKeyValueStore(maxsize=100)


@pytest.fixture
def cache_manager(
    metadata_store: InMemoryKeyValueStore[datetime],
    blob_store: InMemoryKeyValueStore[bytes],
    clock: FakeClock,
) -> CacheManager:
    """Create an uninitialized cache manager over in-memory stores."""
    return CacheManager(
        metadata_store=metadata_store,
        blob_store=blob_store,
        config=CacheConfig(clear_cache_after=timedelta(days=7)),
        clock=clock,
    )


@pytest.fixture
async def initialized_manager(cache_manager: CacheManager) -> CacheManager:
    """Create an initialized cache manager over in-memory stores."""
    await cache_manager.initialize()
    return cache_manager

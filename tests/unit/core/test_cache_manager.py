"""Tests for CacheManager."""

import asyncio
from datetime import datetime, timedelta

import pytest

from imagecache import (
    CacheManager,
    InMemoryKeyValueStore,
    UninitializedCacheError,
    key_from_url,
)

PNG_BYTES = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])


class ReopeningStore(InMemoryKeyValueStore[bytes]):
    """Store that is briefly closed while it recreates itself on clear."""

    async def clear(self) -> None:
        await self.close()
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        await super().clear()


class TestInitialization:
    """Tests for initialize and the uninitialized guard."""

    @pytest.mark.asyncio
    async def test_initialize_opens_stores(
        self,
        cache_manager: CacheManager,
        metadata_store: InMemoryKeyValueStore[datetime],
        blob_store: InMemoryKeyValueStore[bytes],
    ) -> None:
        """Test that initialize opens both stores."""
        assert cache_manager.is_initialized is False

        await cache_manager.initialize()

        assert cache_manager.is_initialized is True
        assert metadata_store.is_open
        assert blob_store.is_open

    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(
        self, initialized_manager: CacheManager
    ) -> None:
        """Test that a second initialize keeps the existing data."""
        await initialized_manager.save_image("http://x/a.png", PNG_BYTES)

        await initialized_manager.initialize()

        assert await initialized_manager.get_image("http://x/a.png") == PNG_BYTES

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "call",
        [
            lambda m: m.get_image("http://x/a.png"),
            lambda m: m.get_entry("http://x/a.png"),
            lambda m: m.save_image("http://x/a.png", PNG_BYTES),
            lambda m: m.evict_expired(timedelta(days=1)),
            lambda m: m.delete_cached_image("http://x/a.png"),
            lambda m: m.clear_all_cached_images(),
            lambda m: m.is_cached("http://x/a.png"),
        ],
    )
    async def test_operations_require_initialize(
        self, cache_manager: CacheManager, call
    ) -> None:
        """Test that every operation fails before initialize."""
        with pytest.raises(UninitializedCacheError):
            await call(cache_manager)

    @pytest.mark.asyncio
    async def test_close_requires_reinitialize(
        self, initialized_manager: CacheManager
    ) -> None:
        """Test that a closed manager rejects operations until reinitialized."""
        await initialized_manager.close()

        with pytest.raises(UninitializedCacheError):
            await initialized_manager.is_cached("http://x/a.png")

        await initialized_manager.initialize()
        assert await initialized_manager.is_cached("http://x/a.png") is False

    @pytest.mark.asyncio
    async def test_async_context_manager(self, cache_manager: CacheManager) -> None:
        """Test initializing and closing via async with."""
        async with cache_manager as manager:
            assert manager.is_initialized
            await manager.save_image("http://x/a.png", PNG_BYTES)

        assert cache_manager.is_initialized is False


class TestGetAndSave:
    """Tests for get_image and save_image."""

    @pytest.mark.asyncio
    async def test_save_and_get_image(self, initialized_manager: CacheManager) -> None:
        """Test that saved bytes come back unchanged."""
        await initialized_manager.save_image("http://x/a.png", PNG_BYTES)

        assert await initialized_manager.get_image("http://x/a.png") == PNG_BYTES

    @pytest.mark.asyncio
    async def test_save_and_get_empty_payload(
        self, initialized_manager: CacheManager
    ) -> None:
        """Test that a zero-length payload is stored and returned verbatim."""
        await initialized_manager.save_image("http://x/empty.png", b"")

        result = await initialized_manager.get_image("http://x/empty.png")

        assert result == b""
        assert await initialized_manager.is_cached("http://x/empty.png")

    @pytest.mark.asyncio
    async def test_cache_miss(self, initialized_manager: CacheManager) -> None:
        """Test cache miss returns None."""
        assert await initialized_manager.get_image("http://x/missing.png") is None

    @pytest.mark.asyncio
    async def test_records_use_derived_key(
        self,
        initialized_manager: CacheManager,
        metadata_store: InMemoryKeyValueStore[datetime],
        blob_store: InMemoryKeyValueStore[bytes],
    ) -> None:
        """Test that both records are stored under the derived key."""
        url = "http://x/a.png"
        await initialized_manager.save_image(url, PNG_BYTES)

        key = key_from_url(url)
        assert await metadata_store.keys() == [key]
        assert await blob_store.get(key) == PNG_BYTES
        assert await blob_store.contains_key(url) is False

    @pytest.mark.asyncio
    async def test_save_overwrites_and_refreshes_timestamp(
        self, initialized_manager: CacheManager, clock
    ) -> None:
        """Test that re-saving replaces the bytes and refreshes created_at."""
        url = "http://x/a.png"
        await initialized_manager.save_image(url, b"old")
        first = await initialized_manager.get_entry(url)

        clock.advance(timedelta(hours=1))
        await initialized_manager.save_image(url, b"new")
        second = await initialized_manager.get_entry(url)

        assert first is not None and second is not None
        assert second.payload == b"new"
        assert second.created_at - first.created_at == timedelta(hours=1)

    @pytest.mark.asyncio
    async def test_read_does_not_refresh_timestamp(
        self, initialized_manager: CacheManager, clock
    ) -> None:
        """Test that get_image leaves created_at alone."""
        url = "http://x/a.png"
        await initialized_manager.save_image(url, PNG_BYTES)
        saved_at = clock.now

        clock.advance(timedelta(hours=5))
        await initialized_manager.get_image(url)

        entry = await initialized_manager.get_entry(url)
        assert entry is not None
        assert entry.created_at == saved_at

    @pytest.mark.asyncio
    async def test_different_urls_different_entries(
        self, initialized_manager: CacheManager
    ) -> None:
        """Test that different URLs are cached independently."""
        await initialized_manager.save_image("http://x/a.png", b"a")
        await initialized_manager.save_image("http://x/b.png", b"b")

        assert await initialized_manager.get_image("http://x/a.png") == b"a"
        assert await initialized_manager.get_image("http://x/b.png") == b"b"

    @pytest.mark.asyncio
    async def test_get_entry(self, initialized_manager: CacheManager, clock) -> None:
        """Test that get_entry joins timestamp and payload."""
        url = "http://x/a.png"
        await initialized_manager.save_image(url, PNG_BYTES)

        entry = await initialized_manager.get_entry(url)

        assert entry is not None
        assert entry.key == key_from_url(url)
        assert entry.created_at == clock.now
        assert entry.payload == PNG_BYTES
        assert entry.size == len(PNG_BYTES)

    @pytest.mark.asyncio
    async def test_cache_stats(self, initialized_manager: CacheManager) -> None:
        """Test lookup statistics tracking."""
        assert initialized_manager.stats == {"hits": 0, "misses": 0, "total": 0}

        await initialized_manager.get_image("http://x/a.png")
        await initialized_manager.save_image("http://x/a.png", PNG_BYTES)
        await initialized_manager.get_image("http://x/a.png")

        assert initialized_manager.stats == {"hits": 1, "misses": 1, "total": 2}


class TestTornState:
    """Tests for keys present in only one store."""

    @pytest.mark.asyncio
    async def test_metadata_only_is_a_miss(
        self,
        initialized_manager: CacheManager,
        metadata_store: InMemoryKeyValueStore[datetime],
        clock,
    ) -> None:
        """Test that a key without blob is treated as not cached."""
        url = "http://x/a.png"
        await metadata_store.put(key_from_url(url), clock.now)

        assert await initialized_manager.get_image(url) is None
        assert await initialized_manager.is_cached(url) is False
        assert await initialized_manager.get_entry(url) is None

    @pytest.mark.asyncio
    async def test_blob_only_is_a_miss(
        self,
        initialized_manager: CacheManager,
        blob_store: InMemoryKeyValueStore[bytes],
    ) -> None:
        """Test that a key without metadata is treated as not cached."""
        url = "http://x/a.png"
        await blob_store.put(key_from_url(url), PNG_BYTES)

        assert await initialized_manager.get_image(url) is None
        assert await initialized_manager.is_cached(url) is False

    @pytest.mark.asyncio
    async def test_save_heals_torn_state(
        self,
        initialized_manager: CacheManager,
        blob_store: InMemoryKeyValueStore[bytes],
    ) -> None:
        """Test that the next save repairs a torn entry."""
        url = "http://x/a.png"
        await blob_store.put(key_from_url(url), b"stale")

        await initialized_manager.save_image(url, PNG_BYTES)

        assert await initialized_manager.get_image(url) == PNG_BYTES


class TestDeleteAndClear:
    """Tests for delete_cached_image and clear_all_cached_images."""

    @pytest.mark.asyncio
    async def test_delete_cached_image(self, initialized_manager: CacheManager) -> None:
        """Test deleting a cached image."""
        url = "http://x/a.png"
        await initialized_manager.save_image(url, PNG_BYTES)

        deleted = await initialized_manager.delete_cached_image(url)

        assert deleted is True
        assert await initialized_manager.get_image(url) is None
        assert await initialized_manager.is_cached(url) is False

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, initialized_manager: CacheManager) -> None:
        """Test that deleting twice is a no-op the second time."""
        url = "http://x/a.png"
        await initialized_manager.save_image(url, PNG_BYTES)

        assert await initialized_manager.delete_cached_image(url) is True
        assert await initialized_manager.delete_cached_image(url) is False

    @pytest.mark.asyncio
    async def test_delete_never_cached(self, initialized_manager: CacheManager) -> None:
        """Test deleting an image that was never cached does not raise."""
        deleted = await initialized_manager.delete_cached_image(
            "http://x/never.png", show_log=False
        )

        assert deleted is False

    @pytest.mark.asyncio
    async def test_delete_leaves_other_images(
        self, initialized_manager: CacheManager
    ) -> None:
        """Test that delete only touches the given URL."""
        await initialized_manager.save_image("http://x/a.png", b"a")
        await initialized_manager.save_image("http://x/b.png", b"b")

        await initialized_manager.delete_cached_image("http://x/a.png")

        assert await initialized_manager.get_image("http://x/b.png") == b"b"

    @pytest.mark.asyncio
    async def test_clear_all_cached_images(
        self,
        initialized_manager: CacheManager,
        metadata_store: InMemoryKeyValueStore[datetime],
        blob_store: InMemoryKeyValueStore[bytes],
    ) -> None:
        """Test that clear removes everything and leaves usable stores."""
        await initialized_manager.save_image("http://x/a.png", b"a")
        await initialized_manager.save_image("http://x/b.png", b"b")

        await initialized_manager.clear_all_cached_images()

        assert await metadata_store.keys() == []
        assert await blob_store.keys() == []
        assert await initialized_manager.get_image("http://x/a.png") is None

        # Stores are reusable right away
        await initialized_manager.save_image("http://x/c.png", b"c")
        assert await initialized_manager.get_image("http://x/c.png") == b"c"


class TestIsCached:
    """Tests for is_cached."""

    @pytest.mark.asyncio
    async def test_empty_cache(self, initialized_manager: CacheManager) -> None:
        """Test is_cached on an empty cache."""
        assert await initialized_manager.is_cached("http://x/missing.png") is False

    @pytest.mark.asyncio
    async def test_is_cached_does_not_mutate(
        self, initialized_manager: CacheManager, clock
    ) -> None:
        """Test that repeated is_cached calls leave data and timestamps alone."""
        url = "http://x/a.png"
        await initialized_manager.save_image(url, PNG_BYTES)
        before = await initialized_manager.get_entry(url)

        clock.advance(timedelta(minutes=30))
        for _ in range(3):
            assert await initialized_manager.is_cached(url) is True

        after = await initialized_manager.get_entry(url)
        assert after == before
        assert await initialized_manager.get_image(url) == PNG_BYTES

    @pytest.mark.asyncio
    async def test_is_cached_does_not_migrate(
        self,
        initialized_manager: CacheManager,
        metadata_store: InMemoryKeyValueStore[datetime],
        blob_store: InMemoryKeyValueStore[bytes],
        clock,
    ) -> None:
        """Test that is_cached ignores and keeps legacy raw-URL records."""
        url = "http://x/legacy.png"
        await metadata_store.put(url, clock.now)
        await blob_store.put(url, PNG_BYTES)

        assert await initialized_manager.is_cached(url) is False
        assert await metadata_store.contains_key(url)
        assert await blob_store.contains_key(url)


class TestConcurrentClear:
    """Tests for operations overlapping clear_all_cached_images."""

    @pytest.fixture
    async def reopening_manager(
        self, metadata_store: InMemoryKeyValueStore[datetime], clock
    ) -> CacheManager:
        """Create a manager whose blob store closes while clearing."""
        manager = CacheManager(
            metadata_store=metadata_store,
            blob_store=ReopeningStore(maxsize=100),
            clock=clock,
        )
        await manager.initialize()
        return manager

    @pytest.mark.asyncio
    async def test_lookups_wait_for_clear(self, reopening_manager: CacheManager) -> None:
        """Test that lookups issued during a clear see an empty cache."""
        await reopening_manager.save_image("http://x/a.png", PNG_BYTES)

        results = await asyncio.gather(
            reopening_manager.clear_all_cached_images(),
            reopening_manager.get_image("http://x/a.png"),
            reopening_manager.is_cached("http://x/a.png"),
            reopening_manager.get_entry("http://x/a.png"),
            return_exceptions=True,
        )

        assert results == [None, None, False, None]

    @pytest.mark.asyncio
    async def test_check_init_passes_during_clear(
        self, reopening_manager: CacheManager
    ) -> None:
        """Test that an initialized manager is not reported uninitialized mid-clear."""
        clearing = asyncio.ensure_future(reopening_manager.clear_all_cached_images())
        await asyncio.sleep(0)

        reopening_manager.check_init()

        await clearing
        assert await reopening_manager.is_cached("http://x/a.png") is False

    @pytest.mark.asyncio
    async def test_save_after_clear_started_survives(
        self, reopening_manager: CacheManager
    ) -> None:
        """Test that a save issued while clearing runs after the clear."""
        await asyncio.gather(
            reopening_manager.clear_all_cached_images(),
            reopening_manager.save_image("http://x/b.png", b"b"),
        )

        assert await reopening_manager.get_image("http://x/b.png") == b"b"

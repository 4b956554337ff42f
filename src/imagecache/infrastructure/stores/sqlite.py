"""SQLite key/value store implementation."""

import logging
from pathlib import Path
from typing import Generic, TypeVar

import aiosqlite

from imagecache.core.errors import (
    SerializationError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from imagecache.core.interfaces.serializer import ISerializer

logger = logging.getLogger(__name__)

V = TypeVar("V")

_SIDECAR_SUFFIXES = ("", "-journal", "-wal", "-shm")


class SqliteKeyValueStore(Generic[V]):
    """Durable key/value store backed by one SQLite database file.

    Uses aiosqlite so that every call runs off the event loop. The
    connection executes statements one at a time on its own thread,
    which keeps concurrent callers from corrupting the file. Every
    write is committed before the coroutine returns.
    """

    def __init__(
        self,
        directory: str | Path,
        name: str,
        serializer: ISerializer[V],
    ) -> None:
        """Initialize the store.

        Args:
            directory: Directory holding the database file.
            name: Store name, used as the database file stem.
            serializer: Serializer converting values to bytes.
        """
        self._path = Path(directory) / f"{name}.db"
        self._name = name
        self._serializer = serializer
        self._db: aiosqlite.Connection | None = None

    @property
    def path(self) -> Path:
        """Return the database file path."""
        return self._path

    @property
    def is_open(self) -> bool:
        """Return True if the connection is open."""
        return self._db is not None

    async def open(self) -> None:
        """Open the database, creating the file and table if needed."""
        if self._db is not None:
            return

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            db = await aiosqlite.connect(self._path)
        except (OSError, aiosqlite.Error) as e:
            raise StorageWriteError(f"Failed to open store {self._name!r}: {e}") from e

        try:
            async with db.execute("""
                CREATE TABLE IF NOT EXISTS entries (
                    key TEXT PRIMARY KEY,
                    value BLOB NOT NULL
                )
            """):
                pass
            await db.commit()
        except aiosqlite.Error as e:
            await db.close()
            raise StorageWriteError(f"Failed to open store {self._name!r}: {e}") from e

        self._db = db
        logger.debug("Opened store %s at %s", self._name, self._path)

    async def close(self) -> None:
        """Close the connection if it is open."""
        if self._db is None:
            return
        db, self._db = self._db, None
        await db.close()

    async def get(self, key: str) -> V | None:
        """Retrieve the value stored under key.

        Args:
            key: The key to look up.

        Returns:
            The stored value, or None if the key is absent.

        Raises:
            StorageReadError: If the read or decoding fails.
        """
        db = self._connection()
        try:
            async with db.execute(
                "SELECT value FROM entries WHERE key = ?", (key,)
            ) as cursor:
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageReadError(f"Failed to read {key!r} from {self._name!r}: {e}") from e

        if row is None:
            return None

        try:
            return self._serializer.deserialize(row[0])
        except SerializationError as e:
            raise StorageReadError(f"Corrupt value for {key!r} in {self._name!r}: {e}") from e

    async def put(self, key: str, value: V) -> None:
        """Store value under key, replacing any existing value.

        Args:
            key: The key.
            value: The value to store.

        Raises:
            StorageWriteError: If encoding or the write fails.
        """
        db = self._connection()
        try:
            data = self._serializer.serialize(value)
        except SerializationError as e:
            raise StorageWriteError(f"Cannot store {key!r} in {self._name!r}: {e}") from e

        try:
            async with db.execute(
                "INSERT OR REPLACE INTO entries (key, value) VALUES (?, ?)",
                (key, data),
            ):
                pass
            await db.commit()
        except aiosqlite.Error as e:
            raise StorageWriteError(f"Failed to write {key!r} to {self._name!r}: {e}") from e

    async def delete(self, key: str) -> bool:
        """Delete the value stored under key.

        Args:
            key: The key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        db = self._connection()
        try:
            async with db.execute(
                "DELETE FROM entries WHERE key = ?", (key,)
            ) as cursor:
                deleted = cursor.rowcount > 0
            await db.commit()
        except aiosqlite.Error as e:
            raise StorageWriteError(f"Failed to delete {key!r} from {self._name!r}: {e}") from e
        return deleted

    async def contains_key(self, key: str) -> bool:
        """Check if key is present.

        Args:
            key: The key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        db = self._connection()
        try:
            async with db.execute(
                "SELECT 1 FROM entries WHERE key = ?", (key,)
            ) as cursor:
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageReadError(f"Failed to read {key!r} from {self._name!r}: {e}") from e
        return row is not None

    async def keys(self) -> list[str]:
        """Return a snapshot of all keys in insertion order."""
        db = self._connection()
        try:
            async with db.execute("SELECT key FROM entries ORDER BY rowid") as cursor:
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise StorageReadError(f"Failed to list keys of {self._name!r}: {e}") from e
        return [row[0] for row in rows]

    async def clear(self) -> None:
        """Delete the database file from disk and reopen an empty store."""
        await self.close()
        try:
            for suffix in _SIDECAR_SUFFIXES:
                Path(f"{self._path}{suffix}").unlink(missing_ok=True)
        except OSError as e:
            raise StorageWriteError(f"Failed to delete store {self._name!r}: {e}") from e
        await self.open()

    def _connection(self) -> aiosqlite.Connection:
        if self._db is None:
            raise StorageError(f"Store {self._name!r} is not open")
        return self._db

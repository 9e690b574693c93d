"""Versioned key-value state stores.

This module provides a state store protocol and two implementations used to
persist the live dashboard settings, the perspective collection, and the
project cache marker. Every entry carries a version that increases by one
on each write, so callers can use ``compare_and_set`` to detect a write
that raced with another writer instead of silently overwriting it.
"""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, cast, runtime_checkable

import pendulum
from pydantic import BaseModel

from notedash.exceptions import PersistenceError, StaleWriteError
from notedash.utils.database import connect, fetch_all, fetch_one, safe_identifier

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

type StateStoreKey = str
type StateStoreValue = str | int | float | bytes | None

_TABLE = safe_identifier("state_store")
_KEY_COL = safe_identifier("key")
_VERSION_COL = safe_identifier("version")


class StateEntry(BaseModel):
    """An entry in the state store.

    Attributes:
        key: The unique identifier for this entry.
        value: The stored value.
        version: Write counter, 1 after the first write.
        created_at: When this entry was first created (ISO 8601 string).
        created_by: Who created this entry.
        updated_at: When this entry was last modified (ISO 8601 string).
        updated_by: Who last modified this entry.
    """

    key: str
    value: str | int | float | bytes | None
    version: int = 1
    created_at: str
    created_by: str | None = None
    updated_at: str
    updated_by: str | None = None


@runtime_checkable
class StateStore(Protocol):
    """Protocol for state store implementations.

    State stores provide a key-value interface plus versioned writes.
    """

    def __getitem__(self, key: StateStoreKey) -> StateStoreValue:
        """Get the value for a key.

        Raises:
            KeyError: If the key does not exist.
        """
        ...

    def __iter__(self) -> Iterator[StateStoreKey]:
        """Iterate over all keys in the store."""
        ...

    def __len__(self) -> int:
        """Return the number of entries in the store."""
        ...

    def __contains__(self, key: object) -> bool:
        """Check if a key exists in the store."""
        ...

    def get_entry(self, key: StateStoreKey) -> StateEntry | None:
        """Get the full entry for a key, or None if not found."""
        ...

    def set(
        self,
        key: StateStoreKey,
        value: StateStoreValue,
        *,
        author: str | None = None,
    ) -> int:
        """Set a value unconditionally.

        Returns:
            The new version of the entry.

        Raises:
            PersistenceError: If the write cannot be completed.
        """
        ...

    def compare_and_set(
        self,
        key: StateStoreKey,
        value: StateStoreValue,
        expected_version: int,
        *,
        author: str | None = None,
    ) -> int:
        """Set a value only if the stored version matches.

        Args:
            key: The key to set.
            value: The value to store.
            expected_version: The version the caller last read, or 0 if the
                caller expects the key to be absent.
            author: Who is making this change.

        Returns:
            The new version of the entry.

        Raises:
            StaleWriteError: If the stored version differs.
            PersistenceError: If the write cannot be completed.
        """
        ...

    def delete(self, key: StateStoreKey) -> bool:
        """Delete a key, returning True if it existed."""
        ...

    def clear(self) -> None:
        """Remove all entries from the store."""
        ...


def _stale(key: str, expected: int, actual: int | None) -> StaleWriteError:
    msg = f"Stale write to {key!r}: expected version {expected}, found {actual or 0}"
    return StaleWriteError(msg, key=key, expected=expected, actual=actual)


class MemoryStateStore:
    """In-memory implementation of state store.

    Used by tests and for ephemeral dashboards. Data is not persisted.
    """

    _entries: dict[StateStoreKey, StateEntry]
    _logger: "FilteringBoundLogger | None"  # noqa: UP037

    def __init__(
        self,
        *,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        """Initialize an empty in-memory store.

        Args:
            logger: Optional logger for debug-level operation logging.
        """
        self._entries = {}
        self._logger = logger

    def __getitem__(self, key: StateStoreKey) -> StateStoreValue:
        try:
            value = self._entries[key].value
        except KeyError:
            if self._logger:
                self._logger.debug("store_get", key=key, found=False)
            raise
        if self._logger:
            self._logger.debug("store_get", key=key, found=True)
        return value

    def __iter__(self) -> Iterator[StateStoreKey]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._entries

    def get_entry(self, key: StateStoreKey) -> StateEntry | None:
        return self._entries.get(key)

    def _write(
        self,
        key: StateStoreKey,
        value: StateStoreValue,
        author: str | None,
    ) -> int:
        now_str = pendulum.now("UTC").to_iso8601_string()
        existing = self._entries.get(key)
        if existing is not None:
            entry = existing.model_copy(
                update={
                    "value": value,
                    "version": existing.version + 1,
                    "updated_at": now_str,
                    "updated_by": author,
                }
            )
        else:
            entry = StateEntry(
                key=key,
                value=value,
                version=1,
                created_at=now_str,
                created_by=author,
                updated_at=now_str,
                updated_by=author,
            )
        self._entries[key] = entry
        return entry.version

    def set(
        self,
        key: StateStoreKey,
        value: StateStoreValue,
        *,
        author: str | None = None,
    ) -> int:
        version = self._write(key, value, author)
        if self._logger:
            self._logger.debug("store_set", key=key, version=version, author=author)
        return version

    def compare_and_set(
        self,
        key: StateStoreKey,
        value: StateStoreValue,
        expected_version: int,
        *,
        author: str | None = None,
    ) -> int:
        existing = self._entries.get(key)
        actual = existing.version if existing is not None else 0
        if actual != expected_version:
            if self._logger:
                self._logger.debug(
                    "store_cas_rejected",
                    key=key,
                    expected=expected_version,
                    actual=actual,
                )
            raise _stale(key, expected_version, actual)
        version = self._write(key, value, author)
        if self._logger:
            self._logger.debug("store_cas", key=key, version=version, author=author)
        return version

    def delete(self, key: StateStoreKey) -> bool:
        deleted = self._entries.pop(key, None) is not None
        if self._logger:
            self._logger.debug("store_delete", key=key, deleted=deleted)
        return deleted

    def clear(self) -> None:
        count = len(self._entries)
        self._entries.clear()
        if self._logger:
            self._logger.debug("store_clear", cleared_count=count)


_SQLITE_SCHEMA = """
CREATE TABLE IF NOT EXISTS state_store (
    key TEXT PRIMARY KEY,
    value BLOB,
    version INTEGER NOT NULL DEFAULT 1,
    created_at TEXT NOT NULL,
    created_by TEXT,
    updated_at TEXT NOT NULL,
    updated_by TEXT
);
"""

# S608 is safe: safe_identifier validates all table/column names
_SQL_SELECT_BY_KEY = f"SELECT * FROM {_TABLE} WHERE {_KEY_COL} = ?"  # noqa: S608
_SQL_SELECT_ALL = f"SELECT * FROM {_TABLE} ORDER BY {_KEY_COL}"  # noqa: S608
_SQL_COUNT = f"SELECT COUNT(*) FROM {_TABLE}"  # noqa: S608
_SQL_VERSION = f"SELECT {_VERSION_COL} FROM {_TABLE} WHERE {_KEY_COL} = ?"  # noqa: S608
_SQL_DELETE = f"DELETE FROM {_TABLE} WHERE {_KEY_COL} = ?"  # noqa: S608
_SQL_DELETE_ALL = f"DELETE FROM {_TABLE}"  # noqa: S608
_SQL_UPSERT = f"""
INSERT INTO {_TABLE}
    ({_KEY_COL}, "value", {_VERSION_COL},
     "created_at", "created_by", "updated_at", "updated_by")
VALUES (?, ?, 1, ?, ?, ?, ?)
ON CONFLICT ({_KEY_COL}) DO UPDATE SET
    "value" = excluded."value",
    {_VERSION_COL} = {_TABLE}.{_VERSION_COL} + 1,
    "updated_at" = excluded."updated_at",
    "updated_by" = excluded."updated_by"
RETURNING {_VERSION_COL}
"""  # noqa: S608
_SQL_INSERT_IF_ABSENT = f"""
INSERT INTO {_TABLE}
    ({_KEY_COL}, "value", {_VERSION_COL},
     "created_at", "created_by", "updated_at", "updated_by")
VALUES (?, ?, 1, ?, ?, ?, ?)
ON CONFLICT ({_KEY_COL}) DO NOTHING
RETURNING {_VERSION_COL}
"""  # noqa: S608
_SQL_UPDATE_IF_VERSION = f"""
UPDATE {_TABLE}
SET "value" = ?, {_VERSION_COL} = {_VERSION_COL} + 1,
    "updated_at" = ?, "updated_by" = ?
WHERE {_KEY_COL} = ? AND {_VERSION_COL} = ?
RETURNING {_VERSION_COL}
"""  # noqa: S608


class SQLiteStateStore:
    """SQLite-backed implementation of state store.

    Each versioned write is a single SQL statement, so compare-and-set holds
    across processes sharing the database file.
    """

    _db_path: str
    _logger: "FilteringBoundLogger | None"  # noqa: UP037

    def __init__(
        self,
        db_path: str | Path,
        *,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        """Initialize a SQLite state store.

        Creates the database file and schema if they don't exist.

        Args:
            db_path: Path to the SQLite database file.
            logger: Optional logger for debug-level operation logging.
        """
        self._db_path = str(db_path)
        self._logger = logger
        with self._connection("open") as conn:
            _ = conn.executescript(_SQLITE_SCHEMA)

    @contextmanager
    def _connection(self, operation: str) -> Iterator[sqlite3.Connection]:
        try:
            with connect(self._db_path) as conn:
                yield conn
        except sqlite3.Error as e:
            msg = f"State store {operation} failed: {e}"
            raise PersistenceError(
                msg, path=Path(self._db_path), operation=operation, cause=e
            ) from e

    def __getitem__(self, key: StateStoreKey) -> StateStoreValue:
        entry = self.get_entry(key)
        if entry is None:
            raise KeyError(key)
        return entry.value

    def __iter__(self) -> Iterator[StateStoreKey]:
        with self._connection("read") as conn:
            keys = [entry.key for entry in fetch_all(conn, StateEntry, _SQL_SELECT_ALL)]
        return iter(keys)

    def __len__(self) -> int:
        with self._connection("read") as conn:
            row = cast("sqlite3.Row | None", conn.execute(_SQL_COUNT).fetchone())
            return int(row[0]) if row else 0  # pyright: ignore[reportAny]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self.get_entry(key) is not None

    def get_entry(self, key: StateStoreKey) -> StateEntry | None:
        with self._connection("read") as conn:
            entry = fetch_one(conn, StateEntry, _SQL_SELECT_BY_KEY, (key,))
        if self._logger:
            self._logger.debug("store_get_entry", key=key, found=entry is not None)
        return entry

    def set(
        self,
        key: StateStoreKey,
        value: StateStoreValue,
        *,
        author: str | None = None,
    ) -> int:
        now_str = pendulum.now("UTC").to_iso8601_string()
        with self._connection("write") as conn:
            row = cast(
                "sqlite3.Row",
                conn.execute(
                    _SQL_UPSERT, (key, value, now_str, author, now_str, author)
                ).fetchone(),
            )
            version = int(row[0])  # pyright: ignore[reportAny]
        if self._logger:
            self._logger.debug("store_set", key=key, version=version, author=author)
        return version

    def compare_and_set(
        self,
        key: StateStoreKey,
        value: StateStoreValue,
        expected_version: int,
        *,
        author: str | None = None,
    ) -> int:
        now_str = pendulum.now("UTC").to_iso8601_string()
        with self._connection("write") as conn:
            if expected_version == 0:
                cursor = conn.execute(
                    _SQL_INSERT_IF_ABSENT,
                    (key, value, now_str, author, now_str, author),
                )
            else:
                cursor = conn.execute(
                    _SQL_UPDATE_IF_VERSION,
                    (value, now_str, author, key, expected_version),
                )
            row = cast("sqlite3.Row | None", cursor.fetchone())
            if row is None:
                found = conn.execute(_SQL_VERSION, (key,)).fetchone()
                current = cast("sqlite3.Row | None", found)
                actual = int(current[0]) if current else None  # pyright: ignore[reportAny]
                if self._logger:
                    self._logger.debug(
                        "store_cas_rejected",
                        key=key,
                        expected=expected_version,
                        actual=actual,
                    )
                raise _stale(key, expected_version, actual)
            version = int(row[0])  # pyright: ignore[reportAny]
        if self._logger:
            self._logger.debug("store_cas", key=key, version=version, author=author)
        return version

    def delete(self, key: StateStoreKey) -> bool:
        with self._connection("delete") as conn:
            deleted = conn.execute(_SQL_DELETE, (key,)).rowcount > 0
        if self._logger:
            self._logger.debug("store_delete", key=key, deleted=deleted)
        return deleted

    def clear(self) -> None:
        with self._connection("delete") as conn:
            count = conn.execute(_SQL_DELETE_ALL).rowcount
        if self._logger:
            self._logger.debug("store_clear", cleared_count=count)


def create_state_store(
    path: str | Path | None = None,
    *,
    logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
) -> SQLiteStateStore:
    """Create (or open) the SQLite state store.

    Args:
        path: Database path. Defaults to ``state.db`` in the data directory.
        logger: Optional logger for debug-level operation logging.

    Returns:
        A SQLiteStateStore instance.
    """
    from notedash.utils._paths import get_state_db  # noqa: PLC0415

    db_path = Path(path) if path else get_state_db()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return SQLiteStateStore(db_path, logger=logger)

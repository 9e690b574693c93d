"""SQLite helpers for Pydantic-backed tables.

The state store is the only SQLite consumer. These helpers open
connections with commit/rollback handling, validate identifiers that are
interpolated into SQL, and map rows onto Pydantic models.
"""

import re
import sqlite3
from contextlib import contextmanager, suppress
from typing import TYPE_CHECKING, Literal, cast

from pydantic import BaseModel

if TYPE_CHECKING:
    from collections.abc import Iterator

# Valid SQL identifier pattern (alphanumeric and underscores, not starting with digit)
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

type SQLValue = str | int | float | bytes | None

type IsolationLevel = Literal["DEFERRED", "EXCLUSIVE", "IMMEDIATE"] | None


@contextmanager
def connect(
    path: str,
    *,
    timeout: float = 30.0,
    isolation_level: IsolationLevel = "IMMEDIATE",
    wal_mode: bool = True,
) -> "Iterator[sqlite3.Connection]":  # noqa: UP037
    """Open a SQLite connection that commits on success and rolls back on error.

    Args:
        path: Database file path, or ``:memory:``.
        timeout: Seconds to wait for a lock before raising OperationalError.
        isolation_level: Transaction isolation level.
        wal_mode: If True, enable WAL journal mode for file databases.

    Yields:
        SQLite connection with row_factory set to sqlite3.Row.

    Raises:
        sqlite3.OperationalError: If the database cannot be opened.

    Examples:
        >>> with connect(":memory:") as conn:
        ...     conn.execute("CREATE TABLE state_store (key TEXT PRIMARY KEY)")
    """
    conn = sqlite3.connect(path, timeout=timeout, isolation_level=isolation_level)
    conn.row_factory = sqlite3.Row

    if wal_mode and path != ":memory:" and not path.startswith("file:"):
        with suppress(sqlite3.OperationalError):
            _ = conn.execute("PRAGMA journal_mode=WAL")
        _ = conn.execute("PRAGMA busy_timeout=10000")

    try:
        yield conn
        conn.commit()
    except BaseException:
        with suppress(Exception):
            conn.rollback()
        raise
    finally:
        conn.close()


def safe_identifier(name: str) -> str:
    """Validate and quote a SQL identifier.

    Args:
        name: The identifier to validate and quote.

    Returns:
        The quoted identifier (e.g., ``"state_store"``).

    Raises:
        ValueError: If the identifier contains invalid characters.

    Examples:
        >>> safe_identifier("version")
        '"version"'
        >>> safe_identifier("1st")
        Traceback (most recent call last):
            ...
        ValueError: Invalid SQL identifier: '1st'
    """
    if not _IDENTIFIER_RE.match(name):
        msg = f"Invalid SQL identifier: {name!r}"
        raise ValueError(msg)
    return f'"{name}"'


def fetch_one[T: BaseModel](
    conn: sqlite3.Connection,
    model: type[T],
    sql: str,
    params: tuple[SQLValue, ...] = (),
) -> T | None:
    """Fetch a single row as a Pydantic model, or None if no row matched."""
    row = cast("sqlite3.Row | None", conn.execute(sql, params).fetchone())
    if row is None:
        return None
    return model.model_validate(dict(row))


def fetch_all[T: BaseModel](
    conn: sqlite3.Connection,
    model: type[T],
    sql: str,
    params: tuple[SQLValue, ...] = (),
) -> list[T]:
    """Fetch all rows as Pydantic models (empty list if none matched)."""
    rows = cast("list[sqlite3.Row]", conn.execute(sql, params).fetchall())
    return [model.model_validate(dict(row)) for row in rows]

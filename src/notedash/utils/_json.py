"""JSON helpers built on orjson.

Read helpers return None on malformed input. Write helpers raise
PersistenceError and use an atomic temp-file-then-replace pattern so a
blob on disk is either the old or the new version, never a partial one.
"""

import tempfile
from pathlib import Path
from typing import Any, cast

import orjson

from notedash.exceptions import PersistenceError


def load_json(json_str: str | bytes) -> dict[str, object] | list[object] | None:
    """Load and parse a JSON string.

    Args:
        json_str: The JSON string to parse.

    Returns:
        The parsed JSON data as a dictionary or list, or None if parsing fails.
    """
    try:
        return cast("dict[str, object] | list[object]", orjson.loads(json_str))
    except orjson.JSONDecodeError:
        return None


def load_json_file(file_path: Path) -> dict[str, object] | list[object] | None:
    """Load and parse a JSON file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        The parsed JSON data, or None if the content is not valid JSON.

    Raises:
        PersistenceError: If the file cannot be read.
    """
    try:
        content = file_path.read_bytes()
    except OSError as e:
        msg = f"Failed to read file: {e}"
        raise PersistenceError(msg, path=file_path, operation="read", cause=e) from e
    return load_json(content)


def dump_json(data: Any) -> str:  # pyright: ignore[reportExplicitAny]
    """Serialize data to a compact JSON string.

    Raises:
        PersistenceError: If the data is not serializable.
    """
    try:
        return orjson.dumps(data).decode()
    except TypeError as e:
        msg = f"Failed to serialize JSON: {e}"
        raise PersistenceError(msg, operation="serialize", cause=e) from e


def _atomic_write(path: Path, content: bytes) -> None:
    """Write content to a file atomically.

    Args:
        path: Destination file path.
        content: Content to write.

    Raises:
        PersistenceError: If the write operation fails.
    """
    temp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            _ = f.write(content)
            temp_path = Path(f.name)

        # Path.replace() is atomic on both POSIX and Windows
        _ = temp_path.replace(path)

    except OSError as e:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        msg = f"Failed to write file: {e}"
        raise PersistenceError(msg, path=path, operation="write", cause=e) from e


def write_json_atomic(
    path: Path,
    data: Any,  # pyright: ignore[reportExplicitAny]
) -> None:
    """Write data as indented JSON atomically.

    Args:
        path: Destination file path.
        data: JSON-serializable data.

    Raises:
        PersistenceError: If serialization or the write fails.
    """
    try:
        content = orjson.dumps(data, option=orjson.OPT_INDENT_2)
    except TypeError as e:
        msg = f"Failed to serialize JSON: {e}"
        raise PersistenceError(msg, path=path, operation="write", cause=e) from e

    _atomic_write(path, content)

from collections.abc import Mapping
from typing import Any


def field_value(record: object, name: str) -> Any:  # pyright: ignore[reportExplicitAny]
    """Read a named field from a mapping or an object attribute.

    Missing fields read as None.
    """
    if isinstance(record, Mapping):
        return record.get(name)  # pyright: ignore[reportUnknownMemberType]
    return getattr(record, name, None)

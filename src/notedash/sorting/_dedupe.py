"""Duplicate elimination for records gathered from several notes."""

from collections.abc import Hashable, Iterable, Sequence

from notedash.enums import NoteType
from notedash.sorting._fields import field_value

SYNC_ID_FIELD = "block_id"


def _is_calendar(record: object) -> bool:
    flag = field_value(record, "is_calendar")
    if flag is not None:
        return bool(flag)  # pyright: ignore[reportAny]
    return field_value(record, "note_type") == NoteType.CALENDAR


def eliminate_duplicate_synced_copies[T](
    records: Iterable[T],
    *,
    id_field: str = SYNC_ID_FIELD,
) -> list[T]:
    """Collapse synced copies of a line to one representative.

    A synced line appears in several notes with the same identity. For each
    identity the first copy in a regular (project) note is kept, or the
    first copy overall when every copy is in a calendar note. Records
    without an identity are always kept. Output keeps input order.

    Args:
        records: Paragraph-like mappings or objects.
        id_field: Field holding the synced-line identity.

    Returns:
        The records with duplicate copies removed.
    """
    items = list(records)
    chosen: dict[Hashable, int] = {}

    for index, record in enumerate(items):
        sync_id = field_value(record, id_field)
        if not sync_id:
            continue
        if sync_id not in chosen:
            chosen[sync_id] = index
        elif _is_calendar(items[chosen[sync_id]]) and not _is_calendar(record):
            chosen[sync_id] = index

    keep = set(chosen.values())
    return [
        record
        for index, record in enumerate(items)
        if not field_value(record, id_field) or index in keep
    ]


def remove_duplicates[T](records: Iterable[T], keys: Sequence[str]) -> list[T]:
    """Drop records that repeat an earlier record's values for ``keys``.

    Examples:
        >>> rows = [{"c": "a", "f": "x"}, {"c": "a", "f": "x"}, {"c": "a", "f": "y"}]
        >>> remove_duplicates(rows, ["c", "f"])
        [{'c': 'a', 'f': 'x'}, {'c': 'a', 'f': 'y'}]
    """
    seen: set[tuple[object, ...]] = set()
    result: list[T] = []
    for record in records:
        signature = tuple(field_value(record, key) for key in keys)
        if signature in seen:
            continue
        seen.add(signature)
        result.append(record)
    return result

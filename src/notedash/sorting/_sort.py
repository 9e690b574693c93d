# pyright: reportAny=false, reportExplicitAny=false
"""Multi-key sorting of records.

Records are mappings or objects with attributes. A key spec is a field name,
prefixed with ``-`` for descending order.
"""

from collections.abc import Iterable, Sequence
from typing import Any

from notedash.sorting._fields import field_value

DESCENDING_PREFIX = "-"


def _sort_key(value: Any) -> tuple[int, Any]:
    # None sorts before every present value
    if value is None:
        return (0, 0)
    if isinstance(value, str):
        return (1, value.lower())
    return (1, value)


def parse_key_spec(spec: str) -> tuple[str, bool]:
    """Split a key spec into its field name and a descending flag.

    Examples:
        >>> parse_key_spec("-priority")
        ('priority', True)
        >>> parse_key_spec("changed_date")
        ('changed_date', False)
    """
    if spec.startswith(DESCENDING_PREFIX):
        return spec[len(DESCENDING_PREFIX) :], True
    return spec, False


def sort_by_keys[T](records: Iterable[T], key_specs: Sequence[str]) -> list[T]:
    """Sort records by several keys, returning a new list.

    The sort is stable: records equal on every key keep their relative
    order. Missing values sort first when ascending and last when
    descending. Strings compare case-insensitively, so the empty string
    sorts before any other string.

    Args:
        records: Mappings or objects to sort.
        key_specs: Field names, most significant first. A leading ``-``
            sorts that field in descending order.

    Returns:
        The sorted records.

    Examples:
        >>> rows = [{"p": 1, "c": 5}, {"p": 1, "c": 3}, {"p": 2, "c": 1}]
        >>> sort_by_keys(rows, ["-p", "-c"])
        [{'p': 2, 'c': 1}, {'p': 1, 'c': 5}, {'p': 1, 'c': 3}]
    """
    result = list(records)
    # Least significant key first; each pass is stable
    for spec in reversed(key_specs):
        name, descending = parse_key_spec(spec)
        result.sort(
            key=lambda record, name=name: _sort_key(field_value(record, name)),
            reverse=descending,
        )
    return result

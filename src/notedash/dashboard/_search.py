# pyright: reportAny=false, reportExplicitAny=false
"""Find, patch and merge items across already-built sections.

Items are addressed by dotted field paths (``"filename"``,
``"project.next_review_days"``). Path parts may be snake_case attribute
names, camelCase aliases or mapping keys.
"""

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_snake

from notedash.enums import SectionCode
from notedash.sections._models import Item, Section


@dataclass(frozen=True, slots=True)
class ItemLocation:
    """Position of an item within a list of sections."""

    section_index: int
    item_index: int


def _get_part(obj: Any, part: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(part, obj.get(to_snake(part)))
    if hasattr(obj, part):
        return getattr(obj, part)
    return getattr(obj, to_snake(part), None)


def get_field(obj: Any, path: str) -> Any:
    """Read a dotted path from a model or mapping. Missing parts give None."""
    current = obj
    for part in path.split("."):
        if current is None:
            return None
        current = _get_part(current, part)
    return current


def _matches(actual: Any, expected: Any) -> bool:
    if actual is None or actual == "":
        return False
    if isinstance(expected, re.Pattern):
        return isinstance(actual, str) and expected.search(actual) is not None
    return actual == expected


def find_section_items(
    sections: Sequence[Section],
    field_paths: Sequence[str],
    values: Sequence[Any],
) -> list[ItemLocation]:
    """Locate items whose fields match every given value.

    Args:
        sections: Sections to search.
        field_paths: Dotted paths to compare.
        values: Expected value per path. A compiled pattern matches with
            ``search``. An empty or missing field never matches.

    Returns:
        Locations of the matching items, in section then item order.

    Raises:
        ValueError: If the number of paths and values differ.
    """
    if len(field_paths) != len(values):
        msg = f"Got {len(field_paths)} field paths but {len(values)} values"
        raise ValueError(msg)

    found: list[ItemLocation] = []
    for section_index, section in enumerate(sections):
        for item_index, item in enumerate(section.items):
            if all(
                _matches(get_field(item, path), value)
                for path, value in zip(field_paths, values, strict=True)
            ):
                found.append(ItemLocation(section_index, item_index))
    return found


def _set_field(obj: Any, parts: list[str], value: Any) -> Any:
    head, *rest = parts
    if isinstance(obj, Mapping):
        key = head if head in obj else to_snake(head)
        new_value = value if not rest else _set_field(obj.get(key), rest, value)
        return {**obj, key: new_value}
    if isinstance(obj, BaseModel):
        name = head if head in type(obj).model_fields else to_snake(head)
        if name not in type(obj).model_fields:
            msg = f"{type(obj).__name__} has no field {head!r}"
            raise ValueError(msg)
        new_value = value if not rest else _set_field(getattr(obj, name), rest, value)
        return obj.model_copy(update={name: new_value})
    msg = f"Cannot set {head!r} on {type(obj).__name__}"
    raise ValueError(msg)


def copy_updated_section_item_data(
    locations: Iterable[ItemLocation],
    field_paths: Sequence[str],
    updated: Item | Mapping[str, Any],
    sections: Sequence[Section],
) -> list[Section]:
    """Copy fields from ``updated`` into the items at ``locations``.

    Sections are immutable, so changed sections are rebuilt and unchanged
    ones are returned as they were. Every patched item gets
    ``updated=True``.

    Args:
        locations: Items to patch, usually from ``find_section_items``.
        field_paths: Dotted paths to copy.
        updated: Item or mapping holding the new values.
        sections: Sections the locations refer to.

    Returns:
        The sections with the items patched.

    Raises:
        ValueError: If a path does not exist on an item.
    """
    patched: list[Section] = list(sections)
    for location in locations:
        section = patched[location.section_index]
        items = list(section.items)
        item: Item = items[location.item_index]
        for path in field_paths:
            item = _set_field(item, path.split("."), get_field(updated, path))
        items[location.item_index] = item.model_copy(update={"updated": True})
        patched[location.section_index] = section.model_copy(
            update={"items": tuple(items)}
        )
    return patched


def merge_sections(
    existing: Sequence[Section],
    fresh: Sequence[Section],
    refreshed_codes: Iterable[SectionCode] | None = None,
) -> list[Section]:
    """Merge a partial refresh into a retained list of sections.

    Sections of a refreshed code replace all retained sections of that code
    at the position of the first one. Sections of codes not refreshed are
    kept. New codes go at the end.

    Args:
        existing: The retained sections.
        fresh: Sections from a partial refresh.
        refreshed_codes: Codes that were rebuilt. Defaults to the codes in
            ``fresh``. A rebuilt code with no fresh sections is dropped.

    Returns:
        The merged sections.
    """
    by_code: dict[SectionCode, list[Section]] = {}
    for section in fresh:
        by_code.setdefault(section.section_code, []).append(section)
    replaced = set(by_code if refreshed_codes is None else refreshed_codes)
    replaced.update(by_code)

    merged: list[Section] = []
    placed: set[SectionCode] = set()
    for section in existing:
        code = section.section_code
        if code not in replaced:
            merged.append(section)
        elif code not in placed:
            merged.extend(by_code.get(code, []))
            placed.add(code)
    for code, group in by_code.items():
        if code not in placed:
            merged.extend(group)
    return merged

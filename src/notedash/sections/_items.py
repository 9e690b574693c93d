"""Turning paragraphs into section items."""

import dataclasses
from collections.abc import Iterable, Sequence
from typing import Final

from notedash.enums import ItemType, ParagraphType, SortOrder
from notedash.sections._models import Item
from notedash.store._models import Note, Paragraph

MAX_INDENT_LEVELS: Final = 4
CONGRATS_SUFFIX: Final = "Congrats"

_CHECKLIST_TYPES: Final = frozenset(
    {
        ParagraphType.CHECKLIST,
        ParagraphType.CHECKLIST_DONE,
        ParagraphType.CHECKLIST_CANCELLED,
        ParagraphType.CHECKLIST_SCHEDULED,
    }
)

SORT_KEYS: Final[dict[SortOrder, tuple[str, ...]]] = {
    SortOrder.PRIORITY: ("-priority", "-changed_date"),
    SortOrder.EARLIEST: ("changed_date", "priority"),
    SortOrder.MOST_RECENT: ("-changed_date", "priority"),
}


def item_type_for(paragraph: Paragraph) -> ItemType:
    """Item type for a paragraph: checklist lines become checklist items."""
    if paragraph.type in _CHECKLIST_TYPES:
        return ItemType.CHECKLIST
    return ItemType.TASK


def item_from_paragraph(
    item_id: str,
    paragraph: Paragraph,
    *,
    parent_id: str = "",
    item_type: ItemType | None = None,
) -> Item:
    """Build one item from a paragraph."""
    return Item(
        id=item_id,
        item_type=item_type or item_type_for(paragraph),
        content=paragraph.content,
        filename=paragraph.filename,
        parent_id=parent_id,
        priority=paragraph.priority,
        changed_date=paragraph.changed_date,
        note_title=paragraph.note_title,
        indent_level=paragraph.indent_level,
    )


def make_section_items(
    paragraphs: Iterable[Paragraph],
    section_number: str,
    *,
    link_parents: bool = True,
) -> list[Item]:
    """Number paragraphs into items and link children to their parents.

    Items are visited in order with one "last parent id" slot per indent
    level. A child takes the slot one level above its own; a paragraph
    with children stores its id in its own level's slot. Indents deeper
    than the slots available share the deepest slot.

    Args:
        paragraphs: Paragraphs in document order.
        section_number: Prefix for item ids.
        link_parents: Fill ``parent_id``. Off for sorted sections, where
            document order is lost.

    Returns:
        Items with ids ``{section_number}-{index}``.
    """
    slots: list[str] = [""] * MAX_INDENT_LEVELS
    items: list[Item] = []
    for index, paragraph in enumerate(paragraphs):
        item_id = f"{section_number}-{index}"
        level = min(max(paragraph.indent_level, 0), MAX_INDENT_LEVELS - 1)
        parent_id = ""
        if link_parents:
            if paragraph.is_child and level > 0:
                parent_id = slots[level - 1]
            if paragraph.has_children:
                slots[level] = item_id
        items.append(item_from_paragraph(item_id, paragraph, parent_id=parent_id))
    return items


def congrats_item(section_number: str) -> Item:
    """Placeholder item for an empty today section."""
    return Item(
        id=f"{section_number}-{CONGRATS_SUFFIX}",
        item_type=ItemType.CONGRATS,
        content="Nothing on your list for today",
    )


def with_note_context(paragraph: Paragraph, note: Note) -> Paragraph:
    """Fill a paragraph's note title and changed date from its note."""
    if paragraph.note_title and paragraph.changed_date is not None:
        return paragraph
    return dataclasses.replace(
        paragraph,
        note_title=paragraph.note_title or note.title,
        changed_date=paragraph.changed_date or note.changed_date,
    )


def truncate[T](records: Sequence[T], limit: int) -> tuple[list[T], int]:
    """Keep the first ``limit`` records.

    Returns:
        The kept records and the count before truncation.
    """
    return list(records[:limit]), len(records)

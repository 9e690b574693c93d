"""Corpus-wide scans: overdue and priority sections."""

from collections.abc import Iterator
from typing import Final

import pendulum

from notedash.enums import SectionCode, SortOrder
from notedash.sections._context import BuildContext
from notedash.sections._items import (
    SORT_KEYS,
    make_section_items,
    truncate,
    with_note_context,
)
from notedash.sections._models import ActionDescriptor, Section
from notedash.sorting._dedupe import (
    eliminate_duplicate_synced_copies,
    remove_duplicates,
)
from notedash.sorting._sort import sort_by_keys
from notedash.store._models import Note, Paragraph
from notedash.utils._dates import period_end, scheduled_dates
from notedash.utils._strings import is_line_disallowed_by_terms

OVERDUE_SECTION_NUMBER: Final = "13"
PRIORITY_SECTION_NUMBER: Final = "14"
PRIORITY_SORT_KEYS: Final = SORT_KEYS[SortOrder.PRIORITY]


def _all_notes(ctx: BuildContext) -> Iterator[Note]:
    store = ctx.record_store
    yield from store.calendar_notes()
    yield from store.project_notes()


def _candidates(ctx: BuildContext) -> Iterator[Paragraph]:
    settings = ctx.settings
    terms = settings.ignore_terms
    for note in _all_notes(ctx):
        if not ctx.is_allowed(note.filename, is_calendar=note.is_calendar):
            continue
        for paragraph in note.paragraphs:
            is_open = (
                paragraph.is_open_task
                if settings.ignore_checklist_items
                else paragraph.is_open
            )
            if not is_open or not paragraph.content.strip():
                continue
            if is_line_disallowed_by_terms(paragraph.content, terms):
                continue
            yield with_note_context(paragraph, note)


def _dedupe(paragraphs: list[Paragraph]) -> list[Paragraph]:
    return remove_duplicates(
        eliminate_duplicate_synced_copies(paragraphs), ["content", "filename"]
    )


def overdue_date(
    paragraph: Paragraph, note: Note | None = None
) -> pendulum.Date | None:
    """The date a line became due, if it has one.

    A ``>YYYY-MM-DD`` schedule wins. Otherwise lines in a calendar note are
    due at the end of the note's period.
    """
    dates = scheduled_dates(paragraph.content)
    if dates:
        return max(dates)
    if note is not None and note.is_calendar:
        start, period = note.date, note.period
        if start is not None and period is not None:
            return period_end(start, period)
    return None


def overdue_paragraphs(ctx: BuildContext) -> list[Paragraph]:
    """Open lines due before today, within the look-back window if set."""
    today = ctx.today
    look_back = ctx.settings.look_back_days_for_overdue
    earliest = today.subtract(days=look_back) if look_back > 0 else None

    notes = {note.filename: note for note in _all_notes(ctx)}
    found: list[Paragraph] = []
    for paragraph in _candidates(ctx):
        due = overdue_date(paragraph, notes.get(paragraph.filename))
        if due is None or due >= today:
            continue
        if earliest is not None and due < earliest:
            continue
        found.append(paragraph)
    return _dedupe(found)


def build_overdue_sections(ctx: BuildContext) -> list[Section]:
    """Build the overdue section."""
    settings = ctx.settings
    order = settings.overdue_sort_order
    ordered = sort_by_keys(overdue_paragraphs(ctx), SORT_KEYS[order])
    shown, total = truncate(ordered, settings.max_items_to_show_in_section)
    items = make_section_items(shown, OVERDUE_SECTION_NUMBER, link_parents=False)

    if total > len(items):
        window = (
            f"from last {settings.look_back_days_for_overdue} days "
            if settings.look_back_days_for_overdue > 0
            else ""
        )
        description = (
            f"first {{count}} of {{totalCount}} {window}ordered by {order.value}"
        )
    else:
        description = f"{{count}} ordered by {order.value}"

    ctx.logger.debug("overdue_section_built", count=len(items), total=total)
    return [
        Section(
            id=OVERDUE_SECTION_NUMBER,
            section_code=SectionCode.OVERDUE,
            name="Overdue Tasks",
            items=tuple(items),
            total_count=total,
            generated_at=ctx.now,
            action_descriptors=(
                ActionDescriptor(
                    action_name="scheduleAllOverdueToday",
                    target_section_codes_to_refresh=(SectionCode.OVERDUE,),
                    tooltip="Schedule all Overdue tasks to Today",
                ),
            ),
            description=description,
            show_setting_name="showOverdueSection",
        )
    ]


def priority_paragraphs(ctx: BuildContext) -> list[Paragraph]:
    """Open lines with a priority marker."""
    return _dedupe([p for p in _candidates(ctx) if p.priority > 0])


def build_priority_sections(ctx: BuildContext) -> list[Section]:
    """Build the priority section."""
    ordered = sort_by_keys(priority_paragraphs(ctx), PRIORITY_SORT_KEYS)
    shown, total = truncate(ordered, ctx.settings.max_items_to_show_in_section)
    items = make_section_items(shown, PRIORITY_SECTION_NUMBER, link_parents=False)

    ctx.logger.debug("priority_section_built", count=len(items), total=total)
    return [
        Section(
            id=PRIORITY_SECTION_NUMBER,
            section_code=SectionCode.PRIORITY,
            name="Priority Tasks",
            items=tuple(items),
            total_count=total,
            generated_at=ctx.now,
            description="{count} of {totalCount}" if total > len(items) else "{count}",
            show_setting_name="showPrioritySection",
        )
    ]

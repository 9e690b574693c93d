"""Current time-block section."""

import re
from typing import Final

import pendulum

from notedash.enums import ItemType, ParagraphType, PeriodType, SectionCode
from notedash.sections._context import BuildContext
from notedash.sections._items import item_from_paragraph, with_note_context
from notedash.sections._models import Section
from notedash.store._models import Paragraph

TIMEBLOCK_SECTION_NUMBER: Final = "18"

_TIME: Final = r"(\d{1,2}):(\d{2})\s*([aApP][mM])?"
TIMEBLOCK_RE: Final = re.compile(rf"(?<![\d:]){_TIME}\s*-\s*{_TIME}")

_CANDIDATE_TYPES: Final = frozenset(
    {
        ParagraphType.OPEN,
        ParagraphType.CHECKLIST,
        ParagraphType.TEXT,
        ParagraphType.LIST,
    }
)


def _minutes(hour: str, minute: str, meridiem: str | None) -> int:
    h = int(hour) % 24
    if meridiem:
        h %= 12
        if meridiem.lower() == "pm":
            h += 12
    return h * 60 + int(minute)


def timeblock_range(content: str) -> tuple[int, int] | None:
    """Start and end of a line's time block, in minutes after midnight.

    A start without am/pm takes the end's, when that keeps it before the
    end (``11:00-12:30pm``).

    Examples:
        >>> timeblock_range("09:00-10:30 Write report")
        (540, 630)
        >>> timeblock_range("1:00-2:15pm call")
        (780, 855)
        >>> timeblock_range("no block here") is None
        True
    """
    match = TIMEBLOCK_RE.search(content)
    if match is None:
        return None
    sh, sm, s_mer, eh, em, e_mer = match.groups()
    end = _minutes(eh, em, e_mer)
    start = _minutes(sh, sm, s_mer)
    if s_mer is None and e_mer is not None:
        inherited = _minutes(sh, sm, e_mer)
        if inherited <= end:
            start = inherited
    return start, end


def is_current_timeblock(content: str, at: pendulum.DateTime) -> bool:
    """Whether a line's time block contains ``at``."""
    block = timeblock_range(content)
    if block is None:
        return False
    start, end = block
    minute = at.hour * 60 + at.minute
    return start <= minute < end


def current_timeblock(ctx: BuildContext) -> Paragraph | None:
    """The first line in today's note whose time block is running now."""
    note = ctx.record_store.calendar_note(ctx.today, PeriodType.DAY)
    if note is None:
        return None
    marker = ctx.settings.timeblock_must_contain_string
    for paragraph in note.paragraphs:
        if paragraph.type not in _CANDIDATE_TYPES:
            continue
        if marker and marker not in paragraph.content:
            continue
        if is_current_timeblock(paragraph.content, ctx.now):
            return with_note_context(paragraph, note)
    return None


def build_timeblock_sections(ctx: BuildContext) -> list[Section]:
    """Build the single-item (or empty) current time-block section."""
    paragraph = current_timeblock(ctx)
    items = (
        (
            item_from_paragraph(
                f"{TIMEBLOCK_SECTION_NUMBER}-0",
                paragraph,
                item_type=ItemType.TIMEBLOCK,
            ),
        )
        if paragraph is not None
        else ()
    )
    return [
        Section(
            id=TIMEBLOCK_SECTION_NUMBER,
            section_code=SectionCode.TIMEBLOCK,
            name="Current time block",
            items=items,
            total_count=len(items),
            generated_at=ctx.now,
            description="",
            show_setting_name="showTimeblockSection",
        )
    ]

"""Enumeration types for notedash."""

from enum import StrEnum
from typing import override


class ItemType(StrEnum):
    """Kinds of renderer-ready items."""

    TASK = "task"
    CHECKLIST = "checklist"
    TIMEBLOCK = "timeblock"
    PROJECT = "project"
    REVIEW_ITEM = "reviewItem"
    FILTER_INDICATOR = "filterIndicator"
    CONGRATS = "congrats"


class SectionCode(StrEnum):
    """Dashboard section codes.

    Values are the short wire codes used in refresh requests and action
    descriptors. Lookups also accept the long camelCase names
    (``SectionCode("today")``).
    """

    TODAY = "DT"
    YESTERDAY = "DY"
    TOMORROW = "DO"
    THIS_WEEK = "W"
    LAST_WEEK = "LW"
    THIS_MONTH = "M"
    THIS_QUARTER = "Q"
    TAG = "TAG"
    OVERDUE = "OVERDUE"
    PRIORITY = "PRIORITY"
    PROJECT_REVIEW = "PROJ"
    TIMEBLOCK = "TB"

    @property
    def long_name(self) -> str:
        """Return the camelCase name of this code (e.g. ``thisWeek``)."""
        head, *rest = self.name.lower().split("_")
        return head + "".join(part.title() for part in rest)

    @classmethod
    @override
    def _missing_(cls, value: object) -> "SectionCode | None":  # noqa: UP037
        if not isinstance(value, str):
            return None
        for member in cls:
            if value in (member.long_name, member.name):
                return member
        return None


class SortOrder(StrEnum):
    """Orderings for tag and overdue sections."""

    PRIORITY = "priority"
    EARLIEST = "earliest"
    MOST_RECENT = "most recent"


class PeriodType(StrEnum):
    """Calendar period lengths."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"


class NoteType(StrEnum):
    """Note kinds in the record store."""

    CALENDAR = "Calendar"
    NOTES = "Notes"


class ParagraphType(StrEnum):
    """Paragraph kinds supplied by the record store."""

    OPEN = "open"
    CHECKLIST = "checklist"
    DONE = "done"
    CANCELLED = "cancelled"
    SCHEDULED = "scheduled"
    CHECKLIST_DONE = "checklistDone"
    CHECKLIST_CANCELLED = "checklistCancelled"
    CHECKLIST_SCHEDULED = "checklistScheduled"
    TEXT = "text"
    LIST = "list"
    QUOTE = "quote"
    TITLE = "title"
    EMPTY = "empty"

    @property
    def is_open(self) -> bool:
        """Whether this is an open task or open checklist item."""
        return self in (ParagraphType.OPEN, ParagraphType.CHECKLIST)


class DisplayFinished(StrEnum):
    """How completed projects appear in the review list."""

    HIDE = "hide"
    AT_END = "display at end"
    SHOW = "display"


class DisplayOrder(StrEnum):
    """Primary sort key for the review list."""

    REVIEW = "review"
    DUE = "due"
    TITLE = "title"

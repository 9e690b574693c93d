# ruff: noqa: TC003  # pendulum and Mapping needed at runtime for dataclass fields
"""Note store records.

Notes and paragraphs are supplied by the host note store already parsed.
These records carry only the fields the dashboard reads.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final

import pendulum

from notedash.enums import NoteType, ParagraphType, PeriodType
from notedash.utils._dates import calendar_filename_start, calendar_period_of
from notedash.utils._folders import folder_from_filename

MAX_PRIORITY: Final = 4
_PRIORITY_RE: Final = re.compile(r"^\s*(>>|!{1,3})(?:\s|$)")


def get_task_priority(content: str) -> int:
    """Return the priority marked at the start of a line.

    ``!``, ``!!`` and ``!!!`` give 1 to 3. ``>>`` (working on) gives 4.

    Examples:
        >>> get_task_priority("!! call Bob")
        2
        >>> get_task_priority(">> draft report")
        4
        >>> get_task_priority("plain line")
        0
    """
    match = _PRIORITY_RE.match(content)
    if match is None:
        return 0
    marker = match.group(1)
    return MAX_PRIORITY if marker == ">>" else len(marker)


@dataclass(frozen=True, slots=True)
class Paragraph:
    """One line of a note.

    Attributes:
        content: Line text without the task marker.
        type: Paragraph kind.
        filename: Filename of the note the line lives in.
        note_type: Kind of the owning note.
        raw_content: Line text including the task marker.
        indent_level: Indentation depth (0 = top level).
        has_children: Whether the following lines are indented under it.
        is_child: Whether this line is indented under an earlier line.
        block_id: Synced-line identity shared by every copy of the line.
        line_index: Position of the line in its note.
        changed_date: When the owning note last changed.
        note_title: Title of the owning note.
    """

    content: str
    type: ParagraphType
    filename: str
    note_type: NoteType = NoteType.NOTES
    raw_content: str = ""
    indent_level: int = 0
    has_children: bool = False
    is_child: bool = False
    block_id: str | None = None
    line_index: int = 0
    changed_date: pendulum.DateTime | None = None
    note_title: str = ""

    @property
    def is_calendar(self) -> bool:
        """Whether the line lives in a calendar note."""
        return self.note_type is NoteType.CALENDAR

    @property
    def is_open(self) -> bool:
        """Whether the line is an open task or open checklist item."""
        return self.type.is_open

    @property
    def is_open_task(self) -> bool:
        """Whether the line is an open task (not a checklist item)."""
        return self.type is ParagraphType.OPEN

    @property
    def priority(self) -> int:
        """Priority from the leading marker, 0 if none."""
        return get_task_priority(self.content)


@dataclass(frozen=True, slots=True)
class Note:
    """A note and its parsed lines.

    Attributes:
        filename: Path relative to the notes root. Unique.
        title: Note title.
        type: Calendar or regular note.
        paragraphs: Lines in document order.
        hashtags: Hashtags found anywhere in the note.
        mentions: Mentions found anywhere in the note.
        metadata: Front-matter style key/values (``review``, ``due``...).
        changed_date: When the note last changed.
    """

    filename: str
    title: str = ""
    type: NoteType = NoteType.NOTES
    paragraphs: tuple[Paragraph, ...] = ()
    hashtags: tuple[str, ...] = ()
    mentions: tuple[str, ...] = ()
    metadata: Mapping[str, str] = field(default_factory=dict, hash=False)
    changed_date: pendulum.DateTime | None = None

    @property
    def folder(self) -> str:
        """Folder the note lives in (``/`` for the root)."""
        return folder_from_filename(self.filename)

    @property
    def is_calendar(self) -> bool:
        """Whether this is a calendar note."""
        return self.type is NoteType.CALENDAR

    @property
    def date(self) -> pendulum.Date | None:
        """First day covered by a calendar note, None for regular notes."""
        return calendar_filename_start(self.filename) if self.is_calendar else None

    @property
    def period(self) -> PeriodType | None:
        """Period length of a calendar note, None for regular notes."""
        return calendar_period_of(self.filename) if self.is_calendar else None

    def mentions_tag(self, tag: str) -> bool:
        """Whether the note carries ``tag`` as a hashtag or mention."""
        return tag in self.hashtags or tag in self.mentions

    def open_paragraphs(self, *, include_checklists: bool = True) -> list[Paragraph]:
        """Open lines in document order."""
        return [
            p
            for p in self.paragraphs
            if (p.is_open if include_checklists else p.is_open_task)
        ]

"""Review tracking capability.

The review tracker turns a project note into a ProjectRecord. It is an
optional collaborator: without one the project cache stays empty and the
project-review section is omitted.
"""

import re
from typing import Final, Protocol, runtime_checkable

import pendulum

from notedash.enums import ParagraphType
from notedash.projects._models import ProjectRecord
from notedash.store._models import Note
from notedash.utils._dates import today

DEFAULT_REVIEW_INTERVAL: Final = "1w"
PAUSED_TAG: Final = "#paused"
PROGRESS_PREFIX: Final = "Progress:"

_INTERVAL_RE: Final = re.compile(r"^\s*(\d+)\s*([dwmqy])\s*$", re.IGNORECASE)
_MENTION_PARAM_RE: Final = re.compile(r"^@([\w-]+)\((.*)\)$")
_DONE_TYPES: Final = frozenset({ParagraphType.DONE})
_COUNTED_TYPES: Final = frozenset(
    {ParagraphType.OPEN, ParagraphType.DONE, ParagraphType.SCHEDULED}
)


@runtime_checkable
class ReviewTracker(Protocol):
    """Builds review records from project notes."""

    def is_available(self) -> bool:
        """Whether the tracker can currently build records."""
        ...

    def make_project(self, note: Note, tag: str) -> ProjectRecord:
        """Build the record for ``note``, found through ``tag``."""
        ...


def add_interval(start: pendulum.Date, interval: str) -> pendulum.Date | None:
    """Add a review interval such as ``2w`` to a date.

    Returns:
        The shifted date, or None if the interval cannot be parsed.

    Examples:
        >>> add_interval(pendulum.date(2024, 1, 31), "1m")
        Date(2024, 2, 29)
    """
    match = _INTERVAL_RE.match(interval)
    if match is None:
        return None
    count = int(match.group(1))
    match match.group(2).lower():
        case "d":
            return start.add(days=count)
        case "w":
            return start.add(weeks=count)
        case "m":
            return start.add(months=count)
        case "q":
            return start.add(months=3 * count)
        case _:
            return start.add(years=count)


def _parse_date(value: str | None) -> pendulum.Date | None:
    if not value:
        return None
    try:
        return pendulum.Date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def _days_between(start: pendulum.Date, end: pendulum.Date) -> int:
    return end.toordinal() - start.toordinal()


def note_params(note: Note) -> dict[str, str]:
    """Collect ``@key(value)`` mentions and metadata from a note.

    Metadata entries take precedence over mentions with the same key.
    """
    params: dict[str, str] = {}
    for mention in note.mentions:
        if match := _MENTION_PARAM_RE.match(mention):
            params[match.group(1).lower()] = match.group(2)
    params.update({key.lower(): value for key, value in note.metadata.items()})
    return params


class MetadataReviewTracker:
    """Review tracker reading review state from note metadata.

    Recognized keys, as metadata or ``@key(value)`` mentions: ``review``
    (interval), ``reviewed``, ``due``, ``completed``, ``cancelled``,
    ``paused`` and ``progress``.
    """

    def __init__(
        self,
        *,
        timezone: str = "UTC",
        default_interval: str = DEFAULT_REVIEW_INTERVAL,
    ) -> None:
        self._timezone: str = timezone
        self._default_interval: str = default_interval

    def is_available(self) -> bool:
        return True

    def make_project(self, note: Note, tag: str) -> ProjectRecord:
        params = note_params(note)
        current = today(self._timezone)

        interval = params.get("review") or self._default_interval
        reviewed = _parse_date(params.get("reviewed"))
        next_review = add_interval(reviewed, interval) if reviewed else None
        due = _parse_date(params.get("due"))

        return ProjectRecord(
            filename=note.filename,
            title=note.title or note.filename.rsplit("/", 1)[-1].rsplit(".", 1)[0],
            note_type_tag=tag,
            folder=note.folder,
            next_review_days=_days_between(current, next_review) if next_review else 0,
            due_days=_days_between(current, due) if due else None,
            is_completed="completed" in params or "cancelled" in params,
            is_paused=_is_truthy(params.get("paused")) or PAUSED_TAG in note.hashtags,
            percent_complete=_percent_complete(note),
            review_interval=interval,
            last_progress_comment=params.get("progress") or _progress_comment(note),
        )


def _is_truthy(value: str | None) -> bool:
    return value is not None and value.strip().lower() in ("", "true", "yes", "1")


def _percent_complete(note: Note) -> int:
    counted = [p for p in note.paragraphs if p.type in _COUNTED_TYPES]
    if not counted:
        return 0
    done = sum(1 for p in counted if p.type in _DONE_TYPES)
    return round(100 * done / len(counted))


def _progress_comment(note: Note) -> str:
    for paragraph in note.paragraphs:
        content = paragraph.content.strip()
        if content.startswith(PROGRESS_PREFIX):
            return content[len(PROGRESS_PREFIX) :].strip()
    return ""

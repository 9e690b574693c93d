"""Record store protocol.

The note store is an external collaborator. This protocol is the whole of
what the dashboard asks of it.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import pendulum

    from notedash.enums import PeriodType
    from notedash.store._models import Note, Paragraph


@runtime_checkable
class RecordStore(Protocol):
    """Protocol for read access to notes and paragraphs.

    Example:
        >>> def count_open(store: RecordStore) -> int:
        ...     return sum(len(n.open_paragraphs()) for n in store.project_notes())
    """

    def folders(self) -> "list[str]":  # noqa: UP037
        """Every folder, ``/`` for the root, in display order."""
        ...

    def project_notes(self, folder: str | None = None) -> "list[Note]":  # noqa: UP037
        """Regular notes, optionally only those directly in ``folder``."""
        ...

    def calendar_notes(self) -> "list[Note]":  # noqa: UP037
        """All calendar notes."""
        ...

    def calendar_note(
        self,
        day: "pendulum.Date",  # noqa: UP037
        period: "PeriodType",  # noqa: UP037
    ) -> "Note | None":  # noqa: UP037
        """The calendar note covering ``day`` for the given period length."""
        ...

    def referenced_paragraphs(self, note: "Note") -> "list[Paragraph]":  # noqa: UP037
        """Lines in other notes scheduled into a calendar note."""
        ...

    def notes_with_tag(self, tag: str) -> "list[Note]":  # noqa: UP037
        """Notes containing a hashtag or mention."""
        ...

    def note_by_filename(self, filename: str) -> "Note | None":  # noqa: UP037
        """Look up one note."""
        ...

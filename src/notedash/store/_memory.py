"""In-memory record store.

``InMemoryRecordStore`` implements RecordStore over a dict of notes. It
backs the demo data and the tests, and is a reference for adapters over a
real note store.
"""

from dataclasses import dataclass, field

import pendulum

from notedash.enums import PeriodType
from notedash.store._models import Note, Paragraph
from notedash.utils._dates import calendar_filename, schedule_reference
from notedash.utils._folders import ROOT_FOLDER


@dataclass(slots=True)
class InMemoryRecordStore:
    """Record store holding notes in memory.

    Example:
        >>> store = InMemoryRecordStore()
        >>> store.add(Note(filename="Home/Garden.md", title="Garden"))
        >>> store.folders()
        ['/', 'Home']
    """

    notes: dict[str, Note] = field(default_factory=dict)
    extra_folders: set[str] = field(default_factory=set)
    extension: str = "md"

    # =========================================================================
    # Setup Helpers
    # =========================================================================

    def add(self, *notes: Note) -> None:
        """Add or replace notes by filename."""
        for note in notes:
            self.notes[note.filename] = note

    def remove(self, filename: str) -> bool:
        """Remove a note, returning True if it existed."""
        return self.notes.pop(filename, None) is not None

    # =========================================================================
    # RecordStore Methods
    # =========================================================================

    def folders(self) -> list[str]:
        """Every folder holding a regular note, plus any extra folders.

        Parent folders of nested folders are included. The root folder is
        always listed first.
        """
        found: set[str] = set(self.extra_folders)
        for note in self.notes.values():
            if note.is_calendar:
                continue
            folder = note.folder
            while folder != ROOT_FOLDER:
                found.add(folder)
                folder = folder.rsplit("/", 1)[0] if "/" in folder else ROOT_FOLDER
        found.discard(ROOT_FOLDER)
        return [ROOT_FOLDER, *sorted(found, key=str.lower)]

    def project_notes(self, folder: str | None = None) -> list[Note]:
        return [
            note
            for note in self.notes.values()
            if not note.is_calendar and (folder is None or note.folder == folder)
        ]

    def calendar_notes(self) -> list[Note]:
        return [note for note in self.notes.values() if note.is_calendar]

    def calendar_note(self, day: pendulum.Date, period: PeriodType) -> Note | None:
        return self.notes.get(calendar_filename(day, period, self.extension))

    def referenced_paragraphs(self, note: Note) -> list[Paragraph]:
        marker = schedule_reference(note.filename)
        if marker is None:
            return []
        return [
            paragraph
            for other in self.notes.values()
            if other.filename != note.filename
            for paragraph in other.paragraphs
            if marker in paragraph.content
        ]

    def notes_with_tag(self, tag: str) -> list[Note]:
        return [
            note
            for note in self.notes.values()
            if note.mentions_tag(tag) or any(tag in p.content for p in note.paragraphs)
        ]

    def note_by_filename(self, filename: str) -> Note | None:
        return self.notes.get(filename)

"""Shared test fixtures for notedash tests."""

from collections.abc import Callable

import pendulum
import pytest

from notedash.config import SettingsStore
from notedash.enums import NoteType, ParagraphType
from notedash.projects import ProjectRecord
from notedash.store import InMemoryRecordStore, Note, Paragraph
from notedash.utils import MemoryStateStore

FIXED_NOW = pendulum.datetime(2024, 5, 17, 10, 0, 0, tz="UTC")


@pytest.fixture
def make_paragraph() -> Callable[..., Paragraph]:
    """Return a factory creating open-task Paragraphs with defaults."""

    def _make(**overrides: object) -> Paragraph:
        defaults: dict[str, object] = {
            "content": "Do the thing",
            "type": ParagraphType.OPEN,
            "filename": "Projects/Alpha.md",
            "note_type": NoteType.NOTES,
            "changed_date": FIXED_NOW,
        }
        defaults.update(overrides)
        return Paragraph(**defaults)  # pyright: ignore[reportArgumentType]

    return _make


@pytest.fixture
def make_note(make_paragraph: Callable[..., Paragraph]) -> Callable[..., Note]:
    """Return a factory creating Notes.

    ``lines`` is a list of ``(type, content)`` pairs turned into paragraphs
    that belong to the note.
    """

    def _make(
        filename: str = "Projects/Alpha.md",
        lines: list[tuple[ParagraphType, str]] | None = None,
        **overrides: object,
    ) -> Note:
        note_type = overrides.pop("type", None) or (
            NoteType.CALENDAR if filename[:1].isdigit() else NoteType.NOTES
        )
        paragraphs = tuple(
            make_paragraph(
                content=content,
                type=kind,
                filename=filename,
                note_type=note_type,
                line_index=index,
            )
            for index, (kind, content) in enumerate(lines or [])
        )
        defaults: dict[str, object] = {
            "filename": filename,
            "title": filename.rsplit("/", 1)[-1].rsplit(".", 1)[0],
            "type": note_type,
            "paragraphs": paragraphs,
            "changed_date": FIXED_NOW,
        }
        defaults.update(overrides)
        return Note(**defaults)  # pyright: ignore[reportArgumentType]

    return _make


@pytest.fixture
def make_project() -> Callable[..., ProjectRecord]:
    """Return a factory creating ProjectRecords that are due for review."""

    def _make(**overrides: object) -> ProjectRecord:
        defaults: dict[str, object] = {
            "filename": "Projects/Alpha.md",
            "title": "Alpha",
            "note_type_tag": "#project",
            "folder": "Projects",
            "next_review_days": 0,
            "review_interval": "1w",
        }
        defaults.update(overrides)
        return ProjectRecord.model_validate(defaults)

    return _make


@pytest.fixture
def state_store() -> MemoryStateStore:
    return MemoryStateStore()


@pytest.fixture
def settings_store(state_store: MemoryStateStore) -> SettingsStore:
    return SettingsStore(state_store)


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()

"""Demo data.

A small fixed corpus dated relative to today, so every section has
something to show without a real note store.
"""

import pendulum

from notedash.enums import NoteType, ParagraphType, PeriodType
from notedash.projects._models import ProjectRecord
from notedash.sections._context import StaticProjectSource
from notedash.store._memory import InMemoryRecordStore
from notedash.store._models import Note, Paragraph
from notedash.utils._dates import calendar_filename, shift_period


def _calendar_note(
    day: pendulum.Date,
    period: PeriodType,
    lines: list[tuple[ParagraphType, str, int]],
    changed: pendulum.DateTime,
) -> Note:
    filename = calendar_filename(day, period)
    paragraphs: list[Paragraph] = []
    for index, (kind, content, indent) in enumerate(lines):
        next_indent = lines[index + 1][2] if index + 1 < len(lines) else 0
        paragraphs.append(
            Paragraph(
                content=content,
                type=kind,
                filename=filename,
                note_type=NoteType.CALENDAR,
                indent_level=indent,
                has_children=next_indent > indent,
                is_child=indent > 0,
                line_index=index,
                changed_date=changed,
            )
        )
    return Note(
        filename=filename,
        title=filename.rsplit(".", 1)[0],
        type=NoteType.CALENDAR,
        paragraphs=tuple(paragraphs),
        changed_date=changed,
    )


def _project_note(
    filename: str,
    title: str,
    lines: list[tuple[ParagraphType, str]],
    changed: pendulum.DateTime,
    hashtags: tuple[str, ...] = (),
) -> Note:
    return Note(
        filename=filename,
        title=title,
        paragraphs=tuple(
            Paragraph(
                content=content,
                type=kind,
                filename=filename,
                line_index=index,
                changed_date=changed,
                note_title=title,
            )
            for index, (kind, content) in enumerate(lines)
        ),
        hashtags=hashtags,
        changed_date=changed,
    )


def demo_record_store(now: pendulum.DateTime) -> InMemoryRecordStore:
    """Build the demo corpus around ``now``."""
    today = now.date()
    yesterday = today.subtract(days=1)
    last_week = shift_period(today, PeriodType.WEEK, -1)
    start_of_day = now.start_of("day")
    block_start = now.subtract(minutes=15).format("HH:mm")
    block_end = now.add(minutes=45).format("HH:mm")

    store = InMemoryRecordStore()
    store.add(
        _calendar_note(
            today,
            PeriodType.DAY,
            [
                (ParagraphType.OPEN, "!! Prepare quarterly review", 0),
                (ParagraphType.OPEN, "Collect figures", 1),
                (ParagraphType.CHECKLIST, "Draft slides", 1),
                (ParagraphType.OPEN, "Call the plumber #home", 0),
                (ParagraphType.TEXT, f"{block_start}-{block_end} Deep work", 0),
                (ParagraphType.DONE, "Water the plants", 0),
            ],
            start_of_day,
        ),
        _calendar_note(
            yesterday,
            PeriodType.DAY,
            [
                (ParagraphType.OPEN, "! Reply to the school about the trip", 0),
                (ParagraphType.OPEN, "Book car service @home", 0),
            ],
            start_of_day.subtract(days=1),
        ),
        _calendar_note(
            today,
            PeriodType.WEEK,
            [
                (ParagraphType.OPEN, "Plan the garden beds #home", 0),
                (ParagraphType.CHECKLIST, "Renew passport", 0),
            ],
            start_of_day.subtract(days=2),
        ),
        _calendar_note(
            last_week,
            PeriodType.WEEK,
            [(ParagraphType.OPEN, ">> Finish tax return", 0)],
            start_of_day.subtract(days=8),
        ),
        _calendar_note(
            today,
            PeriodType.MONTH,
            [(ParagraphType.OPEN, "Review subscriptions", 0)],
            start_of_day.subtract(days=5),
        ),
        _calendar_note(
            today,
            PeriodType.QUARTER,
            [(ParagraphType.OPEN, "!!! Ship version 2", 0)],
            start_of_day.subtract(days=20),
        ),
        _project_note(
            "Home/Garden.md",
            "Garden",
            [
                (ParagraphType.OPEN, "Order seeds #home"),
                (ParagraphType.DONE, "Dig the beds"),
                (
                    ParagraphType.OPEN,
                    f"Mend the fence >{today.to_date_string()}",
                ),
            ],
            start_of_day.subtract(days=3),
            hashtags=("#project", "#home"),
        ),
        _project_note(
            "Work/Website.md",
            "Website",
            [
                (ParagraphType.OPEN, "!! Fix contact form"),
                (
                    ParagraphType.OPEN,
                    f"Update team page >{yesterday.subtract(days=3).to_date_string()}",
                ),
            ],
            start_of_day.subtract(days=1),
            hashtags=("#project",),
        ),
    )
    return store


def demo_project_source() -> StaticProjectSource:
    """Project records matching the demo corpus."""
    return StaticProjectSource(
        records=(
            ProjectRecord(
                filename="Home/Garden.md",
                title="Garden",
                note_type_tag="#project",
                folder="Home",
                next_review_days=-2,
                percent_complete=33,
                review_interval="1w",
                last_progress_comment="Beds dug, seeds next",
            ),
            ProjectRecord(
                filename="Work/Website.md",
                title="Website",
                note_type_tag="#project",
                folder="Work",
                next_review_days=0,
                due_days=14,
                review_interval="2w",
            ),
        )
    )

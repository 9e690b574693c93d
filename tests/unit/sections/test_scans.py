from collections.abc import Callable

import pendulum
import pytest

from notedash.enums import ParagraphType, SectionCode
from notedash.sections import (
    BuildContext,
    build_overdue_sections,
    build_priority_sections,
    overdue_date,
    overdue_paragraphs,
    priority_paragraphs,
)
from notedash.store import InMemoryRecordStore, Note, Paragraph


@pytest.fixture
def corpus(
    record_store: InMemoryRecordStore, make_note: Callable[..., Note]
) -> InMemoryRecordStore:
    record_store.add(
        make_note("20240516.md", lines=[(ParagraphType.OPEN, "Old task")]),
        make_note("20240517.md", lines=[(ParagraphType.OPEN, "Today task")]),
        make_note("20240510.md", lines=[(ParagraphType.OPEN, "Moved >2024-05-20")]),
        make_note("2024-W19.md", lines=[(ParagraphType.OPEN, "Last week task")]),
        make_note("2024-W20.md", lines=[(ParagraphType.OPEN, "This week task")]),
        make_note(
            "Work/Plan.md",
            lines=[
                (ParagraphType.OPEN, "Late >2024-05-01"),
                (ParagraphType.OPEN, "Future >2024-06-01"),
                (ParagraphType.OPEN, "Undated"),
                (ParagraphType.DONE, "Done >2024-05-01"),
            ],
        ),
    )
    return record_store


class TestOverdueDate:
    def test_latest_schedule_wins(
        self, make_paragraph: Callable[..., Paragraph]
    ) -> None:
        paragraph = make_paragraph(content="x >2024-05-10 and >2024-05-12")

        assert overdue_date(paragraph) == pendulum.date(2024, 5, 12)

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("20240516.md", pendulum.date(2024, 5, 16)),
            ("2024-W19.md", pendulum.date(2024, 5, 12)),
            ("2024-04.md", pendulum.date(2024, 4, 30)),
            ("2024-Q1.md", pendulum.date(2024, 3, 31)),
        ],
    )
    def test_calendar_note_period_end(
        self,
        make_paragraph: Callable[..., Paragraph],
        make_note: Callable[..., Note],
        filename: str,
        expected: pendulum.Date,
    ) -> None:
        assert overdue_date(make_paragraph(), make_note(filename)) == expected

    def test_undated_project_line(
        self,
        make_paragraph: Callable[..., Paragraph],
        make_note: Callable[..., Note],
    ) -> None:
        assert overdue_date(make_paragraph(), make_note("Work/Plan.md")) is None


class TestOverdueSection:
    def test_overdue_lines(
        self, corpus: InMemoryRecordStore, make_context: Callable[..., BuildContext]
    ) -> None:
        found = overdue_paragraphs(make_context())

        assert {p.content for p in found} == {
            "Old task",
            "Last week task",
            "Late >2024-05-01",
        }

    def test_look_back_window(
        self, corpus: InMemoryRecordStore, make_context: Callable[..., BuildContext]
    ) -> None:
        found = overdue_paragraphs(make_context({"lookBackDaysForOverdue": 7}))

        assert {p.content for p in found} == {"Old task", "Last week task"}

    def test_section(
        self, corpus: InMemoryRecordStore, make_context: Callable[..., BuildContext]
    ) -> None:
        sections = build_overdue_sections(make_context())

        assert len(sections) == 1
        section = sections[0]
        assert section.id == "13"
        assert section.section_code is SectionCode.OVERDUE
        assert [i.id for i in section.items] == ["13-0", "13-1", "13-2"]
        assert section.description == "{count} ordered by priority"
        assert [a.action_name for a in section.action_descriptors] == [
            "scheduleAllOverdueToday"
        ]

    def test_truncated_description(
        self, corpus: InMemoryRecordStore, make_context: Callable[..., BuildContext]
    ) -> None:
        section = build_overdue_sections(
            make_context({"maxItemsToShowInSection": 1})
        )[0]

        assert len(section.items) == 1
        assert section.total_count == 3
        assert section.description == (
            "first {count} of {totalCount} ordered by priority"
        )

    def test_truncated_description_with_window(
        self, corpus: InMemoryRecordStore, make_context: Callable[..., BuildContext]
    ) -> None:
        ctx = make_context(
            {"maxItemsToShowInSection": 1, "lookBackDaysForOverdue": 7}
        )

        section = build_overdue_sections(ctx)[0]

        assert section.description == (
            "first {count} of {totalCount} from last 7 days ordered by priority"
        )

    def test_disallowed_folders_skipped(
        self, corpus: InMemoryRecordStore, make_context: Callable[..., BuildContext]
    ) -> None:
        ctx = make_context(allowed_folders=frozenset({"Home"}))

        found = overdue_paragraphs(ctx)

        assert {p.content for p in found} == {"Old task", "Last week task"}

    def test_empty(self, make_context: Callable[..., BuildContext]) -> None:
        section = build_overdue_sections(make_context())[0]

        assert section.items == ()
        assert section.total_count == 0


class TestPrioritySection:
    def test_ordered_by_priority(
        self,
        record_store: InMemoryRecordStore,
        make_context: Callable[..., BuildContext],
        make_note: Callable[..., Note],
    ) -> None:
        record_store.add(
            make_note("20240517.md", lines=[(ParagraphType.OPEN, "! e")]),
            make_note(
                "Work/Plan.md",
                lines=[
                    (ParagraphType.OPEN, "!! a"),
                    (ParagraphType.OPEN, "b"),
                    (ParagraphType.OPEN, "!!! c"),
                    (ParagraphType.OPEN, ">> d"),
                    (ParagraphType.DONE, "!!! done"),
                ],
            ),
        )

        section = build_priority_sections(make_context())[0]

        assert section.id == "14"
        assert section.section_code is SectionCode.PRIORITY
        assert [i.content for i in section.items] == [">> d", "!!! c", "!! a", "! e"]
        assert [i.priority for i in section.items] == [4, 3, 2, 1]
        assert section.description == "{count}"

    def test_ignored_terms(
        self,
        record_store: InMemoryRecordStore,
        make_context: Callable[..., BuildContext],
        make_note: Callable[..., Note],
    ) -> None:
        record_store.add(
            make_note(
                "Work/Plan.md",
                lines=[(ParagraphType.OPEN, "!! a #test"), (ParagraphType.OPEN, "! b")],
            )
        )

        found = priority_paragraphs(make_context({"ignoreItemsWithTerms": "#test"}))

        assert [p.content for p in found] == ["! b"]

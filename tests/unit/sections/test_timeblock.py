from collections.abc import Callable

import pendulum
import pytest

from notedash.enums import ItemType, ParagraphType, SectionCode
from notedash.sections import (
    BuildContext,
    build_timeblock_sections,
    current_timeblock,
    is_current_timeblock,
    timeblock_range,
)
from notedash.store import InMemoryRecordStore, Note


class TestTimeblockRange:
    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            ("09:00-10:30 Write report", (540, 630)),
            ("1:00-2:15pm call", (780, 855)),
            ("11:00-12:30pm lunch", (660, 750)),
            ("10:00am - 11:00 gym", (600, 660)),
            ("9:00pm-10:00pm film", (1260, 1320)),
            ("no block here", None),
            ("version 1:2:30-4:00", None),
        ],
    )
    def test_parses(self, content: str, expected: tuple[int, int] | None) -> None:
        assert timeblock_range(content) == expected


class TestIsCurrentTimeblock:
    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            ("09:30-10:30 Deep work", True),
            ("10:00-10:15 Standup", True),
            ("09:00-10:00 Before", False),
            ("10:30-11:00 After", False),
            ("No time", False),
        ],
    )
    def test_at_ten(self, content: str, expected: bool) -> None:
        at = pendulum.datetime(2024, 5, 17, 10, 0)

        assert is_current_timeblock(content, at) is expected


class TestBuildTimeblockSections:
    @pytest.fixture
    def today_note(self, make_note: Callable[..., Note]) -> Note:
        return make_note(
            "20240517.md",
            lines=[
                (ParagraphType.DONE, "09:45-10:15 Finished early"),
                (ParagraphType.TEXT, "09:30-10:30 Deep work"),
                (ParagraphType.OPEN, "09:50-10:20 Review #tb"),
            ],
        )

    def test_current_block(
        self,
        record_store: InMemoryRecordStore,
        make_context: Callable[..., BuildContext],
        today_note: Note,
    ) -> None:
        record_store.add(today_note)

        sections = build_timeblock_sections(make_context())

        assert len(sections) == 1
        section = sections[0]
        assert section.id == "18"
        assert section.section_code is SectionCode.TIMEBLOCK
        assert len(section.items) == 1
        item = section.items[0]
        assert item.id == "18-0"
        assert item.item_type is ItemType.TIMEBLOCK
        assert item.content == "09:30-10:30 Deep work"
        assert item.note_title == "20240517"

    def test_must_contain_string(
        self,
        record_store: InMemoryRecordStore,
        make_context: Callable[..., BuildContext],
        today_note: Note,
    ) -> None:
        record_store.add(today_note)
        ctx = make_context({"timeblockMustContainString": "#tb"})

        paragraph = current_timeblock(ctx)

        assert paragraph is not None
        assert paragraph.content == "09:50-10:20 Review #tb"

    def test_nothing_running(
        self,
        record_store: InMemoryRecordStore,
        make_context: Callable[..., BuildContext],
        today_note: Note,
    ) -> None:
        record_store.add(today_note)
        ctx = make_context(now=pendulum.datetime(2024, 5, 17, 14, 0))

        section = build_timeblock_sections(ctx)[0]

        assert section.items == ()
        assert section.total_count == 0

    def test_no_note_for_today(
        self, make_context: Callable[..., BuildContext]
    ) -> None:
        assert current_timeblock(make_context()) is None

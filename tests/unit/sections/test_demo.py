import pendulum

from notedash.config import DashboardSettings
from notedash.enums import SectionCode
from notedash.sections import (
    PERIOD_SPECS,
    BuildContext,
    build_period_sections,
    build_project_sections,
    build_timeblock_sections,
    demo_project_source,
    demo_record_store,
)

NOW = pendulum.datetime(2024, 5, 17, 10, 0, tz="UTC")


def _demo_context() -> BuildContext:
    return BuildContext(
        settings=DashboardSettings(),
        record_store=demo_record_store(NOW),
        now=NOW,
        projects=demo_project_source(),
    )


class TestDemoRecordStore:
    def test_folders(self) -> None:
        assert demo_record_store(NOW).folders() == ["/", "Home", "Work"]

    def test_calendar_notes_are_relative_to_now(self) -> None:
        store = demo_record_store(NOW)

        filenames = {note.filename for note in store.calendar_notes()}

        assert filenames == {
            "20240517.md",
            "20240516.md",
            "2024-W20.md",
            "2024-W19.md",
            "2024-05.md",
            "2024-Q2.md",
        }

    def test_today_section(self) -> None:
        section = build_period_sections(
            _demo_context(), PERIOD_SPECS[SectionCode.TODAY]
        )[0]

        assert [i.content for i in section.items] == [
            "!! Prepare quarterly review",
            "Collect figures",
            "Draft slides",
            "Call the plumber #home",
            "Mend the fence >2024-05-17",
        ]
        assert [i.parent_id for i in section.items[:3]] == ["", "0-0", "0-0"]

    def test_timeblock_is_running(self) -> None:
        section = build_timeblock_sections(_demo_context())[0]

        assert [i.content for i in section.items] == ["09:45-10:45 Deep work"]


class TestDemoProjectSource:
    def test_records_ready_for_review(self) -> None:
        source = demo_project_source()

        assert source.is_available
        assert [r.filename for r in source.get_all()] == [
            "Home/Garden.md",
            "Work/Website.md",
        ]
        assert all(r.is_ready_for_review for r in source.get_all())

    def test_project_section(self) -> None:
        section = build_project_sections(_demo_context())[0]

        assert [i.content for i in section.items] == ["Garden", "Website"]

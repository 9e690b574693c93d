from notedash.enums import SectionCode
from notedash.sections import (
    build_overdue_sections,
    build_priority_sections,
    build_project_sections,
    build_tag_sections,
    build_timeblock_sections,
    builder_for,
    default_builders,
)


class TestBuilderFor:
    def test_scan_builders(self) -> None:
        assert builder_for(SectionCode.TAG) is build_tag_sections
        assert builder_for(SectionCode.OVERDUE) is build_overdue_sections
        assert builder_for(SectionCode.PRIORITY) is build_priority_sections
        assert builder_for(SectionCode.PROJECT_REVIEW) is build_project_sections
        assert builder_for(SectionCode.TIMEBLOCK) is build_timeblock_sections

    def test_period_builders(self) -> None:
        assert builder_for(SectionCode.LAST_WEEK).__name__ == (
            "build_lastWeek_sections"
        )


class TestDefaultBuilders:
    def test_covers_every_code(self) -> None:
        builders = default_builders()

        assert set(builders) == set(SectionCode)
        assert all(callable(builder) for builder in builders.values())

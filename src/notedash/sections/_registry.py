"""Section code to builder lookup."""

from typing import assert_never

from notedash.enums import SectionCode
from notedash.sections._context import SectionBuilder
from notedash.sections._periods import period_builder
from notedash.sections._projects import build_project_sections
from notedash.sections._scans import build_overdue_sections, build_priority_sections
from notedash.sections._tags import build_tag_sections
from notedash.sections._timeblock import build_timeblock_sections


def builder_for(code: SectionCode) -> SectionBuilder:
    """Return the builder for a section code."""
    match code:
        case (
            SectionCode.TODAY
            | SectionCode.YESTERDAY
            | SectionCode.TOMORROW
            | SectionCode.THIS_WEEK
            | SectionCode.LAST_WEEK
            | SectionCode.THIS_MONTH
            | SectionCode.THIS_QUARTER
        ):
            return period_builder(code)
        case SectionCode.TAG:
            return build_tag_sections
        case SectionCode.OVERDUE:
            return build_overdue_sections
        case SectionCode.PRIORITY:
            return build_priority_sections
        case SectionCode.PROJECT_REVIEW:
            return build_project_sections
        case SectionCode.TIMEBLOCK:
            return build_timeblock_sections
        case _:
            assert_never(code)


def default_builders() -> dict[SectionCode, SectionBuilder]:
    """A builder for every section code."""
    return {code: builder_for(code) for code in SectionCode}

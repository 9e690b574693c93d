"""Section builders.

Each builder turns a BuildContext into zero or more Sections. Builders only
read: the record store, a settings snapshot and project records.
"""

from ._context import BuildContext, ProjectSource, SectionBuilder, StaticProjectSource
from ._demo import demo_project_source, demo_record_store
from ._items import (
    MAX_INDENT_LEVELS,
    SORT_KEYS,
    congrats_item,
    item_from_paragraph,
    item_type_for,
    make_section_items,
    truncate,
    with_note_context,
)
from ._models import ActionDescriptor, Item, Section
from ._periods import (
    PERIOD_SPECS,
    PeriodSpec,
    build_period_sections,
    period_builder,
    period_paragraphs,
)
from ._projects import PROJECT_SECTION_NUMBER, build_project_sections
from ._registry import builder_for, default_builders
from ._scans import (
    OVERDUE_SECTION_NUMBER,
    PRIORITY_SECTION_NUMBER,
    build_overdue_sections,
    build_priority_sections,
    overdue_date,
    overdue_paragraphs,
    priority_paragraphs,
)
from ._tags import (
    TAG_SECTION_NUMBER,
    build_tag_section,
    build_tag_sections,
    tag_paragraphs,
)
from ._timeblock import (
    TIMEBLOCK_SECTION_NUMBER,
    build_timeblock_sections,
    current_timeblock,
    is_current_timeblock,
    timeblock_range,
)

__all__ = [
    "MAX_INDENT_LEVELS",
    "OVERDUE_SECTION_NUMBER",
    "PERIOD_SPECS",
    "PRIORITY_SECTION_NUMBER",
    "PROJECT_SECTION_NUMBER",
    "SORT_KEYS",
    "TAG_SECTION_NUMBER",
    "TIMEBLOCK_SECTION_NUMBER",
    "ActionDescriptor",
    "BuildContext",
    "Item",
    "PeriodSpec",
    "ProjectSource",
    "Section",
    "SectionBuilder",
    "StaticProjectSource",
    "build_overdue_sections",
    "build_period_sections",
    "build_priority_sections",
    "build_project_sections",
    "build_tag_section",
    "build_tag_sections",
    "build_timeblock_sections",
    "builder_for",
    "congrats_item",
    "current_timeblock",
    "default_builders",
    "demo_project_source",
    "demo_record_store",
    "is_current_timeblock",
    "item_from_paragraph",
    "item_type_for",
    "make_section_items",
    "overdue_date",
    "overdue_paragraphs",
    "period_builder",
    "period_paragraphs",
    "priority_paragraphs",
    "tag_paragraphs",
    "timeblock_range",
    "truncate",
    "with_note_context",
]

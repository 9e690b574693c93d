"""Calendar-period sections: today through this quarter.

Every period section runs the same algorithm, parameterized by period
length and offset from today:

1. Resolve the calendar note for the period.
2. Collect its open lines, and the open lines scheduled into it from other
   notes ("referenced" lines).
3. Emit one section with both, or two when referenced lines are shown
   separately.
"""

from dataclasses import dataclass
from typing import Final

from notedash.enums import NoteType, PeriodType, SectionCode
from notedash.sections._context import BuildContext, SectionBuilder
from notedash.sections._items import (
    congrats_item,
    make_section_items,
    with_note_context,
)
from notedash.sections._models import ActionDescriptor, Section
from notedash.sorting._dedupe import (
    eliminate_duplicate_synced_copies,
    remove_duplicates,
)
from notedash.store._models import Note, Paragraph
from notedash.utils._dates import calendar_filename, period_date_string, shift_period
from notedash.utils._strings import is_line_disallowed_by_terms


@dataclass(frozen=True, slots=True)
class PeriodSpec:
    """How one period section is built and labelled.

    Attributes:
        code: Section code.
        period: Calendar period length.
        offset: Periods from the current one (-1 = previous).
        number: Section number. Referenced lines use ``number + 1``.
        name: Display name.
        show_setting_name: ConfigMap flag gating the section.
    """

    code: SectionCode
    period: PeriodType
    offset: int
    number: int
    name: str
    show_setting_name: str

    @property
    def referenced_number(self) -> int:
        return self.number + 1


PERIOD_SPECS: Final[dict[SectionCode, PeriodSpec]] = {
    definition.code: definition
    for definition in (
        PeriodSpec(SectionCode.TODAY, PeriodType.DAY, 0, 0, "Today", ""),
        PeriodSpec(
            SectionCode.YESTERDAY,
            PeriodType.DAY,
            -1,
            2,
            "Yesterday",
            "showYesterdaySection",
        ),
        PeriodSpec(
            SectionCode.TOMORROW,
            PeriodType.DAY,
            1,
            4,
            "Tomorrow",
            "showTomorrowSection",
        ),
        PeriodSpec(
            SectionCode.THIS_WEEK, PeriodType.WEEK, 0, 6, "This Week", "showWeekSection"
        ),
        PeriodSpec(
            SectionCode.THIS_MONTH,
            PeriodType.MONTH,
            0,
            8,
            "This Month",
            "showMonthSection",
        ),
        PeriodSpec(
            SectionCode.THIS_QUARTER,
            PeriodType.QUARTER,
            0,
            10,
            "This Quarter",
            "showQuarterSection",
        ),
        PeriodSpec(
            SectionCode.LAST_WEEK,
            PeriodType.WEEK,
            -1,
            16,
            "Last Week",
            "showLastWeekSection",
        ),
    )
}


def _is_wanted(paragraph: Paragraph, ctx: BuildContext, terms: list[str]) -> bool:
    open_line = (
        paragraph.is_open_task
        if ctx.settings.ignore_checklist_items
        else paragraph.is_open
    )
    if not open_line or not paragraph.content.strip():
        return False
    return not is_line_disallowed_by_terms(paragraph.content, terms)


def period_paragraphs(
    ctx: BuildContext,
    definition: PeriodSpec,
) -> tuple[str, list[Paragraph], list[Paragraph]]:
    """Collect a period's own and referenced open lines.

    Returns:
        The calendar filename, the lines in the note (document order), and
        the lines scheduled into it from other notes.
    """
    day = shift_period(ctx.today, definition.period, definition.offset)
    filename = calendar_filename(day, definition.period, ctx.extension)
    terms = ctx.settings.ignore_terms
    store = ctx.record_store

    note = store.calendar_note(day, definition.period)
    own: list[Paragraph] = []
    if note is not None:
        own = [
            with_note_context(p, note)
            for p in note.paragraphs
            if _is_wanted(p, ctx, terms)
        ]

    target = note or Note(filename=filename, type=NoteType.CALENDAR)
    referenced = [
        p
        for p in store.referenced_paragraphs(target)
        if _is_wanted(p, ctx, terms)
        and ctx.is_allowed(p.filename, is_calendar=p.is_calendar)
    ]
    referenced = eliminate_duplicate_synced_copies(referenced)
    # A line in the note that is also scheduled to it appears once
    own_keys = {(p.content, p.filename) for p in own}
    referenced = [p for p in referenced if (p.content, p.filename) not in own_keys]
    referenced = remove_duplicates(referenced, ["content", "filename"])
    return filename, own, referenced


def _actions(
    ctx: BuildContext, definition: PeriodSpec, filename: str
) -> tuple[ActionDescriptor, ...]:
    day = shift_period(ctx.today, definition.period, definition.offset)
    next_filename = calendar_filename(
        shift_period(day, definition.period, 1), definition.period, ctx.extension
    )
    label = definition.name.lower()
    return (
        ActionDescriptor(
            action_name="addTask",
            action_param=filename,
            target_section_codes_to_refresh=(definition.code,),
            tooltip=f"Add a new task to {label}'s note",
        ),
        ActionDescriptor(
            action_name="addChecklist",
            action_param=filename,
            target_section_codes_to_refresh=(definition.code,),
            tooltip=f"Add a checklist item to {label}'s note",
        ),
        ActionDescriptor(
            action_name="addTask",
            action_param=next_filename,
            tooltip="Add a new task to the next note",
        ),
        ActionDescriptor(
            action_name="addChecklist",
            action_param=next_filename,
            tooltip="Add a checklist item to the next note",
        ),
    )


def build_period_sections(ctx: BuildContext, definition: PeriodSpec) -> list[Section]:
    """Build the section (or own and referenced sections) for one period."""
    filename, own, referenced = period_paragraphs(ctx, definition)
    day = shift_period(ctx.today, definition.period, definition.offset)
    date_label = (
        day.to_date_string()
        if definition.period is PeriodType.DAY
        else period_date_string(day, definition.period)
    )
    separate = ctx.settings.separate_section_for_referenced_notes

    main_paragraphs = own if separate else own + referenced
    items = make_section_items(main_paragraphs, str(definition.number))
    if not items and definition.code is SectionCode.TODAY:
        items = [congrats_item(str(definition.number))]

    sections = [
        Section(
            id=str(definition.number),
            section_code=definition.code,
            name=definition.name,
            items=tuple(items),
            total_count=len(items),
            generated_at=ctx.now,
            action_descriptors=_actions(ctx, definition, filename),
            description=f"{{count}} from {date_label}",
            section_filename=filename,
            show_setting_name=definition.show_setting_name,
        )
    ]
    if separate:
        ref_items = make_section_items(referenced, str(definition.referenced_number))
        sections.append(
            Section(
                id=str(definition.referenced_number),
                section_code=definition.code,
                name=f">{definition.name}",
                items=tuple(ref_items),
                total_count=len(ref_items),
                generated_at=ctx.now,
                is_referenced=True,
                description=f"{{count}} scheduled to {date_label}",
                section_filename=filename,
                show_setting_name=definition.show_setting_name,
            )
        )

    ctx.logger.debug(
        "period_section_built",
        section_code=definition.code.value,
        filename=filename,
        own=len(own),
        referenced=len(referenced),
    )
    return sections


def period_builder(code: SectionCode) -> SectionBuilder:
    """Return the builder for one period section code."""
    definition = PERIOD_SPECS[code]

    def build(ctx: BuildContext) -> list[Section]:
        return build_period_sections(ctx, definition)

    build.__name__ = f"build_{code.long_name}_sections"
    return build

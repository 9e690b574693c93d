"""Tag and mention sections, one per configured tag."""

from notedash.enums import SectionCode
from notedash.sections._context import BuildContext
from notedash.sections._items import (
    SORT_KEYS,
    make_section_items,
    truncate,
    with_note_context,
)
from notedash.sections._models import Section
from notedash.sorting._dedupe import (
    eliminate_duplicate_synced_copies,
    remove_duplicates,
)
from notedash.sorting._sort import sort_by_keys
from notedash.store._models import Paragraph
from notedash.utils._dates import filename_is_in_future, includes_scheduled_future_date
from notedash.utils._strings import is_line_disallowed_by_terms

TAG_SECTION_NUMBER = 12


def tag_paragraphs(ctx: BuildContext, tag: str) -> list[Paragraph]:
    """Collect the open lines carrying ``tag``, filtered and deduplicated.

    Exclusion terms apply except the tag itself, so a tag is never hidden
    from its own section. Lines scheduled after today (after tomorrow when
    the tomorrow section is shown) are left for the later section.
    """
    settings = ctx.settings
    terms = [term for term in settings.ignore_terms if term != tag]
    reference = ctx.today.add(days=1) if settings.show_tomorrow_section else ctx.today

    found: list[Paragraph] = []
    for note in ctx.record_store.notes_with_tag(tag):
        if not ctx.is_allowed(note.filename, is_calendar=note.is_calendar):
            continue
        for paragraph in note.paragraphs:
            if tag not in paragraph.content or not paragraph.content.strip():
                continue
            if settings.ignore_checklist_items:
                if not paragraph.is_open_task:
                    continue
            elif not paragraph.is_open:
                continue
            if is_line_disallowed_by_terms(paragraph.content, terms):
                continue
            if filename_is_in_future(paragraph.filename, reference):
                continue
            if includes_scheduled_future_date(paragraph.content, reference):
                continue
            found.append(with_note_context(paragraph, note))

    found = eliminate_duplicate_synced_copies(found)
    return remove_duplicates(found, ["content", "filename"])


def build_tag_section(ctx: BuildContext, tag: str, index: int) -> Section:
    """Build the section for one tag or mention."""
    settings = ctx.settings
    number = f"{TAG_SECTION_NUMBER}-{index}"
    order = settings.overdue_sort_order

    ordered = sort_by_keys(tag_paragraphs(ctx, tag), SORT_KEYS[order])
    shown, total = truncate(ordered, settings.max_items_to_show_in_section)
    items = make_section_items(shown, number, link_parents=False)

    ctx.logger.debug("tag_section_built", tag=tag, count=len(items), total=total)
    return Section(
        id=number,
        section_code=SectionCode.TAG,
        name=tag,
        items=tuple(items),
        total_count=total,
        generated_at=ctx.now,
        description=f"{{count}} item{{s}} ordered by {order.value}",
        show_setting_name=f"showTagSection_{tag}",
    )


def build_tag_sections(ctx: BuildContext) -> list[Section]:
    """Build one section per shown tag, numbered in order."""
    tags = [tag for tag in ctx.settings.tags if tag.startswith(("#", "@"))]
    shown = [tag for tag in tags if ctx.settings.is_tag_shown(tag)]
    return [build_tag_section(ctx, tag, index) for index, tag in enumerate(shown)]

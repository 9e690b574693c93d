"""Project-review section."""

from typing import Final

from notedash.enums import ItemType, SectionCode
from notedash.projects._review import next_projects_to_review
from notedash.sections._context import BuildContext
from notedash.sections._models import ActionDescriptor, Item, Section

PROJECT_SECTION_NUMBER: Final = "15"


def build_project_sections(ctx: BuildContext) -> list[Section]:
    """Build the queue of projects ready for review.

    Returns no section at all when review tracking is unavailable. Records
    are taken in cache order, limited to the allowed folders.
    """
    source = ctx.projects
    if source is None or not source.is_available:
        ctx.logger.debug("project_section_unavailable")
        return []

    records = [
        record
        for record in source.get_all()
        if ctx.allowed_folders is None or record.folder in ctx.allowed_folders
    ]
    store = ctx.record_store
    ready = next_projects_to_review(
        records,
        ctx.max_projects,
        exists=lambda filename: store.note_by_filename(filename) is not None,
        logger=ctx.logger,
    )

    items = tuple(
        Item(
            id=f"{PROJECT_SECTION_NUMBER}-{index}",
            item_type=ItemType.PROJECT,
            content=record.title,
            filename=record.filename,
            project=record,
        )
        for index, record in enumerate(ready)
    )
    ctx.logger.debug("project_section_built", count=len(items))
    return [
        Section(
            id=PROJECT_SECTION_NUMBER,
            section_code=SectionCode.PROJECT_REVIEW,
            name="Projects",
            items=items,
            total_count=len(items),
            generated_at=ctx.now,
            action_descriptors=(
                ActionDescriptor(
                    action_name="startReviews",
                    target_section_codes_to_refresh=(SectionCode.PROJECT_REVIEW,),
                    tooltip="Start reviewing your Project notes",
                ),
            ),
            description="{count} project{s} ready to review",
            show_setting_name="showProjectSection",
        )
    ]

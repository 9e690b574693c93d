# ruff: noqa: TC003  # datetime needed at runtime for pydantic fields
"""Renderer-ready section and item records.

Sections and items are immutable pydantic models. ``model_dump(by_alias=True)``
gives the camelCase shape the renderer consumes (``sectionCode``,
``itemType``, ``parentId``...).
"""

from datetime import datetime
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from notedash.enums import ItemType, SectionCode
from notedash.projects._models import ProjectRecord

_MODEL_CONFIG = ConfigDict(
    frozen=True,
    extra="ignore",
    alias_generator=to_camel,
    populate_by_name=True,
)


class ActionDescriptor(BaseModel):
    """Declarative hint for a renderer action. Carried, never executed.

    Attributes:
        action_name: What the renderer should do (``addTask``...).
        action_param: Argument for the action, usually a filename.
        target_section_codes_to_refresh: Sections to refresh afterwards.
        tooltip: Short description for the renderer.
    """

    model_config: ClassVar[ConfigDict] = _MODEL_CONFIG

    action_name: str
    action_param: str = ""
    target_section_codes_to_refresh: tuple[SectionCode, ...] = ()
    tooltip: str = ""


class Item(BaseModel):
    """One renderer-ready line.

    ``id`` is ``{sectionNumber}-{index}``. It is unique within its section
    only and changes between builds.
    """

    model_config: ClassVar[ConfigDict] = _MODEL_CONFIG

    id: str
    item_type: ItemType
    content: str = ""
    filename: str = ""
    parent_id: str = ""
    priority: int = 0
    changed_date: datetime | None = None
    note_title: str = ""
    indent_level: int = 0
    project: ProjectRecord | None = None
    updated: bool = False


class Section(BaseModel):
    """A named, ordered list of items from one source.

    Attributes:
        id: Section number (``0``, ``12-1``...).
        section_code: Source the section was built from.
        name: Display name.
        items: Items in display order.
        total_count: Number of items before truncation.
        generated_at: When the section was built.
        is_referenced: Holds items scheduled in from other notes.
        action_descriptors: Renderer actions offered for this section.
        description: Template using ``{count}`` and ``{totalCount}``.
        section_filename: Calendar note the section reads, if any.
        show_setting_name: ConfigMap flag that gates the section.
    """

    model_config: ClassVar[ConfigDict] = _MODEL_CONFIG

    id: str
    section_code: SectionCode
    name: str
    items: tuple[Item, ...] = ()
    total_count: int | None = None
    generated_at: datetime
    is_referenced: bool = False
    action_descriptors: tuple[ActionDescriptor, ...] = ()
    description: str = ""
    section_filename: str = ""
    show_setting_name: str = ""

    @model_validator(mode="after")
    def _check_total_count(self) -> Self:
        if self.total_count is not None and len(self.items) > self.total_count:
            msg = (
                f"Section {self.id} has {len(self.items)} items "
                f"but a total count of {self.total_count}"
            )
            raise ValueError(msg)
        return self

    @property
    def is_empty(self) -> bool:
        """Whether the section has no items."""
        return not self.items

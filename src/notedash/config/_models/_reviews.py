"""Project review configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from notedash.enums import DisplayFinished, DisplayOrder


class ReviewsConfig(BaseModel):
    """Project review section.

    Attributes:
        note_type_tags: Hashtags that mark a note as a reviewable project.
        folders_to_include: Folder terms to scan (empty means all).
        folders_to_ignore: Folder terms to skip.
        display_finished: How completed projects appear in the review list.
        display_only_due: Only list projects that are due for review.
        display_order: Primary sort key of the review list.
        display_grouped_by_folder: Sort by folder before the display order.
        max_projects_to_show: Upper bound for the review queue (0 = all).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    note_type_tags: list[str] = Field(default_factory=lambda: ["#project", "#area"])
    folders_to_include: list[str] = Field(default_factory=list)
    folders_to_ignore: list[str] = Field(
        default_factory=lambda: ["@Archive", "@Templates", "Saved Searches"]
    )
    display_finished: DisplayFinished = DisplayFinished.AT_END
    display_only_due: bool = False
    display_order: DisplayOrder = DisplayOrder.REVIEW
    display_grouped_by_folder: bool = True
    max_projects_to_show: int = Field(default=6, ge=0)

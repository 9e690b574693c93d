"""Project review records and the cache envelope."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from notedash.utils._folders import ROOT_FOLDER


class ProjectRecord(BaseModel):
    """Review state of one project note.

    Serialized with camelCase keys. Records are replaced whole, never
    patched field by field.

    Attributes:
        filename: Note filename. Unique within a cache.
        title: Note title.
        note_type_tag: The hashtag that made the note a project.
        folder: Folder the note lives in.
        next_review_days: Days until the next review (0 or less = due).
        due_days: Days until the project's due date, None if undated.
        is_completed: Completed or cancelled.
        is_paused: Paused.
        percent_complete: Share of tasks done, 0 to 100.
        review_interval: Review interval such as ``1w`` or ``2m``.
        last_progress_comment: Most recent progress note.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    filename: str
    title: str = ""
    note_type_tag: str = ""
    folder: str = ROOT_FOLDER
    next_review_days: int = 0
    due_days: int | None = None
    is_completed: bool = False
    is_paused: bool = False
    percent_complete: int = Field(default=0, ge=0, le=100)
    review_interval: str = ""
    last_progress_comment: str = ""

    @property
    def is_ready_for_review(self) -> bool:
        """Due for review and still active."""
        if self.is_completed or self.is_paused:
            return False
        return self.next_review_days <= 0


class ProjectCacheEnvelope(BaseModel):
    """The persisted project list.

    Attributes:
        generated_at: ISO 8601 time the list was generated.
        records: At most one record per filename, first occurrence kept.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    generated_at: str = ""
    records: list[ProjectRecord] = Field(default_factory=list)

    @field_validator("records")
    @classmethod
    def _unique_filenames(cls, records: list[ProjectRecord]) -> list[ProjectRecord]:
        seen: set[str] = set()
        unique: list[ProjectRecord] = []
        for record in records:
            if record.filename in seen:
                continue
            seen.add(record.filename)
            unique.append(record)
        return unique

"""Inputs shared by every section builder."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import pendulum

from notedash.config._models._dashboard import DashboardSettings
from notedash.projects._models import ProjectRecord
from notedash.store._protocol import RecordStore
from notedash.utils._folders import is_in_allowed_folders
from notedash.utils._logging import get_default_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from notedash.sections._models import Section


@runtime_checkable
class ProjectSource(Protocol):
    """Read access to project records. ProjectCache satisfies it."""

    @property
    def is_available(self) -> bool:
        """Whether review tracking is installed."""
        ...

    def get_all(self) -> list[ProjectRecord]:
        """Every project record, in cache order."""
        ...


@dataclass(frozen=True, slots=True)
class StaticProjectSource:
    """A fixed list of project records, used for demo data."""

    records: Sequence[ProjectRecord] = ()

    @property
    def is_available(self) -> bool:
        return True

    def get_all(self) -> list[ProjectRecord]:
        return list(self.records)


def _default_logger() -> "FilteringBoundLogger":  # noqa: UP037
    return get_default_logger()


@dataclass(frozen=True, slots=True)
class BuildContext:
    """A read-only snapshot handed to section builders.

    Attributes:
        settings: Typed view of the live ConfigMap.
        record_store: Source of notes and paragraphs.
        now: Current time in the dashboard timezone.
        allowed_folders: Folders items may come from. None allows all.
        projects: Project records for the review section.
        max_projects: Size of the review queue (0 = unlimited).
        extension: Calendar-note file extension.
        logger: Logger for builder diagnostics.
    """

    settings: DashboardSettings
    record_store: RecordStore
    now: pendulum.DateTime
    allowed_folders: frozenset[str] | None = None
    projects: ProjectSource | None = None
    max_projects: int = 6
    extension: str = "md"
    logger: "FilteringBoundLogger" = field(  # noqa: UP037
        default_factory=_default_logger
    )

    @property
    def today(self) -> pendulum.Date:
        """Current date in the dashboard timezone."""
        return self.now.date()

    def is_allowed(self, filename: str, *, is_calendar: bool = False) -> bool:
        """Whether a note's folder is allowed. Calendar notes always are."""
        if self.allowed_folders is None:
            return True
        return is_in_allowed_folders(
            filename, self.allowed_folders, is_calendar=is_calendar
        )


type SectionBuilder = Callable[[BuildContext], "list[Section]"]

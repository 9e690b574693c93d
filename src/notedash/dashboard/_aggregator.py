"""Section aggregation.

The Aggregator takes a snapshot of the live settings, resolves the folders
the active perspective allows, and runs the section builders it is asked
for. A builder that fails is logged and contributes nothing, so one broken
source never empties the whole dashboard.
"""

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Final

from notedash.config._live import SettingsSnapshot, SettingsStore
from notedash.config._models._config import Config
from notedash.enums import SectionCode
from notedash.exceptions import ConfigurationMissingError
from notedash.perspectives._filters import allowed_folders
from notedash.perspectives._store import PerspectiveStore
from notedash.projects._review import DEFAULT_PROJECTS_TO_REVIEW
from notedash.sections._context import BuildContext, ProjectSource, SectionBuilder
from notedash.sections._demo import demo_project_source, demo_record_store
from notedash.sections._models import Section
from notedash.sections._registry import default_builders
from notedash.store._memory import InMemoryRecordStore
from notedash.store._protocol import RecordStore
from notedash.utils._dates import now
from notedash.utils._logging import get_default_logger

from ._refresh import RefreshRequest

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

SECTION_ORDER: Final = (
    SectionCode.TODAY,
    SectionCode.TIMEBLOCK,
    SectionCode.YESTERDAY,
    SectionCode.TOMORROW,
    SectionCode.LAST_WEEK,
    SectionCode.THIS_WEEK,
    SectionCode.THIS_MONTH,
    SectionCode.THIS_QUARTER,
    SectionCode.PROJECT_REVIEW,
    SectionCode.TAG,
    SectionCode.OVERDUE,
    SectionCode.PRIORITY,
)

# Corpus-wide scans, deferred from a full refresh unless forced
SLOW_CODES: Final = frozenset(
    {
        SectionCode.TAG,
        SectionCode.OVERDUE,
        SectionCode.PRIORITY,
        SectionCode.PROJECT_REVIEW,
    }
)

# Rebuilt on every refresh, whatever was requested
ALWAYS_LIVE_CODES: Final = (SectionCode.TODAY, SectionCode.TAG)


def _in_display_order(codes: Iterable[SectionCode]) -> list[SectionCode]:
    wanted = set(codes)
    return [code for code in SECTION_ORDER if code in wanted]


def _is_kept(section: Section) -> bool:
    if not section.is_empty:
        return True
    return section.section_code is SectionCode.TODAY and not section.is_referenced


class Aggregator:
    """Runs section builders over a settings snapshot.

    Args:
        record_store: Source of notes and paragraphs.
        settings: The live dashboard settings.
        perspectives: Store whose active perspective limits the folders
            items may come from. None reads the folder lists from the live
            settings.
        projects: Project records for the review section, usually a
            ProjectCache. None leaves the section out.
        timezone: IANA timezone deciding what "today" is.
        extension: Calendar-note file extension.
        max_projects: Size of the review queue (0 = unlimited).
        builders: Builder per section code. Defaults to every builder.
        logger: Optional logger. Defaults to the package logger.
    """

    def __init__(
        self,
        record_store: RecordStore,
        settings: SettingsStore,
        *,
        perspectives: PerspectiveStore | None = None,
        projects: ProjectSource | None = None,
        timezone: str = "UTC",
        extension: str = "md",
        max_projects: int = DEFAULT_PROJECTS_TO_REVIEW,
        builders: Mapping[SectionCode, SectionBuilder] | None = None,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        self._record_store: RecordStore = record_store
        self._settings: SettingsStore = settings
        self._perspectives: PerspectiveStore | None = perspectives
        self._projects: ProjectSource | None = projects
        self._timezone: str = timezone
        self._extension: str = extension
        self._max_projects: int = max_projects
        self._builders: dict[SectionCode, SectionBuilder] = dict(
            builders if builders is not None else default_builders()
        )
        self._logger: FilteringBoundLogger = logger or get_default_logger()

    @classmethod
    def from_config(
        cls,
        config: Config,
        record_store: RecordStore,
        settings: SettingsStore,
        *,
        perspectives: PerspectiveStore | None = None,
        projects: ProjectSource | None = None,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> "Aggregator":
        """Create an aggregator using timezone and review limits from config."""
        return cls(
            record_store,
            settings,
            perspectives=perspectives,
            projects=projects,
            timezone=config.dashboard.timezone,
            extension=config.dashboard.default_file_extension,
            max_projects=config.reviews.max_projects_to_show,
            logger=logger,
        )

    # -------------------------------------------------------------------------
    # Context
    # -------------------------------------------------------------------------

    def build_context(self, *, use_demo_data: bool = False) -> BuildContext:
        """Snapshot everything the builders read.

        Raises:
            ConfigurationMissingError: If the live settings are empty.
        """
        snapshot = self._settings.snapshot()
        if not snapshot.values:
            msg = "No dashboard settings available"
            raise ConfigurationMissingError(msg)

        current = now(self._timezone)
        if use_demo_data:
            return BuildContext(
                settings=snapshot.settings,
                record_store=demo_record_store(current),
                now=current,
                projects=demo_project_source(),
                max_projects=self._max_projects,
                extension=self._extension,
                logger=self._logger,
            )

        return BuildContext(
            settings=snapshot.settings,
            record_store=self._record_store,
            now=current,
            allowed_folders=self._allowed_folders(snapshot),
            projects=self._projects,
            max_projects=self._max_projects,
            extension=self._extension,
            logger=self._logger,
        )

    def _allowed_folders(self, snapshot: SettingsSnapshot) -> frozenset[str]:
        all_folders = self._record_store.folders()
        if self._perspectives is not None:
            return frozenset(self._perspectives.allowed_folders(all_folders))
        return frozenset(allowed_folders(snapshot.values, all_folders))

    # -------------------------------------------------------------------------
    # Refresh
    # -------------------------------------------------------------------------

    def get_all_sections(
        self,
        *,
        use_demo_data: bool = False,
        force_load_all: bool = False,
    ) -> list[Section]:
        """Build every enabled section.

        Args:
            use_demo_data: Build from the demo corpus.
            force_load_all: Also run the slow corpus scans (tags, overdue,
                priority and project review). Without it they are left for
                a later partial refresh.

        Returns:
            Sections in display order.
        """
        codes = [
            code
            for code in SECTION_ORDER
            if force_load_all or code not in SLOW_CODES
        ]
        return self._run(codes, use_demo_data=use_demo_data)

    def get_some_sections(
        self,
        codes: Iterable[SectionCode | str],
        *,
        use_demo_data: bool = False,
    ) -> list[Section]:
        """Build only the requested sections, in display order.

        Sections whose show flag is off are still skipped. Unknown codes
        are logged and ignored.
        """
        wanted: list[SectionCode] = []
        for code in codes:
            try:
                wanted.append(SectionCode(code))
            except ValueError:
                self._logger.warning("section_code_unknown", section_code=str(code))
        return self._run(_in_display_order(wanted), use_demo_data=use_demo_data)

    def refresh(self, request: RefreshRequest) -> list[Section]:
        """Serve a refresh request.

        An empty request rebuilds everything. A partial request rebuilds the
        requested codes plus today and tag, which are always live: the
        caller merges the result into its retained view by section code.
        """
        if not request.is_partial:
            return self.get_all_sections(
                use_demo_data=request.use_demo_data,
                force_load_all=request.force_load_all,
            )
        # Today and tag sections are rebuilt on every partial refresh too
        codes = {*request.section_codes, *ALWAYS_LIVE_CODES}
        return self.get_some_sections(codes, use_demo_data=request.use_demo_data)

    def _run(
        self,
        codes: list[SectionCode],
        *,
        use_demo_data: bool,
    ) -> list[Section]:
        try:
            ctx = self.build_context(use_demo_data=use_demo_data)
        except ConfigurationMissingError as e:
            self._logger.warning("sections_not_built", error=str(e))
            return []
        except Exception as e:  # noqa: BLE001
            self._logger.warning(
                "sections_not_built", error=str(e), error_type=type(e).__name__
            )
            return []

        sections: list[Section] = []
        for code in codes:
            if not ctx.settings.is_section_shown(code):
                self._logger.debug("section_hidden", section_code=code.value)
                continue
            sections.extend(self._build(code, ctx))

        self._logger.debug(
            "sections_built",
            requested=[code.value for code in codes],
            sections=[section.id for section in sections],
            demo=use_demo_data,
        )
        return sections

    def _build(self, code: SectionCode, ctx: BuildContext) -> list[Section]:
        builder = self._builders.get(code)
        if builder is None:
            self._logger.debug("section_builder_missing", section_code=code.value)
            return []
        try:
            built = builder(ctx)
        except Exception as e:  # noqa: BLE001
            self._logger.warning(
                "section_builder_failed",
                section_code=code.value,
                error=str(e),
            )
            return []
        return [
            section for section in built if section is not None and _is_kept(section)
        ]


def demo_sections(
    settings: Mapping[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
    *,
    timezone: str = "UTC",
) -> list[Section]:
    """Every section, built from the demo corpus.

    Args:
        settings: ConfigMap to build with. Defaults to the default settings.
        timezone: IANA timezone deciding what "today" is.
    """
    aggregator = Aggregator(
        InMemoryRecordStore(),
        SettingsStore(defaults=settings),
        timezone=timezone,
    )
    return aggregator.get_all_sections(use_demo_data=True, force_load_all=True)

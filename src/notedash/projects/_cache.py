# pyright: reportAny=false
"""Time-boxed, file-backed cache of project review records.

The record list is persisted as a single JSON blob. The time it was
generated is kept separately in the state store (epoch milliseconds under
``projects.lastGenerationTime``), so staleness is decided without reading
the blob. The marker is only written after the blob lands and is removed
when a write fails, so the next read regenerates.

Reads and writes are serialized by a lock. Records are immutable and
updates replace them whole, so callers can keep the lists they are given.
"""

import threading
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Final

import pendulum
from pydantic import ValidationError

from notedash.config._models._config import Config
from notedash.config._models._reviews import ReviewsConfig
from notedash.exceptions import (
    PersistenceError,
    ProjectNotFoundError,
    SourceUnavailableError,
)
from notedash.projects._models import ProjectCacheEnvelope, ProjectRecord
from notedash.projects._tracker import ReviewTracker
from notedash.store._models import Note
from notedash.store._protocol import RecordStore
from notedash.utils._folders import folders_matching, folders_minus_exclusions
from notedash.utils._json import load_json_file, write_json_atomic
from notedash.utils._logging import get_default_logger
from notedash.utils._paths import get_project_cache_file
from notedash.utils._state_store import StateStore

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

MARKER_KEY: Final = "projects.lastGenerationTime"
DEFAULT_MAX_AGE_HOURS: Final = 1.0
_MS_PER_HOUR: Final = 3_600_000


def _now_ms() -> int:
    return int(pendulum.now("UTC").timestamp() * 1000)


class ProjectCache:
    """Cache of ProjectRecords with full and single-record update paths.

    Args:
        record_store: Source of project notes.
        state_store: Holds the generation marker.
        tracker: Builds records from notes. None means review tracking is
            not installed and the cache stays empty.
        path: Blob location. Defaults to the data directory.
        reviews: Folder and tag selection for the full scan.
        max_age_hours: Age after which ``get_all`` regenerates.
        logger: Optional logger. Defaults to the package logger.

    Example:
        >>> cache = ProjectCache(store, MemoryStateStore(), tracker=tracker)
        >>> [r.filename for r in cache.get_all()]
        ['Projects/Garden.md']
    """

    def __init__(
        self,
        record_store: RecordStore,
        state_store: StateStore,
        *,
        tracker: ReviewTracker | None = None,
        path: Path | None = None,
        reviews: ReviewsConfig | None = None,
        max_age_hours: float = DEFAULT_MAX_AGE_HOURS,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        self._record_store: RecordStore = record_store
        self._state_store: StateStore = state_store
        self._tracker: ReviewTracker | None = tracker
        self._path: Path = path or get_project_cache_file()
        self._reviews: ReviewsConfig = reviews or ReviewsConfig()
        self._max_age_ms: int = int(max_age_hours * _MS_PER_HOUR)
        self._logger: FilteringBoundLogger = logger or get_default_logger()
        self._lock: threading.Lock = threading.Lock()
        self._records: list[ProjectRecord] | None = None
        self._loaded_marker: int | None = None

    @classmethod
    def from_config(
        cls,
        config: Config,
        record_store: RecordStore,
        state_store: StateStore,
        *,
        tracker: ReviewTracker | None = None,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> "ProjectCache":  # noqa: UP037
        """Build a cache from the ``cache`` and ``reviews`` config sections."""
        return cls(
            record_store,
            state_store,
            tracker=tracker,
            path=Path(config.cache.path) if config.cache.path else None,
            reviews=config.reviews,
            max_age_hours=config.cache.max_age_hours,
            logger=logger,
        )

    @property
    def path(self) -> Path:
        """Location of the persisted blob."""
        return self._path

    @property
    def is_available(self) -> bool:
        """Whether a review tracker is installed and ready."""
        return self._tracker is not None and self._tracker.is_available()

    # -------------------------------------------------------------------------
    # Marker
    # -------------------------------------------------------------------------

    def generated_at(self) -> int | None:
        """Epoch milliseconds of the last successful generation, or None."""
        try:
            entry = self._state_store.get_entry(MARKER_KEY)
        except PersistenceError as e:
            self._logger.warning("project_marker_read_failed", error=str(e))
            return None
        if entry is None:
            return None
        value = entry.value
        if isinstance(value, bool) or not isinstance(value, int | float):
            return None
        return int(value)

    def is_stale(self) -> bool:
        """Whether the cache is missing or older than its maximum age."""
        marker = self.generated_at()
        return marker is None or _now_ms() - marker > self._max_age_ms

    def invalidate(self) -> None:
        """Forget the marker so the next ``get_all`` regenerates."""
        with self._lock:
            self._records = None
            self._loaded_marker = None
            self._clear_marker()

    def _clear_marker(self) -> None:
        try:
            _ = self._state_store.delete(MARKER_KEY)
        except PersistenceError as e:
            self._logger.warning("project_marker_delete_failed", error=str(e))

    def _write_marker(self) -> int | None:
        marker = _now_ms()
        try:
            _ = self._state_store.set(MARKER_KEY, marker, author="projects")
        except PersistenceError as e:
            self._logger.warning("project_marker_write_failed", error=str(e))
            return None
        return marker

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def get_all(self) -> list[ProjectRecord]:
        """Return every cached record, regenerating first when stale.

        An empty list after a read failure is not proof that there are no
        projects. Callers should retry later.
        """
        with self._lock:
            marker = self.generated_at()
            if marker is None or _now_ms() - marker > self._max_age_ms:
                self._logger.debug("project_cache_stale", generated_at=marker)
                return list(self._regenerate())

            if self._records is not None and self._loaded_marker == marker:
                return list(self._records)

            try:
                loaded = self._read_blob()
            except PersistenceError as e:
                self._logger.warning(
                    "project_cache_read_failed", path=str(self._path), error=str(e)
                )
                return []
            if loaded is None:
                return list(self._regenerate())

            self._records = loaded
            self._loaded_marker = marker
            return list(loaded)

    def get_one(self, filename: str) -> ProjectRecord | None:
        """Look up one record, or None if it is not cached."""
        return next((r for r in self.get_all() if r.filename == filename), None)

    def require_one(self, filename: str) -> ProjectRecord:
        """Look up one record.

        Raises:
            ProjectNotFoundError: If the filename is not cached.
        """
        record = self.get_one(filename)
        if record is None:
            msg = f"No project record for {filename!r}"
            raise ProjectNotFoundError(msg, filename=filename)
        return record

    def _read_blob(self) -> list[ProjectRecord] | None:
        if not self._path.exists():
            self._logger.debug("project_cache_missing", path=str(self._path))
            return None
        data = load_json_file(self._path)
        payload = {"records": data} if isinstance(data, list) else data
        if payload is None:
            self._logger.warning("project_cache_corrupt", path=str(self._path))
            return None
        try:
            return ProjectCacheEnvelope.model_validate(payload).records
        except ValidationError as e:
            self._logger.warning(
                "project_cache_invalid", path=str(self._path), errors=e.error_count()
            )
            return None

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def regenerate_all(self) -> list[ProjectRecord]:
        """Rebuild every record from the record store and persist it.

        If the blob cannot be written, the new records are still returned
        and the marker is removed, so the next read regenerates again.
        """
        with self._lock:
            return list(self._regenerate())

    def update_one(
        self,
        filename: str,
        *,
        deleted: bool = False,
        record: ProjectRecord | None = None,
    ) -> list[ProjectRecord]:
        """Replace or remove the record for one note.

        Every other record is kept as the same object. An unknown filename
        falls back to a full regeneration.

        Args:
            filename: Note whose record changed.
            deleted: Remove the record instead of replacing it.
            record: The replacement. When None the tracker rebuilds it from
                the note.

        Returns:
            The records after the update.
        """
        with self._lock:
            current = self._current_records()
            index = next(
                (i for i, r in enumerate(current) if r.filename == filename), None
            )
            if index is None:
                self._logger.info("project_update_unknown", filename=filename)
                return list(self._regenerate())

            updated = list(current)
            if deleted:
                del updated[index]
            else:
                replacement = record or self._rebuild(filename, current[index])
                if replacement is None:
                    return list(current)
                updated[index] = replacement

            self._store(updated)
            self._logger.debug("project_updated", filename=filename, deleted=deleted)
            return list(updated)

    def _current_records(self) -> list[ProjectRecord]:
        if self._records is not None:
            return self._records
        try:
            loaded = self._read_blob()
        except PersistenceError as e:
            self._logger.warning("project_cache_read_failed", error=str(e))
            loaded = None
        if loaded is None:
            return self._regenerate()
        self._records = loaded
        self._loaded_marker = self.generated_at()
        return loaded

    def _rebuild(self, filename: str, previous: ProjectRecord) -> ProjectRecord | None:
        tracker = self._tracker
        note = self._record_store.note_by_filename(filename)
        if tracker is None or note is None:
            self._logger.warning("project_rebuild_skipped", filename=filename)
            return None
        try:
            return tracker.make_project(note, previous.note_type_tag)
        except Exception:
            self._logger.exception("project_rebuild_failed", filename=filename)
            return None

    def _regenerate(self) -> list[ProjectRecord]:
        try:
            tracker = self._require_tracker()
        except SourceUnavailableError as e:
            self._logger.info("project_cache_unavailable", source=e.source)
            return []

        records: list[ProjectRecord] = []
        seen: set[str] = set()
        for folder, tag, note in self._matching_notes():
            if note.filename in seen:
                continue
            try:
                record = tracker.make_project(note, tag)
            except Exception:
                self._logger.exception(
                    "project_build_failed", filename=note.filename, tag=tag
                )
                continue
            seen.add(note.filename)
            records.append(record)
            self._logger.debug("project_found", filename=note.filename, folder=folder)

        self._store(records)
        self._logger.info("project_cache_regenerated", count=len(records))
        return records

    def _require_tracker(self) -> ReviewTracker:
        if self._tracker is None or not self._tracker.is_available():
            msg = "No review tracker is available"
            raise SourceUnavailableError(msg, source="reviews")
        return self._tracker

    def _matching_notes(self) -> Iterator[tuple[str, str, Note]]:
        reviews = self._reviews
        all_folders = self._record_store.folders()
        if reviews.folders_to_include:
            folders = folders_matching(all_folders, reviews.folders_to_include)
        else:
            folders = folders_minus_exclusions(all_folders, reviews.folders_to_ignore)
        ignored = [f"{term}/" for term in reviews.folders_to_ignore]

        for folder in folders:
            notes = self._record_store.project_notes(folder)
            for tag in reviews.note_type_tags:
                for note in notes:
                    if not note.mentions_tag(tag):
                        continue
                    if any(term in note.filename for term in ignored):
                        continue
                    yield folder, tag, note

    def _store(self, records: list[ProjectRecord]) -> None:
        self._records = records
        envelope = ProjectCacheEnvelope(
            generated_at=pendulum.now("UTC").to_iso8601_string(),
            records=records,
        )
        try:
            write_json_atomic(
                self._path, envelope.model_dump(mode="json", by_alias=True)
            )
        except PersistenceError as e:
            self._logger.warning(
                "project_cache_write_failed", path=str(self._path), error=str(e)
            )
            # An older marker would vouch for the old blob
            self._loaded_marker = None
            self._clear_marker()
            return
        self._loaded_marker = self._write_marker()

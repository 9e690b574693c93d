# pyright: reportAny=false, reportExplicitAny=false
"""Named perspectives over the live dashboard settings.

A perspective is a saved ConfigMap. Switching copies it into the live
settings; saving copies the live settings back. While a named perspective
is active, every user change marks it modified. While the default ``-`` is
active, user changes are saved into it straight away, so switching back to
``-`` restores the last unnamed state.

The perspective collection is persisted as one JSON list under
``perspectiveSettings`` with a compare-and-set on the stored version.
Changes the store makes to the live settings use internal reasons (leading
``_``), which its own listener ignores.
"""

import threading
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Final

from pydantic import ValidationError
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
)

from notedash.config._live import (
    SettingsChange,
    SettingsStore,
    is_internal_reason,
)
from notedash.config._loader import copy_value
from notedash.exceptions import (
    DuplicatePerspectiveError,
    PersistenceError,
    PerspectiveNameError,
    PerspectiveNotFoundError,
    StaleWriteError,
)
from notedash.perspectives._filters import (
    allowed_folders,
    clean_snapshot,
    is_transient_key,
)
from notedash.perspectives._models import (
    DEFAULT_PERSPECTIVE_NAME,
    DEFAULT_PERSPECTIVES,
    MODIFIED_MARKER,
    PerspectiveDef,
)
from notedash.utils._json import dump_json, load_json
from notedash.utils._logging import get_default_logger
from notedash.utils._state_store import StateStore

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

PERSPECTIVES_KEY: Final = "perspectiveSettings"
ACTIVE_KEY: Final = "activePerspectiveName"
CONFLICT_RETRIES: Final = 3

type ConfirmSave = Callable[[str], bool]
type Mutation = Callable[[list[PerspectiveDef]], list[PerspectiveDef]]
type LiveUpdate = Callable[[dict[str, Any]], dict[str, Any]]


def validate_new_name(name: str) -> str:
    """Check a name for a new perspective.

    Returns:
        The name, stripped of surrounding whitespace.

    Raises:
        PerspectiveNameError: If the name is empty, the default name, or
            ends with the modification marker.
    """
    stripped = name.strip()
    if not stripped:
        msg = "Perspective name cannot be empty"
        raise PerspectiveNameError(msg, name=name)
    if stripped == DEFAULT_PERSPECTIVE_NAME:
        msg = f"Cannot use {DEFAULT_PERSPECTIVE_NAME!r}, the default perspective name"
        raise PerspectiveNameError(msg, name=name)
    if stripped.endswith(MODIFIED_MARKER):
        msg = f"Perspective name cannot end with {MODIFIED_MARKER!r}"
        raise PerspectiveNameError(msg, name=name)
    return stripped


class PerspectiveStore:
    """CRUD and switching over perspective definitions.

    Args:
        settings: The live settings the perspectives apply to.
        state_store: Where the collection is persisted. None keeps it in
            memory only.
        defaults: Definitions seeded when nothing is persisted.
        confirm_save_before_switch: Called with the active name when
            switching away from a modified perspective. Returning True
            saves it first.
        logger: Optional logger. Defaults to the package logger.
    """

    def __init__(
        self,
        settings: SettingsStore,
        state_store: StateStore | None = None,
        *,
        defaults: Sequence[PerspectiveDef] = DEFAULT_PERSPECTIVES,
        confirm_save_before_switch: ConfirmSave | None = None,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        self._settings: SettingsStore = settings
        self._state_store: StateStore | None = state_store
        self._confirm: ConfirmSave | None = confirm_save_before_switch
        self._logger: FilteringBoundLogger = logger or get_default_logger()
        self._lock: threading.RLock = threading.RLock()
        self._version: int = 0
        self._defs: list[PerspectiveDef] = self._load(defaults)
        self._unsubscribe: Callable[[], None] = settings.subscribe(
            self._on_settings_changed
        )

    def close(self) -> None:
        """Stop tracking changes to the live settings."""
        self._unsubscribe()

    # -------------------------------------------------------------------------
    # Loading and persistence
    # -------------------------------------------------------------------------

    def _load(self, defaults: Sequence[PerspectiveDef]) -> list[PerspectiveDef]:
        loaded = self._read_persisted()
        return _with_default_first(loaded if loaded is not None else defaults)

    def _read_persisted(self) -> list[PerspectiveDef] | None:
        if self._state_store is None:
            return None
        try:
            entry = self._state_store.get_entry(PERSPECTIVES_KEY)
        except PersistenceError as e:
            self._logger.warning("perspectives_load_failed", error=str(e))
            return None
        if entry is None:
            self._version = 0
            return None
        self._version = entry.version
        return self._parse(entry.value)

    def _reload(self) -> None:
        loaded = self._read_persisted()
        if loaded is not None:
            self._defs = _with_default_first(loaded)
        self._logger.debug("perspectives_reloaded", version=self._version)

    def _parse(self, raw: object) -> list[PerspectiveDef] | None:
        data = load_json(raw) if isinstance(raw, str | bytes) else None
        if not isinstance(data, list):
            self._logger.warning("perspectives_blob_invalid")
            return None
        defs: list[PerspectiveDef] = []
        for item in data:
            try:
                defs.append(PerspectiveDef.model_validate(item))
            except ValidationError as e:
                self._logger.warning("perspective_invalid", errors=e.error_count())
        return defs

    def _commit(self, mutate: Mutation, reason: str) -> list[PerspectiveDef]:
        """Apply ``mutate`` to a copy of the collection, persist it, adopt it.

        On a version conflict the persisted collection is reloaded and
        ``mutate`` runs again against it.

        Raises:
            StaleWriteError: If the conflict persists after every retry. The
                in-memory collection then matches the persisted one.
        """
        for attempt in _on_conflict(lambda _state: self._reload()):
            with attempt:
                defs = mutate(list(self._defs))
                self._persist(defs, reason)
                self._defs = defs
        return self._defs

    def _persist(self, defs: list[PerspectiveDef], reason: str) -> None:
        if self._state_store is None:
            return
        payload = [d.model_dump(mode="json", by_alias=True) for d in defs]
        try:
            self._version = self._state_store.compare_and_set(
                PERSPECTIVES_KEY, dump_json(payload), self._version, author=reason
            )
        except StaleWriteError:
            self._logger.warning(
                "perspectives_persist_conflict",
                expected_version=self._version,
                reason=reason,
            )
            raise
        except PersistenceError as e:
            # Keep the in-memory change; the next write retries persistence
            self._logger.warning("perspectives_persist_failed", error=str(e))

    def _write_live(self, build: LiveUpdate, reason: str) -> None:
        for attempt in _on_conflict(lambda _state: self._settings.reload()):
            with attempt:
                values = build(self._settings.snapshot().to_dict())
                _ = self._settings.replace(values, reason=reason)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def active_name(self) -> str:
        """Name of the active perspective, ``-`` if unknown."""
        name = self._settings.get(ACTIVE_KEY, DEFAULT_PERSPECTIVE_NAME)
        with self._lock:
            if isinstance(name, str) and self._find(name) is not None:
                return name
        return DEFAULT_PERSPECTIVE_NAME

    def definitions(self) -> tuple[PerspectiveDef, ...]:
        """All definitions, default first."""
        with self._lock:
            return tuple(self._defs)

    def names(self) -> list[str]:
        """Stored names, default first."""
        return [d.name for d in self.definitions()]

    def list_names(self) -> list[str]:
        """Display names: modified perspectives carry a trailing ``*``.

        The default is always first and never marked.
        """
        return [d.display_name for d in self.definitions()]

    def get(self, name: str) -> PerspectiveDef | None:
        """Look up a definition by stored name."""
        with self._lock:
            return self._find(name)

    def is_modified(self, name: str) -> bool:
        """Whether a perspective has unsaved changes. Always False for ``-``."""
        definition = self.get(name)
        return definition is not None and definition.display_name != definition.name

    def allowed_folders(self, all_folders: Iterable[str]) -> list[str]:
        """Folders allowed by the active perspective.

        Keys the perspective's snapshot does not set are read from the live
        settings.
        """
        live = self._settings.snapshot().to_dict()
        definition = self.get(self.active_name)
        snapshot = definition.settings_snapshot if definition else {}
        return allowed_folders({**live, **snapshot}, all_folders)

    def _find(self, name: str) -> PerspectiveDef | None:
        return _find_in(self._defs, name)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def switch_to(self, name: str) -> PerspectiveDef:
        """Make a perspective active.

        Unknown names fall back to the default. The target's snapshot is
        copied over the live settings.

        Returns:
            The definition that became active.

        Raises:
            StaleWriteError: If the live settings keep changing underneath
                every retry.
        """
        with self._lock:
            target = self._find(name)
            if target is None:
                self._logger.warning("perspective_not_found", name=name)
                target = self._defs[0]

            current = self.active_name
            current_def = self._find(current)
            if (
                self._confirm is not None
                and current != target.name
                and current_def is not None
                and self.is_modified(current)
                and self._confirm(current)
            ):
                _ = self._save_active(current_def)

            snapshot = copy_value(target.settings_snapshot)
            self._write_live(
                lambda values: {**values, **snapshot, ACTIVE_KEY: target.name},
                reason=f"_switchTo({target.name})",
            )
            self._logger.info(
                "perspective_switched", name=target.name, previous=current
            )
            return target

    def add(
        self,
        name: str,
        base_snapshot: Mapping[str, Any] | None = None,
    ) -> PerspectiveDef:
        """Create a perspective and make it active.

        Args:
            name: New, unique name.
            base_snapshot: Settings to start from. Defaults to the live
                settings.

        Raises:
            PerspectiveNameError: If the name is not allowed.
            DuplicatePerspectiveError: If the name is already taken.
            StaleWriteError: If the collection keeps changing underneath
                every retry. Nothing is added then.
        """
        with self._lock:
            clean_name = validate_new_name(name)
            base = (
                base_snapshot
                if base_snapshot is not None
                else self._settings.snapshot().values
            )
            definition = PerspectiveDef(
                name=clean_name, settings_snapshot=copy_value(clean_snapshot(base))
            )

            def append(defs: list[PerspectiveDef]) -> list[PerspectiveDef]:
                if _find_in(defs, clean_name) is not None:
                    msg = f"Perspective {clean_name!r} already exists"
                    raise DuplicatePerspectiveError(msg, name=clean_name)
                return [*defs, definition]

            _ = self._commit(append, f"_add({clean_name})")
            self._write_live(
                lambda values: {**values, ACTIVE_KEY: clean_name},
                reason=f"_add({clean_name})",
            )
            self._logger.info("perspective_added", name=clean_name)
            return definition

    def save(self) -> bool:
        """Save the live settings into the active perspective.

        Returns:
            True if saved. The default perspective and unmodified
            perspectives are left alone.
        """
        with self._lock:
            name = self.active_name
            definition = self._find(name)
            if definition is None or definition.is_default:
                self._logger.warning("perspective_save_skipped", name=name)
                return False
            if not definition.is_modified:
                self._logger.warning("perspective_not_modified", name=name)
                return False
            return self._save_active(definition)

    def _save_active(self, definition: PerspectiveDef) -> bool:
        snapshot = copy_value(clean_snapshot(self._settings.snapshot().values))
        saved = definition.model_copy(
            update={"settings_snapshot": snapshot, "is_modified": False}
        )
        defs = self._commit(
            lambda current: _replaced(current, saved), f"_save({definition.name})"
        )
        if _find_in(defs, definition.name) is None:
            self._logger.warning("perspective_save_lost", name=definition.name)
            return False
        self._logger.info("perspective_saved", name=definition.name)
        return True

    def delete(self, name: str) -> None:
        """Delete a named perspective.

        Deleting ``-`` does nothing. Deleting the active perspective first
        switches to ``-``.

        Raises:
            PerspectiveNotFoundError: If no perspective has this name.
        """
        with self._lock:
            if name == DEFAULT_PERSPECTIVE_NAME:
                self._logger.warning("perspective_delete_default")
                return
            if self._find(name) is None:
                msg = f"No perspective named {name!r}"
                raise PerspectiveNotFoundError(msg, name=name)
            if self.active_name == name:
                _ = self._switch_to_default()
            _ = self._commit(
                lambda defs: [d for d in defs if d.name != name], f"_delete({name})"
            )
            self._logger.info("perspective_deleted", name=name)

    def delete_all_named(self) -> None:
        """Delete every perspective except ``-`` and switch to ``-``."""
        with self._lock:
            _ = self._switch_to_default()
            _ = self._commit(
                lambda defs: [d for d in defs if d.is_default], "_deleteAll"
            )
            self._logger.info("perspectives_deleted")

    def _switch_to_default(self) -> PerspectiveDef:
        confirm, self._confirm = self._confirm, None
        try:
            return self.switch_to(DEFAULT_PERSPECTIVE_NAME)
        finally:
            self._confirm = confirm

    def update_settings(
        self,
        changes: Mapping[str, Any],
        *,
        reason: str = "settingsChanged",
    ) -> None:
        """Change live settings as a user edit."""
        _ = self._settings.update(changes, reason=reason)

    # -------------------------------------------------------------------------
    # Modification tracking
    # -------------------------------------------------------------------------

    def _on_settings_changed(self, change: SettingsChange) -> None:
        if is_internal_reason(change.reason):
            return
        if all(is_transient_key(key) for key in change.changed_keys):
            return

        name = change.snapshot.get(ACTIVE_KEY, DEFAULT_PERSPECTIVE_NAME)
        if not isinstance(name, str):
            return
        default_snapshot = clean_snapshot(change.snapshot.to_dict())

        def track(defs: list[PerspectiveDef]) -> list[PerspectiveDef]:
            definition = _find_in(defs, name)
            if definition is None or (
                definition.is_modified and not definition.is_default
            ):
                return defs
            if definition.is_default:
                update: dict[str, Any] = {"settings_snapshot": default_snapshot}
            else:
                update = {"is_modified": True}
            return _replaced(defs, definition.model_copy(update=update))

        with self._lock:
            if track(list(self._defs)) == self._defs:
                return
            try:
                defs = self._commit(track, "_settingsChanged")
            except StaleWriteError:
                self._logger.warning("perspective_tracking_conflict", name=name)
                return
            tracked = _find_in(defs, name)
            self._logger.debug(
                "perspective_tracked",
                name=name,
                modified=tracked is not None and tracked.is_modified,
            )


def _on_conflict(refresh: Callable[[RetryCallState], object]) -> Retrying:
    """Retry a compare-and-set write, calling ``refresh`` after each conflict.

    ``refresh`` also runs after the last attempt, so a caller that gets the
    StaleWriteError already holds the persisted state.
    """
    return Retrying(
        retry=retry_if_exception_type(StaleWriteError),
        stop=stop_after_attempt(CONFLICT_RETRIES),
        after=refresh,
        reraise=True,
    )


def _find_in(defs: Sequence[PerspectiveDef], name: str) -> PerspectiveDef | None:
    return next((d for d in defs if d.name == name), None)


def _replaced(
    defs: list[PerspectiveDef], definition: PerspectiveDef
) -> list[PerspectiveDef]:
    return [definition if d.name == definition.name else d for d in defs]


def _with_default_first(defs: Sequence[PerspectiveDef]) -> list[PerspectiveDef]:
    seen: set[str] = set()
    unique: list[PerspectiveDef] = []
    for definition in defs:
        if definition.name in seen:
            continue
        seen.add(definition.name)
        unique.append(definition)
    default = next((d for d in unique if d.is_default), None)
    others = [d for d in unique if not d.is_default]
    return [default or PerspectiveDef(name=DEFAULT_PERSPECTIVE_NAME), *others]

# pyright: reportAny=false, reportExplicitAny=false
"""Live dashboard settings with generation tracking.

The live ConfigMap is shared by the aggregator, the perspective store and
the renderer. Every accepted change increments a monotonic generation
counter, so a reader can tell whether the snapshot it holds is current and
a writer can refuse to overwrite a change it has not seen.

Writes are serialized by a lock and persisted with a compare-and-set on the
state store version, so a writer in another process cannot be silently
overwritten either.
"""

import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from notedash.config._defaults import DEFAULT_DASHBOARD_SETTINGS
from notedash.config._loader import copy_value
from notedash.config._models._dashboard import DashboardSettings
from notedash.exceptions import PersistenceError, StaleWriteError
from notedash.utils._json import dump_json, load_json
from notedash.utils._logging import get_default_logger
from notedash.utils._state_store import StateStore

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

SETTINGS_KEY: Final = "dashboardSettings"
LAST_CHANGE_KEY: Final = "lastChange"

STRUCTURAL_KEYS: Final = frozenset(
    {
        "activePerspectiveName",
        "includedFolders",
        "excludedFolders",
        "tagsToShow",
        "ignoreItemsWithTerms",
        "overdueSortOrder",
        "displayFinished",
        "displayOnlyDue",
        "maxItemsToShowInSection",
        "separateSectionForReferencedNotes",
    }
)

type SettingsListener = Callable[["SettingsChange"], None]


def is_structural_key(key: str) -> bool:
    """Whether changing ``key`` changes which sections or items are shown."""
    return key in STRUCTURAL_KEYS or (key.startswith("show") and "Section" in key)


def is_internal_reason(reason: str) -> bool:
    """Whether a change reason marks an internal (non-user) change."""
    return reason.startswith("_")


@dataclass(frozen=True, slots=True)
class SettingsSnapshot:
    """An immutable copy of the live ConfigMap at one generation.

    Attributes:
        values: Read-only view of the ConfigMap.
        generation: Generation the values were taken at.
    """

    values: Mapping[str, Any]
    generation: int

    def get(self, key: str, default: Any = None) -> Any:
        """Read one ConfigMap value."""
        return self.values.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable deep copy of the values."""
        return copy_value(dict(self.values))

    @property
    def settings(self) -> DashboardSettings:
        """Typed view of the values."""
        return DashboardSettings.from_config_map(self.values)


@dataclass(frozen=True, slots=True)
class SettingsChange:
    """Notification sent to subscribers after an accepted change.

    Attributes:
        snapshot: The settings after the change.
        reason: Why the change was made. A leading ``_`` marks an internal
            change that should not count as a user modification.
        changed_keys: Keys whose values differ from the previous generation.
        structural: Whether any structural key changed.
    """

    snapshot: SettingsSnapshot
    reason: str
    changed_keys: frozenset[str] = field(default_factory=frozenset)
    structural: bool = False

    @property
    def internal(self) -> bool:
        """Whether this change was made internally rather than by the user."""
        return is_internal_reason(self.reason)


def _freeze(values: dict[str, Any], generation: int) -> SettingsSnapshot:
    return SettingsSnapshot(
        values=MappingProxyType(copy_value(values)),
        generation=generation,
    )


def _changed_keys(old: Mapping[str, Any], new: Mapping[str, Any]) -> frozenset[str]:
    keys = (old.keys() | new.keys()) - {LAST_CHANGE_KEY}
    return frozenset(key for key in keys if old.get(key) != new.get(key))


class SettingsStore:
    """Owner of the live dashboard ConfigMap.

    Args:
        state_store: Where the ConfigMap is persisted. None keeps it in
            memory only.
        defaults: Values used when nothing has been persisted yet.
        logger: Optional logger. Defaults to the package logger.
    """

    def __init__(
        self,
        state_store: StateStore | None = None,
        *,
        defaults: Mapping[str, Any] | None = None,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        self._state_store: StateStore | None = state_store
        self._logger: FilteringBoundLogger = logger or get_default_logger()
        self._lock: threading.Lock = threading.Lock()
        self._listeners: list[SettingsListener] = []
        self._generation: int = 0
        self._version: int = 0

        initial = defaults if defaults is not None else DEFAULT_DASHBOARD_SETTINGS
        base = copy_value(dict(initial))
        self._values: dict[str, Any] = self._read_persisted(base)

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def _read_persisted(self, base: dict[str, Any]) -> dict[str, Any]:
        if self._state_store is None:
            return base
        try:
            entry = self._state_store.get_entry(SETTINGS_KEY)
        except PersistenceError as e:
            self._logger.warning("settings_load_failed", error=str(e))
            return base
        if entry is None:
            return base

        self._version = entry.version
        raw = entry.value
        loaded = load_json(raw) if isinstance(raw, str | bytes) else None
        if not isinstance(loaded, dict):
            self._logger.warning("settings_blob_invalid", version=entry.version)
            return base
        return {**base, **loaded}

    @property
    def generation(self) -> int:
        """Current generation. Increases by one per accepted change."""
        return self._generation

    def snapshot(self) -> SettingsSnapshot:
        """Return an immutable copy of the current settings."""
        with self._lock:
            return _freeze(self._values, self._generation)

    def get(self, key: str, default: Any = None) -> Any:
        """Read one value from the live settings."""
        with self._lock:
            return copy_value(self._values.get(key, default))

    def settings(self) -> DashboardSettings:
        """Typed view of the current settings."""
        return self.snapshot().settings

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def update(
        self,
        changes: Mapping[str, Any],
        *,
        reason: str,
        expected_generation: int | None = None,
    ) -> SettingsSnapshot:
        """Merge ``changes`` into the live settings.

        Args:
            changes: Keys to set.
            reason: Why the change is made, recorded as ``lastChange``.
            expected_generation: Generation the caller based the change on.
                None skips the check.

        Returns:
            The snapshot after the change.

        Raises:
            StaleWriteError: If the generation or the persisted version moved.
        """
        return self._commit(
            lambda current: {**current, **copy_value(dict(changes))},
            reason=reason,
            expected_generation=expected_generation,
        )

    def replace(
        self,
        values: Mapping[str, Any],
        *,
        reason: str,
        expected_generation: int | None = None,
    ) -> SettingsSnapshot:
        """Replace the live settings wholesale.

        Raises:
            StaleWriteError: If the generation or the persisted version moved.
        """
        return self._commit(
            lambda _current: copy_value(dict(values)),
            reason=reason,
            expected_generation=expected_generation,
        )

    def reload(self) -> SettingsSnapshot:
        """Re-read the persisted settings, picking up external writes."""
        return self._commit(
            lambda current: self._read_persisted(current),
            reason="_reload",
            persist=False,
        )

    def _commit(
        self,
        build: Callable[[dict[str, Any]], dict[str, Any]],
        *,
        reason: str,
        expected_generation: int | None = None,
        persist: bool = True,
    ) -> SettingsSnapshot:
        with self._lock:
            current_generation = self._generation
            if expected_generation not in (None, current_generation):
                self._logger.warning(
                    "settings_generation_conflict",
                    expected=expected_generation,
                    actual=self._generation,
                    reason=reason,
                )
                msg = (
                    f"Settings changed since generation {expected_generation} "
                    f"(now {self._generation})"
                )
                raise StaleWriteError(
                    msg,
                    key=SETTINGS_KEY,
                    expected=expected_generation,
                    actual=self._generation,
                )

            new_values = build(copy_value(self._values))
            changed = _changed_keys(self._values, new_values)
            if not changed:
                return _freeze(self._values, self._generation)

            if persist:
                new_values[LAST_CHANGE_KEY] = reason
                self._persist(new_values, reason)

            self._values = new_values
            self._generation += 1
            snapshot = _freeze(self._values, self._generation)

        change = SettingsChange(
            snapshot=snapshot,
            reason=reason,
            changed_keys=changed,
            structural=any(is_structural_key(key) for key in changed),
        )
        self._logger.debug(
            "settings_changed",
            generation=snapshot.generation,
            reason=reason,
            keys=sorted(changed),
            structural=change.structural,
        )
        self._notify(change)
        return snapshot

    def _persist(self, values: dict[str, Any], reason: str) -> None:
        if self._state_store is None:
            return
        try:
            self._version = self._state_store.compare_and_set(
                SETTINGS_KEY,
                dump_json(values),
                self._version,
                author=reason,
            )
        except StaleWriteError:
            self._logger.warning(
                "settings_persist_conflict",
                expected_version=self._version,
                reason=reason,
            )
            raise
        except PersistenceError as e:
            # Keep the in-memory change; the next write retries persistence
            self._logger.warning("settings_persist_failed", error=str(e), reason=reason)

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, listener: SettingsListener) -> Callable[[], None]:
        """Register a listener called after every accepted change.

        Returns:
            A function that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, change: SettingsChange) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(change)
            except Exception:
                self._logger.exception("settings_listener_failed", reason=change.reason)

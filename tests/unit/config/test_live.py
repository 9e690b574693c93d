# pyright: reportAny=false
import pytest
from structlog.testing import capture_logs

from notedash.config import (
    DEFAULT_DASHBOARD_SETTINGS,
    LAST_CHANGE_KEY,
    SETTINGS_KEY,
    SettingsChange,
    SettingsStore,
    is_internal_reason,
    is_structural_key,
)
from notedash.exceptions import PersistenceError, StaleWriteError
from notedash.utils import MemoryStateStore, dump_json, load_json


class ReadOnlyStateStore(MemoryStateStore):
    """State store that cannot write settings."""

    def compare_and_set(
        self,
        key: str,
        value: str | int | float | bytes | None,
        expected_version: int,
        *,
        author: str | None = None,
    ) -> int:
        if key == SETTINGS_KEY:
            msg = "attempt to write a readonly database"
            raise PersistenceError(msg, operation="write")
        return super().compare_and_set(key, value, expected_version, author=author)


class TestKeyClassification:
    @pytest.mark.parametrize(
        "key",
        ["excludedFolders", "tagsToShow", "showOverdueSection", "showTagSection_#a"],
    )
    def test_structural_keys(self, key: str) -> None:
        assert is_structural_key(key)

    def test_non_structural_key(self) -> None:
        assert not is_structural_key("FFlag_HardRefreshButton")

    def test_internal_reason(self) -> None:
        assert is_internal_reason("_perspectiveSwitch")
        assert not is_internal_reason("settingsChanged")


class TestSettingsStoreReading:
    def test_starts_from_defaults(self) -> None:
        store = SettingsStore()

        assert store.generation == 0
        assert store.get("excludedFolders") == "@Archive, Saved Searches"

    def test_custom_defaults(self) -> None:
        store = SettingsStore(defaults={"tagsToShow": "#home"})

        assert store.snapshot().to_dict() == {"tagsToShow": "#home"}

    def test_reads_persisted_values_over_defaults(self) -> None:
        state = MemoryStateStore()
        _ = state.set(SETTINGS_KEY, dump_json({"tagsToShow": "#work"}))

        store = SettingsStore(state)

        assert store.get("tagsToShow") == "#work"
        assert store.get("showWeekSection") is True

    def test_corrupt_persisted_blob_uses_defaults(self) -> None:
        state = MemoryStateStore()
        _ = state.set(SETTINGS_KEY, "{not json")

        store = SettingsStore(state)

        assert store.get("tagsToShow") == DEFAULT_DASHBOARD_SETTINGS["tagsToShow"]

    def test_snapshot_is_read_only(self) -> None:
        snapshot = SettingsStore().snapshot()

        with pytest.raises(TypeError):
            snapshot.values["tagsToShow"] = "#x"  # pyright: ignore[reportIndexIssue]

    def test_get_returns_copy(self) -> None:
        store = SettingsStore(defaults={"folders": ["a"]})

        value = store.get("folders")
        value.append("b")

        assert store.get("folders") == ["a"]

    def test_typed_settings_view(self) -> None:
        store = SettingsStore(defaults={"maxItemsToShowInSection": 12})

        assert store.settings().max_items_to_show_in_section == 12


class TestSettingsStoreWriting:
    def test_update_increments_generation(self) -> None:
        store = SettingsStore()

        snapshot = store.update({"tagsToShow": "#home"}, reason="settingsChanged")

        assert snapshot.generation == 1
        assert store.generation == 1
        assert snapshot.get("tagsToShow") == "#home"
        assert snapshot.get(LAST_CHANGE_KEY) == "settingsChanged"

    def test_no_change_keeps_generation(self) -> None:
        store = SettingsStore()
        value = store.get("tagsToShow")

        snapshot = store.update({"tagsToShow": value}, reason="settingsChanged")

        assert snapshot.generation == 0

    def test_replace_drops_missing_keys(self) -> None:
        store = SettingsStore()

        _ = store.replace({"tagsToShow": "#a"}, reason="settingsChanged")

        assert store.get("excludedFolders") is None

    def test_expected_generation_must_match(self) -> None:
        store = SettingsStore()
        _ = store.update({"tagsToShow": "#a"}, reason="settingsChanged")

        with pytest.raises(StaleWriteError) as exc_info:
            _ = store.update(
                {"tagsToShow": "#b"}, reason="settingsChanged", expected_generation=0
            )

        assert exc_info.value.expected == 0
        assert exc_info.value.actual == 1
        assert store.get("tagsToShow") == "#a"

    def test_persists_through_state_store(self) -> None:
        state = MemoryStateStore()
        store = SettingsStore(state)

        _ = store.update({"tagsToShow": "#home"}, reason="settingsChanged")

        persisted = load_json(state[SETTINGS_KEY])
        assert isinstance(persisted, dict)
        assert persisted["tagsToShow"] == "#home"

    def test_external_write_detected(self) -> None:
        state = MemoryStateStore()
        store = SettingsStore(state)
        _ = store.update({"tagsToShow": "#a"}, reason="settingsChanged")
        other = SettingsStore(state)
        _ = other.update({"tagsToShow": "#b"}, reason="settingsChanged")

        with pytest.raises(StaleWriteError):
            _ = store.update({"tagsToShow": "#c"}, reason="settingsChanged")

    def test_reload_picks_up_external_write(self) -> None:
        state = MemoryStateStore()
        store = SettingsStore(state)
        other = SettingsStore(state)
        _ = other.update({"tagsToShow": "#b"}, reason="settingsChanged")

        snapshot = store.reload()

        assert snapshot.get("tagsToShow") == "#b"
        _ = store.update({"tagsToShow": "#c"}, reason="settingsChanged")
        assert store.get("tagsToShow") == "#c"

    def test_failed_persist_keeps_change_in_memory(self) -> None:
        state = ReadOnlyStateStore()
        store = SettingsStore(state)

        with capture_logs() as logs:
            snapshot = store.update({"tagsToShow": "#home"}, reason="settingsChanged")
            _ = store.update({"tagsToShow": "#work"}, reason="settingsChanged")

        assert snapshot.generation == 1
        assert store.generation == 2
        assert store.get("tagsToShow") == "#work"
        assert state.get_entry(SETTINGS_KEY) is None
        failures = [log for log in logs if log["event"] == "settings_persist_failed"]
        assert [log["reason"] for log in failures] == [
            "settingsChanged",
            "settingsChanged",
        ]


class TestSettingsStoreSubscriptions:
    def test_listener_receives_change(self) -> None:
        store = SettingsStore()
        changes: list[SettingsChange] = []
        _ = store.subscribe(changes.append)

        _ = store.update(
            {"tagsToShow": "#home", "FFlag_HardRefreshButton": True},
            reason="settingsChanged",
        )

        assert len(changes) == 1
        change = changes[0]
        assert change.changed_keys == {"tagsToShow", "FFlag_HardRefreshButton"}
        assert change.structural is True
        assert change.internal is False
        assert change.snapshot.generation == 1

    def test_non_structural_change(self) -> None:
        store = SettingsStore()
        changes: list[SettingsChange] = []
        _ = store.subscribe(changes.append)

        _ = store.update({"FFlag_HardRefreshButton": True}, reason="_internal")

        assert changes[0].structural is False
        assert changes[0].internal is True

    def test_unsubscribe(self) -> None:
        store = SettingsStore()
        changes: list[SettingsChange] = []
        unsubscribe = store.subscribe(changes.append)

        unsubscribe()
        _ = store.update({"tagsToShow": "#a"}, reason="settingsChanged")

        assert changes == []

    def test_failing_listener_does_not_block_others(self) -> None:
        store = SettingsStore()
        changes: list[SettingsChange] = []

        def broken(_change: SettingsChange) -> None:
            raise RuntimeError

        _ = store.subscribe(broken)
        _ = store.subscribe(changes.append)

        _ = store.update({"tagsToShow": "#a"}, reason="settingsChanged")

        assert len(changes) == 1

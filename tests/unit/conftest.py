from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from notedash.config import DEFAULT_DASHBOARD_SETTINGS, DashboardSettings
from notedash.sections import BuildContext
from notedash.store import InMemoryRecordStore

from pendulum import DateTime


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.unit)


FreezeTimeFunc = Callable[..., "DateTime"]


@pytest.fixture
def freeze_time(monkeypatch: pytest.MonkeyPatch) -> FreezeTimeFunc:
    """Return a function to freeze pendulum.now() to a fixed time."""
    import pendulum

    def _freeze(
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
    ) -> DateTime:
        fixed = pendulum.datetime(year, month, day, hour, minute, second, tz="UTC")

        def mock_now(tz: str = "UTC") -> DateTime:
            return fixed.in_timezone(tz)

        monkeypatch.setattr("pendulum.now", mock_now)
        return fixed

    return _freeze


@pytest.fixture
def make_context(
    record_store: InMemoryRecordStore,
) -> Callable[..., BuildContext]:
    """Return a factory creating BuildContexts.

    ``settings`` entries are camelCase ConfigMap keys merged over the
    default dashboard settings. Other keyword arguments override context
    fields.
    """
    import pendulum

    def _make(
        settings: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
        **overrides: object,
    ) -> BuildContext:
        values = {**DEFAULT_DASHBOARD_SETTINGS, **(settings or {})}
        defaults: dict[str, object] = {
            "settings": DashboardSettings.from_config_map(values),
            "record_store": record_store,
            "now": pendulum.datetime(2024, 5, 17, 10, 0, 0, tz="UTC"),
        }
        defaults.update(overrides)
        return BuildContext(**defaults)  # pyright: ignore[reportArgumentType]

    return _make

from collections.abc import Callable
from pathlib import Path

import pytest

from notedash.utils import SQLiteStateStore, create_state_store


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "state" / "state.db"


@pytest.fixture
def open_store(db_path: Path) -> Callable[[], SQLiteStateStore]:
    """Return a function opening a new connection to the same state database."""

    def _open() -> SQLiteStateStore:
        return create_state_store(db_path)

    return _open

import os
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

# Cache and perspective properties hit SQLite and temporary directories.
settings.register_profile(
    "notedash",
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "ci", parent=settings.get_profile("notedash"), max_examples=200
)
settings.load_profile(os.environ.get("NOTEDASH_HYPOTHESIS_PROFILE", "notedash"))


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    property_dir = Path(__file__).parent
    for item in items:
        if Path(item.path).is_relative_to(property_dir):
            item.add_marker(pytest.mark.property)

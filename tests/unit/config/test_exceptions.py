# pyright: reportAny=false
"""Unit tests for notedash exceptions.

These tests verify that exception constructors correctly store context
attributes. We don't test Python built-in behaviors (inheritance, str()).
"""

from pathlib import Path

from notedash.exceptions import (
    ConfigLoadError,
    ConfigValidationError,
    DuplicatePerspectiveError,
    PersistenceError,
    PerspectiveNotFoundError,
    ProjectNotFoundError,
    SourceUnavailableError,
    StaleWriteError,
)


class TestConfigLoadError:
    def test_stores_location_context(self) -> None:
        error = ConfigLoadError(
            "Parse error",
            path=Path("/config/notedash.toml"),
            line=15,
            column=8,
        )

        assert error.path == Path("/config/notedash.toml")
        assert error.line == 15
        assert error.column == 8

    def test_context_fields_default_to_none(self) -> None:
        error = ConfigLoadError("Simple error")

        assert error.path is None
        assert error.line is None
        assert error.column is None


class TestConfigValidationError:
    def test_stores_validation_context(self) -> None:
        error = ConfigValidationError(
            "Invalid value",
            key="cache.max_age_hours",
            value=-1,
            expected="number >= 0",
            source="project",
        )

        assert error.key == "cache.max_age_hours"
        assert error.value == -1
        assert error.expected == "number >= 0"
        assert error.source == "project"


class TestPersistenceErrors:
    def test_stores_io_context(self) -> None:
        cause = OSError("disk full")
        error = PersistenceError(
            "Failed", path=Path("/data/a.json"), operation="write", cause=cause
        )

        assert error.path == Path("/data/a.json")
        assert error.operation == "write"
        assert error.cause is cause

    def test_stale_write_is_a_persistence_error(self) -> None:
        error = StaleWriteError("Stale", key="dashboardSettings", expected=1, actual=3)

        assert isinstance(error, PersistenceError)
        assert error.key == "dashboardSettings"
        assert (error.expected, error.actual) == (1, 3)


class TestLookupErrors:
    def test_perspective_not_found_is_key_error(self) -> None:
        error = PerspectiveNotFoundError("Missing", name="Home")

        assert isinstance(error, KeyError)
        assert error.name == "Home"

    def test_duplicate_perspective_is_value_error(self) -> None:
        assert isinstance(DuplicatePerspectiveError("Dup", name="Home"), ValueError)

    def test_project_not_found_stores_filename(self) -> None:
        error = ProjectNotFoundError("Missing", filename="Projects/Alpha.md")

        assert isinstance(error, KeyError)
        assert error.filename == "Projects/Alpha.md"

    def test_source_unavailable_stores_source(self) -> None:
        assert SourceUnavailableError("Gone", source="records").source == "records"

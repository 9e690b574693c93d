"""Unit tests for logging utilities."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from notedash.config import Config
from notedash.utils._logging import (
    _create_logger,
    create_dashboard_logger,
    create_logger,
    get_default_logger,
)

from pyfakefs.fake_filesystem import FakeFilesystem


class TestCreateLoggerInternal:
    def test_creates_log_directory_if_missing(self, fs: FakeFilesystem) -> None:
        log_path = Path("/logs/test.log")
        assert not log_path.parent.exists()

        _ = _create_logger(str(log_path))

        assert log_path.parent.exists()

    def test_default_format_is_json(self, fs: FakeFilesystem) -> None:
        logger = _create_logger("/logs/test.log")

        logger.info("test_event", key="value")

        log_content = Path("/logs/test.log").read_text()
        assert '"event": "test_event"' in log_content
        assert '"key": "value"' in log_content

    def test_text_format(self, fs: FakeFilesystem) -> None:
        logger = _create_logger("/logs/test.log", log_format="text")

        logger.info("test_event", key="value")

        log_content = Path("/logs/test.log").read_text()
        # Text format uses ConsoleRenderer style
        assert "test_event" in log_content
        assert "key=value" in log_content

    def test_level_filters_lower_events(self, fs: FakeFilesystem) -> None:
        logger = _create_logger("/logs/test.log", log_level=logging.ERROR)

        logger.debug("debug_level_message")
        logger.error("error_level_message")

        content = Path("/logs/test.log").read_text()
        assert "debug_level_message" not in content
        assert "error_level_message" in content

    def test_with_rotation_uses_stdlib_logger(self, fs: FakeFilesystem) -> None:
        _ = _create_logger("/logs/rotating.log", max_bytes=1000, backup_count=3)

        handlers = [
            handler
            for name in logging.root.manager.loggerDict
            if name.startswith("notedash.rotating.")
            for handler in logging.getLogger(name).handlers
        ]
        assert handlers
        handler = handlers[-1]
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1000
        assert handler.backupCount == 3

    def test_rotation_requires_both_params(self, fs: FakeFilesystem) -> None:
        # Only one of the two, so a plain file logger is used
        logger = _create_logger("/logs/single.log", max_bytes=1000)

        logger.info("plain_file_event")

        assert "plain_file_event" in Path("/logs/single.log").read_text()


class TestCreateLogger:
    def test_binds_component_name(self, fs: FakeFilesystem) -> None:
        logger = create_logger("projects", log_file="/logs/projects.log")

        logger.info("cache_regenerated")

        content = Path("/logs/projects.log").read_text()
        assert '"component": "projects"' in content

    def test_defaults_to_named_file_in_data_dir(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("NOTEDASH_HOME", "/data")

        logger = create_logger("dashboard")
        logger.info("sections_built")

        assert Path("/data/logs/dashboard.log").exists()

    def test_respects_level(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("NOTEDASH_DEBUG", raising=False)

        logger = create_logger("dashboard", level="error", log_file="/logs/d.log")
        logger.warning("warning_level_message")
        logger.error("error_level_message")

        content = Path("/logs/d.log").read_text()
        assert "warning_level_message" not in content
        assert "error_level_message" in content

    def test_debug_env_overrides_level(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("NOTEDASH_DEBUG", "1")

        logger = create_logger("dashboard", level="error", log_file="/logs/d.log")
        logger.debug("debug_level_message")

        assert "debug_level_message" in Path("/logs/d.log").read_text()


class TestCreateDashboardLogger:
    def test_uses_logging_section(self, fs: FakeFilesystem) -> None:
        config = Config.from_dict(
            {"logging": {"level": "warning", "format": "text", "file": "/l/a.log"}}
        )

        logger = create_dashboard_logger(config)
        logger.info("info_level_message")
        logger.warning("warning_level_message")

        content = Path("/l/a.log").read_text()
        assert "info_level_message" not in content
        assert "warning_level_message" in content
        assert "component=dashboard" in content


class TestGetDefaultLogger:
    def test_returns_usable_logger(self) -> None:
        logger = get_default_logger()

        logger.debug("nothing_to_see")

# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Configuration container with typed access.

This module provides the main Config class that serves as the primary
interface for accessing notedash configuration values.
"""

from pathlib import Path
from typing import Any, ClassVar, Self, TypeVar, overload

import tomli_w
from pydantic import BaseModel, ConfigDict, PrivateAttr

from notedash.config._defaults import DEFAULT_CONFIG
from notedash.config._loader import (
    copy_value,
    deep_merge,
    parse_env_vars,
    read_toml_file,
)
from notedash.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from notedash.config._models._dashboard import DashboardConfig
from notedash.config._models._logging import LoggingConfig
from notedash.config._models._reviews import ReviewsConfig
from notedash.config._models._storage import CacheConfig, StateConfig

T = TypeVar("T")


def _parse_log_level(value: str) -> LogLevel:
    """Parse log level string to LogLevel enum, with fallback.

    Args:
        value: Log level string value.

    Returns:
        LogLevel enum value, defaulting to INFO for invalid values.
    """
    try:
        return LogLevel(value)
    except ValueError:
        return LogLevel.INFO


def _parse_log_format(value: str) -> LogFormat:
    """Parse log format string to LogFormat enum, with fallback."""
    try:
        return LogFormat(value)
    except ValueError:
        return LogFormat.JSON


def _parse_logging(data: dict[str, Any]) -> LoggingConfig:
    """Parse logging section dictionary into LoggingConfig.

    Args:
        data: Dictionary containing logging configuration.

    Returns:
        Parsed LoggingConfig instance.
    """
    return LoggingConfig(
        level=_parse_log_level(data.get("level", "info")),
        format=_parse_log_format(data.get("format", "json")),
        file=data.get("file", ""),
        max_bytes=data.get("max_bytes"),
        backup_count=data.get("backup_count"),
    )


class _Sections(BaseModel):
    """Parsed configuration sections."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    logging: LoggingConfig = LoggingConfig()
    cache: CacheConfig = CacheConfig()
    state: StateConfig = StateConfig()
    reviews: ReviewsConfig = ReviewsConfig()
    dashboard: DashboardConfig = DashboardConfig()


def _parse_sections(merged: dict[str, Any]) -> _Sections:
    return _Sections(
        logging=_parse_logging(merged.get("logging", {})),
        cache=CacheConfig.model_validate(merged.get("cache", {})),
        state=StateConfig.model_validate(merged.get("state", {})),
        reviews=ReviewsConfig.model_validate(merged.get("reviews", {})),
        dashboard=DashboardConfig.model_validate(merged.get("dashboard", {})),
    )


class Config(BaseModel):
    """Configuration container with typed access.

    This class provides immutable, type-safe access to notedash configuration.
    Use factory methods to create instances rather than the constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())
    _sections: _Sections = PrivateAttr(default_factory=_Sections)

    def __init__(
        self,
        *,
        _data: dict[str, Any] | None = None,
        _sources: tuple[ConfigSource, ...] = (),
        _sections: _Sections | None = None,
    ) -> None:
        """Initialize configuration container.

        This constructor is intended for internal use. Use factory methods
        like from_dict(), from_file(), or load() to create Config instances.

        Args:
            _data: The complete merged configuration dictionary.
            _sources: Sources that contributed to this configuration.
            _sections: Parsed configuration sections.
        """
        super().__init__()
        self._data = _data if _data is not None else {}
        self._sources = _sources
        self._sections = _sections if _sections is not None else _Sections()

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        *,
        validate: bool = True,
    ) -> Self:
        """Create configuration from a dictionary.

        Args:
            data: Dictionary of configuration values.
            validate: Whether to validate the configuration.

        Returns:
            Configuration object from the dictionary.

        Raises:
            ConfigValidationError: If validation fails (when validate=True).
        """
        # Deferred import to avoid circular dependency
        from notedash.config._validation import (  # noqa: PLC0415
            raise_if_validation_errors,
            validate_config,
        )

        merged = deep_merge(DEFAULT_CONFIG, data)

        if validate:
            issues = validate_config(merged)
            raise_if_validation_errors(issues)

        return cls(_data=merged, _sources=(), _sections=_parse_sections(merged))

    @classmethod
    def from_file(
        cls,
        path: Path,
        *,
        validate: bool = True,
    ) -> Self:
        """Load configuration from a specific file.

        Args:
            path: Path to the TOML config file.
            validate: Whether to validate the loaded config.

        Returns:
            Configuration object from the specified file only.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        from notedash.config._validation import (  # noqa: PLC0415
            raise_if_validation_errors,
            validate_config,
        )

        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.PROJECT,
            path=path,
            exists=True,
            values=data,
        )

        merged = deep_merge(DEFAULT_CONFIG, data)

        if validate:
            issues = validate_config(merged)
            raise_if_validation_errors(issues, source=str(path))

        return cls(
            _data=merged,
            _sources=(source,),
            _sections=_parse_sections(merged),
        )

    @classmethod
    def load(
        cls,
        *,
        project_root: Path | None = None,
        include_env: bool = True,
        overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Discovers all configuration sources and merges them in precedence order
        (defaults -> user -> project -> env -> overrides).

        Args:
            project_root: Directory holding ``notedash.toml``. If None,
                auto-detect by searching upward from the working directory.
            include_env: Include environment variables as a source.
            overrides: Explicit overrides with the highest precedence.

        Returns:
            Merged configuration object.

        Raises:
            ConfigLoadError: If config files cannot be loaded.
            ConfigValidationError: If merged config fails validation.
        """
        from notedash.config._discovery import discover_sources  # noqa: PLC0415
        from notedash.config._validation import (  # noqa: PLC0415
            raise_if_validation_errors,
            validate_config,
        )

        sources = discover_sources(
            project_root=project_root,
            include_env=include_env,
            overrides=overrides,
        )

        # Sources are discovered highest-to-lowest, so reverse for merging
        merged: dict[str, Any] = {}
        loaded_sources: list[ConfigSource] = []

        for source in reversed(sources):
            values: dict[str, Any] = {}

            if source.name in (ConfigSourceName.DEFAULT, ConfigSourceName.OVERRIDE):
                values = source.values
            elif source.name == ConfigSourceName.ENV:
                values = parse_env_vars()
            elif source.path and source.exists:
                values = read_toml_file(source.path)

            loaded_sources.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )

            if values:
                merged = deep_merge(merged, values)

        issues = validate_config(merged)
        raise_if_validation_errors(issues)

        return cls(
            _data=merged,
            _sources=tuple(reversed(loaded_sources)),
            _sections=_parse_sections(merged),
        )

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration.

        Returns:
            List of ConfigSource objects in precedence order.
        """
        return list(self._sources)

    @property
    def logging(self) -> LoggingConfig:
        """Return the logging configuration section."""
        return self._sections.logging

    @property
    def cache(self) -> CacheConfig:
        """Return the project cache configuration section."""
        return self._sections.cache

    @property
    def state(self) -> StateConfig:
        """Return the state store configuration section."""
        return self._sections.state

    @property
    def reviews(self) -> ReviewsConfig:
        """Return the project review configuration section."""
        return self._sections.reviews

    @property
    def dashboard(self) -> DashboardConfig:
        """Return the dashboard configuration section."""
        return self._sections.dashboard

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get(self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., "logging.level").
            default: Default value if key not found.

        Returns:
            The configuration value, or default if not found.

        Examples:
            >>> config.get("cache.max_age_hours")
            1.0
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self._data

        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def to_dict(self, *, include_defaults: bool = True) -> dict[str, Any]:
        """Convert configuration to a dictionary.

        Args:
            include_defaults: Whether to include default values. If False,
                only values that differ from defaults are included.

        Returns:
            Dictionary representation of the configuration.
        """
        if include_defaults:
            return copy_value(self._data)
        return _diff_from_defaults(self._data, DEFAULT_CONFIG)

    def to_toml(self, *, include_defaults: bool = False) -> str:
        """Convert configuration to a TOML string.

        Args:
            include_defaults: Whether to include default values.

        Returns:
            TOML string representation of the configuration.
        """
        return tomli_w.dumps(self.to_dict(include_defaults=include_defaults))


def _diff_from_defaults(
    data: dict[str, Any],
    defaults: dict[str, Any],
) -> dict[str, Any]:
    """Extract values that differ from defaults."""
    result: dict[str, Any] = {}

    for key, value in data.items():
        if key not in defaults:
            result[key] = copy_value(value)
        elif isinstance(value, dict) and isinstance(defaults[key], dict):
            nested_diff = _diff_from_defaults(value, defaults[key])
            if nested_diff:
                result[key] = nested_diff
        elif value != defaults[key]:
            result[key] = copy_value(value)

    return result

"""notedash configuration.

This module provides the public API for notedash configuration management:
the TOML application configuration, the dashboard ConfigMap defaults and
typed view, and the live settings store.

Example:
    >>> from notedash.config import Config
    >>> config = Config.load()
    >>> config.cache.max_age_hours
    1.0
"""

from notedash.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG, DEFAULT_DASHBOARD_SETTINGS
from ._discovery import PROJECT_CONFIG_NAME, discover_sources, find_project_config
from ._live import (
    LAST_CHANGE_KEY,
    SETTINGS_KEY,
    STRUCTURAL_KEYS,
    SettingsChange,
    SettingsListener,
    SettingsSnapshot,
    SettingsStore,
    is_internal_reason,
    is_structural_key,
)
from ._load import safe_load_config
from ._loader import (
    copy_value,
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    DEFAULT_MAX_ITEMS,
    CacheConfig,
    Config,
    ConfigSource,
    ConfigSourceName,
    DashboardConfig,
    DashboardSettings,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ReviewsConfig,
    StateConfig,
)
from ._validation import (
    ValidationIssue,
    get_config_schema,
    raise_if_validation_errors,
    validate_config,
    validate_source,
)

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_DASHBOARD_SETTINGS",
    "DEFAULT_MAX_ITEMS",
    "LAST_CHANGE_KEY",
    "PROJECT_CONFIG_NAME",
    "SETTINGS_KEY",
    "STRUCTURAL_KEYS",
    "CacheConfig",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "DashboardConfig",
    "DashboardSettings",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ReviewsConfig",
    "SettingsChange",
    "SettingsListener",
    "SettingsSnapshot",
    "SettingsStore",
    "StateConfig",
    "ValidationIssue",
    "copy_value",
    "deep_merge",
    "discover_sources",
    "find_project_config",
    "get_config_schema",
    "is_internal_reason",
    "is_structural_key",
    "parse_env_vars",
    "parse_string_value",
    "raise_if_validation_errors",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
    "validate_config",
    "validate_source",
]

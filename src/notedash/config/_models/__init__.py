"""Configuration models.

This module provides Pydantic models for notedash configuration sections,
the dashboard settings view, and the main Config container class.
"""

from notedash.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from notedash.config._models._config import Config
from notedash.config._models._dashboard import (
    DEFAULT_MAX_ITEMS,
    DashboardConfig,
    DashboardSettings,
)
from notedash.config._models._logging import LoggingConfig
from notedash.config._models._reviews import ReviewsConfig
from notedash.config._models._storage import CacheConfig, StateConfig

__all__ = [
    "DEFAULT_MAX_ITEMS",
    "CacheConfig",
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "DashboardConfig",
    "DashboardSettings",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ReviewsConfig",
    "StateConfig",
]

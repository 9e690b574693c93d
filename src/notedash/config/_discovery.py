"""Project config and user config path discovery utilities.

The project config is a ``notedash.toml`` file found by searching upward
from the working directory. The user config lives in the platform config
directory.
"""

from pathlib import Path
from typing import Any

from notedash.utils._paths import get_user_config_path

from ._defaults import DEFAULT_CONFIG
from ._models._common import ConfigSource, ConfigSourceName

PROJECT_CONFIG_NAME = "notedash.toml"


def find_project_config(start: Path | None = None) -> Path | None:
    """Find the nearest ``notedash.toml`` by searching upward.

    Args:
        start: Directory to start searching from. Defaults to current
            working directory if not specified.

    Returns:
        Path to the config file, or None if the filesystem root is reached
        without finding one.
    """
    current = (start or Path.cwd()).resolve()

    while True:
        candidate = current / PROJECT_CONFIG_NAME
        if _file_exists(candidate):
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _file_exists(path: Path) -> bool:
    """Check if a file exists, handling permission errors gracefully."""
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    project_root: Path | None = None,
    *,
    include_env: bool = True,
    overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """Discover all configuration sources.

    Discovers configuration sources in precedence order (highest first).
    File-based sources are checked for existence.

    Args:
        project_root: Directory holding ``notedash.toml``. If None, search
            upward from the working directory.
        include_env: Include environment variables as a source.
        overrides: Explicit overrides, included when non-empty.

    Returns:
        List of ConfigSource objects in precedence order (highest first).
        Sources that don't exist are still included with exists=False.
    """
    sources: list[ConfigSource] = []

    if overrides:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.OVERRIDE,
                path=None,
                exists=True,
                values=overrides,
            )
        )

    if include_env:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.ENV,
                path=None,
                exists=True,  # Actual values parsed during loading phase
                values={},
            )
        )

    project_path = (
        project_root / PROJECT_CONFIG_NAME
        if project_root is not None
        else find_project_config()
    )
    if project_path is not None:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.PROJECT,
                path=project_path,
                exists=_file_exists(project_path),
                values={},
            )
        )

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(
            name=ConfigSourceName.USER,
            path=user_path,
            exists=_file_exists(user_path),
            values={},
        )
    )

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources

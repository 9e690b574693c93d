import os
from pathlib import Path

import platformdirs

_APP_NAME = "notedash"


def get_notedash_dir() -> Path:
    """Get the notedash data directory.

    Uses the NOTEDASH_HOME environment variable when set, otherwise the
    platform user data directory.
    """
    override = os.environ.get("NOTEDASH_HOME")
    if override:
        return Path(override)
    return platformdirs.user_data_path(_APP_NAME)


def get_log_dir() -> Path:
    """Get the path to the logs/ directory inside the data directory."""
    return get_notedash_dir() / "logs"


def get_log_file(name: str) -> Path:
    """Get the path to a named log file inside logs/.

    Args:
        name: Logger name, used as the file stem.

    Returns:
        Path to the log file.
    """
    return get_log_dir() / f"{name}.log"


def get_state_db() -> Path:
    """Get the path to the state database (state.db)."""
    return get_notedash_dir() / "state.db"


def get_project_cache_file() -> Path:
    """Get the path to the serialized project list."""
    return get_notedash_dir() / "allProjectsList.json"


def get_user_config_path() -> Path:
    """Get the platform-specific user config file path.

    The path is returned regardless of whether it exists.
    """
    return platformdirs.user_config_path(_APP_NAME) / "config.toml"

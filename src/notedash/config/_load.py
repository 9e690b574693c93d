import os
import sys
from pathlib import Path

from notedash.exceptions import ConfigError

from ._models import Config


def _fail_or_default(error_msg: str, *, strict_mode: bool) -> tuple[Config, str]:
    if strict_mode:
        print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
        sys.exit(1)
    print(f"Warning: {error_msg}", file=sys.stderr)  # noqa: T201
    return Config.from_dict({}), error_msg


def safe_load_config(
    *,
    config_path: Path | None = None,
    project_root: Path | None = None,
    overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration with error handling.

    Attempts to load configuration and handles errors based on the
    NOTEDASH_STRICT_CONFIG environment variable:
    - If unset or "0": warn to stderr and return the default config
    - If "1": fail fast with sys.exit(1)

    When config_path is provided, the file must exist (explicit user request).

    Args:
        config_path: Explicit path to a config file.
        project_root: Directory holding ``notedash.toml``.
        overrides: Overrides passed to Config.load().

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.
        On failure (non-strict mode), returns the default Config with the
        error message.
    """
    strict_mode = os.environ.get("NOTEDASH_STRICT_CONFIG", "0") == "1"

    try:
        if config_path is not None:
            if not config_path.exists():
                error_msg = f"Config file not found: {config_path}"
                print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
                sys.exit(1)
            return Config.from_file(config_path), None

        config = Config.load(
            project_root=project_root,
            include_env=True,
            overrides=overrides,
        )
    except ConfigError as e:
        return _fail_or_default(f"Failed to load config: {e}", strict_mode=strict_mode)
    except FileNotFoundError as e:
        return _fail_or_default(f"Config file not found: {e}", strict_mode=strict_mode)
    except OSError as e:
        return _fail_or_default(f"Failed to load config: {e}", strict_mode=strict_mode)
    else:
        return config, None

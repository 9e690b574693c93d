"""Shared helpers: paths, logging, JSON, dates, folders and the state store."""

from ._dates import (
    calendar_filename,
    calendar_filename_start,
    calendar_period_of,
    filename_is_in_future,
    includes_scheduled_future_date,
    now,
    period_date_string,
    period_end,
    period_start,
    schedule_reference,
    scheduled_dates,
    shift_period,
    today,
)
from ._folders import (
    ROOT_FOLDER,
    folder_from_filename,
    folders_matching,
    folders_minus_exclusions,
    is_in_allowed_folders,
)
from ._json import dump_json, load_json, load_json_file, write_json_atomic
from ._logging import (
    create_dashboard_logger,
    create_logger,
    get_default_logger,
)
from ._paths import (
    get_log_dir,
    get_log_file,
    get_notedash_dir,
    get_project_cache_file,
    get_state_db,
    get_user_config_path,
)
from ._state_store import (
    MemoryStateStore,
    SQLiteStateStore,
    StateEntry,
    StateStore,
    create_state_store,
)
from ._strings import is_line_disallowed_by_terms, split_csv

__all__ = [
    "ROOT_FOLDER",
    "MemoryStateStore",
    "SQLiteStateStore",
    "StateEntry",
    "StateStore",
    "calendar_filename",
    "calendar_filename_start",
    "calendar_period_of",
    "create_dashboard_logger",
    "create_logger",
    "create_state_store",
    "dump_json",
    "filename_is_in_future",
    "folder_from_filename",
    "folders_matching",
    "folders_minus_exclusions",
    "get_default_logger",
    "get_log_dir",
    "get_log_file",
    "get_notedash_dir",
    "get_project_cache_file",
    "get_state_db",
    "get_user_config_path",
    "includes_scheduled_future_date",
    "is_in_allowed_folders",
    "is_line_disallowed_by_terms",
    "load_json",
    "load_json_file",
    "now",
    "period_date_string",
    "period_end",
    "period_start",
    "schedule_reference",
    "scheduled_dates",
    "shift_period",
    "split_csv",
    "today",
    "write_json_atomic",
]

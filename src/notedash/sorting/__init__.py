"""Sort and dedupe engine.

Pure functions over paragraph-like records: multi-key sorting, synced-copy
elimination, and duplicate removal.
"""

from ._dedupe import (
    SYNC_ID_FIELD,
    eliminate_duplicate_synced_copies,
    remove_duplicates,
)
from ._fields import field_value
from ._sort import DESCENDING_PREFIX, parse_key_spec, sort_by_keys

__all__ = [
    "DESCENDING_PREFIX",
    "SYNC_ID_FIELD",
    "eliminate_duplicate_synced_copies",
    "field_value",
    "parse_key_spec",
    "remove_duplicates",
    "sort_by_keys",
]

"""Named perspectives: switchable snapshots of dashboard settings.

Example:
    >>> from notedash.config import SettingsStore
    >>> from notedash.perspectives import PerspectiveStore
    >>> perspectives = PerspectiveStore(SettingsStore())
    >>> perspectives.list_names()
    ['-', 'Home', 'Work']
"""

from notedash.exceptions import (
    DuplicatePerspectiveError,
    PerspectiveError,
    PerspectiveNameError,
    PerspectiveNotFoundError,
)

from ._filters import (
    TRANSIENT_KEY_PATTERNS,
    TRANSIENT_KEY_PREFIXES,
    allowed_folders,
    clean_snapshot,
    is_transient_key,
)
from ._models import (
    DEFAULT_PERSPECTIVE_NAME,
    DEFAULT_PERSPECTIVES,
    MODIFIED_MARKER,
    PerspectiveDef,
)
from ._store import (
    ACTIVE_KEY,
    PERSPECTIVES_KEY,
    ConfirmSave,
    PerspectiveStore,
    validate_new_name,
)

__all__ = [
    "ACTIVE_KEY",
    "DEFAULT_PERSPECTIVES",
    "DEFAULT_PERSPECTIVE_NAME",
    "MODIFIED_MARKER",
    "PERSPECTIVES_KEY",
    "TRANSIENT_KEY_PATTERNS",
    "TRANSIENT_KEY_PREFIXES",
    "ConfirmSave",
    "DuplicatePerspectiveError",
    "PerspectiveDef",
    "PerspectiveError",
    "PerspectiveNameError",
    "PerspectiveNotFoundError",
    "PerspectiveStore",
    "allowed_folders",
    "clean_snapshot",
    "is_transient_key",
    "validate_new_name",
]

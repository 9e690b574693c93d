# pyright: reportAny=false, reportExplicitAny=false
"""Snapshot cleaning and folder filters for perspectives."""

import re
from collections.abc import Iterable, Mapping
from typing import Any, Final

from notedash.utils._folders import folders_matching
from notedash.utils._strings import split_csv

TRANSIENT_KEY_PREFIXES: Final = (
    "lastChange",
    "activePerspectiveName",
    "timeblockMustContainString",
    "updateTagMentionsOnTrigger",
    "defaultFileExtension",
    "doneDatesAvailable",
    "migratedSettingsFromOriginalDashboard",
    "triggerLogging",
    "pluginID",
)

TRANSIENT_KEY_PATTERNS: Final = (
    re.compile(r"FFlag_"),
    re.compile(r"separator\d"),
    re.compile(r"heading\d"),
    re.compile(r"_logLevel"),
    re.compile(r"_logTimer"),
    re.compile(r"_logFunctionRE"),
)


def is_transient_key(key: str) -> bool:
    """Whether a ConfigMap key is session state rather than a filter setting.

    Examples:
        >>> is_transient_key("FFlag_Perspectives")
        True
        >>> is_transient_key("includedFolders")
        False
    """
    if key.startswith(TRANSIENT_KEY_PREFIXES):
        return True
    return any(pattern.search(key) for pattern in TRANSIENT_KEY_PATTERNS)


def clean_snapshot(values: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of a ConfigMap without transient keys."""
    return {key: value for key, value in values.items() if not is_transient_key(key)}


def allowed_folders(
    values: Mapping[str, Any],
    all_folders: Iterable[str],
) -> list[str]:
    """Resolve a ConfigMap's folder lists against the folder tree.

    Included folders take priority over excluded ones. Special ``@``
    folders are only returned when included explicitly.

    Args:
        values: ConfigMap holding ``includedFolders`` and ``excludedFolders``.
        all_folders: Every folder in the record store.

    Returns:
        The folders items may come from.
    """
    inclusions = split_csv(values.get("includedFolders"))
    exclusions = split_csv(values.get("excludedFolders"))
    include_special = any(term.startswith("@") for term in inclusions)
    return folders_matching(
        all_folders, inclusions, exclusions, exclude_special=not include_special
    )

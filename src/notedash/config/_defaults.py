"""Default configuration values.

``DEFAULT_CONFIG`` holds the application configuration defaults that are
merged beneath every TOML and environment source. ``DEFAULT_DASHBOARD_SETTINGS``
is the initial dashboard ConfigMap, used when nothing has been persisted yet.

Both are plain dicts for compatibility with deep_merge, which copies its
inputs.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "cache": {
        "max_age_hours": 1.0,
        "path": "",
    },
    "state": {
        "path": "",
    },
    "reviews": {
        "note_type_tags": ["#project", "#area"],
        "folders_to_include": [],
        "folders_to_ignore": ["@Archive", "@Templates", "Saved Searches"],
        "display_finished": "display at end",
        "display_only_due": False,
        "display_order": "review",
        "display_grouped_by_folder": True,
        "max_projects_to_show": 6,
    },
    "dashboard": {
        "timezone": "UTC",
        "default_file_extension": "md",
    },
}

DEFAULT_DASHBOARD_SETTINGS: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "activePerspectiveName": "-",
    "includedFolders": "",
    "excludedFolders": "@Archive, Saved Searches",
    "tagsToShow": "",
    "ignoreItemsWithTerms": "",
    "ignoreChecklistItems": False,
    "separateSectionForReferencedNotes": False,
    "overdueSortOrder": "priority",
    "lookBackDaysForOverdue": 0,
    "maxItemsToShowInSection": 30,
    "timeblockMustContainString": "",
    "displayFinished": "hide",
    "displayOnlyDue": False,
    "showYesterdaySection": True,
    "showTomorrowSection": True,
    "showLastWeekSection": False,
    "showWeekSection": True,
    "showMonthSection": True,
    "showQuarterSection": True,
    "showOverdueSection": True,
    "showPrioritySection": True,
    "showProjectSection": True,
    "showTimeblockSection": True,
    "FFlag_Perspectives": True,
    "FFlag_HardRefreshButton": False,
    "FFlag_ForceInitialLoadForBrowserDebugging": False,
}

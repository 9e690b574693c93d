"""Project review records and their cache.

Example:
    >>> from notedash.projects import ProjectCache, MetadataReviewTracker
    >>> cache = ProjectCache(store, state_store, tracker=MetadataReviewTracker())
    >>> ready = next_projects_to_review(cache.get_all())
"""

from ._cache import DEFAULT_MAX_AGE_HOURS, MARKER_KEY, ProjectCache
from ._models import ProjectCacheEnvelope, ProjectRecord
from ._review import (
    DEFAULT_PROJECTS_TO_REVIEW,
    filter_and_sort_projects,
    next_project_to_review,
    next_projects_to_review,
    review_sort_keys,
)
from ._tracker import (
    DEFAULT_REVIEW_INTERVAL,
    MetadataReviewTracker,
    ReviewTracker,
    add_interval,
    note_params,
)

__all__ = [
    "DEFAULT_MAX_AGE_HOURS",
    "DEFAULT_PROJECTS_TO_REVIEW",
    "DEFAULT_REVIEW_INTERVAL",
    "MARKER_KEY",
    "MetadataReviewTracker",
    "ProjectCache",
    "ProjectCacheEnvelope",
    "ProjectRecord",
    "ReviewTracker",
    "add_interval",
    "filter_and_sort_projects",
    "next_project_to_review",
    "next_projects_to_review",
    "note_params",
    "review_sort_keys",
]

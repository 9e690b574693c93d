"""Review-list filtering and the review queue."""

from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING

from notedash.config._models._reviews import ReviewsConfig
from notedash.enums import DisplayFinished, DisplayOrder
from notedash.projects._models import ProjectRecord
from notedash.sorting._sort import sort_by_keys
from notedash.utils._logging import get_default_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

DEFAULT_PROJECTS_TO_REVIEW = 6

_ORDER_KEYS: dict[DisplayOrder, str] = {
    DisplayOrder.REVIEW: "next_review_days",
    DisplayOrder.DUE: "due_days",
    DisplayOrder.TITLE: "title",
}


def review_sort_keys(config: ReviewsConfig) -> list[str]:
    """Key specs used to order the review list.

    Examples:
        >>> review_sort_keys(ReviewsConfig())
        ['folder', 'next_review_days', 'is_completed']
    """
    keys: list[str] = []
    if config.display_grouped_by_folder:
        keys.append("folder")
    keys.append(_ORDER_KEYS[config.display_order])
    if config.display_finished is DisplayFinished.AT_END:
        keys.append("is_completed")
    return keys


def filter_and_sort_projects(
    records: Iterable[ProjectRecord],
    config: ReviewsConfig | None = None,
) -> list[ProjectRecord]:
    """Apply the review-list visibility filters and ordering.

    Args:
        records: Project records in cache order.
        config: Review-list settings. Defaults to ``ReviewsConfig()``.

    Returns:
        A new, sorted list.
    """
    config = config or ReviewsConfig()
    selected = list(records)
    if config.display_finished is DisplayFinished.HIDE:
        selected = [r for r in selected if not r.is_completed]
    if config.display_only_due:
        selected = [r for r in selected if r.next_review_days <= 0]
    return sort_by_keys(selected, review_sort_keys(config))


def next_projects_to_review(
    records: Sequence[ProjectRecord],
    n: int = DEFAULT_PROJECTS_TO_REVIEW,
    *,
    exists: Callable[[str], bool] | None = None,
    logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
) -> list[ProjectRecord]:
    """Take the next projects that are ready for review.

    Walks ``records`` in order, keeping records that are due, active and
    not a repeat of the immediately preceding filename.

    Args:
        records: Candidate records, already ordered.
        n: Maximum number to return. 0 means no limit.
        exists: Optional check that the project note still exists. Records
            whose note is gone are skipped.
        logger: Optional logger for skipped records.

    Returns:
        Up to ``n`` records, in input order.
    """
    log = logger or get_default_logger()
    selected: list[ProjectRecord] = []
    last_filename = ""
    for record in records:
        if record.is_ready_for_review and record.filename != last_filename:
            if exists is not None and not exists(record.filename):
                log.warning("project_note_missing", filename=record.filename)
                continue
            selected.append(record)
            if 0 < n <= len(selected):
                break
        last_filename = record.filename
    return selected


def next_project_to_review(
    records: Sequence[ProjectRecord],
    *,
    exists: Callable[[str], bool] | None = None,
) -> ProjectRecord | None:
    """Return the first project ready for review, or None."""
    found = next_projects_to_review(records, 1, exists=exists)
    return found[0] if found else None

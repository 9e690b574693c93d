"""Folder-list helpers.

Folder names are slash-separated paths without leading or trailing slash.
The root folder is the special name ``/``. Folders starting with ``@`` are
special (templates, archive, trash) and are excluded unless asked for.
"""

from collections.abc import Iterable, Sequence

ROOT_FOLDER = "/"
_SPECIAL_PREFIX = "@"


def _terminated(folder: str) -> str:
    return folder if folder.endswith("/") else f"{folder}/"


def folder_from_filename(filename: str) -> str:
    """Get the folder part of a note filename.

    Args:
        filename: Full note filename (e.g. ``CCC Areas/Staff/Jane.md``).

    Returns:
        The folder path, or ``/`` for notes in the root folder.

    Examples:
        >>> folder_from_filename("CCC Areas/Staff/Jane.md")
        'CCC Areas/Staff'
        >>> folder_from_filename("Inbox.md")
        '/'
    """
    stripped = filename.removeprefix("/")
    if "/" not in stripped:
        return ROOT_FOLDER
    return stripped.rsplit("/", 1)[0]


def folders_matching(
    all_folders: Iterable[str],
    inclusions: Sequence[str],
    exclusions: Sequence[str] = (),
    *,
    exclude_special: bool = True,
) -> list[str]:
    """Filter a folder list by substring inclusions and exclusions.

    A folder matches a term when the term is a substring of the folder path
    terminated with ``/``, so ``"Home"`` matches ``Home Areas`` and
    ``Home/Family``. Inclusions take priority: a folder matching any
    inclusion is kept even if it also matches an exclusion. The root folder
    is only returned when ``/`` is included (or nothing is included) and
    ``/`` is not excluded.

    Args:
        all_folders: The full folder tree.
        inclusions: Terms a folder must match (empty means all folders).
        exclusions: Terms that remove a folder not matched by an inclusion.
        exclude_special: Drop folders starting with ``@``.

    Returns:
        Matching folders, root first when present, otherwise in input order.
    """
    folders = list(all_folders)
    if not inclusions and not exclusions:
        return [
            folder
            for folder in folders
            if not (exclude_special and folder.startswith(_SPECIAL_PREFIX))
        ]

    root_included = ROOT_FOLDER in inclusions
    root_excluded = ROOT_FOLDER in exclusions
    include_terms = [term for term in inclusions if term != ROOT_FOLDER]
    exclude_terms = [term for term in exclusions if term != ROOT_FOLDER]

    if list(inclusions) == [ROOT_FOLDER]:
        return [] if root_excluded else [ROOT_FOLDER]

    result: list[str] = []
    for folder in folders:
        if folder == ROOT_FOLDER:
            continue
        if exclude_special and folder.startswith(_SPECIAL_PREFIX):
            continue
        terminated = _terminated(folder)
        if include_terms:
            if any(term in terminated for term in include_terms):
                result.append(folder)
        elif not any(term in terminated for term in exclude_terms):
            result.append(folder)

    keep_root = root_included or (not include_terms and ROOT_FOLDER in folders)
    if keep_root and not root_excluded:
        result.insert(0, ROOT_FOLDER)
    return result


def folders_minus_exclusions(
    all_folders: Iterable[str],
    exclusions: Sequence[str],
    *,
    exclude_special: bool = True,
    exclude_root: bool = False,
) -> list[str]:
    """Remove folders that start with any exclusion (prefix match).

    Unlike :func:`folders_matching`, exclusions here are anchored at the
    start of the path, so ``"TEST"`` removes ``TEST/TEST LEVEL 2`` but not
    ``NOT TEST``.

    Args:
        all_folders: The full folder tree.
        exclusions: Folder prefixes to remove. ``/`` removes the root folder.
        exclude_special: Drop folders starting with ``@``.
        exclude_root: Always drop the root folder.

    Returns:
        The remaining folders in input order.
    """
    drop_root = exclude_root or ROOT_FOLDER in exclusions
    prefixes = [_terminated(term) for term in exclusions if term != ROOT_FOLDER]

    result: list[str] = []
    for folder in all_folders:
        if folder == ROOT_FOLDER:
            if not drop_root:
                result.append(folder)
            continue
        if exclude_special and folder.startswith(_SPECIAL_PREFIX):
            continue
        if any(_terminated(folder).startswith(prefix) for prefix in prefixes):
            continue
        result.append(folder)
    return result


def is_in_allowed_folders(
    filename: str,
    allowed_folders: Iterable[str],
    *,
    is_calendar: bool = False,
    allow_all_calendar: bool = True,
) -> bool:
    """Check whether a note lives in one of the allowed folders.

    Calendar notes are not in any folder and are allowed by default.
    """
    if is_calendar and allow_all_calendar:
        return True
    return folder_from_filename(filename) in set(allowed_folders)

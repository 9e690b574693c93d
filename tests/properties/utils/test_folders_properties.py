"""Property-based tests for folder-list filtering."""

from hypothesis import given, strategies as st

from notedash.utils import ROOT_FOLDER, folders_matching

SEGMENTS = ("Home", "Work", "Areas", "Home Areas", "@Archive", "Staff")

segment = st.sampled_from(SEGMENTS)
folder = st.lists(segment, min_size=1, max_size=3).map("/".join)
folder_tree = st.lists(folder, unique=True, max_size=12).map(
    lambda folders: [ROOT_FOLDER, *folders]
)
terms = st.lists(segment.filter(lambda s: not s.startswith("@")), max_size=3)


def _matches(folder_name: str, term: str) -> bool:
    return term in f"{folder_name}/"


@given(all_folders=folder_tree, inclusions=terms, exclusions=terms)
def test_result_is_a_subset_in_input_order(
    all_folders: list[str], inclusions: list[str], exclusions: list[str]
) -> None:
    """Property: only known folders are returned, root first, then input order."""
    result = folders_matching(all_folders, inclusions, exclusions)

    assert set(result) <= set(all_folders)
    rest = [f for f in result if f != ROOT_FOLDER]
    assert rest == [f for f in all_folders if f in rest]
    if ROOT_FOLDER in result:
        assert result[0] == ROOT_FOLDER


@given(all_folders=folder_tree, inclusions=terms, exclusions=terms)
def test_special_folders_are_dropped(
    all_folders: list[str], inclusions: list[str], exclusions: list[str]
) -> None:
    """Property: ``@`` folders never appear unless special folders are allowed."""
    result = folders_matching(all_folders, inclusions, exclusions)

    assert not any(f.startswith("@") for f in result)


@given(all_folders=folder_tree, inclusions=terms, exclusions=terms)
def test_inclusions_take_priority(
    all_folders: list[str], inclusions: list[str], exclusions: list[str]
) -> None:
    """Property: a folder matching an inclusion is kept even if also excluded."""
    result = folders_matching(all_folders, inclusions, exclusions)

    for name in all_folders:
        if name == ROOT_FOLDER or name.startswith("@"):
            continue
        if inclusions:
            assert (name in result) == any(_matches(name, t) for t in inclusions)
        else:
            assert (name in result) == (
                not any(_matches(name, t) for t in exclusions)
            )


@given(all_folders=folder_tree)
def test_no_terms_keeps_every_regular_folder(all_folders: list[str]) -> None:
    """Property: without terms every non-special folder is allowed."""
    result = folders_matching(all_folders, [])

    assert result == [f for f in all_folders if not f.startswith("@")]

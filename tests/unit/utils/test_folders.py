import pytest

from notedash.utils import (
    ROOT_FOLDER,
    folder_from_filename,
    folders_matching,
    folders_minus_exclusions,
    is_in_allowed_folders,
)

ALL_FOLDERS = [
    "/",
    "@Archive",
    "Home Areas",
    "Home/Family",
    "NotePlan Help",
    "Work",
    "Work/Projects",
]


class TestFolderFromFilename:
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("CCC Areas/Staff/Jane.md", "CCC Areas/Staff"),
            ("Projects/Alpha.md", "Projects"),
            ("Inbox.md", ROOT_FOLDER),
            ("/Inbox.md", ROOT_FOLDER),
        ],
    )
    def test_extracts_folder(self, filename: str, expected: str) -> None:
        assert folder_from_filename(filename) == expected


class TestFoldersMatching:
    def test_no_terms_returns_all_but_special(self) -> None:
        result = folders_matching(ALL_FOLDERS, [])

        assert result == [f for f in ALL_FOLDERS if f != "@Archive"]

    def test_special_folders_kept_when_asked(self) -> None:
        result = folders_matching(ALL_FOLDERS, [], exclude_special=False)

        assert "@Archive" in result

    def test_inclusion_is_substring_match(self) -> None:
        result = folders_matching(ALL_FOLDERS, ["Home"])

        assert result == ["Home Areas", "Home/Family"]

    def test_exclusion_keeps_root(self) -> None:
        result = folders_matching(ALL_FOLDERS, [], ["Work"])

        assert result == ["/", "Home Areas", "Home/Family", "NotePlan Help"]

    def test_inclusion_wins_over_exclusion(self) -> None:
        result = folders_matching(ALL_FOLDERS, ["Work"], ["Work/Projects"])

        assert result == ["Work", "Work/Projects"]

    def test_root_only_inclusion(self) -> None:
        assert folders_matching(ALL_FOLDERS, ["/"]) == ["/"]

    def test_root_included_and_excluded(self) -> None:
        assert folders_matching(ALL_FOLDERS, ["/"], ["/"]) == []

    def test_root_plus_other_inclusion(self) -> None:
        result = folders_matching(ALL_FOLDERS, ["/", "Work"])

        assert result == ["/", "Work", "Work/Projects"]

    def test_root_excluded(self) -> None:
        result = folders_matching(ALL_FOLDERS, [], ["/"])

        assert ROOT_FOLDER not in result
        assert "Work" in result

    def test_inclusion_without_root_drops_root(self) -> None:
        assert ROOT_FOLDER not in folders_matching(ALL_FOLDERS, ["Help"])


class TestFoldersMinusExclusions:
    FOLDERS = ["/", "@Templates", "NOT TEST", "TEST", "TEST/TEST LEVEL 2"]

    def test_prefix_match(self) -> None:
        result = folders_minus_exclusions(self.FOLDERS, ["TEST"])

        assert result == ["/", "NOT TEST"]

    def test_root_exclusion(self) -> None:
        result = folders_minus_exclusions(self.FOLDERS, ["/"])

        assert result == ["NOT TEST", "TEST", "TEST/TEST LEVEL 2"]

    def test_exclude_root_flag(self) -> None:
        result = folders_minus_exclusions(self.FOLDERS, [], exclude_root=True)

        assert ROOT_FOLDER not in result

    def test_special_folders_kept_when_asked(self) -> None:
        result = folders_minus_exclusions(self.FOLDERS, [], exclude_special=False)

        assert "@Templates" in result


class TestIsInAllowedFolders:
    def test_project_note_in_allowed_folder(self) -> None:
        assert is_in_allowed_folders("Home/Family/Mum.md", ["Home/Family"])

    def test_project_note_outside_allowed_folders(self) -> None:
        assert not is_in_allowed_folders("Work/Plan.md", ["Home/Family"])

    def test_calendar_notes_allowed_by_default(self) -> None:
        assert is_in_allowed_folders("20240517.md", [], is_calendar=True)

    def test_calendar_notes_checked_when_asked(self) -> None:
        assert not is_in_allowed_folders(
            "20240517.md", ["Work"], is_calendar=True, allow_all_calendar=False
        )

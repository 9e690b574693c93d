from collections.abc import Callable

import pendulum
import pytest

from notedash.sorting import parse_key_spec, sort_by_keys
from notedash.store import Paragraph


class TestParseKeySpec:
    def test_ascending(self) -> None:
        assert parse_key_spec("changed_date") == ("changed_date", False)

    def test_descending(self) -> None:
        assert parse_key_spec("-priority") == ("priority", True)


class TestSortByKeys:
    def test_multiple_keys(self) -> None:
        rows = [{"p": 1, "c": 5}, {"p": 1, "c": 3}, {"p": 2, "c": 1}]

        result = sort_by_keys(rows, ["-p", "-c"])

        assert result == [{"p": 2, "c": 1}, {"p": 1, "c": 5}, {"p": 1, "c": 3}]

    def test_returns_new_list(self) -> None:
        rows = [{"p": 2}, {"p": 1}]

        result = sort_by_keys(rows, ["p"])

        assert result is not rows
        assert rows == [{"p": 2}, {"p": 1}]

    def test_stable_for_equal_keys(self) -> None:
        rows = [{"p": 1, "id": "a"}, {"p": 0, "id": "b"}, {"p": 1, "id": "c"}]

        ascending = sort_by_keys(rows, ["p"])
        descending = sort_by_keys(rows, ["-p"])

        assert [r["id"] for r in ascending] == ["b", "a", "c"]
        assert [r["id"] for r in descending] == ["a", "c", "b"]

    def test_missing_values_first_ascending_last_descending(self) -> None:
        rows = [{"d": 2}, {"x": 1}, {"d": 1}]

        assert sort_by_keys(rows, ["d"]) == [{"x": 1}, {"d": 1}, {"d": 2}]
        assert sort_by_keys(rows, ["-d"]) == [{"d": 2}, {"d": 1}, {"x": 1}]

    def test_strings_case_insensitive(self) -> None:
        rows = [{"t": "beta"}, {"t": "Alpha"}, {"t": ""}]

        assert [r["t"] for r in sort_by_keys(rows, ["t"])] == ["", "Alpha", "beta"]

    def test_no_keys_keeps_order(self) -> None:
        rows = [{"p": 2}, {"p": 1}]

        assert sort_by_keys(rows, []) == rows

    def test_sorts_objects_by_attribute(
        self, make_paragraph: Callable[..., Paragraph]
    ) -> None:
        older = make_paragraph(
            content="! older", changed_date=pendulum.datetime(2024, 5, 1)
        )
        newer = make_paragraph(
            content="! newer", changed_date=pendulum.datetime(2024, 5, 10)
        )
        top = make_paragraph(content="!!! top", changed_date=None)

        result = sort_by_keys([older, top, newer], ["-priority", "-changed_date"])

        assert [p.content for p in result] == ["!!! top", "! newer", "! older"]

    @pytest.mark.parametrize("specs", [["a", "b"], ["-a", "b"], ["a", "-b"]])
    def test_idempotent(self, specs: list[str]) -> None:
        rows = [{"a": i % 3, "b": i % 2, "i": i} for i in range(10)]

        once = sort_by_keys(rows, specs)

        assert sort_by_keys(once, specs) == once

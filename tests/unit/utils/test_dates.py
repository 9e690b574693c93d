import pendulum
import pytest

from notedash.enums import PeriodType
from notedash.utils import (
    calendar_filename,
    calendar_filename_start,
    calendar_period_of,
    filename_is_in_future,
    includes_scheduled_future_date,
    now,
    period_date_string,
    period_end,
    period_start,
    schedule_reference,
    scheduled_dates,
    shift_period,
    today,
)

FRIDAY = pendulum.date(2024, 5, 17)


class TestNow:
    def test_returns_requested_timezone(self) -> None:
        assert now("Europe/London").timezone_name == "Europe/London"

    def test_today_is_a_date(self) -> None:
        assert isinstance(today(), pendulum.Date)


class TestPeriodBounds:
    @pytest.mark.parametrize(
        ("period", "start", "end"),
        [
            (PeriodType.DAY, pendulum.date(2024, 5, 17), pendulum.date(2024, 5, 17)),
            (PeriodType.WEEK, pendulum.date(2024, 5, 13), pendulum.date(2024, 5, 19)),
            (PeriodType.MONTH, pendulum.date(2024, 5, 1), pendulum.date(2024, 5, 31)),
            (
                PeriodType.QUARTER,
                pendulum.date(2024, 4, 1),
                pendulum.date(2024, 6, 30),
            ),
        ],
    )
    def test_start_and_end(
        self, period: PeriodType, start: pendulum.Date, end: pendulum.Date
    ) -> None:
        assert period_start(FRIDAY, period) == start
        assert period_end(FRIDAY, period) == end

    def test_shift_by_whole_periods(self) -> None:
        assert shift_period(FRIDAY, PeriodType.DAY, -1) == pendulum.date(2024, 5, 16)
        assert shift_period(FRIDAY, PeriodType.WEEK, 1) == pendulum.date(2024, 5, 24)
        assert shift_period(FRIDAY, PeriodType.QUARTER, 1) == pendulum.date(
            2024, 8, 17
        )


class TestCalendarFilenames:
    @pytest.mark.parametrize(
        ("period", "expected"),
        [
            (PeriodType.DAY, "20240517.md"),
            (PeriodType.WEEK, "2024-W20.md"),
            (PeriodType.MONTH, "2024-05.md"),
            (PeriodType.QUARTER, "2024-Q2.md"),
        ],
    )
    def test_filename_for_period(self, period: PeriodType, expected: str) -> None:
        assert calendar_filename(FRIDAY, period) == expected

    def test_custom_extension(self) -> None:
        assert calendar_filename(FRIDAY, PeriodType.DAY, "txt") == "20240517.txt"

    def test_iso_week_year(self) -> None:
        day = pendulum.date(2024, 12, 30)

        assert period_date_string(day, PeriodType.WEEK) == "2025-W01"

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("20240517.md", pendulum.date(2024, 5, 17)),
            ("2025-W01.md", pendulum.date(2024, 12, 30)),
            ("2024-05.md", pendulum.date(2024, 5, 1)),
            ("2024-Q2.md", pendulum.date(2024, 4, 1)),
        ],
    )
    def test_filename_start(self, filename: str, expected: pendulum.Date) -> None:
        assert calendar_filename_start(filename) == expected

    def test_project_note_is_not_calendar(self) -> None:
        assert calendar_filename_start("Projects/Alpha.md") is None
        assert calendar_period_of("Projects/Alpha.md") is None

    def test_period_of(self) -> None:
        assert calendar_period_of("2024-W20.md") is PeriodType.WEEK
        assert calendar_period_of("2024-Q2.md") is PeriodType.QUARTER


class TestScheduling:
    def test_schedule_reference_for_day(self) -> None:
        assert schedule_reference("20240517.md") == ">2024-05-17"

    def test_schedule_reference_for_week_and_month(self) -> None:
        assert schedule_reference("2024-W20.md") == ">2024-W20"
        assert schedule_reference("2024-05.md") == ">2024-05"

    def test_schedule_reference_for_project_note(self) -> None:
        assert schedule_reference("Projects/Alpha.md") is None

    def test_future_filenames(self) -> None:
        assert filename_is_in_future("20240518.md", FRIDAY)
        assert not filename_is_in_future("2024-W20.md", FRIDAY)
        assert filename_is_in_future("2024-W21.md", FRIDAY)
        assert not filename_is_in_future("Projects/Alpha.md", FRIDAY)

    def test_scheduled_dates_skip_invalid(self) -> None:
        dates = scheduled_dates("Call >2024-05-20 and >2024-13-45")

        assert dates == [pendulum.date(2024, 5, 20)]

    def test_includes_future_date(self) -> None:
        assert includes_scheduled_future_date("Call >2024-05-20", FRIDAY)
        assert not includes_scheduled_future_date("Call >2024-05-17", FRIDAY)
        assert not includes_scheduled_future_date("Call Bob", FRIDAY)

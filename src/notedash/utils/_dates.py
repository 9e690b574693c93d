"""Calendar period helpers built on pendulum.

Calendar notes are named after the period they cover:

- day: ``YYYYMMDD``
- week: ``YYYY-Www`` (ISO week)
- month: ``YYYY-MM``
- quarter: ``YYYY-Qn``
"""

import re
from typing import Final

import pendulum

from notedash.enums import PeriodType

_DAY_RE: Final = re.compile(r"(?:^|/)(\d{4})(\d{2})(\d{2})\.\w+$")
_WEEK_RE: Final = re.compile(r"(?:^|/)(\d{4})-W(\d{2})\.\w+$")
_MONTH_RE: Final = re.compile(r"(?:^|/)(\d{4})-(\d{2})\.\w+$")
_QUARTER_RE: Final = re.compile(r"(?:^|/)(\d{4})-Q([1-4])\.\w+$")
_SCHEDULED_DATE_RE: Final = re.compile(r">(\d{4}-\d{2}-\d{2})")


def now(tz: str = "UTC") -> pendulum.DateTime:
    """Return the current time in the given timezone."""
    return pendulum.now("UTC").in_timezone(tz)


def today(tz: str = "UTC") -> pendulum.Date:
    """Return the current date in the given timezone."""
    return now(tz).date()


def period_start(day: pendulum.Date, period: PeriodType) -> pendulum.Date:
    """Return the first day of the period containing ``day``."""
    match period:
        case PeriodType.DAY:
            return day
        case PeriodType.WEEK:
            return day.subtract(days=day.isoweekday() - 1)
        case PeriodType.MONTH:
            return day.replace(day=1)
        case PeriodType.QUARTER:
            first_month = 3 * ((day.month - 1) // 3) + 1
            return day.replace(month=first_month, day=1)


def period_end(day: pendulum.Date, period: PeriodType) -> pendulum.Date:
    """Return the last day of the period containing ``day``."""
    return shift_period(period_start(day, period), period, 1).subtract(days=1)


def shift_period(day: pendulum.Date, period: PeriodType, offset: int) -> pendulum.Date:
    """Move ``day`` by ``offset`` whole periods."""
    match period:
        case PeriodType.DAY:
            return day.add(days=offset)
        case PeriodType.WEEK:
            return day.add(weeks=offset)
        case PeriodType.MONTH:
            return day.add(months=offset)
        case PeriodType.QUARTER:
            return day.add(months=3 * offset)


def period_date_string(day: pendulum.Date, period: PeriodType) -> str:
    """Return the calendar-note date string for the period containing ``day``.

    Examples:
        >>> period_date_string(pendulum.date(2024, 5, 17), PeriodType.QUARTER)
        '2024-Q2'
    """
    match period:
        case PeriodType.DAY:
            return day.format("YYYYMMDD")
        case PeriodType.WEEK:
            iso_year, iso_week, _ = day.isocalendar()
            return f"{iso_year}-W{iso_week:02d}"
        case PeriodType.MONTH:
            return day.format("YYYY-MM")
        case PeriodType.QUARTER:
            return f"{day.year}-Q{(day.month - 1) // 3 + 1}"


def calendar_filename(
    day: pendulum.Date,
    period: PeriodType,
    extension: str = "md",
) -> str:
    """Return the calendar-note filename for the period containing ``day``."""
    return f"{period_date_string(day, period)}.{extension}"


def calendar_filename_start(filename: str) -> pendulum.Date | None:
    """Return the first day covered by a calendar-note filename.

    Returns:
        The start date, or None if the filename is not a calendar filename.
    """
    if match := _DAY_RE.search(filename):
        year, month, day = (int(part) for part in match.groups())
        return pendulum.date(year, month, day)
    if match := _WEEK_RE.search(filename):
        year, week = (int(part) for part in match.groups())
        return pendulum.Date.fromisocalendar(year, week, 1)
    if match := _MONTH_RE.search(filename):
        year, month = (int(part) for part in match.groups())
        return pendulum.date(year, month, 1)
    if match := _QUARTER_RE.search(filename):
        year, quarter = (int(part) for part in match.groups())
        return pendulum.date(year, 3 * (quarter - 1) + 1, 1)
    return None


def calendar_period_of(filename: str) -> PeriodType | None:
    """Return the period a calendar-note filename covers, or None."""
    if _DAY_RE.search(filename):
        return PeriodType.DAY
    if _WEEK_RE.search(filename):
        return PeriodType.WEEK
    if _MONTH_RE.search(filename):
        return PeriodType.MONTH
    if _QUARTER_RE.search(filename):
        return PeriodType.QUARTER
    return None


def schedule_reference(filename: str) -> str | None:
    """Return the ``>date`` marker that schedules a line into a calendar note.

    Examples:
        >>> schedule_reference("20240517.md")
        '>2024-05-17'
        >>> schedule_reference("2024-W20.md")
        '>2024-W20'
    """
    period = calendar_period_of(filename)
    start = calendar_filename_start(filename)
    if period is None or start is None:
        return None
    if period is PeriodType.DAY:
        return f">{start.to_date_string()}"
    return f">{period_date_string(start, period)}"


def filename_is_in_future(filename: str, reference: pendulum.Date) -> bool:
    """Check whether a calendar-note filename starts after ``reference``.

    Non-calendar filenames are never in the future.
    """
    start = calendar_filename_start(filename)
    return start is not None and start > reference


def scheduled_dates(content: str) -> list[pendulum.Date]:
    """Return all ``>YYYY-MM-DD`` scheduled dates found in a line."""
    dates: list[pendulum.Date] = []
    for raw in _SCHEDULED_DATE_RE.findall(content):
        try:
            dates.append(pendulum.Date.fromisoformat(raw))
        except ValueError:
            continue
    return dates


def includes_scheduled_future_date(content: str, reference: pendulum.Date) -> bool:
    """Check whether a line is scheduled to a date after ``reference``."""
    return any(day > reference for day in scheduled_dates(content))

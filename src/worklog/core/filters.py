"""Translate CLI filter options into a normalized date interval and entity filter."""

import datetime
from dataclasses import dataclass
from typing import Optional

from worklog.core.errors import ValidationError

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"


@dataclass(frozen=True)
class EntryFilter:
    """Normalized query filter.

    The date interval is half-open: ``start <= date < end``. A bound of
    None means the interval is unbounded on that side.

    Attributes:
        start: Inclusive lower bound
        end: Exclusive upper bound
        consultant: Exact consultant name
        project: Exact project name
        customer: Exact customer name
    """

    start: Optional[datetime.date] = None
    end: Optional[datetime.date] = None
    consultant: Optional[str] = None
    project: Optional[str] = None
    customer: Optional[str] = None

    @property
    def is_unbounded(self) -> bool:
        """True when neither date bound is set."""
        return self.start is None and self.end is None

    def contains(self, day: datetime.date) -> bool:
        """Check whether a date falls inside the interval."""
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day >= self.end:
            return False
        return True


def parse_date(value: str) -> datetime.date:
    """Parse a YYYY-MM-DD string.

    Raises:
        ValidationError: If the string is not a valid date
    """
    try:
        return datetime.datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise ValidationError("error.invalid_date", value=value) from e


def parse_month(value: str) -> tuple[int, int]:
    """Parse a YYYY-MM string into (year, month).

    Raises:
        ValidationError: If the string is not a valid month
    """
    try:
        parsed = datetime.datetime.strptime(value, MONTH_FORMAT)
    except ValueError as e:
        raise ValidationError("error.invalid_month", value=value) from e
    return parsed.year, parsed.month


def iso_week_start(year: int, week: int) -> datetime.date:
    """Monday of an ISO-8601 week.

    Week 1 is the week containing the first Thursday of the year, so its
    Monday is that Thursday minus three days.

    Args:
        year: Calendar year
        week: Week number, 1-53

    Returns:
        Date of the week's Monday
    """
    jan1 = datetime.date(year, 1, 1)
    days_until_thursday = (3 - jan1.weekday()) % 7
    first_thursday = jan1 + datetime.timedelta(days=days_until_thursday)
    first_monday = first_thursday - datetime.timedelta(days=3)
    return first_monday + datetime.timedelta(weeks=week - 1)


def month_range(year: int, month: int) -> tuple[datetime.date, datetime.date]:
    """First day of a month and first day of the following month."""
    start = datetime.date(year, month, 1)
    if month == 12:
        end = datetime.date(year + 1, 1, 1)
    else:
        end = datetime.date(year, month + 1, 1)
    return start, end


def build_filter(
    consultant: Optional[str] = None,
    project: Optional[str] = None,
    customer: Optional[str] = None,
    week: Optional[int] = None,
    year: Optional[int] = None,
    month: Optional[int] = None,
    date: Optional[str] = None,
    today: bool = False,
    from_date: Optional[str] = None,
    to_date: Optional[str] = None,
    default_to_current_month: bool = True,
    current_date: Optional[datetime.date] = None,
) -> EntryFilter:
    """Build an EntryFilter from CLI options.

    The first matching rule wins: week, single date, month, year, from/to.
    ``today`` is shorthand for ``date`` set to the current date. When no
    date option is given the range is the current month, or unbounded when
    ``default_to_current_month`` is False (the export path).

    Args:
        consultant: Consultant name filter
        project: Project name filter
        customer: Customer name filter
        week: ISO week number (1-53)
        year: Year for week/month, or a whole-year filter on its own
        month: Month number (1-12)
        date: Single day, YYYY-MM-DD
        today: Filter on the current date
        from_date: Inclusive start, YYYY-MM-DD
        to_date: Inclusive end day, YYYY-MM-DD
        default_to_current_month: Apply the current month when no date option is set
        current_date: Override for "today" (testing)

    Returns:
        Normalized filter

    Raises:
        ValidationError: On out-of-range week/month or malformed dates
    """
    now = current_date or datetime.date.today()
    if year and not 1 <= year <= 9998:
        raise ValidationError("error.year_range")
    if today:
        date = now.strftime(DATE_FORMAT)

    start: Optional[datetime.date] = None
    end: Optional[datetime.date] = None

    if week:
        if not 1 <= week <= 53:
            raise ValidationError("error.week_range")
        start = iso_week_start(year or now.year, week)
        end = start + datetime.timedelta(days=7)
    elif date:
        start = parse_date(date)
        end = start + datetime.timedelta(days=1)
    elif month:
        if not 1 <= month <= 12:
            raise ValidationError("error.month_range")
        start, end = month_range(year or now.year, month)
    elif year:
        start = datetime.date(year, 1, 1)
        end = datetime.date(year + 1, 1, 1)
    else:
        if from_date:
            start = parse_date(from_date)
        if to_date:
            end = parse_date(to_date) + datetime.timedelta(days=1)
        if start is None and end is None and default_to_current_month:
            start, end = month_range(now.year, now.month)

    return EntryFilter(
        start=start,
        end=end,
        consultant=consultant or None,
        project=project or None,
        customer=customer or None,
    )

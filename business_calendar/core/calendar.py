"""
Business day calendar: working weekdays, holidays and extra working dates.
"""

import re
from datetime import date, datetime, timedelta
from typing import FrozenSet, Iterable, List, Optional, Tuple, Union

from business_calendar.core.exceptions import CalendarError, InvalidInput, ParseError

DateLike = Union[date, str]

DATE_FORMAT = "%Y-%m-%d"

# Indexed by date.weekday() (Monday=0 ... Sunday=6)
DAY_NAMES = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")

FULL_DAY_NAMES = {
    "monday": "mon",
    "tuesday": "tue",
    "wednesday": "wed",
    "thursday": "thu",
    "friday": "fri",
    "saturday": "sat",
    "sunday": "sun",
}

DEFAULT_WORKING_DAYS = ("mon", "tue", "wed", "thu", "fri")

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_ONE_DAY = timedelta(days=1)


def parse_date(value: DateLike) -> date:
    """
    Convert a date object or a YYYY-MM-DD string to a date.

    Args:
        value: Date, datetime, or string in YYYY-MM-DD format.

    Returns:
        The corresponding date.

    Raises:
        ParseError: If the string is malformed or names an impossible date.
        InvalidInput: If the value is neither a date nor a string.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidInput(f"Expected a date or YYYY-MM-DD string, got {type(value).__name__}")

    if not _DATE_PATTERN.fullmatch(value):
        raise ParseError(f"Invalid date format: {value!r}. Use YYYY-MM-DD")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise ParseError(f"Invalid date: {value!r}")


def format_date(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.strftime(DATE_FORMAT)


def normalise_weekday(day: str) -> str:
    """
    Normalise a weekday token to its three-letter lowercase abbreviation.

    Accepts abbreviations and full English names in any case,
    e.g. "Mon", "monday", " FRI ".

    Raises:
        InvalidInput: If the token is not a recognised weekday.
    """
    if not isinstance(day, str):
        raise InvalidInput(f"Invalid day {day!r}")
    token = day.strip().lower()
    if token in DAY_NAMES:
        return token
    if token in FULL_DAY_NAMES:
        return FULL_DAY_NAMES[token]
    raise InvalidInput(f"Invalid day {day!r}. Use one of: {', '.join(DAY_NAMES)}")


class BusinessCalendar:
    """
    Immutable business calendar.

    A date is a business day if it is an extra working date, or if it falls
    on a working weekday and is not a holiday. Extra working dates take
    precedence over holidays, which take precedence over the weekday rule.

    Usage:
        cal = BusinessCalendar(holidays=["2023-12-25"])
        cal.is_business_day(date(2023, 12, 25))    # False
        cal.roll_forward(date(2023, 7, 8))         # date(2023, 7, 10)
        cal.add_business_days(date(2023, 7, 7), 1) # date(2023, 7, 10)
    """

    def __init__(
        self,
        working_days: Optional[Iterable[str]] = None,
        holidays: Optional[Iterable[DateLike]] = None,
        extra_working_dates: Optional[Iterable[DateLike]] = None,
        name: Optional[str] = None,
    ):
        """
        Build the calendar from its configuration.

        Args:
            working_days: Weekday names eligible as business days.
                Falls back to Monday-Friday when empty or None.
            holidays: Dates that are never business days.
            extra_working_dates: Dates that are always business days.
            name: Optional calendar name.

        Raises:
            ParseError: If a date string is malformed.
            InvalidInput: If a weekday name is not recognised.
        """
        self._name = name

        days = [normalise_weekday(d) for d in (working_days or [])]
        self._working_days: Tuple[str, ...] = tuple(dict.fromkeys(days)) or DEFAULT_WORKING_DAYS
        self._holidays: Tuple[date, ...] = tuple(parse_date(d) for d in (holidays or []))
        self._extra_working_dates: Tuple[date, ...] = tuple(
            parse_date(d) for d in (extra_working_dates or [])
        )

        self._working_day_set: FrozenSet[str] = frozenset(self._working_days)
        self._holiday_set: FrozenSet[date] = frozenset(self._holidays)
        self._extra_working_set: FrozenSet[date] = frozenset(self._extra_working_dates)

    @classmethod
    def from_config(cls, config, name: Optional[str] = None) -> "BusinessCalendar":
        """Build a calendar from a validated CalendarDefinition."""
        return cls(
            working_days=config.working_days,
            holidays=config.holidays,
            extra_working_dates=config.extra_working_dates,
            name=name,
        )

    @staticmethod
    def default_working_days() -> List[str]:
        """Working days used when none are configured."""
        return list(DEFAULT_WORKING_DAYS)

    # --- Accessors ---

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def working_days(self) -> List[str]:
        return list(self._working_days)

    @property
    def holidays(self) -> List[date]:
        return list(self._holidays)

    @property
    def extra_working_dates(self) -> List[date]:
        return list(self._extra_working_dates)

    # --- Business day rules ---

    def is_working_day(self, day: DateLike) -> bool:
        """True if the date is an extra working date or falls on a working weekday."""
        day = parse_date(day)
        return day in self._extra_working_set or DAY_NAMES[day.weekday()] in self._working_day_set

    def is_holiday(self, day: DateLike) -> bool:
        return parse_date(day) in self._holiday_set

    def is_business_day(self, day: DateLike) -> bool:
        """
        Check whether a date is a business day.

        Args:
            day: Date or YYYY-MM-DD string.

        Returns:
            True if the date is a business day, False otherwise.
        """
        day = parse_date(day)
        if day in self._extra_working_set:
            return True
        if DAY_NAMES[day.weekday()] not in self._working_day_set:
            return False
        return day not in self._holiday_set

    # --- Navigation ---

    def roll_forward(self, day: DateLike) -> date:
        """
        Roll forward to the next business day.

        If the date given is a business day it is returned unchanged,
        otherwise the first business day after it is returned.
        """
        day = parse_date(day)
        while not self.is_business_day(day):
            day = _step(day, 1)
        return day

    def roll_backward(self, day: DateLike) -> date:
        """
        Roll backward to the previous business day.

        If the date given is a business day it is returned unchanged,
        otherwise the closest business day before it is returned.
        """
        day = parse_date(day)
        while not self.is_business_day(day):
            day = _step(day, -1)
        return day

    def next_business_day(self, day: DateLike) -> date:
        """First business day strictly after the given date."""
        return self.roll_forward(_step(parse_date(day), 1))

    def previous_business_day(self, day: DateLike) -> date:
        """Closest business day strictly before the given date."""
        return self.roll_backward(_step(parse_date(day), -1))

    def add_business_days(self, day: DateLike, delta: int) -> date:
        """
        Add a number of business days to a date.

        If a non-business day is given, counting starts from the next
        business day. So,
            monday + 1 = tuesday
            friday + 1 = monday
            sunday + 1 = tuesday

        A negative delta counts backward, see subtract_business_days().

        Args:
            day: Start date or YYYY-MM-DD string.
            delta: Number of business days to add.

        Returns:
            The resulting business day.
        """
        delta = _check_delta(delta)
        if delta < 0:
            return self.subtract_business_days(day, -delta)

        result = self.roll_forward(day)
        for _ in range(delta):
            result = self.next_business_day(result)
        return result

    def subtract_business_days(self, day: DateLike, delta: int) -> date:
        """
        Subtract a number of business days from a date.

        If a non-business day is given, counting starts from the previous
        business day. So,
            friday - 1 = thursday
            monday - 1 = friday
            sunday - 1 = thursday
        """
        delta = _check_delta(delta)
        if delta < 0:
            return self.add_business_days(day, -delta)

        result = self.roll_backward(day)
        for _ in range(delta):
            result = self.previous_business_day(result)
        return result

    def business_days_between(self, start: DateLike, end: DateLike) -> int:
        """
        Count business days in the half-open range [start, end).

        business_days_between(monday, wednesday) == 2 when there are no
        holidays. Reversed arguments give the negated count.
        """
        start = parse_date(start)
        end = parse_date(end)
        if end < start:
            return -self.business_days_between(end, start)

        # Full weeks contribute one day per working weekday, corrected for
        # holidays and extra working dates inside them.
        full_weeks, remaining = divmod((end - start).days, 7)
        weeks_end = end - timedelta(days=remaining)
        count = full_weeks * len(self._working_day_set)

        for holiday in self._holiday_set:
            if (
                start <= holiday < weeks_end
                and holiday not in self._extra_working_set
                and DAY_NAMES[holiday.weekday()] in self._working_day_set
            ):
                count -= 1

        for extra in self._extra_working_set:
            if start <= extra < weeks_end and DAY_NAMES[extra.weekday()] not in self._working_day_set:
                count += 1

        current = weeks_end
        while current < end:
            if self.is_business_day(current):
                count += 1
            current += _ONE_DAY
        return count

    def __repr__(self) -> str:
        return (
            f"BusinessCalendar(name={self._name!r}, "
            f"working_days={list(self._working_days)}, "
            f"holidays={len(self._holidays)}, "
            f"extra_working_dates={len(self._extra_working_dates)})"
        )


def _step(day: date, days: int) -> date:
    try:
        return day + timedelta(days=days)
    except OverflowError:
        raise CalendarError(f"No business day found within the supported date range from {day}")


def _check_delta(delta: int) -> int:
    # bool is an int subclass but never a meaningful delta
    if isinstance(delta, bool) or not isinstance(delta, int):
        raise InvalidInput(f"Delta must be an integer, got {delta!r}")
    return delta

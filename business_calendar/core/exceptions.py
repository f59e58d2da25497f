"""
Exceptions raised by the business calendar.
"""


class CalendarError(ValueError):
    """Base exception for all calendar-related errors."""


class ParseError(CalendarError):
    """A date string is not in YYYY-MM-DD format or names an impossible date."""


class InvalidInput(CalendarError):
    """A weekday token or argument is not something the calendar understands."""


class UnknownCalendar(CalendarError):
    """No calendar with the requested name exists on the load paths."""

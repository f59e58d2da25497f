"""
Business calendar: business day checks and arithmetic over configurable
working weekdays, holidays and extra working dates.
"""

from business_calendar.core.calendar import BusinessCalendar
from business_calendar.core.exceptions import (
    CalendarError,
    InvalidInput,
    ParseError,
    UnknownCalendar,
)

__version__ = "0.1.0"

__all__ = [
    "BusinessCalendar",
    "CalendarError",
    "InvalidInput",
    "ParseError",
    "UnknownCalendar",
]

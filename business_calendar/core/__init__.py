"""
Core business day logic.
"""

from business_calendar.core.calendar import BusinessCalendar
from business_calendar.core.exceptions import (
    CalendarError,
    InvalidInput,
    ParseError,
    UnknownCalendar,
)

__all__ = [
    "BusinessCalendar",
    "CalendarError",
    "InvalidInput",
    "ParseError",
    "UnknownCalendar",
]

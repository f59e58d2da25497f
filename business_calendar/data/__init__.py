"""
Data models and schemas for the business calendar.
"""

from business_calendar.data.schemas import (
    AddBusinessDaysRequest,
    BetweenRequest,
    BusinessDayRequest,
    CalendarDefinition,
    CalendarInfo,
    CalendarSelection,
    Config,
    DateResult,
)

__all__ = [
    "AddBusinessDaysRequest",
    "BetweenRequest",
    "BusinessDayRequest",
    "CalendarDefinition",
    "CalendarInfo",
    "CalendarSelection",
    "Config",
    "DateResult",
]

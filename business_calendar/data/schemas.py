"""
Data models for the business calendar using Pydantic.
"""

from datetime import date
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from business_calendar.core.calendar import normalise_weekday, parse_date

CALENDAR_KEYS = ("holidays", "working_days", "extra_working_dates")


class CalendarDefinition(BaseModel):
    """A calendar as stored in a YAML file or passed inline."""

    model_config = ConfigDict(extra="forbid")

    working_days: List[str] = Field(default_factory=list, description="Working weekday names")
    holidays: List[date] = Field(default_factory=list, description="Holiday dates")
    extra_working_dates: List[date] = Field(
        default_factory=list, description="Dates that are always business days"
    )

    @field_validator("working_days", "holidays", "extra_working_dates", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        """YAML keys with no value load as None."""
        return [] if v is None else v

    @field_validator("working_days")
    @classmethod
    def validate_working_days(cls, v: List[str]) -> List[str]:
        return [normalise_weekday(day) for day in v]

    @field_validator("holidays", "extra_working_dates", mode="before")
    @classmethod
    def validate_dates(cls, v):
        """Only accept date objects or strict YYYY-MM-DD strings."""
        if not isinstance(v, list):
            return v
        return [parse_date(d) for d in v]


class CalendarSelection(BaseModel):
    """Either a named calendar or an inline definition."""

    calendar: Optional[str] = Field(default=None, description="Name of a calendar on the load path")
    working_days: Optional[List[str]] = Field(default=None, description="Inline working weekday names")
    holidays: Optional[List[str]] = Field(default=None, description="Inline holidays (YYYY-MM-DD)")
    extra_working_dates: Optional[List[str]] = Field(
        default=None, description="Inline extra working dates (YYYY-MM-DD)"
    )


class BusinessDayRequest(CalendarSelection):
    """Request for business day checks and rolling."""

    date: str = Field(..., description="Date in YYYY-MM-DD format")


class AddBusinessDaysRequest(CalendarSelection):
    """Request for adding (or, with a negative delta, subtracting) business days."""

    date: str = Field(..., description="Date in YYYY-MM-DD format")
    delta: int = Field(..., description="Business days to add; negative counts backward")


class BetweenRequest(CalendarSelection):
    """Request for counting business days in [start_date, end_date)."""

    start_date: str = Field(..., description="Start date (inclusive)")
    end_date: str = Field(..., description="End date (exclusive)")


class CalendarInfo(BaseModel):
    """Configuration snapshot of a calendar."""

    name: Optional[str] = None
    working_days: List[str]
    holidays: List[str]
    extra_working_dates: List[str]


class DateResult(BaseModel):
    """Result of a date calculation."""

    input: str
    result: str
    is_business_day: bool


class Config(BaseModel):
    """Configuration for the business calendar tools."""

    calendar_directories: List[str] = Field(
        default_factory=list, description="Extra directories searched for <name>.yml calendars"
    )
    default_calendar: Optional[str] = Field(
        default=None, description="Calendar used when none is selected"
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API server port")

    @field_validator("calendar_directories", mode="before")
    @classmethod
    def split_directories(cls, v: Union[str, List[str], None]):
        """Accept a single path as well as a list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level

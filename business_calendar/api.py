"""
FastAPI REST API for the business calendar.
"""

import logging
from typing import List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from business_calendar.config.manager import ConfigManager
from business_calendar.core.calendar import BusinessCalendar, format_date, parse_date
from business_calendar.core.exceptions import UnknownCalendar
from business_calendar.core.loader import CalendarLoader
from business_calendar.data.schemas import (
    AddBusinessDaysRequest,
    BetweenRequest,
    BusinessDayRequest,
    CalendarInfo,
    CalendarSelection,
    DateResult,
)

logger = logging.getLogger(__name__)

# Load configuration
config_manager = ConfigManager()
config = config_manager.load_config()

# Initialize components
loader = CalendarLoader.from_config(config)


# API Models
class BusinessDayResponse(BaseModel):
    """Response model for a business day check."""

    date: str
    is_business_day: bool


class BetweenResponse(BaseModel):
    """Response model for counting business days."""

    start_date: str
    end_date: str
    business_days: int


def select_calendar(request: CalendarSelection) -> BusinessCalendar:
    """Calendar named in the request, or the one it defines inline."""
    return loader.resolve(
        name=request.calendar,
        working_days=request.working_days,
        holidays=request.holidays,
        extra_working_dates=request.extra_working_dates,
        default=config.default_calendar,
    )


def calendar_info(calendar: BusinessCalendar) -> CalendarInfo:
    return CalendarInfo(
        name=calendar.name,
        working_days=calendar.working_days,
        holidays=[format_date(d) for d in calendar.holidays],
        extra_working_dates=[format_date(d) for d in calendar.extra_working_dates],
    )


# FastAPI app
app = FastAPI(
    title="Business Calendar API",
    description="Business day checks and arithmetic over configurable calendars",
    version="0.1.0",
)


@app.get("/")
async def root():
    """API root endpoint with basic info."""
    return {
        "name": "Business Calendar API",
        "version": "0.1.0",
        "endpoints": {
            "GET /calendars": "List available calendars",
            "GET /calendars/{name}": "Show a calendar's configuration",
            "POST /business-day": "Check whether a date is a business day",
            "POST /roll-forward": "Roll a date forward to the next business day",
            "POST /add-business-days": "Add (or subtract) business days",
            "POST /business-days-between": "Count business days in [start_date, end_date)",
        },
    }


@app.get("/calendars", response_model=List[str])
def list_calendars():
    """List the calendars available on the load path."""
    return loader.available()


@app.get("/calendars/{name}", response_model=CalendarInfo)
def get_calendar(name: str):
    """Show the working days, holidays and extra working dates of a calendar."""
    try:
        return calendar_info(loader.load_cached(name))
    except UnknownCalendar as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/business-day", response_model=BusinessDayResponse)
def check_business_day(request: BusinessDayRequest):
    """Check whether a date is a business day."""
    try:
        calendar = select_calendar(request)
        day = parse_date(request.date)
        return BusinessDayResponse(date=format_date(day), is_business_day=calendar.is_business_day(day))
    except UnknownCalendar as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/roll-forward", response_model=DateResult)
def roll_forward(request: BusinessDayRequest):
    """
    Roll a date forward to the next business day.

    A date that already is a business day is returned unchanged.
    """
    try:
        calendar = select_calendar(request)
        day = parse_date(request.date)
        result = calendar.roll_forward(day)
        return DateResult(input=format_date(day), result=format_date(result), is_business_day=True)
    except UnknownCalendar as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/add-business-days", response_model=DateResult)
def add_business_days(request: AddBusinessDaysRequest):
    """
    Add business days to a date.

    Counting starts from the next business day if the date is not one.
    A negative delta counts backward from the previous business day.
    """
    try:
        calendar = select_calendar(request)
        day = parse_date(request.date)
        result = calendar.add_business_days(day, request.delta)
        return DateResult(input=format_date(day), result=format_date(result), is_business_day=True)
    except UnknownCalendar as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Calculation failed")
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@app.post("/business-days-between", response_model=BetweenResponse)
def business_days_between(request: BetweenRequest):
    """Count business days from start_date (inclusive) to end_date (exclusive)."""
    try:
        calendar = select_calendar(request)
        start = parse_date(request.start_date)
        end = parse_date(request.end_date)
        return BetweenResponse(
            start_date=format_date(start),
            end_date=format_date(end),
            business_days=calendar.business_days_between(start, end),
        )
    except UnknownCalendar as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}

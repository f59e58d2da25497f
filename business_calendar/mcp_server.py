"""
MCP Server for the Business Calendar.

This module provides an MCP (Model Context Protocol) server that exposes
the business calendar to Claude Desktop and other MCP clients.

Supports two transport modes:
- stdio: For local Claude Desktop integration
- sse: For HTTP-based integration (Docker, remote servers)
"""

import argparse
import logging
import os
from typing import List, Optional

from mcp.server.fastmcp import FastMCP

from business_calendar.config.manager import ConfigManager
from business_calendar.core.calendar import BusinessCalendar, format_date, parse_date
from business_calendar.core.loader import CalendarLoader

logger = logging.getLogger(__name__)

# Load configuration
config_manager = ConfigManager()
config = config_manager.load_config()

# Initialize components
loader = CalendarLoader.from_config(config)


def _select_calendar(
    calendar: Optional[str],
    working_days: Optional[List[str]],
    holidays: Optional[List[str]],
    extra_working_dates: Optional[List[str]],
) -> BusinessCalendar:
    return loader.resolve(
        name=calendar,
        working_days=working_days,
        holidays=holidays,
        extra_working_dates=extra_working_dates,
        default=config.default_calendar,
    )


def create_mcp_server(host: str = "127.0.0.1", port: int = 8000) -> FastMCP:
    """Create and configure the MCP server with tools."""
    mcp = FastMCP("Business Calendar", host=host, port=port)

    @mcp.tool()
    def is_business_day(
        date: str,
        calendar: Optional[str] = None,
        working_days: Optional[List[str]] = None,
        holidays: Optional[List[str]] = None,
        extra_working_dates: Optional[List[str]] = None,
    ) -> dict:
        """
        Check whether a date is a business day.

        A date is a business day if it is an extra working date, or if it
        falls on a working weekday and is not a holiday.

        Args:
            date: Date in format YYYY-MM-DD (e.g., "2023-12-25")
            calendar: Name of a configured calendar (see list_calendars)
            working_days: Inline working weekdays (e.g., ["mon", "tue", "wed", "thu", "fri"])
            holidays: Inline holiday dates in format YYYY-MM-DD
            extra_working_dates: Inline dates that are always business days

        Returns:
            Dictionary with the date and is_business_day flag.

        Examples:
            >>> is_business_day("2023-12-25", holidays=["2023-12-25"])
            {"date": "2023-12-25", "is_business_day": false}
        """
        try:
            cal = _select_calendar(calendar, working_days, holidays, extra_working_dates)
            day = parse_date(date)
            return {"date": format_date(day), "is_business_day": cal.is_business_day(day)}
        except ValueError as e:
            return {"error": str(e)}

    @mcp.tool()
    def roll_forward(
        date: str,
        calendar: Optional[str] = None,
        working_days: Optional[List[str]] = None,
        holidays: Optional[List[str]] = None,
        extra_working_dates: Optional[List[str]] = None,
    ) -> dict:
        """
        Roll a date forward to the next business day.

        A date that already is a business day is returned unchanged.

        Args:
            date: Date in format YYYY-MM-DD (e.g., "2023-07-08")
            calendar: Name of a configured calendar (see list_calendars)
            working_days: Inline working weekdays
            holidays: Inline holiday dates in format YYYY-MM-DD
            extra_working_dates: Inline dates that are always business days

        Returns:
            Dictionary with the input date and the resulting business day.

        Examples:
            Saturday rolls to Monday:
            >>> roll_forward("2023-07-08")
            {"input": "2023-07-08", "result": "2023-07-10"}
        """
        try:
            cal = _select_calendar(calendar, working_days, holidays, extra_working_dates)
            day = parse_date(date)
            return {"input": format_date(day), "result": format_date(cal.roll_forward(day))}
        except ValueError as e:
            return {"error": str(e)}

    @mcp.tool()
    def add_business_days(
        date: str,
        delta: int,
        calendar: Optional[str] = None,
        working_days: Optional[List[str]] = None,
        holidays: Optional[List[str]] = None,
        extra_working_dates: Optional[List[str]] = None,
    ) -> dict:
        """
        Add a number of business days to a date.

        If the date is not a business day, counting starts from the next
        business day. A negative delta counts backward.

        Args:
            date: Start date in format YYYY-MM-DD
            delta: Number of business days to add (negative to subtract)
            calendar: Name of a configured calendar (see list_calendars)
            working_days: Inline working weekdays
            holidays: Inline holiday dates in format YYYY-MM-DD
            extra_working_dates: Inline dates that are always business days

        Returns:
            Dictionary with the input date, delta and resulting business day.

        Examples:
            Friday + 1 is Monday:
            >>> add_business_days("2023-07-07", 1)
            {"input": "2023-07-07", "delta": 1, "result": "2023-07-10"}
        """
        try:
            cal = _select_calendar(calendar, working_days, holidays, extra_working_dates)
            day = parse_date(date)
            return {
                "input": format_date(day),
                "delta": delta,
                "result": format_date(cal.add_business_days(day, delta)),
            }
        except ValueError as e:
            return {"error": str(e)}
        except Exception as e:
            logger.exception("Calculation failed")
            return {"error": f"Calculation error: {str(e)}"}

    @mcp.tool()
    def business_days_between(
        start_date: str,
        end_date: str,
        calendar: Optional[str] = None,
        working_days: Optional[List[str]] = None,
        holidays: Optional[List[str]] = None,
        extra_working_dates: Optional[List[str]] = None,
    ) -> dict:
        """
        Count business days from start_date (inclusive) to end_date (exclusive).

        Args:
            start_date: Start date in format YYYY-MM-DD
            end_date: End date in format YYYY-MM-DD
            calendar: Name of a configured calendar (see list_calendars)
            working_days: Inline working weekdays
            holidays: Inline holiday dates in format YYYY-MM-DD
            extra_working_dates: Inline dates that are always business days

        Returns:
            Dictionary with both dates and the business_days count.
        """
        try:
            cal = _select_calendar(calendar, working_days, holidays, extra_working_dates)
            start = parse_date(start_date)
            end = parse_date(end_date)
            return {
                "start_date": format_date(start),
                "end_date": format_date(end),
                "business_days": cal.business_days_between(start, end),
            }
        except ValueError as e:
            return {"error": str(e)}

    @mcp.tool()
    def list_calendars() -> dict:
        """
        List the named calendars that can be passed as `calendar`.

        Returns:
            Dictionary with the number of calendars and their names.
        """
        names = loader.available()
        return {"count": len(names), "calendars": names}

    return mcp


def main():
    """Run the MCP server with configurable transport.

    Transport can be set via:
    - Command line: --transport sse --port 8080
    - Environment: MCP_TRANSPORT=sse MCP_PORT=8080 MCP_HOST=0.0.0.0
    """
    parser = argparse.ArgumentParser(description="Business Calendar MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=os.environ.get("MCP_TRANSPORT", "stdio"),
        help="Transport mode: stdio (default) or sse for HTTP",
    )
    parser.add_argument(
        "--host",
        default=os.environ.get("MCP_HOST", os.environ.get("FASTMCP_HOST", "0.0.0.0")),
        help="Host to bind to (SSE mode only, default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("MCP_PORT", os.environ.get("FASTMCP_PORT", "8080"))),
        help="Port to listen on (SSE mode only, default: 8080)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    # stdout carries the protocol in stdio mode, so logs go to stderr
    logging.basicConfig(
        level=logging.DEBUG if args.debug else config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    mcp = create_mcp_server(host=args.host, port=args.port)
    logger.info("Starting Business Calendar MCP server (%s)", args.transport)

    if args.transport == "sse":
        mcp.run(transport="sse")
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()

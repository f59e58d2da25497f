"""
CLI interface for the business calendar.
"""

import functools
import logging
import sys

import click

from business_calendar.config.manager import ConfigManager
from business_calendar.core.calendar import BusinessCalendar, parse_date
from business_calendar.core.loader import CalendarLoader
from business_calendar.output.formatter import ConsoleFormatter

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Lets negative deltas such as "-3" through as arguments
NUMERIC_ARGS = {"ignore_unknown_options": True}


def calendar_options(f):
    """Options selecting the calendar a command works on."""

    @click.option(
        "--calendar", "-n",
        help="Name of a calendar on the load path (e.g., weekdays)",
    )
    @click.option(
        "--working-day", "-w",
        multiple=True,
        help="Working weekday (mon..sun); repeat for several",
    )
    @click.option(
        "--holiday", "-H",
        multiple=True,
        help="Holiday date (YYYY-MM-DD); repeat for several",
    )
    @click.option(
        "--extra-working-date", "-x",
        multiple=True,
        help="Date that is always a business day (YYYY-MM-DD); repeat for several",
    )
    @click.option(
        "--config", "-c",
        type=click.Path(exists=True),
        help="Path to config file (optional)",
    )
    @click.option(
        "--verbose", "-v",
        is_flag=True,
        default=False,
        help="Enable debug logging",
    )
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        return f(*args, **kwargs)

    return wrapper


def build_calendar(calendar, working_day, holiday, extra_working_date, config, verbose) -> BusinessCalendar:
    """
    Build the calendar selected by the common command options.

    Raises:
        ValueError: If the configuration or calendar selection is invalid.
    """
    cfg = ConfigManager(config).load_config()
    logging.getLogger().setLevel(logging.DEBUG if verbose else cfg.log_level)

    loader = CalendarLoader.from_config(cfg)
    return loader.resolve(
        name=calendar,
        working_days=list(working_day),
        holidays=list(holiday),
        extra_working_dates=list(extra_working_date),
        default=cfg.default_calendar,
    )


def run_command(func):
    """Report user errors on the console and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        formatter = ConsoleFormatter()
        try:
            return func(formatter, *args, **kwargs)
        except ValueError as e:
            formatter.print_error(str(e))
            sys.exit(1)
        except Exception as e:
            logger.debug("Unexpected error", exc_info=True)
            formatter.print_error(f"Unexpected error: {e}")
            sys.exit(1)

    return wrapper


@click.group()
@click.version_option(version="0.1.0", prog_name="business-calendar")
def main():
    """Business Calendar - Business day checks and arithmetic."""
    pass


@main.command()
@click.argument("day")
@calendar_options
@run_command
def check(formatter, day, calendar, working_day, holiday, extra_working_date, config, verbose):
    """Check whether DAY (YYYY-MM-DD) is a business day."""
    cal = build_calendar(calendar, working_day, holiday, extra_working_date, config, verbose)
    day = parse_date(day)
    formatter.print_check(day, cal.is_business_day(day))


@main.command()
@click.argument("day")
@click.option(
    "--backward", "-b",
    is_flag=True,
    default=False,
    help="Roll back to the previous business day instead",
)
@calendar_options
@run_command
def roll(formatter, day, backward, calendar, working_day, holiday, extra_working_date, config, verbose):
    """Roll DAY to the nearest business day (forward by default)."""
    cal = build_calendar(calendar, working_day, holiday, extra_working_date, config, verbose)
    day = parse_date(day)
    if backward:
        formatter.print_date_result("roll backward", day, cal.roll_backward(day))
    else:
        formatter.print_date_result("roll forward", day, cal.roll_forward(day))


@main.command(context_settings=NUMERIC_ARGS)
@click.argument("day")
@click.argument("delta", type=int)
@calendar_options
@run_command
def add(formatter, day, delta, calendar, working_day, holiday, extra_working_date, config, verbose):
    """Add DELTA business days to DAY. A negative DELTA counts backward."""
    cal = build_calendar(calendar, working_day, holiday, extra_working_date, config, verbose)
    day = parse_date(day)
    formatter.print_date_result(f"{delta:+d} business days", day, cal.add_business_days(day, delta))


@main.command(context_settings=NUMERIC_ARGS)
@click.argument("day")
@click.argument("delta", type=int)
@calendar_options
@run_command
def subtract(formatter, day, delta, calendar, working_day, holiday, extra_working_date, config, verbose):
    """Subtract DELTA business days from DAY."""
    cal = build_calendar(calendar, working_day, holiday, extra_working_date, config, verbose)
    day = parse_date(day)
    formatter.print_date_result(f"{-delta:+d} business days", day, cal.subtract_business_days(day, delta))


@main.command()
@click.argument("start")
@click.argument("end")
@calendar_options
@run_command
def between(formatter, start, end, calendar, working_day, holiday, extra_working_date, config, verbose):
    """Count business days from START (inclusive) to END (exclusive)."""
    cal = build_calendar(calendar, working_day, holiday, extra_working_date, config, verbose)
    start = parse_date(start)
    end = parse_date(end)
    formatter.print_count(start, end, cal.business_days_between(start, end))


@main.command()
@calendar_options
@run_command
def show(formatter, calendar, working_day, holiday, extra_working_date, config, verbose):
    """Show the working days, holidays and extra working dates of a calendar."""
    cal = build_calendar(calendar, working_day, holiday, extra_working_date, config, verbose)
    formatter.print_calendar(cal)


@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
@run_command
def calendars(formatter, config):
    """List the calendars available on the load path."""
    cfg = ConfigManager(config).load_config()
    formatter.print_calendars(CalendarLoader.from_config(cfg).available())


@main.command()
@click.option(
    "--host", "-h",
    default=None,
    help="Host to bind to (default: from config or 0.0.0.0)",
)
@click.option(
    "--port", "-p",
    type=int,
    default=None,
    help="Port to bind to (default: from config or 8000)",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
def serve(host, port, config):
    """Start the FastAPI server."""
    formatter = ConsoleFormatter()

    try:
        import uvicorn

        # Load configuration
        config_manager = ConfigManager(config)
        cfg = config_manager.load_config()

        # Use provided values or fall back to config
        api_host = host or cfg.api_host
        api_port = port or cfg.api_port

        formatter.console.print(f"Starting API server at http://{api_host}:{api_port}")
        formatter.console.print("Press Ctrl+C to stop")
        formatter.console.print()

        uvicorn.run(
            "business_calendar.api:app",
            host=api_host,
            port=api_port,
            reload=False,
        )

    except ImportError:
        formatter.print_error("uvicorn is required for the API server. Install it with: pip install uvicorn")
        sys.exit(1)
    except Exception as e:
        formatter.print_error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

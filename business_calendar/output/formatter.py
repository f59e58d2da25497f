"""
Console output formatting using Rich.
"""

from datetime import date
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from business_calendar.core.calendar import BusinessCalendar, format_date

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def describe(day: date) -> str:
    """Date with its weekday, e.g. '2023-07-10 (Monday)'."""
    return f"{format_date(day)} ({WEEKDAY_NAMES[day.weekday()]})"


class ConsoleFormatter:
    """Formats output for console display using Rich."""

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize the console formatter.

        Args:
            console: Console to print to. A new one is created if not given.
        """
        self.console = console or Console()

    def print_check(self, day: date, is_business_day: bool) -> None:
        """Print whether a date is a business day."""
        if is_business_day:
            verdict = Text("is a business day", style="bold green")
        else:
            verdict = Text("is not a business day", style="bold red")
        self.console.print(Text.assemble(describe(day), " ", verdict))

    def print_date_result(self, label: str, start: date, result: date) -> None:
        """
        Print the outcome of a date calculation.

        Args:
            label: Operation description, e.g. "+3 business days".
            start: Input date.
            result: Calculated date.
        """
        table = Table(show_header=False, box=None)
        table.add_column("Label", style="cyan", width=12)
        table.add_column("Value", style="white")

        table.add_row("Start:", describe(start))
        table.add_row("Operation:", label)
        table.add_row(Text("Result:", style="bold green"), Text(describe(result), style="bold green"))

        self.console.print(Panel(table, title="[bold]Business Calendar[/bold]", expand=False))
        # Plain line so the result is easy to pick out of scripted output
        self.console.print(format_date(result))

    def print_count(self, start: date, end: date, count: int) -> None:
        """Print the number of business days in [start, end)."""
        self.console.print(
            f"Business days from {format_date(start)} to {format_date(end)} (exclusive): "
            f"[bold green]{count}[/bold green]"
        )

    def print_calendar(self, calendar: BusinessCalendar) -> None:
        """
        Print a calendar's configuration.

        Args:
            calendar: Calendar to display.
        """
        self.console.print()
        title = calendar.name or "inline calendar"
        self.console.rule(f"[bold blue]Calendar: {title}[/bold blue]")
        self.console.print()

        self.console.print(f"[cyan]Working days:[/cyan] {', '.join(calendar.working_days)}")
        self.print_dates("Holidays", calendar.holidays)
        self.print_dates("Extra Working Dates", calendar.extra_working_dates)
        self.console.print()

    def print_dates(self, title: str, dates: List[date]) -> None:
        """Print a table of dates with their weekdays."""
        if not dates:
            self.console.print(f"[dim]No {title.lower()} configured.[/dim]")
            return

        table = Table(title=f"[bold]{title}[/bold]")
        table.add_column("Date", style="cyan", width=12)
        table.add_column("Day", style="dim", width=12)

        for day in dates:
            table.add_row(format_date(day), WEEKDAY_NAMES[day.weekday()])

        self.console.print(table)

    def print_calendars(self, names: List[str]) -> None:
        """Print the names of all available calendars."""
        if not names:
            self.console.print("[dim]No calendars found.[/dim]")
            return
        for name in names:
            self.console.print(name)

    def print_error(self, message: str) -> None:
        """
        Print an error message.

        Args:
            message: Error message to display.
        """
        self.console.print(f"[bold red]Error:[/bold red] {escape(message)}")


"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import MomentError
from ..services.daily_schedule import DailyScheduleService, WEEKDAY_NAMES

app = typer.Typer(
    name="dailymoment",
    help="Resolve recurring daily events against calendar dates",
    add_completion=False
)

console = Console()

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    logger.debug("Loading schedule from %s", config_path)
    return AppConfig.load_from_yaml(config_path)


def _parse_day(value: Optional[str], tz: Optional[str]) -> pendulum.Date:
    """Parse a YYYY-MM-DD option, defaulting to today."""
    if not value:
        return pendulum.today(tz or "local").date()
    try:
        return pendulum.from_format(value, "YYYY-MM-DD").date()
    except ValueError as e:
        console.print(f"[red]Error parsing date '{escape(value)}': {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def resolve(
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to schedule file. Defaults to ./schedule.yaml")] = None,
    day: Annotated[Optional[str], typer.Option("--date", help="First day to resolve (YYYY-MM-DD). Defaults to today.")] = None,
    days: Annotated[int, typer.Option("--days", "-n", help="Number of days to resolve.")] = 1,
    event: Annotated[Optional[str], typer.Option("--event", "-e", help="Only resolve the event with this name.")] = None,
    plain: Annotated[bool, typer.Option("--plain", help="One line per occurrence instead of a table.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Resolve the configured events to concrete start and end times.

    Examples:

        dailymoment resolve
        dailymoment resolve --date 2024-03-15
        dailymoment resolve --date 2024-03-11 --days 5
        dailymoment resolve --event standup --days 5 --plain
    """
    _configure_logging(verbose)

    if days < 1:
        console.print("[red]Error: --days must be at least 1.[/red]")
        raise typer.Exit(1)

    try:
        config = _load_config(config_file)
        first_day = _parse_day(day, config.timezone)
        last_day = first_day.add(days=days - 1)

        service = DailyScheduleService.from_config(config)
        if event:
            scheduled = service.find_event(event)
            if scheduled is None:
                console.print(f"[bold red]Error:[/bold red] Unknown event '{escape(event)}'.")
                raise typer.Exit(1)
            service = DailyScheduleService([scheduled])

        occurrences = service.resolve_range(first_day, last_day)

        console.print()
        if not occurrences:
            console.print("[yellow]No events scheduled in this period.[/yellow]\n")
            return

        if plain:
            for occurrence in occurrences:
                console.print(f"  {escape(occurrence.format_display())}")
            console.print()
            return

        table = Table(
            title=f"Events {first_day.format('YYYY-MM-DD')} - {last_day.format('YYYY-MM-DD')}",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Event", style="bold yellow")
        table.add_column("Start")
        table.add_column("End")
        table.add_column("Minutes", justify="right", style="dim")

        for occurrence in occurrences:
            table.add_row(
                occurrence.name,
                occurrence.start.format("ddd YYYY-MM-DD HH:mm:ss"),
                occurrence.end.format("ddd YYYY-MM-DD HH:mm:ss"),
                str(occurrence.duration_minutes())
            )

        console.print(table)
        console.print()

    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    except (ValueError, MomentError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def list_events(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to schedule file"
    )
):
    """
    List all configured events.
    """
    try:
        config = _load_config(config_file)

        if not config.events:
            console.print("[yellow]No events defined in the schedule file.[/yellow]")
            return

        table = Table(
            title="Configured events",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Name", style="bold yellow")
        table.add_column("Start")
        table.add_column("Minutes", justify="right")
        table.add_column("Time zone", style="dim")
        table.add_column("Weekdays", style="dim")

        for event in config.events:
            start = event.start
            table.add_row(
                event.name,
                f"{start.hour:02d}:{start.minute:02d}:{start.second:02d}",
                str(event.duration_minutes),
                event.timezone or config.timezone or "local",
                ", ".join(WEEKDAY_NAMES[day][:3] for day in event.weekdays)
            )

        console.print()
        console.print(table)
        console.print()

    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]dailymoment[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()

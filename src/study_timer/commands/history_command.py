"""Focus history commands: calendar, day and list views."""

from datetime import date, datetime

import typer

from study_timer.commands.decorators import AppError, command_wrapper
from study_timer.models.focus.history import HistoryStore
from study_timer.models.focus.ui import render_month_calendar
from study_timer.services.preferences import get_preferences
from study_timer.services.settings_service import get_settings_service
from study_timer.utils.exit_codes import ERROR_INVALID_ARGS
from study_timer.utils.typer_helpers import SuggestingGroup
from study_timer.utils.ui.console import get_console
from study_timer.utils.ui.formatters import format_focus_time, format_output

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Focus history and calendar")


async def _load_history() -> HistoryStore:
    history = HistoryStore(get_preferences())
    await history.load()
    return history


def _parse_month(value: str | None) -> tuple[int, int]:
    if value is None:
        today = date.today()
        return today.year, today.month
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except ValueError:
        raise AppError(
            f"Invalid month '{value}', expected YYYY-MM", ERROR_INVALID_ARGS
        ) from None
    return parsed.year, parsed.month


def _parse_day(value: str | None) -> date:
    if value is None:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise AppError(
            f"Invalid date '{value}', expected YYYY-MM-DD", ERROR_INVALID_ARGS
        ) from None


@app.command("calendar")
@command_wrapper
async def show_calendar(
    month: str | None = typer.Option(
        None, "--month", "-m", help="Month to show as YYYY-MM (default: this month)"
    ),
) -> None:
    """Show a month calendar marked with daily focus time."""
    year, month_number = _parse_month(month)
    history = await _load_history()
    totals = history.month_totals(year, month_number)
    theme_mode = get_settings_service().load().theme_mode

    console.print(
        render_month_calendar(
            year, month_number, totals, today=date.today(), theme_mode=theme_mode
        )
    )
    total = sum(totals.values())
    console.print(
        f"Month total: [bold]{format_focus_time(total)}[/bold] over {len(totals)} days"
    )


@app.command("day")
@command_wrapper
async def show_day(
    day: str | None = typer.Argument(None, help="Date as YYYY-MM-DD (default: today)"),
) -> None:
    """Show total focus time for one day."""
    target = _parse_day(day)
    history = await _load_history()
    minutes = history.minutes_for_date(target)
    sessions = len(history.grouped_by_day().get(target, []))

    if minutes == 0:
        console.print(f"[yellow]No focus time recorded on {target.isoformat()}[/yellow]")
        return
    console.print(
        f"{target.isoformat()}: [bold]{format_focus_time(minutes)}[/bold] "
        f"across {sessions} session{'s' if sessions != 1 else ''}"
    )


@app.command("list")
@command_wrapper
async def list_history(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of records to show"),
    output: str = typer.Option(
        "table", "--output", "-o", help="Output format: table, json or yaml"
    ),
) -> None:
    """List the most recent focus records."""
    if output not in ("table", "json", "yaml"):
        raise AppError(f"Unknown output format '{output}'", ERROR_INVALID_ARGS)

    history = await _load_history()
    records = list(reversed(history.records))[: max(0, limit)]
    if not records:
        console.print("[yellow]No focus history yet[/yellow]")
        return

    rows = [
        {
            "date": record.date.strftime("%Y-%m-%d %H:%M"),
            "focus_minutes": record.focus_minutes,
        }
        for record in records
    ]
    format_output(rows, output)

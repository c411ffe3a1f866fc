"""Fullscreen clock with the focus/break interval timer."""

import typer

from study_timer.commands.decorators import command_wrapper
from study_timer.models.focus.history import HistoryStore
from study_timer.models.focus.ui import ClockDisplay
from study_timer.services.clock_session import ClockSession
from study_timer.services.preferences import get_preferences
from study_timer.services.settings_service import get_settings_service
from study_timer.utils.ui.console import get_console
from study_timer.utils.ui.formatters import format_focus_time

console = get_console()


@command_wrapper
async def clock(
    start: bool = typer.Option(
        False, "--start", "-s", help="Start the focus timer immediately"
    ),
) -> None:
    """Show the live clock. Space starts/pauses the timer, 'r' resets, 'q' quits."""
    session = ClockSession(get_settings_service(), HistoryStore(get_preferences()))
    await session.open()
    if start:
        await session.toggle()

    display = ClockDisplay(console, theme_mode=session.settings.theme_mode)
    try:
        result = await display.run(session)
    finally:
        await session.close()

    if result == "interrupted":
        console.print("[yellow]Clock interrupted[/yellow]")
    console.print(
        f"Focused today: [bold]{format_focus_time(session.focus_minutes_today())}[/bold]"
    )

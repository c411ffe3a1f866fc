"""Settings commands: show, set and reset timer and theme settings."""

import typer

from study_timer.commands.decorators import AppError, command_wrapper
from study_timer.services.settings_service import (
    get_settings_service,
    parse_break_minutes,
    parse_focus_minutes,
    parse_theme_mode,
)
from study_timer.utils.exit_codes import ERROR_INVALID_ARGS
from study_timer.utils.typer_helpers import SuggestingGroup
from study_timer.utils.ui.console import get_console
from study_timer.utils.ui.formatters import format_output, format_success

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Timer and display settings")


def _settings_rows(settings) -> dict:
    return {
        "theme": settings.theme_mode.name.lower(),
        "focus_minutes": settings.focus_time_minutes,
        "break_minutes": settings.break_time_minutes,
    }


@app.command("show")
@command_wrapper
def show_settings(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show current settings."""
    settings = get_settings_service().load()
    format_output(_settings_rows(settings), output)


@app.command("set")
@command_wrapper
def set_settings(
    focus: str | None = typer.Option(
        None, "--focus", "-f", help="Focus duration in minutes (1-120)"
    ),
    break_: str | None = typer.Option(
        None, "--break", "-b", help="Break duration in minutes (1-60)"
    ),
    theme: str | None = typer.Option(
        None, "--theme", "-t", help="Theme: system, light or dark"
    ),
) -> None:
    """Update settings. Out-of-range durations are clamped."""
    if focus is None and break_ is None and theme is None:
        raise AppError(
            "Nothing to set. Use --focus, --break or --theme.", ERROR_INVALID_ARGS
        )

    service = get_settings_service()
    settings = service.load()

    if theme is not None:
        try:
            settings.theme_mode = parse_theme_mode(theme)
        except ValueError as e:
            raise AppError(str(e), ERROR_INVALID_ARGS) from e
    if focus is not None:
        settings.focus_time_minutes = parse_focus_minutes(focus)
    if break_ is not None:
        settings.break_time_minutes = parse_break_minutes(break_)

    service.save(settings)
    format_success(
        f"Focus {settings.focus_time_minutes}m, break {settings.break_time_minutes}m, "
        f"theme {settings.theme_mode.name.lower()}"
    )


@app.command("reset")
@command_wrapper
def reset_settings(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset settings to defaults."""
    if not yes and not typer.confirm("Reset all settings to defaults?"):
        console.print("[yellow]Cancelled[/yellow]")
        return

    get_settings_service().reset()
    format_success("Settings reset to defaults")

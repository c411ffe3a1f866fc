"""Main entry point for Study Timer."""

import typer

from study_timer import __version__
from study_timer.commands import clock_command, history_command, settings_command
from study_timer.utils.typer_helpers import SuggestingGroup
from study_timer.utils.ui.console import get_console

app = typer.Typer(
    name="study-timer",
    cls=SuggestingGroup,
    help="A terminal clock with a focus/break study timer and focus history",
    no_args_is_help=True,
)

console = get_console()

app.command("clock")(clock_command.clock)
app.add_typer(history_command.app, name="history", help="Focus history and calendar")
app.add_typer(settings_command.app, name="settings", help="Timer and display settings")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Study Timer[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()

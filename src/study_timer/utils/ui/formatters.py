"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table

from study_timer.utils.ui.console import get_console

console = get_console()


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    columns = list(items[0].keys())
    for column in columns:
        table.add_column(column.replace("_", " ").title())

    for item in items:
        table.add_row(*(str(item.get(column, "")) for column in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key/value rows."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="bold cyan")
    table.add_column("Value")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), str(value))

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_focus_time(minutes: int) -> str:
    """Render a minute count as ``1h 25m`` (hours omitted when zero)."""
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def format_countdown(seconds: int) -> str:
    """Render a second count as ``MM:SS``."""
    mins, secs = divmod(max(0, seconds), 60)
    return f"{mins:02d}:{secs:02d}"

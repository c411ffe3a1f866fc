"""Full-screen clock UI and calendar rendering."""

import asyncio
import calendar
from dataclasses import dataclass
from datetime import date, datetime

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.table import Table
from rich.text import Text

from study_timer.models.settings import ThemeMode
from study_timer.utils.ui.formatters import format_focus_time

from .timer import TimerState

FOCUS_COLOR = "blue"
BREAK_COLOR = "green"


@dataclass(frozen=True)
class Palette:
    text: str
    marker: str
    weekend: str = "red"


_PALETTES = {
    ThemeMode.DARK: Palette(text="bright_white", marker="dark_orange"),
    ThemeMode.LIGHT: Palette(text="black", marker="blue"),
    ThemeMode.SYSTEM: Palette(text="default", marker="dark_orange"),
}


def palette_for(theme_mode: ThemeMode) -> Palette:
    return _PALETTES[theme_mode]


def progress_bar(fraction: float, width: int = 30) -> str:
    """Render *fraction* (0..1) as a bar of filled and empty cells."""
    fraction = min(1.0, max(0.0, fraction))
    filled = round(width * fraction)
    return "█" * filled + "░" * (width - filled)


class ClockDisplay:
    """Manages the fullscreen clock display."""

    def __init__(self, console: Console | None = None, theme_mode: ThemeMode = ThemeMode.SYSTEM):
        self.console = console or Console()
        self.palette = palette_for(theme_mode)

    def create_layout(self, now: datetime, state: TimerState, today_minutes: int = 0) -> Layout:
        """Create the clock layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        today_text = Text(
            f"Today: {format_focus_time(today_minutes)} focused",
            style=f"dim {self.palette.marker}",
            justify="center",
        )
        layout["header"].update(Align.center(today_text, vertical="middle"))

        layout["body"].update(Align.center(self._create_body(now, state), vertical="middle"))
        layout["footer"].update(
            Align.center(self._create_footer(state), vertical="middle")
        )
        return layout

    def _create_body(self, now: datetime, state: TimerState) -> Group:
        components = [
            Text(now.strftime("%H:%M:%S"), style=f"bold {self.palette.text}", justify="center")
        ]

        # The timer ring only appears once a countdown has started
        if state.is_visible:
            color = BREAK_COLOR if state.is_break else FOCUS_COLOR
            label = "Break" if state.is_break else "Focus"
            components.append(Text(""))
            components.append(
                Text(state.format_remaining(), style=f"bold {color}", justify="center")
            )
            components.append(
                Text(progress_bar(state.progress), style=color, justify="center")
            )
            status = label if state.is_running else f"{label} (paused)"
            components.append(Text(status, style=color, justify="center"))

        return Group(*components)

    def _create_footer(self, state: TimerState) -> Text:
        action = "pause" if state.is_running else "start"
        hints = f"Press space to {action}  •  'r' to reset  •  'q' to quit"
        return Text(hints, style="dim", justify="center")

    async def run(self, session, refresh_interval: float = 0.25) -> str:
        """
        Run the fullscreen clock until the user quits.

        Returns 'quit' or 'interrupted'. The caller owns session teardown.
        """
        from .keyboard import KeyboardHandler

        keyboard = KeyboardHandler()

        def render() -> Layout:
            return self.create_layout(
                session.clock(), session.state, session.focus_minutes_today()
            )

        try:
            with Live(render(), console=self.console, refresh_per_second=4, screen=True) as live:
                session.start_ticking()
                while True:
                    key = keyboard.get_key()
                    if key in (" ", "p"):
                        await session.toggle()
                    elif key == "r":
                        await session.reset()
                    elif key == "q":
                        return "quit"

                    live.update(render())
                    await asyncio.sleep(refresh_interval)
        except (KeyboardInterrupt, asyncio.CancelledError):
            # asyncio.run turns Ctrl-C into cancellation of the running task
            return "interrupted"
        finally:
            keyboard.stop()


def render_month_calendar(
    year: int,
    month: int,
    totals: dict[date, int],
    today: date | None = None,
    theme_mode: ThemeMode = ThemeMode.SYSTEM,
) -> Table:
    """Build a month grid marking each day's focus total.

    Weeks start on Sunday; days outside the month are left blank.
    """
    palette = palette_for(theme_mode)
    table = Table(
        title=f"{calendar.month_name[month]} {year}",
        show_lines=True,
        header_style=f"bold {palette.text}",
    )
    weekday_names = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    for index, name in enumerate(weekday_names):
        weekend = index in (0, 6)
        table.add_column(
            name,
            justify="center",
            min_width=7,
            header_style=palette.weekend if weekend else None,
        )

    for week in calendar.Calendar(firstweekday=calendar.SUNDAY).monthdatescalendar(year, month):
        cells = []
        for day in week:
            if day.month != month:
                cells.append(Text(""))
                continue

            weekend = day.weekday() >= 5
            style = palette.weekend if weekend else palette.text
            if day == today:
                style = f"bold underline {palette.text}"
            cell = Text(str(day.day), style=style)

            minutes = totals.get(day, 0)
            if minutes > 0:
                cell.append("\n")
                cell.append(format_focus_time(minutes), style=f"bold {palette.marker}")
            cells.append(cell)
        table.add_row(*cells)

    return table

"""Unit tests for the clock command and the main app wiring."""

from __future__ import annotations

from datetime import datetime
from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from study_timer import __version__
from study_timer.main import app
from study_timer.models.focus.history import HISTORY_KEY
from study_timer.models.focus.record import FocusRecord
from study_timer.services.preferences import PreferencesStore

runner = CliRunner()


def _patch_display(result="quit", side_effect=None):
    run = AsyncMock(return_value=result, side_effect=side_effect)
    return patch("study_timer.commands.clock_command.ClockDisplay.run", run), run


class TestMainApp:
    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "clock" in result.stdout
        assert "history" in result.stdout
        assert "settings" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_typo_suggests_command(self):
        result = runner.invoke(app, ["clok"])
        assert result.exit_code == 1
        assert "Did you mean this?" in result.stdout
        assert "clock" in result.stdout


class TestClockCommand:
    def test_quit_prints_today_total(self):
        p, run = _patch_display()
        with p:
            result = runner.invoke(app, ["clock"])
        assert result.exit_code == 0
        run.assert_awaited_once()
        assert "Focused today: 0m" in result.stdout

    def test_interrupted(self):
        p, _ = _patch_display(result="interrupted")
        with p:
            result = runner.invoke(app, ["clock"])
        assert result.exit_code == 0
        assert "Clock interrupted" in result.stdout

    def test_running_focus_is_flushed_on_exit(self, isolated_dirs):
        async def fake_run(session, refresh_interval=0.25):
            for _ in range(125):
                await session.timer.tick()
            return "quit"

        p, _ = _patch_display(side_effect=fake_run)
        with p:
            result = runner.invoke(app, ["clock", "--start"])

        assert result.exit_code == 0
        store = PreferencesStore(data_dir=isolated_dirs / "data")
        entries = [FocusRecord.from_json(raw) for raw in store.get_string_list(HISTORY_KEY)]
        assert [entry.focus_minutes for entry in entries] == [2]
        assert entries[0].date.date() == datetime.now().date()

    def test_display_error_still_closes_session(self, isolated_dirs):
        p, _ = _patch_display(side_effect=RuntimeError("terminal gone"))
        with p:
            result = runner.invoke(app, ["clock", "--start"])
        assert result.exit_code == 1
        assert "terminal gone" in result.stdout

"""Unit tests for command decorators."""

from unittest.mock import patch

import pytest
import typer
from typer.testing import CliRunner

from study_timer.commands.decorators import AppError, command_wrapper
from study_timer.utils.exit_codes import ERROR_STORAGE

runner = CliRunner()


class TestAppError:
    def test_app_error_default_exit_code(self):
        """AppError defaults to exit_code=1."""
        err = AppError("something went wrong")
        assert str(err) == "something went wrong"
        assert err.exit_code == 1

    def test_app_error_custom_exit_code(self):
        err = AppError("bad month", exit_code=2)
        assert err.exit_code == 2
        assert str(err) == "bad month"

    def test_app_error_can_be_raised_and_caught(self):
        with pytest.raises(AppError) as exc_info:
            raise AppError("test", exit_code=3)
        assert exc_info.value.exit_code == 3


class TestCommandWrapper:
    """Tests for command_wrapper decorator."""

    def test_wraps_sync_function(self):
        """Sync function is called directly."""
        called = []

        @command_wrapper
        def my_cmd():
            called.append(True)

        my_cmd()
        assert called == [True]

    def test_wraps_async_function(self):
        """Async function is run via asyncio.run."""
        called = []

        @command_wrapper
        async def my_async_cmd():
            called.append(True)
            return "done"

        assert my_async_cmd() == "done"
        assert called == [True]

    def test_preserves_name(self):
        @command_wrapper
        def calendar():
            pass

        assert calendar.__name__ == "calendar"

    def test_app_error_caught_and_reraises_exit(self):
        """AppError is caught, format_error called, Exit raised."""

        @command_wrapper
        def failing_cmd():
            raise AppError("test error", exit_code=2)

        app_test = typer.Typer()
        app_test.command()(failing_cmd)

        with patch("study_timer.commands.decorators.format_error") as mock_fmt:
            result = runner.invoke(app_test, [])

        assert result.exit_code == 2
        mock_fmt.assert_called_once_with("test error")

    def test_typer_exit_reraises(self):
        @command_wrapper
        def exit_cmd():
            raise typer.Exit(code=0)

        app_test = typer.Typer()
        app_test.command()(exit_cmd)

        result = runner.invoke(app_test, [])
        assert result.exit_code == 0

    def test_unexpected_exception_caught(self):
        """Unexpected exception → format_error + Exit(1)."""

        @command_wrapper
        def crashing_cmd():
            raise RuntimeError("unexpected crash")

        app_test = typer.Typer()
        app_test.command()(crashing_cmd)

        with patch("study_timer.commands.decorators.format_error") as mock_fmt:
            result = runner.invoke(app_test, [])

        assert result.exit_code == 1
        mock_fmt.assert_called_once_with("An unexpected error occurred: unexpected crash")

    def test_storage_error_uses_storage_exit_code(self):
        @command_wrapper
        def unwritable_cmd():
            raise PermissionError("read-only file system")

        app_test = typer.Typer()
        app_test.command()(unwritable_cmd)

        with patch("study_timer.commands.decorators.format_error") as mock_fmt:
            result = runner.invoke(app_test, [])

        assert result.exit_code == ERROR_STORAGE
        mock_fmt.assert_called_once_with(
            "Could not access local storage: read-only file system"
        )

    def test_failures_are_logged(self, isolated_dirs):
        @command_wrapper
        def broken():
            raise AppError("nope")

        with patch("study_timer.commands.decorators.format_error"):
            with pytest.raises(typer.Exit):
                broken()

        log_text = (isolated_dirs / "logs" / "study_timer.log").read_text()
        assert "command started: broken" in log_text
        assert "command failed: broken" in log_text

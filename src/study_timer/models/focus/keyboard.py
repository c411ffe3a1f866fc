"""Non-blocking keyboard input for the clock screen."""

import select
import sys
import termios
import tty
from typing import Optional


class KeyboardHandler:
    """Reads single keypresses from a cbreak-mode terminal without blocking."""

    def __init__(self):
        self.fd = sys.stdin.fileno()
        self.old_settings = None
        self._setup()

    def _setup(self):
        """Put the terminal in cbreak mode, remembering the old settings."""
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except termios.error:
            # stdin is not a terminal (piped input, test runner)
            self.old_settings = None

    def get_key(self) -> Optional[str]:
        """
        Get a single keypress without blocking.

        Returns the key character or None if no key pressed.
        """
        if self.old_settings is None:
            return None
        if select.select([sys.stdin], [], [], 0)[0]:
            return sys.stdin.read(1).lower()
        return None

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None

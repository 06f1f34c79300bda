"""Terminal control helpers for a picker session.

Owns raw-mode lifecycle and alternate-screen switching, plus terminal size
lookup with a fixed fallback.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

FALLBACK_SIZE = (50, 10)

ENTER_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_SCREEN = b"\x1b[?25h\x1b[?1049l"


def get_terminal_size(fd: int | None = None) -> os.terminal_size:
    """Return the size of ``fd`` (or the environment's), else 50x10."""
    if fd is not None:
        try:
            return os.get_terminal_size(fd)
        except OSError:
            pass
    return shutil.get_terminal_size(FALLBACK_SIZE)


class TerminalController:
    """Put a tty into byte-at-a-time mode and restore it afterwards."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw mode on the alternate screen with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_SCREEN)

    def disable_tui_mode(self) -> None:
        """Restore the main screen, the cursor, and the saved tty state."""
        os.write(self.stdout_fd, LEAVE_SCREEN)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> os.terminal_size:
        return get_terminal_size(self.stdout_fd)

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()


@contextlib.contextmanager
def open_tty(path: str = "/dev/tty"):
    """Yield a read/write fd for the controlling terminal."""
    fd = os.open(path, os.O_RDWR | os.O_NOCTTY)
    try:
        yield fd
    finally:
        os.close(fd)

"""
Terminal input handling.

Puts the controlling terminal into cbreak mode (no line buffering,
no echo) for the lifetime of a game and reads one keystroke at a time.
"""
import logging
import os
import sys
import termios
import tty
from types import TracebackType
from typing import List, Optional, TextIO, Type


logger = logging.getLogger(__name__)

NO_KEY = b"\0"


class TerminalError(RuntimeError):
    """Raised when the input stream is not an interactive terminal."""


class TerminalMode:
    """
    Context manager that switches stdin to cbreak mode.

    The saved attributes are restored on every exit path,
    including exceptions and KeyboardInterrupt.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdin
        self._fd: Optional[int] = None
        self._saved: Optional[List] = None

    def __enter__(self) -> "TerminalMode":
        if not self.stream.isatty():
            raise TerminalError("Not a terminal.")
        self._fd = self.stream.fileno()
        self._saved = termios.tcgetattr(self._fd)
        # clears ICANON and ECHO, VMIN=1 VTIME=0
        tty.setcbreak(self._fd, termios.TCSAFLUSH)
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.restore()

    def restore(self) -> None:
        """Put back the attributes saved on entry. Safe to call twice."""
        if self._saved is None:
            return
        termios.tcsetattr(self._fd, termios.TCSANOW, self._saved)
        self._saved = None

    def read_byte(self) -> bytes:
        """
        Block until one byte of input is available.

        Returns:
            The byte read, b"" at end of input, or NO_KEY if the
            read failed.
        """
        try:
            return os.read(self._fd, 1)
        except OSError as error:
            logger.warning("read() failed: %s", error)
            return NO_KEY

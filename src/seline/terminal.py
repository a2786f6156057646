"""Terminal capabilities used by the renderer and session.

``Terminal`` is the narrow interface the core depends on. ``TtyTerminal``
implements it on the controlling terminal (``/dev/tty``), so candidates can
arrive on a piped stdin and results can leave on a piped stdout while the
picker itself talks to the user's terminal.
"""

from __future__ import annotations

import os
import sys
import termios
from contextlib import contextmanager
from typing import Iterator, Protocol, TextIO

import readchar
from rich.console import Console
from rich.control import Control
from rich.segment import ControlType
from rich.text import Text

TTY_PATH = "/dev/tty"
DEFAULT_COLUMNS = 50
DEFAULT_ROWS = 10


@contextmanager
def _as_os_error() -> Iterator[None]:
    """Re-raise termios.error (not an OSError subclass) as OSError."""
    try:
        yield
    except termios.error as e:
        raise OSError(*e.args) from e


def _is_tty(stream: TextIO | None) -> bool:
    try:
        return stream is not None and stream.isatty()
    except (AttributeError, ValueError):
        return False


class Terminal(Protocol):
    """Protocol for the terminal a session draws on and reads keys from."""

    def size(self) -> tuple[int, int]:
        """Return (columns, rows)."""
        ...

    def read_key(self) -> str:
        """Block until a key is pressed; raise KeyboardInterrupt on Ctrl+C."""
        ...

    def write(self, text: Text) -> None:
        """Write styled text at the cursor."""
        ...

    def erase_rows(self, count: int) -> None:
        """Erase the ``count`` rows above the cursor and move to the first one."""
        ...

    def close(self) -> None:
        """Restore terminal modes and release handles."""
        ...


class TtyTerminal:
    """Raw-ish session on the controlling terminal.

    Echo, canonical line editing and signal keys are switched off while the
    session runs, so Ctrl+C arrives as a key. Output post-processing stays on
    so newlines still return the carriage.
    """

    def __init__(self, tty_in: TextIO, tty_out: TextIO, *, no_color: bool = False) -> None:
        self._in = tty_in
        self._out = tty_out
        with _as_os_error():
            self._saved_tty_state = termios.tcgetattr(tty_in.fileno())
        self.console = Console(
            file=tty_out,
            force_terminal=True,
            color_system=None if no_color else "auto",
            highlight=False,
            markup=False,
            emoji=False,
        )

    @classmethod
    def open(cls, *, no_color: bool = False, path: str = TTY_PATH) -> "TtyTerminal":
        """Open the controlling terminal and enter picker mode."""
        tty_in = open(path, encoding="utf-8", errors="replace")
        try:
            tty_out = open(path, "w", encoding="utf-8", errors="replace")
        except OSError:
            tty_in.close()
            raise
        try:
            terminal = cls(tty_in, tty_out, no_color=no_color)
            terminal.enter()
        except Exception:
            tty_in.close()
            tty_out.close()
            raise
        return terminal

    def enter(self) -> None:
        fd = self._in.fileno()
        with _as_os_error():
            attrs = termios.tcgetattr(fd)
            # Disable flow control and CR->NL translation, echo, line mode and signals.
            attrs[0] &= ~(termios.IXON | termios.ICRNL)
            attrs[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
            termios.tcsetattr(fd, termios.TCSADRAIN, attrs)
        self.console.show_cursor(False)

    def size(self) -> tuple[int, int]:
        try:
            size = os.get_terminal_size(self._out.fileno())
        except OSError:
            return DEFAULT_COLUMNS, DEFAULT_ROWS
        return size.columns or DEFAULT_COLUMNS, size.lines or DEFAULT_ROWS

    def read_key(self) -> str:
        """Read one key with readchar.

        readchar reads from ``sys.stdin``. When stdin is already a terminal it
        is used as is. Otherwise (candidates piped in) ``sys.stdin`` is pointed
        at the tty for the duration of the read, which is visible to every
        thread in the process.
        """
        if _is_tty(sys.stdin):
            return readchar.readkey()
        saved_stdin = sys.stdin
        sys.stdin = self._in
        try:
            return readchar.readkey()
        finally:
            sys.stdin = saved_stdin

    def write(self, text: Text) -> None:
        self.console.print(text, end="", soft_wrap=True, crop=False)

    def erase_rows(self, count: int) -> None:
        if count <= 0:
            return
        self.console.control(
            Control.move_to_column(0),
            *(
                Control((ControlType.CURSOR_UP, 1), (ControlType.ERASE_IN_LINE, 2))
                for _ in range(count)
            ),
        )

    def close(self) -> None:
        try:
            self.console.show_cursor(True)
            with _as_os_error():
                termios.tcsetattr(self._in.fileno(), termios.TCSADRAIN, self._saved_tty_state)
        finally:
            try:
                self._in.close()
            finally:
                self._out.close()

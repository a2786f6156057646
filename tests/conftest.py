"""Pytest fixtures for seline tests."""

import io
import logging

import pytest
from rich.console import Console

from seline.session import Session


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point config lookup at an empty temp dir and clear seline env vars."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    for name in ("SELINE_CONFIG", "SELINE_DEBUG", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_session_guard():
    """Never let a failed test leave a session marked active."""
    Session._active = None
    yield
    Session._active = None


@pytest.fixture(autouse=True)
def reset_seline_logger():
    """Drop handlers that configure_logging() attached during a test."""
    package_logger = logging.getLogger("seline")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    for handler in package_logger.handlers:
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()
    package_logger.setLevel(level)


class FakeTerminal:
    """Scripted stand-in for TtyTerminal.

    Keys are returned in order; an exception instance in the script is
    raised instead. When the script runs out, read_key() raises
    KeyboardInterrupt like Ctrl+C would.
    """

    def __init__(self, keys=(), columns=40, rows=10, close_error=None):
        self.keys = list(keys)
        self.columns = columns
        self.rows = rows
        self.close_error = close_error
        self.frames = []
        self.erased = []
        self.closed = False
        self.console = Console(
            file=io.StringIO(),
            width=columns,
            color_system=None,
            highlight=False,
            markup=False,
        )

    def size(self):
        return self.columns, self.rows

    def read_key(self):
        if not self.keys:
            raise KeyboardInterrupt
        key = self.keys.pop(0)
        if isinstance(key, BaseException):
            raise key
        return key

    def write(self, text):
        self.console.print(text, end="", soft_wrap=True, crop=False)
        self.frames.append(text.plain)

    def erase_rows(self, count):
        self.erased.append(count)

    def close(self):
        self.closed = True
        if self.close_error is not None:
            raise self.close_error

    @property
    def last_frame(self):
        return self.frames[-1]

    @property
    def output(self):
        return self.console.file.getvalue()


@pytest.fixture
def fake_terminal():
    """Factory for FakeTerminal instances."""

    def _make(keys=(), **kwargs):
        return FakeTerminal(keys, **kwargs)

    return _make

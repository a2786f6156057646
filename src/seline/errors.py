"""Exception types raised by seline."""

from __future__ import annotations


class SelineError(Exception):
    """Base class for seline errors."""


class SessionActiveError(SelineError, RuntimeError):
    """Raised when a session is requested while another one owns the terminal."""

    def __init__(self, message: str = "seline already in use!"):
        super().__init__(message)


class ConfigError(SelineError, ValueError):
    """Raised for unknown options, bad option values or a malformed config file."""

"""seline: interactive line picker for the terminal.

Example:
    from seline import pick

    branch = pick(["main", "dev", "feature/x"])
    files = pick(paths, {"multiline": True, "output_index": True})
"""

__version__ = "1.0.0"

from .errors import ConfigError, SelineError, SessionActiveError
from .options import Options
from .session import Session, SessionStatus, pick, pick_async

__all__ = [
    "__version__",
    # Entry points
    "pick",
    "pick_async",
    "Session",
    "SessionStatus",
    "Options",
    # Errors
    "SelineError",
    "SessionActiveError",
    "ConfigError",
]

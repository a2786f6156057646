"""Session options and their resolution from layered sources.

Options are resolved once per session. Each layer is a plain mapping of
option names to values; later layers win. The usual stack is:

1. Built-in defaults (the ``Options`` field defaults)
2. ``options:`` section of the config file
3. Environment (``NO_COLOR``)
4. CLI flags or call-time options
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping

from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Options:
    """Recognized options for one picking session.

    Attributes:
        multiline: Enable multi-select mode.
        output_index: Emit index/indices instead of line text. Forces lock_lines.
        hide_numbers: Suppress the "index: " prefix in non-compact rows.
        preserve_order: Track and emit selections in the order they were made.
        compact: Tab-packed layout instead of one candidate per row.
        skip_blanks: The cursor cannot stop on empty lines.
        skip_char: The cursor cannot stop on lines starting with this character.
        no_color: Use bracket/arrow annotations instead of ANSI color.
        lock_lines: Disable the move-line (swap) keys.
    """

    multiline: bool = False
    output_index: bool = False
    hide_numbers: bool = False
    preserve_order: bool = False
    compact: bool = False
    skip_blanks: bool = False
    skip_char: str | None = None
    no_color: bool = False
    lock_lines: bool = False


OPTION_NAMES: tuple[str, ...] = tuple(f.name for f in fields(Options))


def _validate_skip_char(value: Any) -> str | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str) or len(value) != 1:
        raise ConfigError(f"skip_char must be a single character, got {value!r}")
    return value


def resolve_options(*layers: Mapping[str, Any] | None) -> Options:
    """Merge option layers (later wins) into an ``Options`` record.

    Raises:
        ConfigError: On unknown option names or an invalid skip_char.
    """
    values: dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        unknown = sorted(set(layer) - set(OPTION_NAMES))
        if unknown:
            raise ConfigError(f"Unknown option(s): {', '.join(unknown)}")
        values.update(layer)

    resolved: dict[str, Any] = {}
    for name in OPTION_NAMES:
        if name not in values:
            continue
        if name == "skip_char":
            resolved[name] = _validate_skip_char(values[name])
        else:
            resolved[name] = bool(values[name])

    # Reordering would make reported indices point at different text.
    if resolved.get("output_index"):
        resolved["lock_lines"] = True

    options = Options(**resolved)
    logger.debug("Resolved options: %s", asdict(options))
    return options

"""Keymap: physical keys to logical picker actions.

Keys arrive as strings from ``readchar.readkey()`` (arrow keys are escape
sequences, Enter is ``\\r``). Each action can be bound to several keys.
Key names accepted in the config file: up, down, left, right, enter, space,
tab, ctrl-c, or any single literal character (case-sensitive, so ``S`` is
shift+s).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Mapping

import readchar

from .errors import ConfigError


class Action(str, Enum):
    """Logical actions the session controller dispatches."""

    CURSOR_UP = "cursor_up"
    CURSOR_DOWN = "cursor_down"
    SELECT = "select"
    SELECT_RANGE = "select_range"
    CONTINUE = "continue"
    QUIT = "quit"
    MOVE_LINE_UP = "move_line_up"
    MOVE_LINE_DOWN = "move_line_down"

    def __str__(self) -> str:
        return self.value


KEY_NAMES: dict[str, tuple[str, ...]] = {
    "up": (readchar.key.UP,),
    "down": (readchar.key.DOWN,),
    "left": (readchar.key.LEFT,),
    "right": (readchar.key.RIGHT,),
    # Terminals differ on what Enter sends.
    "enter": (readchar.key.ENTER, "\r", "\n"),
    "space": (" ",),
    "tab": ("\t",),
    "ctrl-c": (readchar.key.CTRL_C, "\x03"),
}

DEFAULT_BINDINGS: dict[Action, tuple[str, ...]] = {
    Action.CURSOR_UP: ("up", "left", "k"),
    Action.CURSOR_DOWN: ("down", "right", "j"),
    Action.SELECT: ("enter", "s"),
    Action.SELECT_RANGE: ("S",),
    Action.CONTINUE: ("c",),
    Action.QUIT: ("q", "ctrl-c"),
    Action.MOVE_LINE_UP: ("u",),
    Action.MOVE_LINE_DOWN: ("d",),
}


def key_codes(name: str) -> tuple[str, ...]:
    """Translate a key name from config into the strings readchar produces.

    Raises:
        ConfigError: If the name is neither a known key name nor one character.
    """
    if len(name) == 1:
        return (name,)
    codes = KEY_NAMES.get(name.lower())
    if codes is None:
        raise ConfigError(f"Unknown key name: {name!r}")
    return codes


def is_digit_key(key: str) -> bool:
    """Check if key is made only of ASCII digits (jump-to-index input)."""
    return bool(key) and key.isascii() and key.isdigit()


class Keymap:
    """Lookup table from key strings to actions."""

    def __init__(self, bindings: Mapping[Action, Iterable[str]] | None = None):
        self.bindings: dict[Action, tuple[str, ...]] = {
            action: tuple(names) for action, names in (bindings or DEFAULT_BINDINGS).items()
        }
        self._lookup: dict[str, Action] = {}
        for action, names in self.bindings.items():
            for name in names:
                for code in key_codes(name):
                    self._lookup[code] = action

    def action_for(self, key: str) -> Action | None:
        """Return the action bound to key, or None."""
        return self._lookup.get(key)

    @classmethod
    def from_config(cls, mapping: Mapping[str, Any] | None) -> "Keymap":
        """Build a keymap from the config file's ``keys:`` section.

        Actions listed in the mapping replace their default bindings; the
        rest keep the defaults.

        Raises:
            ConfigError: On unknown action names or key names.
        """
        bindings = dict(DEFAULT_BINDINGS)
        for name, keys in (mapping or {}).items():
            try:
                action = Action(name)
            except ValueError:
                raise ConfigError(f"Unknown action in keys: {name!r}") from None
            if isinstance(keys, str):
                keys = [keys]
            if not isinstance(keys, (list, tuple)):
                raise ConfigError(f"keys.{name} must be a key name or a list of key names")
            bindings[action] = tuple(str(key) for key in keys)
        return cls(bindings)

"""Cursor movement, line reordering and numeric jumps.

All functions mutate a ``SelectionState`` and return True when something
changed, so the caller knows whether to redraw.
"""

from __future__ import annotations

from typing import Sequence

from .keys import is_digit_key
from .options import Options
from .state import SelectionState


def should_skip(line: str, options: Options) -> bool:
    """Check if the cursor may not stop on line."""
    if options.skip_blanks and line == "":
        return True
    return bool(options.skip_char) and line.startswith(options.skip_char)


def first_stop(choices: Sequence[str], options: Options) -> int:
    """Return the first index the cursor may stop on (0 if none may)."""
    for index, line in enumerate(choices):
        if not should_skip(line, options):
            return index
    return 0


def move_cursor(state: SelectionState, delta: int, extend: bool = True) -> bool:
    """Move the highlighted index by delta.

    Out-of-range targets are ignored. A skippable target is stepped past in
    the same direction when ``extend`` is set; without ``extend`` (numeric
    jumps) the cursor must land exactly or not move at all.
    """
    if delta == 0:
        return False

    step = 1 if delta > 0 else -1
    target = state.highlighted + delta
    while 0 <= target < len(state.choices):
        if not should_skip(state.choices[target], state.options):
            state.highlighted = target
            return True
        if not extend:
            return False
        target += step
    return False


def move_line(state: SelectionState, delta: int) -> bool:
    """Swap the highlighted line with the one delta rows away and follow it.

    Selection entries and the range anchor travel with their lines. Disabled
    when ``lock_lines`` is set.
    """
    if state.options.lock_lines or delta == 0:
        return False

    current = state.highlighted
    target = current + delta
    if not 0 <= target < len(state.choices):
        return False

    choices = state.choices
    choices[current], choices[target] = choices[target], choices[current]

    current_order = state.selection.pop(current, 0)
    target_order = state.selection.pop(target, 0)
    if current_order:
        state.selection[target] = current_order
    if target_order:
        state.selection[current] = target_order

    if state.last_touched == current:
        state.last_touched = target
    elif state.last_touched == target:
        state.last_touched = current

    state.highlighted = target
    return True


class JumpBuffer:
    """Accumulates typed digits into a jump target.

    Typing ``1`` then ``2`` jumps to 1, then 12. When the accumulated number
    is past the end of the list, the buffer restarts from the newest digit.
    Any non-digit key clears it.
    """

    def __init__(self) -> None:
        self.digits = ""

    def clear(self) -> None:
        self.digits = ""

    def push(self, key: str, count: int) -> int | None:
        """Feed a key; return the target index or None if there is none."""
        if not is_digit_key(key):
            self.clear()
            return None

        digits = self.digits + key
        if int(digits) >= count:
            digits = key
            if int(digits) >= count:
                self.clear()
                return None
        self.digits = digits
        return int(digits)

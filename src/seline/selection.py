"""Multi-select toggling, range extension and order renumbering."""

from __future__ import annotations

from .navigation import should_skip
from .state import SelectionState


def _apply(state: SelectionState, index: int, select: bool) -> None:
    if select:
        state.selection[index] = state.next_order
        state.next_order += 1
    else:
        state.selection.pop(index, None)


def renumber(state: SelectionState) -> None:
    """Reassign orders 1..N by existing order and reset the counter to N+1."""
    ordered = sorted(state.selection, key=state.selection.__getitem__)
    state.selection.clear()
    for order, index in enumerate(ordered, start=1):
        state.selection[index] = order
    state.next_order = len(ordered) + 1


def toggle(state: SelectionState, index: int, extend: bool = False) -> bool:
    """Toggle a line, or a range ending at it when ``extend`` is set.

    A range runs from the last touched line to ``index`` inclusive and
    copies the anchor's current state onto every line in it, assigning
    order numbers in walk order. Unselectable lines inside the range are
    left alone. Returns False (and does nothing) outside multi-select mode.
    """
    options = state.options
    if not options.multiline:
        return False

    anchor = state.last_touched
    if not extend or anchor == index:
        _apply(state, index, not state.is_selected(index))
    else:
        select = state.is_selected(anchor)
        step = 1 if index > anchor else -1
        for i in range(anchor, index + step, step):
            if should_skip(state.choices[i], options):
                continue
            _apply(state, i, select)

    state.last_touched = index

    if options.preserve_order:
        renumber(state)
    return True

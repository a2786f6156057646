"""Turn the final selection state into the picker's result."""

from __future__ import annotations

from typing import Union

from .state import SelectionState

Result = Union[str, int, list[str], list[int], None]


def ordered_selection(state: SelectionState) -> list[int]:
    """Selected indices in list order, or in pick order with preserve_order."""
    if state.options.preserve_order:
        return sorted(state.selection, key=state.selection.__getitem__)
    return sorted(state.selection)


def format_output(state: SelectionState) -> Result:
    """Build the result for a finished session.

    ============  =========  ==================================
    output_index  multiline  result
    ============  =========  ==================================
    no            no         highlighted line text
    no            yes        selected lines' text
    yes           no         highlighted index
    yes           yes        selected indices
    ============  =========  ==================================

    Lists follow ``ordered_selection()``.
    """
    options = state.options
    if not options.multiline:
        return state.highlighted if options.output_index else state.current

    indices = ordered_selection(state)
    if options.output_index:
        return indices
    return [state.choices[i] for i in indices]


def render_for_cli(result: Result) -> str:
    """Render a result as stdout text: lists newline-joined, None as empty."""
    if result is None:
        return ""
    if isinstance(result, list):
        return "\n".join(str(value) for value in result)
    return str(result)

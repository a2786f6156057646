"""Mutable selection state owned by one session."""

from __future__ import annotations

from dataclasses import dataclass, field

from .options import Options


@dataclass
class SelectionState:
    """Candidates plus cursor and selection bookkeeping.

    Attributes:
        choices: Candidate lines. Entries may be swapped, the length never changes.
        options: Resolved session options.
        highlighted: Index of the candidate under the cursor.
        selection: Line index -> selection order (1..N). Absent means unselected.
        next_order: Order number handed to the next selected line.
        last_touched: Anchor for shift-extended range toggles.
    """

    choices: list[str]
    options: Options = field(default_factory=Options)
    highlighted: int = 0
    selection: dict[int, int] = field(default_factory=dict)
    next_order: int = 1
    last_touched: int = 0

    def is_selected(self, index: int) -> bool:
        return self.selection.get(index, 0) > 0

    def order_of(self, index: int) -> int:
        """Selection order of a line, 0 when unselected."""
        return self.selection.get(index, 0)

    @property
    def current(self) -> str:
        return self.choices[self.highlighted]

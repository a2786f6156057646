"""Viewport sizing and scroll offset tracking.

A "row" is one drawn terminal row. In the normal layout every candidate is
its own row; in compact layout candidates are packed side by side at tab
stops and a row holds as many as fit in the terminal width.
"""

from __future__ import annotations

from typing import Sequence

# Rows kept free around the list (prompt line and the line the cursor rests on).
CHROME_ROWS = 2
TAB_WIDTH = 8


def visible_rows(terminal_rows: int, total_rows: int) -> int:
    """Return how many rows fit, never less than one."""
    return max(1, min(total_rows, terminal_rows - CHROME_ROWS))


def tab_stop_width(width: int) -> int:
    """Cells used by text of ``width`` cells followed by a tab."""
    return width + TAB_WIDTH - (width % TAB_WIDTH)


def compact_capacity(columns: int) -> int:
    """Widest text that still leaves its trailing tab inside ``columns``."""
    return max(TAB_WIDTH, columns - columns % TAB_WIDTH) - 1


def pack_rows(widths: Sequence[int], columns: int) -> list[list[int]]:
    """Greedily pack candidate indices into rows no wider than ``columns``."""
    rows: list[list[int]] = []
    current: list[int] = []
    used = 0
    for index, width in enumerate(widths):
        if current and used + width > columns:
            rows.append(current)
            current = []
            used = 0
        current.append(index)
        used += width
    if current:
        rows.append(current)
    return rows


class Viewport:
    """Scroll window over ``total`` rows, ``visible`` of them at a time."""

    def __init__(self) -> None:
        self.offset = 0
        self.visible = 1
        self.total = 0

    def update(self, visible: int, total: int) -> None:
        """Apply a new size and clamp the offset so no blank rows show."""
        self.visible = max(1, visible)
        self.total = total
        self.offset = max(0, min(self.offset, total - self.visible))

    def follow(self, row: int) -> None:
        """Scroll the minimum amount to bring row into view."""
        if row < self.offset:
            self.offset = row
        elif row >= self.offset + self.visible:
            self.offset = row - self.visible + 1

    @property
    def end(self) -> int:
        return min(self.offset + self.visible, self.total)

    def rows(self) -> range:
        return range(self.offset, self.end)

    def contains(self, row: int) -> bool:
        return self.offset <= row < self.offset + self.visible

"""Frame layout and partial redraws on a ``Terminal``."""

from __future__ import annotations

import logging

from rich.text import Text

from .formatter import LineFormatter
from .state import SelectionState
from .terminal import Terminal
from .viewport import Viewport, pack_rows, visible_rows

logger = logging.getLogger(__name__)


class Renderer:
    """Draws frames and remembers how many rows the last one took.

    Each redraw first erases exactly the rows of the previous frame, then
    lays out again with the current terminal size (it may have changed),
    scrolls so the highlighted candidate is visible, and writes the new
    frame.
    """

    def __init__(self, terminal: Terminal, formatter: LineFormatter):
        self.terminal = terminal
        self.formatter = formatter
        self.viewport = Viewport()
        self.drawn_rows = 0

    @property
    def compact(self) -> bool:
        return self.formatter.options.compact

    def layout(self, state: SelectionState, columns: int, terminal_rows: int) -> list[list[int]]:
        """Group candidate indices into rows and update the viewport."""
        if self.compact:
            widths = [self.formatter.compact_width(line, columns) for line in state.choices]
            rows = pack_rows(widths, columns)
        else:
            rows = [[index] for index in range(len(state.choices))]

        self.viewport.update(visible_rows(terminal_rows, len(rows)), len(rows))
        self.viewport.follow(self.row_of(rows, state.highlighted))
        return rows

    def row_of(self, rows: list[list[int]], index: int) -> int:
        if not self.compact:
            return index
        for row_number, row in enumerate(rows):
            if row and row[0] <= index <= row[-1]:
                return row_number
        return 0

    def frame(self, state: SelectionState) -> tuple[Text, int]:
        """Build the frame text and the number of rows it occupies."""
        columns, terminal_rows = self.terminal.size()
        rows = self.layout(state, columns, terminal_rows)

        frame = Text()
        drawn = 0
        for row_number in self.viewport.rows():
            for index in rows[row_number]:
                frame.append(
                    self.formatter.format(
                        state.choices[index],
                        index,
                        highlighted=index == state.highlighted,
                        order=state.order_of(index),
                        columns=columns,
                    )
                )
            if self.compact:
                frame.append("\n")
            drawn += 1
        return frame, drawn

    def draw(self, state: SelectionState) -> None:
        """Replace the previous frame with a fresh one."""
        self.clear()
        frame, drawn = self.frame(state)
        self.terminal.write(frame)
        self.drawn_rows = drawn
        logger.debug(
            "Drew %d row(s), offset %d, highlighted %d",
            drawn,
            self.viewport.offset,
            state.highlighted,
        )

    def clear(self) -> None:
        """Erase the last drawn frame."""
        if self.drawn_rows:
            self.terminal.erase_rows(self.drawn_rows)
            self.drawn_rows = 0

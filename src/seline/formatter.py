"""Render one candidate into a row fragment."""

from __future__ import annotations

from rich.text import Text

from .navigation import should_skip
from .options import Options
from .styles import StyleTable, resolve_state
from .viewport import TAB_WIDTH, compact_capacity, tab_stop_width


class LineFormatter:
    """Formats candidates as Rich text fragments ready to append to a frame.

    Normal layout: ``[index: ][(order) ]text`` styled, padded with plain
    spaces to the full terminal width and ended by a newline. Text that does
    not fit is cut with an ellipsis. Compact layout: styled text ended by a
    tab, without numbering.

    Tabs inside a candidate are expanded to spaces before measuring, counted
    from the start of the row (annotation included), so every cell is
    accounted for when truncating and padding.

    Rich closes each styled span with a reset when rendering, so a cut-off
    highlight never bleeds into the next terminal row.
    """

    def __init__(self, options: Options, styles: StyleTable):
        self.options = options
        self.styles = styles
        self.overhead = max(style.overhead for style in styles.values())

    def label(self, line: str, index: int, order: int) -> str:
        """Row content before styling: prefixes plus the right-stripped line."""
        content = line.rstrip()
        if self.options.compact:
            return content
        if self.options.preserve_order and order:
            content = f"({order}) {content}"
        if not self.options.hide_numbers:
            content = f"{index}: {content}"
        return content

    def body(self, content: str, prefix: str = "") -> Text:
        """Content as Text with tabs expanded to the columns they reach after prefix."""
        if "\t" not in content:
            return Text(content)
        row = Text(prefix + content)
        row.expand_tabs(TAB_WIDTH)
        return Text(row.plain[len(prefix):])

    def compact_width(self, line: str, columns: int) -> int:
        """Cells a candidate occupies in compact layout, trailing tab included."""
        body = self.body(line.rstrip(), " " * self.overhead)
        limit = max(1, compact_capacity(columns) - self.overhead)
        return tab_stop_width(min(body.cell_len, limit) + self.overhead)

    def format(self, line: str, index: int, *, highlighted: bool, order: int, columns: int) -> Text:
        state = resolve_state(highlighted, order > 0, should_skip(line, self.options))
        line_style = self.styles[state]
        body = self.body(self.label(line, index, order), line_style.prefix)

        if self.options.compact:
            limit = max(1, compact_capacity(columns) - line_style.overhead)
            if body.cell_len > limit:
                body.truncate(limit, overflow="ellipsis")
            fragment = line_style.apply(body)
            fragment.append("\t")
            return fragment

        limit = max(1, columns - line_style.overhead)
        if body.cell_len > limit:
            body.truncate(limit, overflow="ellipsis")
        fragment = line_style.apply(body)
        padding = columns - fragment.cell_len
        if padding > 0:
            fragment.append(" " * padding)
        fragment.append("\n")
        return fragment

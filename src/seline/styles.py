"""Presentation states and the two static style tables.

Every candidate row is drawn in exactly one ``PresentationState``. A style
table maps each state to a ``LineStyle``: a Rich style plus fixed-width text
annotations. The table is picked once per session by ``style_table()``:

- color: ANSI styling, no annotations (overhead 0)
- no-color: plain text wrapped in bracket/arrow annotations (overhead 6)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from rich.cells import cell_len
from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.text import Text

from .errors import ConfigError


class PresentationState(str, Enum):
    """Semantic states a candidate row can be drawn in."""

    UNSELECTED = "unselected"
    HIGHLIGHTED = "highlighted"
    SELECTED = "selected"
    HIGHLIGHTED_SELECTED = "highlighted_selected"
    UNSELECTABLE = "unselectable"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LineStyle:
    """How one presentation state is drawn.

    Attributes:
        style: Rich style applied to the row content.
        prefix: Unstyled annotation written before the content.
        suffix: Unstyled annotation written after the content.
    """

    style: Style = field(default_factory=Style.null)
    prefix: str = ""
    suffix: str = ""

    @property
    def overhead(self) -> int:
        """Cells taken by the annotations, reserved when padding/truncating."""
        return cell_len(self.prefix) + cell_len(self.suffix)

    def apply(self, content: Text | str) -> Text:
        """Return annotated text with the style applied to ``content``."""
        body = content.copy() if isinstance(content, Text) else Text(content)
        body.stylize(self.style)
        text = Text(self.prefix)
        text.append(body)
        text.append(self.suffix)
        return text


StyleTable = Mapping[PresentationState, LineStyle]

COLOR_STYLES: dict[PresentationState, LineStyle] = {
    PresentationState.UNSELECTED: LineStyle(),
    PresentationState.HIGHLIGHTED: LineStyle(Style(color="black", bgcolor="bright_white")),
    PresentationState.SELECTED: LineStyle(Style(color="magenta")),
    PresentationState.HIGHLIGHTED_SELECTED: LineStyle(
        Style(color="black", bgcolor="bright_magenta")
    ),
    PresentationState.UNSELECTABLE: LineStyle(Style(dim=True)),
}

# All annotations share one width so padding math is state-independent.
NO_COLOR_STYLES: dict[PresentationState, LineStyle] = {
    PresentationState.UNSELECTED: LineStyle(prefix="  [ ] "),
    PresentationState.HIGHLIGHTED: LineStyle(prefix="> [ ] "),
    PresentationState.SELECTED: LineStyle(prefix="  [X] "),
    PresentationState.HIGHLIGHTED_SELECTED: LineStyle(prefix="> [X] "),
    PresentationState.UNSELECTABLE: LineStyle(prefix="  --- "),
}


def resolve_state(highlighted: bool, selected: bool, unselectable: bool) -> PresentationState:
    """Pick the single state for a row, highest priority first."""
    if highlighted and selected:
        return PresentationState.HIGHLIGHTED_SELECTED
    if highlighted:
        return PresentationState.HIGHLIGHTED
    if selected:
        return PresentationState.SELECTED
    if unselectable:
        return PresentationState.UNSELECTABLE
    return PresentationState.UNSELECTED


def style_table(no_color: bool, overrides: Mapping[str, str] | None = None) -> StyleTable:
    """Return the style table for a session.

    Args:
        no_color: Use the plain annotation table.
        overrides: Optional ``{state name: rich style string}`` from the
            config file. Ignored in no-color mode.

    Raises:
        ConfigError: On an unknown state name or unparseable style string.
    """
    if no_color:
        return dict(NO_COLOR_STYLES)

    table = dict(COLOR_STYLES)
    for name, definition in (overrides or {}).items():
        try:
            state = PresentationState(name)
        except ValueError:
            raise ConfigError(f"Unknown style state: {name!r}") from None
        try:
            table[state] = LineStyle(Style.parse(str(definition)))
        except StyleSyntaxError as e:
            raise ConfigError(f"Invalid style for {name!r}: {e}") from None
    return table

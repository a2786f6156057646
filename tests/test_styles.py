from __future__ import annotations

import pytest
from rich.style import Style
from rich.text import Text

from seline.errors import ConfigError
from seline.styles import (
    COLOR_STYLES,
    NO_COLOR_STYLES,
    LineStyle,
    PresentationState,
    resolve_state,
    style_table,
)


@pytest.mark.parametrize(
    "highlighted, selected, unselectable, expected",
    [
        (False, False, False, PresentationState.UNSELECTED),
        (True, False, False, PresentationState.HIGHLIGHTED),
        (False, True, False, PresentationState.SELECTED),
        (True, True, False, PresentationState.HIGHLIGHTED_SELECTED),
        (False, False, True, PresentationState.UNSELECTABLE),
        (True, False, True, PresentationState.HIGHLIGHTED),
        (False, True, True, PresentationState.SELECTED),
    ],
)
def test_resolve_state_priority(highlighted, selected, unselectable, expected):
    assert resolve_state(highlighted, selected, unselectable) is expected


def test_tables_cover_every_state():
    assert set(COLOR_STYLES) == set(PresentationState)
    assert set(NO_COLOR_STYLES) == set(PresentationState)


def test_color_table_has_no_annotations():
    assert {style.overhead for style in COLOR_STYLES.values()} == {0}


def test_no_color_annotations_share_one_width():
    assert {style.overhead for style in NO_COLOR_STYLES.values()} == {6}
    assert NO_COLOR_STYLES[PresentationState.HIGHLIGHTED].prefix == "> [ ] "
    assert NO_COLOR_STYLES[PresentationState.HIGHLIGHTED_SELECTED].prefix == "> [X] "


def test_apply_styles_only_the_content():
    text = LineStyle(Style(bold=True), prefix="> ", suffix=" <").apply("abc")

    assert text.plain == "> abc <"
    assert len(text.spans) == 1
    span = text.spans[0]
    assert (span.start, span.end) == (2, 5)
    assert span.style == Style(bold=True)


def test_apply_does_not_mutate_input_text():
    content = Text("abc")
    LineStyle(Style(italic=True)).apply(content)
    assert content.spans == []


def test_style_table_no_color_ignores_overrides():
    table = style_table(True, {"highlighted": "bold red"})
    assert table[PresentationState.HIGHLIGHTED] == NO_COLOR_STYLES[PresentationState.HIGHLIGHTED]


def test_style_table_applies_overrides():
    table = style_table(False, {"highlighted": "bold black on cyan"})

    assert table[PresentationState.HIGHLIGHTED].style == Style.parse("bold black on cyan")
    assert table[PresentationState.SELECTED] == COLOR_STYLES[PresentationState.SELECTED]


def test_style_table_does_not_touch_defaults():
    style_table(False, {"selected": "green"})
    assert COLOR_STYLES[PresentationState.SELECTED].style == Style(color="magenta")


def test_style_table_rejects_unknown_state():
    with pytest.raises(ConfigError, match="Unknown style state"):
        style_table(False, {"chosen": "red"})


def test_style_table_rejects_bad_style():
    with pytest.raises(ConfigError, match="Invalid style"):
        style_table(False, {"selected": "bold notacolor"})

from __future__ import annotations

from seline.formatter import LineFormatter
from seline.options import Options
from seline.renderer import Renderer
from seline.state import SelectionState
from seline.styles import style_table


def setup(terminal, choices, **options):
    opts = Options(**options)
    state = SelectionState(list(choices), opts)
    renderer = Renderer(terminal, LineFormatter(opts, style_table(opts.no_color)))
    return renderer, state


def test_draws_one_row_per_candidate(fake_terminal):
    terminal = fake_terminal(columns=20)
    renderer, state = setup(terminal, ["a", "b", "c"])

    renderer.draw(state)

    assert terminal.last_frame.splitlines() == ["0: a".ljust(20), "1: b".ljust(20), "2: c".ljust(20)]
    assert renderer.drawn_rows == 3
    assert terminal.erased == []
    assert "1: b" in terminal.output


def test_redraw_erases_exactly_the_previous_frame(fake_terminal):
    terminal = fake_terminal()
    renderer, state = setup(terminal, ["a", "b", "c"])

    renderer.draw(state)
    renderer.draw(state)

    assert terminal.erased == [3]
    assert len(terminal.frames) == 2


def test_scrolls_to_keep_highlight_visible(fake_terminal):
    terminal = fake_terminal(rows=6)
    renderer, state = setup(terminal, [f"line{i}" for i in range(20)], hide_numbers=True)
    state.highlighted = 10

    renderer.draw(state)

    rows = [row.rstrip() for row in terminal.last_frame.splitlines()]
    assert rows == ["line7", "line8", "line9", "line10"]
    assert renderer.viewport.offset == 7
    assert renderer.drawn_rows == 4


def test_scrolling_back_up(fake_terminal):
    terminal = fake_terminal(rows=6)
    renderer, state = setup(terminal, [f"line{i}" for i in range(20)], hide_numbers=True)
    state.highlighted = 10
    renderer.draw(state)

    state.highlighted = 5
    renderer.draw(state)

    assert terminal.last_frame.splitlines()[0].rstrip() == "line5"
    assert renderer.viewport.offset == 5


def test_layout_adapts_to_resize(fake_terminal):
    terminal = fake_terminal(rows=10)
    renderer, state = setup(terminal, [f"line{i}" for i in range(20)])
    renderer.draw(state)
    assert renderer.drawn_rows == 8

    terminal.rows = 4
    renderer.draw(state)

    assert renderer.drawn_rows == 2
    assert terminal.erased == [8]


def test_short_terminal_still_shows_one_row(fake_terminal):
    terminal = fake_terminal(rows=1)
    renderer, state = setup(terminal, ["a", "b"])
    renderer.draw(state)
    assert renderer.drawn_rows == 1


def test_compact_packs_candidates_at_tab_stops(fake_terminal):
    terminal = fake_terminal(columns=20)
    renderer, state = setup(terminal, ["aa", "bb", "cc"], compact=True)

    renderer.draw(state)

    assert terminal.last_frame == "aa\tbb\t\ncc\t\n"
    assert renderer.drawn_rows == 2


def test_compact_scrolls_by_packed_rows(fake_terminal):
    terminal = fake_terminal(columns=20, rows=4)
    renderer, state = setup(terminal, [f"l{i}" for i in range(10)], compact=True)
    state.highlighted = 7

    renderer.draw(state)

    assert terminal.last_frame == "l4\tl5\t\nl6\tl7\t\n"
    assert renderer.viewport.offset == 2


def test_clear_erases_and_forgets_frame(fake_terminal):
    terminal = fake_terminal()
    renderer, state = setup(terminal, ["a", "b"])
    renderer.draw(state)

    renderer.clear()
    renderer.clear()

    assert terminal.erased == [2]
    assert renderer.drawn_rows == 0

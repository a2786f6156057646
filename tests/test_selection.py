from __future__ import annotations

from seline.options import Options
from seline.selection import renumber, toggle
from seline.state import SelectionState


def make_state(choices="abcde", **options):
    options.setdefault("multiline", True)
    return SelectionState(list(choices), Options(**options))


def selected(state):
    return sorted(state.selection)


def test_toggle_is_noop_in_single_mode():
    state = make_state(multiline=False)
    assert not toggle(state, 0)
    assert state.selection == {}


def test_toggle_selects_and_deselects():
    state = make_state()
    assert toggle(state, 1)
    assert state.selection == {1: 1}
    assert state.next_order == 2
    assert state.last_touched == 1

    toggle(state, 1)
    assert state.selection == {}


def test_range_copies_selected_anchor_state_downwards():
    state = make_state()
    toggle(state, 1)
    toggle(state, 3, extend=True)

    assert selected(state) == [1, 2, 3]
    assert state.last_touched == 3


def test_range_upwards():
    state = make_state()
    toggle(state, 3)
    toggle(state, 1, extend=True)
    assert selected(state) == [1, 2, 3]


def test_range_copies_unselected_anchor_state():
    state = make_state()
    for index in range(5):
        toggle(state, index)
    toggle(state, 2)

    toggle(state, 4, extend=True)

    assert selected(state) == [0, 1]


def test_range_on_anchor_itself_is_plain_toggle():
    state = make_state()
    toggle(state, 2)
    toggle(state, 2, extend=True)
    assert state.selection == {}


def test_range_leaves_skippable_lines_alone():
    state = make_state(["a", "", "c", "d"], skip_blanks=True)
    toggle(state, 0)
    toggle(state, 3, extend=True)
    assert selected(state) == [0, 2, 3]


def test_preserve_order_keeps_orders_dense():
    state = make_state(preserve_order=True)
    toggle(state, 2)
    toggle(state, 0)
    toggle(state, 1)
    assert state.selection == {2: 1, 0: 2, 1: 3}

    toggle(state, 0)

    assert state.selection == {2: 1, 1: 2}
    assert state.next_order == 3


def test_preserve_order_range_numbers_in_walk_order():
    state = make_state(preserve_order=True)
    toggle(state, 4)
    toggle(state, 2, extend=True)
    assert state.selection == {4: 1, 3: 2, 2: 3}


def test_renumber():
    state = make_state()
    state.selection = {4: 7, 0: 3, 2: 9}
    state.next_order = 10

    renumber(state)

    assert state.selection == {0: 1, 4: 2, 2: 3}
    assert state.next_order == 4

"""Properties that must hold for any sequence of operations."""

import random

import pytest

from cellinput.model import EditMode, EditorState
from cellinput.operations import NOOP, OpKind, Operation
from cellinput.view import ViewWindow

PLAIN_KINDS = [kind for kind in OpKind if kind not in (OpKind.INSERT_CHAR, OpKind.INSERT_TEXT)]


def random_operation(rng):
    roll = rng.random()
    if roll < 0.2:
        return Operation.insert_char(rng.choice("ab ž🐈"))
    if roll < 0.25:
        return Operation.insert_text(rng.choice(["", "xy", "🐨🐓"]))
    return Operation(rng.choice(PLAIN_KINDS))


@pytest.mark.parametrize("seed", range(20))
def test_random_sequences_keep_invariants(seed):
    rng = random.Random(seed)
    state = EditorState(window=ViewWindow(width=3))

    for _ in range(200):
        operation = random_operation(rng)
        state.apply(operation)

        length = len(state.text())
        cursor = state.cursor_index()
        assert 0 <= cursor <= length
        assert state.window.contains(cursor)

        span = state.selection_char_range()
        if span is not None:
            # Selections cover real characters only
            assert 0 <= span.start < span.stop <= length
            assert cursor < length

        if not operation.is_extending:
            assert state.selection() is None


def test_focus_is_idempotent():
    once = EditorState("abc", cursor=1)
    twice = EditorState("abc", cursor=1)

    once.apply(Operation(OpKind.GAIN_FOCUS))
    twice.apply(Operation(OpKind.GAIN_FOCUS))
    twice.apply(Operation(OpKind.GAIN_FOCUS))
    assert once == twice

    once.apply(Operation(OpKind.LOSE_FOCUS))
    twice.apply(Operation(OpKind.LOSE_FOCUS))
    twice.apply(Operation(OpKind.LOSE_FOCUS))
    assert once == twice


def test_toggle_twice_restores_mode():
    state = EditorState("abc", mode=EditMode.OVERWRITE)
    state.apply(Operation(OpKind.TOGGLE_MODE))
    state.apply(Operation(OpKind.TOGGLE_MODE))
    assert state.mode() == EditMode.OVERWRITE


def test_noop_only_drops_the_selection():
    state = EditorState("abc", cursor=1, anchor=2, in_focus=True)
    state.apply(NOOP)
    assert state == EditorState("abc", cursor=1, in_focus=True)


@pytest.mark.parametrize("kind", [
    OpKind.NOOP,
    OpKind.GAIN_FOCUS,
    OpKind.LOSE_FOCUS,
    OpKind.TOGGLE_MODE,
    OpKind.COPY_TO_CLIPBOARD,
])
def test_non_extending_flags_clear_selection(kind):
    state = EditorState("abcdef", cursor=3, anchor=1)
    state.apply(Operation(kind))

    assert state.selection() is None
    assert state.text() == "abcdef"
    assert state.cursor_index() == 3


@pytest.mark.parametrize("malformed", [
    None,
    "MOVE_LEFT",
    object(),
    Operation(OpKind.INSERT_TEXT, None),
    Operation(OpKind.INSERT_CHAR, 5),
])
def test_malformed_operations_are_ignored(malformed):
    state = EditorState("abc", cursor=1, anchor=2)
    state.apply(malformed)
    assert state == EditorState("abc", cursor=1, anchor=2)


@pytest.mark.parametrize("original, inserted", [
    ("", "hello"),
    ("abc", "xyz"),
    ("žđ", "🐈🐨🐓"),
    ("abc", "d"),
])
def test_insert_then_select_and_delete_round_trip(original, inserted):
    state = EditorState(original, cursor=len(original))
    state.apply(Operation.insert_text(inserted))

    for _ in inserted:
        state.apply(Operation(OpKind.EXTEND_LEFT))
    assert state.selection().text == inserted

    state.apply(Operation(OpKind.DELETE_FORWARD))

    assert state.text() == original
    assert state.cursor_index() == len(original)


def test_moves_at_boundaries_change_nothing():
    state = EditorState("ab🐈", cursor=3, window=ViewWindow(width=2))
    reference = EditorState("ab🐈", cursor=3, window=ViewWindow(width=2))
    state.apply(Operation(OpKind.MOVE_RIGHT))
    assert state == reference

    state = EditorState("ab🐈", cursor=0, window=ViewWindow(width=2))
    reference = EditorState("ab🐈", cursor=0, window=ViewWindow(width=2))
    state.apply(Operation(OpKind.MOVE_LEFT))
    assert state == reference


def test_type_select_and_delete_scenario():
    state = EditorState()
    state.apply(Operation.insert_char('0'))
    state.apply(Operation.insert_char('1'))
    assert state.text() == "01"
    assert state.cursor_index() == 2

    state.apply(Operation(OpKind.EXTEND_LEFT))
    state.apply(Operation(OpKind.EXTEND_LEFT))
    assert state.selection_char_range() == range(0, 2)
    assert state.cursor_index() == 0

    state.apply(Operation(OpKind.DELETE_FORWARD))
    assert state.text() == ""
    assert state.cursor_index() == 0
    assert state.selection() is None


def test_delete_forward_on_two_byte_letters():
    # 'ı' and 'ğ' are two bytes each in UTF-8
    state = EditorState("žđšćčığ🐈🐨🐓", cursor=6)
    state.apply(Operation(OpKind.DELETE_FORWARD))

    assert state.text() == "žđšćčı🐈🐨🐓"
    assert state.cursor_index() == 6
    assert state.cursor_byte_index() == 12


def test_delete_selection_on_two_byte_letters():
    state = EditorState("žđšćčığ🐈🐨🐓", cursor=6, anchor=5)
    state.apply(Operation(OpKind.DELETE_FORWARD))

    assert state.text() == "žđšćč🐈🐨🐓"
    assert state.cursor_index() == 5


def test_resize_on_eleven_character_buffer():
    state = EditorState("abcdefghijk", cursor=9, window=ViewWindow(width=7, offset=3))
    state.window.resize(5, state.cursor_index())
    assert state.window.offset == 5

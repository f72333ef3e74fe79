"""Test keyboard input handling."""

from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from cellinput.keyboard import KeyboardHandler, KeyEvent, KeyType, focus_event


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        """Mock get_key that returns from queue."""
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key):
        self._key_queue.append(key)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


@pytest.mark.parametrize("token, key_type, value", [
    ('<LEFT>', KeyType.SPECIAL, 'left'),
    ('<RIGHT>', KeyType.SPECIAL, 'right'),
    ('<HOME>', KeyType.SPECIAL, 'home'),
    ('<END>', KeyType.SPECIAL, 'end'),
    ('<DELETE>', KeyType.SPECIAL, 'delete'),
    ('<BACKSPACE>', KeyType.SPECIAL, 'backspace'),
    ('<INSERT>', KeyType.SPECIAL, 'insert'),
    ('<PAGEUP>', KeyType.SPECIAL, 'page_up'),
    ('<Shift-LEFT>', KeyType.SHIFT_SPECIAL, 'left'),
    ('<Shift-END>', KeyType.SHIFT_SPECIAL, 'end'),
    ('<Ctrl-c>', KeyType.CTRL, 'c'),
    ('<Ctrl-j>', KeyType.SPECIAL, 'enter'),
    ('<Esc+b>', KeyType.ALT, 'b'),
    ('<ESC>', KeyType.SPECIAL, 'escape'),
    ('<SPACE>', KeyType.REGULAR, ' '),
    ('<TAB>', KeyType.REGULAR, '\t'),
    ('<F1>', KeyType.SPECIAL, 'f1'),
])
def test_parse_curtsies_tokens(handler, token, key_type, value):
    event = handler.parse_key(token)
    assert event.key_type == key_type
    assert event.value == value


def test_shift_flag(handler):
    event = handler.parse_key('<Shift-RIGHT>')
    assert event.is_shift
    assert event.is_sequence


def test_raw_control_bytes(handler):
    assert handler.parse_key('\x03') == KeyEvent(key_type=KeyType.CTRL, value='c', raw='\x03', is_ctrl=True)
    assert handler.parse_key('\x7f').value == 'backspace'
    assert handler.parse_key('\r').value == 'enter'
    assert handler.parse_key('\t').value == '\t'
    assert handler.parse_key('\x1b').value == 'escape'


def test_regular_characters(handler):
    for char in ('a', 'ž', '🐈', '<', '>'):
        event = handler.parse_key(char)
        assert event.key_type == KeyType.REGULAR
        assert event.value == char


def test_paste_event(handler):
    paste = SimpleNamespace(events=['a', '<SPACE>', '🐈', '<Ctrl-j>', 'b'])
    event = handler.parse_key(paste)
    assert event.key_type == KeyType.PASTE
    assert event.value == 'a 🐈\nb'


def test_focus_events():
    assert focus_event(True).key_type == KeyType.FOCUS
    assert focus_event(True).value == 'gained'
    assert focus_event(False).value == 'lost'


def test_get_key_event_from_terminal():
    terminal = MockTerminal()
    handler = KeyboardHandler(terminal)

    terminal.add_key('<Shift-LEFT>')
    event = handler.get_key_event()
    assert event.key_type == KeyType.SHIFT_SPECIAL
    assert event.value == 'left'

    # Timeout
    assert handler.get_key_event(timeout=0) is None


def test_get_key_event_passes_timeout():
    terminal = Mock()
    terminal.get_key.return_value = 'x'
    handler = KeyboardHandler(terminal)

    handler.get_key_event(timeout=0.5)
    terminal.get_key.assert_called_once_with(0.5)

"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"
    SHIFT_SPECIAL = "shift_special"  # Shift + arrow keys, etc.
    PASTE = "paste"  # Bracketed paste; value holds the pasted text
    FOCUS = "focus"  # Focus report; value is 'gained' or 'lost'


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key string from curtsies
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False
    is_sequence: bool = False


SPECIAL_KEYS = frozenset({
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
    'page_up', 'page_down', 'insert',
})


def focus_event(gained: bool) -> KeyEvent:
    """Build a focus event for hosts that receive terminal focus reports."""
    value = 'gained' if gained else 'lost'
    return KeyEvent(key_type=KeyType.FOCUS, value=value, raw='')


class KeyboardHandler:
    """Turns curtsies events into KeyEvents."""

    def __init__(self, terminal_interface=None):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event from the terminal, or None on timeout."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies event into a KeyEvent.

        Args:
            key: A curtsies key token (str) or a curtsies PasteEvent

        Returns:
            Parsed KeyEvent
        """
        # curtsies delivers bracketed paste as an event carrying its keys
        events = getattr(key, 'events', None)
        if events is not None:
            text = ''.join(self._paste_text(e) for e in events)
            return KeyEvent(key_type=KeyType.PASTE, value=text, raw=text)

        key_str = str(key)

        # Curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<Shift-LEFT>'
        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            return self._parse_token(key_str)

        # Single-byte ASCII control chars (Ctrl-<letter>)
        if len(key_str) == 1:
            o = ord(key_str)
            if o == 9:
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
            if o in (10, 13):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if o in (8, 127):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if 1 <= o <= 26:
                ch = chr(ord('a') + o - 1)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)

        # Bare ESC
        if key_str == '\x1b':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')

        # Regular character
        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)

    def _parse_token(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1]
        # Support both '-' and '+' as modifier separators (e.g., '<Esc+u>')
        lower = name.lower().replace('+', '-')
        parts = lower.split('-') if '-' in lower else [lower]
        base = parts[-1]
        mods = set(parts[:-1])
        if 'meta' in mods or 'esc' in mods:
            mods.add('alt')
        if base in ('pageup', 'page_up'):
            base = 'page_up'
        elif base in ('pagedown', 'page_down'):
            base = 'page_down'

        # Named whitespace tokens map to regular characters
        if base in ('space', 'spacebar', 'spc') and not mods:
            return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
        if base == 'tab' and not mods:
            return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
        if 'ctrl' in mods and len(base) == 1:
            if base in ('j', 'm'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str, is_sequence=True)
            return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
        if 'alt' in mods and (base in SPECIAL_KEYS or len(base) == 1):
            return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str, is_alt=True)
        if 'shift' in mods and base in SPECIAL_KEYS:
            return KeyEvent(key_type=KeyType.SHIFT_SPECIAL, value=base, raw=key_str,
                            is_shift=True, is_sequence=True)
        if base in SPECIAL_KEYS:
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)
        if base in ('esc', 'escape'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
        # Unknown tokens (function keys etc.) stay special; the key map ignores them
        return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)

    @staticmethod
    def _paste_text(key) -> str:
        token = str(key)
        if token in ('<SPACE>', '<Space>'):
            return ' '
        if token in ('<TAB>', '<Tab>'):
            return '\t'
        if token in ('<Ctrl-j>', '<Ctrl-m>'):
            return '\n'
        # Other named tokens inside a paste carry no text
        if token.startswith('<') and token.endswith('>') and len(token) > 2:
            return ''
        return token

"""Editor state for a single-line input control.

The buffer is a ``str``, so every index the state hands out or accepts is
a code-point index. UTF-8 byte offsets are derived on demand for callers
that need them and are never stored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .operations import OpKind, Operation
from .view import ViewWindow

if TYPE_CHECKING:
    from .clipboard import Clipboard
    from .settings_persistence import InputSettings

logger = logging.getLogger(__name__)


class EditMode(Enum):
    """How a typed character is merged into the buffer."""
    INSERT = "insert"
    OVERWRITE = "overwrite"

    def toggled(self) -> "EditMode":
        return EditMode.OVERWRITE if self is EditMode.INSERT else EditMode.INSERT


def byte_offset(text: str, index: int) -> int:
    """Return the UTF-8 byte offset of code point ``index`` in ``text``.

    ``index == len(text)`` maps to the total byte length.

    Raises:
        IndexError: If ``index`` is not a code-point boundary of ``text``
    """
    if not 0 <= index <= len(text):
        raise IndexError(f"Code point index {index} outside [0, {len(text)}]")
    return len(text[:index].encode('utf-8', errors='surrogatepass'))


def byte_range(text: str, char_range: range) -> range:
    """Map a code-point range of ``text`` to the matching byte range."""
    return range(byte_offset(text, char_range.start), byte_offset(text, char_range.stop))


@dataclass(frozen=True)
class Selection:
    """Snapshot of the selected text.

    Owns a copy of the text, so it stays valid after further edits.
    """
    char_range: range
    byte_range: range
    text: str

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self.char_range)


class EditorState:
    """Buffer, cursor, selection and mode of a single-line input.

    All mutation goes through :meth:`apply`, which never raises. The
    state owns its :class:`ViewWindow` and keeps the cursor inside it
    after every edit; the renderer still calls ``window.resize`` before
    each paint.
    """

    def __init__(self, text: str = "", cursor: int = 0, anchor: Optional[int] = None,
                 mode: EditMode = EditMode.INSERT, in_focus: bool = False,
                 clipboard: "Optional[Clipboard]" = None,
                 window: Optional[ViewWindow] = None):
        if not 0 <= cursor <= len(text):
            raise ValueError(f"Cursor {cursor} outside [0, {len(text)}]")
        if anchor is not None:
            # A selection only ever spans real characters
            if not 0 <= anchor < len(text):
                raise ValueError(f"Selection anchor {anchor} outside [0, {len(text)})")
            if cursor == len(text):
                raise ValueError("Cursor cannot sit past the end while a selection is active")
        self._text = text
        self._cursor = cursor
        self._anchor = anchor
        self._mode = mode
        self._in_focus = in_focus
        self.clipboard = clipboard
        self.window = window or ViewWindow()
        self.window.clamp_after_edit(cursor)

        self._handlers = {
            OpKind.NOOP: self._noop,
            OpKind.GAIN_FOCUS: self._gain_focus,
            OpKind.LOSE_FOCUS: self._lose_focus,
            OpKind.DELETE_FORWARD: self._delete_forward,
            OpKind.DELETE_BACKWARD: self._delete_backward,
            OpKind.MOVE_LEFT: self._move_left,
            OpKind.MOVE_RIGHT: self._move_right,
            OpKind.EXTEND_LEFT: self._extend_left,
            OpKind.EXTEND_RIGHT: self._extend_right,
            OpKind.JUMP_TO_START: self._jump_to_start,
            OpKind.JUMP_TO_END: self._jump_to_end,
            OpKind.EXTEND_TO_START: self._extend_to_start,
            OpKind.EXTEND_TO_END: self._extend_to_end,
            OpKind.INSERT_CHAR: self._insert_char,
            OpKind.INSERT_TEXT: self._insert_text,
            OpKind.TOGGLE_MODE: self._toggle_mode,
            OpKind.COPY_TO_CLIPBOARD: self._copy,
            OpKind.CUT_TO_CLIPBOARD: self._cut,
        }

    @classmethod
    def from_settings(cls, settings: "InputSettings",
                      clipboard: "Optional[Clipboard]" = None) -> "EditorState":
        mode = EditMode.OVERWRITE if settings.start_in_overwrite else EditMode.INSERT
        return cls(mode=mode, clipboard=clipboard)

    def __repr__(self) -> str:
        return (f"EditorState(text={self._text!r}, cursor={self._cursor}, "
                f"anchor={self._anchor}, mode={self._mode.value}, "
                f"in_focus={self._in_focus}, window={self.window!r})")

    def __eq__(self, other) -> bool:
        if not isinstance(other, EditorState):
            return NotImplemented
        return (self._text == other._text
                and self._cursor == other._cursor
                and self._anchor == other._anchor
                and self._mode == other._mode
                and self._in_focus == other._in_focus
                and self.window == other.window)

    def __len__(self) -> int:
        return len(self._text)

    # --- Queries ---

    def text(self) -> str:
        return self._text

    def cursor_index(self) -> int:
        return self._cursor

    def cursor_byte_index(self) -> int:
        return byte_offset(self._text, self._cursor)

    def mode(self) -> EditMode:
        return self._mode

    def in_focus(self) -> bool:
        return self._in_focus

    def selection_char_range(self) -> Optional[range]:
        """Code points covered by the selection, or None.

        The span runs from the smaller of anchor and cursor up to and
        including the character under the larger one.
        """
        if self._anchor is None:
            return None
        return range(min(self._anchor, self._cursor), max(self._anchor, self._cursor) + 1)

    def selection(self) -> Optional[Selection]:
        """Currently selected text as an owned snapshot."""
        char_range = self.selection_char_range()
        if char_range is None:
            return None
        return Selection(
            char_range=char_range,
            byte_range=byte_range(self._text, char_range),
            text=self._text[char_range.start:char_range.stop],
        )

    # --- Mutation ---

    def apply(self, operation: Operation) -> None:
        """Update the state with the given operation.

        Operations that make no sense in the current state are no-ops, and
        so is anything that is not a well-formed operation. Every operation
        except the extending ones drops the selection.
        """
        kind = getattr(operation, 'kind', None)
        handler = self._handlers.get(kind) if isinstance(kind, OpKind) else None
        if handler is None or not isinstance(getattr(operation, 'text', ''), str):
            logger.debug(f"Ignoring malformed operation {operation!r}")
            return
        handler(operation)

    def _noop(self, operation: Operation) -> None:
        self._anchor = None

    def _gain_focus(self, operation: Operation) -> None:
        self._anchor = None
        self._in_focus = True

    def _lose_focus(self, operation: Operation) -> None:
        self._anchor = None
        self._in_focus = False

    def _toggle_mode(self, operation: Operation) -> None:
        self._anchor = None
        self._mode = self._mode.toggled()

    def _replace_selection(self, selection: Selection, replacement: str) -> None:
        """Replace the selected span and collapse the selection after it."""
        start, stop = selection.char_range.start, selection.char_range.stop
        self._text = self._text[:start] + replacement + self._text[stop:]
        self._cursor = start + len(replacement)
        self._anchor = None

    def _boundary_anchor(self) -> int:
        """Anchor for a new selection; never the virtual slot past the end."""
        # anchor == cursor is a one-character selection, not an empty one
        if self._cursor == len(self._text):
            return self._cursor - 1
        return self._cursor

    def _delete_forward(self, operation: Operation) -> None:
        selection = self.selection()
        if selection is not None:
            self._replace_selection(selection, "")
        elif self._cursor < len(self._text):
            self._text = self._text[:self._cursor] + self._text[self._cursor + 1:]
        self.window.clamp_after_edit(self._cursor)

    def _delete_backward(self, operation: Operation) -> None:
        selection = self.selection()
        if selection is not None:
            self._replace_selection(selection, "")
        elif self._cursor > 0:
            self._text = self._text[:self._cursor - 1] + self._text[self._cursor:]
            self._cursor -= 1
        self.window.clamp_after_edit(self._cursor)

    def _move_left(self, operation: Operation) -> None:
        # Selection collapses where the cursor is, not at one of its ends
        self._anchor = None
        if self._cursor > 0:
            self._cursor -= 1
        self.window.clamp_after_edit(self._cursor)

    def _move_right(self, operation: Operation) -> None:
        self._anchor = None
        if self._cursor < len(self._text):
            self._cursor += 1
        self.window.clamp_after_edit(self._cursor)

    def _extend_left(self, operation: Operation) -> None:
        if self._cursor == 0:
            return
        if self._anchor is None:
            self._anchor = self._boundary_anchor()
        elif self._anchor == self._cursor - 1:
            # Cursor comes back onto the anchor
            self._anchor = None
        self._cursor -= 1
        self.window.clamp_after_edit(self._cursor)

    def _extend_right(self, operation: Operation) -> None:
        # The last character is reached by the span, not by the cursor
        if self._cursor + 1 >= len(self._text):
            return
        if self._anchor is None:
            self._anchor = self._cursor
        elif self._anchor == self._cursor + 1:
            self._anchor = None
        self._cursor += 1
        self.window.clamp_after_edit(self._cursor)

    def _jump_to_start(self, operation: Operation) -> None:
        self._anchor = None
        self._cursor = 0
        self.window.clamp_after_edit(self._cursor)

    def _jump_to_end(self, operation: Operation) -> None:
        self._anchor = None
        self._cursor = len(self._text)
        self.window.clamp_after_edit(self._cursor)

    def _extend_to_start(self, operation: Operation) -> None:
        if self._cursor == 0:
            return
        if self._anchor is None:
            self._anchor = self._boundary_anchor()
        self._cursor = 0
        self.window.clamp_after_edit(self._cursor)

    def _extend_to_end(self, operation: Operation) -> None:
        if self._cursor == len(self._text):
            return
        if self._anchor is None:
            self._anchor = self._cursor
        self._cursor = len(self._text) - 1
        self.window.clamp_after_edit(self._cursor)

    def _insert_char(self, operation: Operation) -> None:
        char = operation.text
        if len(char) != 1:
            return
        selection = self.selection()
        if selection is not None:
            self._replace_selection(selection, char)
        else:
            if self._cursor == len(self._text):
                self._text += char
            elif self._mode is EditMode.OVERWRITE:
                self._text = self._text[:self._cursor] + char + self._text[self._cursor + 1:]
            else:
                self._text = self._text[:self._cursor] + char + self._text[self._cursor:]
            self._cursor += 1
        self.window.clamp_after_edit(self._cursor)

    def _insert_text(self, operation: Operation) -> None:
        text = operation.text
        selection = self.selection()
        if selection is not None:
            self._replace_selection(selection, text)
        else:
            self._text = self._text[:self._cursor] + text + self._text[self._cursor:]
            self._cursor += len(text)
        self.window.clamp_after_edit(self._cursor)

    def _copy(self, operation: Operation) -> None:
        selection = self.selection()
        self._send_to_clipboard(selection.text if selection is not None else self._text)
        self._anchor = None

    def _cut(self, operation: Operation) -> None:
        selection = self.selection()
        if selection is not None:
            self._send_to_clipboard(selection.text)
            self._replace_selection(selection, "")
        else:
            self._send_to_clipboard(self._text)
            self._text = ""
            self._cursor = 0
        self.window.clamp_after_edit(self._cursor)

    def _send_to_clipboard(self, text: str) -> None:
        if self.clipboard is None:
            logger.debug(f"No clipboard attached, dropping {len(text)} characters")
            return
        try:
            self.clipboard.set(text)
        except Exception as e:
            # Clipboard failures never reach the caller of apply()
            logger.warning(f"Could not copy to clipboard: {e}")

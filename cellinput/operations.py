"""Operation vocabulary accepted by the editing engine."""

from dataclasses import dataclass
from enum import Enum


class OpKind(Enum):
    """Kinds of editing operations."""
    NOOP = "noop"
    GAIN_FOCUS = "gain_focus"
    LOSE_FOCUS = "lose_focus"
    DELETE_FORWARD = "delete_forward"
    DELETE_BACKWARD = "delete_backward"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    EXTEND_LEFT = "extend_left"
    EXTEND_RIGHT = "extend_right"
    JUMP_TO_START = "jump_to_start"
    JUMP_TO_END = "jump_to_end"
    EXTEND_TO_START = "extend_to_start"
    EXTEND_TO_END = "extend_to_end"
    INSERT_CHAR = "insert_char"
    INSERT_TEXT = "insert_text"
    TOGGLE_MODE = "toggle_mode"
    COPY_TO_CLIPBOARD = "copy_to_clipboard"
    CUT_TO_CLIPBOARD = "cut_to_clipboard"


_EXTENDING = frozenset({
    OpKind.EXTEND_LEFT,
    OpKind.EXTEND_RIGHT,
    OpKind.EXTEND_TO_START,
    OpKind.EXTEND_TO_END,
})


@dataclass(frozen=True)
class Operation:
    """A single editing operation.

    Only INSERT_CHAR and INSERT_TEXT use ``text``; every other kind
    leaves it empty.
    """
    kind: OpKind
    text: str = ""

    @classmethod
    def insert_char(cls, char: str) -> "Operation":
        return cls(OpKind.INSERT_CHAR, char)

    @classmethod
    def insert_text(cls, text: str) -> "Operation":
        return cls(OpKind.INSERT_TEXT, text)

    @property
    def is_extending(self) -> bool:
        """True for operations that grow or shrink the selection."""
        return self.kind in _EXTENDING


# Explicit no-op sentinel; translators return this for unrecognised events
NOOP = Operation(OpKind.NOOP)

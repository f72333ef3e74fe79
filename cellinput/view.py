"""View window scrolling and the read-only render projection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .constants import InputConstants

if TYPE_CHECKING:
    from .model import EditorState


class ViewWindow:
    """Horizontally scrolling window over the buffer.

    Covers the half-open code-point range ``[offset, offset + width)``.
    The right edge may run past the end of the buffer; those columns are
    rendered as blank filler.
    """

    def __init__(self, width: int = InputConstants.DEFAULT_WINDOW_WIDTH,
                 offset: int = InputConstants.DEFAULT_WINDOW_OFFSET):
        if width < 1:
            raise ValueError(f"View window width must be at least 1, got {width}")
        if offset < 0:
            raise ValueError(f"View window offset must not be negative, got {offset}")
        self.width = width
        self.offset = offset

    def __repr__(self) -> str:
        return f"ViewWindow(width={self.width}, offset={self.offset})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ViewWindow):
            return NotImplemented
        return self.width == other.width and self.offset == other.offset

    @property
    def end(self) -> int:
        """One past the last visible code-point index."""
        return self.offset + self.width

    def contains(self, index: int) -> bool:
        return self.offset <= index < self.end

    def as_range(self) -> range:
        return range(self.offset, self.end)

    @classmethod
    def from_range(cls, visible: range) -> "ViewWindow":
        return cls(width=len(visible), offset=visible.start)

    def resize(self, new_width: int, cursor_index: int) -> None:
        """Adapt the window to a new display width.

        Growing reveals more text on the left first, the rest of the
        growth goes to the right. Shrinking pulls the right edge in toward
        the cursor and takes whatever is left from the left edge, so the
        cursor ends up as the rightmost visible column at worst.

        Args:
            new_width: Available display width in columns
            cursor_index: Current cursor position in code points
        """
        if new_width < 1:
            raise ValueError(f"View window width must be at least 1, got {new_width}")

        if new_width > self.width:
            growth = new_width - self.width
            self.offset -= min(self.offset, growth)
        elif new_width < self.width:
            shrink = self.width - new_width
            # Right edge may not move left of cursor + 1
            from_right = max(0, min(shrink, self.end - (cursor_index + 1)))
            self.offset += shrink - from_right
        self.width = new_width

        # Cursor may have been outside the old window
        self.clamp_after_edit(cursor_index)

    def clamp_after_edit(self, cursor_index: int) -> None:
        """Scroll the minimum amount needed to keep the cursor visible."""
        if cursor_index < self.offset:
            self.offset = cursor_index
        elif cursor_index >= self.end:
            self.offset = cursor_index + 1 - self.width


@dataclass(frozen=True)
class Cell:
    """One rendered column of the input control."""
    char: str
    is_cursor: bool = False
    is_selected: bool = False


def project(state: "EditorState", window: Optional[ViewWindow] = None,
            mask: Optional[str] = None) -> list[Cell]:
    """Project the visible part of the editor state into display cells.

    Args:
        state: Editor state to read (never mutated)
        window: Window to project through; defaults to the state's own window
        mask: Optional symbol that replaces every visible character

    Returns:
        Exactly ``window.width`` cells, left to right
    """
    window = window or state.window
    text = state.text()
    cursor = state.cursor_index()
    selected = state.selection_char_range() or range(0)

    cells = []
    for idx in window.as_range():
        if idx < len(text):
            char = mask if mask else text[idx]
        else:
            char = InputConstants.BLANK
        cells.append(Cell(char=char, is_cursor=idx == cursor, is_selected=idx in selected))
    return cells

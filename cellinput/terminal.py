"""Terminal interface using Blessed for display and Curtsies for input."""

import select
import sys
from typing import Optional

import blessed

from .constants import InputConstants
from .view import Cell


class TerminalInterface:
    """Paints an input row and reads keys from the terminal."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._last_line: Optional[str] = None

    def setup(self):
        """Enter fullscreen mode and start reading keys."""
        print(self.term.enter_fullscreen + self.term.hide_cursor + self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input  # type: ignore
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen + self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            finally:
                self._curtsies_input = None
        self._last_line = None

    def get_key(self, timeout=None):
        """Get the next curtsies event.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            A curtsies key token or paste event, or None on timeout
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        return next(self._curtsies_input)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height

    def compose_input_line(self, cells: list[Cell]) -> str:
        """Compose the input row with cursor and selection in reverse video."""
        out = []
        active_rev = False
        for cell in cells:
            rev = cell.is_cursor or cell.is_selected
            if rev != active_rev:
                out.append(self.term.reverse if rev else self.term.normal)
                active_rev = rev
            # Tabs and control characters would move the terminal cursor
            out.append(cell.char if cell.char.isprintable() else InputConstants.BLANK)
        # Reset at end
        if active_rev:
            out.append(self.term.normal)
        return ''.join(out)

    def draw_input(self, y: int, x: int, cells: list[Cell]) -> None:
        """Draw the input row at (y, x), skipping the write if nothing changed."""
        line = self.compose_input_line(cells)
        if line == self._last_line:
            return
        print(self.term.move(y, x) + line, end='', flush=True)
        self._last_line = line

    def invalidate_frame(self) -> None:
        """Force the next draw_input to repaint."""
        self._last_line = None

"""Clipboard capability used by copy, cut and paste."""

import logging
import sys
from abc import ABC, abstractmethod

import pyperclip

logger = logging.getLogger(__name__)


class ClipboardError(Exception):
    """Raised when the clipboard cannot be read or written."""


class Clipboard(ABC):
    """Abstract clipboard capability injected into the editor state."""

    @abstractmethod
    def set(self, text: str) -> None:
        """Replace the clipboard contents with ``text``.

        Raises:
            ClipboardError: If the clipboard is unavailable
        """

    @abstractmethod
    def get(self) -> str:
        """Return the current clipboard contents.

        Raises:
            ClipboardError: If the clipboard is unavailable
        """


class InternalClipboard(Clipboard):
    """In-process clipboard for headless hosts and tests."""

    def __init__(self, text: str = ""):
        self.text = text

    def set(self, text: str) -> None:
        self.text = text

    def get(self) -> str:
        return self.text


class SystemClipboard(Clipboard):
    """System clipboard.

    On macOS, uses native APIs via PyObjC when available. Everywhere else,
    and as the macOS fallback, uses pyperclip, which in turn picks
    xclip/xsel/wl-clipboard or the Windows API.
    """

    def __init__(self, platform: str = sys.platform):
        self.platform = platform

    def set(self, text: str) -> None:
        if self.platform == 'darwin' and self._set_macos(text):
            return
        try:
            pyperclip.copy(text)
        except (pyperclip.PyperclipException, OSError) as e:
            raise ClipboardError(f"Could not write clipboard: {e}") from e

    def get(self) -> str:
        if self.platform == 'darwin':
            text = self._get_macos()
            if text is not None:
                return text
        try:
            return pyperclip.paste() or ""
        except (pyperclip.PyperclipException, OSError) as e:
            raise ClipboardError(f"Could not read clipboard: {e}") from e

    @staticmethod
    def _set_macos(text: str) -> bool:
        """Write plain text to the macOS pasteboard; False if PyObjC is missing."""
        try:
            from AppKit import NSPasteboard, NSPasteboardTypeString
        except ImportError:
            logger.debug("PyObjC not available, using pyperclip")
            return False

        pb = NSPasteboard.generalPasteboard()
        pb.clearContents()
        if not pb.setString_forType_(text, NSPasteboardTypeString):
            raise ClipboardError("Pasteboard rejected the text")
        return True

    @staticmethod
    def _get_macos():
        """Read plain text from the macOS pasteboard; None if PyObjC is missing."""
        try:
            from AppKit import NSPasteboard, NSPasteboardTypeString
        except ImportError:
            logger.debug("PyObjC not available, using pyperclip")
            return None

        pb = NSPasteboard.generalPasteboard()
        text = pb.stringForType_(NSPasteboardTypeString)
        return str(text) if text else ""

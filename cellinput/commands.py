"""Mapping from key events to editing operations."""

import logging
from typing import Callable, Dict, Optional, Tuple, TYPE_CHECKING

from .clipboard import ClipboardError
from .keyboard import KeyEvent, KeyType
from .operations import NOOP, OpKind, Operation

if TYPE_CHECKING:
    from .clipboard import Clipboard
    from .settings_persistence import InputSettings

logger = logging.getLogger(__name__)

OperationFactory = Callable[[KeyEvent], Operation]


def _fixed(kind: OpKind) -> OperationFactory:
    operation = Operation(kind)
    return lambda key_event: operation


class KeyMap:
    """Registry for mapping key combinations to operations.

    ``translate`` is total: any event without a binding becomes ``NOOP``.
    """

    def __init__(self, clipboard: "Optional[Clipboard]" = None,
                 settings: "Optional[InputSettings]" = None):
        self.clipboard = clipboard
        self.strip_paste_newlines = settings.strip_paste_newlines if settings else True
        enter_loses_focus = settings.enter_loses_focus if settings else True
        self._bindings: Dict[Tuple[KeyType, str], OperationFactory] = {}
        self._setup_default_bindings(enter_loses_focus)

    def _setup_default_bindings(self, enter_loses_focus: bool):
        """Set up the default key bindings."""
        # Movement
        self.register((KeyType.SPECIAL, 'left'), _fixed(OpKind.MOVE_LEFT))
        self.register((KeyType.SPECIAL, 'right'), _fixed(OpKind.MOVE_RIGHT))
        self.register((KeyType.SPECIAL, 'home'), _fixed(OpKind.JUMP_TO_START))
        self.register((KeyType.SPECIAL, 'end'), _fixed(OpKind.JUMP_TO_END))
        self.register((KeyType.CTRL, 'a'), _fixed(OpKind.JUMP_TO_START))
        self.register((KeyType.CTRL, 'e'), _fixed(OpKind.JUMP_TO_END))

        # Selection (Shift + movement)
        self.register((KeyType.SHIFT_SPECIAL, 'left'), _fixed(OpKind.EXTEND_LEFT))
        self.register((KeyType.SHIFT_SPECIAL, 'right'), _fixed(OpKind.EXTEND_RIGHT))
        self.register((KeyType.SHIFT_SPECIAL, 'home'), _fixed(OpKind.EXTEND_TO_START))
        self.register((KeyType.SHIFT_SPECIAL, 'end'), _fixed(OpKind.EXTEND_TO_END))

        # Editing
        self.register((KeyType.SPECIAL, 'backspace'), _fixed(OpKind.DELETE_BACKWARD))
        self.register((KeyType.SPECIAL, 'delete'), _fixed(OpKind.DELETE_FORWARD))
        self.register((KeyType.SPECIAL, 'insert'), _fixed(OpKind.TOGGLE_MODE))

        # Clipboard
        self.register((KeyType.CTRL, 'c'), _fixed(OpKind.COPY_TO_CLIPBOARD))
        self.register((KeyType.CTRL, 'x'), _fixed(OpKind.CUT_TO_CLIPBOARD))
        self.register((KeyType.CTRL, 'v'), self._paste_from_clipboard)
        self.register((KeyType.PASTE, ''), self._paste_event)

        # Focus
        self.register((KeyType.SPECIAL, 'escape'), _fixed(OpKind.LOSE_FOCUS))
        if enter_loses_focus:
            self.register((KeyType.SPECIAL, 'enter'), _fixed(OpKind.LOSE_FOCUS))
        self.register((KeyType.FOCUS, 'gained'), _fixed(OpKind.GAIN_FOCUS))
        self.register((KeyType.FOCUS, 'lost'), _fixed(OpKind.LOSE_FOCUS))

    def register(self, key: Tuple[KeyType, str], factory: OperationFactory):
        """Register an operation factory for a key combination."""
        self._bindings[key] = factory

    def unregister(self, key: Tuple[KeyType, str]):
        self._bindings.pop(key, None)

    def get_binding(self, key_type: KeyType, value: str) -> Optional[OperationFactory]:
        # Paste events are bound once regardless of their content
        if key_type == KeyType.PASTE:
            return self._bindings.get((KeyType.PASTE, ''))
        return self._bindings.get((key_type, value))

    def translate(self, key_event: Optional[KeyEvent]) -> Operation:
        """Translate a key event into an operation.

        Returns:
            The bound operation, ``InsertChar`` for printable characters,
            or ``NOOP`` for anything else
        """
        if key_event is None:
            return NOOP

        factory = self.get_binding(key_event.key_type, key_event.value)
        if factory:
            return factory(key_event)

        if key_event.key_type == KeyType.REGULAR and self._is_printable(key_event.value):
            return Operation.insert_char(key_event.value)

        return NOOP

    @staticmethod
    def _is_printable(value: str) -> bool:
        # Filter out control characters, except tab
        return len(value) == 1 and (ord(value) >= 32 or value == '\t') and value != '\x7f'

    def _clean_paste(self, text: str) -> str:
        # Escape and other control bytes never reach the buffer
        text = ''.join(ch for ch in text
                       if (ord(ch) >= 32 or ch in '\t\r\n') and ch != '\x7f')
        if self.strip_paste_newlines:
            text = text.replace('\r\n', '').replace('\r', '').replace('\n', '')
        return text

    def _paste_event(self, key_event: KeyEvent) -> Operation:
        text = self._clean_paste(key_event.value)
        return Operation.insert_text(text) if text else NOOP

    def _paste_from_clipboard(self, key_event: KeyEvent) -> Operation:
        if self.clipboard is None:
            return NOOP
        try:
            text = self.clipboard.get()
        except ClipboardError as e:
            logger.warning(f"Could not read clipboard: {e}")
            return NOOP
        text = self._clean_paste(text)
        return Operation.insert_text(text) if text else NOOP

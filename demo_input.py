"""Interactive single-line input demo.

Usage:
    python demo_input.py [--secret]

Type to edit. Shift + arrows select, Ctrl-C/Ctrl-X/Ctrl-V use the system
clipboard, Insert toggles overwrite mode. Escape quits.
"""

from __future__ import annotations

import sys

from cellinput.clipboard import SystemClipboard
from cellinput.commands import KeyMap
from cellinput.constants import InputConstants
from cellinput.keyboard import KeyboardHandler, KeyType
from cellinput.model import EditorState
from cellinput.operations import OpKind, Operation
from cellinput.settings_persistence import SettingsPersistence
from cellinput.terminal import TerminalInterface
from cellinput.view import project


def main() -> None:
    settings = SettingsPersistence().load()
    mask = settings.mask_symbol
    if '--secret' in sys.argv[1:]:
        mask = mask or InputConstants.DEFAULT_MASK_SYMBOL

    clipboard = SystemClipboard()
    state = EditorState.from_settings(settings, clipboard=clipboard)
    keymap = KeyMap(clipboard=clipboard, settings=settings)
    terminal = TerminalInterface()
    keyboard = KeyboardHandler(terminal)

    terminal.setup()
    state.apply(Operation(OpKind.GAIN_FOCUS))
    try:
        while True:
            width = max(1, terminal.width - 2)
            state.window.resize(width, state.cursor_index())
            terminal.draw_input(1, 1, project(state, mask=mask))

            event = keyboard.get_key_event()
            if event is None:
                continue
            if event.key_type == KeyType.SPECIAL and event.value == 'escape':
                break
            operation = keymap.translate(event)
            if operation.kind == OpKind.LOSE_FOCUS:
                # Enter submits in this demo
                break
            state.apply(operation)
    finally:
        terminal.cleanup()

    print(state.text())


if __name__ == "__main__":
    main()

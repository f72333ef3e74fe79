"""cellinput - Single-line text input engine for character-cell interfaces."""

from .clipboard import Clipboard, ClipboardError, InternalClipboard, SystemClipboard
from .model import EditMode, EditorState, Selection
from .operations import NOOP, OpKind, Operation
from .view import Cell, ViewWindow, project

__all__ = [
    'Cell',
    'Clipboard',
    'ClipboardError',
    'EditMode',
    'EditorState',
    'InternalClipboard',
    'NOOP',
    'OpKind',
    'Operation',
    'Selection',
    'SystemClipboard',
    'ViewWindow',
    'project',
]

"""kilo: a small raw-mode terminal text editor."""

import logging

from kilo.buffer import LineBuffer, Row, cx_to_rx, expand_tabs, rx_to_cx
from kilo.config import VERSION, EditorConfig
from kilo.editor import Editor, IncrementalSearch
from kilo.key_decoder import EscapeSequenceParser, KeyDecoder
from kilo.keybindings import (
    DEFAULT_EDITOR_KEYBINDINGS,
    EditorAction,
    EditorKeybindingsManager,
)
from kilo.keys import Key, KeyId, ctrl_key, matches_key
from kilo.prompt import Prompt
from kilo.screen import Screen
from kilo.state import EditorState, StatusMessage
from kilo.storage import load_lines, write_all
from kilo.terminal import ProcessTerminal, Terminal, TerminalError, raw_mode
from kilo.viewport import Cursor, Viewport

__version__ = VERSION

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Cursor",
    "DEFAULT_EDITOR_KEYBINDINGS",
    "Editor",
    "EditorAction",
    "EditorConfig",
    "EditorKeybindingsManager",
    "EditorState",
    "EscapeSequenceParser",
    "IncrementalSearch",
    "Key",
    "KeyDecoder",
    "KeyId",
    "LineBuffer",
    "ProcessTerminal",
    "Prompt",
    "Row",
    "Screen",
    "StatusMessage",
    "Terminal",
    "TerminalError",
    "Viewport",
    "ctrl_key",
    "cx_to_rx",
    "expand_tabs",
    "load_lines",
    "matches_key",
    "raw_mode",
    "rx_to_cx",
    "write_all",
]

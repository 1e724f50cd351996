"""Editor: the main loop and the mapping from keys to editing commands.

One :class:`Editor` owns the :class:`~kilo.state.EditorState` and drives the
cycle decode key -> mutate buffer/cursor -> scroll -> redraw.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from kilo import storage
from kilo.buffer import LineBuffer
from kilo.config import EditorConfig
from kilo.key_decoder import KeyDecoder
from kilo.keybindings import EditorKeybindingsManager
from kilo.keys import Key, key_label
from kilo.prompt import Prompt
from kilo.screen import Screen
from kilo.state import EditorState
from kilo.terminal import CLEAR_SCREEN, CURSOR_HOME, Terminal
from kilo.viewport import Viewport

logger = logging.getLogger(__name__)

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"

# Status and message bar
_RESERVED_ROWS = 2


class Editor:
    """Interactive editing session on one terminal."""

    def __init__(
        self,
        terminal: Terminal,
        config: EditorConfig | None = None,
        keybindings: EditorKeybindingsManager | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or EditorConfig()
        self.terminal = terminal
        self.keybindings = keybindings or EditorKeybindingsManager()
        self._clock = clock

        self.decoder = KeyDecoder(terminal.read_byte)
        self.screen = Screen(self.config)

        rows, cols = terminal.window_size()
        viewport = Viewport(screen_rows=1, screen_cols=1)
        viewport.resize(rows - _RESERVED_ROWS, cols)
        self.state = EditorState(
            viewport=viewport,
            buffer=LineBuffer(tab_stop=self.config.tab_stop),
            quit_times=self.config.quit_times,
        )

        self.prompt = Prompt(
            self.decoder.decode_next_key,
            self.set_status_message,
            self.refresh_screen,
            self.keybindings,
        )

    # -- session ----------------------------------------------------------

    def open(self, filename: str) -> None:
        """Load *filename* into a fresh buffer.

        A missing file gives an empty buffer that will be created on save.
        """
        self.state.filename = filename
        try:
            lines = storage.load_lines(filename)
        except FileNotFoundError:
            logger.info("Opening new file %s", filename)
            lines = []
            self.set_status_message("New file")
        else:
            logger.info("Opened %s (%d lines)", filename, len(lines))

        self.state.buffer = LineBuffer(lines, tab_stop=self.config.tab_stop)
        self.state.cursor.cx = self.state.cursor.cy = 0
        self.state.viewport.row_offset = self.state.viewport.col_offset = 0

    def run(self) -> None:
        """Process keys until the user quits, then clear the screen."""
        if not self.state.status.text:
            self.set_status_message(HELP_MESSAGE)
        while True:
            self.refresh_screen()
            if not self.process_keypress():
                break
        self.terminal.write(CLEAR_SCREEN + CURSOR_HOME)

    def set_status_message(self, text: str) -> None:
        self.state.status.set(text, self._clock())

    def refresh_screen(self) -> None:
        self.screen.refresh(self.state, self.terminal, self._clock())

    # -- dispatch ---------------------------------------------------------

    def process_keypress(self) -> bool:
        """Read and handle one key. Returns ``False`` once the editor should exit."""
        return self.handle_key(self.decoder.decode_next_key())

    def handle_key(self, key: Key) -> bool:
        state = self.state
        buffer = state.buffer
        cursor = state.cursor
        action = self.keybindings.action_for(key)

        if action == "quit":
            if buffer.dirty and state.quit_times > 0:
                quit_keys = self.keybindings.get_keys("quit")
                label = key_label(quit_keys[0]) if quit_keys else "Ctrl-Q"
                self.set_status_message(
                    "WARNING!!! File has unsaved changes. "
                    f"Press {label} {state.quit_times} more times to quit."
                )
                state.quit_times -= 1
                return True
            return False

        if action == "newLine":
            self.insert_newline()
        elif action == "save":
            self.save()
        elif action == "find":
            self.find()
        elif action == "cursorLineStart":
            cursor.line_start()
        elif action == "cursorLineEnd":
            cursor.line_end(buffer)
        elif action == "deleteCharBackward":
            self.delete_char()
        elif action == "deleteCharForward":
            cursor.move(buffer, "right")
            self.delete_char()
        elif action == "pageUp":
            state.viewport.page(buffer, cursor, "up")
        elif action == "pageDown":
            state.viewport.page(buffer, cursor, "down")
        elif action == "cursorUp":
            cursor.move(buffer, "up")
        elif action == "cursorDown":
            cursor.move(buffer, "down")
        elif action == "cursorLeft":
            cursor.move(buffer, "left")
        elif action == "cursorRight":
            cursor.move(buffer, "right")
        elif action == "refresh":
            pass
        elif key.is_char:
            self.insert_char(key.byte)  # type: ignore[arg-type]

        state.quit_times = self.config.quit_times
        state.viewport.scroll(buffer, cursor)
        return True

    # -- editing ----------------------------------------------------------

    def insert_char(self, byte: int) -> None:
        buffer = self.state.buffer
        cursor = self.state.cursor
        if cursor.cy == buffer.row_count:
            buffer.insert_row(buffer.row_count, b"")
        buffer.insert_char(cursor.cy, cursor.cx, byte)
        cursor.cx += 1

    def insert_newline(self) -> None:
        buffer = self.state.buffer
        cursor = self.state.cursor
        if cursor.cx == 0:
            buffer.insert_row(cursor.cy, b"")
        else:
            buffer.split_at(cursor.cy, cursor.cx)
        cursor.cy += 1
        cursor.cx = 0

    def delete_char(self) -> None:
        """Delete left of the cursor, joining with the previous row at column 0."""
        buffer = self.state.buffer
        cursor = self.state.cursor
        row = buffer.row(cursor.cy)
        if row is None:
            return
        if cursor.cx == 0 and cursor.cy == 0:
            return

        if cursor.cx > 0:
            buffer.delete_char(cursor.cy, cursor.cx - 1)
            cursor.cx -= 1
        else:
            cursor.cx = buffer.row_length(cursor.cy - 1)
            buffer.append_text(cursor.cy - 1, row.chars)
            buffer.delete_row(cursor.cy)
            cursor.cy -= 1

    # -- commands ---------------------------------------------------------

    def save(self) -> None:
        state = self.state
        if state.filename is None:
            filename = self.prompt.ask("Save as: {} (ESC to cancel)")
            if filename is None:
                self.set_status_message("Save aborted")
                return
            state.filename = filename

        data = state.buffer.serialize()
        try:
            written = storage.write_all(state.filename, data)
        except OSError as e:
            logger.error("Saving %s failed: %s", state.filename, e)
            self.set_status_message(f"Can't save! I/O error: {e.strerror or e}")
            return

        state.buffer.mark_clean()
        logger.info("Saved %s (%d bytes)", state.filename, written)
        self.set_status_message(f"{written} bytes written to disk")

    def find(self) -> None:
        state = self.state
        saved = (
            state.cursor.cx,
            state.cursor.cy,
            state.viewport.col_offset,
            state.viewport.row_offset,
        )

        search = IncrementalSearch(state, self.keybindings)
        query = self.prompt.ask("Search: {} (Use ESC/Arrows/Enter)", search.on_key)

        if query is None:
            (
                state.cursor.cx,
                state.cursor.cy,
                state.viewport.col_offset,
                state.viewport.row_offset,
            ) = saved


class IncrementalSearch:
    """Moves the cursor to the next match as the search query is typed.

    Arrow keys step to the next (right/down) or previous (left/up) matching
    row, wrapping around the buffer.  Any other key restarts the search from
    the top.
    """

    def __init__(self, state: EditorState, keybindings: EditorKeybindingsManager) -> None:
        self._state = state
        self._keybindings = keybindings
        self.last_match = -1
        self.direction = 1

    def on_key(self, query: str, key: Key) -> None:
        kb = self._keybindings
        if kb.matches(key, "submit") or kb.matches(key, "cancel"):
            self.last_match = -1
            self.direction = 1
            return
        if kb.matches(key, "cursorRight") or kb.matches(key, "cursorDown"):
            self.direction = 1
        elif kb.matches(key, "cursorLeft") or kb.matches(key, "cursorUp"):
            self.direction = -1
        else:
            self.last_match = -1
            self.direction = 1

        if self.last_match == -1:
            self.direction = 1

        needle = query.encode("utf-8")
        if not needle:
            return

        buffer = self._state.buffer
        current = self.last_match
        for _ in range(buffer.row_count):
            current += self.direction
            if current == -1:
                current = buffer.row_count - 1
            elif current == buffer.row_count:
                current = 0

            row = buffer.rows[current]
            index = row.render.find(needle)
            if index != -1:
                self.last_match = current
                self._state.cursor.cy = current
                self._state.cursor.cx = row.rx_to_cx(index)
                # Scroll so the match ends up on the top line
                self._state.viewport.row_offset = buffer.row_count
                break

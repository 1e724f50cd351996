"""Screen renderer.

Every frame is assembled into one byte string and handed to the terminal in
a single ``write`` call, so a partially drawn frame is never visible.  The
frame is a full redraw: text rows, status bar, message bar, then the cursor
placed at its on-screen position.

Coordinates are 0-indexed internally and 1-indexed in the escape codes.
"""

from __future__ import annotations

from kilo.config import VERSION, EditorConfig
from kilo.state import EditorState
from kilo.terminal import Terminal
from kilo.utils import truncate_to_width, visible_width

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
CLEAR_LINE_RIGHT = b"\x1b[K"
REVERSE_VIDEO = b"\x1b[7m"
RESET_ATTRIBUTES = b"\x1b[m"
NEWLINE = b"\r\n"

EMPTY_LINE_MARKER = b"~"

WELCOME_TEXT = f"Kilo editor -- version {VERSION}"


def _cursor_to(row: int, col: int) -> bytes:
    return b"\x1b[%d;%dH" % (row + 1, col + 1)


class Screen:
    """Builds and writes full-screen frames for an :class:`EditorState`."""

    def __init__(self, config: EditorConfig | None = None) -> None:
        self._config = config or EditorConfig()

    def refresh(self, state: EditorState, terminal: Terminal, now: float) -> None:
        terminal.write(self.render(state, now))

    def render(self, state: EditorState, now: float) -> bytes:
        """Return the escape-coded frame for *state* at time *now*."""
        viewport = state.viewport
        cursor = state.cursor
        viewport.scroll(state.buffer, cursor)

        out = bytearray()
        out += HIDE_CURSOR
        out += CURSOR_HOME

        self._draw_rows(out, state)
        self._draw_status_bar(out, state)
        self._draw_message_bar(out, state, now)

        out += _cursor_to(cursor.cy - viewport.row_offset, cursor.rx - viewport.col_offset)
        out += SHOW_CURSOR
        return bytes(out)

    # -- sections ---------------------------------------------------------

    def _draw_rows(self, out: bytearray, state: EditorState) -> None:
        buffer = state.buffer
        viewport = state.viewport
        cols = viewport.screen_cols

        for y in range(viewport.screen_rows):
            filerow = y + viewport.row_offset
            row = buffer.row(filerow)
            if row is None:
                if buffer.row_count == 0 and y == viewport.screen_rows // 3:
                    out += self._welcome(cols)
                else:
                    out += EMPTY_LINE_MARKER
            else:
                out += row.render[viewport.col_offset : viewport.col_offset + cols]

            out += CLEAR_LINE_RIGHT
            out += NEWLINE

    def _welcome(self, cols: int) -> bytes:
        welcome = truncate_to_width(WELCOME_TEXT, cols)
        padding = (cols - visible_width(welcome)) // 2
        line = ""
        if padding:
            line += "~"
            padding -= 1
        line += " " * padding + welcome
        return line.encode("utf-8")

    def _draw_status_bar(self, out: bytearray, state: EditorState) -> None:
        cols = state.viewport.screen_cols
        buffer = state.buffer

        name = truncate_to_width(state.filename or "[No Name]", self._config.filename_width)
        modified = " (modified)" if buffer.dirty else ""
        status = truncate_to_width(f"{name} - {buffer.row_count} lines{modified}", cols)
        rstatus = f"{state.cursor.cy + 1}/{buffer.row_count}"

        length = visible_width(status)
        rlength = visible_width(rstatus)
        bar = status
        while length < cols:
            if cols - length == rlength:
                bar += rstatus
                break
            bar += " "
            length += 1

        out += REVERSE_VIDEO
        out += bar.encode("utf-8")
        out += RESET_ATTRIBUTES
        out += NEWLINE

    def _draw_message_bar(self, out: bytearray, state: EditorState, now: float) -> None:
        out += CLEAR_LINE_RIGHT
        status = state.status
        if status.visible(now, self._config.message_timeout):
            out += truncate_to_width(status.text, state.viewport.screen_cols).encode("utf-8")

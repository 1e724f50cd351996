"""Cursor and viewport model.

The cursor lives in buffer space (``cx``/``cy`` index stored bytes and rows)
and carries ``rx``, its column after tab expansion.  ``cy`` may equal the row
count, which denotes the empty virtual line after the last row.

The viewport is the visible window onto the buffer.  :meth:`Viewport.scroll`
recomputes ``rx`` and moves the offsets by the smallest amount that puts the
cursor back inside the window.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from kilo.buffer import LineBuffer

Direction = Literal["up", "down", "left", "right"]


@dataclass
class Cursor:
    cx: int = 0
    cy: int = 0
    rx: int = 0

    def move(self, buffer: LineBuffer, direction: Direction) -> None:
        """Move one step, wrapping across line ends horizontally."""
        row = buffer.row(self.cy)

        if direction == "left":
            if self.cx > 0:
                self.cx -= 1
            elif self.cy > 0:
                self.cy -= 1
                self.cx = buffer.row_length(self.cy)
        elif direction == "right":
            if row is not None and self.cx < len(row):
                self.cx += 1
            elif row is not None and self.cx == len(row):
                self.cy += 1
                self.cx = 0
        elif direction == "up":
            if self.cy > 0:
                self.cy -= 1
        elif direction == "down":
            if self.cy < buffer.row_count:
                self.cy += 1

        self.clamp(buffer)

    def clamp(self, buffer: LineBuffer) -> None:
        """Pull the cursor back inside the buffer and the current row."""
        self.cy = max(0, min(self.cy, buffer.row_count))
        self.cx = max(0, min(self.cx, buffer.row_length(self.cy)))

    def line_start(self) -> None:
        self.cx = 0

    def line_end(self, buffer: LineBuffer) -> None:
        self.cx = buffer.row_length(self.cy)


@dataclass
class Viewport:
    screen_rows: int
    screen_cols: int
    row_offset: int = 0
    col_offset: int = 0

    def resize(self, screen_rows: int, screen_cols: int) -> None:
        self.screen_rows = max(1, screen_rows)
        self.screen_cols = max(1, screen_cols)

    def scroll(self, buffer: LineBuffer, cursor: Cursor) -> None:
        row = buffer.row(cursor.cy)
        cursor.rx = row.cx_to_rx(cursor.cx) if row is not None else 0

        if cursor.cy < self.row_offset:
            self.row_offset = cursor.cy
        if cursor.cy >= self.row_offset + self.screen_rows:
            self.row_offset = cursor.cy - self.screen_rows + 1
        if cursor.rx < self.col_offset:
            self.col_offset = cursor.rx
        if cursor.rx >= self.col_offset + self.screen_cols:
            self.col_offset = cursor.rx - self.screen_cols + 1

    def page(self, buffer: LineBuffer, cursor: Cursor, direction: Literal["up", "down"]) -> None:
        """Jump to the window edge, then move a full screen further."""
        if direction == "up":
            cursor.cy = self.row_offset
        else:
            cursor.cy = min(self.row_offset + self.screen_rows - 1, buffer.row_count)
        cursor.clamp(buffer)

        for _ in range(self.screen_rows):
            cursor.move(buffer, direction)

"""Line buffer: the document as an ordered list of rows.

Each :class:`Row` keeps the exact stored bytes of one line and a derived
render form in which tabs are expanded to the next tab stop.  The render form
is recomputed whenever the stored bytes change and cannot be set directly.

Structural operations on :class:`LineBuffer` take row and column indices
straight from cursor arithmetic, so indices outside the valid range are
clamped or ignored rather than raised.
"""

from __future__ import annotations

from typing import Iterable

from kilo.config import TAB_STOP
from kilo.keys import TAB

LINE_TERMINATOR = b"\n"


# ---------------------------------------------------------------------------
# Tab expansion
# ---------------------------------------------------------------------------


def expand_tabs(chars: bytes, tab_stop: int = TAB_STOP) -> bytes:
    """Return *chars* with each tab replaced by spaces up to the next tab stop."""
    if TAB not in chars:
        return bytes(chars)
    out = bytearray()
    for byte in chars:
        if byte == TAB:
            out.append(0x20)
            while len(out) % tab_stop != 0:
                out.append(0x20)
        else:
            out.append(byte)
    return bytes(out)


def cx_to_rx(chars: bytes, cx: int, tab_stop: int = TAB_STOP) -> int:
    """Map a stored column to its render column."""
    rx = 0
    for byte in chars[:cx]:
        if byte == TAB:
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1
    return rx


def rx_to_cx(chars: bytes, rx: int, tab_stop: int = TAB_STOP) -> int:
    """Map a render column back to the stored column that covers it."""
    cur_rx = 0
    for cx, byte in enumerate(chars):
        if byte == TAB:
            cur_rx += (tab_stop - 1) - (cur_rx % tab_stop)
        cur_rx += 1
        if cur_rx > rx:
            return cx
    return len(chars)


# ---------------------------------------------------------------------------
# Row
# ---------------------------------------------------------------------------


class Row:
    """One line of the document."""

    __slots__ = ("_chars", "_render", "_tab_stop")

    def __init__(self, chars: bytes = b"", tab_stop: int = TAB_STOP) -> None:
        self._tab_stop = tab_stop
        self._chars = b""
        self._render = b""
        self.chars = chars

    @property
    def chars(self) -> bytes:
        return self._chars

    @chars.setter
    def chars(self, value: bytes) -> None:
        self._chars = bytes(value)
        self._render = expand_tabs(self._chars, self._tab_stop)

    @property
    def render(self) -> bytes:
        return self._render

    def __len__(self) -> int:
        return len(self._chars)

    def __repr__(self) -> str:
        return f"Row({self._chars!r})"

    def cx_to_rx(self, cx: int) -> int:
        return cx_to_rx(self._chars, cx, self._tab_stop)

    def rx_to_cx(self, rx: int) -> int:
        return rx_to_cx(self._chars, rx, self._tab_stop)


# ---------------------------------------------------------------------------
# LineBuffer
# ---------------------------------------------------------------------------


class LineBuffer:
    """Ordered rows plus a modification counter.

    ``dirty`` counts content changes since the buffer was loaded or last
    marked clean; it is zero for an unmodified buffer.
    """

    def __init__(self, lines: Iterable[bytes] = (), tab_stop: int = TAB_STOP) -> None:
        self.tab_stop = tab_stop
        self.rows: list[Row] = [Row(line, tab_stop) for line in lines]
        self.dirty: int = 0

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def row(self, at: int) -> Row | None:
        """Return the row at *at*, or ``None`` outside ``[0, row_count)``."""
        if 0 <= at < len(self.rows):
            return self.rows[at]
        return None

    def row_length(self, at: int) -> int:
        row = self.row(at)
        return len(row) if row is not None else 0

    def mark_clean(self) -> None:
        self.dirty = 0

    # -- row operations ----------------------------------------------------

    def insert_row(self, at: int, text: bytes) -> None:
        if at < 0 or at > len(self.rows):
            return
        self.rows.insert(at, Row(text, self.tab_stop))
        self.dirty += 1

    def delete_row(self, at: int) -> None:
        if at < 0 or at >= len(self.rows):
            return
        del self.rows[at]
        self.dirty += 1

    def split_at(self, at: int, col: int) -> None:
        """Move ``chars[col:]`` of row *at* into a new row directly below it."""
        row = self.row(at)
        if row is None:
            return
        col = max(0, min(col, len(row)))
        chars = row.chars
        self.insert_row(at + 1, chars[col:])
        row.chars = chars[:col]
        self.dirty += 1

    # -- character operations ----------------------------------------------

    def insert_char(self, at: int, col: int, ch: int) -> None:
        row = self.row(at)
        if row is None:
            return
        chars = row.chars
        if col < 0 or col > len(chars):
            col = len(chars)
        row.chars = chars[:col] + bytes((ch,)) + chars[col:]
        self.dirty += 1

    def delete_char(self, at: int, col: int) -> None:
        row = self.row(at)
        if row is None or col < 0 or col >= len(row):
            return
        chars = row.chars
        row.chars = chars[:col] + chars[col + 1 :]
        self.dirty += 1

    def append_text(self, at: int, text: bytes) -> None:
        row = self.row(at)
        if row is None:
            return
        row.chars = row.chars + text
        self.dirty += 1

    # -- serialization -----------------------------------------------------

    def serialize(self) -> bytes:
        """Join every row with one line terminator after each."""
        return b"".join(row.chars + LINE_TERMINATOR for row in self.rows)

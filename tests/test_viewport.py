"""Tests for kilo.viewport -- cursor movement, scrolling and paging."""

from __future__ import annotations

import pytest

from kilo.buffer import LineBuffer
from kilo.viewport import Cursor, Viewport


def assert_cursor_in_buffer(buffer: LineBuffer, cursor: Cursor) -> None:
    assert 0 <= cursor.cy <= buffer.row_count
    assert 0 <= cursor.cx <= buffer.row_length(cursor.cy)


def cursor_visible(viewport: Viewport, cursor: Cursor) -> bool:
    return (
        viewport.row_offset <= cursor.cy < viewport.row_offset + viewport.screen_rows
        and viewport.col_offset <= cursor.rx < viewport.col_offset + viewport.screen_cols
    )


# ---------------------------------------------------------------------------
# Horizontal movement
# ---------------------------------------------------------------------------


class TestHorizontalMoves:
    def test_left_decrements(self) -> None:
        buffer = LineBuffer([b"abc"])
        cursor = Cursor(cx=2)
        cursor.move(buffer, "left")
        assert (cursor.cx, cursor.cy) == (1, 0)

    def test_left_at_start_wraps_to_previous_row_end(self) -> None:
        buffer = LineBuffer([b"abc", b"de"])
        cursor = Cursor(cx=0, cy=1)
        cursor.move(buffer, "left")
        assert (cursor.cx, cursor.cy) == (3, 0)

    def test_left_at_origin_stays(self) -> None:
        buffer = LineBuffer([b"abc"])
        cursor = Cursor()
        cursor.move(buffer, "left")
        assert (cursor.cx, cursor.cy) == (0, 0)

    def test_right_increments(self) -> None:
        buffer = LineBuffer([b"abc"])
        cursor = Cursor()
        cursor.move(buffer, "right")
        assert (cursor.cx, cursor.cy) == (1, 0)

    def test_right_at_end_wraps_to_next_row(self) -> None:
        buffer = LineBuffer([b"ab", b"cd"])
        cursor = Cursor(cx=2)
        cursor.move(buffer, "right")
        assert (cursor.cx, cursor.cy) == (0, 1)

    def test_right_past_last_row_reaches_virtual_line(self) -> None:
        buffer = LineBuffer([b"ab"])
        cursor = Cursor(cx=2)
        cursor.move(buffer, "right")
        assert (cursor.cx, cursor.cy) == (0, 1)
        cursor.move(buffer, "right")
        assert (cursor.cx, cursor.cy) == (0, 1)


# ---------------------------------------------------------------------------
# Vertical movement
# ---------------------------------------------------------------------------


class TestVerticalMoves:
    def test_down_clamps_column_to_shorter_row(self) -> None:
        buffer = LineBuffer([b"abcdef", b"ab"])
        cursor = Cursor(cx=5)
        cursor.move(buffer, "down")
        assert (cursor.cx, cursor.cy) == (2, 1)

    def test_down_stops_at_virtual_line(self) -> None:
        buffer = LineBuffer([b"abc"])
        cursor = Cursor(cx=3)
        cursor.move(buffer, "down")
        cursor.move(buffer, "down")
        assert (cursor.cx, cursor.cy) == (0, 1)

    def test_up_stops_at_top(self) -> None:
        buffer = LineBuffer([b"abc"])
        cursor = Cursor(cx=1)
        cursor.move(buffer, "up")
        assert (cursor.cx, cursor.cy) == (1, 0)

    @pytest.mark.parametrize(
        "moves",
        [
            "drdrdrdrll",
            "uuuullllrrrrrrrrrrrrrrr",
            "dddddddddduuulrlrlr",
            "rrrrrrrrrrrrrrrrrrrrrdluuuuu",
        ],
    )
    def test_clamp_invariant_holds(self, moves: str) -> None:
        buffer = LineBuffer([b"hello", b"", b"\tx", b"longer line here"])
        cursor = Cursor()
        names = {"u": "up", "d": "down", "l": "left", "r": "right"}
        for m in moves:
            cursor.move(buffer, names[m])  # type: ignore[arg-type]
            assert_cursor_in_buffer(buffer, cursor)


class TestLineStartEnd:
    def test_line_end_uses_row_length(self) -> None:
        buffer = LineBuffer([b"abcd"])
        cursor = Cursor()
        cursor.line_end(buffer)
        assert cursor.cx == 4

    def test_line_end_on_virtual_line(self) -> None:
        buffer = LineBuffer([b"abcd"])
        cursor = Cursor(cy=1)
        cursor.line_end(buffer)
        assert cursor.cx == 0


# ---------------------------------------------------------------------------
# Scrolling
# ---------------------------------------------------------------------------


class TestScroll:
    def test_render_column_follows_tabs(self) -> None:
        buffer = LineBuffer([b"\tab"])
        cursor = Cursor(cx=1)
        viewport = Viewport(screen_rows=10, screen_cols=80)
        viewport.scroll(buffer, cursor)
        assert cursor.rx == 8

    def test_scrolls_down_minimally(self) -> None:
        buffer = LineBuffer([b"x"] * 50)
        cursor = Cursor(cy=20)
        viewport = Viewport(screen_rows=10, screen_cols=80)
        viewport.scroll(buffer, cursor)
        assert viewport.row_offset == 11

    def test_scrolls_up_to_cursor(self) -> None:
        buffer = LineBuffer([b"x"] * 50)
        cursor = Cursor(cy=3)
        viewport = Viewport(screen_rows=10, screen_cols=80, row_offset=30)
        viewport.scroll(buffer, cursor)
        assert viewport.row_offset == 3

    def test_horizontal_scroll_uses_render_column(self) -> None:
        buffer = LineBuffer([b"\t\t\tabc"])
        cursor = Cursor(cx=4)
        viewport = Viewport(screen_rows=10, screen_cols=20)
        viewport.scroll(buffer, cursor)
        assert cursor.rx == 25
        assert viewport.col_offset == 6
        assert cursor_visible(viewport, cursor)

    def test_horizontal_scroll_back_left(self) -> None:
        buffer = LineBuffer([b"abc"])
        cursor = Cursor(cx=1)
        viewport = Viewport(screen_rows=10, screen_cols=20, col_offset=15)
        viewport.scroll(buffer, cursor)
        assert viewport.col_offset == 1

    def test_no_change_when_inside(self) -> None:
        buffer = LineBuffer([b"x"] * 50)
        cursor = Cursor(cy=15)
        viewport = Viewport(screen_rows=10, screen_cols=80, row_offset=10)
        viewport.scroll(buffer, cursor)
        assert viewport.row_offset == 10


# ---------------------------------------------------------------------------
# Paging
# ---------------------------------------------------------------------------


class TestPaging:
    def test_page_down_from_top(self) -> None:
        buffer = LineBuffer([b"x"] * 100)
        cursor = Cursor()
        viewport = Viewport(screen_rows=10, screen_cols=80)
        viewport.page(buffer, cursor, "down")
        # Bottom of the window (9) plus a full screen of moves
        assert cursor.cy == 19
        viewport.scroll(buffer, cursor)
        assert cursor_visible(viewport, cursor)

    def test_page_up_from_middle(self) -> None:
        buffer = LineBuffer([b"x"] * 100)
        viewport = Viewport(screen_rows=10, screen_cols=80, row_offset=40)
        cursor = Cursor(cy=45)
        viewport.page(buffer, cursor, "up")
        assert cursor.cy == 30

    def test_page_up_clamps_at_top(self) -> None:
        buffer = LineBuffer([b"x"] * 100)
        viewport = Viewport(screen_rows=10, screen_cols=80, row_offset=4)
        cursor = Cursor(cy=6)
        viewport.page(buffer, cursor, "up")
        assert cursor.cy == 0

    def test_page_down_clamps_at_virtual_line(self) -> None:
        buffer = LineBuffer([b"x"] * 5)
        cursor = Cursor()
        viewport = Viewport(screen_rows=10, screen_cols=80)
        viewport.page(buffer, cursor, "down")
        assert cursor.cy == 5

    def test_page_clamps_column(self) -> None:
        buffer = LineBuffer([b"long line"] + [b""] * 30)
        cursor = Cursor(cx=9)
        viewport = Viewport(screen_rows=10, screen_cols=80)
        viewport.page(buffer, cursor, "down")
        assert cursor.cx == 0

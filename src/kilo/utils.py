"""Display-width helpers for status and message bar text.

Buffer rows are drawn byte for byte, but the bars show filenames and
messages that may hold any Unicode text.  These helpers measure and cut such
text by terminal columns so the bars never overflow the screen.
"""

from __future__ import annotations

import grapheme
import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster."""
    if not g:
        return 0
    cp = ord(g[0])
    # Control characters
    if cp < 0x20 or (0x7F <= cp <= 0x9F):
        return 0
    # VS16 or ZWJ inside a cluster means emoji presentation
    if len(g) > 1 and ("\ufe0f" in g or "\u200d" in g):
        return 2
    return max(_wcwidth.wcswidth(g), _wcwidth.wcwidth(g[0]), 0)


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*."""
    if not text:
        return 0

    if text.isascii() and text.isprintable():
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    total = 0
    for g in grapheme.graphemes(text):
        total += _grapheme_width(g)

    return _cache_width(text, total)


# ---------------------------------------------------------------------------
# truncate_to_width
# ---------------------------------------------------------------------------


def truncate_to_width(text: str, max_width: int) -> str:
    """Cut *text* to at most *max_width* columns at a grapheme boundary."""
    if max_width <= 0:
        return ""

    width = visible_width(text)
    if width <= max_width:
        return text

    result: list[str] = []
    cols = 0
    for g in grapheme.graphemes(text):
        w = _grapheme_width(g)
        if cols + w > max_width:
            break
        result.append(g)
        cols += w

    return "".join(result)

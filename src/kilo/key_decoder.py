"""Key decoder: turns the raw terminal byte stream into logical keys.

Escape sequences arrive as several bytes (``ESC [ A`` for Up).  A lone Escape
keypress produces no follow-up bytes, so after an ``ESC`` the decoder waits
one read timeout for the next byte and, if nothing arrives, reports a bare
Escape.  Sequences that stop part way, or that are not recognised, degrade
to a bare Escape as well; they are never an error.
"""

from __future__ import annotations

import logging
from typing import Callable, Literal

from kilo.keys import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    BACKSPACE_KEY,
    DELETE,
    END,
    ESC,
    ESCAPE,
    HOME,
    PAGE_DOWN,
    PAGE_UP,
    Key,
)

logger = logging.getLogger(__name__)

ParserState = Literal["escape", "csi", "csi-param", "ss3"]

# ESC [ <letter>
_CSI_FINAL_KEYS: dict[int, Key] = {
    ord("A"): ARROW_UP,
    ord("B"): ARROW_DOWN,
    ord("C"): ARROW_RIGHT,
    ord("D"): ARROW_LEFT,
    ord("H"): HOME,
    ord("F"): END,
}

# ESC [ <digit> ~
_CSI_TILDE_KEYS: dict[int, Key] = {
    ord("1"): HOME,
    ord("3"): DELETE,
    ord("4"): END,
    ord("5"): PAGE_UP,
    ord("6"): PAGE_DOWN,
    ord("7"): HOME,
    ord("8"): END,
}

# ESC O <letter>
_SS3_KEYS: dict[int, Key] = {
    ord("H"): HOME,
    ord("F"): END,
}


class EscapeSequenceParser:
    """Finite-state parser for the bytes that follow an ``ESC``.

    :meth:`feed` returns the resolved :class:`Key` once the sequence is
    complete (or recognised as malformed) and ``None`` while more bytes are
    needed.  :meth:`timeout` resolves a sequence whose next byte never came.
    A resolved parser must not be fed again.
    """

    def __init__(self) -> None:
        self.state: ParserState = "escape"
        self._param: int | None = None

    def feed(self, byte: int) -> Key | None:
        if self.state == "escape":
            if byte == ord("["):
                self.state = "csi"
                return None
            if byte == ord("O"):
                self.state = "ss3"
                return None
            return self._malformed(byte)

        if self.state == "csi":
            if ord("0") <= byte <= ord("9"):
                self._param = byte
                self.state = "csi-param"
                return None
            return _CSI_FINAL_KEYS.get(byte) or self._malformed(byte)

        if self.state == "csi-param":
            if byte == ord("~") and self._param is not None:
                return _CSI_TILDE_KEYS.get(self._param) or self._malformed(byte)
            return self._malformed(byte)

        return _SS3_KEYS.get(byte) or self._malformed(byte)

    def timeout(self) -> Key:
        if self.state != "escape":
            logger.debug("Incomplete escape sequence in state %s", self.state)
        return ESCAPE

    def _malformed(self, byte: int) -> Key:
        logger.debug("Unrecognised escape sequence byte %#04x in state %s", byte, self.state)
        return ESCAPE


class KeyDecoder:
    """Reads bytes from *read_byte* and produces one :class:`Key` per call.

    *read_byte* returns the next byte, or ``None`` when its short timeout
    expires without input.
    """

    def __init__(self, read_byte: Callable[[], int | None]) -> None:
        self._read_byte = read_byte

    def decode_next_key(self) -> Key:
        """Block until a key is fully resolved and return it."""
        byte = self._wait_for_byte()

        if byte == BACKSPACE:
            return BACKSPACE_KEY
        if byte != ESC:
            return Key.char(byte)

        parser = EscapeSequenceParser()
        while True:
            nxt = self._read_byte()
            if nxt is None:
                return parser.timeout()
            key = parser.feed(nxt)
            if key is not None:
                return key

    def _wait_for_byte(self) -> int:
        while True:
            byte = self._read_byte()
            if byte is not None:
                return byte

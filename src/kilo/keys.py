"""Logical key values and key-identifier matching.

A decoded keystroke is a :class:`Key`: either a plain character byte or one of
the named special keys (arrows, paging, Home/End, Delete, Backspace, bare
Escape).  Bindings refer to keys by identifier strings such as ``"ctrl+q"``,
``"enter"`` or ``"pageDown"``; :func:`matches_key` checks a decoded key
against such an identifier.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

KeyId = str

KeyName = Literal[
    "char",
    "up",
    "down",
    "left",
    "right",
    "home",
    "end",
    "pageUp",
    "pageDown",
    "delete",
    "backspace",
    "escape",
]

# ---------------------------------------------------------------------------
# Byte constants
# ---------------------------------------------------------------------------

ESC = 0x1B
ENTER = 0x0D
TAB = 0x09
BACKSPACE = 0x7F

MODIFIERS: dict[str, int] = {
    "ctrl": 4,
}

CODEPOINTS: dict[str, int] = {
    "enter": ENTER,
    "tab": TAB,
    "space": 0x20,
}


def ctrl_key(ch: str) -> int:
    """Return the byte a terminal sends for Ctrl plus *ch* (``"q"`` -> 0x11)."""
    return ord(ch) & 0x1F


# ---------------------------------------------------------------------------
# Key value
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Key:
    """One decoded keystroke.

    ``byte`` is set only for ``name == "char"``.
    """

    name: KeyName
    byte: int | None = None

    @classmethod
    def char(cls, byte: int) -> Key:
        return cls("char", byte)

    @property
    def is_char(self) -> bool:
        return self.name == "char"

    def is_printable(self) -> bool:
        """True for a character key outside the control range."""
        return self.name == "char" and self.byte is not None and 0x20 <= self.byte < 0x7F

    def __repr__(self) -> str:
        if self.name == "char":
            return f"Key.char({self.byte!r})"
        return f"Key({self.name!r})"


ARROW_UP = Key("up")
ARROW_DOWN = Key("down")
ARROW_LEFT = Key("left")
ARROW_RIGHT = Key("right")
HOME = Key("home")
END = Key("end")
PAGE_UP = Key("pageUp")
PAGE_DOWN = Key("pageDown")
DELETE = Key("delete")
BACKSPACE_KEY = Key("backspace")
ESCAPE = Key("escape")

NAMED_KEYS: dict[str, Key] = {
    "up": ARROW_UP,
    "down": ARROW_DOWN,
    "left": ARROW_LEFT,
    "right": ARROW_RIGHT,
    "home": HOME,
    "end": END,
    "pageUp": PAGE_UP,
    "pageDown": PAGE_DOWN,
    "delete": DELETE,
    "backspace": BACKSPACE_KEY,
    "escape": ESCAPE,
    "esc": ESCAPE,
}


# ---------------------------------------------------------------------------
# Key ID parsing
# ---------------------------------------------------------------------------


def parse_key_id(key_id: str) -> dict[str, object] | None:
    """Split a key identifier like ``"ctrl+s"`` into its components.

    Returns a dict with:
    - ``modifiers``: int bitmask (ctrl=4)
    - ``key``: the base key string

    Returns ``None`` if the key_id is empty or holds only modifiers.
    """
    if not key_id:
        return None

    parts = key_id.split("+")
    modifier = 0
    key_parts: list[str] = []

    for part in parts:
        lower = part.lower()
        if lower in MODIFIERS:
            modifier |= MODIFIERS[lower]
        else:
            key_parts.append(part)

    key = "+".join(key_parts) if key_parts else ""
    if not key:
        return None

    return {"modifiers": modifier, "key": key}


def key_label(key_id: KeyId) -> str:
    """Format a key identifier for display: ``"ctrl+q"`` -> ``"Ctrl-Q"``."""
    parts = [
        part.upper() if len(part) == 1 else part[:1].upper() + part[1:]
        for part in key_id.split("+")
    ]
    return "-".join(parts)


def raw_ctrl_char(key: str) -> int | None:
    """Return the control byte for a key, or ``None`` if not applicable."""
    if len(key) != 1:
        return None
    code = ord(key.lower())
    if ord("a") <= code <= ord("z"):
        return code & 0x1F
    ctrl_map: dict[str, int] = {
        "[": 27,
        "\\": 28,
        "]": 29,
        "^": 30,
        "_": 31,
        "@": 0,
    }
    return ctrl_map.get(key)


# ---------------------------------------------------------------------------
# matches_key
# ---------------------------------------------------------------------------


def matches_key(key: Key, key_id: KeyId) -> bool:
    """Return ``True`` if the decoded *key* matches the named *key_id*.

    *key_id* examples: ``"a"``, ``"ctrl+q"``, ``"enter"``, ``"pageUp"``.
    """
    parsed = parse_key_id(key_id)
    if parsed is None:
        return False

    mod: int = parsed["modifiers"]  # type: ignore[assignment]
    name: str = parsed["key"]  # type: ignore[assignment]
    has_ctrl = bool(mod & MODIFIERS["ctrl"])

    if has_ctrl:
        ctrl = raw_ctrl_char(name)
        return ctrl is not None and key.is_char and key.byte == ctrl

    named = NAMED_KEYS.get(name)
    if named is not None:
        return key == named

    if name in CODEPOINTS:
        return key.is_char and key.byte == CODEPOINTS[name]

    if len(name) == 1:
        return key.is_char and key.byte == ord(name)

    return False

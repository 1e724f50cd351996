"""The editor state value owned by the main loop."""

from __future__ import annotations

from dataclasses import dataclass, field

from kilo.buffer import LineBuffer
from kilo.viewport import Cursor, Viewport


@dataclass
class StatusMessage:
    """Message bar text and the time it was set.

    The message is shown only while it is younger than the display window;
    after that it is hidden but kept.
    """

    text: str = ""
    timestamp: float = 0.0

    def set(self, text: str, now: float) -> None:
        self.text = text
        self.timestamp = now

    def clear(self) -> None:
        self.text = ""

    def visible(self, now: float, timeout: float) -> bool:
        return bool(self.text) and now - self.timestamp < timeout


@dataclass
class EditorState:
    viewport: Viewport
    buffer: LineBuffer = field(default_factory=LineBuffer)
    cursor: Cursor = field(default_factory=Cursor)
    filename: str | None = None
    status: StatusMessage = field(default_factory=StatusMessage)
    quit_times: int = 0

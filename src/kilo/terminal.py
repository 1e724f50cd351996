"""Terminal abstraction for raw-mode byte input and frame output.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation over the process's stdin/stdout descriptors.  Raw mode is
held as a scope: ``ProcessTerminal`` is a context manager, and
:func:`raw_mode` wraps any ``Terminal`` so the original mode is restored on
every exit path.
"""

from __future__ import annotations

import contextlib
import errno
import logging
import os
import re
import select
import sys
import termios
import tty
from typing import Iterator, Protocol

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

CLEAR_SCREEN = b"\x1b[2J"
CURSOR_HOME = b"\x1b[H"
_CURSOR_FAR_BOTTOM_RIGHT = b"\x1b[999C\x1b[999B"
_CURSOR_POSITION_QUERY = b"\x1b[6n"

_CURSOR_POSITION_RE = re.compile(rb"^\x1b\[(\d+);(\d+)$")

_CURSOR_REPORT_MAX = 32


class TerminalError(Exception):
    """Unrecoverable terminal I/O failure.

    The message reads like ``perror``: the failing operation, then the OS
    error text.
    """

    def __init__(self, operation: str, error: BaseException | str | None = None) -> None:
        self.operation = operation
        self.error = error
        detail = f": {error}" if error else ""
        super().__init__(f"{operation}{detail}")


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def enter_raw_mode(self) -> None: ...

    def restore_mode(self) -> None: ...

    def read_byte(self) -> int | None: ...

    def window_size(self) -> tuple[int, int]: ...

    def write(self, data: bytes) -> None: ...


@contextlib.contextmanager
def raw_mode(terminal: Terminal) -> Iterator[Terminal]:
    """Hold *terminal* in raw mode for the duration of the ``with`` block."""
    terminal.enter_raw_mode()
    try:
        yield terminal
    finally:
        terminal.restore_mode()


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal backed by the stdin/stdout file descriptors.

    Raw mode is set with :func:`tty.setraw` (no echo, no canonical input, no
    signal keys, no output post-processing).  Reads poll stdin with
    :func:`select.select` for at most *read_timeout* seconds.
    """

    def __init__(
        self,
        read_timeout: float = 0.1,
        stdin_fd: int | None = None,
        stdout_fd: int | None = None,
        write_log: str = "",
    ) -> None:
        self._read_timeout = read_timeout
        self._stdin_fd = stdin_fd
        self._stdout_fd = stdout_fd
        self._original_termios: list | None = None
        self._write_log_path = write_log

    # -- descriptors ------------------------------------------------------

    @property
    def stdin_fd(self) -> int:
        if self._stdin_fd is None:
            self._stdin_fd = sys.stdin.fileno()
        return self._stdin_fd

    @property
    def stdout_fd(self) -> int:
        if self._stdout_fd is None:
            self._stdout_fd = sys.stdout.fileno()
        return self._stdout_fd

    # -- raw mode ---------------------------------------------------------

    def enter_raw_mode(self) -> None:
        """Save the current terminal attributes and switch to raw mode."""
        fd = self.stdin_fd
        try:
            self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd, termios.TCSAFLUSH)
        except termios.error as e:
            raise TerminalError("tcsetattr", e.args[-1] if e.args else e) from e
        logger.debug("Entered raw mode on fd %d", fd)

    def restore_mode(self) -> None:
        """Restore the attributes saved by :meth:`enter_raw_mode`."""
        if self._original_termios is None:
            return
        attrs, self._original_termios = self._original_termios, None
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, attrs)
        except termios.error as e:
            raise TerminalError("tcsetattr", e.args[-1] if e.args else e) from e
        logger.debug("Restored terminal mode")

    def __enter__(self) -> ProcessTerminal:
        self.enter_raw_mode()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.restore_mode()

    # -- input ------------------------------------------------------------

    def read_byte(self) -> int | None:
        """Return one input byte, or ``None`` if none arrives in time."""
        fd = self.stdin_fd
        try:
            ready, _, _ = select.select([fd], [], [], self._read_timeout)
            if not ready:
                return None
            data = os.read(fd, 1)
        except OSError as e:
            if e.errno == errno.EAGAIN:
                return None
            raise TerminalError("read", e) from e
        if not data:
            # Readable but empty: the input side has been closed
            raise TerminalError("read", "end of input")
        return data[0]

    # -- output -----------------------------------------------------------

    def write(self, data: bytes) -> None:
        """Write *data* to stdout and optionally to the write log.

        A frame normally goes out in one ``os.write``; a short write is
        finished with further calls.
        """
        view = memoryview(data)
        try:
            while view:
                written = os.write(self.stdout_fd, view)
                if written <= 0:
                    raise TerminalError("write", "no bytes written")
                view = view[written:]
        except OSError as e:
            raise TerminalError("write", e) from e

        if self._write_log_path:
            try:
                with open(self._write_log_path, "ab") as f:
                    f.write(data)
            except OSError:
                logger.warning("Could not append to write log %s", self._write_log_path)

    # -- window size ------------------------------------------------------

    def window_size(self) -> tuple[int, int]:
        """Return ``(rows, cols)`` of the terminal window.

        Falls back to moving the cursor to the far bottom-right corner and
        asking the terminal where it ended up.
        """
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            size = None
        if size is not None and size.columns > 0:
            return size.lines, size.columns

        logger.info("Window size query failed, probing cursor position")
        self.write(_CURSOR_FAR_BOTTOM_RIGHT)
        return self.cursor_position()

    def cursor_position(self) -> tuple[int, int]:
        """Ask the terminal for the cursor position and parse the reply."""
        self.write(_CURSOR_POSITION_QUERY)

        reply = bytearray()
        while len(reply) < _CURSOR_REPORT_MAX - 1:
            byte = self.read_byte()
            if byte is None or byte == ord("R"):
                break
            reply.append(byte)

        position = parse_cursor_position(bytes(reply))
        if position is None:
            raise TerminalError("getWindowSize", f"unexpected cursor report {bytes(reply)!r}")
        return position


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def parse_cursor_position(reply: bytes) -> tuple[int, int] | None:
    """Parse a cursor position report without its final ``R``.

    ``b"\\x1b[24;80"`` gives ``(24, 80)``.
    """
    match = _CURSOR_POSITION_RE.match(reply)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))

"""Reading files into lines and writing serialized buffers back."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

FILE_MODE = 0o644


def load_lines(path: str) -> list[bytes]:
    """Read *path* and split it into lines without their terminators.

    Trailing ``\\r`` and ``\\n`` bytes are stripped from every line.  An empty
    file has no lines.
    """
    with open(path, "rb") as f:
        data = f.read()

    lines = data.split(b"\n")
    if lines and lines[-1] == b"":
        lines.pop()
    return [line.rstrip(b"\r\n") for line in lines]


def write_all(path: str, data: bytes) -> int:
    """Write *data* to *path*, creating it if needed.

    The file is truncated to exactly ``len(data)`` before writing.  Returns
    the number of bytes written; failures raise :class:`OSError`.
    """
    fd = os.open(path, os.O_RDWR | os.O_CREAT, FILE_MODE)
    try:
        os.ftruncate(fd, len(data))
        view = memoryview(data)
        written = 0
        while written < len(data):
            written += os.write(fd, view[written:])
    finally:
        os.close(fd)
    logger.debug("Wrote %d bytes to %s", written, path)
    return written

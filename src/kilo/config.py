"""Editor configuration. Defaults can be overridden through ``KILO_*`` env vars."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

VERSION = "0.1.0"

TAB_STOP = 8
QUIT_TIMES = 1
MESSAGE_TIMEOUT = 5.0
READ_TIMEOUT = 0.1
FILENAME_WIDTH = 20


@dataclass
class EditorConfig:
    """Tunable editor constants."""

    tab_stop: int = TAB_STOP
    quit_times: int = QUIT_TIMES
    message_timeout: float = MESSAGE_TIMEOUT
    read_timeout: float = READ_TIMEOUT
    filename_width: int = FILENAME_WIDTH
    write_log: str = ""

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> EditorConfig:
        env = os.environ if environ is None else environ
        return cls(
            tab_stop=_env_int(env, "KILO_TAB_STOP", TAB_STOP, minimum=1),
            quit_times=_env_int(env, "KILO_QUIT_TIMES", QUIT_TIMES, minimum=0),
            write_log=env.get("KILO_WRITE_LOG", ""),
        )


def _env_int(env, name: str, default: int, minimum: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if value < minimum:
        logger.warning("Ignoring %s=%d: must be >= %d", name, value, minimum)
        return default
    return value

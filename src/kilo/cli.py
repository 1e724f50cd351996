"""CLI entry point for the kilo editor."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from kilo.config import VERSION, EditorConfig
from kilo.editor import Editor
from kilo.terminal import CLEAR_SCREEN, CURSOR_HOME, ProcessTerminal, TerminalError

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="kilo",
        description="A small terminal text editor",
    )
    parser.add_argument("filename", nargs="?", help="File to edit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser.parse_args(argv)


def configure_logging(environ: dict[str, str] | None = None) -> None:
    """Send log records to ``$KILO_LOG`` if set; the screen is never used."""
    env = os.environ if environ is None else environ
    log_path = env.get("KILO_LOG")
    if not log_path:
        return
    level = env.get("KILO_LOG_LEVEL", "info").upper()
    logging.basicConfig(
        filename=log_path,
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()
    config = EditorConfig.from_env()

    terminal = ProcessTerminal(read_timeout=config.read_timeout, write_log=config.write_log)
    try:
        with terminal:
            editor = Editor(terminal, config)
            if args.filename:
                editor.open(args.filename)
            editor.run()
    except TerminalError as e:
        logger.error("Fatal terminal error: %s", e)
        _die(terminal, str(e))
        return 1
    except OSError as e:
        logger.error("Fatal I/O error: %s", e)
        _die(terminal, f"fopen: {e}")
        return 1
    return 0


def _die(terminal: ProcessTerminal, message: str) -> None:
    try:
        terminal.write(CLEAR_SCREEN + CURSOR_HOME)
    except TerminalError:
        pass
    print(message, file=sys.stderr)


if __name__ == "__main__":
    sys.exit(main())

"""Prompt controller: collect one line of text in the message bar."""

from __future__ import annotations

import logging
from typing import Callable

from kilo.keybindings import EditorKeybindingsManager
from kilo.keys import Key

logger = logging.getLogger(__name__)

PromptCallback = Callable[[str, Key], None]


class Prompt:
    """Modal input loop that reuses the editor's key decoder and renderer.

    *read_key* returns the next decoded key, *set_status* replaces the
    message bar text and *refresh* redraws the whole screen.
    """

    def __init__(
        self,
        read_key: Callable[[], Key],
        set_status: Callable[[str], None],
        refresh: Callable[[], None],
        keybindings: EditorKeybindingsManager | None = None,
    ) -> None:
        self._read_key = read_key
        self._set_status = set_status
        self._refresh = refresh
        self._keybindings = keybindings or EditorKeybindingsManager()

    def ask(self, template: str, callback: PromptCallback | None = None) -> str | None:
        """Show *template* with the typed text in place of ``{}``.

        Returns the text on Enter, or ``None`` if Escape cancels.  Enter on
        empty input is ignored.  *callback* runs after every key with the
        current text and that key.
        """
        kb = self._keybindings
        text = bytearray()

        while True:
            self._set_status(template.format(text.decode("utf-8", errors="replace")))
            self._refresh()

            key = self._read_key()
            if kb.matches(key, "deleteCharBackward") or kb.matches(key, "deleteCharForward"):
                if text:
                    del text[-1]
            elif kb.matches(key, "cancel"):
                self._set_status("")
                if callback is not None:
                    callback(text.decode("utf-8", errors="replace"), key)
                logger.debug("Prompt %r cancelled", template)
                return None
            elif kb.matches(key, "submit"):
                if text:
                    self._set_status("")
                    value = text.decode("utf-8", errors="replace")
                    if callback is not None:
                        callback(value, key)
                    return value
            elif key.is_printable():
                text.append(key.byte)  # type: ignore[arg-type]

            if callback is not None:
                callback(text.decode("utf-8", errors="replace"), key)

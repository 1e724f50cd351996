"""Editor keybindings manager."""

from __future__ import annotations

from typing import Literal

from kilo.keys import Key, KeyId, matches_key

EditorAction = Literal[
    # Cursor movement
    "cursorUp",
    "cursorDown",
    "cursorLeft",
    "cursorRight",
    "cursorLineStart",
    "cursorLineEnd",
    "pageUp",
    "pageDown",
    # Editing
    "deleteCharBackward",
    "deleteCharForward",
    "newLine",
    # Commands
    "save",
    "quit",
    "find",
    "refresh",
    # Prompt
    "submit",
    "cancel",
]

EditorKeybindingsConfig = dict[EditorAction, KeyId | list[KeyId]]

DEFAULT_EDITOR_KEYBINDINGS: dict[EditorAction, KeyId | list[KeyId]] = {
    # Cursor movement
    "cursorUp": "up",
    "cursorDown": "down",
    "cursorLeft": "left",
    "cursorRight": "right",
    "cursorLineStart": "home",
    "cursorLineEnd": "end",
    "pageUp": "pageUp",
    "pageDown": "pageDown",
    # Editing
    "deleteCharBackward": ["backspace", "ctrl+h"],
    "deleteCharForward": "delete",
    "newLine": "enter",
    # Commands
    "save": "ctrl+s",
    "quit": "ctrl+q",
    "find": "ctrl+f",
    "refresh": ["ctrl+l", "escape"],
    # Prompt
    "submit": "enter",
    "cancel": "escape",
}

# Checked in this order when dispatching a key in the main editing loop
EDITING_ACTIONS: tuple[EditorAction, ...] = (
    "newLine",
    "quit",
    "save",
    "find",
    "cursorLineStart",
    "cursorLineEnd",
    "deleteCharBackward",
    "deleteCharForward",
    "pageUp",
    "pageDown",
    "cursorUp",
    "cursorDown",
    "cursorLeft",
    "cursorRight",
    "refresh",
)


class EditorKeybindingsManager:
    """Manages keybindings for the editor."""

    def __init__(
        self, config: EditorKeybindingsConfig | None = None
    ) -> None:
        self._action_to_keys: dict[EditorAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: EditorKeybindingsConfig) -> None:
        self._action_to_keys.clear()

        # Start with defaults
        for action, keys in DEFAULT_EDITOR_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # Override with user config
        for action, keys in config.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

    def matches(self, key: Key, action: EditorAction) -> bool:
        """Check if a decoded key triggers a specific action."""
        keys = self._action_to_keys.get(action)
        if not keys:
            return False
        for key_id in keys:
            if matches_key(key, key_id):
                return True
        return False

    def action_for(self, key: Key) -> EditorAction | None:
        """Return the first editing action bound to *key*, if any."""
        for action in EDITING_ACTIONS:
            if self.matches(key, action):
                return action
        return None

    def get_keys(self, action: EditorAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

"""Tests for the Prompt controller."""

from __future__ import annotations

from kilo.key_decoder import KeyDecoder
from kilo.keys import Key
from kilo.prompt import Prompt

from .virtual_terminal import VirtualTerminal

KEY_ENTER = "\r"
KEY_ESCAPE = "\x1b"
KEY_BACKSPACE = "\x7f"
KEY_CTRL_H = "\x08"
KEY_DELETE = "\x1b[3~"
KEY_LEFT = "\x1b[D"


class PromptHarness:
    """Drives a Prompt from scripted input and records status/refreshes."""

    def __init__(self, *inputs: str | None) -> None:
        self.term = VirtualTerminal()
        for data in inputs:
            if data is None:
                self.term.feed_timeout()
            else:
                self.term.feed(data)
        self.statuses: list[str] = []
        self.refreshes = 0
        self.prompt = Prompt(
            KeyDecoder(self.term.read_byte).decode_next_key,
            self.statuses.append,
            self._refresh,
        )

    def _refresh(self) -> None:
        self.refreshes += 1


class TestPromptSubmit:
    def test_returns_typed_text_on_enter(self) -> None:
        h = PromptHarness("out.txt", KEY_ENTER)
        assert h.prompt.ask("Save as: {}") == "out.txt"

    def test_empty_enter_is_ignored(self) -> None:
        h = PromptHarness(KEY_ENTER, "a", KEY_ENTER)
        assert h.prompt.ask("Name: {}") == "a"

    def test_clears_status_on_submit(self) -> None:
        h = PromptHarness("x", KEY_ENTER)
        h.prompt.ask("Name: {}")
        assert h.statuses[-1] == ""

    def test_status_shows_template_with_input(self) -> None:
        h = PromptHarness("ab", KEY_ENTER)
        h.prompt.ask("Name: {} (ESC to cancel)")
        assert h.statuses[:3] == [
            "Name:  (ESC to cancel)",
            "Name: a (ESC to cancel)",
            "Name: ab (ESC to cancel)",
        ]

    def test_redraws_every_iteration(self) -> None:
        h = PromptHarness("abc", KEY_ENTER)
        h.prompt.ask("{}")
        assert h.refreshes == 4


class TestPromptEditing:
    def test_backspace_removes_last_char(self) -> None:
        h = PromptHarness("abc", KEY_BACKSPACE, KEY_ENTER)
        assert h.prompt.ask("{}") == "ab"

    def test_ctrl_h_and_delete_remove_last_char(self) -> None:
        h = PromptHarness("abcd", KEY_CTRL_H, KEY_DELETE, KEY_ENTER)
        assert h.prompt.ask("{}") == "ab"

    def test_backspace_on_empty_is_noop(self) -> None:
        h = PromptHarness(KEY_BACKSPACE, "z", KEY_ENTER)
        assert h.prompt.ask("{}") == "z"

    def test_control_and_special_keys_not_inserted(self) -> None:
        h = PromptHarness("a", "\x01", KEY_LEFT, "\t", "b", KEY_ENTER)
        assert h.prompt.ask("{}") == "ab"

    def test_long_input(self) -> None:
        text = "x" * 500
        h = PromptHarness(text, KEY_ENTER)
        assert h.prompt.ask("{}") == text


class TestPromptCancel:
    def test_escape_returns_none(self) -> None:
        h = PromptHarness("abc", KEY_ESCAPE, None)
        assert h.prompt.ask("{}") is None

    def test_escape_clears_status(self) -> None:
        h = PromptHarness(KEY_ESCAPE, None)
        h.prompt.ask("{}")
        assert h.statuses[-1] == ""


class TestPromptCallback:
    def test_called_after_every_key(self) -> None:
        seen: list[tuple[str, Key]] = []
        h = PromptHarness("ab", KEY_ENTER)
        h.prompt.ask("{}", lambda text, key: seen.append((text, key)))
        assert [text for text, _ in seen] == ["a", "ab", "ab"]
        assert seen[-1][1] == Key.char(0x0D)

    def test_called_on_cancel(self) -> None:
        seen: list[str] = []
        h = PromptHarness("q", KEY_ESCAPE, None)
        h.prompt.ask("{}", lambda text, key: seen.append(key.name))
        assert seen == ["char", "escape"]

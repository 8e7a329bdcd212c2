"""Tests for termdom.keybindings -- action to key mapping."""

from __future__ import annotations

import pytest

from termdom.keybindings import (
    DEFAULT_KEYBINDINGS,
    KeybindingsManager,
    get_keybindings,
    set_keybindings,
)
from termdom.keys import KeyEvent


# ---------------------------------------------------------------------------
# DEFAULT_KEYBINDINGS constant
# ---------------------------------------------------------------------------


class TestDefaultKeybindings:
    def test_has_editing_actions(self):
        for action in [
            "caretLeft", "caretRight", "caretLeftEnd", "caretRightEnd",
            "selectLeft", "selectRight", "selectLeftEnd", "selectRightEnd",
            "deleteBackward", "deleteForward",
        ]:
            assert action in DEFAULT_KEYBINDINGS, f"Missing action: {action}"

    def test_has_screen_actions(self):
        assert DEFAULT_KEYBINDINGS["focusNext"] == "tab"
        assert DEFAULT_KEYBINDINGS["focusPrev"] == "shift+tab"
        assert DEFAULT_KEYBINDINGS["quit"] == ["ctrl+c", "ctrl+q"]

    def test_clipboard_is_unbound(self):
        assert DEFAULT_KEYBINDINGS["copy"] == []
        assert DEFAULT_KEYBINDINGS["paste"] == []


# ---------------------------------------------------------------------------
# KeybindingsManager
# ---------------------------------------------------------------------------


class TestKeybindingsManager:
    @pytest.mark.parametrize(
        "key_id, action",
        [
            ("left", "caretLeft"),
            ("ctrl+b", "caretLeft"),
            ("right", "caretRight"),
            ("ctrl+f", "caretRight"),
            ("ctrl+left", "caretLeftEnd"),
            ("ctrl+a", "caretLeftEnd"),
            ("ctrl+right", "caretRightEnd"),
            ("ctrl+e", "caretRightEnd"),
            ("shift+left", "selectLeft"),
            ("shift+right", "selectRight"),
            ("ctrl+shift+left", "selectLeftEnd"),
            ("ctrl+shift+right", "selectRightEnd"),
            ("backspace", "deleteBackward"),
            ("delete", "deleteForward"),
            ("ctrl+d", "deleteForward"),
        ],
    )
    def test_default_table(self, key_id, action):
        assert KeybindingsManager().matches(KeyEvent.from_id(key_id), action)

    def test_no_cross_matching(self):
        kb = KeybindingsManager()
        assert not kb.matches(KeyEvent("left", shift=True), "caretLeft")
        assert not kb.matches(KeyEvent("left"), "selectLeft")

    def test_action_for_picks_first_match(self):
        kb = KeybindingsManager()
        event = KeyEvent("left", ctrl=True, shift=True)
        assert kb.action_for(event, ("selectLeftEnd", "caretLeftEnd")) == "selectLeftEnd"
        assert kb.action_for(event, ("caretLeft",)) is None

    def test_override_replaces_default(self):
        kb = KeybindingsManager({"copy": "ctrl+y", "caretLeft": ["alt+h"]})
        assert kb.get_keys("copy") == ["ctrl+y"]
        assert kb.get_keys("caretLeft") == ["alt+h"]
        assert not kb.matches(KeyEvent("left"), "caretLeft")
        # Untouched actions keep their defaults.
        assert kb.get_keys("caretRight") == ["right", "ctrl+f"]

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            KeybindingsManager({"explode": "x"})  # type: ignore[dict-item]

    def test_set_config_resets_previous_overrides(self):
        kb = KeybindingsManager({"copy": "ctrl+y"})
        kb.set_config({"paste": "ctrl+v"})
        assert kb.get_keys("copy") == []
        assert kb.get_keys("paste") == ["ctrl+v"]

    def test_get_keys_returns_copy(self):
        kb = KeybindingsManager()
        kb.get_keys("quit").append("x")
        assert kb.get_keys("quit") == ["ctrl+c", "ctrl+q"]


class TestGlobalKeybindings:
    def test_singleton(self):
        assert get_keybindings() is get_keybindings()

    def test_set_keybindings(self):
        manager = KeybindingsManager({"copy": "ctrl+y"})
        set_keybindings(manager)
        assert get_keybindings() is manager

"""Keybindings manager for text fields and screen-level navigation."""

from __future__ import annotations

from typing import Literal

from termdom.keys import KeyEvent, KeyId

Action = Literal[
    # Caret movement
    "caretLeft",
    "caretRight",
    "caretLeftEnd",
    "caretRightEnd",
    # Selection
    "selectLeft",
    "selectRight",
    "selectLeftEnd",
    "selectRightEnd",
    # Deletion
    "deleteBackward",
    "deleteForward",
    # Clipboard
    "copy",
    "paste",
    # Screen
    "focusNext",
    "focusPrev",
    "quit",
]

KeybindingsConfig = dict[Action, KeyId | list[KeyId]]

DEFAULT_KEYBINDINGS: dict[Action, KeyId | list[KeyId]] = {
    # Caret movement
    "caretLeft": ["left", "ctrl+b"],
    "caretRight": ["right", "ctrl+f"],
    "caretLeftEnd": ["ctrl+left", "ctrl+a"],
    "caretRightEnd": ["ctrl+right", "ctrl+e"],
    # Selection
    "selectLeft": "shift+left",
    "selectRight": "shift+right",
    "selectLeftEnd": "ctrl+shift+left",
    "selectRightEnd": "ctrl+shift+right",
    # Deletion
    "deleteBackward": "backspace",
    "deleteForward": ["delete", "ctrl+d"],
    # Clipboard (unbound unless configured)
    "copy": [],
    "paste": [],
    # Screen
    "focusNext": "tab",
    "focusPrev": "shift+tab",
    "quit": ["ctrl+c", "ctrl+q"],
}


class KeybindingsManager:
    """Maps actions to the key identifiers that trigger them."""

    def __init__(self, config: KeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[Action, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: KeybindingsConfig) -> None:
        self._action_to_keys.clear()

        for action, keys in DEFAULT_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        for action, keys in config.items():
            if action not in DEFAULT_KEYBINDINGS:
                raise ValueError(f"unknown action {action!r}")
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

    def matches(self, event: KeyEvent, action: Action) -> bool:
        """Check if *event* triggers *action*."""
        return any(event.matches(key) for key in self._action_to_keys.get(action, []))

    def action_for(self, event: KeyEvent, actions: tuple[Action, ...]) -> Action | None:
        """Return the first of *actions* that *event* triggers."""
        for action in actions:
            if self.matches(event, action):
                return action
        return None

    def get_keys(self, action: Action) -> list[KeyId]:
        return list(self._action_to_keys.get(action, []))

    def set_config(self, config: KeybindingsConfig) -> None:
        self._build_maps(config)


_global_keybindings: KeybindingsManager | None = None


def get_keybindings() -> KeybindingsManager:
    global _global_keybindings
    if _global_keybindings is None:
        _global_keybindings = KeybindingsManager()
    return _global_keybindings


def set_keybindings(manager: KeybindingsManager) -> None:
    global _global_keybindings
    _global_keybindings = manager

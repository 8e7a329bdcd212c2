from __future__ import annotations

import pytest

from termdom.keybindings import KeybindingsManager, set_keybindings


@pytest.fixture(autouse=True)
def _default_keybindings():
    """Every test starts and ends with the default keybindings."""
    set_keybindings(KeybindingsManager())
    yield
    set_keybindings(KeybindingsManager())

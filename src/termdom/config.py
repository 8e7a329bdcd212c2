"""Configuration for the terminal event loop."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping

from termdom.keybindings import KeybindingsConfig, KeybindingsManager
from termdom.keys import KeyId

__all__ = ["Config"]

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Config:
    """Event loop configuration.

    ``poll_interval`` is the longest the loop waits for input before it
    re-renders and decodes any held-back escape sequence.
    """

    poll_interval: float = 0.1
    quit_keys: list[KeyId] = field(default_factory=lambda: ["ctrl+c", "ctrl+q"])
    use_alternate_screen: bool = True
    log_level: str = "warning"
    log_file: str | None = None
    keybindings: KeybindingsConfig = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Build a config from ``TERMDOM_*`` environment variables."""
        env = os.environ if environ is None else environ
        config = cls()

        interval = env.get("TERMDOM_POLL_INTERVAL_MS")
        if interval:
            try:
                config.poll_interval = int(interval) / 1000
            except ValueError:
                logger.warning("Ignoring invalid TERMDOM_POLL_INTERVAL_MS=%r", interval)
            else:
                if config.poll_interval <= 0:
                    logger.warning("Ignoring non-positive TERMDOM_POLL_INTERVAL_MS=%r", interval)
                    config.poll_interval = cls.poll_interval

        level = env.get("TERMDOM_LOG_LEVEL")
        if level:
            config.log_level = level.lower()

        log_file = env.get("TERMDOM_LOG_FILE")
        if log_file:
            config.log_file = log_file

        alt = env.get("TERMDOM_ALT_SCREEN")
        if alt:
            if alt.lower() in _TRUE:
                config.use_alternate_screen = True
            elif alt.lower() in _FALSE:
                config.use_alternate_screen = False
            else:
                logger.warning("Ignoring invalid TERMDOM_ALT_SCREEN=%r", alt)

        return config

    def keybindings_manager(self) -> KeybindingsManager:
        """Keybindings with ``quit_keys`` bound to the quit action.

        An explicit ``"quit"`` entry in ``keybindings`` wins over ``quit_keys``.
        """
        return KeybindingsManager({"quit": list(self.quit_keys), **self.keybindings})

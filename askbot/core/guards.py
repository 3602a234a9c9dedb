"""Activation gate and sender checks applied before any classification."""

from __future__ import annotations

import logging
from collections.abc import Iterable

LOGGER = logging.getLogger("Guard")

PRIVILEGED_BADGES = {"moderator", "broadcaster"}

DEACTIVATE = "#deactivate"
ACTIVATE = "#activate"


def is_mod(badges: Iterable[str]) -> bool:
    """Check if the sender holds moderator or broadcaster privilege."""
    return any(b in PRIVILEGED_BADGES for b in badges)


class ActivationGate:
    """Process-wide on/off switch for tag relaying (reset on restart)."""

    def __init__(self, activated: bool = True) -> None:
        self.activated = activated

    def toggle(self, text: str, badges: Iterable[str]) -> str | None:
        """Apply an activation command.

        Returns "activated" / "deactivated" when `text` was a toggle command
        from a moderator, otherwise None and the state is unchanged.
        """
        if not is_mod(badges):
            return None

        command = text.lower()
        if command == DEACTIVATE:
            self.activated = False
            LOGGER.info("deactivated")
            return "deactivated"
        if command == ACTIVATE:
            self.activated = True
            LOGGER.info("activated")
            return "activated"
        return None

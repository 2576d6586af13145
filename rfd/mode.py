"""Two-state interaction mode: navigating the listing or viewing a file."""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class Mode(Enum):
    NAVIGATION = "navigation"
    VIEWING = "viewing"

    @property
    def label(self) -> str:
        return self.value.upper()


class ModeStateMachine:
    """Tracks the active mode; only ``view`` and ``back`` change it.

    Both transitions return ``False`` without side effects when called from
    the wrong state.
    """

    def __init__(self) -> None:
        self.mode = Mode.NAVIGATION

    @property
    def navigating(self) -> bool:
        return self.mode is Mode.NAVIGATION

    @property
    def viewing(self) -> bool:
        return self.mode is Mode.VIEWING

    def view(self) -> bool:
        return self._transition(Mode.NAVIGATION, Mode.VIEWING)

    def back(self) -> bool:
        return self._transition(Mode.VIEWING, Mode.NAVIGATION)

    def _transition(self, source: Mode, target: Mode) -> bool:
        if self.mode is not source:
            return False
        self.mode = target
        logger.debug("Mode %s -> %s", source.value, target.value)
        return True


__all__ = ["Mode", "ModeStateMachine"]

"""Fixed key bindings: an explicit (mode, key) -> command table.

The table doubles as the command legality rule: a command is legal in a mode
exactly when some key in that mode maps to it, plus ``view`` which is also
reachable through ``select_or_enter`` while navigating.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .mode import Mode


class Command(Enum):
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    SELECT_OR_ENTER = "select_or_enter"
    VIEW = "view"
    DELETE = "delete"
    BACK = "back"
    QUIT = "quit"


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single command."""

    combos: tuple[str, ...]
    command: Command


class KeyComboRegistry:
    """Small key-to-command table with optional key normalization strategy."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else self._identity
        self._commands: dict[str, Command] = {}

    @staticmethod
    def _identity(key: str) -> str:
        return key

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing commands for same combos."""
        for combo in binding.combos:
            self._commands[self._normalize(combo)] = binding.command
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def resolve(self, key: str) -> Command | None:
        return self._commands.get(self._normalize(key))

    def commands(self) -> frozenset[Command]:
        return frozenset(self._commands.values())


KEY_BINDINGS: dict[Mode, tuple[KeyComboBinding, ...]] = {
    Mode.NAVIGATION: (
        KeyComboBinding(("k", "UP"), Command.MOVE_UP),
        KeyComboBinding(("j", "DOWN"), Command.MOVE_DOWN),
        KeyComboBinding(("ENTER_CR", "ENTER_LF"), Command.SELECT_OR_ENTER),
        KeyComboBinding(("v",), Command.VIEW),
        KeyComboBinding(("d",), Command.DELETE),
        KeyComboBinding(("q",), Command.QUIT),
    ),
    Mode.VIEWING: (
        KeyComboBinding(("BACKSPACE", "ESC"), Command.BACK),
        KeyComboBinding(("q",), Command.QUIT),
    ),
}


class KeyMap:
    """Per-mode registries built from :data:`KEY_BINDINGS`."""

    def __init__(self, bindings: dict[Mode, tuple[KeyComboBinding, ...]] | None = None) -> None:
        bindings = KEY_BINDINGS if bindings is None else bindings
        self._registries = {mode: KeyComboRegistry().register_bindings(*bindings.get(mode, ())) for mode in Mode}

    def resolve(self, mode: Mode, key: str) -> Command | None:
        """Return the command bound to ``key`` in ``mode``, or ``None``."""
        return self._registries[mode].resolve(key)

    def is_legal(self, mode: Mode, command: Command) -> bool:
        return command in self._registries[mode].commands()


__all__ = [
    "Command",
    "KeyComboBinding",
    "KeyComboRegistry",
    "KEY_BINDINGS",
    "KeyMap",
]

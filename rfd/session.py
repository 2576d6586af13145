"""Session root: screen layout, the shared mode, and key dispatch.

The root routes ``back`` and ``quit`` itself and forwards every other command
to the navigation controller. Recoverable errors from any command end up as
a message in the header region.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from .errors import RfdError
from .filesystem import DEFAULT_TRASH_DIR, FileSystem
from .keymap import Command, KeyMap
from .listing import DirectoryListing
from .mode import ModeStateMachine
from .navigation import NavigationController
from .regions import Bounds, Region
from .terminal import Terminal
from .ui_theme import DEFAULT_THEME, UITheme
from .views import HeaderContent

logger = logging.getLogger(__name__)

HEADER_TOP = 1
HEADER_HEIGHT = 6
MAIN_TOP = HEADER_TOP + HEADER_HEIGHT + 1


def header_bounds(rows: int, columns: int) -> Bounds:
    return Bounds(HEADER_TOP, 1, HEADER_HEIGHT, max(1, columns - 2))


def main_bounds(rows: int, columns: int) -> Bounds:
    """Area below the header frame, inside the screen frame."""
    return Bounds(MAIN_TOP, 1, max(1, rows - MAIN_TOP - 1), max(1, columns - 2))


class Session:
    def __init__(
        self,
        terminal: Terminal,
        *,
        theme: UITheme = DEFAULT_THEME,
        style: str | None = None,
        no_color: bool = False,
        trash_dir: Path = DEFAULT_TRASH_DIR,
        filesystem: FileSystem | None = None,
        keymap: KeyMap | None = None,
    ) -> None:
        self.terminal = terminal
        self.keymap = keymap if keymap is not None else KeyMap()
        self.mode = ModeStateMachine()
        self.running = True

        self.root = Region.root(terminal)
        self.root.frame()
        rows, columns = terminal.size()
        self.header_content = HeaderContent(theme)
        self.header = self.root.child(header_bounds(rows, columns), border=True, content=self.header_content)
        main = self.root.child(main_bounds(rows, columns), border=True)
        self.navigation = NavigationController(
            DirectoryListing(filesystem),
            main,
            self.mode,
            theme,
            style=style,
            no_color=no_color,
            trash_dir=trash_dir,
        )
        self._handlers: dict[Command, Callable[[], bool]] = {
            Command.MOVE_UP: self.navigation.move_up,
            Command.MOVE_DOWN: self.navigation.move_down,
            Command.SELECT_OR_ENTER: self.navigation.select_or_enter,
            Command.VIEW: self.navigation.view,
            Command.DELETE: self.navigation.delete,
        }

    def open(self, path: Path | str = ".") -> None:
        """List the starting directory; ``DirectoryAccessError`` propagates."""
        self.navigation.change_directory(path)
        self._update_header()

    def handle_key(self, key: str) -> bool:
        """Dispatch one key token; unbound keys are ignored."""
        command = self.keymap.resolve(self.mode.mode, key)
        if command is None:
            return False
        return self.dispatch(command)

    def dispatch(self, command: Command) -> bool:
        """Run ``command`` when legal in the current mode; illegal ones are no-ops."""
        if not self.keymap.is_legal(self.mode.mode, command):
            return False
        if command is Command.QUIT:
            self.running = False
            return True

        self.header_content.message = ""
        self.header_content.message_is_error = False
        try:
            if command is Command.BACK:
                handled = self.navigation.close_viewer()
            else:
                handled = self._handlers[command]()
        except RfdError as exc:
            logger.warning("%s failed: %s", command.value, exc)
            self.show_message(str(exc), error=True)
            return True
        self._update_header()
        return handled

    def show_message(self, message: str, *, error: bool = False) -> None:
        self.header_content.message = message
        self.header_content.message_is_error = error
        self._update_header()

    def _update_header(self) -> None:
        listing = self.navigation.listing
        self.header_content.path = listing.current_path
        self.header_content.mode = self.mode.mode
        self.header_content.item_count = len(listing.items)
        self.header.repaint()
        self.navigation.park_cursor()


__all__ = ["Session", "header_bounds", "main_bounds"]

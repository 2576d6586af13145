"""Navigation controller: cursor, listing, and the commands that act on them.

Every command is a silent no-op (returns ``False``) outside navigation mode,
except :meth:`NavigationController.close_viewer`, which only applies while
viewing. Failures surface as ``RfdError`` subclasses after any partial state
has been rolled back.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import DeleteError, DirectoryAccessError
from .filesystem import DEFAULT_TRASH_DIR, DOT_ENTRIES
from .highlight import prepare_viewer_text
from .item import Item
from .listing import DirectoryListing
from .mode import ModeStateMachine
from .regions import Region
from .ui_theme import UITheme
from .views import ListingContent, ViewerContent

logger = logging.getLogger(__name__)


class NavigationController:
    def __init__(
        self,
        listing: DirectoryListing,
        region: Region,
        mode: ModeStateMachine,
        theme: UITheme,
        *,
        style: str | None = None,
        no_color: bool = False,
        trash_dir: Path = DEFAULT_TRASH_DIR,
    ) -> None:
        self.listing = listing
        self.region = region
        self.mode = mode
        self.style = style
        self.no_color = no_color
        self.trash_dir = trash_dir
        self.row = 0
        self.viewer: Region | None = None
        self.content = ListingContent(listing, theme)
        region.content = self.content

    @property
    def items(self) -> tuple[Item, ...]:
        return self.listing.items

    def current_item(self) -> Item:
        return self.listing.items[self.row]

    def show_cursor(self) -> None:
        """Repaint the listing with ``row`` selected and park the cursor on it."""
        self.content.selected = self.row
        self.content.scroll_to(self.row, self.region.height)
        self.region.repaint()
        self.region.move_cursor_to(self.row - self.content.top, 0)
        self.region.refresh()

    def park_cursor(self) -> None:
        """Return the terminal cursor to the selected row, or the viewer origin."""
        if self.viewer is not None:
            self.viewer.move_cursor_to(0, 0)
        else:
            self.region.move_cursor_to(self.row - self.content.top, 0)
        self.region.refresh()

    def change_directory(self, target: Item | Path | str) -> bool:
        """List ``target`` and reset the cursor to the first row.

        ``DirectoryAccessError`` propagates with the previous listing intact.
        """
        self.listing.list(target)
        self.row = 0
        self.content.top = 0
        self.show_cursor()
        logger.info("Changed directory to %s", self.listing.current_path)
        return True

    def refresh(self) -> None:
        """Re-list the current directory, keeping ``row`` when still in range."""
        self.listing.refresh()
        if not 0 <= self.row < len(self.listing.items):
            self.row = 0
        self.show_cursor()

    def move_up(self) -> bool:
        if not self.mode.navigating or not self.listing.items:
            return False
        self.row -= 1
        # Wraps on reaching row 0 as well as on underflow.
        if self.row <= 0:
            self.row = len(self.listing.items) - 1
        self.show_cursor()
        return True

    def move_down(self) -> bool:
        if not self.mode.navigating or not self.listing.items:
            return False
        self.row += 1
        if self.row >= len(self.listing.items):
            self.row = 0
        self.show_cursor()
        return True

    def select_or_enter(self) -> bool:
        """Enter the selected directory, or view the selected file."""
        if not self.mode.navigating or not self.listing.items:
            return False
        item = self.current_item()
        if item.is_directory():
            return self.change_directory(item)
        return self.view()

    def view(self) -> bool:
        """Switch to viewing mode showing the selected file's content.

        ``ReadError`` leaves the session navigating with no viewer allocated.
        """
        if not self.mode.navigating or not self.listing.items:
            return False
        item = self.current_item()
        text = prepare_viewer_text(item.read(), item.path, style=self.style, no_color=self.no_color)
        parent = self.region.parent if self.region.parent is not None else self.region
        self.mode.view()
        try:
            self.viewer = parent.child(self.region.bounds, content=ViewerContent(text))
            self.viewer.repaint()
        except BaseException:
            self._discard_viewer()
            raise
        logger.debug("Viewing %s", item.path)
        return True

    def _discard_viewer(self) -> None:
        if self.viewer is not None:
            self.viewer.close()
            self.viewer = None
        self.mode.back()

    def close_viewer(self) -> bool:
        """Tear down the viewer, return to navigation, and re-list."""
        if not self.mode.viewing:
            return False
        self._discard_viewer()
        self.refresh()
        return True

    def delete(self) -> bool:
        """Move the selected entry to the trash and re-list.

        The listing is refreshed even when the move fails, then the
        ``DeleteError`` propagates.
        """
        if not self.mode.navigating or not self.listing.items:
            return False
        item = self.current_item()
        try:
            if item.name in DOT_ENTRIES:
                raise DeleteError(item.path, "refusing to delete directory reference")
            self.listing.filesystem.move_to_trash(item.path, self.trash_dir)
        except DeleteError:
            try:
                self.refresh()
            except DirectoryAccessError as exc:
                logger.warning("Refresh after failed delete also failed: %s", exc)
            raise
        self.refresh()
        return True


__all__ = ["NavigationController"]

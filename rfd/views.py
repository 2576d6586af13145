"""Content strategies for the header, listing, and viewer regions."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .ansi import wrap_text
from .listing import DirectoryListing
from .mode import Mode
from .ui_theme import UITheme

KEY_HINT = "j/k move  enter open  v view  d trash  backspace back  q quit"


def _styled(text: str, style: str, theme: UITheme) -> str:
    if not style:
        return text
    return f"{style}{text}{theme.reset}"


@dataclass
class HeaderContent:
    """Current directory, mode summary, last status message, and key hints."""

    theme: UITheme
    path: Path | None = None
    mode: Mode = Mode.NAVIGATION
    item_count: int = 0
    message: str = ""
    message_is_error: bool = False

    def render(self, width: int, height: int) -> str:
        theme = self.theme
        lines = [
            _styled(str(self.path) if self.path is not None else "", theme.header_path, theme),
            _styled(f"{self.mode.label}  {self.item_count} items", theme.header_info, theme),
            _styled(self.message, theme.header_error if self.message_is_error else theme.header_info, theme),
        ]
        if height > len(lines):
            lines.extend([""] * (height - len(lines) - 1))
            lines.append(_styled(KEY_HINT, theme.header_hint, theme))
        return "\n".join(lines[:height])


class ListingContent:
    """Renders one display line per item, scrolled to keep the cursor visible."""

    def __init__(self, listing: DirectoryListing, theme: UITheme) -> None:
        self.listing = listing
        self.theme = theme
        self.selected = 0
        self.top = 0

    def scroll_to(self, row: int, height: int) -> bool:
        """Adjust the first visible row so ``row`` is on screen.

        Returns whether the scroll offset changed.
        """
        previous = self.top
        height = max(1, height)
        if row < self.top:
            self.top = row
        elif row >= self.top + height:
            self.top = row - height + 1
        self.top = max(0, min(self.top, max(0, len(self.listing.items) - height)))
        return self.top != previous

    def render(self, width: int, height: int) -> str:
        theme = self.theme
        lines: list[str] = []
        for index, item in enumerate(self.listing.items[self.top:self.top + height], start=self.top):
            style = theme.color_for(item.color())
            if index == self.selected:
                style = f"{style}{theme.reverse}"
            lines.append(_styled(item.display_line(), style, theme))
        return "\n".join(lines)


@dataclass
class ViewerContent:
    """Read-only file text wrapped to the region width; overflow is clipped."""

    text: str

    def render(self, width: int, height: int) -> str:
        return "\n".join(wrap_text(self.text, width)[:height])


__all__ = ["KEY_HINT", "HeaderContent", "ListingContent", "ViewerContent"]

"""One directory entry plus its lazily fetched display metadata."""

from __future__ import annotations

import os
import stat as stat_mod
from enum import Enum
from pathlib import Path

from .ansi import clip_ansi_line, display_width
from .errors import ReadError, StatError
from .filesystem import FileSystem
from .highlight import sanitize_display_name

NAME_COLUMN_WIDTH = 43
DIRECTORY_SIZE_LABEL = "<DIR>"
UNKNOWN_SIZE_LABEL = "?"


class ColorClass(Enum):
    """Display color category of a listing row."""

    DIRECTORY = "directory"
    REGULAR_FILE = "regular_file"


class Item:
    """A named entry of ``directory``.

    Stat metadata is fetched on first access and cached for the item's
    lifetime; items are rebuilt on every listing refresh, so the cache is
    never invalidated.
    """

    __slots__ = ("directory", "name", "_filesystem", "_stat", "_path")

    def __init__(self, directory: Path, name: str, filesystem: FileSystem) -> None:
        self.directory = directory
        self.name = name
        self._filesystem = filesystem
        self._stat: os.stat_result | None = None
        self._path: Path | None = None

    def __repr__(self) -> str:
        return f"Item({str(self.directory)!r}, {self.name!r})"

    @property
    def path(self) -> Path:
        if self._path is None:
            self._path = self.directory / self.name
        return self._path

    def stat(self) -> os.stat_result:
        """Return cached stat metadata, raising ``StatError`` when unavailable."""
        if self._stat is None:
            self._stat = self._filesystem.stat(self.path)
        return self._stat

    def is_directory(self) -> bool:
        return stat_mod.S_ISDIR(self.stat().st_mode)

    def size(self) -> str | int:
        """Return ``"<DIR>"`` for directories, otherwise the byte size."""
        if self.is_directory():
            return DIRECTORY_SIZE_LABEL
        return self.stat().st_size

    def size_label(self) -> str:
        """Size text for display; a failed stat degrades to ``"?"``."""
        try:
            return str(self.size())
        except StatError:
            return UNKNOWN_SIZE_LABEL

    def color(self) -> ColorClass:
        try:
            if self.is_directory():
                return ColorClass.DIRECTORY
        except StatError:
            pass
        return ColorClass.REGULAR_FILE

    def read(self) -> str:
        """Return the whole file text; directories and unreadable paths raise ``ReadError``."""
        try:
            is_directory = self.is_directory()
        except StatError as exc:
            raise ReadError(self.path, exc.reason) from exc
        if is_directory:
            raise ReadError(self.path, "is a directory")
        return self._filesystem.read_text(self.path)

    def display_line(self) -> str:
        """Fixed-width name column immediately followed by the size label."""
        return format_display_line(sanitize_display_name(self.name), self.size_label())


def format_display_line(name: str, size_label: str, width: int = NAME_COLUMN_WIDTH) -> str:
    """Clip or pad ``name`` to ``width`` terminal columns, then append ``size_label``."""
    clipped = clip_ansi_line(name, width)
    return f"{clipped}{' ' * (width - display_width(clipped))}{size_label}"


__all__ = [
    "NAME_COLUMN_WIDTH",
    "DIRECTORY_SIZE_LABEL",
    "UNKNOWN_SIZE_LABEL",
    "ColorClass",
    "Item",
    "format_display_line",
]

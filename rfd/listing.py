"""Directory listing: current path plus its ordered item snapshot."""

from __future__ import annotations

import logging
from pathlib import Path

from .filesystem import FileSystem, LocalFileSystem
from .item import Item

logger = logging.getLogger(__name__)


class DirectoryListing:
    """Owns the working directory and the items enumerated from it.

    ``items`` is replaced wholesale by every successful :meth:`list`; a failed
    listing leaves both ``current_path`` and ``items`` untouched.
    """

    def __init__(self, filesystem: FileSystem | None = None) -> None:
        self.filesystem = filesystem if filesystem is not None else LocalFileSystem()
        self.current_path: Path | None = None
        self.items: tuple[Item, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def resolve(self, target: Item | Path | str) -> Path:
        """Absolute path for a directory item or a raw path (``.``, ``~`` ...)."""
        raw = target.path if isinstance(target, Item) else target
        return self.filesystem.resolve(raw)

    def list(self, target: Item | Path | str | None = None) -> tuple[Item, ...]:
        """Enumerate ``target`` (default: current path) and make it current.

        Entries keep the filesystem's enumeration order with no filtering,
        sorting, or deduplication. Raises ``DirectoryAccessError`` when the
        directory cannot be opened.
        """
        if target is None:
            if self.current_path is None:
                raise ValueError("no directory has been listed yet")
            path = self.current_path
        else:
            path = self.resolve(target)

        names = self.filesystem.list_names(path)
        items = tuple(Item(path, name, self.filesystem) for name in names)
        self.current_path = path
        self.items = items
        logger.debug("Listed %s entries in %s", len(items), path)
        return items

    def refresh(self) -> tuple[Item, ...]:
        return self.list()


__all__ = ["DirectoryListing"]

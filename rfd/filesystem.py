"""Filesystem service used by items and listings.

``FileSystem`` is the narrow contract the browser depends on; the local
implementation maps it onto ``os``/``shutil`` calls and translates
``OSError`` into the browser error taxonomy.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Protocol

from .errors import DeleteError, DirectoryAccessError, ReadError, StatError

logger = logging.getLogger(__name__)

# Self and parent references, as readdir(3) reports them.
DOT_ENTRIES = (".", "..")
DEFAULT_TRASH_DIR = Path("~/.Trash")


class FileSystem(Protocol):
    """Operations the browser needs from the host filesystem."""

    def resolve(self, path: Path | str) -> Path: ...

    def list_names(self, directory: Path) -> list[str]: ...

    def stat(self, path: Path) -> os.stat_result: ...

    def read_text(self, path: Path) -> str: ...

    def move_to_trash(self, path: Path, trash_dir: Path) -> Path: ...


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def next_trash_path(trash_dir: Path, name: str) -> Path:
    """Return a non-colliding destination for ``name`` inside ``trash_dir``."""
    candidate = trash_dir / name
    index = 1
    while candidate.exists() or candidate.is_symlink():
        candidate = trash_dir / f"{name}.{index}"
        index += 1
    return candidate


class LocalFileSystem:
    """``FileSystem`` backed by the running host."""

    def resolve(self, path: Path | str) -> Path:
        """Expand ``~`` and make ``path`` absolute, collapsing ``.``/``..``.

        Symlinks are kept as named so ``cd`` into a link shows the link path.
        """
        return Path(os.path.abspath(os.path.expanduser(os.fspath(path))))

    def list_names(self, directory: Path) -> list[str]:
        """Return entry names in enumeration order, dot entries first."""
        try:
            with os.scandir(directory) as entries:
                names = [entry.name for entry in entries]
        except OSError as exc:
            raise DirectoryAccessError(directory, exc.strerror or "cannot list directory") from exc
        return [*DOT_ENTRIES, *names]

    def stat(self, path: Path) -> os.stat_result:
        try:
            return os.stat(path)
        except OSError as exc:
            raise StatError(path, exc.strerror or "cannot stat") from exc

    def read_text(self, path: Path) -> str:
        try:
            return read_text(path)
        except IsADirectoryError as exc:
            raise ReadError(path, "is a directory") from exc
        except OSError as exc:
            raise ReadError(path, exc.strerror or "cannot read") from exc

    def move_to_trash(self, path: Path, trash_dir: Path) -> Path:
        """Move ``path`` into ``trash_dir`` and return its new location."""
        if path.name in DOT_ENTRIES or path.name == "":
            raise DeleteError(path, "refusing to delete directory reference")
        trash_dir = self.resolve(trash_dir)
        if not trash_dir.is_dir():
            raise DeleteError(trash_dir, "trash directory does not exist")
        destination = next_trash_path(trash_dir, path.name)
        try:
            shutil.move(os.fspath(path), os.fspath(destination))
        except OSError as exc:
            raise DeleteError(path, exc.strerror or "cannot move to trash") from exc
        logger.info("Moved %s to %s", path, destination)
        return destination


__all__ = [
    "DOT_ENTRIES",
    "DEFAULT_TRASH_DIR",
    "FileSystem",
    "LocalFileSystem",
    "next_trash_path",
    "read_text",
]

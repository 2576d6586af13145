"""Error taxonomy for browser operations.

Every error carries the path it failed on and chains the underlying
``OSError``. None of them is fatal: the session reports them in the header.
"""

from __future__ import annotations

from pathlib import Path


class RfdError(Exception):
    """Base class for recoverable browser errors."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{reason}: {self.path}")


class DirectoryAccessError(RfdError):
    """A path could not be enumerated as a directory."""


class StatError(RfdError):
    """Metadata for a single entry could not be retrieved."""


class ReadError(RfdError):
    """File content could not be loaded for viewing."""


class DeleteError(RfdError):
    """An entry could not be moved to the trash."""


__all__ = [
    "RfdError",
    "DirectoryAccessError",
    "StatError",
    "ReadError",
    "DeleteError",
]

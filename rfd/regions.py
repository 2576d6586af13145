"""Rectangular screen regions composed into a tree.

Each region knows only its origin relative to its parent. Cursor placement
and frame drawing walk up the tree, each level adding its own origin once,
until the root hands absolute cells to the terminal.

What a region shows is supplied by a pluggable :class:`RegionContent`
strategy rather than by subclassing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .ansi import fit_ansi_line
from .terminal import Terminal


@dataclass(frozen=True)
class Bounds:
    """Region geometry relative to the parent region."""

    top: int
    left: int
    height: int
    width: int


class RegionContent(Protocol):
    """Draw strategy: produce pre-formatted text for a region of a given size."""

    def render(self, width: int, height: int) -> str: ...


class Region:
    def __init__(
        self,
        terminal: Terminal,
        bounds: Bounds,
        parent: Region | None = None,
        *,
        border: bool = False,
        content: RegionContent | None = None,
    ) -> None:
        self.terminal = terminal
        self.bounds = bounds
        self.parent = parent
        self.border = border
        self.content = content
        self.children: list[Region] = []
        self.closed = False
        if border:
            self._draw_box(-1, -1, bounds.height + 2, bounds.width + 2)

    @classmethod
    def root(cls, terminal: Terminal) -> Region:
        """Region covering the whole terminal screen."""
        rows, columns = terminal.size()
        return cls(terminal, Bounds(0, 0, rows, columns))

    @property
    def height(self) -> int:
        return self.bounds.height

    @property
    def width(self) -> int:
        return self.bounds.width

    def child(
        self,
        bounds: Bounds,
        *,
        border: bool = False,
        content: RegionContent | None = None,
    ) -> Region:
        """Allocate a sub-region positioned relative to this one."""
        region = Region(self.terminal, bounds, self, border=border, content=content)
        self.children.append(region)
        return region

    def close(self) -> None:
        """Detach from the parent; the caller repaints whatever lies beneath."""
        if self.parent is not None and self in self.parent.children:
            self.parent.children.remove(self)
        self.closed = True

    def move_cursor_to(self, row: int, col: int = 0) -> None:
        """Place the terminal cursor at ``(row, col)`` in this region's coordinates."""
        row += self.bounds.top
        col += self.bounds.left
        if self.parent is None:
            self.terminal.move_cursor(row, col)
        else:
            self.parent.move_cursor_to(row, col)

    def _draw_box(self, top: int, left: int, height: int, width: int) -> None:
        top += self.bounds.top
        left += self.bounds.left
        if self.parent is None:
            self.terminal.draw_box(top, left, height, width)
        else:
            self.parent._draw_box(top, left, height, width)

    def frame(self) -> None:
        """Draw a frame on this region's own outer cells."""
        self._draw_box(0, 0, self.bounds.height, self.bounds.width)

    def draw(self, text: str) -> None:
        """Paint ``text`` from the local origin, one region row per line.

        Lines are clipped to the region width and rows past the end of
        ``text`` are blanked, so the call fully replaces previous content.
        """
        lines = text.splitlines()
        for row in range(self.bounds.height):
            line = lines[row] if row < len(lines) else ""
            self.move_cursor_to(row, 0)
            self.terminal.write(fit_ansi_line(line, self.bounds.width))
        self.move_cursor_to(0, 0)
        self.refresh()

    def repaint(self) -> None:
        if self.content is not None:
            self.draw(self.content.render(self.bounds.width, self.bounds.height))

    def refresh(self) -> None:
        self.terminal.refresh()


__all__ = ["Bounds", "Region", "RegionContent"]

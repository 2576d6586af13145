"""Terminal service used by the region tree.

``TerminalController`` drives a real tty in raw mode with buffered ANSI
output. ``ScreenBuffer`` implements the same drawing contract in memory for
headless rendering and tests.
"""

from __future__ import annotations

import contextlib
import os
import shutil
from collections import deque
from collections.abc import Iterable, Iterator
from typing import Protocol

import termios
import tty

from .ansi import ANSI_ESCAPE_RE, char_display_width
from .input import read_key

DEFAULT_SIZE = (80, 24)
BOX_VERTICAL = "|"
BOX_HORIZONTAL = "-"
BOX_CORNER = "+"


class Terminal(Protocol):
    """Minimal screen contract regions draw through.

    Coordinates are absolute, 0-based ``(row, col)`` screen cells.
    """

    def size(self) -> tuple[int, int]: ...

    def move_cursor(self, row: int, col: int) -> None: ...

    def write(self, text: str) -> None: ...

    def draw_box(self, top: int, left: int, height: int, width: int) -> None: ...

    def refresh(self) -> None: ...

    def read_key(self) -> str: ...


def box_rows(height: int, width: int) -> list[str]:
    """Return the text rows of a ``height`` x ``width`` frame."""
    if height <= 0 or width <= 0:
        return []
    if width == 1:
        edge = BOX_CORNER
        middle = BOX_VERTICAL
    else:
        edge = BOX_CORNER + BOX_HORIZONTAL * (width - 2) + BOX_CORNER
        middle = BOX_VERTICAL + " " * (width - 2) + BOX_VERTICAL
    if height == 1:
        return [edge]
    return [edge, *([middle] * (height - 2)), edge]


def draw_frame(terminal: Terminal, top: int, left: int, height: int, width: int) -> None:
    """Draw frame edges through ``terminal``; the interior is left untouched."""
    for offset, row_text in enumerate(box_rows(height, width)):
        if 0 < offset < height - 1:
            terminal.move_cursor(top + offset, left)
            terminal.write(BOX_VERTICAL)
            terminal.move_cursor(top + offset, left + width - 1)
            terminal.write(BOX_VERTICAL)
            continue
        terminal.move_cursor(top + offset, left)
        terminal.write(row_text)


class TerminalController:
    """Manage raw tty mode and buffered ANSI drawing for one session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._pending: list[str] = []

    def enable_tui_mode(self) -> None:
        """Enter raw mode on the alternate screen with a cleared display."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[2J\x1b[H")

    def disable_tui_mode(self) -> None:
        """Restore the main screen buffer and the saved tty attributes."""
        self._pending.clear()
        os.write(self.stdout_fd, b"\x1b[0m\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()

    def size(self) -> tuple[int, int]:
        term = shutil.get_terminal_size(DEFAULT_SIZE)
        return term.lines, term.columns

    def move_cursor(self, row: int, col: int) -> None:
        self._pending.append(f"\x1b[{row + 1};{col + 1}H")

    def write(self, text: str) -> None:
        self._pending.append(text)

    def draw_box(self, top: int, left: int, height: int, width: int) -> None:
        draw_frame(self, top, left, height, width)

    def refresh(self) -> None:
        """Flush buffered output to the tty in a single write."""
        if not self._pending:
            return
        payload = "".join(self._pending)
        self._pending.clear()
        os.write(self.stdout_fd, payload.encode("utf-8", errors="replace"))

    def read_key(self) -> str:
        return read_key(self.stdin_fd)


class ScreenBuffer:
    """In-memory terminal: a character grid plus a scripted key queue.

    Escape sequences are dropped on write; text past the right edge is
    clipped rather than wrapped.
    """

    def __init__(self, rows: int = DEFAULT_SIZE[1], columns: int = DEFAULT_SIZE[0], keys: Iterable[str] = ()) -> None:
        self.rows = rows
        self.columns = columns
        self.grid = [[" "] * columns for _ in range(rows)]
        self.cursor = (0, 0)
        self.refresh_count = 0
        self.keys: deque[str] = deque(keys)

    def size(self) -> tuple[int, int]:
        return self.rows, self.columns

    def move_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def write(self, text: str) -> None:
        row, col = self.cursor
        for ch in ANSI_ESCAPE_RE.sub("", text):
            width = char_display_width(ch, col)
            if 0 <= row < self.rows and 0 <= col < self.columns:
                self.grid[row][col] = ch
                for pad in range(1, width):
                    if col + pad < self.columns:
                        self.grid[row][col + pad] = ""
            col += width
        self.cursor = (row, col)

    def draw_box(self, top: int, left: int, height: int, width: int) -> None:
        draw_frame(self, top, left, height, width)

    def refresh(self) -> None:
        self.refresh_count += 1

    def read_key(self) -> str:
        if not self.keys:
            return ""
        return self.keys.popleft()

    def line(self, row: int) -> str:
        return "".join(self.grid[row]).rstrip()

    def lines(self) -> list[str]:
        return [self.line(row) for row in range(self.rows)]

    def text(self) -> str:
        return "\n".join(self.lines()).rstrip("\n") + "\n"


__all__ = [
    "DEFAULT_SIZE",
    "BOX_VERTICAL",
    "BOX_HORIZONTAL",
    "BOX_CORNER",
    "Terminal",
    "TerminalController",
    "ScreenBuffer",
    "box_rows",
    "draw_frame",
]

"""Blocking read/dispatch/render loop and session bootstrap."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .filesystem import DEFAULT_TRASH_DIR, FileSystem
from .session import Session
from .terminal import ScreenBuffer, Terminal, TerminalController
from .ui_theme import resolve_theme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionOptions:
    """Presentation and delete settings resolved from config and flags."""

    theme: str | None = None
    style: str | None = None
    no_color: bool = False
    trash_dir: Path = field(default=DEFAULT_TRASH_DIR)


def build_session(
    terminal: Terminal,
    path: Path | str,
    options: SessionOptions,
    filesystem: FileSystem | None = None,
) -> Session:
    """Lay out the screen on ``terminal`` and list ``path``."""
    session = Session(
        terminal,
        theme=resolve_theme(options.theme, no_color=options.no_color),
        style=options.style,
        no_color=options.no_color,
        trash_dir=options.trash_dir,
        filesystem=filesystem,
    )
    session.open(path)
    return session


def run_main_loop(session: Session, terminal: Terminal) -> None:
    """Read one key at a time and dispatch it until ``quit``.

    An empty key token means the input stream closed; the loop ends then too.
    """
    while session.running:
        key = terminal.read_key()
        if not key:
            logger.info("Input closed, ending session")
            break
        session.handle_key(key)


def run_browser(path: Path | str, options: SessionOptions) -> int:
    """Run an interactive session on the controlling tty and return the exit status."""
    terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
    with terminal.raw_mode():
        session = build_session(terminal, path, options)
        run_main_loop(session, terminal)
    return 0


def render_snapshot(path: Path | str, options: SessionOptions, rows: int, columns: int) -> str:
    """Draw the initial screen for ``path`` headlessly and return it as text."""
    screen = ScreenBuffer(rows, columns)
    build_session(screen, path, options)
    return screen.text()


__all__ = [
    "SessionOptions",
    "build_session",
    "run_main_loop",
    "run_browser",
    "render_snapshot",
]

"""Viewer text preparation: control-byte escaping and pygments highlighting."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_NAME_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", source)


def sanitize_display_name(name: str) -> str:
    """Escape every control character in a single-line label, newlines included."""
    if _NAME_CONTROL_RE.search(name) is None:
        return name
    return _NAME_CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", name)


@lru_cache(maxsize=None)
def normalize_style(style: str | None) -> str:
    """Return ``style`` when pygments knows it, otherwise the default style."""
    if not style:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


@lru_cache(maxsize=None)
def _formatter_for_style(style: str) -> Terminal256Formatter:
    return Terminal256Formatter(style=style)


def colorize_source(source: str, path: Path, style: str | None = DEFAULT_STYLE) -> str:
    """Return ``source`` with ANSI syntax colors chosen from ``path``'s name."""
    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(source, lexer, _formatter_for_style(normalize_style(style)))


def prepare_viewer_text(source: str, path: Path, *, style: str | None, no_color: bool) -> str:
    """Sanitize file text and highlight it unless color output is disabled."""
    text = sanitize_terminal_text(source)
    if no_color:
        return text
    return colorize_source(text, path, style)


__all__ = [
    "DEFAULT_STYLE",
    "sanitize_terminal_text",
    "sanitize_display_name",
    "normalize_style",
    "colorize_source",
    "prepare_viewer_text",
]

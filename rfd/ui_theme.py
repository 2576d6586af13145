"""UI theme definitions and selection helpers.

Themes map listing color classes and chrome (borders, header) to ANSI
sequences. Syntax highlighting style for the viewer is a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass

from .item import ColorClass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by region content renderers."""

    name: str
    reset: str
    reverse: str
    directory: str
    regular_file: str
    header_path: str
    header_info: str
    header_error: str
    header_hint: str

    def color_for(self, color: ColorClass) -> str:
        if color is ColorClass.DIRECTORY:
            return self.directory
        return self.regular_file


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    directory="\033[36m",
    regular_file="\033[37m",
    header_path="\033[1m",
    header_info="\033[2m",
    header_error="\033[1;31m",
    header_hint="\033[2m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    directory="\033[1;38;5;45m",
    regular_file="\033[38;5;252m",
    header_path="\033[1;38;5;45m",
    header_info="\033[2;38;5;110m",
    header_error="\033[1;38;5;203m",
    header_hint="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    directory="",
    regular_file="",
    header_path="",
    header_info="",
    header_error="",
    header_hint="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]

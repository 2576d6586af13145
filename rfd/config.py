"""Read-only JSON config helpers.

Supplies defaults for theme, viewer style, and trash directory. All access is
defensive: malformed or missing config falls back safely, and nothing is
written back.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "rfd"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load configured UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")


def load_style_name() -> str | None:
    """Load configured pygments style for the viewer."""
    return _load_string("style")


def load_trash_dir() -> Path | None:
    value = _load_string("trash_dir")
    return Path(value) if value is not None else None


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "load_theme_name",
    "load_style_name",
    "load_trash_dir",
]

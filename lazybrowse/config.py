"""Read-only JSON config helpers.

Supplies startup defaults (syntax style, UI theme, hidden-file visibility).
Malformed or missing config falls back to built-in defaults; nothing is
ever written back.
"""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger
from platformdirs import user_config_dir

APP_NAME = "lazybrowse"
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
        logger.warning("ignoring config {}: {}", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_name(key: str, config: dict[str, object] | None) -> str | None:
    if config is None:
        config = load_config()
    value = config.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_style_name(config: dict[str, object] | None = None) -> str | None:
    """Return the configured Pygments style name, or ``None`` when unset.

    Pass an already loaded ``config`` to avoid reading the file again.
    """
    return _load_name("style", config)


def load_theme_name(config: dict[str, object] | None = None) -> str | None:
    """Return the configured UI theme name, or ``None`` when unset."""
    return _load_name("theme", config)


def load_show_hidden(config: dict[str, object] | None = None) -> bool:
    """Return configured hidden-file visibility.

    Only explicit boolean values are accepted; any other type falls back to
    ``False``.
    """
    if config is None:
        config = load_config()
    value = config.get("show_hidden")
    return value if isinstance(value, bool) else False


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "load_style_name",
    "load_theme_name",
    "load_show_hidden",
]

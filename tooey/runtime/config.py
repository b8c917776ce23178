"""Persistent JSON config helpers.

Stores the UI theme, the primary-content filter preference, and renderer
limits. Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "tooey"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

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


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem/serialization errors are logged and otherwise ignored so a
    read-only config directory never ends a session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("Could not save config %s: %s", CONFIG_PATH, exc)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_primary_only() -> bool:
    """Return persisted filter mode; only explicit booleans are honored."""
    value = load_config().get("primary_only")
    return value if isinstance(value, bool) else False


def save_primary_only(primary_only: bool) -> None:
    config = load_config()
    config["primary_only"] = bool(primary_only)
    save_config(config)


def _coerce_positive_int(value: object) -> int | None:
    """Booleans, non-integers, and values below 1 are treated as unset."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def load_wrap_width() -> int | None:
    return _coerce_positive_int(load_config().get("wrap_width"))


def load_max_lines() -> int | None:
    return _coerce_positive_int(load_config().get("max_lines"))

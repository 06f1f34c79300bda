"""Persistent JSON config helpers.

Stores default decoration glyphs, prompt string, and theme name.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from platformdirs import user_config_dir

from .ui_theme import is_known_theme

APP_NAME = "lazypick"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

SESSION_DEFAULT_KEYS: tuple[str, ...] = (
    "indicator",
    "selected_prefix",
    "unselected_prefix",
    "prompt",
    "theme",
)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored so a read-only config
    directory never breaks a picker run.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except Exception:
        pass


def load_session_defaults() -> dict[str, str]:
    """Return persisted session defaults, keeping only string values.

    A stored theme name that is no longer known is dropped so the built-in
    theme applies.
    """
    data = load_config()
    defaults = {key: data[key] for key in SESSION_DEFAULT_KEYS if isinstance(data.get(key), str)}
    if "theme" in defaults and not is_known_theme(defaults["theme"]):
        del defaults["theme"]
    return defaults


def save_session_defaults(values: Mapping[str, object]) -> None:
    """Merge string-valued session defaults into the config file."""
    config = load_config()
    for key in SESSION_DEFAULT_KEYS:
        value = values.get(key)
        if isinstance(value, str):
            config[key] = value
    save_config(config)

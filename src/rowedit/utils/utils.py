# rowedit/utils/utils.py
"""
rowedit.utils.utils
===================

Configuration helpers for the rowedit editor.

Key functionalities include:
- Embedded Defaults: `DEFAULT_CONFIG` is a hardcoded mirror of the settings
  the editor understands, so it can always start.
- Layered Loading: `load_config` deep-merges the user's
  `~/.config/rowedit/config.toml` (or an explicit path) over the defaults.
- Color Resolution: `ansi_to_curses_color` translates the fixed ANSI color
  codes of the highlight classes into curses color numbers, honoring the
  `[colors]` overrides.

A missing or corrupted user file never stops the editor; it falls back to the
embedded defaults and logs why.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import toml

logger = logging.getLogger("rowedit")

# --- Constants ---
USER_CONFIG_PATH = Path.home() / ".config" / "rowedit" / "config.toml"

CURSES_COLOR_NUMBERS: Dict[str, int] = {
    "black": 0, "red": 1, "green": 2, "yellow": 3,
    "blue": 4, "magenta": 5, "cyan": 6, "white": 7,
}

# This dictionary is the ultimate fallback, ensuring the application can ALWAYS start.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {"quit_times": 2, "message_timeout": 5},
    "syntax": {
        "guess_with_pygments": True,
        # [syntax.languages.<filetype>] tables from config.toml land here
        "languages": {},
    },
    # ANSI foreground code (as used by the highlighter) -> curses color name
    "colors": {
        "31": "red", "32": "green", "33": "yellow", "34": "blue",
        "35": "magenta", "36": "cyan", "37": "white",
    },
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
        "log_file": "rowedit.log",
    },
}


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring the application can always run.

    Args:
        path: Explicit config file. Defaults to `~/.config/rowedit/config.toml`;
            a missing file simply means "use the defaults".

    Returns:
        The merged configuration dictionary.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    config_path = Path(path).expanduser() if path else USER_CONFIG_PATH
    if config_path.is_file():
        try:
            user_config = toml.load(config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {config_path}")
        except (toml.TomlDecodeError, OSError) as e:
            logger.error(f"Could not parse user config '{config_path}': {e}. Using defaults.")

    return final_config


def ansi_to_curses_color(ansi_code: int, config: Optional[Dict[str, Any]] = None) -> int:
    """
    Resolves an ANSI foreground code (31..37) to a curses color number.

    Unknown codes and unknown color names fall back to white (7).
    """
    colors = (config or DEFAULT_CONFIG).get("colors", {})
    name = str(colors.get(str(ansi_code), "white")).lower()
    return CURSES_COLOR_NUMBERS.get(name, CURSES_COLOR_NUMBERS["white"])

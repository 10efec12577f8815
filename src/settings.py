"""
Settings Module for the polyomino tiler

Provides persistent storage for run defaults using JSON.
Settings are stored in tiler.json in the working directory.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("tiler.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "strategy_name": "count",
    "workers": None,
    "executor": "thread",
    "max_solutions": 1000,
    "seed": None,
    "log_level": "INFO",
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from tiler.json.

    Args:
        path: Settings file to read (defaults to SETTINGS_FILE)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    path = SETTINGS_FILE if path is None else Path(path)
    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            raise ValueError("settings file must hold a JSON object")

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Save settings to tiler.json.

    Args:
        settings: Settings dictionary to save
        path: Settings file to write (defaults to SETTINGS_FILE)
    """
    path = SETTINGS_FILE if path is None else Path(path)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")

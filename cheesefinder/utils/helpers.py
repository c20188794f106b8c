"""
Helper utilities for Cheese Finder.

Provides:
- Settings loading (TOML merged over defaults)
- Cheese list loading
- Window management
"""

from pathlib import Path
from typing import Any, Dict, Optional

import toml
from loguru import logger

DATA_DIR = Path(__file__).parent.parent / "data"

WINDOW_NAMESPACE_PREFIX = "cheesefinder-"


def load_settings(settings_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from TOML file.

    Args:
        settings_path: File to read, defaults to data/settings.toml

    Returns:
        Dictionary containing settings with defaults applied

    Example settings structure:
        {
            "search": {
                "debounce_ms": 1000,
                "min_query_length": 2,
                "max_results": 30,
                "lookup_delay_ms": 0
            },
            "worker": {
                "max_workers": 4
            },
            "panel": {
                "width": 600,
                "height": 700
            }
        }
    """
    defaults = {
        "search": {
            "debounce_ms": 1000,
            "min_query_length": 2,
            "max_results": 30,
            "lookup_delay_ms": 0,
        },
        "worker": {
            "max_workers": 4,
        },
        "panel": {
            "width": 600,
            "height": 700,
        },
    }

    if settings_path is None:
        settings_path = DATA_DIR / "settings.toml"

    if not settings_path.exists():
        logger.info(f"Settings file not found at {settings_path}, using defaults")
        return defaults

    try:
        loaded = toml.load(settings_path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning(f"Could not load settings from {settings_path}: {e}. Using defaults")
        return defaults

    return _deep_merge(defaults, loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_cheeses(cheeses_path: Optional[Path] = None) -> list[str]:
    """
    Load cheese names, one per line.

    Blank lines and lines starting with '#' are skipped. A missing or
    unreadable file yields an empty list.
    """
    if cheeses_path is None:
        cheeses_path = DATA_DIR / "cheeses.txt"

    try:
        lines = cheeses_path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        logger.warning(f"Could not load cheeses from {cheeses_path}: {e}")
        return []

    return [
        line.strip()
        for line in lines
        if line.strip() and not line.lstrip().startswith("#")
    ]


def close_finder():
    """
    Hide all Cheese Finder windows.

    Hiding the search window stops its pipeline.
    """
    from ignis.app import IgnisApp

    app = IgnisApp.get_default()

    for window in app.get_windows():
        if window.namespace and window.namespace.startswith(WINDOW_NAMESPACE_PREFIX):
            window.set_visible(False)

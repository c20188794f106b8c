# Cheese Finder Utilities Package
"""
Shared utility functions and helpers for Cheese Finder.
"""

from .helpers import close_finder, load_cheeses, load_settings

__all__ = ["load_settings", "load_cheeses", "close_finder"]

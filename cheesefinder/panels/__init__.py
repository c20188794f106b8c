# Cheese Finder Panels Package
"""
Window implementations. Each panel owns its UI and interaction logic.
"""

from .search import SearchPanel

__all__ = ["SearchPanel"]

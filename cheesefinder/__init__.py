# Cheese Finder Package
"""
Cheese search window for Ignis/Wayland.

Typing searches after a short pause, the search button searches at once.
Lookups run on a worker thread and results are shown on the main loop.
"""

__version__ = "0.1.0-dev"

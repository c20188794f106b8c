"""
Search package - Query sources and the cheese search engine.
"""

from .engine import CheeseSearchEngine
from .sources import ContinuousInput, EventSource, ManualTrigger, button_clicks, text_changes

__all__ = [
    "CheeseSearchEngine",
    "EventSource",
    "ManualTrigger",
    "ContinuousInput",
    "button_clicks",
    "text_changes",
]

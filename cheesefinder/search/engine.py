"""
Cheese Search Engine - Case-insensitive substring search over cheese names.

search() blocks (optionally sleeping to mimic a slow backend), so the
pipeline runs it on a worker thread.
"""

import time
from typing import Iterable

from loguru import logger


class CheeseSearchEngine:
    """
    Search a fixed list of cheese names.

    Args:
        cheeses: Cheese names, in display order
        max_results: Maximum number of matches returned
        delay_ms: Artificial latency added to every search
    """

    def __init__(self, cheeses: Iterable[str], max_results: int = 30, delay_ms: int = 0):
        self.cheeses = [c.strip() for c in cheeses if c and c.strip()]
        self.max_results = max_results
        self.delay_ms = delay_ms
        logger.debug(f"CheeseSearchEngine loaded {len(self.cheeses)} cheeses")

    def search(self, query: str) -> list[str]:
        """
        Return cheeses whose name contains query, ignoring case.

        Args:
            query: The search text

        Returns:
            Matching names in list order, at most max_results.
            Blank queries match nothing.
        """
        if self.delay_ms > 0:
            time.sleep(self.delay_ms / 1000)

        needle = query.strip().lower()
        if not needle:
            return []

        matches = [cheese for cheese in self.cheeses if needle in cheese.lower()]
        return matches[:self.max_results]

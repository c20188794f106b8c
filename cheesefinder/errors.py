"""
Exceptions raised by the Cheese Finder search pipeline.
"""


class CheeseFinderError(Exception):
    """Base class for all Cheese Finder errors."""


class RegistrationError(CheeseFinderError):
    """An event source failed to attach its listener."""


class QueryLookupError(CheeseFinderError):
    """
    The lookup for a query failed.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, query: str, message: str = ""):
        self.query = query
        super().__init__(message or f"Lookup failed for '{query}'")


class IllegalStateError(CheeseFinderError, RuntimeError):
    """The pipeline was started or stopped out of order."""

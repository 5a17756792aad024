"""
Error taxonomy for a check run.

Unresolved timestamps are not errors: the row is dropped by the extractor.
Order violations are not errors either: they are a completed check with a
failing verdict (see OrderVerdict).
"""

from __future__ import annotations


class ListingCheckError(Exception):
    """Base class for anything that prevents a decisive verdict."""


class InsufficientItemsError(ListingCheckError):
    """Pagination ended before the target count was reached."""

    def __init__(self, collected: int, target: int, reason: str = "") -> None:
        self.collected = collected
        self.target = target
        self.reason = reason
        message = f"Only collected {collected} of {target} items"
        if reason:
            message = f"{message}; {reason}"
        super().__init__(message)


class BrowserTimeoutError(ListingCheckError):
    """A page interaction exceeded the per-operation timeout."""


class NavigationTimeoutError(BrowserTimeoutError):
    """Loading the listing or following the "More" link timed out."""


class ExtractionTimeoutError(BrowserTimeoutError):
    """Reading page content or checking control visibility timed out."""

"""
Listing order checker

Collects listing items across paginated "More" navigation and verifies they
are sorted newest to oldest.
"""

from .errors import (
    BrowserTimeoutError,
    ExtractionTimeoutError,
    InsufficientItemsError,
    ListingCheckError,
    NavigationTimeoutError,
)
from .extractor import PageExtractor, extract_items, parse_listing_rows
from .pagination import PaginationController, RetryPolicy
from .time_normalizer import resolve_timestamp_ms, to_seconds
from .types import CollectionResult, Item, OrderVerdict, RawRow, RunOutcome
from .validator import describe_violation, validate_order

__all__ = [
    "BrowserTimeoutError",
    "CollectionResult",
    "ExtractionTimeoutError",
    "InsufficientItemsError",
    "Item",
    "ListingCheckError",
    "NavigationTimeoutError",
    "OrderVerdict",
    "PageExtractor",
    "PaginationController",
    "RawRow",
    "RetryPolicy",
    "RunOutcome",
    "describe_violation",
    "extract_items",
    "parse_listing_rows",
    "resolve_timestamp_ms",
    "to_seconds",
    "validate_order",
]

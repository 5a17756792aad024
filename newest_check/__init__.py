"""
Newest listing order check

Verifies that a public "newest" listing page is sorted newest to oldest
across paginated "More" navigation.
"""

__version__ = "0.1.0"

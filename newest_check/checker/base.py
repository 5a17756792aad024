from __future__ import annotations

from typing import Protocol


class ListingBrowser(Protocol):
    async def load_page(self, url: str) -> str:
        """Navigate to url, wait for DOMContentLoaded and return the rendered HTML."""

    async def read_content(self) -> str:
        """Return the HTML of the page as currently rendered."""

    async def is_control_visible(self, selector: str) -> bool:
        """Return True if the element matching selector is visible right now."""

    async def activate_control(self, selector: str) -> str:
        """Click the element matching selector, wait for the next page and return its HTML."""

    async def capture_screenshot(self, path: str) -> None:
        """Save a full-page screenshot to path."""

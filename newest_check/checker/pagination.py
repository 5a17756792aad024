"""
Pagination controller.

Collects listing items across "More" navigation until the target count is
reached, with a bounded retry for a late-rendering "More" link and a ceiling
on the number of page hops.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from .base import ListingBrowser
from .errors import InsufficientItemsError
from .extractor import PageExtractor
from .types import CollectionResult, Item

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class RetryPolicy:
    """Fixed-backoff retry for an async condition check"""

    def __init__(self, max_attempts: int = 2, backoff_seconds: float = 0.5, sleep: Optional[Sleep] = None):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.backoff_seconds = max(0.0, backoff_seconds)
        self.sleep = sleep or asyncio.sleep

    async def wait_until(self, predicate: Callable[[], Awaitable[bool]], description: str = "condition") -> bool:
        """
        Evaluate predicate up to max_attempts times.

        Sleeps backoff_seconds after every miss, including the last one.

        Returns:
            True as soon as predicate holds, False once attempts are used up
        """
        for attempt in range(1, self.max_attempts + 1):
            if await predicate():
                return True
            logger.warning(f"⚠️ {description} not ready (attempt {attempt}/{self.max_attempts})")
            await self.sleep(self.backoff_seconds)
        return False


class PaginationController:
    """Owns the collection buffer and hop counter for one run"""

    def __init__(
        self,
        browser: ListingBrowser,
        extractor: PageExtractor,
        target_count: int = 100,
        max_page_hops: int = 10,
        more_selector: str = "a.morelink",
        retry_policy: Optional[RetryPolicy] = None,
    ):
        if target_count < 1:
            raise ValueError("target_count must be at least 1")
        self.browser = browser
        self.extractor = extractor
        self.target_count = target_count
        self.max_page_hops = max_page_hops
        self.more_selector = more_selector
        self.retry_policy = retry_policy or RetryPolicy()

        self.buffer: List[Item] = []
        self.hops = 0
        self.pages_visited = 0

    async def collect(self, html: Optional[str] = None) -> CollectionResult:
        """
        Collect exactly target_count items starting from the current page.

        Args:
            html: content of the already loaded first page; read from the browser when omitted

        Raises:
            InsufficientItemsError: the "More" link never became visible, or the hop ceiling was hit
        """
        if html is None:
            html = await self.browser.read_content()

        while True:
            self._append_batch(html)
            if len(self.buffer) >= self.target_count:
                break

            if self.hops >= self.max_page_hops:
                raise self._ceiling_reached()

            html = await self._advance()
            # the page loaded by the last allowed hop is not extracted
            if self.hops >= self.max_page_hops:
                raise self._ceiling_reached()

        logger.info(
            f"✅ Collected {len(self.buffer)} items over {self.pages_visited} page(s), {self.hops} hop(s)"
        )
        return CollectionResult(
            records=tuple(self.buffer),
            hops=self.hops,
            pages_visited=self.pages_visited,
        )

    def _ceiling_reached(self) -> InsufficientItemsError:
        return InsufficientItemsError(
            len(self.buffer),
            self.target_count,
            f"page hop ceiling of {self.max_page_hops} reached",
        )

    def _append_batch(self, html: str) -> None:
        self.pages_visited += 1
        before = len(self.buffer)
        for item in self.extractor.extract(html):
            if len(self.buffer) >= self.target_count:
                break
            self.buffer.append(item)
        logger.info(
            f"📄 Page {self.pages_visited}: +{len(self.buffer) - before} items "
            f"({len(self.buffer)}/{self.target_count})"
        )

    async def _advance(self) -> str:
        async def more_visible() -> bool:
            return await self.browser.is_control_visible(self.more_selector)

        visible = await self.retry_policy.wait_until(more_visible, description='"More" link')
        if not visible:
            raise InsufficientItemsError(len(self.buffer), self.target_count, 'no "More" link')

        html = await self.browser.activate_control(self.more_selector)
        self.hops += 1
        logger.info(f"➡️ Hop {self.hops}/{self.max_page_hops}")
        return html

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from newest_check.checker.errors import ExtractionTimeoutError, NavigationTimeoutError


log = logging.getLogger(__name__)


class PlaywrightListingBrowser:
    """
    Chromium-backed listing browser.

    Every page interaction is bounded by timeout_ms; Playwright timeouts are
    surfaced as NavigationTimeoutError or ExtractionTimeoutError.
    """

    def __init__(
        self,
        headless: bool = True,
        timeout_ms: int = 30_000,
        launch_args: Optional[list] = None,
    ):
        self.headless = headless
        self.timeout_ms = timeout_ms
        # Conservative defaults for headless environments
        self.launch_args = launch_args if launch_args is not None else [
            "--no-sandbox",
            "--disable-dev-shm-usage",
        ]

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None
        self._tracing = False

    async def __aenter__(self) -> "PlaywrightListingBrowser":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("Browser not started; call start() first")
        return self._page

    async def start(self) -> None:
        if self._page is not None:
            return
        self._playwright = await async_playwright().start()
        launch_kwargs: Dict[str, Any] = {
            "headless": self.headless,
            "args": self.launch_args,
        }
        self._browser = await self._playwright.chromium.launch(**launch_kwargs)
        self._context = await self._browser.new_context()
        self._page = await self._context.new_page()
        self._page.set_default_timeout(self.timeout_ms)
        log.info(f"Browser started (headless={self.headless}, timeout={self.timeout_ms}ms)")

    async def close(self) -> None:
        try:
            if self._browser is not None:
                await self._browser.close()
        finally:
            if self._playwright is not None:
                await self._playwright.stop()
            self._playwright = None
            self._browser = None
            self._context = None
            self._page = None

    async def start_trace(self) -> None:
        if self._context is None:
            raise RuntimeError("Browser not started; call start() first")
        await self._context.tracing.start(screenshots=True, snapshots=True)
        self._tracing = True

    async def stop_trace(self, path: str) -> Optional[str]:
        if self._context is None or not self._tracing:
            return None
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        await self._context.tracing.stop(path=path)
        self._tracing = False
        return path

    async def load_page(self, url: str) -> str:
        try:
            await self.page.goto(url, wait_until="domcontentloaded")
        except PlaywrightTimeoutError as exc:
            raise NavigationTimeoutError(f"Timed out loading {url}: {exc}") from exc
        return await self.read_content()

    async def read_content(self) -> str:
        try:
            return await self.page.content()
        except PlaywrightTimeoutError as exc:
            raise ExtractionTimeoutError(f"Timed out reading page content: {exc}") from exc

    async def is_control_visible(self, selector: str) -> bool:
        try:
            return await self.page.locator(selector).first.is_visible()
        except PlaywrightTimeoutError as exc:
            raise ExtractionTimeoutError(f"Timed out checking visibility of {selector}: {exc}") from exc

    async def activate_control(self, selector: str) -> str:
        try:
            async with self.page.expect_navigation(wait_until="domcontentloaded"):
                await self.page.locator(selector).first.click()
        except PlaywrightTimeoutError as exc:
            raise NavigationTimeoutError(f"Timed out following {selector}: {exc}") from exc
        return await self.read_content()

    async def capture_screenshot(self, path: str) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        await self.page.screenshot(path=path, full_page=True)

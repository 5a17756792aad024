"""
Run orchestration: load the listing, collect items, validate their order,
then write artifacts. Produces exactly one outcome per run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from newest_check.checker.base import ListingBrowser
from newest_check.checker.extractor import PageExtractor
from newest_check.checker.pagination import PaginationController, RetryPolicy, Sleep
from newest_check.checker.time_normalizer import Clock, system_clock
from newest_check.checker.types import RunOutcome
from newest_check.checker.validator import describe_violation, validate_order
from newest_check.config import Settings, get_settings
from newest_check.services.browser import PlaywrightListingBrowser
from newest_check.services.reports import write_csv, write_junit

logger = logging.getLogger(__name__)


def build_controller(
    settings: Settings,
    browser: ListingBrowser,
    clock: Clock = system_clock,
    sleep: Optional[Sleep] = None,
) -> PaginationController:
    extractor = PageExtractor(
        row_selector=settings.row_selector,
        title_selector=settings.title_selector,
        age_selectors=settings.age_selectors,
        clock=clock,
    )
    retry_policy = RetryPolicy(
        max_attempts=settings.more_retry_attempts,
        backoff_seconds=settings.more_retry_interval_ms / 1000,
        sleep=sleep,
    )
    return PaginationController(
        browser=browser,
        extractor=extractor,
        target_count=settings.target_count,
        max_page_hops=settings.max_page_hops,
        more_selector=settings.more_selector,
        retry_policy=retry_policy,
    )


async def _capture_screenshot(browser: ListingBrowser, path: Path, outcome: RunOutcome) -> None:
    try:
        await browser.capture_screenshot(str(path))
    except Exception as exc:  # noqa: BLE001
        logger.warning(f"⚠️ Screenshot failed: {exc}")
        return
    outcome.artifacts["screenshot"] = str(path)
    logger.info(f"   Screenshot saved: {path}")


def _write_report(outcome: RunOutcome, kind: str, writer: Callable[..., str], *args, **kwargs) -> None:
    """Write one report file; an unwritable artifacts dir never changes the verdict."""
    try:
        outcome.artifacts[kind] = writer(*args, **kwargs)
    except OSError as exc:
        logger.warning(f"⚠️ Could not write {kind} report: {exc}")


async def _stop_trace(browser: PlaywrightListingBrowser, path: str) -> Optional[str]:
    try:
        return await browser.stop_trace(path)
    except OSError as exc:
        logger.warning(f"⚠️ Could not save trace: {exc}")
        return None


def _write_reports(settings: Settings, outcome: RunOutcome) -> None:
    artifacts_dir = Path(settings.artifacts_dir)
    case_name = f"first-{settings.target_count}-sorted"

    if settings.write_csv and outcome.status == "pass":
        _write_report(
            outcome,
            "csv",
            write_csv,
            outcome.records,
            str(artifacts_dir / f"top{settings.target_count}.csv"),
        )
    if settings.write_junit:
        _write_report(
            outcome,
            "junit",
            write_junit,
            outcome.status == "pass",
            outcome.error or "",
            str(artifacts_dir / "results.xml"),
            case_name=case_name,
        )


async def run_check(
    settings: Optional[Settings] = None,
    browser: Optional[ListingBrowser] = None,
    clock: Clock = system_clock,
    sleep: Optional[Sleep] = None,
) -> RunOutcome:
    """
    Run one order check against the configured listing.

    Args:
        settings: run configuration; defaults to environment settings
        browser: an already started browser; a Playwright browser is launched
            (and closed afterwards) when omitted
        clock: epoch-millisecond clock used for relative ages
        sleep: async sleep used between "More" link visibility checks

    Returns:
        RunOutcome with status "pass", "fail" (order violation) or "error"
    """
    settings = settings or get_settings()
    artifacts_dir = Path(settings.artifacts_dir)
    screenshots_dir = Path(settings.screenshots_dir)

    owns_browser = browser is None
    playwright_browser: Optional[PlaywrightListingBrowser] = None
    if owns_browser:
        playwright_browser = PlaywrightListingBrowser(
            headless=settings.headless,
            timeout_ms=settings.timeout_ms,
        )
        browser = playwright_browser

    outcome = RunOutcome(status="error")
    controller: Optional[PaginationController] = None

    try:
        if playwright_browser is not None:
            await playwright_browser.start()
            if settings.record_trace:
                await playwright_browser.start_trace()

        logger.info(f"Loading {settings.listing_url}")
        html = await browser.load_page(settings.listing_url)

        controller = build_controller(settings, browser, clock=clock, sleep=sleep)
        collection = await controller.collect(html)
        outcome.records = collection.records

        verdict = validate_order(collection.records)
        outcome.verdict = verdict

        if verdict.ok:
            outcome.status = "pass"
            logger.info(f"✅ First {len(collection.records)} items are sorted newest → oldest")
        else:
            outcome.status = "fail"
            outcome.error = describe_violation(verdict)
            logger.error(f"❌ Not sorted newest → oldest at index {verdict.index}\n{outcome.error}")
            await _capture_screenshot(browser, screenshots_dir / "failure.png", outcome)
    except Exception as exc:  # noqa: BLE001
        outcome.status = "error"
        outcome.error = f"{type(exc).__name__}: {exc}"
        if controller is not None:
            outcome.records = tuple(controller.buffer)
        logger.error(f"❌ Check aborted: {outcome.error}")
        await _capture_screenshot(browser, screenshots_dir / "error.png", outcome)
    finally:
        if playwright_browser is not None:
            try:
                if settings.record_trace:
                    trace_path = await _stop_trace(playwright_browser, str(artifacts_dir / "trace.zip"))
                    if trace_path:
                        outcome.artifacts["trace"] = trace_path
                        logger.info(f"   Trace saved → {trace_path} (view with: playwright show-trace {trace_path})")
            finally:
                await playwright_browser.close()

    _write_reports(settings, outcome)
    return outcome

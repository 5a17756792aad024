"""
Run the newest listing order check from the command line.

    newest-check --show
    newest-check --csv --junit --trace
    HEADLESS=false newest-check
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List, Optional

from newest_check.checker.types import RunOutcome
from newest_check.config import Settings, get_settings
from newest_check.runner import run_check


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="newest-check",
        description="Verify a listing's first N items are sorted newest to oldest.",
    )
    parser.add_argument("--show", action="store_true", help="Run headful (show the browser).")
    parser.add_argument("--csv", action="store_true", help="Write artifacts/top<N>.csv.")
    parser.add_argument("--junit", action="store_true", help="Write artifacts/results.xml (JUnit).")
    parser.add_argument("--trace", action="store_true", help="Record a Playwright trace to artifacts/trace.zip.")
    parser.add_argument("--url", default=None, help="Listing URL to check.")
    parser.add_argument("--target", type=int, default=None, help="Number of items to collect and check.")
    parser.add_argument("--max-hops", type=int, default=None, help='Maximum "More" page hops.')
    parser.add_argument("--timeout-ms", type=int, default=None, help="Per-interaction timeout in milliseconds.")
    parser.add_argument("--debug", action="store_true", help="Verbose logging.")
    return parser


def settings_from_args(args: argparse.Namespace, base: Optional[Settings] = None) -> Settings:
    """Apply CLI flags on top of environment settings, returning a new frozen copy."""
    base = base or get_settings()
    update = {}
    if args.show:
        update["headless"] = False
    if args.csv:
        update["write_csv"] = True
    if args.junit:
        update["write_junit"] = True
    if args.trace:
        update["record_trace"] = True
    if args.debug:
        update["debug"] = True
    if args.url:
        update["listing_url"] = args.url
    if args.target is not None:
        update["target_count"] = args.target
    if args.max_hops is not None:
        update["max_page_hops"] = args.max_hops
    if args.timeout_ms is not None:
        update["timeout_ms"] = args.timeout_ms
    if not update:
        return base
    return Settings.model_validate({**base.model_dump(), **update})


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s - %(message)s",
    )
    # Tame noisy libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def print_summary(outcome: RunOutcome) -> None:
    if outcome.status == "pass":
        records = outcome.records
        last = len(records) - 1
        print(f"✅ PASS: Exactly first {len(records)} articles are sorted newest → oldest.")
        print(f"   Newest (index 0):  {records[0].iso_time}")
        print(f"   Oldest (index {last}): {records[last].iso_time}")
        print("\nSample of the first 5 items:")
        for index, item in enumerate(records[:5]):
            print(f"{index:02d}  {item.iso_time}  {item.title}")
    elif outcome.status == "fail":
        print(f"❌ FAIL: Not sorted newest→oldest at index {outcome.verdict.index}")
        print(outcome.error)
    else:
        print(f"❌ ERROR: {outcome.error}")

    for kind, path in outcome.artifacts.items():
        print(f"   {kind}: {path}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    configure_logging(settings.debug)

    outcome = asyncio.run(run_check(settings))
    print_summary(outcome)
    return outcome.exit_code


if __name__ == "__main__":
    raise SystemExit(main())

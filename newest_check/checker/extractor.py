"""
Listing page extraction.

Turns rendered listing HTML into raw rows, then into accepted items with a
resolved timestamp. Works on a snapshot of the page content only: no
navigation, no mutation of the page.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, Tag

from .time_normalizer import Clock, resolve_timestamp_ms, system_clock, to_seconds
from .types import Item, RawRow, iso_from_seconds

logger = logging.getLogger(__name__)

DEFAULT_ROW_SELECTOR = "tr.athing"
DEFAULT_TITLE_SELECTOR = ".titleline a"
DEFAULT_AGE_SELECTORS = (".age a", ".age")


def _read_age(metadata_row: Optional[Tag], age_selectors: Sequence[str]) -> Tuple[Optional[str], str]:
    """
    Return (absolute datetime attribute, relative text) from the metadata row.

    The text comes from the first selector that matches. The absolute value
    is the first "title" attribute among the matches, since the listing puts
    it on the age container rather than on the inner link.
    """
    if metadata_row is None:
        return None, ""

    elements = [metadata_row.select_one(selector) for selector in age_selectors]
    elements = [element for element in elements if element is not None]
    if not elements:
        return None, ""

    age_text = elements[0].get_text(strip=True)
    for element in elements:
        title = element.get("title")
        if title:
            return title, age_text
    return None, age_text


def parse_listing_rows(
    html: str,
    row_selector: str = DEFAULT_ROW_SELECTOR,
    title_selector: str = DEFAULT_TITLE_SELECTOR,
    age_selectors: Sequence[str] = DEFAULT_AGE_SELECTORS,
) -> List[RawRow]:
    """
    Read every listing row from the rendered HTML, in document order.

    The listing splits each entry over two rows: the row matching
    row_selector carries the id and title link, the next sibling row carries
    the metadata (score, author, age).
    """
    soup = BeautifulSoup(html, "html.parser")
    rows: List[RawRow] = []

    for row in soup.select(row_selector):
        anchor = row.select_one(title_selector)
        age_title, age_text = _read_age(row.find_next_sibling(), age_selectors)

        rows.append(
            RawRow(
                id=row.get("id") or "",
                title=anchor.get_text(strip=True) if anchor is not None else "",
                url=(anchor.get("href") or "") if anchor is not None else "",
                age_title=age_title,
                age_text=age_text,
            )
        )

    return rows


def extract_items(
    rows: Iterable[RawRow],
    now_ms: Optional[int] = None,
    clock: Clock = system_clock,
) -> Iterator[Item]:
    """
    Lazily convert raw rows to accepted items, preserving order.

    Rows with an empty title, an unresolvable timestamp or one outside the
    representable date range are skipped.
    Nothing is deduplicated.
    """
    if now_ms is None:
        now_ms = clock()

    for row in rows:
        if not row.title:
            logger.debug(f"Dropping row {row.id!r}: empty title")
            continue

        timestamp_ms = resolve_timestamp_ms(row.age_title, row.age_text, now_ms=now_ms)
        if timestamp_ms is None:
            logger.debug(f"Dropping row {row.id!r}: unresolved timestamp ({row.age_title!r}, {row.age_text!r})")
            continue

        timestamp_seconds = to_seconds(timestamp_ms)
        try:
            iso_from_seconds(timestamp_seconds)
        except (ValueError, OverflowError, OSError):
            logger.debug(f"Dropping row {row.id!r}: timestamp out of range ({timestamp_seconds})")
            continue

        yield Item(
            id=row.id,
            title=row.title,
            url=row.url,
            timestamp_seconds=timestamp_seconds,
            age_text=row.age_text,
        )


class PageExtractor:
    """Extracts accepted items from one rendered listing page"""

    def __init__(
        self,
        row_selector: str = DEFAULT_ROW_SELECTOR,
        title_selector: str = DEFAULT_TITLE_SELECTOR,
        age_selectors: Sequence[str] = DEFAULT_AGE_SELECTORS,
        clock: Clock = system_clock,
    ):
        self.row_selector = row_selector
        self.title_selector = title_selector
        self.age_selectors = tuple(age_selectors)
        self.clock = clock

    def extract(self, html: str) -> Iterator[Item]:
        rows = parse_listing_rows(
            html,
            row_selector=self.row_selector,
            title_selector=self.title_selector,
            age_selectors=self.age_selectors,
        )
        return extract_items(rows, clock=self.clock)

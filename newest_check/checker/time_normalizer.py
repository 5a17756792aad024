"""
Listing Time Normalization
Converts an absolute-or-relative age expression into epoch milliseconds
"""

from __future__ import annotations

import logging
import re
import time
from datetime import datetime, timezone
from typing import Callable, Optional

logger = logging.getLogger(__name__)

Clock = Callable[[], int]

SECOND_MS = 1_000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS

# Fixed approximations: a month is 30 days and a year is 365 days.
UNIT_MS = {
    "second": SECOND_MS,
    "minute": MINUTE_MS,
    "hour": HOUR_MS,
    "day": DAY_MS,
    "week": 7 * DAY_MS,
    "month": 30 * DAY_MS,
    "year": 365 * DAY_MS,
}

RELATIVE_AGE_RE = re.compile(r"(\d+)\s+(second|minute|hour|day|week|month|year)s?\s+ago")
TRAILING_EPOCH_RE = re.compile(r"^(\S+)\s+\d+$")


def system_clock() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def parse_absolute_ms(value: Optional[str]) -> Optional[int]:
    """
    Parse an absolute datetime attribute into epoch milliseconds.

    Accepts ISO 8601 with or without offset ("Z" included). Listing pages
    often append the epoch seconds after the ISO value
    ("2024-01-01T00:00:00 1704067200"); only the first token is used then.
    Naive values are treated as UTC.
    """
    if not value:
        return None

    text = value.strip()
    if not text:
        return None

    trailing_epoch = TRAILING_EPOCH_RE.match(text)
    if trailing_epoch:
        text = trailing_epoch.group(1)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


def parse_relative_age_ms(text: Optional[str], now_ms: int) -> Optional[int]:
    """
    Parse relative age text like "3 hours ago" or "yesterday".

    Returns:
        epoch milliseconds, or None if the text does not match
    """
    lower = (text or "").lower()
    if "yesterday" in lower:
        return now_ms - DAY_MS

    match = RELATIVE_AGE_RE.search(lower)
    if not match:
        return None

    quantity = int(match.group(1))
    return now_ms - quantity * UNIT_MS[match.group(2)]


def resolve_timestamp_ms(
    absolute: Optional[str],
    relative: Optional[str],
    now_ms: Optional[int] = None,
    clock: Clock = system_clock,
) -> Optional[int]:
    """
    Resolve an item's timestamp. Absolute values always win over relative text.

    Args:
        absolute: datetime attribute from the age element, if any
        relative: human readable age text, used only when absolute is missing or malformed
        now_ms: reference "now" for relative text; read from clock when omitted

    Returns:
        epoch milliseconds, or None when neither signal resolves
    """
    absolute_ms = parse_absolute_ms(absolute)
    if absolute_ms is not None:
        return absolute_ms

    if absolute:
        logger.debug(f"Malformed absolute timestamp {absolute!r}, falling back to {relative!r}")

    if now_ms is None:
        now_ms = clock()
    return parse_relative_age_ms(relative, now_ms)


def to_seconds(timestamp_ms: int) -> int:
    return timestamp_ms // 1000

"""
Type definitions for the listing order check
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple


def iso_from_seconds(timestamp_seconds: int) -> str:
    """Format epoch seconds as UTC ISO-8601 with millisecond precision and a Z suffix."""
    moment = datetime.fromtimestamp(timestamp_seconds, tz=timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class RawRow:
    """One listing row as read from the rendered page, before any time resolution"""
    id: str
    title: str
    url: str
    age_title: Optional[str] = None  # absolute datetime attribute of the age element
    age_text: str = ""  # relative age text, e.g. "3 hours ago"


@dataclass(frozen=True)
class Item:
    """An accepted listing entry: non-empty title and a resolved timestamp"""
    id: str
    title: str
    url: str
    timestamp_seconds: int
    age_text: str = ""

    @property
    def iso_time(self) -> str:
        return iso_from_seconds(self.timestamp_seconds)


@dataclass(frozen=True)
class OrderVerdict:
    """Outcome of the newest-to-oldest scan"""
    ok: bool
    index: Optional[int] = None
    left: Optional[Item] = None
    right: Optional[Item] = None

    @classmethod
    def passed(cls) -> "OrderVerdict":
        return cls(ok=True)

    @classmethod
    def failed(cls, index: int, left: Item, right: Item) -> "OrderVerdict":
        return cls(ok=False, index=index, left=left, right=right)


@dataclass(frozen=True)
class CollectionResult:
    """Sealed buffer produced by the pagination controller"""
    records: Tuple[Item, ...]
    hops: int
    pages_visited: int


@dataclass
class RunOutcome:
    """What one check run produced, consumed by the CLI and report writers"""
    status: str  # "pass", "fail" or "error"
    verdict: Optional[OrderVerdict] = None
    records: Tuple[Item, ...] = ()
    error: Optional[str] = None
    artifacts: Dict[str, str] = field(default_factory=dict)

    @property
    def exit_code(self) -> int:
        return 0 if self.status == "pass" else 1

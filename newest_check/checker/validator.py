"""
Newest-to-oldest order validation
"""

from __future__ import annotations

from typing import Sequence

from .types import Item, OrderVerdict


def validate_order(records: Sequence[Item]) -> OrderVerdict:
    """
    Check that records run from newest to oldest.

    Equal adjacent timestamps are accepted and keep page order; no secondary
    key is checked. Stops at the first ascending pair.
    """
    for index in range(len(records) - 1):
        left, right = records[index], records[index + 1]
        if left.timestamp_seconds >= right.timestamp_seconds:
            continue
        return OrderVerdict.failed(index, left, right)
    return OrderVerdict.passed()


def describe_violation(verdict: OrderVerdict) -> str:
    if verdict.ok or verdict.left is None or verdict.right is None:
        return ""
    return (
        f"break at index {verdict.index}\n"
        f"A: {verdict.left.title}  {verdict.left.iso_time}\n"
        f"B: {verdict.right.title}  {verdict.right.iso_time}"
    )

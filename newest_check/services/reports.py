"""
Report writers for a check run: CSV listing of the collected items and a
single-case JUnit XML result.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Dict, List, Sequence
from xml.sax.saxutils import quoteattr

from newest_check.checker.types import Item

logger = logging.getLogger(__name__)

CSV_HEADER = ["index", "iso_time", "title", "url", "id"]


def write_csv(records: Sequence[Item], path: str) -> str:
    """Write one row per record: index, ISO time, title, url, id."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    with target.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(CSV_HEADER)
        for index, item in enumerate(records):
            writer.writerow([index, item.iso_time, item.title, item.url, item.id])

    logger.info(f"   CSV saved → {target}")
    return str(target)


def read_csv(path: str) -> List[Dict[str, str]]:
    with Path(path).open("r", encoding="utf-8", newline="") as handle:
        return list(csv.DictReader(handle))


def _cdata(text: str) -> str:
    # "]]>" cannot appear inside a CDATA section; split it across two sections
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def render_junit(
    passed: bool,
    message: str = "",
    suite_name: str = "hn-newest-sort",
    case_name: str = "first-100-sorted",
    class_name: str = "hn",
) -> str:
    failure = ""
    if not passed:
        failure = f'<failure message="Order check failed">{_cdata(message)}</failure>'

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<testsuite name={quoteattr(suite_name)} tests="1" failures="{0 if passed else 1}">\n'
        f'  <testcase classname={quoteattr(class_name)} name={quoteattr(case_name)}>\n'
        f"    {failure}\n"
        "  </testcase>\n"
        "</testsuite>\n"
    )


def write_junit(
    passed: bool,
    message: str,
    path: str,
    suite_name: str = "hn-newest-sort",
    case_name: str = "first-100-sorted",
) -> str:
    """Write a JUnit file with one test case, failing iff passed is False."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(
        render_junit(passed, message, suite_name=suite_name, case_name=case_name),
        encoding="utf-8",
    )
    logger.info(f"   JUnit saved → {target}")
    return str(target)

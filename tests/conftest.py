from __future__ import annotations

import html as html_lib
from typing import List, Optional, Sequence, Tuple

import pytest

NOW_MS = 1_704_067_200_000  # 2024-01-01T00:00:00Z


def listing_html(entries: Sequence[Tuple[str, str, Optional[str], str]], more: bool = True) -> str:
    """
    Build listing markup shaped like a "newest" page.

    Each entry is (id, title, age_title, age_text).
    """
    rows = []
    for item_id, title, age_title, age_text in entries:
        title_attr = f' title="{html_lib.escape(age_title)}"' if age_title is not None else ""
        rows.append(
            f'<tr class="athing" id="{item_id}">'
            f'<td class="title"><span class="titleline">'
            f'<a href="https://example.com/{item_id}">{html_lib.escape(title)}</a>'
            f"</span></td></tr>"
            f'<tr><td class="subtext"><span class="age"{title_attr}>'
            f'<a href="item?id={item_id}">{age_text}</a></span></td></tr>'
            f'<tr class="spacer"></tr>'
        )
    more_link = '<tr><td><a class="morelink" href="?next=1">More</a></td></tr>' if more else ""
    return f"<html><body><table>{''.join(rows)}{more_link}</table></body></html>"


def page_of(start: int, count: int, start_seconds: int = 1_700_000_000) -> str:
    """A page of count items with strictly decreasing absolute timestamps."""
    entries = []
    for offset in range(count):
        number = start + offset
        seconds = start_seconds - number * 60
        entries.append((str(number), f"Story {number}", f"{_iso(seconds)} {seconds}", "some time ago"))
    return listing_html(entries)


def _iso(seconds: int) -> str:
    from datetime import datetime, timezone

    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")


class FakeBrowser:
    """In-memory listing browser serving a fixed list of pages."""

    def __init__(self, pages: List[str], more_visible: Optional[List[bool]] = None, fail_on_load: Optional[Exception] = None):
        self.pages = pages
        self.index = 0
        self.more_visible = more_visible
        self.fail_on_load = fail_on_load
        self.visibility_checks = 0
        self.clicks = 0
        self.screenshots: List[str] = []

    async def load_page(self, url: str) -> str:
        if self.fail_on_load is not None:
            raise self.fail_on_load
        self.index = 0
        return self.pages[0]

    async def read_content(self) -> str:
        return self.pages[self.index]

    async def is_control_visible(self, selector: str) -> bool:
        self.visibility_checks += 1
        if self.more_visible is not None:
            if not self.more_visible:
                return False
            return self.more_visible.pop(0)
        return self.index + 1 < len(self.pages)

    async def activate_control(self, selector: str) -> str:
        self.clicks += 1
        self.index += 1
        return self.pages[self.index]

    async def capture_screenshot(self, path: str) -> None:
        self.screenshots.append(path)


class FakeSleep:
    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def fixed_clock():
    return lambda: NOW_MS

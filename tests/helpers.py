"""
Shared test helpers: listing HTML builder and an in-memory page session.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

from bs4 import BeautifulSoup

from rhythmsfeed.errors import RenderError

BASE_URL = "https://www.5rhythms.com"
LISTING_URL = "https://www.5rhythms.com/EventSearch.php?event_type_id=2"

CELL_IDS = ("name", "dates", "teacher", "map", "city", "country", "contactInfo")


def row(**cells: Optional[str]) -> str:
    """
    One result row. Keyword = cell id, value = inner HTML (None = no cell).
    """
    parts = []
    for cell_id in CELL_IDS:
        inner = cells.get(cell_id, "")
        if inner is None:
            continue
        parts.append(f'<div id="{cell_id}">{inner}</div>')
    return '<div id="searchresults_rows">' + "".join(parts) + "</div>"


def listing(*rows: str) -> str:
    return (
        "<html><body><h1>Find a class</h1>"
        '<div id="searchresults_classes">' + "".join(rows) + "</div>"
        "</body></html>"
    )


def page(text: str) -> str:
    return f"<html><body><div class='event'>{text}</div></body></html>"


class FakeSession:
    """
    PageSession over a dict of url -> html. Records every call in ``log``.
    """

    def __init__(self, pages: Dict[str, str], failing: Optional[Set[str]] = None) -> None:
        self.pages = pages
        self.failing = failing or set()
        self.log: List[Tuple[str, object]] = []
        self.closed = False
        self._html = ""
        self._url = ""

    def goto(self, url: str, timeout_ms: int) -> None:
        self.log.append(("goto", url))
        self._url = url
        if url in self.failing or url not in self.pages:
            raise RenderError(url, "Timeout 60000ms exceeded")
        self._html = self.pages[url]

    def wait_for_selector(self, selector: str, timeout_ms: int) -> None:
        if BeautifulSoup(self._html, "html.parser").select_one(selector) is None:
            raise RenderError(self._url, f"selector {selector} not found")

    def content(self) -> str:
        return self._html

    def inner_text(self) -> str:
        return BeautifulSoup(self._html, "html.parser").get_text(" ")

    def close(self) -> None:
        self.closed = True

    def sleep(self, seconds: float) -> None:
        self.log.append(("sleep", seconds))

    @property
    def visits(self) -> List[str]:
        return [str(v) for k, v in self.log if k == "goto"]

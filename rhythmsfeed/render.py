"""
Page rendering sessions.

The listing is produced by JavaScript, so the default session drives a
headless Chromium through Playwright. A plain requests-based session with
the same interface exists for pages that are served pre-rendered (and for
debugging against a local copy of the site).

One session (one browser, one page) is used for the whole run; pages are
never fetched in parallel.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional, Protocol

import requests
from bs4 import BeautifulSoup
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from rhythmsfeed import settings
from rhythmsfeed.errors import RenderError
from rhythmsfeed.logging_utils import get_logger

logger = get_logger(__name__)


class PageSession(Protocol):
    def goto(self, url: str, timeout_ms: int) -> None: ...

    def wait_for_selector(self, selector: str, timeout_ms: int) -> None: ...

    def content(self) -> str: ...

    def inner_text(self) -> str: ...

    def close(self) -> None: ...


# ---------------------------------------------------------------------------
# Playwright (JavaScript rendering)
# ---------------------------------------------------------------------------


class PlaywrightSession:
    """
    Headless Chromium page reused for every navigation.

    Usage:
        session = PlaywrightSession().start()
        session.goto(url, timeout_ms=60000)
        html = session.content()
        session.close()
    """

    def __init__(self, headless: bool = settings.HEADLESS, user_agent: str = settings.USER_AGENT):
        self.headless = headless
        self.user_agent = user_agent
        self._playwright = None
        self._browser = None
        self._page = None
        self._url = ""

    def start(self) -> "PlaywrightSession":
        self._playwright = sync_playwright().start()
        self._browser = self._playwright.chromium.launch(headless=self.headless)
        self._page = self._browser.new_page(user_agent=self.user_agent)
        return self

    def _require_page(self):
        if self._page is None:
            raise RenderError(self._url or "<none>", "session not started")
        return self._page

    def goto(self, url: str, timeout_ms: int) -> None:
        page = self._require_page()
        self._url = url
        try:
            page.goto(url, wait_until="networkidle", timeout=timeout_ms)
        except PlaywrightError as e:
            raise RenderError(url, str(e)) from e

    def wait_for_selector(self, selector: str, timeout_ms: int) -> None:
        page = self._require_page()
        try:
            page.wait_for_selector(selector, timeout=timeout_ms)
        except PlaywrightError as e:
            raise RenderError(self._url, f"selector {selector} not found: {e}") from e

    def content(self) -> str:
        page = self._require_page()
        try:
            return page.content()
        except PlaywrightError as e:
            raise RenderError(self._url, str(e)) from e

    def inner_text(self) -> str:
        page = self._require_page()
        try:
            return page.inner_text("body")
        except PlaywrightError as e:
            raise RenderError(self._url, str(e)) from e

    def close(self) -> None:
        if self._browser is not None:
            self._browser.close()
            self._browser = None
            self._page = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None


# ---------------------------------------------------------------------------
# requests (static HTML)
# ---------------------------------------------------------------------------


class StaticSession:
    """Same interface as PlaywrightSession, without running any JavaScript."""

    def __init__(self, user_agent: str = settings.USER_AGENT, http: Optional[requests.Session] = None):
        self.http = http if http is not None else requests.Session()
        self.http.headers.update({"User-Agent": user_agent})
        self._url = ""
        self._html = ""

    def start(self) -> "StaticSession":
        return self

    def goto(self, url: str, timeout_ms: int) -> None:
        self._url = url
        try:
            resp = self.http.get(url, timeout=timeout_ms / 1000)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise RenderError(url, str(e)) from e
        self._html = resp.text

    def wait_for_selector(self, selector: str, timeout_ms: int) -> None:
        # static HTML: the element is either there or it never will be
        soup = BeautifulSoup(self._html, "html.parser")
        if soup.select_one(selector) is None:
            raise RenderError(self._url, f"selector {selector} not found")

    def content(self) -> str:
        return self._html

    def inner_text(self) -> str:
        soup = BeautifulSoup(self._html, "html.parser")
        body = soup.body if soup.body is not None else soup
        return body.get_text(" ")

    def close(self) -> None:
        self.http.close()


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

RENDERERS = ("playwright", "static")


@contextmanager
def open_session(kind: str = settings.RENDERER, **options: Any) -> Iterator[PageSession]:
    """
    Open a session and release it on every exit path.

    Extra keyword arguments go to the session constructor.
    """
    if kind == "playwright":
        session = PlaywrightSession(**options)
    elif kind == "static":
        session = StaticSession(**options)
    else:
        raise ValueError(f"Unknown renderer: {kind!r} (expected one of {', '.join(RENDERERS)})")

    logger.debug("Opening %s session", kind)
    try:
        session.start()
        yield session
    finally:
        session.close()
        logger.debug("Closed %s session", kind)

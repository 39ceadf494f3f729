"""Playwright helpers for rendering StudyGo list pages.

StudyGo fills its word lists in client-side, so the raw HTML served for a
list URL contains no cards. Each page is loaded in a real Chromium instance,
we wait for the first pair row to appear, give the remaining rows a moment to
render, and hand the resulting markup to :mod:`parser`.

One browser is shared by the whole run (see :func:`open_browser`); every URL
gets its own ``BrowserContext`` which is closed again before returning.
"""
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator, Optional

from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error as PWError,
    Page,
    TimeoutError as PWTimeout,
    sync_playwright,
)

from . import config
from .error_codes import ErrorCode
from .logging_utils import _scraper_event
from .parser import Flashcard, extract_flashcards
from .selectors_studygo import StudyGoSelectors, selectors_from_config
from .utils import log_line, sanitize_filename


class SessionInitError(RuntimeError):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.error_code = ErrorCode.SESSION_INIT


class ExtractionError(Exception):
    """A single URL could not be rendered; no cards were produced for it."""

    error_code = ErrorCode.INTERNAL

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class NavigationError(ExtractionError):
    error_code = ErrorCode.NAVIGATION


class ReadyTimeoutError(ExtractionError):
    error_code = ErrorCode.TIMEOUT


class RetrievalError(ExtractionError):
    error_code = ErrorCode.RETRIEVAL


@contextmanager
def open_browser(*, headless: Optional[bool] = None) -> Iterator[Browser]:
    """Start Playwright and yield one Chromium browser for the whole run.

    Raises:
        SessionInitError: Playwright or Chromium could not be started.
    """

    headless = config.HEADLESS if headless is None else headless
    try:
        pw = sync_playwright().start()
    except Exception as exc:  # noqa: BLE001
        _scraper_event("error", phase="session", step="playwright_start", error=str(exc))
        raise SessionInitError(f"Could not start Playwright: {exc}") from exc

    try:
        browser = pw.chromium.launch(headless=headless, args=config.BROWSER_ARGS)
    except Exception as exc:  # noqa: BLE001
        pw.stop()
        _scraper_event("error", phase="session", step="chromium_launch", error=str(exc))
        raise SessionInitError(f"Could not launch Chromium: {exc}") from exc

    _scraper_event("session", step="started", headless=headless)
    try:
        yield browser
    finally:
        try:
            browser.close()
        except PWError as exc:
            log_line(f"[SCRAPER][WARN][SESSION] browser.close() failed: {exc}")
        pw.stop()
        _scraper_event("session", step="stopped")


def _new_page(context: BrowserContext, url: str) -> Page:
    try:
        return context.new_page()
    except PWError as exc:
        raise RetrievalError(url, f"Could not open a page: {exc}") from exc


def _goto(page: Page, url: str) -> None:
    try:
        _scraper_event("nav", step="goto", url=url)
        page.goto(
            url,
            wait_until="domcontentloaded",
            timeout=config.PLAYWRIGHT_NAV_TIMEOUT_SECONDS * 1000,
        )
    except PWTimeout as exc:
        raise NavigationError(url, f"Navigation to {url} timed out: {exc}") from exc
    except PWError as exc:
        raise NavigationError(url, f"Navigation to {url} failed: {exc}") from exc


def _wait_for_pairs(page: Page, url: str, selectors: StudyGoSelectors) -> None:
    try:
        page.wait_for_selector(
            selectors.pair_selector,
            timeout=config.PLAYWRIGHT_SELECTOR_TIMEOUT_SECONDS * 1000,
        )
    except PWTimeout as exc:
        raise ReadyTimeoutError(
            url,
            f"No {selectors.pair_selector!r} element appeared within "
            f"{config.PLAYWRIGHT_SELECTOR_TIMEOUT_SECONDS}s",
        ) from exc
    except PWError as exc:
        raise NavigationError(url, f"Page closed while waiting for pairs: {exc}") from exc


def _poll_until_stable(page: Page, selectors: StudyGoSelectors) -> int:
    """Poll the pair count until two consecutive reads agree or time runs out."""

    deadline = time.monotonic() + config.SETTLE_SECONDS
    last = page.locator(selectors.pair_selector).count()
    while time.monotonic() < deadline:
        time.sleep(config.SETTLE_POLL_INTERVAL_SECONDS)
        current = page.locator(selectors.pair_selector).count()
        if current == last:
            break
        last = current
    return last


def _settle(page: Page, url: str, selectors: StudyGoSelectors) -> None:
    if not config.SETTLE_POLL:
        time.sleep(config.SETTLE_SECONDS)
        return
    try:
        count = _poll_until_stable(page, selectors)
    except PWError as exc:
        raise RetrievalError(url, f"Page closed while settling: {exc}") from exc
    _scraper_event("settle", url=url, pairs=count)


def _page_content(page: Page, url: str) -> str:
    try:
        return page.content()
    except PWError as exc:
        raise RetrievalError(url, f"Could not read rendered page: {exc}") from exc


def _record_fixture(url: str, html: str) -> None:
    path = config.FIXTURES_DIR / f"{sanitize_filename(url)}.html"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
    except OSError as exc:
        log_line(f"[SCRAPER][WARN][FIXTURE] Could not save {path}: {exc}")
        return
    _scraper_event("fixture", url=url, path=str(path))


def fetch_rendered_html(
    browser: Browser,
    url: str,
    selectors: Optional[StudyGoSelectors] = None,
) -> str:
    """Render ``url`` in a fresh browser context and return the page markup.

    Raises:
        NavigationError: The page could not be loaded.
        ReadyTimeoutError: No pair row appeared in time.
        RetrievalError: No context or page could be opened, or the rendered
            markup could not be read.
    """

    selectors = selectors or selectors_from_config()
    try:
        context = browser.new_context(user_agent=config.UA, locale="nl-NL")
    except PWError as exc:
        raise RetrievalError(url, f"Could not open a browser context: {exc}") from exc

    try:
        page = _new_page(context, url)
        _goto(page, url)
        _wait_for_pairs(page, url, selectors)
        _settle(page, url, selectors)
        html = _page_content(page, url)
    finally:
        try:
            context.close()
        except PWError as exc:
            log_line(f"[SCRAPER][WARN][NAV] context.close() failed for {url}: {exc}")

    if config.RECORD_HTML_FIXTURES:
        _record_fixture(url, html)
    return html


def scrape_flashcards(
    browser: Browser,
    url: str,
    selectors: Optional[StudyGoSelectors] = None,
) -> list[Flashcard]:
    """Return every card on the StudyGo list at ``url``.

    Either all cards of the page are returned or an :class:`ExtractionError`
    is raised; there are no partial results.
    """

    selectors = selectors or selectors_from_config()
    html = fetch_rendered_html(browser, url, selectors)
    return extract_flashcards(html, selectors)


__all__ = [
    "ExtractionError",
    "NavigationError",
    "ReadyTimeoutError",
    "RetrievalError",
    "SessionInitError",
    "fetch_rendered_html",
    "open_browser",
    "scrape_flashcards",
]

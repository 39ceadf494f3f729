"""Batch export of StudyGo word lists to an Anki import file.

Workflow:

- Read the URL list (``urls.txt`` by default; ``#`` lines are comments).
- Start one headless Chromium through Playwright.
- For every URL, in order, render the list page and extract its cards. A
  failing URL is logged and counted; the batch carries on.
- Write all cards to ``anki.csv`` (``front,back`` per line, no header).

Run it with ``python main.py`` or ``python -m studygo_anki.scraper.run``.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from playwright.sync_api import Browser

from . import config
from .anki_csv import ExportError, write_cards
from .config_validation import validate_runtime_config
from .error_codes import ErrorCode
from .logging_utils import _scraper_event
from .parser import Flashcard
from .playwright_session import (
    ExtractionError,
    SessionInitError,
    open_browser,
    scrape_flashcards,
)
from .selectors_studygo import StudyGoSelectors, selectors_from_config
from .url_source import load_urls
from .utils import get_current_log_path, log_line, setup_run_logger

Scraper = Callable[[Browser, str, StudyGoSelectors], List[Flashcard]]

BANNER = "StudyGo nr. Anki!"


@dataclass
class UrlFailure:
    url: str
    error_code: str
    message: str


@dataclass
class BatchResult:
    cards: List[Flashcard] = field(default_factory=list)
    succeeded: int = 0
    failed: int = 0
    failures: List[UrlFailure] = field(default_factory=list)


def run_batch(
    urls: Sequence[str],
    browser: Browser,
    *,
    selectors: Optional[StudyGoSelectors] = None,
    scrape: Optional[Scraper] = None,
) -> BatchResult:
    """Scrape ``urls`` one after another with the shared ``browser``.

    Cards keep URL order, then page order. An exception for one URL is
    recorded in the result and never stops the remaining URLs.
    """

    selectors = selectors or selectors_from_config()
    scrape = scrape or scrape_flashcards
    result = BatchResult()
    total = len(urls)

    for index, url in enumerate(urls, start=1):
        log_line(f"[{index}/{total}] Scraping: {url}")
        try:
            cards = scrape(browser, url, selectors)
        except ExtractionError as exc:
            error_code = exc.error_code
            message = str(exc)
        except Exception as exc:  # noqa: BLE001
            error_code = ErrorCode.INTERNAL
            message = f"{type(exc).__name__}: {exc}"
        else:
            result.cards.extend(cards)
            result.succeeded += 1
            log_line(f"Cards found: {len(cards)}")
            _scraper_event("url", index=index, url=url, status="ok", cards=len(cards))
            continue

        result.failed += 1
        result.failures.append(UrlFailure(url=url, error_code=error_code, message=message))
        log_line(f"[SCRAPER][ERROR] {url}: {message}")
        _scraper_event(
            "url",
            index=index,
            url=url,
            status="failed",
            error_code=error_code,
        )

    return result


def _log_summary(result: BatchResult, output_file: Path) -> None:
    log_line(f"{output_file} has been created!")
    log_line(f"  Flashcards: {len(result.cards)}")
    log_line(f"  Succeeded: {result.succeeded}")
    if result.failed > 0:
        log_line(f"  Failed: {result.failed}")
    log_line(f"Import {output_file} into Anki to start studying.")
    log_line(f"Run log: {get_current_log_path()}")


def run_export(
    urls_file: Optional[Path] = None,
    output_file: Optional[Path] = None,
    *,
    headless: Optional[bool] = None,
) -> Optional[BatchResult]:
    """Run a full export; return ``None`` when there was nothing to scrape.

    Raises:
        SessionInitError: The browser could not be started.
        ExportError: The output file could not be written.
    """

    urls_file = Path(urls_file) if urls_file is not None else config.URLS_FILE
    output_file = Path(output_file) if output_file is not None else config.OUTPUT_FILE

    log_line(BANNER)
    log_line("=" * 64)

    urls = load_urls(urls_file)
    if not urls:
        log_line("No URLs found.")
        return None

    log_line(f"URLs to process: {len(urls)}")
    log_line("Starting headless browser")

    selectors = selectors_from_config()
    with open_browser(headless=headless) as browser:
        result = run_batch(urls, browser, selectors=selectors)

    _scraper_event(
        "summary",
        urls=len(urls),
        cards=len(result.cards),
        succeeded=result.succeeded,
        failed=result.failed,
    )

    if not result.cards:
        log_line("No flashcards to export.")
        return result

    write_cards(result.cards, output_file)
    _log_summary(result, output_file)
    return result


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export StudyGo word lists to an Anki import file.",
    )
    parser.add_argument(
        "--urls",
        type=Path,
        default=None,
        help=f"File with one StudyGo list URL per line (default: {config.URLS_FILE}).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help=f"Destination file (default: {config.OUTPUT_FILE}).",
    )
    parser.add_argument(
        "--headful",
        action="store_true",
        help="Show the browser window instead of running headless.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the exporter CLI."""

    args = _build_parser().parse_args(list(argv) if argv is not None else None)

    setup_run_logger()
    try:
        validate_runtime_config("cli")
    except ValueError:
        return 2

    try:
        run_export(args.urls, args.output, headless=False if args.headful else None)
    except SessionInitError as exc:
        log_line(f"[SCRAPER][ERROR][SESSION] {exc}")
        return 1
    except ExportError as exc:
        log_line(f"[SCRAPER][ERROR][EXPORT] {exc}")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())

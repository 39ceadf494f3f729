"""Configuration constants for the StudyGo to Anki exporter."""
from __future__ import annotations

import os
from pathlib import Path


def _env_flag(env_var: str, default: str) -> bool:
    return os.getenv(env_var, default).strip().lower() not in {"0", "false", "no", ""}


def _parse_timeout_seconds(env_var: str, default: int, *, minimum: int = 1) -> int:
    """Parse a timeout value in seconds from the environment with bounds."""

    try:
        value = int(os.getenv(env_var, str(default)))
    except ValueError:
        return default
    return max(minimum, value)


def _parse_float_seconds(env_var: str, default: float) -> float:
    """Parse a duration in seconds from the environment, keeping the sign.

    Malformed values fall back to ``default``; range checks are left to
    ``config_validation``.
    """

    try:
        return float(os.getenv(env_var, str(default)))
    except ValueError:
        return default


DATA_DIR: Path = Path(os.getenv("STUDYGO_DATA_DIR", "."))
URLS_FILE: Path = Path(os.getenv("STUDYGO_URLS_FILE", str(DATA_DIR / "urls.txt")))
OUTPUT_FILE: Path = Path(os.getenv("STUDYGO_OUTPUT_FILE", str(DATA_DIR / "anki.csv")))
LOG_DIR: Path = Path(os.getenv("STUDYGO_LOG_DIR", str(DATA_DIR / "logs")))
LOG_FILE: Path = LOG_DIR / "latest.log"
# Rendered pages are saved here when RECORD_HTML_FIXTURES is enabled so the
# replay harness can re-run extraction offline.
FIXTURES_DIR: Path = Path(os.getenv("STUDYGO_FIXTURES_DIR", str(DATA_DIR / "fixtures")))

PROJECT_URL: str = "https://github.com/Servus-Altissimi/StudyGo-nr-Anki"

# StudyGo DOM contract. The site owns these class names and may change them
# at any time, so they are overridable without a code change.
PAIR_SELECTOR: str = os.getenv("STUDYGO_PAIR_SELECTOR", ".pair-list-item")
TEXT_SELECTOR: str = os.getenv(
    "STUDYGO_TEXT_SELECTOR", ".info.notranslate span.show-on-render"
)

# BeautifulSoup tree builder used for the rendered markup.
HTML_PARSER: str = os.getenv("STUDYGO_HTML_PARSER", "html5lib").strip() or "html5lib"
SUPPORTED_HTML_PARSERS: tuple[str, ...] = ("html5lib", "html.parser")

HEADLESS: bool = _env_flag("STUDYGO_HEADLESS", "true")

# Playwright timeouts (seconds)
# Navigation timeout for page.goto calls.
PLAYWRIGHT_NAV_TIMEOUT_SECONDS: int = _parse_timeout_seconds(
    "STUDYGO_NAV_TIMEOUT_SECONDS", 30
)
# Wait for the first pair list item to appear.
PLAYWRIGHT_SELECTOR_TIMEOUT_SECONDS: int = _parse_timeout_seconds(
    "STUDYGO_SELECTOR_TIMEOUT_SECONDS", 30
)

# Grace period after the pair list shows up, for the cards still being
# rendered client-side.
SETTLE_SECONDS: float = _parse_float_seconds("STUDYGO_SETTLE_SECONDS", 2.0)
# Replace the fixed settle sleep with polling until the pair count is stable.
SETTLE_POLL: bool = _env_flag("STUDYGO_SETTLE_POLL", "false")
SETTLE_POLL_INTERVAL_SECONDS: float = _parse_float_seconds(
    "STUDYGO_SETTLE_POLL_INTERVAL_SECONDS", 0.25
)

RECORD_HTML_FIXTURES: bool = _env_flag("STUDYGO_RECORD_HTML_FIXTURES", "false")

UA: str = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/142.0.0.0 Safari/537.36"
)

BROWSER_ARGS: list[str] = [
    "--disable-blink-features=AutomationControlled",
    "--no-sandbox",
    "--disable-dev-shm-usage",
]

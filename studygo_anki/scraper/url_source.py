"""Loading of the list of StudyGo pages to export."""
from __future__ import annotations

from pathlib import Path

from . import config
from .error_codes import ErrorCode
from .logging_utils import _scraper_event
from .utils import log_line


class MissingSourceError(FileNotFoundError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"URL list not found: {path}")
        self.error_code = ErrorCode.MISSING_SOURCE
        self.path = path


def read_urls(path: Path) -> list[str]:
    """Return the URLs listed in ``path`` in file order.

    Lines are stripped; blank lines and lines starting with ``#`` are skipped.
    Nothing else is validated, so duplicates are kept.

    Raises:
        MissingSourceError: ``path`` does not exist.
    """

    path = Path(path)
    if not path.is_file():
        raise MissingSourceError(path)

    urls: list[str] = []
    with path.open("r", encoding="utf-8-sig") as handle:
        for raw in handle:
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            urls.append(line)
    return urls


def load_urls(path: Path | None = None) -> list[str]:
    """Like :func:`read_urls` but a missing file yields an empty list."""

    path = Path(path) if path is not None else config.URLS_FILE
    try:
        urls = read_urls(path)
    except MissingSourceError as exc:
        _scraper_event("error", phase="source", error=exc.error_code, path=str(path))
        log_line(f"No URL list found at {path}.")
        log_line(
            "Create it with one StudyGo list URL per line (lines starting with '#' "
            f"are ignored). More information: {config.PROJECT_URL}"
        )
        return []

    _scraper_event("state", phase="source", path=str(path), urls=len(urls))
    return urls


__all__ = ["MissingSourceError", "read_urls", "load_urls"]

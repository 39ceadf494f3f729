"""Writing cards as a two-column text file for Anki's importer."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .error_codes import ErrorCode
from .logging_utils import _scraper_event
from .parser import Flashcard

_NEEDS_QUOTES = (",", '"', "\n")


class ExportError(OSError):
    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.error_code = ErrorCode.IO
        self.path = path


def escape_field(text: str) -> str:
    """Quote ``text`` only if it contains a comma, a double quote or a newline.

    Inside quotes, double quotes are doubled. This is the subset of CSV quoting
    that Anki's importer expects; other fields are written as-is.
    """

    if any(ch in text for ch in _NEEDS_QUOTES):
        return '"' + text.replace('"', '""') + '"'
    return text


def format_record(card: Flashcard) -> str:
    return f"{escape_field(card.front)},{escape_field(card.back)}"


def write_cards(cards: Iterable[Flashcard], path: Path) -> int:
    """Write ``cards`` to ``path``, one ``front,back`` line each, no header.

    Returns the number of records written.

    Raises:
        ExportError: ``path`` cannot be created or written.
    """

    path = Path(path)
    count = 0
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps "\n" as the record terminator on every platform.
        with path.open("w", encoding="utf-8", newline="") as handle:
            for card in cards:
                handle.write(format_record(card) + "\n")
                count += 1
    except OSError as exc:
        _scraper_event("error", phase="export", error=ErrorCode.IO, path=str(path), detail=str(exc))
        raise ExportError(path, f"Could not write {path}: {exc}") from exc

    _scraper_event("export", path=str(path), records=count)
    return count


__all__ = ["ExportError", "escape_field", "format_record", "write_cards"]

"""Offline replay of saved StudyGo pages.

Pages captured with ``STUDYGO_RECORD_HTML_FIXTURES=1`` (or saved by hand from
the browser) are run through the same extraction as a live scrape, without
Playwright. Useful to check the selectors after StudyGo changes its markup.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import config
from .anki_csv import write_cards
from .config_validation import validate_runtime_config
from .logging_utils import _scraper_event
from .parser import Flashcard, extract_flashcards
from .selectors_studygo import StudyGoSelectors, selectors_from_config
from .utils import log_line


@dataclass
class ReplayConfig:
    fixtures_path: Path
    output_file: Optional[Path] = None
    selectors: Optional[StudyGoSelectors] = None


def list_fixture_files(fixtures_path: Path) -> List[Path]:
    fixtures_path = Path(fixtures_path)
    if fixtures_path.is_dir():
        return sorted(fixtures_path.glob("*.html"))
    if fixtures_path.is_file():
        return [fixtures_path]
    raise FileNotFoundError(f"No fixtures at {fixtures_path}")


def run_replay(config_obj: ReplayConfig) -> Dict[str, Any]:
    validate_runtime_config("replay")
    selectors = config_obj.selectors or selectors_from_config()
    fixtures = list_fixture_files(config_obj.fixtures_path)

    _scraper_event("replay", phase="start", fixtures=str(config_obj.fixtures_path), files=len(fixtures))

    cards: List[Flashcard] = []
    empty: List[str] = []
    for path in fixtures:
        found = extract_flashcards(path.read_text(encoding="utf-8"), selectors)
        log_line(f"[REPLAY] {path.name}: {len(found)} cards")
        if not found:
            empty.append(path.name)
        cards.extend(found)

    if config_obj.output_file is not None and cards:
        write_cards(cards, config_obj.output_file)

    summary: Dict[str, Any] = {
        "fixtures": len(fixtures),
        "cards": len(cards),
        "empty": empty,
    }
    _scraper_event("replay", phase="end", **summary)
    return summary


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Replay saved StudyGo pages offline.")
    parser.add_argument(
        "fixtures",
        nargs="?",
        default=str(config.FIXTURES_DIR),
        help="A saved .html page or a directory of them.",
    )
    parser.add_argument("--output", default=None, help="Write the replayed cards to this file.")
    args = parser.parse_args()

    cfg = ReplayConfig(
        fixtures_path=Path(args.fixtures),
        output_file=Path(args.output) if args.output else None,
    )
    run_replay(cfg)

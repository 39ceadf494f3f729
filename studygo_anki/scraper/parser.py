"""HTML parsing utilities for rendered StudyGo list pages."""
from __future__ import annotations

from dataclasses import dataclass

from bs4 import BeautifulSoup

from . import config
from .logging_utils import _scraper_event
from .selectors_studygo import StudyGoSelectors, selectors_from_config


@dataclass(frozen=True)
class Flashcard:
    front: str
    back: str


def _node_text(node) -> str:
    return node.get_text().strip()


def extract_flashcards(
    html: str,
    selectors: StudyGoSelectors | None = None,
    *,
    parser: str | None = None,
) -> list[Flashcard]:
    """Extract front/back pairs from rendered page markup.

    Args:
        html: Full document markup as returned by the browser.
        selectors: Pair and text selectors; defaults to the configured ones.
        parser: BeautifulSoup tree builder; defaults to ``config.HTML_PARSER``.

    Returns:
        Cards in document order. Pair rows with fewer than two text nodes or
        with an empty side are left out; list pages contain such rows as
        layout and they are not an error.
    """

    selectors = selectors or selectors_from_config()
    soup = BeautifulSoup(html, parser or config.HTML_PARSER)

    cards: list[Flashcard] = []
    skipped = 0
    pairs = soup.select(selectors.pair_selector)
    for pair in pairs:
        # Scoped to this row; only the first two matches are used.
        infos = pair.select(selectors.text_selector, limit=2)
        if len(infos) < 2:
            skipped += 1
            continue

        front = _node_text(infos[0])
        back = _node_text(infos[1])
        if not front or not back:
            skipped += 1
            continue

        cards.append(Flashcard(front=front, back=back))

    _scraper_event(
        "parse",
        pairs=len(pairs),
        cards=len(cards),
        skipped=skipped,
    )
    return cards


__all__ = ["Flashcard", "extract_flashcards"]

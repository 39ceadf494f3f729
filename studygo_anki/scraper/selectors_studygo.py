from __future__ import annotations

"""Selectors for the StudyGo list page."""

from dataclasses import dataclass

from . import config


@dataclass(frozen=True)
class StudyGoSelectors:
    """CSS selectors describing where card pairs live on a rendered list.

    Each ``pair_selector`` match is one term/translation row. The first two
    ``text_selector`` matches inside that row are the front and the back; any
    further matches (pronunciation hints and the like) are ignored.
    """

    pair_selector: str
    text_selector: str


def selectors_from_config() -> StudyGoSelectors:
    """Build the selector set from the current configuration values."""

    return StudyGoSelectors(
        pair_selector=config.PAIR_SELECTOR,
        text_selector=config.TEXT_SELECTOR,
    )


__all__ = [
    "StudyGoSelectors",
    "selectors_from_config",
]

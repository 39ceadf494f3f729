from __future__ import annotations

from typing import Any

from .utils import log_line


def _scraper_event(label: str, **fields: Any) -> None:
    """Log ``[SCRAPER][LABEL] key=value, ...`` with the fields sorted by key."""

    try:
        payload = ", ".join(f"{k}={v!r}" for k, v in sorted(fields.items()))
        log_line(f"[SCRAPER][{label.upper()}] {payload}")
    except Exception:  # noqa: BLE001
        # A broken log handler must not fail the export.
        return


__all__ = ["_scraper_event"]

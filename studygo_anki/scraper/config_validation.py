from __future__ import annotations

from typing import Literal

from . import config
from .logging_utils import _scraper_event
from .utils import log_line

Entrypoint = Literal["cli", "replay", "tests"]


def _raise_config_error(message: str, *, entrypoint: Entrypoint, error: str) -> None:
    _scraper_event(
        "error",
        phase="config",
        context="runtime_validation",
        error=error,
        entrypoint=entrypoint,
    )
    log_line(f"[CONFIG] {message} (entrypoint={entrypoint})")
    raise ValueError(message)


def validate_runtime_config(entrypoint: Entrypoint) -> None:
    """Validate runtime configuration for the given entrypoint.

    Raises ``ValueError`` when a blocking misconfiguration is detected.
    Non-fatal adjustments (e.g., an unknown HTML parser) are logged but do not
    raise.
    """

    for field_name, value in (
        ("PAIR_SELECTOR", config.PAIR_SELECTOR),
        ("TEXT_SELECTOR", config.TEXT_SELECTOR),
    ):
        if not str(value or "").strip():
            _raise_config_error(
                f"{field_name} must not be empty.",
                entrypoint=entrypoint,
                error="empty_selector",
            )

    if config.HTML_PARSER not in config.SUPPORTED_HTML_PARSERS:
        adjusted = "html5lib"
        _scraper_event(
            "state",
            phase="config",
            context="runtime_validation",
            kind="config_adjustment",
            field="HTML_PARSER",
            value=config.HTML_PARSER,
            adjusted=adjusted,
            entrypoint=entrypoint,
        )
        log_line(
            f"[CONFIG] Unsupported HTML_PARSER {config.HTML_PARSER!r}; falling back to {adjusted}."
        )
        config.HTML_PARSER = adjusted

    # Browser settings only matter when a live browser is used.
    if entrypoint == "replay":
        return

    timeout_fields = [
        ("PLAYWRIGHT_NAV_TIMEOUT_SECONDS", config.PLAYWRIGHT_NAV_TIMEOUT_SECONDS),
        ("PLAYWRIGHT_SELECTOR_TIMEOUT_SECONDS", config.PLAYWRIGHT_SELECTOR_TIMEOUT_SECONDS),
    ]

    for field_name, value in timeout_fields:
        if value <= 0:
            _raise_config_error(
                f"{field_name} must be greater than zero.",
                entrypoint=entrypoint,
                error="invalid_timeout",
            )

    if config.SETTLE_SECONDS < 0:
        _raise_config_error(
            "SETTLE_SECONDS must be non-negative.",
            entrypoint=entrypoint,
            error="settle_seconds_invalid",
        )

    if config.SETTLE_POLL and config.SETTLE_POLL_INTERVAL_SECONDS <= 0:
        _raise_config_error(
            "SETTLE_POLL_INTERVAL_SECONDS must be greater than zero when SETTLE_POLL is enabled.",
            entrypoint=entrypoint,
            error="settle_poll_interval_invalid",
        )


__all__ = ["validate_runtime_config", "Entrypoint"]

from __future__ import annotations

"""Centralised error code taxonomy for export failures.

Codes appear in structured log lines and in the per-URL failure list of a
batch summary, so that a failed URL can be explained after the run.
"""


class ErrorCode:
    MISSING_SOURCE = "missing_source"
    NAVIGATION = "navigation_error"
    TIMEOUT = "ready_timeout"
    RETRIEVAL = "retrieval_error"
    IO = "io_error"
    SESSION_INIT = "session_init_error"
    INTERNAL = "internal_error"


__all__ = ["ErrorCode"]

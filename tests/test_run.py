from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path

import pytest

from studygo_anki.scraper import run
from studygo_anki.scraper.anki_csv import ExportError
from studygo_anki.scraper.error_codes import ErrorCode
from studygo_anki.scraper.parser import Flashcard
from studygo_anki.scraper.playwright_session import (
    ReadyTimeoutError,
    SessionInitError,
)

SET1 = "https://a.example/set1"
SET2 = "https://a.example/set2"
SET3 = "https://a.example/set3"


def _fake_scrape(results: dict):
    calls: list[str] = []

    def _scrape(browser, url, selectors):
        calls.append(url)
        outcome = results[url]
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)

    _scrape.calls = calls
    return _scrape


@pytest.fixture
def fake_browser(monkeypatch: pytest.MonkeyPatch) -> dict:
    state = {"opened": 0, "closed": 0, "headless": []}

    @contextmanager
    def _open_browser(*, headless=None):
        state["opened"] += 1
        state["headless"].append(headless)
        try:
            yield object()
        finally:
            state["closed"] += 1

    monkeypatch.setattr(run, "open_browser", _open_browser)
    return state


def test_run_batch_isolates_failures() -> None:
    scrape = _fake_scrape(
        {
            SET1: [Flashcard("a", "1"), Flashcard("b", "2")],
            SET2: ReadyTimeoutError(SET2, "no pairs"),
            SET3: [Flashcard("c", "3")],
        }
    )

    result = run.run_batch([SET1, SET2, SET3], object(), scrape=scrape)

    assert scrape.calls == [SET1, SET2, SET3]
    assert result.cards == [Flashcard("a", "1"), Flashcard("b", "2"), Flashcard("c", "3")]
    assert result.succeeded == 2
    assert result.failed == 1
    assert result.failures == [run.UrlFailure(SET2, ErrorCode.TIMEOUT, "no pairs")]


def test_run_batch_unexpected_exception_is_internal() -> None:
    scrape = _fake_scrape({SET1: KeyError("boom"), SET2: [Flashcard("x", "y")]})

    result = run.run_batch([SET1, SET2], object(), scrape=scrape)

    assert result.failed == 1
    assert result.failures[0].error_code == ErrorCode.INTERNAL
    assert result.failures[0].message.startswith("KeyError")
    assert result.cards == [Flashcard("x", "y")]


def test_run_batch_scrapes_duplicates_again() -> None:
    scrape = _fake_scrape({SET1: [Flashcard("a", "1")]})

    result = run.run_batch([SET1, SET1], object(), scrape=scrape)

    assert scrape.calls == [SET1, SET1]
    assert result.cards == [Flashcard("a", "1"), Flashcard("a", "1")]
    assert result.succeeded == 2


def test_run_batch_logs_progress(monkeypatch: pytest.MonkeyPatch) -> None:
    lines: list[str] = []
    monkeypatch.setattr(run, "log_line", lambda msg: lines.append(msg))
    scrape = _fake_scrape({SET1: [Flashcard("a", "1")], SET2: ReadyTimeoutError(SET2, "late")})

    run.run_batch([SET1, SET2], object(), scrape=scrape)

    assert lines[0] == f"[1/2] Scraping: {SET1}"
    assert "Cards found: 1" in lines
    assert f"[2/2] Scraping: {SET2}" in lines
    assert any(SET2 in line and "late" in line for line in lines[-2:])


def test_run_export_end_to_end(
    monkeypatch: pytest.MonkeyPatch, data_dir: Path, fake_browser: dict
) -> None:
    urls_file = data_dir / "urls.txt"
    urls_file.write_text(f"{SET1}\n# skip\n{SET2}\n", encoding="utf-8")
    scrape = _fake_scrape(
        {
            SET1: [Flashcard("Hello, World", "Bonjour")],
            SET2: ReadyTimeoutError(SET2, "no pairs"),
        }
    )
    monkeypatch.setattr(run, "scrape_flashcards", scrape)

    result = run.run_export(urls_file, data_dir / "anki.csv")

    assert (data_dir / "anki.csv").read_bytes() == b'"Hello, World",Bonjour\n'
    assert len(result.cards) == 1
    assert result.succeeded == 1
    assert result.failed == 1
    assert fake_browser["opened"] == fake_browser["closed"] == 1


def test_run_export_missing_url_file_is_soft(data_dir: Path, fake_browser: dict) -> None:
    result = run.run_export(data_dir / "missing.txt", data_dir / "anki.csv")

    assert result is None
    assert not (data_dir / "anki.csv").exists()
    assert fake_browser["opened"] == 0


def test_run_export_no_cards_writes_nothing(
    monkeypatch: pytest.MonkeyPatch, data_dir: Path, fake_browser: dict
) -> None:
    urls_file = data_dir / "urls.txt"
    urls_file.write_text(f"{SET1}\n", encoding="utf-8")
    scrape = _fake_scrape({SET1: []})
    monkeypatch.setattr(run, "scrape_flashcards", scrape)

    result = run.run_export(urls_file, data_dir / "anki.csv")

    assert result is not None
    assert result.succeeded == 1
    assert not (data_dir / "anki.csv").exists()


def test_main_without_arguments_uses_config_paths(
    monkeypatch: pytest.MonkeyPatch, data_dir: Path, fake_browser: dict
) -> None:
    (data_dir / "urls.txt").write_text(f"{SET1}\n", encoding="utf-8")
    scrape = _fake_scrape({SET1: [Flashcard("huis", "house")]})
    monkeypatch.setattr(run, "scrape_flashcards", scrape)

    assert run.main([]) == 0
    assert (data_dir / "anki.csv").read_text(encoding="utf-8") == "huis,house\n"
    assert fake_browser["headless"] == [None]
    assert list((data_dir / "logs").glob("export_*.log"))


def test_main_headful_flag(data_dir: Path, fake_browser: dict) -> None:
    (data_dir / "urls.txt").write_text("", encoding="utf-8")

    assert run.main(["--headful"]) == 0
    # Empty URL list: the browser is never started.
    assert fake_browser["opened"] == 0


def test_main_session_init_failure(monkeypatch: pytest.MonkeyPatch, data_dir: Path) -> None:
    (data_dir / "urls.txt").write_text(f"{SET1}\n", encoding="utf-8")

    @contextmanager
    def _broken_browser(*, headless=None):
        raise SessionInitError("no chromium")
        yield  # pragma: no cover

    monkeypatch.setattr(run, "open_browser", _broken_browser)

    assert run.main([]) == 1


def test_main_export_failure(monkeypatch: pytest.MonkeyPatch, data_dir: Path, fake_browser: dict) -> None:
    (data_dir / "urls.txt").write_text(f"{SET1}\n", encoding="utf-8")
    scrape = _fake_scrape({SET1: [Flashcard("a", "b")]})
    monkeypatch.setattr(run, "scrape_flashcards", scrape)

    def _fail(cards, path):
        raise ExportError(path, "read-only")

    monkeypatch.setattr(run, "write_cards", _fail)

    assert run.main(["--output", str(data_dir / "out.csv")]) == 1


def test_main_invalid_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(run.config, "PAIR_SELECTOR", "")

    assert run.main([]) == 2


def test_run_export_summary_names_log_file(
    monkeypatch: pytest.MonkeyPatch, data_dir: Path, fake_browser: dict
) -> None:
    urls_file = data_dir / "urls.txt"
    urls_file.write_text(f"{SET1}\n", encoding="utf-8")
    monkeypatch.setattr(run, "scrape_flashcards", _fake_scrape({SET1: [Flashcard("a", "b")]}))
    lines: list[str] = []
    monkeypatch.setattr(run, "log_line", lambda msg: lines.append(msg))

    run.run_export(urls_file, data_dir / "anki.csv")

    assert lines[-1] == f"Run log: {data_dir / 'logs' / 'latest.log'}"

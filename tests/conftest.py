from pathlib import Path

import pytest

from studygo_anki.scraper import config, utils


def _configure_temp_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    data_dir = tmp_path / "data"
    data_dir.mkdir(parents=True, exist_ok=True)

    monkeypatch.setattr(config, "DATA_DIR", data_dir)
    monkeypatch.setattr(config, "URLS_FILE", data_dir / "urls.txt")
    monkeypatch.setattr(config, "OUTPUT_FILE", data_dir / "anki.csv")
    monkeypatch.setattr(config, "LOG_DIR", data_dir / "logs")
    monkeypatch.setattr(config, "LOG_FILE", data_dir / "logs" / "latest.log")
    monkeypatch.setattr(config, "FIXTURES_DIR", data_dir / "fixtures")
    return data_dir


@pytest.fixture(autouse=True)
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep log files and outputs of every test inside ``tmp_path``."""

    data_dir = _configure_temp_paths(tmp_path, monkeypatch)
    utils.reset_logger()
    yield data_dir
    utils.reset_logger()

from __future__ import annotations

import json
from pathlib import Path

import pytest

from skyflap.storage.best_score import BestScoreStore


@pytest.fixture()
def path(tmp_path: Path) -> Path:
    return tmp_path / "best.json"


def test_missing_file_loads_zero(path: Path) -> None:
    assert BestScoreStore(path).load() == 0


@pytest.mark.parametrize(
    "content",
    [
        "not json at all",
        "",
        '{"flappy-best": "abc"}',
        '{"flappy-best": null}',
        '{"flappy-best": true}',
        '{"flappy-best": -3}',
        '{"flappy-best": [1, 2]}',
        '{"other-key": 12}',
        "[12]",
    ],
)
def test_malformed_content_loads_zero(path: Path, content: str) -> None:
    path.write_text(content, encoding="utf-8")
    assert BestScoreStore(path).load() == 0


def test_numeric_string_is_accepted(path: Path) -> None:
    path.write_text('{"flappy-best": "14"}', encoding="utf-8")
    assert BestScoreStore(path).load() == 14


def test_save_then_load(path: Path) -> None:
    BestScoreStore(path).save(7)
    assert json.loads(path.read_text(encoding="utf-8")) == {"flappy-best": 7}
    assert BestScoreStore(path).load() == 7


def test_custom_key(path: Path) -> None:
    store = BestScoreStore(path, key="skyflap-best")
    store.save(3)
    assert json.loads(path.read_text(encoding="utf-8")) == {"skyflap-best": 3}
    assert BestScoreStore(path).load() == 0


def test_record_only_writes_improvements(path: Path) -> None:
    store = BestScoreStore(path)
    store.load()

    assert store.record(5) is True
    assert store.record(3) is False
    assert store.record(5) is False
    assert store.record(9) is True

    assert store.best == 9
    assert BestScoreStore(path).load() == 9


def test_save_creates_parent_directories(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "best.json"
    BestScoreStore(path).save(2)
    assert path.exists()


def test_write_failure_is_logged_not_raised(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    store = BestScoreStore(blocker / "best.json")

    store.save(4)

    assert store.best == 4
    assert "Failed to save best score" in caplog.text

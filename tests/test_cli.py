"""
Command-line entry point: JSON output and exit codes.
Run from project root: python -m pytest tests/test_cli.py -v
"""

import json
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from sowing_advisor import cli
from sowing_advisor.history import HistoryStore


@pytest.fixture
def store(monkeypatch, tmp_path):
    s = HistoryStore(path=tmp_path / "history.csv")
    monkeypatch.setattr(cli, "get_history_store", lambda: s)
    return s


def _json(capsys):
    return json.loads(capsys.readouterr().out)


def test_crops_lists_all(capsys):
    assert cli.main(["crops"]) == 0
    ids = {c["id"] for c in _json(capsys)}
    assert {"rice", "wheat", "tomato"} <= ids


def test_crop_details_and_unknown(capsys):
    assert cli.main(["crops", "paddy"]) == 0
    assert _json(capsys)["id"] == "rice"
    assert cli.main(["crops", "banana"]) == 1


def test_weather(capsys):
    assert cli.main(["weather", "Punjab"]) == 0
    assert _json(capsys)["rainfall"]["kharif"] == 400
    assert cli.main(["weather", "Kerala"]) == 1


def test_predict(capsys, store):
    assert cli.main(["predict", "rice", "Punjab", "clay", "--month", "8"]) == 0
    out = _json(capsys)
    assert out["season"] == "rabi"
    assert out["optimal_sowing_date"] == "November 15"


def test_predict_mean_aggregation(capsys, store):
    assert cli.main(["predict", "rice", "Punjab", "clay", "--month", "8", "--aggregation", "mean"]) == 0
    assert _json(capsys)["aggregation"] == "mean"


def test_predict_bad_month_exits_2(store):
    assert cli.main(["predict", "rice", "Punjab", "clay", "--month", "13"]) == 2


def test_predict_unknown_crop_exits_1(store):
    assert cli.main(["predict", "banana", "Punjab", "clay", "--month", "8"]) == 1


def test_plan(capsys, store):
    argv = ["plan", "wheat", "UnknownRegion", "loamy",
            "--farm-size", "10", "--budget", "50000", "--experience", "beginner", "--month", "10"]
    assert cli.main(argv) == 0
    out = _json(capsys)
    assert out["area_allocation"] == "8 acres"
    assert out["financial_projection"]["roi_pct"] == pytest.approx(78.6)


def test_plan_invalid_farm_size_exits_2(store):
    assert cli.main(["plan", "wheat", "Punjab", "loamy", "--farm-size", "0"]) == 2


def test_record_saves_history(capsys, store, tmp_path):
    assert cli.main(["record", "rice", "Punjab", "5.0", "--success"]) == 0
    out = _json(capsys)
    assert out["samples"] == 2
    assert out["success_rate"] == pytest.approx(0.89)
    assert (tmp_path / "history.csv").exists()


def test_record_no_save(store, tmp_path):
    assert cli.main(["record", "rice", "Punjab", "5.0", "--no-save"]) == 0
    assert not (tmp_path / "history.csv").exists()
    assert store.get("rice", "Punjab").success_rate == pytest.approx(0.39)


def test_record_negative_yield_exits_2(store):
    assert cli.main(["record", "rice", "Punjab", "-3"]) == 2


if __name__ == "__main__":
    import subprocess
    sys.exit(subprocess.call([sys.executable, "-m", "pytest", __file__, "-v", "-s"]))

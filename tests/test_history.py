"""
Historical outcome store: update rule, concurrency, CSV persistence.
Run from project root: python -m pytest tests/test_history.py -v
"""

import math
import sys
import threading
from pathlib import Path

import pandas as pd
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from sowing_advisor import history as history_mod
from sowing_advisor.history import HistoryStore, HISTORY_COLUMNS


def test_seed_records_present():
    store = HistoryStore()
    rec = store.get("rice", "Punjab")
    assert rec.avg_yield == pytest.approx(3.8)
    assert rec.success_rate == pytest.approx(0.78)
    assert len(store) == 9


def test_unseeded_store_is_empty():
    store = HistoryStore(seed=False)
    assert len(store) == 0
    assert store.success_multiplier("rice", "Punjab") == pytest.approx(0.8)


def test_repeated_success_converges_towards_one():
    store = HistoryStore()
    first = store.record_outcome("rice", "Punjab", 5.0, True)
    assert first.avg_yield == pytest.approx(4.4)
    assert first.success_rate == pytest.approx(0.89)
    second = store.record_outcome("rice", "Punjab", 5.0, True)
    assert second.avg_yield == pytest.approx(4.7)
    assert second.success_rate == pytest.approx(0.945)
    assert second.samples == 3


def test_first_sample_sets_record():
    store = HistoryStore()
    rec = store.record_outcome("onion", "Karnataka", 90, False)
    assert rec.avg_yield == pytest.approx(90)
    assert rec.success_rate == 0.0
    assert rec.samples == 1
    assert store.success_multiplier("onion", "Karnataka") == 0.0


def test_aliases_share_a_record():
    store = HistoryStore()
    store.record_outcome("Paddy", " Punjab ", 4.0, False)
    assert store.get("rice", "Punjab").samples == 2


def test_success_rate_stays_in_unit_interval():
    store = HistoryStore()
    for i in range(50):
        rec = store.record_outcome("maize", "Karnataka", 20 + i, i % 3 == 0)
        assert 0.0 <= rec.success_rate <= 1.0


@pytest.mark.parametrize("value", [-1, math.nan, math.inf, "abc", None])
def test_invalid_yield_rejected(value):
    store = HistoryStore()
    with pytest.raises(ValueError):
        store.record_outcome("rice", "Punjab", value, True)
    assert store.get("rice", "Punjab").samples == 1


@pytest.mark.parametrize("crop, region", [("", "Punjab"), ("rice", ""), ("rice", None)])
def test_missing_key_rejected(crop, region):
    with pytest.raises(ValueError):
        HistoryStore().record_outcome(crop, region, 3.0, True)


def test_concurrent_updates_are_not_lost():
    store = HistoryStore()
    n_threads = 32
    barrier = threading.Barrier(n_threads)

    def worker():
        barrier.wait()
        store.record_outcome("wheat", "Punjab", 30, True)

    threads = [threading.Thread(target=worker) for _ in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert store.get("wheat", "Punjab").samples == n_threads + 1


def test_save_and_load_roundtrip(tmp_path):
    path = tmp_path / "history.csv"
    store = HistoryStore(path=path)
    store.record_outcome("tomato", "Karnataka", 250, True)
    assert store.save() == path

    df = pd.read_csv(path)
    assert list(df.columns) == HISTORY_COLUMNS
    assert len(df) == 10

    fresh = HistoryStore(seed=False)
    assert fresh.load(path) == 10
    rec = fresh.get("tomato", "Karnataka")
    assert rec.avg_yield == pytest.approx(250)
    assert rec.success_rate == pytest.approx(1.0)


def test_load_missing_file_keeps_seed(tmp_path):
    store = HistoryStore(path=tmp_path / "absent.csv")
    assert store.load() == 0
    assert len(store) == 9


def test_load_rejects_missing_columns(tmp_path):
    path = tmp_path / "bad.csv"
    pd.DataFrame({"crop": ["rice"], "yield": [3]}).to_csv(path, index=False)
    store = HistoryStore()
    assert store.load(path) == 0
    assert store.get("rice", "Punjab").success_rate == pytest.approx(0.78)


def test_load_clamps_success_rate(tmp_path):
    path = tmp_path / "history.csv"
    pd.DataFrame({
        "crop": ["rice"], "region": ["Punjab"],
        "avg_yield": [4.0], "success_rate": [1.7],
    }).to_csv(path, index=False)
    store = HistoryStore()
    assert store.load(path) == 1
    rec = store.get("rice", "Punjab")
    assert rec.success_rate == 1.0
    assert rec.samples == 1


def test_module_record_outcome_uses_default_store(monkeypatch, tmp_path):
    monkeypatch.setattr(history_mod, "PROCESSED_DATA_DIR", tmp_path)
    history_mod.reset_history_store()
    try:
        rec = history_mod.record_outcome("rice", "Tamil Nadu", 4.2, True)
        assert rec.samples == 2
        assert history_mod.get_history_store().get("rice", "Tamil Nadu") == rec
    finally:
        history_mod.reset_history_store()


if __name__ == "__main__":
    import subprocess
    sys.exit(subprocess.call([sys.executable, "-m", "pytest", __file__, "-v", "-s"]))

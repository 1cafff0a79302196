"""
Composite predictor tests: aggregation, window selection, confidence,
recommendations and the degradation paths (unknown crop / region / window).
Run from project root: python -m pytest tests/test_predictor.py -v
"""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from sowing_advisor.config import SEASON_MONTHS
from sowing_advisor import predictor
from sowing_advisor.history import HistoryStore
from sowing_advisor.predictor import (
    predict_sowing_window,
    aggregate_score,
    confidence_label,
)
from sowing_advisor.reference_data import build_reference_data, default_reference_data

REF = default_reference_data()

# Hand-computed factor scores for rice / Punjab / clay / August
RICE_PUNJAB = {
    "temperature": 0.56,
    "rainfall": (1 - abs(400 / 550 - 0.6)) / 2,
    "humidity": 0.25,
    "soil": 1.0,
    "timing": 1 - 2 / 6,
}


def _predict(*args, **kwargs):
    kwargs.setdefault("history", HistoryStore())
    return predict_sowing_window(*args, **kwargs)


def test_rice_punjab_august_picks_rabi():
    result = _predict("rice", "Punjab", "clay", 8)
    assert result is not None
    assert result["season"] == "rabi"
    assert result["optimal_sowing_date"] == "November 15"
    assert result["sowing_window"] == {"start": "November", "end": "December", "optimal": "November 15"}
    assert result["region_defaulted"] is False
    # Rabi windows are rated by the wheat record for the region
    assert result["success_multiplier"] == pytest.approx(0.90)


def test_rice_punjab_factor_scores():
    result = _predict("rice", "Punjab", "clay", 8)
    analysis = result["climate_analysis"]
    for factor, expected in RICE_PUNJAB.items():
        assert analysis[factor]["score"] == pytest.approx(expected, abs=1e-4), factor
    assert analysis["soil"]["status"] == "Compatible"
    assert analysis["humidity"]["status"] == "Sub-optimal"


def test_weighted_aggregate_for_rice_punjab():
    weights = {"temperature": 0.30, "rainfall": 0.25, "humidity": 0.20, "soil": 0.15, "timing": 0.10}
    expected = sum(weights[f] * RICE_PUNJAB[f] for f in weights)
    result = _predict("rice", "Punjab", "clay", 8)
    assert result["aggregation"] == "weighted"
    assert result["suitability_score"] == pytest.approx(expected, abs=1e-4)
    assert result["confidence"] == "Low"


def test_mean_aggregate_excludes_timing():
    expected = (RICE_PUNJAB["temperature"] + RICE_PUNJAB["rainfall"]
                + RICE_PUNJAB["humidity"] + RICE_PUNJAB["soil"]) / 4
    result = _predict("rice", "Punjab", "clay", 8, aggregation="mean")
    assert result["aggregation"] == "mean"
    assert result["suitability_score"] == pytest.approx(expected, abs=1e-4)


def test_aggregate_score_bounds():
    ones = dict.fromkeys(["temperature", "rainfall", "humidity", "soil", "timing"], 1.0)
    zeros = dict.fromkeys(ones, 0.0)
    assert aggregate_score(ones) == pytest.approx(1.0)
    assert aggregate_score(zeros) == 0.0
    assert aggregate_score(ones, "mean") == pytest.approx(1.0)


def test_unknown_aggregation_rejected():
    with pytest.raises(ValueError):
        _predict("rice", "Punjab", "clay", 8, aggregation="median")


@pytest.mark.parametrize("score, label", [
    (1.0, "High"),
    (0.80, "High"),
    (0.7999, "Medium"),
    (0.60, "Medium"),
    (0.5999, "Low"),
    (0.0, "Low"),
])
def test_confidence_boundaries(score, label):
    assert confidence_label(score) == label


def test_confidence_is_monotonic():
    order = {"Low": 0, "Medium": 1, "High": 2}
    ranks = [order[confidence_label(i / 1000)] for i in range(1001)]
    assert ranks == sorted(ranks)


def test_unknown_crop_is_unavailable():
    assert _predict("banana", "Punjab", "clay", 8) is None


def test_crop_alias_and_case_resolve():
    result = _predict("  Paddy ", "Punjab", "CLAY", 8)
    assert result["crop"] == "rice"
    assert result["soil_type"] == "clay"


def test_unknown_region_falls_back_and_is_flagged():
    result = _predict("wheat", "Atlantis", "loamy", 10)
    assert result["region_defaulted"] is True
    assert result["region"] == "Atlantis"
    assert result["region_used"] == REF.default_region
    # No advisory list for an unknown region
    assert not any("water" in r.lower() for r in result["recommendations"])


def test_no_future_window_returns_sentinel():
    result = _predict("rice", "Punjab", "clay", 12)
    assert result["season"] == "unknown"
    assert result["optimal_sowing_date"] == "Not available"
    assert result["success_multiplier"] is None
    # Scores are still reported
    assert 0.0 <= result["suitability_score"] <= 1.0


def test_selected_window_always_in_future():
    history = HistoryStore()
    for crop_id, profile in REF.crops.items():
        for month in range(1, 13):
            result = predict_sowing_window(crop_id, "Karnataka", "loamy", month, history=history)
            if result["season"] == "unknown":
                assert all(SEASON_MONTHS[w.season] <= month for w in profile.sowing_windows)
            else:
                assert SEASON_MONTHS[result["season"]] > month, (crop_id, month, result["season"])


def test_season_history_picks_window():
    """Maize in February, Tamil Nadu: kharif (rice 0.85) beats zaid (maize 0.75)."""
    result = _predict("maize", "Tamil Nadu", "loamy", 2)
    assert result["season"] == "kharif"
    assert result["optimal_sowing_date"] == "June 1"
    assert result["success_multiplier"] == pytest.approx(0.85)


def test_recorded_failures_move_window_away():
    history = HistoryStore()
    for _ in range(2):
        history.record_outcome("rice", "Tamil Nadu", 1.0, success=False)
    result = predict_sowing_window("maize", "Tamil Nadu", "loamy", 2, history=history)
    assert result["season"] == "zaid"
    assert result["success_multiplier"] == pytest.approx(0.75)


def test_failures_in_nearest_season_switch_to_later_window():
    history = HistoryStore()
    before = predict_sowing_window("maize", "Karnataka", "loamy", 2, history=history)
    assert before["season"] == "zaid"
    for _ in range(10):
        history.record_outcome("maize", "Karnataka", 5, success=False)
    after = predict_sowing_window("maize", "Karnataka", "loamy", 2, history=history)
    assert after["season"] == "kharif"
    assert after["success_multiplier"] == pytest.approx(0.8)


def test_tie_goes_to_nearest_future_window():
    """Maize in February, Karnataka: zaid (maize 0.80) and kharif (no rice record, 0.8) tie."""
    result = _predict("maize", "Karnataka", "loamy", 2)
    assert result["season"] == "zaid"
    assert result["optimal_sowing_date"] == "March 15"


def test_missing_history_uses_default_multiplier():
    result = _predict("tomato", "Karnataka", "loamy", 4)
    assert result["season"] == "kharif"
    assert result["success_multiplier"] == pytest.approx(0.8)


def test_recorded_history_changes_multiplier():
    history = HistoryStore()
    history.record_outcome("rice", "Karnataka", 4.5, success=True)
    result = predict_sowing_window("tomato", "Karnataka", "loamy", 4, history=history)
    assert result["season"] == "kharif"
    assert result["success_multiplier"] == pytest.approx(1.0)


def test_confidence_follows_reported_score(monkeypatch):
    """A raw 0.79996 is reported as 0.8 and labelled High."""
    monkeypatch.setattr(predictor, "aggregate_score", lambda scores, mode: 0.79996)
    result = _predict("rice", "Punjab", "clay", 8)
    assert result["suitability_score"] == 0.8
    assert result["confidence"] == "High"
    assert "Optimal conditions detected - proceed with recommended timeline" in result["recommendations"]


def test_history_does_not_change_aggregate():
    good, bad = HistoryStore(), HistoryStore()
    bad.record_outcome("rice", "Punjab", 0, success=False)
    a = predict_sowing_window("rice", "Punjab", "clay", 8, history=good)
    b = predict_sowing_window("rice", "Punjab", "clay", 8, history=bad)
    assert a["suitability_score"] == b["suitability_score"]


def test_low_score_recommendations_and_region_advice():
    result = _predict("rice", "Punjab", "clay", 8)
    recs = result["recommendations"]
    assert recs[:2] == [
        "Consider alternative crops better suited to your region",
        "Implement climate adaptation strategies",
    ]
    assert "Implement water conservation techniques" in recs
    assert "Consider crop rotation to maintain soil health" in recs


def test_high_score_recommendations():
    # Tailored region where maize conditions are ideal
    ref = build_reference_data(
        weather_table={
            "Ideal": {
                "temperature": (25, 25, 25, 25),
                "rainfall": (800, 600, 300, 100),
                "humidity": (65, 65, 65, 65),
            },
        },
        default_region="Ideal",
    )
    result = predict_sowing_window("maize", "Ideal", "loamy", 5, reference=ref, history=HistoryStore(ref))
    assert result["suitability_score"] >= 0.8
    assert result["confidence"] == "High"
    assert "Optimal conditions detected - proceed with recommended timeline" in result["recommendations"]


def test_scores_bounded_for_all_combinations():
    history = HistoryStore()
    for crop_id in REF.crops:
        for region in list(REF.regions) + ["Nowhere"]:
            for soil in ("clay", "sandy", "black"):
                for month in (1, 6, 11):
                    r = predict_sowing_window(crop_id, region, soil, month, history=history)
                    assert 0.0 <= r["suitability_score"] <= 1.0
                    assert all(0.0 <= v["score"] <= 1.0 for v in r["climate_analysis"].values())


@pytest.mark.parametrize("month", [0, 13, -1, 8.0, "8", True, None])
def test_invalid_month_rejected(month):
    with pytest.raises(ValueError):
        _predict("rice", "Punjab", "clay", month)


@pytest.mark.parametrize("soil", ["", "   ", None])
def test_missing_soil_rejected(soil):
    with pytest.raises(ValueError):
        _predict("rice", "Punjab", soil, 8)


if __name__ == "__main__":
    import subprocess
    sys.exit(subprocess.call([sys.executable, "-m", "pytest", __file__, "-v", "-s"]))

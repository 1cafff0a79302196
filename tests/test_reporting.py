"""
Report tables and figures for predictions and plans.
Run from project root: python -m pytest tests/test_reporting.py -v
"""

import sys
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.colors import to_hex

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from sowing_advisor.history import HistoryStore
from sowing_advisor.plan_generator import generate_crop_plan
from sowing_advisor.predictor import predict_sowing_window
from sowing_advisor.reporting import (
    REPORT_PALETTE,
    _setup_style,
    score_frame,
    timeline_frame,
    plot_score_breakdown,
    plot_financial_projection,
)


def _prediction():
    return predict_sowing_window("rice", "Punjab", "clay", 8, history=HistoryStore())


def _plan():
    return generate_crop_plan("wheat", "Punjab", "loamy", 10, 50_000, "beginner",
                              current_month=10, history=HistoryStore())


def test_score_frame():
    df = score_frame(_prediction())
    assert list(df.columns) == ["factor", "score", "status"]
    assert list(df["factor"]) == ["temperature", "rainfall", "humidity", "soil", "timing"]
    assert df["score"].between(0, 1).all()


def test_timeline_frame():
    df = timeline_frame(_plan())
    assert len(df) == 5
    assert df["Duration (days)"].sum() == 125
    assert df.iloc[0]["Activities"] == "Plowing, Harrowing, Leveling"


def test_report_style_uses_project_palette():
    _setup_style()
    cycle = [to_hex(c) for c in plt.rcParams["axes.prop_cycle"].by_key()["color"]]
    assert cycle[:len(REPORT_PALETTE)] == REPORT_PALETTE
    assert plt.rcParams["axes.spines.top"] is False
    assert plt.rcParams["axes.titleweight"] == "bold"


def test_score_breakdown_figure(tmp_path):
    out = plot_score_breakdown(_prediction(), tmp_path / "scores.png")
    assert out.exists() and out.stat().st_size > 0


def test_financial_figure(tmp_path):
    out = plot_financial_projection(_plan(), tmp_path / "fin.png")
    assert out.exists() and out.stat().st_size > 0


if __name__ == "__main__":
    import subprocess
    sys.exit(subprocess.call([sys.executable, "-m", "pytest", __file__, "-v", "-s"]))

"""
Report figures and tables for predictions and crop plans.
Figures are saved to reports/figures/ unless an explicit path is given.
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from pathlib import Path

from sowing_advisor.config import FIGURES_DIR, CURRENCY_SYMBOL, ensure_dirs

# Soil brown, crop green, wheat gold, clay red, water blue
REPORT_PALETTE = ["#8c6d46", "#5a8f3d", "#d9a441", "#b5523b", "#4f7ca8"]


def _setup_style():
    """Field-report look shared by all figures: light grid, earth-tone palette."""
    sns.set_theme(style="whitegrid", context="notebook", palette=REPORT_PALETTE)
    plt.rcParams.update({
        "figure.dpi": 100,
        "savefig.dpi": 150,
        "font.size": 10,
        "axes.titleweight": "bold",
        "axes.spines.top": False,
        "axes.spines.right": False,
    })


def score_frame(result: dict) -> pd.DataFrame:
    """Per-factor scores of a prediction as a DataFrame (factor, score, status)."""
    rows = [
        {"factor": factor, "score": item["score"], "status": item["status"]}
        for factor, item in result["climate_analysis"].items()
    ]
    return pd.DataFrame(rows, columns=["factor", "score", "status"])


def timeline_frame(plan: dict) -> pd.DataFrame:
    """Plan timeline as a DataFrame; activities joined into one column."""
    rows = [
        {
            "Stage": s["stage"],
            "Start day": s["start_day"],
            "End day": s["end_day"],
            "Duration (days)": s["duration_days"],
            "Activities": ", ".join(s["activities"]),
        }
        for s in plan["timeline"]
    ]
    return pd.DataFrame(rows, columns=["Stage", "Start day", "End day", "Duration (days)", "Activities"])


def plot_score_breakdown(result: dict, out_path: Path | None = None) -> Path:
    """
    Bar chart of factor scores with the aggregate suitability as a line.
    Saves to reports/figures/score_breakdown_<crop>.png by default.
    """
    ensure_dirs()
    _setup_style()
    df = score_frame(result)
    fig, ax = plt.subplots(figsize=(7, 4))
    sns.barplot(data=df, x="factor", y="score", hue="status", dodge=False, ax=ax)
    ax.axhline(result["suitability_score"], color=REPORT_PALETTE[0], linestyle="--",
               label=f"Suitability {result['suitability_score']:.2f}")
    ax.set_ylim(0, 1.05)
    ax.set_xlabel("")
    ax.set_ylabel("Score (0-1)")
    ax.set_title(f"{result['crop_name']} in {result['region_used']} — {result['confidence']} confidence")
    ax.legend(loc="lower right")
    plt.tight_layout()
    out = Path(out_path) if out_path else FIGURES_DIR / f"score_breakdown_{result['crop']}.png"
    fig.savefig(out, bbox_inches="tight")
    plt.close(fig)
    return out


def plot_financial_projection(plan: dict, out_path: Path | None = None) -> Path:
    """
    Cost components against expected revenue.
    Saves to reports/figures/financials_<crop>.png by default.
    """
    ensure_dirs()
    _setup_style()
    fin = plan["financial_projection"]
    df = pd.DataFrame({
        "item":   ["Inputs", "Labour", "Equipment", "Total cost", "Revenue"],
        "amount": [
            fin["input_cost_inr"], fin["labour_cost_inr"], fin["equipment_cost_inr"],
            fin["total_cost_inr"], fin["expected_revenue_inr"],
        ],
    })
    fig, ax = plt.subplots(figsize=(7, 4))
    sns.barplot(data=df, x="item", y="amount", color=REPORT_PALETTE[1], ax=ax)
    ax.set_xlabel("")
    ax.set_ylabel(f"Amount ({CURRENCY_SYMBOL})")
    ax.set_title(f"{plan['crop']} on {plan['area_allocation']} — ROI {fin['display']['roi']}")
    plt.tight_layout()
    out = Path(out_path) if out_path else FIGURES_DIR / f"financials_{plan['crop_id']}.png"
    fig.savefig(out, bbox_inches="tight")
    plt.close(fig)
    return out

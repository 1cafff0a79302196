"""
Plan generator: expand a sowing prediction into an operating plan.

All monetary values are in Indian Rupees (₹) and use fixed per-acre
constants; this is a planning estimate, not a market-price lookup.

    area_allocation = min(farm_size × 0.8, farm_size)
    total_cost      = area × (input + labour + equipment cost per acre)
    revenue         = area × average expected yield × unit price
    net_profit      = revenue − total_cost
    roi_pct         = net_profit / total_cost × 100

Sections: variety, area, sowing prediction, inputs (seed, fertilizer,
pesticides), equipment, timeline, financial projection, risks,
recommendations.
"""

import logging
import math
from datetime import datetime

from sowing_advisor.config import (
    AREA_UTILISATION,
    INPUT_COST_PER_ACRE,
    LABOUR_COST_PER_ACRE,
    EQUIPMENT_COST_PER_ACRE,
    UNIT_PRICE_INR,
    CURRENCY,
    CURRENCY_SYMBOL,
    EXPERIENCE_TIERS,
    EXPERIENCE_EQUIPMENT,
    LOW_SUITABILITY_THRESHOLD,
    UNKNOWN_REQUIREMENT,
)
from sowing_advisor.history import HistoryStore
from sowing_advisor.predictor import predict_sowing_window
from sowing_advisor.reference_data import (
    CropProfile,
    ReferenceData,
    default_reference_data,
    get_crop_profile,
)

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _finite_number(value, label: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{label} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be a number, got {value!r}") from None
    if math.isnan(number) or math.isinf(number):
        raise ValueError(f"{label} must be finite, got {value!r}")
    return number


def validate_plan_inputs(farm_size_acres, budget, experience) -> tuple[float, float, str]:
    size = _finite_number(farm_size_acres, "Farm size")
    if size <= 0:
        raise ValueError(f"Farm size must be greater than 0 acres, got {farm_size_acres}")
    money = _finite_number(budget, "Budget")
    if money < 0:
        raise ValueError(f"Budget must be 0 or more, got {budget}")
    tier = (experience or "").strip().lower() if isinstance(experience, str) else ""
    if tier not in EXPERIENCE_TIERS:
        raise ValueError(f"Experience must be one of {EXPERIENCE_TIERS}, got {experience!r}")
    return size, money, tier


# ---------------------------------------------------------------------------
# Plan sections
# ---------------------------------------------------------------------------

def area_allocation(farm_size_acres: float) -> float:
    """Area under the crop; the remaining 20% is kept for channels, paths and fallow."""
    return min(farm_size_acres * AREA_UTILISATION, farm_size_acres)


def seed_requirement(crop_id: str, area_acres: float, reference: ReferenceData) -> dict:
    rate = reference.seed_rates.get(crop_id)
    if rate is None:
        return {
            "quantity": None,
            "unit": None,
            "rate_per_acre": None,
            "display": UNKNOWN_REQUIREMENT,
        }
    per_acre, unit = rate
    quantity = round(per_acre * area_acres, 2)
    return {
        "quantity": quantity,
        "unit": unit,
        "rate_per_acre": per_acre,
        "display": f"{quantity:,g} {unit}",
    }


def equipment_needs(profile: CropProfile, experience: str) -> list[str]:
    """Crop tools first, then tier extras not already listed."""
    equipment = list(profile.tools)
    for item in EXPERIENCE_EQUIPMENT.get(experience, []):
        if item not in equipment:
            equipment.append(item)
    return equipment


def _money(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(value):,.0f}"


def financial_projection(profile: CropProfile, area_acres: float, budget: float) -> dict:
    """
    Fixed-constant cost/revenue estimate for the allocated area.

    Returns
    -------
    dict with numeric keys (input_cost_inr, labour_cost_inr, equipment_cost_inr,
    total_cost_inr, expected_revenue_inr, net_profit_inr, roi_pct,
    budget_inr, within_budget, budget_gap_inr) and formatted strings under
    'display'.
    """
    input_cost     = area_acres * INPUT_COST_PER_ACRE
    labour_cost    = area_acres * LABOUR_COST_PER_ACRE
    equipment_cost = area_acres * EQUIPMENT_COST_PER_ACRE
    total_cost     = input_cost + labour_cost + equipment_cost
    revenue        = area_acres * profile.average_yield * UNIT_PRICE_INR
    net_profit     = revenue - total_cost
    roi_pct        = round(net_profit / total_cost * 100, 1) if total_cost > 0 else 0.0
    budget_gap     = max(0.0, total_cost - budget)

    return {
        "currency":             CURRENCY,
        "input_cost_inr":       round(input_cost, 2),
        "labour_cost_inr":      round(labour_cost, 2),
        "equipment_cost_inr":   round(equipment_cost, 2),
        "total_cost_inr":       round(total_cost, 2),
        "expected_revenue_inr": round(revenue, 2),
        "net_profit_inr":       round(net_profit, 2),
        "roi_pct":              roi_pct,
        "unit_price_inr":       UNIT_PRICE_INR,
        "yield_unit":           profile.yield_unit,
        "budget_inr":           budget,
        "within_budget":        budget >= total_cost,
        "budget_gap_inr":       round(budget_gap, 2),
        "display": {
            "total_investment": _money(total_cost),
            "expected_revenue": _money(revenue),
            "net_profit":       _money(net_profit),
            "roi":              f"{roi_pct:.1f}%",
        },
    }


def crop_timeline(crop_id: str, reference: ReferenceData) -> list[dict]:
    """Growth stages with cumulative day offsets; unlisted crops use the default timeline."""
    stages = reference.timelines.get(crop_id)
    if stages is None:
        stages = reference.timelines[reference.default_timeline_crop]
    timeline = []
    day = 0
    for stage in stages:
        timeline.append({
            "stage":      stage.stage,
            "duration":   f"{stage.duration_days} days",
            "duration_days": stage.duration_days,
            "start_day":  day,
            "end_day":    day + stage.duration_days,
            "activities": list(stage.activities),
        })
        day += stage.duration_days
    return timeline


def risk_assessment(
    crop_id: str,
    region: str,
    suitability: float,
    finance: dict,
    reference: ReferenceData,
) -> list[dict]:
    risks = []
    if suitability < LOW_SUITABILITY_THRESHOLD:
        risks.append({
            "factor": "Climate Suitability",
            "impact": "High",
            "mitigation": "Consider alternative crops or adjust sowing time",
        })
    structural = reference.risky_pairs.get((crop_id, (region or "").strip()))
    if structural is not None:
        risks.append(dict(structural))
    if finance["budget_inr"] > 0 and not finance["within_budget"]:
        risks.append({
            "factor": "Budget Shortfall",
            "impact": "Medium",
            "mitigation": (
                f"Arrange {_money(finance['budget_gap_inr'])} more working capital "
                "or reduce the area under the crop"
            ),
        })
    risks.append({
        "factor": "Market Price Fluctuation",
        "impact": "Medium",
        "mitigation": "Contract farming, storage facilities",
    })
    return risks


def plan_recommendations(soil_type: str, experience: str) -> list[str]:
    recommendations = [
        "Implement crop rotation to maintain soil health",
        "Use organic fertilizers and bio-pesticides where possible",
    ]
    if experience == "beginner":
        recommendations.append("Start with smaller area to gain experience")
        recommendations.append("Consult local agricultural extension officers")
    if (soil_type or "").strip().lower() == "sandy":
        recommendations.append("Add organic matter to improve soil structure")
    return recommendations


# ---------------------------------------------------------------------------
# Main plan API
# ---------------------------------------------------------------------------

def generate_crop_plan(
    crop: str,
    region: str,
    soil_type: str,
    farm_size_acres: float,
    budget: float,
    experience: str,
    *,
    current_month: int | None = None,
    reference: ReferenceData | None = None,
    history: HistoryStore | None = None,
    aggregation: str | None = None,
) -> dict | None:
    """
    Full crop plan for one crop on one farm.

    Parameters
    ----------
    crop, region, soil_type : str
        As for predict_sowing_window().
    farm_size_acres : float
        Declared farm size, > 0.
    budget : float
        Available working capital in ₹, ≥ 0. Compared against total cost.
    experience : str
        "beginner", "intermediate" or "expert".
    current_month : int or None
        Defaults to this calendar month.

    Returns
    -------
    dict, or None when the crop is unknown. Keys:
        crop, variety, region, region_defaulted, soil_type, experience,
        farm_size_acres, area_allocation_acres, area_allocation,
        sowing_prediction, inputs, equipment, timeline,
        financial_projection, risk_assessment, recommendations
    """
    size, money, tier = validate_plan_inputs(farm_size_acres, budget, experience)
    month = current_month if current_month is not None else datetime.now().month
    ref = reference or default_reference_data()

    profile = get_crop_profile(crop, ref)
    if profile is None:
        log.info("Plan unavailable: unknown crop '%s'.", crop)
        return None

    prediction = predict_sowing_window(
        profile.crop_id, region, soil_type, month,
        reference=ref, history=history, aggregation=aggregation,
    )

    area = area_allocation(size)
    finance = financial_projection(profile, area, money)

    return {
        "crop":                  profile.name,
        "crop_id":               profile.crop_id,
        "variety":               profile.varieties[0] if profile.varieties else None,
        "region":                region,
        "region_defaulted":      prediction["region_defaulted"],
        "soil_type":             prediction["soil_type"],
        "experience":            tier,
        "farm_size_acres":       size,
        "area_allocation_acres": round(area, 4),
        "area_allocation":       f"{area:g} acres",
        "sowing_prediction":     prediction,
        "inputs": {
            "seeds":       seed_requirement(profile.crop_id, area, ref),
            "fertilizers": dict(profile.fertilizers),
            "pesticides":  list(profile.pest_management),
        },
        "equipment":             equipment_needs(profile, tier),
        "timeline":              crop_timeline(profile.crop_id, ref),
        "financial_projection":  finance,
        "risk_assessment":       risk_assessment(
            profile.crop_id, region, prediction["suitability_score"], finance, ref,
        ),
        "recommendations":       plan_recommendations(soil_type, tier),
    }

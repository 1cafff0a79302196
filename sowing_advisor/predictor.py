"""
Composite predictor: crop suitability and next sowing window.

Steps:
  1. Per-factor scores (temperature, rainfall, humidity, soil, timing).
  2. Aggregate suitability:
       weighted → Σ weight × score   (0.30 / 0.25 / 0.20 / 0.15 / 0.10)
       mean     → mean(temperature, rainfall, humidity, soil)
  3. Candidate windows: only seasons whose month is after the current month.
     Each is ranked by suitability × the season's historical success rate in
     the region (kharif → rice, rabi → wheat, zaid → maize records; 0.8 when
     there is no record); ties go to the nearest upcoming month.
  4. Confidence label from the aggregate rounded to 4 places:
     High ≥ 0.8, Medium ≥ 0.6, else Low.
  5. Recommendations: low/high suitability advice plus region advisories.

Degradations are resolved here and flagged in the result rather than raised:
  - unknown crop    → None ("prediction unavailable")
  - unknown region  → default region's weather, region_defaulted=True
  - no future window → season "unknown", optimal date "Not available"
Only invalid input (month outside 1-12, empty soil, bad aggregation mode)
raises ValueError.
"""

import logging

import numpy as np

from sowing_advisor.config import (
    AGGREGATION_MODE,
    AGGREGATION_MODES,
    SCORING_WEIGHTS,
    MEAN_FACTORS,
    CONFIDENCE_LEVELS,
    CONFIDENCE_FLOOR_LABEL,
    LOW_SUITABILITY_THRESHOLD,
    HIGH_SUITABILITY_THRESHOLD,
    UNKNOWN_SEASON,
    UNAVAILABLE_SOWING_DATE,
    SEASON_HISTORY_CROP,
    DEFAULT_HISTORY_CROP,
)
from sowing_advisor.history import HistoryStore, get_history_store
from sowing_advisor.reference_data import (
    CropProfile,
    ReferenceData,
    RegionWeather,
    default_reference_data,
    get_crop_profile,
    resolve_region_weather,
)
from sowing_advisor.scoring import (
    temperature_score,
    rainfall_score,
    humidity_score,
    soil_score,
    timing_score,
    season_month,
    factor_status,
)

log = logging.getLogger(__name__)

FACTORS = ("temperature", "rainfall", "humidity", "soil", "timing")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validate_month(current_month) -> int:
    if isinstance(current_month, bool) or not isinstance(current_month, (int, np.integer)):
        raise ValueError(f"Month must be an integer 1-12, got {current_month!r}")
    if not 1 <= int(current_month) <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {current_month}")
    return int(current_month)


def validate_aggregation(aggregation: str | None) -> str:
    mode = (aggregation or AGGREGATION_MODE).lower()
    if mode not in AGGREGATION_MODES:
        raise ValueError(f"Unknown aggregation mode '{aggregation}'. Use one of {AGGREGATION_MODES}")
    return mode


def _validate_soil(soil_type) -> str:
    if not isinstance(soil_type, str) or not soil_type.strip():
        raise ValueError("Soil type is required")
    return soil_type.strip().lower()


# ---------------------------------------------------------------------------
# Scoring helpers
# ---------------------------------------------------------------------------

def compute_factor_scores(
    profile: CropProfile,
    weather: RegionWeather,
    soil_type: str,
    current_month: int,
) -> dict[str, float]:
    return {
        "temperature": temperature_score(profile.temperature.optimal, weather.temperature),
        "rainfall":    rainfall_score(profile.rainfall.optimal, weather.rainfall),
        "humidity":    humidity_score(profile.humidity.optimal, weather.humidity),
        "soil":        soil_score(profile.soils, soil_type),
        "timing":      timing_score(profile.sowing_windows, current_month),
    }


def aggregate_score(scores: dict[str, float], aggregation: str | None = None) -> float:
    """Combine factor scores into one suitability figure in [0, 1]."""
    mode = validate_aggregation(aggregation)
    if mode == "mean":
        value = float(np.mean([scores[f] for f in MEAN_FACTORS]))
    else:
        factors = list(SCORING_WEIGHTS)
        value = float(np.average(
            [scores[f] for f in factors],
            weights=[SCORING_WEIGHTS[f] for f in factors],
        ))
    return max(0.0, min(1.0, value))


def confidence_label(score: float) -> str:
    """High ≥ 0.8, Medium ≥ 0.6, else Low."""
    for threshold, label in CONFIDENCE_LEVELS:
        if score >= threshold:
            return label
    return CONFIDENCE_FLOOR_LABEL


def season_success_multiplier(season: str, region: str, history: HistoryStore) -> float:
    """Historical success rate of the season's representative crop in the region."""
    crop = SEASON_HISTORY_CROP.get((season or "").lower(), DEFAULT_HISTORY_CROP)
    return history.success_multiplier(crop, region)


def select_sowing_window(
    profile: CropProfile,
    region: str,
    suitability: float,
    current_month: int,
    history: HistoryStore,
) -> dict:
    """
    Pick the best window strictly after current_month.
    Returns {season, window, month, multiplier, window_score}; season is
    "unknown" when nothing qualifies. multiplier is the chosen window's own.
    """
    best = None
    for window in profile.sowing_windows:
        month = season_month(window.season)
        if month <= current_month:
            continue
        multiplier = season_success_multiplier(window.season, region, history)
        candidate = {
            "season": window.season,
            "window": {"start": window.start, "end": window.end, "optimal": window.optimal},
            "month": month,
            "multiplier": multiplier,
            "window_score": suitability * multiplier,
        }
        if best is None or (candidate["window_score"], -month) > (best["window_score"], -best["month"]):
            best = candidate

    if best is None:
        log.info(
            "No sowing window for %s after month %d; returning unavailable window.",
            profile.crop_id, current_month,
        )
        return {
            "season": UNKNOWN_SEASON,
            "window": {"start": None, "end": None, "optimal": UNAVAILABLE_SOWING_DATE},
            "month": None,
            "multiplier": None,
            "window_score": 0.0,
        }
    return best


def generate_recommendations(
    region: str,
    suitability: float,
    reference: ReferenceData,
) -> list[str]:
    recommendations = []
    if suitability < LOW_SUITABILITY_THRESHOLD:
        recommendations.append("Consider alternative crops better suited to your region")
        recommendations.append("Implement climate adaptation strategies")
    if suitability >= HIGH_SUITABILITY_THRESHOLD:
        recommendations.append("Optimal conditions detected - proceed with recommended timeline")
        recommendations.append("Consider precision agriculture techniques for maximum yield")
    recommendations.extend(reference.region_advisories.get((region or "").strip(), ()))
    return recommendations


# ---------------------------------------------------------------------------
# Main prediction API
# ---------------------------------------------------------------------------

def predict_sowing_window(
    crop: str,
    region: str,
    soil_type: str,
    current_month: int,
    *,
    reference: ReferenceData | None = None,
    history: HistoryStore | None = None,
    aggregation: str | None = None,
) -> dict | None:
    """
    Suitability analysis and next sowing window for one crop/region/soil.

    Parameters
    ----------
    crop : str
        Crop id or common alias (e.g. 'rice', 'paddy').
    region : str
        Region name; unknown regions use the default region's weather.
    soil_type : str
        Soil class such as 'clay', 'loamy', 'sandy'.
    current_month : int
        1-12. Only windows after this month are recommended.
    reference : ReferenceData or None
        Override for the embedded reference tables.
    history : HistoryStore or None
        Override for the process-wide historical outcome store.
    aggregation : str or None
        "weighted" or "mean". Overrides config default if given.

    Returns
    -------
    dict, or None when the crop is unknown. Keys:
        crop, crop_name, region, region_used, region_defaulted, soil_type,
        current_month, climate_analysis, suitability_score, aggregation,
        confidence, season, sowing_window, optimal_sowing_date,
        success_multiplier, recommendations
    """
    month = validate_month(current_month)
    soil = _validate_soil(soil_type)
    mode = validate_aggregation(aggregation)
    ref = reference or default_reference_data()

    profile = get_crop_profile(crop, ref)
    if profile is None:
        log.info("Prediction unavailable: unknown crop '%s'.", crop)
        return None

    hist = history if history is not None else get_history_store()
    weather, defaulted = resolve_region_weather(region, ref)

    scores = compute_factor_scores(profile, weather, soil, month)
    # Rounded once; confidence and advice use the reported figure
    suitability = round(aggregate_score(scores, mode), 4)
    window = select_sowing_window(profile, region, suitability, month, hist)

    return {
        "crop":                profile.crop_id,
        "crop_name":           profile.name,
        "region":              region,
        "region_used":         weather.region,
        "region_defaulted":    defaulted,
        "soil_type":           soil,
        "current_month":       month,
        "climate_analysis":    {
            f: {"score": round(scores[f], 4), "status": factor_status(f, scores[f])}
            for f in FACTORS
        },
        "suitability_score":   suitability,
        "aggregation":         mode,
        "confidence":          confidence_label(suitability),
        "season":              window["season"],
        "sowing_window":       window["window"],
        "optimal_sowing_date": window["window"]["optimal"],
        "success_multiplier":  window["multiplier"],
        "recommendations":     generate_recommendations(region, suitability, ref),
    }

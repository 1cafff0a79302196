"""
Per-factor suitability scores (0-1) for a crop in a region.

    temperature = max(0, 1 - |optimal - annual| / 10) × seasonal_adjustment, capped at 1
    seasonal_adjustment = max(0.8, 1 - |kharif - rabi| / 10)
    rainfall    = mean(max(0, 1 - |optimal - annual| / 500), distribution)
    distribution = 1 - |kharif / (kharif + rabi + zaid) - 0.6|
    humidity    = max(0, 1 - |optimal - annual| / 20)
    soil        = 1.0 if the soil is compatible else 0.5
    timing      = max over windows of max(0, 1 - |season_month - current_month| / 6)

All functions are pure; they never look at global state beyond the
constants in config.
"""

from typing import Iterable

from sowing_advisor.config import (
    TEMP_TOLERANCE_C,
    RAINFALL_TOLERANCE_MM,
    HUMIDITY_TOLERANCE_PCT,
    TIMING_TOLERANCE_MONTHS,
    SEASONAL_ADJUSTMENT_FLOOR,
    KHARIF_RAIN_SHARE_TARGET,
    SOIL_PARTIAL_CREDIT,
    FACTOR_OPTIMAL_THRESHOLD,
    SOIL_COMPATIBLE_THRESHOLD,
    SEASON_MONTHS,
    DEFAULT_SEASON_MONTH,
)
from sowing_advisor.reference_data import SeasonalBaseline, SowingWindow


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def _closeness(optimal: float, actual: float, tolerance: float) -> float:
    """1 at the optimum, falling linearly to 0 at ±tolerance."""
    return max(0.0, 1.0 - abs(optimal - actual) / tolerance)


def season_month(season: str) -> int:
    """Calendar month anchoring a season; unknown seasons map to January."""
    return SEASON_MONTHS.get((season or "").lower(), DEFAULT_SEASON_MONTH)


def seasonal_adjustment(temperature: SeasonalBaseline) -> float:
    """Penalty multiplier for large kharif/rabi temperature swings (≥ 0.8)."""
    variation = abs(temperature.kharif - temperature.rabi) / TEMP_TOLERANCE_C
    return max(SEASONAL_ADJUSTMENT_FLOOR, 1.0 - variation)


def temperature_score(crop_optimal_c: float, temperature: SeasonalBaseline) -> float:
    base = _closeness(crop_optimal_c, temperature.annual, TEMP_TOLERANCE_C)
    return _clamp(min(1.0, base * seasonal_adjustment(temperature)))


def rainfall_distribution_score(rainfall: SeasonalBaseline) -> float:
    """How close the kharif share of seasonal rain is to the 60% target."""
    total = rainfall.kharif + rainfall.rabi + rainfall.zaid
    if total <= 0:
        return 0.0
    kharif_share = rainfall.kharif / total
    return _clamp(1.0 - abs(kharif_share - KHARIF_RAIN_SHARE_TARGET))


def rainfall_score(crop_optimal_mm: float, rainfall: SeasonalBaseline) -> float:
    base = _closeness(crop_optimal_mm, rainfall.annual, RAINFALL_TOLERANCE_MM)
    return _clamp((base + rainfall_distribution_score(rainfall)) / 2)


def humidity_score(crop_optimal_pct: float, humidity: SeasonalBaseline) -> float:
    return _clamp(_closeness(crop_optimal_pct, humidity.annual, HUMIDITY_TOLERANCE_PCT))


def soil_score(compatible_soils: Iterable[str], soil_type: str) -> float:
    soils = {s.lower() for s in compatible_soils}
    return 1.0 if (soil_type or "").strip().lower() in soils else SOIL_PARTIAL_CREDIT


def timing_score(sowing_windows: Iterable[SowingWindow], current_month: int) -> float:
    """Best closeness of any window's season month to the current month (plain distance)."""
    best = 0.0
    for window in sowing_windows:
        diff = abs(season_month(window.season) - current_month)
        best = max(best, _closeness(0, diff, TIMING_TOLERANCE_MONTHS))
    return _clamp(best)


def factor_status(factor: str, score: float) -> str:
    if factor == "soil":
        return "Compatible" if score > SOIL_COMPATIBLE_THRESHOLD else "Moderate"
    return "Optimal" if score > FACTOR_OPTIMAL_THRESHOLD else "Sub-optimal"

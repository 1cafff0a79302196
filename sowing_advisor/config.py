"""
Configuration and constants for the Sowing Advisor.
Centralizes paths, scoring weights, tolerances, confidence thresholds,
fallback values and the fixed economics used by the plan generator.
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# Base paths (project root = parent of 'sowing_advisor')
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
PROCESSED_DATA_DIR = DATA_DIR / "processed"
REPORTS_DIR = PROJECT_ROOT / "reports"
FIGURES_DIR = REPORTS_DIR / "figures"

# ---------------------------------------------------------------------------
# Data file names
#
# Expected schema:
#   historical_outcomes.csv : crop, region, avg_yield, success_rate, samples
# If the file is absent the store starts from the embedded seed records.
# ---------------------------------------------------------------------------
HISTORY_FNAME = "historical_outcomes.csv"

# ---------------------------------------------------------------------------
# Suitability aggregation
# ---------------------------------------------------------------------------
AGGREGATION_MODE = "weighted"   # "weighted" | "mean"
AGGREGATION_MODES = ("weighted", "mean")

# Weighted mode: sums to 1.0
SCORING_WEIGHTS: dict[str, float] = {
    "temperature": 0.30,
    "rainfall":    0.25,
    "humidity":    0.20,
    "soil":        0.15,
    "timing":      0.10,
}
# Mean mode averages only the climate + soil factors
MEAN_FACTORS = ("temperature", "rainfall", "humidity", "soil")

# ---------------------------------------------------------------------------
# Per-factor tolerances: a deviation of this size zeroes the factor score
# ---------------------------------------------------------------------------
TEMP_TOLERANCE_C        = 10.0
RAINFALL_TOLERANCE_MM   = 500.0
HUMIDITY_TOLERANCE_PCT  = 20.0
TIMING_TOLERANCE_MONTHS = 6.0

SEASONAL_ADJUSTMENT_FLOOR = 0.8   # minimum multiplier for intra-year temperature swing
KHARIF_RAIN_SHARE_TARGET  = 0.6   # preferred share of seasonal rain falling in kharif
SOIL_PARTIAL_CREDIT       = 0.5   # soil score when the soil is not in the crop's list

# Factor status labels
FACTOR_OPTIMAL_THRESHOLD    = 0.7   # score > threshold → "Optimal"
SOIL_COMPATIBLE_THRESHOLD   = 0.8   # soil score > threshold → "Compatible"

# ---------------------------------------------------------------------------
# Confidence and recommendation thresholds
# ---------------------------------------------------------------------------
CONFIDENCE_LEVELS = [(0.8, "High"), (0.6, "Medium")]
CONFIDENCE_FLOOR_LABEL = "Low"

LOW_SUITABILITY_THRESHOLD  = 0.7   # below → alternatives / adaptation advice, climate risk
HIGH_SUITABILITY_THRESHOLD = 0.8   # at/above → affirm timing, precision agriculture

# ---------------------------------------------------------------------------
# Seasons and sowing windows
# ---------------------------------------------------------------------------
SEASON_MONTHS: dict[str, int] = {
    "kharif": 6,    # June
    "rabi":   11,   # November
    "zaid":   3,    # March
    "spring": 2,    # February
    "autumn": 9,    # September
}
DEFAULT_SEASON_MONTH = 1

# Crop whose (crop, region) history rates a season's window
SEASON_HISTORY_CROP: dict[str, str] = {
    "kharif": "rice",
    "rabi":   "wheat",
    "zaid":   "maize",
}
DEFAULT_HISTORY_CROP = "rice"

UNKNOWN_SEASON        = "unknown"
UNAVAILABLE_SOWING_DATE = "Not available"

# Historical success rate used when no record exists for a crop/region pair
DEFAULT_SUCCESS_MULTIPLIER = 0.8

# ---------------------------------------------------------------------------
# Regions
# ---------------------------------------------------------------------------
DEFAULT_REGION = "Tamil Nadu"   # weather baseline used for unknown regions

# ---------------------------------------------------------------------------
# Plan economics (fixed, single currency; not a market-price lookup)
# ---------------------------------------------------------------------------
CURRENCY        = "INR"
CURRENCY_SYMBOL = "₹"

AREA_UTILISATION = 0.8   # share of the farm put under the crop; rest is buffer

INPUT_COST_PER_ACRE     = 15_000
LABOUR_COST_PER_ACRE    = 8_000
EQUIPMENT_COST_PER_ACRE = 5_000
UNIT_PRICE_INR          = 2_000   # per unit of the crop's expected-yield unit

EXPERIENCE_TIERS = ("beginner", "intermediate", "expert")
EXPERIENCE_EQUIPMENT: dict[str, list[str]] = {
    "beginner":     ["Irrigation System", "Weather Station"],
    "intermediate": [],
    "expert":       ["Precision Agriculture Tools", "Drone"],
}

UNKNOWN_REQUIREMENT = "unknown"


# ---------------------------------------------------------------------------
# Ensure directories exist (called when CLI / app starts)
# ---------------------------------------------------------------------------
def ensure_dirs():
    PROCESSED_DATA_DIR.mkdir(parents=True, exist_ok=True)
    FIGURES_DIR.mkdir(parents=True, exist_ok=True)

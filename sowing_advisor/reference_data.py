"""
Agronomic reference tables for sowing-window and crop-plan advisory.

Contents:
  - Crop profiles     : varieties, climate requirement ranges, compatible soils,
                        sowing windows per season, tools, fertilizer regimen,
                        pest management, water requirement, expected yield.
  - Region weather    : annual + kharif/rabi/zaid baselines for temperature (°C),
                        rainfall (mm) and humidity (%).
  - Region advisories : static advice strings appended to every prediction.
  - Seed rates        : per-acre seed quantity for crops where it is known.
  - Crop timelines    : ordered growth stages with duration and activities.
  - Risky pairs       : structural (crop, region) risks such as water scarcity.
  - Historical seeds  : initial average yield / success rate per (crop, region).

The raw tables are plain dicts so they stay easy to edit; at import time they
are converted into frozen dataclasses and read-only mappings bundled in a
ReferenceData object. Pass a custom ReferenceData into the scoring and plan
functions to substitute fixtures.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from sowing_advisor.config import DEFAULT_REGION

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ClimateRange:
    minimum: float
    maximum: float
    optimal: float


@dataclass(frozen=True)
class SowingWindow:
    season: str
    start: str
    end: str
    optimal: str


@dataclass(frozen=True)
class SeasonalBaseline:
    annual: float
    kharif: float
    rabi: float
    zaid: float


@dataclass(frozen=True)
class RegionWeather:
    region: str
    temperature: SeasonalBaseline
    rainfall: SeasonalBaseline
    humidity: SeasonalBaseline


@dataclass(frozen=True)
class TimelineStage:
    stage: str
    duration_days: int
    activities: tuple[str, ...]


@dataclass(frozen=True)
class CropProfile:
    """Immutable agronomic description of one crop."""

    crop_id: str
    name: str
    varieties: tuple[str, ...]
    temperature: ClimateRange
    rainfall: ClimateRange
    humidity: ClimateRange
    soils: frozenset[str]
    sowing_windows: tuple[SowingWindow, ...]
    tools: tuple[str, ...]
    fertilizers: Mapping[str, str]
    pest_management: tuple[str, ...]
    water_requirement: str
    yield_min: float
    yield_max: float
    yield_unit: str

    @property
    def average_yield(self) -> float:
        return (self.yield_min + self.yield_max) / 2


@dataclass(frozen=True)
class ReferenceData:
    """Bundle of read-only tables consumed by scoring, prediction and planning."""

    crops: Mapping[str, CropProfile]
    regions: Mapping[str, RegionWeather]
    region_advisories: Mapping[str, tuple[str, ...]]
    seed_rates: Mapping[str, tuple[float, str]]
    timelines: Mapping[str, tuple[TimelineStage, ...]]
    risky_pairs: Mapping[tuple[str, str], Mapping[str, str]]
    historical_seed: Mapping[tuple[str, str], Mapping[str, float]]
    default_region: str = DEFAULT_REGION
    default_timeline_crop: str = "rice"
    crop_aliases: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


# ---------------------------------------------------------------------------
# Crop profiles
# Climate: temperature °C, rainfall mm/year, humidity %.
# Sowing windows are keyed by season name (see config.SEASON_MONTHS).
# ---------------------------------------------------------------------------
CROP_TABLE: dict[str, dict] = {
    "rice": {
        "name": "Rice",
        "varieties": ["ADT-43", "IR-64", "Pusa Basmati", "Swarna"],
        "temperature": (20, 35, 25), "rainfall": (1000, 2000, 1500), "humidity": (60, 90, 75),
        "soil": ["clay", "loamy", "silt"],
        "sowing_windows": {
            "kharif": ("June", "July", "June 15"),
            "rabi":   ("November", "December", "November 15"),
        },
        "tools": ["Tractor", "Puddler", "Transplanter", "Combine Harvester"],
        "fertilizers": {
            "basal": "NPK 20-20-0 @ 250 kg/acre",
            "top_dress": "Urea @ 100 kg/acre",
            "micronutrients": "Zinc Sulphate @ 25 kg/acre",
        },
        "pest_management": ["IPM", "Biological Control", "Chemical Pesticides"],
        "water_requirement": "High",
        "expected_yield": (3, 5, "tons/acre"),
    },
    "wheat": {
        "name": "Wheat",
        "varieties": ["HD-2967", "PBW-343", "UP-2338", "K-9107"],
        "temperature": (15, 25, 20), "rainfall": (400, 800, 600), "humidity": (40, 70, 55),
        "soil": ["loamy", "clay", "silt"],
        "sowing_windows": {
            "rabi": ("November", "December", "November 15"),
        },
        "tools": ["Tractor", "Seed Drill", "Combine Harvester", "Thresher"],
        "fertilizers": {
            "basal": "NPK 12-32-16 @ 150 kg/acre",
            "top_dress": "Urea @ 80 kg/acre",
            "micronutrients": "Boron @ 2 kg/acre",
        },
        "pest_management": ["Fungicides", "Insecticides", "IPM"],
        "water_requirement": "Medium",
        "expected_yield": (20, 30, "quintals/acre"),
    },
    "maize": {
        "name": "Maize",
        "varieties": ["African Tall", "Ganga Safed", "Pioneer", "Syngenta"],
        "temperature": (18, 32, 25), "rainfall": (500, 1200, 800), "humidity": (50, 80, 65),
        "soil": ["loamy", "sandy", "clay"],
        "sowing_windows": {
            "kharif": ("June", "July", "June 1"),
            "rabi":   ("January", "February", "January 15"),
            "zaid":   ("March", "April", "March 15"),
        },
        "tools": ["Tractor", "Seed Drill", "Sprayer", "Harvester"],
        "fertilizers": {
            "basal": "NPK 17-17-17 @ 200 kg/acre",
            "top_dress": "Urea @ 120 kg/acre",
            "micronutrients": "Zinc Sulphate @ 20 kg/acre",
        },
        "pest_management": ["IPM", "Biological Control", "Chemical Control"],
        "water_requirement": "Medium",
        "expected_yield": (25, 35, "quintals/acre"),
    },
    "cotton": {
        "name": "Cotton",
        "varieties": ["Suraj", "Bunny", "RCH-2", "Ankur"],
        "temperature": (20, 35, 28), "rainfall": (600, 1200, 900), "humidity": (60, 85, 72),
        "soil": ["black", "red", "loamy"],
        "sowing_windows": {
            "kharif": ("June", "July", "June 1"),
        },
        "tools": ["Tractor", "Seed Drill", "Sprayer", "Cotton Picker"],
        "fertilizers": {
            "basal": "NPK 17-17-17 @ 200 kg/acre",
            "top_dress": "Urea @ 100 kg/acre",
            "micronutrients": "Boron @ 1.5 kg/acre",
        },
        "pest_management": ["IPM", "Biological Control", "Chemical Pesticides"],
        "water_requirement": "Medium",
        "expected_yield": (15, 20, "quintals/acre"),
    },
    "sugarcane": {
        "name": "Sugarcane",
        "varieties": ["Co-86032", "Co-0238", "Co-1148", "Co-15023"],
        "temperature": (20, 38, 30), "rainfall": (800, 1500, 1200), "humidity": (65, 90, 80),
        "soil": ["loamy", "clay", "silt"],
        "sowing_windows": {
            "spring": ("February", "March", "February 15"),
            "autumn": ("September", "October", "September 15"),
        },
        "tools": ["Tractor", "Planter", "Harvester", "Crusher"],
        "fertilizers": {
            "basal": "NPK 20-20-0 @ 300 kg/acre",
            "top_dress": "Urea @ 150 kg/acre",
            "micronutrients": "Zinc Sulphate @ 30 kg/acre",
        },
        "pest_management": ["IPM", "Biological Control", "Chemical Control"],
        "water_requirement": "High",
        "expected_yield": (300, 400, "tons/acre"),
    },
    "corn": {
        "name": "Corn",
        "varieties": ["Sweet Corn", "Field Corn", "Popcorn", "Dent Corn"],
        "temperature": (18, 32, 25), "rainfall": (500, 1200, 800), "humidity": (50, 80, 65),
        "soil": ["loamy", "sandy", "clay"],
        "sowing_windows": {
            "kharif": ("June", "July", "June 1"),
            "rabi":   ("January", "February", "January 15"),
        },
        "tools": ["Tractor", "Seed Drill", "Sprayer", "Harvester"],
        "fertilizers": {
            "basal": "NPK 17-17-17 @ 200 kg/acre",
            "top_dress": "Urea @ 120 kg/acre",
            "micronutrients": "Zinc Sulphate @ 20 kg/acre",
        },
        "pest_management": ["IPM", "Biological Control", "Chemical Control"],
        "water_requirement": "Medium",
        "expected_yield": (25, 35, "quintals/acre"),
    },
    "soybean": {
        "name": "Soybean",
        "varieties": ["JS-335", "JS-9305", "MAUS-47", "PK-472"],
        "temperature": (20, 35, 28), "rainfall": (600, 1000, 800), "humidity": (60, 85, 72),
        "soil": ["loamy", "clay", "silt"],
        "sowing_windows": {
            "kharif": ("June", "July", "June 15"),
        },
        "tools": ["Tractor", "Seed Drill", "Sprayer", "Combine"],
        "fertilizers": {
            "basal": "NPK 12-32-16 @ 150 kg/acre",
            "top_dress": "Urea @ 80 kg/acre",
            "micronutrients": "Boron @ 2 kg/acre",
        },
        "pest_management": ["IPM", "Biological Control", "Chemical Pesticides"],
        "water_requirement": "Medium",
        "expected_yield": (15, 25, "quintals/acre"),
    },
    "mustard": {
        "name": "Mustard",
        "varieties": ["Pusa Bold", "Pusa Agrani", "Varuna", "Kranti"],
        "temperature": (15, 25, 20), "rainfall": (300, 600, 450), "humidity": (40, 70, 55),
        "soil": ["loamy", "clay", "silt"],
        "sowing_windows": {
            "rabi": ("October", "November", "October 15"),
        },
        "tools": ["Tractor", "Seed Drill", "Sprayer"],
        "fertilizers": {
            "basal": "NPK 18-46-0 @ 100 kg/acre",
            "top_dress": "Urea @ 60 kg/acre",
            "micronutrients": "Boron @ 1 kg/acre",
        },
        "pest_management": ["IPM", "Fungicides", "Insecticides"],
        "water_requirement": "Low",
        "expected_yield": (8, 12, "quintals/acre"),
    },
    "chickpea": {
        "name": "Chickpea",
        "varieties": ["Pusa-372", "Pusa-391", "JG-11", "KAK-2"],
        "temperature": (15, 25, 20), "rainfall": (400, 700, 550), "humidity": (45, 75, 60),
        "soil": ["loamy", "clay", "silt"],
        "sowing_windows": {
            "rabi": ("October", "November", "October 15"),
        },
        "tools": ["Tractor", "Seed Drill", "Sprayer"],
        "fertilizers": {
            "basal": "NPK 12-32-16 @ 100 kg/acre",
            "top_dress": "Urea @ 50 kg/acre",
            "micronutrients": "Zinc Sulphate @ 15 kg/acre",
        },
        "pest_management": ["IPM", "Biological Control", "Chemical Control"],
        "water_requirement": "Low",
        "expected_yield": (12, 18, "quintals/acre"),
    },
    "tomato": {
        "name": "Tomato",
        "varieties": ["Pusa Ruby", "Pusa Early Dwarf", "Arka Vikas", "Hybrid"],
        "temperature": (20, 30, 25), "rainfall": (400, 800, 600), "humidity": (50, 80, 65),
        "soil": ["loamy", "sandy", "clay"],
        "sowing_windows": {
            "kharif": ("June", "July", "June 15"),
            "rabi":   ("November", "December", "November 15"),
            "zaid":   ("February", "March", "February 15"),
        },
        "tools": ["Tractor", "Transplanter", "Sprayer", "Harvester"],
        "fertilizers": {
            "basal": "NPK 20-20-0 @ 150 kg/acre",
            "top_dress": "Urea @ 100 kg/acre",
            "micronutrients": "Boron @ 2 kg/acre",
        },
        "pest_management": ["IPM", "Biological Control", "Chemical Pesticides"],
        "water_requirement": "Medium",
        "expected_yield": (200, 300, "quintals/acre"),
    },
    "onion": {
        "name": "Onion",
        "varieties": ["Pusa Red", "Pusa White", "Arka Kalyan", "Hybrid"],
        "temperature": (15, 30, 22), "rainfall": (300, 600, 450), "humidity": (40, 70, 55),
        "soil": ["loamy", "sandy", "clay"],
        "sowing_windows": {
            "kharif": ("May", "June", "May 15"),
            "rabi":   ("October", "November", "October 15"),
        },
        "tools": ["Tractor", "Transplanter", "Sprayer"],
        "fertilizers": {
            "basal": "NPK 12-32-16 @ 120 kg/acre",
            "top_dress": "Urea @ 80 kg/acre",
            "micronutrients": "Zinc Sulphate @ 20 kg/acre",
        },
        "pest_management": ["IPM", "Biological Control", "Chemical Control"],
        "water_requirement": "Medium",
        "expected_yield": (150, 250, "quintals/acre"),
    },
    "potato": {
        "name": "Potato",
        "varieties": ["Kufri Chandramukhi", "Kufri Jyoti", "Kufri Bahar", "Hybrid"],
        "temperature": (15, 25, 20), "rainfall": (400, 700, 550), "humidity": (50, 80, 65),
        "soil": ["loamy", "sandy", "clay"],
        "sowing_windows": {
            "rabi": ("October", "November", "October 15"),
            "zaid": ("January", "February", "January 15"),
        },
        "tools": ["Tractor", "Planter", "Sprayer", "Harvester"],
        "fertilizers": {
            "basal": "NPK 15-15-15 @ 200 kg/acre",
            "top_dress": "Urea @ 120 kg/acre",
            "micronutrients": "Boron @ 2 kg/acre",
        },
        "pest_management": ["IPM", "Biological Control", "Chemical Pesticides"],
        "water_requirement": "Medium",
        "expected_yield": (200, 300, "quintals/acre"),
    },
    "chili": {
        "name": "Chili",
        "varieties": ["Pusa Jwala", "Pusa Sadabahar", "Arka Lohit", "Hybrid"],
        "temperature": (20, 35, 28), "rainfall": (400, 800, 600), "humidity": (50, 80, 65),
        "soil": ["loamy", "sandy", "clay"],
        "sowing_windows": {
            "kharif": ("June", "July", "June 15"),
            "rabi":   ("November", "December", "November 15"),
        },
        "tools": ["Tractor", "Transplanter", "Sprayer"],
        "fertilizers": {
            "basal": "NPK 20-20-0 @ 150 kg/acre",
            "top_dress": "Urea @ 100 kg/acre",
            "micronutrients": "Boron @ 2 kg/acre",
        },
        "pest_management": ["IPM", "Biological Control", "Chemical Pesticides"],
        "water_requirement": "Medium",
        "expected_yield": (80, 120, "quintals/acre"),
    },
}

# Common variant spellings → canonical crop id
CROP_ALIASES: dict[str, str] = {
    "paddy": "rice", "dhan": "rice",
    "gehun": "wheat",
    "makka": "maize",
    "kapas": "cotton",
    "ganna": "sugarcane",
    "soyabean": "soybean", "soya": "soybean",
    "sarson": "mustard",
    "chana": "chickpea", "gram": "chickpea", "bengal gram": "chickpea",
    "tamatar": "tomato",
    "pyaz": "onion",
    "aloo": "potato",
    "chilli": "chili", "chillies": "chili", "mirchi": "chili",
}

# ---------------------------------------------------------------------------
# Region weather baselines: (annual, kharif, rabi, zaid)
# ---------------------------------------------------------------------------
WEATHER_TABLE: dict[str, dict[str, tuple[float, float, float, float]]] = {
    "Tamil Nadu": {
        "temperature": (25, 28, 22, 32),
        "rainfall":    (1000, 600, 200, 100),
        "humidity":    (70, 80, 60, 50),
    },
    "Punjab": {
        "temperature": (22, 30, 15, 35),
        "rainfall":    (600, 400, 100, 50),
        "humidity":    (60, 70, 45, 40),
    },
    "Maharashtra": {
        "temperature": (26, 30, 20, 35),
        "rainfall":    (1200, 800, 150, 80),
        "humidity":    (65, 75, 55, 45),
    },
    "Karnataka": {
        "temperature": (24, 28, 18, 30),
        "rainfall":    (1100, 700, 180, 90),
        "humidity":    (68, 78, 58, 48),
    },
}

REGION_ADVISORIES: dict[str, list[str]] = {
    "Tamil Nadu": [
        "Consider water management strategies for summer months",
        "Monitor for pest outbreaks during monsoon season",
    ],
    "Punjab": [
        "Implement water conservation techniques",
        "Consider crop rotation to maintain soil health",
    ],
    "Maharashtra": [
        "Plan for variable rainfall patterns",
        "Consider drought-resistant crop varieties",
    ],
}

# ---------------------------------------------------------------------------
# Seed rate per acre: (quantity, unit)
# ---------------------------------------------------------------------------
SEED_RATES: dict[str, tuple[float, str]] = {
    "rice":      (25, "kg"),
    "wheat":     (40, "kg"),
    "maize":     (25, "kg"),
    "cotton":    (1.5, "kg"),
    "sugarcane": (35_000, "setts"),
}

# ---------------------------------------------------------------------------
# Growth timelines: [(stage, duration_days, activities)]
# ---------------------------------------------------------------------------
TIMELINE_TABLE: dict[str, list[tuple[str, int, list[str]]]] = {
    "rice": [
        ("Land Preparation",    15, ["Plowing", "Puddling", "Leveling"]),
        ("Nursery Preparation", 25, ["Seed treatment", "Nursery management"]),
        ("Transplanting",        7, ["Transplanting", "Gap filling"]),
        ("Vegetative Growth",   45, ["Weeding", "Fertilizer application"]),
        ("Reproductive Phase",  30, ["Pest monitoring", "Water management"]),
        ("Harvesting",          15, ["Harvesting", "Threshing", "Storage"]),
    ],
    "wheat": [
        ("Land Preparation",   10, ["Plowing", "Harrowing", "Leveling"]),
        ("Sowing",              5, ["Seed treatment", "Sowing"]),
        ("Vegetative Growth",  60, ["Weeding", "Fertilizer application"]),
        ("Reproductive Phase", 40, ["Pest monitoring", "Irrigation"]),
        ("Harvesting",         10, ["Harvesting", "Threshing"]),
    ],
}

# ---------------------------------------------------------------------------
# Structural (crop, region) risks
# ---------------------------------------------------------------------------
RISKY_PAIRS: dict[tuple[str, str], dict[str, str]] = {
    ("rice", "Punjab"): {
        "factor": "Water Scarcity",
        "impact": "High",
        "mitigation": "Implement water-efficient irrigation systems",
    },
}

# ---------------------------------------------------------------------------
# Historical outcomes (seed records): avg_yield in the crop's yield unit
# ---------------------------------------------------------------------------
HISTORICAL_SEED: dict[tuple[str, str], dict[str, float]] = {
    ("rice", "Tamil Nadu"):      {"avg_yield": 4.2, "success_rate": 0.85},
    ("rice", "Punjab"):          {"avg_yield": 3.8, "success_rate": 0.78},
    ("rice", "Maharashtra"):     {"avg_yield": 4.0, "success_rate": 0.82},
    ("wheat", "Punjab"):         {"avg_yield": 28,  "success_rate": 0.90},
    ("wheat", "Uttar Pradesh"):  {"avg_yield": 26,  "success_rate": 0.88},
    ("wheat", "Madhya Pradesh"): {"avg_yield": 24,  "success_rate": 0.85},
    ("maize", "Karnataka"):      {"avg_yield": 30,  "success_rate": 0.80},
    ("maize", "Maharashtra"):    {"avg_yield": 28,  "success_rate": 0.78},
    ("maize", "Tamil Nadu"):     {"avg_yield": 26,  "success_rate": 0.75},
}


# ---------------------------------------------------------------------------
# Table → container conversion
# ---------------------------------------------------------------------------

def _build_profile(crop_id: str, raw: dict) -> CropProfile:
    y_min, y_max, y_unit = raw["expected_yield"]
    return CropProfile(
        crop_id=crop_id,
        name=raw["name"],
        varieties=tuple(raw["varieties"]),
        temperature=ClimateRange(*raw["temperature"]),
        rainfall=ClimateRange(*raw["rainfall"]),
        humidity=ClimateRange(*raw["humidity"]),
        soils=frozenset(raw["soil"]),
        sowing_windows=tuple(
            SowingWindow(season, start, end, optimal)
            for season, (start, end, optimal) in raw["sowing_windows"].items()
        ),
        tools=tuple(raw["tools"]),
        fertilizers=MappingProxyType(dict(raw["fertilizers"])),
        pest_management=tuple(raw["pest_management"]),
        water_requirement=raw["water_requirement"],
        yield_min=float(y_min),
        yield_max=float(y_max),
        yield_unit=y_unit,
    )


def _build_weather(region: str, raw: dict) -> RegionWeather:
    return RegionWeather(
        region=region,
        temperature=SeasonalBaseline(*raw["temperature"]),
        rainfall=SeasonalBaseline(*raw["rainfall"]),
        humidity=SeasonalBaseline(*raw["humidity"]),
    )


def build_reference_data(
    crop_table: dict[str, dict] | None = None,
    weather_table: dict[str, dict] | None = None,
    default_region: str = DEFAULT_REGION,
) -> ReferenceData:
    """
    Assemble a ReferenceData bundle from raw tables.
    Omitted tables fall back to the embedded ones.
    """
    crop_table = CROP_TABLE if crop_table is None else crop_table
    weather_table = WEATHER_TABLE if weather_table is None else weather_table
    if default_region not in weather_table:
        raise ValueError(f"Default region '{default_region}' has no weather baseline")

    return ReferenceData(
        crops=MappingProxyType({k: _build_profile(k, v) for k, v in crop_table.items()}),
        regions=MappingProxyType({k: _build_weather(k, v) for k, v in weather_table.items()}),
        region_advisories=MappingProxyType({k: tuple(v) for k, v in REGION_ADVISORIES.items()}),
        seed_rates=MappingProxyType(dict(SEED_RATES)),
        timelines=MappingProxyType({
            crop: tuple(TimelineStage(name, days, tuple(acts)) for name, days, acts in stages)
            for crop, stages in TIMELINE_TABLE.items()
        }),
        risky_pairs=MappingProxyType({k: MappingProxyType(dict(v)) for k, v in RISKY_PAIRS.items()}),
        historical_seed=MappingProxyType({k: MappingProxyType(dict(v)) for k, v in HISTORICAL_SEED.items()}),
        default_region=default_region,
        crop_aliases=MappingProxyType(dict(CROP_ALIASES)),
    )


@lru_cache(maxsize=1)
def default_reference_data() -> ReferenceData:
    """Embedded tables, built once per process."""
    return build_reference_data()


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def normalise_crop(name: str, reference: ReferenceData | None = None) -> str:
    """Lowercase, trim and map variant spellings to the canonical crop id."""
    ref = reference or default_reference_data()
    clean = " ".join(str(name or "").strip().lower().split())
    return ref.crop_aliases.get(clean, clean)


def get_crop_profile(crop: str, reference: ReferenceData | None = None) -> CropProfile | None:
    """Return the profile for a crop, or None when the crop is not in the table."""
    ref = reference or default_reference_data()
    return ref.crops.get(normalise_crop(crop, ref))


def get_region_weather(region: str, reference: ReferenceData | None = None) -> RegionWeather | None:
    """Strict lookup: None when there is no baseline for the region."""
    ref = reference or default_reference_data()
    return ref.regions.get((region or "").strip())


def resolve_region_weather(
    region: str,
    reference: ReferenceData | None = None,
) -> tuple[RegionWeather, bool]:
    """
    Return (weather, defaulted).
    Unknown regions resolve to the reference's default region with defaulted=True.
    """
    ref = reference or default_reference_data()
    weather = get_region_weather(region, ref)
    if weather is not None:
        return weather, False
    log.warning(
        "No weather baseline for region '%s'; using default region '%s'.",
        region, ref.default_region,
    )
    return ref.regions[ref.default_region], True


def list_crops(reference: ReferenceData | None = None) -> list[dict]:
    """Summaries for crop pickers: id, display name, varieties."""
    ref = reference or default_reference_data()
    return [
        {"id": p.crop_id, "name": p.name, "varieties": list(p.varieties)}
        for p in ref.crops.values()
    ]


def crop_profile_to_dict(profile: CropProfile) -> dict:
    return {
        "id": profile.crop_id,
        "name": profile.name,
        "varieties": list(profile.varieties),
        "climate": {
            factor: {"min": r.minimum, "max": r.maximum, "optimal": r.optimal}
            for factor, r in (
                ("temperature", profile.temperature),
                ("rainfall", profile.rainfall),
                ("humidity", profile.humidity),
            )
        },
        "soil": sorted(profile.soils),
        "sowing_windows": {
            w.season: {"start": w.start, "end": w.end, "optimal": w.optimal}
            for w in profile.sowing_windows
        },
        "tools": list(profile.tools),
        "fertilizers": dict(profile.fertilizers),
        "pest_management": list(profile.pest_management),
        "water_requirement": profile.water_requirement,
        "expected_yield": {
            "min": profile.yield_min,
            "max": profile.yield_max,
            "unit": profile.yield_unit,
        },
    }


def get_crop_details(crop: str, reference: ReferenceData | None = None) -> dict | None:
    """Full profile as a plain dict, or None for an unknown crop."""
    profile = get_crop_profile(crop, reference)
    return crop_profile_to_dict(profile) if profile else None


def region_weather_to_dict(weather: RegionWeather) -> dict:
    return {
        factor: {
            "annual": b.annual, "kharif": b.kharif, "rabi": b.rabi, "zaid": b.zaid,
        }
        for factor, b in (
            ("temperature", weather.temperature),
            ("rainfall", weather.rainfall),
            ("humidity", weather.humidity),
        )
    }

"""
Sowing Advisor — crop suitability, sowing-window and crop-plan engine.
"""

from sowing_advisor.history import HistoryStore, get_history_store, record_outcome
from sowing_advisor.plan_generator import generate_crop_plan
from sowing_advisor.predictor import predict_sowing_window
from sowing_advisor.reference_data import (
    ReferenceData,
    build_reference_data,
    default_reference_data,
    get_crop_details,
    list_crops,
)

__all__ = [
    "HistoryStore",
    "get_history_store",
    "record_outcome",
    "generate_crop_plan",
    "predict_sowing_window",
    "ReferenceData",
    "build_reference_data",
    "default_reference_data",
    "get_crop_details",
    "list_crops",
]

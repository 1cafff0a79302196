"""
Command-line access to the advisory engine.

Usage (from project root):
    python -m sowing_advisor.cli crops
    python -m sowing_advisor.cli weather Punjab
    python -m sowing_advisor.cli predict rice Punjab clay --month 8
    python -m sowing_advisor.cli plan wheat Punjab loamy --farm-size 10 --budget 50000 --experience beginner
    python -m sowing_advisor.cli record rice Punjab 4.1 --success

Output is JSON on stdout. Exit status: 0 ok, 1 unknown crop/region, 2 invalid input.
"""

import argparse
import json
import logging
import sys
from datetime import datetime

from sowing_advisor.config import AGGREGATION_MODES, EXPERIENCE_TIERS
from sowing_advisor.history import get_history_store
from sowing_advisor.plan_generator import generate_crop_plan
from sowing_advisor.predictor import predict_sowing_window
from sowing_advisor.reference_data import (
    get_crop_details,
    get_region_weather,
    list_crops,
    region_weather_to_dict,
)

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sowing-advisor",
        description="Crop suitability, sowing window and crop plan advisory.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_crops = sub.add_parser("crops", help="List crops, or show one crop's profile")
    p_crops.add_argument("crop", nargs="?", default=None)

    p_weather = sub.add_parser("weather", help="Show a region's weather baseline")
    p_weather.add_argument("region")

    p_predict = sub.add_parser("predict", help="Predict the next sowing window")
    p_predict.add_argument("crop")
    p_predict.add_argument("region")
    p_predict.add_argument("soil")
    p_predict.add_argument("--month", type=int, default=None, help="Current month 1-12 (default: now)")
    p_predict.add_argument("--aggregation", choices=AGGREGATION_MODES, default=None)
    p_predict.add_argument("--figure", default=None, help="Save a score breakdown PNG to this path")

    p_plan = sub.add_parser("plan", help="Generate a full crop plan")
    p_plan.add_argument("crop")
    p_plan.add_argument("region")
    p_plan.add_argument("soil")
    p_plan.add_argument("--farm-size", type=float, required=True, help="Farm size in acres")
    p_plan.add_argument("--budget", type=float, default=0.0, help="Budget in ₹")
    p_plan.add_argument("--experience", choices=EXPERIENCE_TIERS, default="intermediate")
    p_plan.add_argument("--month", type=int, default=None)
    p_plan.add_argument("--aggregation", choices=AGGREGATION_MODES, default=None)
    p_plan.add_argument("--figure", default=None, help="Save a financials PNG to this path")

    p_record = sub.add_parser("record", help="Record an observed season outcome")
    p_record.add_argument("crop")
    p_record.add_argument("region")
    p_record.add_argument("yield_value", type=float)
    p_record.add_argument("--success", action="store_true", help="Season counted as a success")
    p_record.add_argument("--no-save", action="store_true", help="Do not write the history CSV")

    return parser


def _emit(payload) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def run(args: argparse.Namespace) -> int:
    if args.command == "crops":
        if args.crop is None:
            _emit(list_crops())
            return 0
        details = get_crop_details(args.crop)
        if details is None:
            log.error("Unknown crop '%s'.", args.crop)
            return 1
        _emit(details)
        return 0

    if args.command == "weather":
        weather = get_region_weather(args.region)
        if weather is None:
            log.error("Weather data not available for region '%s'.", args.region)
            return 1
        _emit(region_weather_to_dict(weather))
        return 0

    if args.command == "predict":
        month = args.month if args.month is not None else datetime.now().month
        result = predict_sowing_window(
            args.crop, args.region, args.soil, month, aggregation=args.aggregation,
        )
        if result is None:
            log.error("Prediction unavailable: unknown crop '%s'.", args.crop)
            return 1
        if args.figure:
            from sowing_advisor.reporting import plot_score_breakdown
            log.info("Saved figure to %s", plot_score_breakdown(result, args.figure))
        _emit(result)
        return 0

    if args.command == "plan":
        plan = generate_crop_plan(
            args.crop, args.region, args.soil,
            args.farm_size, args.budget, args.experience,
            current_month=args.month, aggregation=args.aggregation,
        )
        if plan is None:
            log.error("Invalid crop selection '%s'.", args.crop)
            return 1
        if args.figure:
            from sowing_advisor.reporting import plot_financial_projection
            log.info("Saved figure to %s", plot_financial_projection(plan, args.figure))
        _emit(plan)
        return 0

    if args.command == "record":
        store = get_history_store()
        rec = store.record_outcome(args.crop, args.region, args.yield_value, args.success)
        if not args.no_save:
            store.save()
        _emit({
            "crop": args.crop,
            "region": args.region,
            "avg_yield": rec.avg_yield,
            "success_rate": rec.success_rate,
            "samples": rec.samples,
        })
        return 0

    return 2


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except ValueError as exc:
        log.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())

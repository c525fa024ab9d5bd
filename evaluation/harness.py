"""Lightweight evaluation harness for deterministic trip scenarios."""

from __future__ import annotations

from typing import Dict, List

from evaluation.scenarios import EvaluationScenario, SCENARIOS
from models.taxonomy import bucket_for_category
from services.trip_planner import TripPlanner
from tools.weather_provider import EstimatedWeatherProvider
from trip_app.config import CapsuleEngineConfig


def _outfit_buckets(outfit: Dict[str, object]) -> List[str]:
    return [bucket_for_category(item.get("mainCategory")) for item in outfit.get("items", [])]


def _evaluate_expectations(expectations: Dict[str, object], response: Dict[str, object]) -> Dict[str, bool]:
    outfits = response["capsule"]["outfits"]
    checks: Dict[str, bool] = {}

    if "outfit_count" in expectations:
        checks["outfit_count"] = len(outfits) == int(expectations["outfit_count"])
    if "max_shoes" in expectations:
        shoe_ids = {
            item["wardrobeItemId"]
            for outfit in outfits
            for item in outfit["items"]
            if bucket_for_category(item.get("mainCategory")) == "shoes"
        }
        checks["max_shoes"] = len(shoe_ids) <= int(expectations["max_shoes"])
    if expectations.get("requires_outerwear"):
        checks["requires_outerwear"] = all("outerwear" in _outfit_buckets(outfit) for outfit in outfits)
    if expectations.get("no_dresses"):
        checks["no_dresses"] = all("dresses" not in _outfit_buckets(outfit) for outfit in outfits)
    if "min_candidates" in expectations:
        checks["min_candidates"] = response["debug_summary"]["candidate_count"] >= int(expectations["min_candidates"])

    one_piece_ok = True
    separates_ok = True
    for outfit in outfits:
        buckets = _outfit_buckets(outfit)
        if "dresses" in buckets and ("tops" in buckets or "bottoms" in buckets):
            one_piece_ok = False
        if buckets.count("tops") > 1 or buckets.count("bottoms") > 1:
            separates_ok = False
    checks["one_piece_rule"] = one_piece_ok
    checks["separates_rule"] = separates_ok
    return checks


def run_scenario(scenario: EvaluationScenario, planner: TripPlanner | None = None) -> Dict[str, object]:
    planner = planner or TripPlanner(config=CapsuleEngineConfig(), weather_provider=EstimatedWeatherProvider())
    request = {
        "wardrobe": scenario.wardrobe_items,
        "weather": [day.to_dict() for day in scenario.weather],
        "activities": scenario.activities,
        "location_id": scenario.location_id,
        "gender_presentation": scenario.gender_presentation,
        "prompt": scenario.prompt,
    }
    response = planner.plan_capsule(**request)
    repeat = planner.plan_capsule(**request)

    checks = _evaluate_expectations(scenario.expectations, response)
    checks["deterministic"] = (
        response["capsule"]["outfits"] == repeat["capsule"]["outfits"]
        and response["capsule"]["packingList"] == repeat["capsule"]["packingList"]
    )
    return {
        "scenario": scenario.name,
        "passed": all(checks.values()),
        "checks": checks,
        "outfit_count": len(response["capsule"]["outfits"]),
        "response": response,
    }


def run_evaluation_suite() -> List[Dict[str, object]]:
    return [run_scenario(scenario) for scenario in SCENARIOS]


def run_smoke_checks() -> List[str]:
    results = run_evaluation_suite()
    return [f"{result['scenario']}: {'passed' if result['passed'] else 'failed'}" for result in results]


__all__ = ["run_evaluation_suite", "run_scenario", "run_smoke_checks"]

"""Trip planner service wiring the capsule core to its collaborators."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from logic.capsule_builder import CAPSULE_VERSION, build_capsule, build_capsule_fingerprint
from logic.capsule_checks import validate_capsule
from logic.location_filter import filter_wardrobe_by_location
from logic.rebuild import should_rebuild_capsule
from logic.style_eligibility import (
    detect_presentation,
    has_feminine_override,
    normalize_gender_to_presentation,
)
from logic.validation import RebuildCheckRequest, TripPlanRequest, validation_failure
from models.trip import DayWeather, TripCapsule
from models.wardrobe_item import CanonicalWardrobeItem, adapt_wardrobe_item
from tools.observability import instrument_operation
from tools.weather_provider import EstimatedWeatherProvider, ForecastApiWeatherProvider, WeatherProvider
from trip_app.config import CapsuleEngineConfig
from trip_app.logging_config import get_logger, log_event, operation_context

LOGGER = get_logger(__name__)


def _invalid_plan_request(exc: ValidationError) -> Dict[str, Any]:
    return validation_failure("Trip plan request failed validation", exc)


def _invalid_rebuild_request(exc: ValidationError) -> Dict[str, Any]:
    return validation_failure("Rebuild check request failed validation", exc)


def default_weather_provider(config: CapsuleEngineConfig) -> WeatherProvider:
    if config.weather_api_base_url:
        return ForecastApiWeatherProvider(
            base_url=config.weather_api_base_url,
            timeout_seconds=config.weather_timeout_seconds,
            cache_ttl_seconds=config.weather_cache_ttl_seconds,
        )
    return EstimatedWeatherProvider()


def resolve_presentation(
    wardrobe: Sequence[CanonicalWardrobeItem],
    explicit: Optional[str] = None,
    gender_presentation: Optional[str] = None,
    prompt: Optional[str] = None,
) -> Tuple[str, bool]:
    """Return the presentation to build with and whether a prompt override applied.

    An explicit presentation wins, then the profile's gender presentation,
    then detection from the wardrobe. A masculine result is relaxed to
    ``mixed`` when the prompt explicitly asks for feminine pieces.
    """

    if explicit:
        presentation = explicit
    elif gender_presentation:
        presentation = normalize_gender_to_presentation(gender_presentation)
    else:
        presentation = detect_presentation(wardrobe)

    if presentation == "masculine" and has_feminine_override(prompt):
        return "mixed", True
    return presentation, False


class TripPlanner:
    """Plans trip capsules: filter, adapt, gate on staleness, build and check."""

    def __init__(
        self,
        config: CapsuleEngineConfig | None = None,
        weather_provider: WeatherProvider | None = None,
    ) -> None:
        self.config = config or CapsuleEngineConfig.from_env()
        self.weather_provider = weather_provider or default_weather_provider(self.config)

    def _resolve_weather(self, request: Dict[str, Any]) -> Tuple[List[DayWeather], str]:
        if request.get("weather") is not None:
            return [DayWeather.from_dict(day) for day in request["weather"]], "provided"
        result = self.weather_provider.get_trip_weather(
            request["destination"], request["start_date"], request["end_date"]
        )
        return list(result.days), result.source

    @instrument_operation("plan_capsule", input_model=TripPlanRequest, on_validation_error=_invalid_plan_request)
    def plan_capsule(self, **request: Any) -> Dict[str, Any]:
        """Return a fresh or still-valid capsule for the trip, plus warnings."""

        with operation_context("plan_capsule", destination=request.get("destination")) as correlation_id:
            location_id = request.get("location_id") or self.config.default_location_id
            location_label = request["location_label"]
            candidates = filter_wardrobe_by_location(
                request["wardrobe"], location_id, self.config.location_min_items
            )
            wardrobe = [adapt_wardrobe_item(record) for record in candidates]
            presentation, override_applied = resolve_presentation(
                wardrobe,
                explicit=request.get("presentation"),
                gender_presentation=request.get("gender_presentation"),
                prompt=request.get("prompt"),
            )
            weather, weather_source = self._resolve_weather(request)
            activities = request["activities"]

            fingerprint = build_capsule_fingerprint(wardrobe, weather, activities, location_label, presentation)
            existing = request.get("existing_capsule")
            decision = should_rebuild_capsule(
                existing, CAPSULE_VERSION, presentation, fingerprint, request["mode"]
            )

            if existing is not None and not decision.rebuild:
                capsule = TripCapsule.from_dict(existing)
                status = "up_to_date"
            else:
                capsule = build_capsule(wardrobe, weather, activities, location_label, presentation)
                status = "built" if existing is None else "rebuilt"

            warnings = validate_capsule(capsule, weather, activities, wardrobe, presentation)
            log_event(
                LOGGER,
                logging.INFO,
                "trip_capsule_planned",
                correlation_id=correlation_id,
                status=status,
                reason=decision.reason,
                presentation=presentation,
                weather_source=weather_source,
                warning_codes=[warning.code for warning in warnings],
            )
            return {
                "status": status,
                "capsule": capsule.to_dict(),
                "warnings": [warning.to_dict() for warning in warnings],
                "decision": decision.to_dict(),
                "presentation": presentation,
                "weather": {"source": weather_source, "days": [day.to_dict() for day in weather]},
                "debug_summary": {
                    "correlation_id": correlation_id,
                    "location_id": location_id,
                    "candidate_count": len(wardrobe),
                    "wardrobe_count": len(request["wardrobe"]),
                    "feminine_override": override_applied,
                    "num_days": max(len(weather), 1),
                    "outfit_count": len(capsule.outfits),
                    "packed_item_count": len(capsule.all_items()),
                },
            }

    @instrument_operation(
        "check_rebuild", input_model=RebuildCheckRequest, on_validation_error=_invalid_rebuild_request
    )
    def check_rebuild(self, **request: Any) -> Dict[str, Any]:
        """Run only the staleness gate against a stored capsule."""

        current_version = request.get("current_version") or CAPSULE_VERSION
        decision = should_rebuild_capsule(
            request.get("capsule"),
            current_version,
            request["presentation"],
            request.get("fingerprint"),
            request["mode"],
        )
        return {
            "status": "ok",
            "decision": decision.to_dict(),
            "debug_summary": {"current_version": current_version},
        }


__all__ = ["TripPlanner", "default_weather_provider", "resolve_presentation"]

"""Pydantic schemas and helpers for validating planner and API payloads."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from models.taxonomy import normalize_condition
from models.trip import DayWeather

TripActivityName = Literal[
    "Business",
    "Dinner",
    "Casual",
    "Beach",
    "Active",
    "Formal",
    "Sightseeing",
    "Cold Weather",
]
PresentationName = Literal["masculine", "feminine", "mixed"]
RebuildModeName = Literal["AUTO", "FORCE"]


class DayWeatherInput(BaseModel):
    """One forecast day as supplied by a caller or weather API."""

    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(min_length=1)
    day_label: str = Field("", alias="dayLabel")
    high_f: float = Field(alias="highF")
    low_f: float = Field(alias="lowF")
    condition: str = "partly-cloudy"
    rain_chance: float = Field(0, alias="rainChance")

    @field_validator("condition")
    @classmethod
    def _normalize_condition(cls, value: str) -> str:
        return normalize_condition(value)

    def to_day_weather(self) -> DayWeather:
        return DayWeather(
            date=self.date,
            day_label=self.day_label,
            high_f=self.high_f,
            low_f=self.low_f,
            condition=self.condition,
            rain_chance=self.rain_chance,
        )


class TripPlanRequest(BaseModel):
    """Input contract for planning (or re-validating) a trip capsule."""

    wardrobe: List[Dict[str, Any]] = Field(default_factory=list)
    activities: List[TripActivityName] = Field(default_factory=list)
    destination: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    weather: Optional[List[DayWeatherInput]] = None
    location_id: Optional[str] = None
    location_label: str = "Home"
    gender_presentation: Optional[str] = None
    presentation: Optional[PresentationName] = None
    prompt: Optional[str] = None
    existing_capsule: Optional[Dict[str, Any]] = None
    mode: RebuildModeName = "AUTO"

    @field_validator("activities")
    @classmethod
    def _dedupe_activities(cls, activities: List[str]) -> List[str]:
        return list(dict.fromkeys(activities))

    @model_validator(mode="after")
    def _require_weather_source(self) -> "TripPlanRequest":
        if self.weather is not None:
            return self
        if not self.destination or not self.start_date or not self.end_date:
            raise ValueError("either weather days or destination with start_date and end_date is required")
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot precede start_date")
        return self


class RebuildCheckRequest(BaseModel):
    """Input contract for the standalone staleness gate."""

    capsule: Optional[Dict[str, Any]] = None
    current_version: Optional[int] = Field(None, ge=1)
    presentation: PresentationName = "mixed"
    fingerprint: Optional[str] = None
    mode: RebuildModeName = "AUTO"


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
    return ValidationResult(message=message, details=details).model_dump()


__all__ = [
    "DayWeatherInput",
    "PresentationName",
    "RebuildCheckRequest",
    "RebuildModeName",
    "TripActivityName",
    "TripPlanRequest",
    "ValidationResult",
    "validation_failure",
]

"""Weather provider abstractions and implementations for trip forecasts."""

from __future__ import annotations

import logging
import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

import requests
from pydantic import BaseModel, ValidationError

from logic.randomizer import hash_string, seeded_random
from logic.validation import DayWeatherInput
from models.taxonomy import DAY_LABELS, normalize_condition
from models.trip import DayWeather, WeatherResult
from trip_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)


class _ForecastResponse(BaseModel):
    forecast: List[DayWeatherInput] = []


@dataclass(frozen=True)
class ClimateProfile:
    """Typical conditions used to estimate a destination's weather."""

    base_high_f: int
    base_low_f: int
    conditions: Tuple[str, ...]
    rain_chance_base: int


DESTINATION_PROFILES: Dict[str, ClimateProfile] = {
    "miami": ClimateProfile(87, 74, ("sunny", "partly-cloudy", "sunny"), 30),
    "cancun": ClimateProfile(90, 76, ("sunny", "sunny", "partly-cloudy"), 25),
    "hawaii": ClimateProfile(85, 72, ("sunny", "partly-cloudy", "sunny"), 20),
    "aspen": ClimateProfile(38, 18, ("snowy", "cloudy", "partly-cloudy"), 40),
    "nyc": ClimateProfile(55, 40, ("cloudy", "partly-cloudy", "rainy"), 35),
    "london": ClimateProfile(58, 45, ("rainy", "cloudy", "partly-cloudy"), 55),
    "paris": ClimateProfile(62, 48, ("partly-cloudy", "cloudy", "sunny"), 30),
    "tokyo": ClimateProfile(68, 52, ("partly-cloudy", "sunny", "cloudy"), 25),
    "la": ClimateProfile(78, 60, ("sunny", "sunny", "partly-cloudy"), 10),
    "dubai": ClimateProfile(95, 78, ("sunny", "sunny", "sunny"), 5),
    "barcelona": ClimateProfile(75, 60, ("sunny", "partly-cloudy", "sunny"), 15),
    "chicago": ClimateProfile(50, 35, ("windy", "cloudy", "partly-cloudy"), 30),
    "denver": ClimateProfile(52, 30, ("sunny", "partly-cloudy", "snowy"), 20),
    "seattle": ClimateProfile(55, 42, ("rainy", "cloudy", "rainy"), 60),
}
_ALIASES = {"new york": "nyc", "los angeles": "la"}
SAN_FRANCISCO_PROFILE = ClimateProfile(65, 50, ("cloudy", "partly-cloudy", "sunny"), 20)
DEFAULT_PROFILE = ClimateProfile(70, 52, ("partly-cloudy", "sunny", "cloudy"), 25)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def day_label_for(day: date) -> str:
    return DAY_LABELS[(day.weekday() + 1) % 7]


def _trip_dates(start_date: date, end_date: date) -> List[date]:
    return [start_date + timedelta(days=offset) for offset in range((end_date - start_date).days + 1)]


def climate_profile_for(destination: str) -> ClimateProfile:
    lowered = destination.lower().strip()
    for key, profile in DESTINATION_PROFILES.items():
        if key in lowered:
            return profile
    for alias, key in _ALIASES.items():
        if alias in lowered:
            return DESTINATION_PROFILES[key]
    if "san francisco" in lowered:
        return SAN_FRANCISCO_PROFILE
    return DEFAULT_PROFILE


class WeatherProvider(ABC):
    """Abstract trip forecast provider."""

    @abstractmethod
    def get_trip_weather(self, city: str, start_date: date, end_date: date) -> WeatherResult:
        """Return one forecast day per trip day, in calendar order."""


class EstimatedWeatherProvider(WeatherProvider):
    """Offline deterministic forecast built from destination climate profiles.

    The same destination and dates always produce the same days.
    """

    def estimate(self, city: str, start_date: date, end_date: date) -> List[DayWeather]:
        profile = climate_profile_for(city)
        rand = seeded_random(hash_string(f"{city}:{start_date.isoformat()}:{end_date.isoformat()}"))
        days: List[DayWeather] = []
        for current in _trip_dates(start_date, end_date):
            high_variation = _round_half_up((rand() - 0.5) * 12)
            low_variation = _round_half_up((rand() - 0.5) * 8)
            high_f = profile.base_high_f + high_variation
            low_f = min(profile.base_low_f + low_variation, high_f - 5)
            condition = profile.conditions[int(rand() * len(profile.conditions))]
            rain_variation = _round_half_up((rand() - 0.5) * 30)
            rain_chance = max(0, min(100, profile.rain_chance_base + rain_variation))
            days.append(
                DayWeather(
                    date=current.isoformat(),
                    day_label=day_label_for(current),
                    high_f=high_f,
                    low_f=low_f,
                    condition=condition,
                    rain_chance=rain_chance,
                )
            )
        return days

    def get_trip_weather(self, city: str, start_date: date, end_date: date) -> WeatherResult:
        LOGGER.info("Returning estimated forecast", extra={"destination": city, "days": (end_date - start_date).days + 1})
        return WeatherResult(days=tuple(self.estimate(city, start_date, end_date)), source="estimated")


class ForecastApiWeatherProvider(WeatherProvider):
    """Forecast API client with schema validation, caching and estimated fallback.

    The API returns a short forecast window; trip days beyond it are filled
    with the window's rounded averages. Any request or schema failure falls
    back to :class:`EstimatedWeatherProvider`. There is no retry.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 5.0,
        cache_ttl_seconds: float = 30 * 60,
        fallback: EstimatedWeatherProvider | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.cache_ttl_seconds = cache_ttl_seconds
        self.fallback = fallback or EstimatedWeatherProvider()
        self._cache: Dict[str, Tuple[float, List[DayWeather]]] = {}

    def _cache_key(self, city: str) -> str:
        return city.lower().strip()

    def _cached(self, city: str) -> Optional[List[DayWeather]]:
        entry = self._cache.get(self._cache_key(city))
        if entry is None:
            return None
        expires_at, days = entry
        if expires_at > time.monotonic():
            return days
        self._cache.pop(self._cache_key(city), None)
        return None

    def _fallback_result(self, city: str, start_date: date, end_date: date, reason: str) -> WeatherResult:
        log_event(LOGGER, logging.WARNING, "weather_fallback_estimated", destination=city, reason=reason)
        return WeatherResult(days=tuple(self.fallback.estimate(city, start_date, end_date)), source="estimated")

    @staticmethod
    def extend_to_trip(forecast: List[DayWeather], start_date: date, end_date: date) -> List[DayWeather]:
        """Align the forecast with the trip window, padding missing days with averages."""

        by_date = {day.date: day for day in forecast}
        count = len(forecast)
        avg_high = _round_half_up(sum(day.high_f for day in forecast) / count)
        avg_low = _round_half_up(sum(day.low_f for day in forecast) / count)
        avg_rain = _round_half_up(sum(day.rain_chance for day in forecast) / count)
        common_condition = normalize_condition(forecast[0].condition)

        days: List[DayWeather] = []
        for current in _trip_dates(start_date, end_date):
            known = by_date.get(current.isoformat())
            if known is not None:
                days.append(known)
                continue
            days.append(
                DayWeather(
                    date=current.isoformat(),
                    day_label=day_label_for(current),
                    high_f=avg_high,
                    low_f=avg_low,
                    condition=common_condition,
                    rain_chance=avg_rain,
                )
            )
        return days

    def get_trip_weather(self, city: str, start_date: date, end_date: date) -> WeatherResult:
        if not city:
            raise ValueError("city is required for weather lookups")

        cached = self._cached(city)
        if cached:
            return WeatherResult(days=tuple(self.extend_to_trip(cached, start_date, end_date)), source="cached")

        LOGGER.info("Fetching trip forecast", extra={"destination": city})
        try:
            response = requests.get(
                f"{self.base_url}/weather", params={"city": city}, timeout=self.timeout_seconds
            )
            response.raise_for_status()
            parsed = _ForecastResponse.model_validate(response.json())
        except (requests.Timeout, requests.RequestException) as exc:
            LOGGER.error("Weather API unreachable", exc_info=exc)
            return self._fallback_result(city, start_date, end_date, "request_error")
        except (ValidationError, ValueError) as exc:
            LOGGER.error("Weather payload schema validation failed", exc_info=exc)
            return self._fallback_result(city, start_date, end_date, "schema_validation")

        forecast = [entry.to_day_weather() for entry in parsed.forecast]
        if not forecast:
            return self._fallback_result(city, start_date, end_date, "empty_forecast")

        self._cache[self._cache_key(city)] = (time.monotonic() + self.cache_ttl_seconds, forecast)
        return WeatherResult(days=tuple(self.extend_to_trip(forecast, start_date, end_date)), source="live")


__all__ = [
    "ClimateProfile",
    "DESTINATION_PROFILES",
    "EstimatedWeatherProvider",
    "ForecastApiWeatherProvider",
    "WeatherProvider",
    "climate_profile_for",
    "day_label_for",
]

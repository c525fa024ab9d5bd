"""Derive packing needs and climate zones from a forecast window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from models.trip import DayWeather

WARM_LAYER_LOW_F = 55
RAIN_LAYER_CHANCE = 50
HOT_HIGH_F = 80


@dataclass(frozen=True)
class WeatherNeeds:
    needs_warm_layer: bool = False
    needs_rain_layer: bool = False
    is_hot: bool = False
    is_cold: bool = False


def needs_outerwear_on(day: Optional[DayWeather]) -> bool:
    """Whether a single day calls for a layer (cold low or likely rain)."""

    if day is None:
        return False
    return day.low_f < WARM_LAYER_LOW_F or day.rain_chance > RAIN_LAYER_CHANCE


def analyze_weather(days: Sequence[DayWeather]) -> WeatherNeeds:
    """Summarise a forecast window into trip-level packing flags.

    An empty window yields all-false flags.
    """

    is_cold = any(day.low_f < WARM_LAYER_LOW_F for day in days)
    return WeatherNeeds(
        needs_warm_layer=is_cold,
        needs_rain_layer=any(day.rain_chance > RAIN_LAYER_CHANCE for day in days),
        is_hot=any(day.high_f > HOT_HIGH_F for day in days),
        is_cold=is_cold,
    )


def derive_climate_zone(day: Optional[DayWeather]) -> str:
    if day is None:
        return "mild"
    if day.low_f < 32:
        return "freezing"
    if day.low_f < 45:
        return "cold"
    if day.low_f < 55:
        return "cool"
    if day.low_f < 65 and day.high_f < 75:
        return "mild"
    if day.high_f < 85:
        return "warm"
    return "hot"


__all__ = [
    "HOT_HIGH_F",
    "RAIN_LAYER_CHANCE",
    "WARM_LAYER_LOW_F",
    "WeatherNeeds",
    "analyze_weather",
    "derive_climate_zone",
    "needs_outerwear_on",
]

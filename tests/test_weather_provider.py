"""Estimated and live forecast providers."""
from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List

import pytest
import requests

sys.path.append(str(Path(__file__).resolve().parents[1]))

from tools.weather_provider import (
    DEFAULT_PROFILE,
    DESTINATION_PROFILES,
    EstimatedWeatherProvider,
    ForecastApiWeatherProvider,
    climate_profile_for,
    day_label_for,
)


class _FakeResponse:
    def __init__(self, payload: Any, status_error: Exception | None = None) -> None:
        self._payload = payload
        self._status_error = status_error

    def raise_for_status(self) -> None:
        if self._status_error:
            raise self._status_error

    def json(self) -> Any:
        return self._payload


def _install_fake_get(monkeypatch: pytest.MonkeyPatch, response: Any) -> List[Dict[str, Any]]:
    calls: List[Dict[str, Any]] = []

    def fake_get(url: str, params: Dict[str, Any] | None = None, timeout: float | None = None) -> _FakeResponse:
        calls.append({"url": url, "params": params, "timeout": timeout})
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr("tools.weather_provider.requests.get", fake_get)
    return calls


def _forecast_payload() -> Dict[str, Any]:
    return {
        "forecast": [
            {"date": "2025-06-02", "dayLabel": "Mon", "highF": 70, "lowF": 50, "condition": "sunny", "rainChance": 40},
            {"date": "2025-06-03", "dayLabel": "Tue", "highF": 75, "lowF": 55, "condition": "Drizzle", "rainChance": 61},
        ]
    }


def test_day_labels_follow_calendar() -> None:
    assert day_label_for(date(2025, 6, 1)) == "Sun"
    assert day_label_for(date(2025, 6, 2)) == "Mon"
    assert day_label_for(date(2025, 6, 7)) == "Sat"


def test_destination_profiles_match_substrings_and_aliases() -> None:
    assert climate_profile_for("Miami Beach, FL") == DESTINATION_PROFILES["miami"]
    assert climate_profile_for("New York City") == DESTINATION_PROFILES["nyc"]
    assert climate_profile_for("Reykjavik") == DEFAULT_PROFILE


def test_estimated_weather_is_deterministic_and_bounded() -> None:
    provider = EstimatedWeatherProvider()
    start, end = date(2025, 6, 2), date(2025, 6, 8)

    first = provider.get_trip_weather("Miami", start, end)
    second = provider.get_trip_weather("Miami", start, end)

    assert first == second
    assert first.source == "estimated"
    assert [day.date for day in first.days] == [f"2025-06-0{offset}" for offset in range(2, 9)]
    assert first.days[0].day_label == "Mon"
    for day in first.days:
        assert 81 <= day.high_f <= 93
        assert day.low_f <= day.high_f - 5
        assert 0 <= day.rain_chance <= 100
        assert day.condition in DESTINATION_PROFILES["miami"].conditions


def test_live_forecast_is_extended_to_trip_window(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _install_fake_get(monkeypatch, _FakeResponse(_forecast_payload()))
    provider = ForecastApiWeatherProvider("https://weather.example/api/", timeout_seconds=2.0)

    result = provider.get_trip_weather("Lisbon", date(2025, 6, 2), date(2025, 6, 5))

    assert calls == [{"url": "https://weather.example/api/weather", "params": {"city": "Lisbon"}, "timeout": 2.0}]
    assert result.source == "live"
    assert [day.date for day in result.days] == ["2025-06-02", "2025-06-03", "2025-06-04", "2025-06-05"]
    assert result.days[1].condition == "partly-cloudy"
    padded = result.days[2]
    assert padded.day_label == "Wed"
    assert (padded.high_f, padded.low_f, padded.rain_chance) == (73, 53, 51)
    assert padded.condition == "sunny"
    assert result.days[3].day_label == "Thu"


def test_forecast_is_cached_per_city(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _install_fake_get(monkeypatch, _FakeResponse(_forecast_payload()))
    provider = ForecastApiWeatherProvider("https://weather.example/api")

    provider.get_trip_weather("Lisbon", date(2025, 6, 2), date(2025, 6, 3))
    cached = provider.get_trip_weather(" lisbon ", date(2025, 6, 2), date(2025, 6, 3))

    assert len(calls) == 1
    assert cached.source == "cached"
    assert len(cached.days) == 2


def test_expired_cache_refetches(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _install_fake_get(monkeypatch, _FakeResponse(_forecast_payload()))
    provider = ForecastApiWeatherProvider("https://weather.example/api", cache_ttl_seconds=-1)

    provider.get_trip_weather("Lisbon", date(2025, 6, 2), date(2025, 6, 3))
    again = provider.get_trip_weather("Lisbon", date(2025, 6, 2), date(2025, 6, 3))

    assert len(calls) == 2
    assert again.source == "live"


@pytest.mark.parametrize(
    "response",
    [
        requests.ConnectionError("offline"),
        _FakeResponse({}, status_error=requests.HTTPError("503")),
        _FakeResponse({"forecast": [{"date": "2025-06-02"}]}),
        _FakeResponse({"forecast": []}),
    ],
)
def test_failures_fall_back_to_estimates(monkeypatch: pytest.MonkeyPatch, response: Any) -> None:
    _install_fake_get(monkeypatch, response)
    provider = ForecastApiWeatherProvider("https://weather.example/api")
    start, end = date(2025, 6, 2), date(2025, 6, 4)

    result = provider.get_trip_weather("Seattle", start, end)

    assert result.source == "estimated"
    assert list(result.days) == EstimatedWeatherProvider().estimate("Seattle", start, end)


def test_city_is_required() -> None:
    provider = ForecastApiWeatherProvider("https://weather.example/api")

    with pytest.raises(ValueError):
        provider.get_trip_weather("", date(2025, 6, 2), date(2025, 6, 3))

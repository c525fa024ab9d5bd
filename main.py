"""Simple entrypoint to plan a demo trip capsule locally."""

import json
from datetime import date

from evaluation.scenarios import SCENARIOS
from services.trip_planner import TripPlanner
from tools.weather_provider import EstimatedWeatherProvider
from trip_app.config import CapsuleEngineConfig
from trip_app.logging_config import configure_logging


def main() -> None:
    configure_logging()
    planner = TripPlanner(config=CapsuleEngineConfig.from_env(), weather_provider=EstimatedWeatherProvider())
    scenario = SCENARIOS[0]
    response = planner.plan_capsule(
        wardrobe=scenario.wardrobe_items,
        destination="Lisbon",
        start_date=date(2025, 6, 6),
        end_date=date(2025, 6, 9),
        activities=["Sightseeing", "Dinner"],
        gender_presentation=scenario.gender_presentation,
    )
    print(json.dumps({key: response[key] for key in ("status", "capsule", "warnings")}, indent=2))


if __name__ == "__main__":
    main()

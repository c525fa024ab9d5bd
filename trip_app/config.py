"""Configuration helpers for the trip capsule engine."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_LOCATION_ID = "home"
DEFAULT_LOCATION_MIN_ITEMS = 5
DEFAULT_WEATHER_TIMEOUT_SECONDS = 5.0
DEFAULT_WEATHER_CACHE_TTL_SECONDS = 30 * 60


@dataclass
class CapsuleEngineConfig:
    """Runtime settings for the planner service and its collaborators.

    The pure capsule core takes no configuration. These values govern the
    caller side: which closet is the default starting point, how sparse a
    closet may be before the location filter falls back, and where live
    forecasts come from.
    """

    environment: Optional[str] = None
    default_location_id: str = DEFAULT_LOCATION_ID
    location_min_items: int = DEFAULT_LOCATION_MIN_ITEMS
    weather_api_base_url: Optional[str] = None
    weather_timeout_seconds: float = DEFAULT_WEATHER_TIMEOUT_SECONDS
    weather_cache_ttl_seconds: float = DEFAULT_WEATHER_CACHE_TTL_SECONDS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "CapsuleEngineConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables, which take priority.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("TRIP_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        return cls(
            environment=env_name,
            default_location_id=str(get_value("default_location_id") or DEFAULT_LOCATION_ID),
            location_min_items=_as_int(get_value("location_min_items"), DEFAULT_LOCATION_MIN_ITEMS),
            weather_api_base_url=get_value("weather_api_base_url") or None,
            weather_timeout_seconds=_as_float(
                get_value("weather_timeout_seconds"), DEFAULT_WEATHER_TIMEOUT_SECONDS
            ),
            weather_cache_ttl_seconds=_as_float(
                get_value("weather_cache_ttl_seconds"), DEFAULT_WEATHER_CACHE_TTL_SECONDS
            ),
            log_level=str(get_value("log_level") or "INFO"),
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal flat ``key: value`` YAML file."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config


def _as_int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


def _as_float(value: Optional[str], default: float) -> float:
    try:
        return float(value) if value is not None else default
    except ValueError:
        return default


__all__ = ["CapsuleEngineConfig", "DEFAULT_LOCATION_ID", "DEFAULT_LOCATION_MIN_ITEMS"]

"""Application configuration and settings management."""

from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="CAMPROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Camper Route Planner API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level applied by the API app factory.")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Distance model
    road_factor: float = Field(
        default=1.2,
        ge=1.0,
        description="Multiplier applied to great-circle distances to approximate road distances.",
    )
    default_average_speed_kmh: float = Field(
        default=70.0,
        gt=0.0,
        description="Speed used to time segments before driving limits are known.",
    )

    # Driving limits without a vehicle profile
    default_max_daily_distance_km: float = Field(default=500.0, gt=0.0)
    default_max_daily_driving_time_hours: float = Field(default=8.0, gt=0.0)
    default_break_interval_hours: float = Field(default=2.0, gt=0.0)
    default_break_duration_minutes: int = Field(default=15, ge=0)

    # Optimizer
    optimizer_max_iterations: int = Field(
        default=1000,
        ge=1,
        description="Ceiling on 2-opt passes per seed ordering.",
    )
    campsite_penalty: float = Field(
        default=0.25,
        ge=0.0,
        description="Objective penalty per day that does not end near a campsite.",
    )
    daylight_end_hour: float = Field(default=20.0, ge=0.0, le=24.0)

    # Stage feasibility, as ratios of the daily driving-time limit
    feasibility_excellent_ratio: float = Field(default=0.6, gt=0.0)
    feasibility_good_ratio: float = Field(default=1.0, gt=0.0)
    feasibility_challenging_ratio: float = Field(default=1.5, gt=0.0)

    # Cost estimate
    fuel_prices_per_litre: dict[str, float] = Field(
        default={"diesel": 1.6, "petrol": 1.75, "lpg": 0.9, "electric": 0.45},
        description="Average European prices per litre (kWh for electric).",
    )
    toll_cost_per_km: float = Field(default=0.1, ge=0.0)

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()

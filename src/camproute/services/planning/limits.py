"""Vehicle and season specific driving limits."""

from __future__ import annotations

from ...config import settings
from ...models.domain import Season, VehicleProfile, VehicleType
from .models import DrivingLimits
from .seasonal import seasonal_adjustment

# Base limits per vehicle type before size and season adjustments.
VEHICLE_DRIVING_LIMITS: dict[VehicleType, DrivingLimits] = {
    VehicleType.CAMPERVAN: DrivingLimits(
        max_daily_distance_km=500,
        max_daily_driving_time_hours=8,
        average_speed_kmh=75,
        recommended_break_interval_hours=2.5,
        break_duration_minutes=15,
    ),
    VehicleType.MOTORHOME: DrivingLimits(
        max_daily_distance_km=450,
        max_daily_driving_time_hours=7.5,
        average_speed_kmh=70,
        recommended_break_interval_hours=2,
        break_duration_minutes=20,
    ),
    VehicleType.CARAVAN: DrivingLimits(
        max_daily_distance_km=400,
        max_daily_driving_time_hours=7,
        average_speed_kmh=65,
        recommended_break_interval_hours=2,
        break_duration_minutes=20,
    ),
}

MEDIUM_VEHICLE_LENGTH_M = 7.0
MEDIUM_VEHICLE_WEIGHT_T = 3.5
LARGE_VEHICLE_LENGTH_M = 8.0
LARGE_VEHICLE_WEIGHT_T = 4.0


def default_limits() -> DrivingLimits:
    return DrivingLimits(
        max_daily_distance_km=settings.default_max_daily_distance_km,
        max_daily_driving_time_hours=settings.default_max_daily_driving_time_hours,
        average_speed_kmh=settings.default_average_speed_kmh,
        recommended_break_interval_hours=settings.default_break_interval_hours,
        break_duration_minutes=settings.default_break_duration_minutes,
    )


def size_multiplier(vehicle_profile: VehicleProfile | None) -> float:
    """Scale factor for speed and daily distance; large or heavy campers cover less ground."""

    if vehicle_profile is None:
        return 1.0
    length = vehicle_profile.length_m
    weight = vehicle_profile.weight_t
    if length > LARGE_VEHICLE_LENGTH_M or weight > LARGE_VEHICLE_WEIGHT_T:
        return 0.8
    if length > MEDIUM_VEHICLE_LENGTH_M or weight > MEDIUM_VEHICLE_WEIGHT_T:
        return 0.9
    return 1.0


def derive_limits(
    vehicle_profile: VehicleProfile | None = None,
    season: Season | str | None = None,
) -> DrivingLimits:
    """Daily driving limits for the given camper in the given season.

    Missing inputs fall back to the configured defaults and to summer, which is
    the unadjusted baseline.
    """

    if vehicle_profile is None:
        base = default_limits()
    else:
        base = VEHICLE_DRIVING_LIMITS.get(VehicleType(vehicle_profile.vehicle_type), default_limits())
    adjustment = seasonal_adjustment(season)
    scale = size_multiplier(vehicle_profile)

    return DrivingLimits(
        max_daily_distance_km=float(round(base.max_daily_distance_km * adjustment.distance_multiplier * scale)),
        max_daily_driving_time_hours=round(
            base.max_daily_driving_time_hours * adjustment.driving_time_multiplier, 1
        ),
        average_speed_kmh=float(round(base.average_speed_kmh * adjustment.speed_multiplier * scale)),
        recommended_break_interval_hours=base.recommended_break_interval_hours,
        break_duration_minutes=base.break_duration_minutes,
    )

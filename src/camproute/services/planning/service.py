"""Trip planning orchestration service."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Sequence

from ...errors import InvalidInputError
from ...models.domain import Season, VehicleProfile, Waypoint
from ..regions import countries_for
from .limits import derive_limits
from .models import TripPlan
from .seasonal import resolve_season, season_for_date, seasonal_factors
from .segments import build_segments
from .stages import analyze_feasibility, calculate_rest_days, plan_daily_stages

logger = logging.getLogger(__name__)

# Planned and available trip lengths may differ by this share before the date range is flagged.
DATE_RANGE_SLACK_RATIO = 0.5


def _date_range_warnings(total_days: int, start_date: dt.date, end_date: dt.date) -> list[str]:
    available_days = (end_date - start_date).days + 1
    if available_days < 1:
        return [f"Trip end date {end_date.isoformat()} is before the start date {start_date.isoformat()}"]
    if total_days > available_days:
        return [
            f"The route needs {total_days} days but the selected dates only allow {available_days} - "
            "remove stops or extend the trip"
        ]
    if available_days - total_days > max(1, available_days * DATE_RANGE_SLACK_RATIO):
        return [
            f"The selected dates allow {available_days} days but the route only needs {total_days} - "
            "consider adding stops or rest days"
        ]
    return []


def create_trip_plan(
    waypoints: Sequence[Waypoint],
    vehicle_profile: VehicleProfile | None = None,
    start_date: dt.date | None = None,
    season: Season | str | None = None,
    end_date: dt.date | None = None,
) -> TripPlan:
    """Plan an ordered route into daily stages with feasibility scoring.

    The season defaults to the season of ``start_date`` and to summer when no
    date is given. ``end_date`` is only used to check the planned duration
    against the caller's date range.
    """

    if len(waypoints) < 2:
        raise InvalidInputError("At least 2 waypoints required for trip planning")

    if season is not None:
        resolved_season = resolve_season(season)
    elif start_date is not None:
        resolved_season = season_for_date(start_date)
    else:
        resolved_season = Season.SUMMER

    limits = derive_limits(vehicle_profile, resolved_season)
    segments = build_segments(waypoints, limits.average_speed_kmh)
    stages = plan_daily_stages(segments, limits, start_date, resolved_season)
    analysis = analyze_feasibility(stages, limits)
    factors = seasonal_factors(resolved_season, countries_for(waypoints))

    rest_days = calculate_rest_days(stages)
    total_days = len(stages) + rest_days
    warnings = list(analysis.warnings)
    if start_date is not None and end_date is not None:
        warnings.extend(_date_range_warnings(total_days, start_date, end_date))

    recommendations = list(analysis.recommendations)
    for advice in factors.recommendations:
        if advice not in recommendations:
            recommendations.append(advice)

    plan = TripPlan(
        total_days=total_days,
        total_distance_km=sum(stage.distance_km for stage in stages),
        total_driving_time_hours=sum(stage.driving_time_hours for stage in stages),
        daily_stages=stages,
        rest_days=rest_days,
        feasibility_score=analysis.score,
        overall_feasibility=analysis.overall,
        season=resolved_season,
        seasonal_factors=factors,
        warnings=warnings,
        recommendations=recommendations,
        start_date=start_date,
        end_date=start_date + dt.timedelta(days=total_days - 1) if start_date is not None else None,
    )
    logger.info(
        f"Planned {len(waypoints)} waypoints into {len(stages)} driving days "
        f"({plan.total_distance_km:.0f} km, score {plan.feasibility_score}, {resolved_season.value})"
    )
    return plan

"""Partitioning of route segments into daily driving stages."""

from __future__ import annotations

import datetime as dt
import logging
import math
from dataclasses import dataclass
from typing import Sequence

from ...config import settings
from ...models.domain import Season, Waypoint, WaypointKind
from .models import (
    AccommodationType,
    DailyStage,
    DrivingLimits,
    Feasibility,
    PlannedStop,
    RouteSegment,
    StopType,
)
from .seasonal import resolve_season
from .segments import with_speed

logger = logging.getLogger(__name__)

FEASIBILITY_SCORES: dict[Feasibility, int] = {
    Feasibility.EXCELLENT: 100,
    Feasibility.GOOD: 75,
    Feasibility.CHALLENGING: 40,
    Feasibility.UNREALISTIC: 10,
}

# Trip score buckets, checked from the top.
SCORE_BUCKETS: tuple[tuple[float, Feasibility], ...] = (
    (85.0, Feasibility.EXCELLENT),
    (60.0, Feasibility.GOOD),
    (30.0, Feasibility.CHALLENGING),
)

INTENSIVE_DAY_DISTANCE_KM = 300.0
INTENSIVE_DAY_DRIVING_HOURS = 6.0
LONG_DAY_DRIVING_HOURS = 4.0
FUEL_STOP_DISTANCE_KM = 400.0
LONG_TRIP_DAYS = 14
VERY_LONG_TRIP_DAYS = 21
POI_KEYWORDS = ("castle", "museum", "cathedral", "palace", "historic", "scenic")


@dataclass(slots=True)
class FeasibilityAnalysis:
    score: int
    overall: Feasibility
    warnings: list[str]
    recommendations: list[str]


def group_by_day(
    distances_km: Sequence[float],
    driving_hours: Sequence[float],
    limits: DrivingLimits,
) -> list[list[int]]:
    """Greedy first-fit of consecutive legs into days, returned as leg indices.

    A leg is never split: when adding it would breach either daily bound the
    current day is closed and the leg opens the next one, even if it alone
    exceeds the bounds.
    """

    days: list[list[int]] = []
    current: list[int] = []
    day_distance = 0.0
    day_hours = 0.0
    for index, (distance, hours) in enumerate(zip(distances_km, driving_hours)):
        if current and (
            day_distance + distance > limits.max_daily_distance_km
            or day_hours + hours > limits.max_daily_driving_time_hours
        ):
            days.append(current)
            current = []
            day_distance = 0.0
            day_hours = 0.0
        current.append(index)
        day_distance += distance
        day_hours += hours
    if current:
        days.append(current)
    return days


def assess_day_feasibility(driving_time_hours: float, limits: DrivingLimits) -> Feasibility:
    ratio = driving_time_hours / limits.max_daily_driving_time_hours
    if ratio <= settings.feasibility_excellent_ratio:
        return Feasibility.EXCELLENT
    if ratio <= settings.feasibility_good_ratio:
        return Feasibility.GOOD
    if ratio <= settings.feasibility_challenging_ratio:
        return Feasibility.CHALLENGING
    return Feasibility.UNREALISTIC


def generate_day_warnings(distance: float, driving_time: float, limits: DrivingLimits, season: Season) -> list[str]:
    warnings: list[str] = []
    if distance > limits.max_daily_distance_km:
        warnings.append(
            f"Daily distance of {distance:.0f} km exceeds recommended limit of {limits.max_daily_distance_km:.0f} km"
        )
    if driving_time > limits.max_daily_driving_time_hours:
        warnings.append(
            f"Driving time of {driving_time:.1f} h exceeds recommended daily driving time "
            f"of {limits.max_daily_driving_time_hours:.1f} h"
        )
    if distance > limits.max_daily_distance_km * 1.2:
        warnings.append("This is a very long driving day - consider splitting it across multiple days")
    if season is Season.WINTER and distance > limits.max_daily_distance_km * 0.8:
        warnings.append("Winter driving conditions - allow extra time and reduce daily distance")
    return warnings


def generate_day_recommendations(
    distance: float, driving_time: float, limits: DrivingLimits, season: Season
) -> list[str]:
    recommendations: list[str] = []
    if driving_time > LONG_DAY_DRIVING_HOURS:
        recommendations.append("Plan multiple rest stops for this long driving day")
    if distance < limits.max_daily_distance_km * 0.5:
        recommendations.append("Light driving day - perfect opportunity for sightseeing")
    if season is Season.SUMMER and distance > limits.max_daily_distance_km * 0.8:
        recommendations.append("Start early to avoid afternoon heat and traffic")
    if season is Season.WINTER:
        recommendations.append("Check weather conditions and road status before departure")
        if distance > limits.max_daily_distance_km:
            recommendations.append("Add a rest day after this stage - winter roads make it too long for one day")
    return recommendations


def is_point_of_interest(waypoint: Waypoint) -> bool:
    name = (waypoint.name or "").lower()
    return any(keyword in name for keyword in POI_KEYWORDS)


def plan_stops_for_day(
    segments: Sequence[RouteSegment], driving_time: float, distance: float, limits: DrivingLimits
) -> list[PlannedStop]:
    stops: list[PlannedStop] = []
    break_hours = limits.break_duration_minutes / 60
    for index in range(math.floor(driving_time / limits.recommended_break_interval_hours)):
        stops.append(
            PlannedStop(
                waypoint_id=f"break_{index}",
                stop_type=StopType.REST,
                min_duration_hours=break_hours,
                recommended_duration_hours=break_hours,
                max_duration_hours=1.0,
                reasoning=f"Rest break after {limits.recommended_break_interval_hours:g} hours of driving",
            )
        )

    for segment in segments:
        destination = segment.end_waypoint
        if destination.is_overnight_stop:
            stay = float(destination.stay_duration_hours)
            stops.append(
                PlannedStop(
                    waypoint_id=destination.id,
                    stop_type=StopType.OVERNIGHT,
                    min_duration_hours=stay,
                    recommended_duration_hours=stay,
                    max_duration_hours=stay,
                    reasoning="Planned overnight stay",
                )
            )
        elif is_point_of_interest(destination):
            stops.append(
                PlannedStop(
                    waypoint_id=destination.id,
                    stop_type=StopType.SIGHTSEEING,
                    min_duration_hours=1.0,
                    recommended_duration_hours=2.0,
                    max_duration_hours=4.0,
                    reasoning="Recommended sightseeing stop at point of interest",
                )
            )

    if driving_time > LONG_DAY_DRIVING_HOURS:
        stops.append(
            PlannedStop(
                waypoint_id="lunch",
                stop_type=StopType.LUNCH,
                min_duration_hours=0.5,
                recommended_duration_hours=1.0,
                max_duration_hours=2.0,
                reasoning="Lunch break for long driving day",
            )
        )

    if distance > FUEL_STOP_DISTANCE_KM:
        stops.append(
            PlannedStop(
                waypoint_id="fuel",
                stop_type=StopType.FUEL,
                min_duration_hours=0.25,
                recommended_duration_hours=0.25,
                max_duration_hours=0.5,
                reasoning=f"Refuel on stages longer than {FUEL_STOP_DISTANCE_KM:.0f} km",
            )
        )
    return stops


def determine_accommodation_type(waypoint: Waypoint, season: Season) -> AccommodationType:
    if waypoint.kind is WaypointKind.CAMPSITE:
        return AccommodationType.CAMPSITE
    if waypoint.kind is WaypointKind.ACCOMMODATION:
        return AccommodationType.HOTEL
    if season is Season.WINTER:
        return AccommodationType.HOTEL
    return AccommodationType.CAMPSITE


def _create_daily_stage(
    day_number: int,
    day_date: dt.date | None,
    segments: list[RouteSegment],
    limits: DrivingLimits,
    season: Season,
) -> DailyStage:
    distance = sum(segment.distance_km for segment in segments)
    driving_time = sum(segment.driving_time_hours for segment in segments)
    end_waypoint = segments[-1].end_waypoint
    return DailyStage(
        day_number=day_number,
        date=day_date,
        start_waypoint=segments[0].start_waypoint,
        end_waypoint=end_waypoint,
        segments=segments,
        distance_km=distance,
        driving_time_hours=driving_time,
        feasibility=assess_day_feasibility(driving_time, limits),
        accommodation_type=determine_accommodation_type(end_waypoint, season),
        warnings=generate_day_warnings(distance, driving_time, limits, season),
        recommendations=generate_day_recommendations(distance, driving_time, limits, season),
        stops=plan_stops_for_day(segments, driving_time, distance, limits),
    )


def plan_daily_stages(
    segments: Sequence[RouteSegment],
    limits: DrivingLimits,
    start_date: dt.date | None = None,
    season: Season | str | None = Season.SUMMER,
) -> list[DailyStage]:
    """Split an ordered segment list into numbered days under the given limits."""

    resolved_season = resolve_season(season)
    timed = with_speed(segments, limits.average_speed_kmh)
    day_groups = group_by_day(
        [segment.distance_km for segment in timed],
        [segment.driving_time_hours for segment in timed],
        limits,
    )

    stages: list[DailyStage] = []
    for offset, indices in enumerate(day_groups):
        day_date = start_date + dt.timedelta(days=offset) if start_date is not None else None
        stages.append(
            _create_daily_stage(offset + 1, day_date, [timed[i] for i in indices], limits, resolved_season)
        )
    logger.debug(f"Planned {len(stages)} daily stages from {len(segments)} segments")
    return stages


def is_intensive_day(stage: DailyStage) -> bool:
    return stage.distance_km > INTENSIVE_DAY_DISTANCE_KM or stage.driving_time_hours > INTENSIVE_DAY_DRIVING_HOURS


def longest_intensive_streak(stages: Sequence[DailyStage]) -> int:
    longest = 0
    current = 0
    for stage in stages:
        if is_intensive_day(stage):
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def calculate_rest_days(stages: Sequence[DailyStage]) -> int:
    """One rest day for every three intensive driving days."""

    return sum(1 for stage in stages if is_intensive_day(stage)) // 3


def feasibility_for_score(score: float) -> Feasibility:
    for threshold, bucket in SCORE_BUCKETS:
        if score >= threshold:
            return bucket
    return Feasibility.UNREALISTIC


def analyze_feasibility(stages: Sequence[DailyStage], limits: DrivingLimits) -> FeasibilityAnalysis:
    """Aggregate per-day ratings into a 0-100 trip score with trip-level advice."""

    if not stages:
        return FeasibilityAnalysis(score=100, overall=Feasibility.EXCELLENT, warnings=[], recommendations=[])

    warnings: list[str] = []
    recommendations: list[str] = []
    score = sum(FEASIBILITY_SCORES[stage.feasibility] for stage in stages) / len(stages)

    for stage in stages:
        if stage.feasibility is Feasibility.UNREALISTIC:
            warnings.append(f"Day {stage.day_number}: unrealistic driving distance/time")

    average_distance = sum(stage.distance_km for stage in stages) / len(stages)
    if average_distance > limits.max_daily_distance_km * 0.9:
        warnings.append("Overall trip intensity is very high - consider adding rest days")
        score *= 0.9

    if longest_intensive_streak(stages) >= 3:
        warnings.append("Multiple consecutive intensive driving days detected")
        recommendations.append("Consider adding rest days between intensive driving periods")
        score *= 0.85

    if len(stages) > LONG_TRIP_DAYS:
        recommendations.append("Long trip - ensure adequate rest and recovery time")
    if len(stages) > VERY_LONG_TRIP_DAYS:
        score *= 0.9

    final_score = max(0, min(100, round(score)))
    return FeasibilityAnalysis(
        score=final_score,
        overall=feasibility_for_score(final_score),
        warnings=warnings,
        recommendations=recommendations,
    )

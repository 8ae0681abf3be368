"""Trip difficulty metrics and prioritised planning advice."""

from __future__ import annotations

from ...models.domain import Season, VehicleProfile, VehicleType
from ..regions import country_for
from .models import (
    AccommodationType,
    Feasibility,
    PlanningRecommendation,
    TripMetrics,
    TripPlan,
    TripSuitability,
)
from .stages import LONG_TRIP_DAYS

PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}
LARGE_MOTORHOME_LENGTH_M = 8.0


def _comfort_level(average_daily_km: float, feasibility_score: int) -> str:
    if average_daily_km < 200 and feasibility_score > 80:
        return "relaxed"
    if average_daily_km < 300 and feasibility_score > 60:
        return "moderate"
    if average_daily_km < 400 and feasibility_score > 40:
        return "intensive"
    return "extreme"


def calculate_trip_metrics(plan: TripPlan) -> TripMetrics:
    total_days = max(1, plan.total_days)
    stages = plan.daily_stages
    average_daily_km = plan.total_distance_km / total_days
    rest_ratio = plan.rest_days / total_days

    countries = {country_for(stage.end_waypoint.lat, stage.end_waypoint.lng) for stage in stages}
    stop_kinds = {stage.end_waypoint.kind for stage in stages}
    variety_score = min(100, len(countries) * 20 + len(stop_kinds) * 10)

    demanding_days = sum(
        1 for stage in stages if stage.feasibility in (Feasibility.CHALLENGING, Feasibility.UNREALISTIC)
    )
    demanding_share = demanding_days / len(stages) if stages else 0.0
    difficulty_score = min(100.0, demanding_share * 100 + (average_daily_km / 500) * 50)

    comfort_level = _comfort_level(average_daily_km, plan.feasibility_score)
    return TripMetrics(
        driving_intensity_km=round(average_daily_km),
        rest_ratio=round(rest_ratio, 2),
        variety_score=round(variety_score),
        difficulty_score=round(difficulty_score),
        comfort_level=comfort_level,
        suitability=TripSuitability(
            beginners=comfort_level == "relaxed" and difficulty_score < 30,
            families=comfort_level != "extreme" and difficulty_score < 50,
            experienced=True,
            seniors=comfort_level == "relaxed" and plan.feasibility_score > 70,
        ),
    )


def generate_planning_recommendations(
    plan: TripPlan,
    metrics: TripMetrics,
    vehicle_profile: VehicleProfile | None = None,
) -> list[PlanningRecommendation]:
    """Trip-wide advice, highest priority first."""

    recommendations: list[PlanningRecommendation] = []

    if metrics.difficulty_score > 70:
        recommendations.append(
            PlanningRecommendation(
                category="safety",
                priority="high",
                title="High Difficulty Trip",
                description="This trip has challenging daily stages that may be tiring",
                action="Add rest days between intensive driving periods",
                impact="Improved safety and enjoyment",
            )
        )

    if metrics.comfort_level in ("intensive", "extreme"):
        recommendations.append(
            PlanningRecommendation(
                category="comfort",
                priority="medium",
                title="Intensive Driving Schedule",
                description="Multiple long driving days may be exhausting",
                action="Consider reducing daily distances or adding overnight stops",
                impact="More relaxed and enjoyable travel experience",
            )
        )

    if plan.season is Season.WINTER:
        recommendations.append(
            PlanningRecommendation(
                category="season",
                priority="high",
                title="Winter Travel Considerations",
                description="Winter conditions require special preparation",
                action="Pack winter gear, check road conditions, reduce daily distances",
                impact="Safe winter travel",
            )
        )

    if (
        vehicle_profile is not None
        and vehicle_profile.vehicle_type is VehicleType.MOTORHOME
        and vehicle_profile.length_m > LARGE_MOTORHOME_LENGTH_M
    ):
        recommendations.append(
            PlanningRecommendation(
                category="route",
                priority="medium",
                title="Large Vehicle Considerations",
                description="Your large motorhome may face restrictions on some routes",
                action="Check height and length restrictions, avoid narrow mountain roads",
                impact="Avoid routing problems and damage",
            )
        )

    if any(stage.accommodation_type is AccommodationType.HOTEL for stage in plan.daily_stages):
        recommendations.append(
            PlanningRecommendation(
                category="cost",
                priority="low",
                title="Accommodation Cost Optimization",
                description="Hotel stays increase trip costs significantly",
                action="Consider campsites or wild camping where legal",
                impact="Reduced accommodation costs",
            )
        )

    if len(plan.daily_stages) > LONG_TRIP_DAYS:
        recommendations.append(
            PlanningRecommendation(
                category="timing",
                priority="medium",
                title="Extended Trip Duration",
                description="Long trips require careful planning and preparation",
                action="Plan for vehicle maintenance, ensure adequate supplies",
                impact="Smooth extended travel experience",
            )
        )

    return sorted(recommendations, key=lambda item: PRIORITY_ORDER[item.priority], reverse=True)

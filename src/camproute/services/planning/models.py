"""Trip planning domain models."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ...models.domain import Season, Waypoint


class SegmentType(str, Enum):
    DRIVING = "driving"
    OVERNIGHT = "overnight"


class Feasibility(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    CHALLENGING = "challenging"
    UNREALISTIC = "unrealistic"


class StopType(str, Enum):
    OVERNIGHT = "overnight"
    SIGHTSEEING = "sightseeing"
    LUNCH = "lunch"
    FUEL = "fuel"
    REST = "rest"


class AccommodationType(str, Enum):
    CAMPSITE = "campsite"
    WILD_CAMPING = "wild_camping"
    HOTEL = "hotel"
    AIR_BNB = "air_bnb"
    PARKING = "parking"


@dataclass(frozen=True, slots=True)
class DrivingLimits:
    max_daily_distance_km: float
    max_daily_driving_time_hours: float
    average_speed_kmh: float
    recommended_break_interval_hours: float
    break_duration_minutes: int


@dataclass(frozen=True, slots=True)
class RouteSegment:
    start_waypoint: Waypoint
    end_waypoint: Waypoint
    distance_km: float
    driving_time_hours: float
    segment_type: SegmentType = SegmentType.DRIVING


@dataclass(slots=True)
class PlannedStop:
    waypoint_id: str
    stop_type: StopType
    min_duration_hours: float
    recommended_duration_hours: float
    max_duration_hours: float
    reasoning: str


@dataclass(slots=True)
class DailyStage:
    day_number: int
    start_waypoint: Waypoint
    end_waypoint: Waypoint
    segments: List[RouteSegment]
    distance_km: float
    driving_time_hours: float
    feasibility: Feasibility
    accommodation_type: AccommodationType
    date: Optional[dt.date] = None
    warnings: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    stops: List[PlannedStop] = field(default_factory=list)


@dataclass(slots=True)
class SeasonalAdjustment:
    speed_multiplier: float
    distance_multiplier: float
    driving_time_multiplier: float
    difficulty_increase: int


@dataclass(slots=True)
class SeasonalFactors:
    season: Season
    temperature_band: tuple[int, int]
    precipitation_band: str
    tourist_density: str
    campsite_availability: str
    driving_conditions: str
    recommendations: List[str]
    warnings: List[str]


@dataclass(slots=True)
class TripPlan:
    total_days: int
    total_distance_km: float
    total_driving_time_hours: float
    daily_stages: List[DailyStage]
    rest_days: int
    feasibility_score: int
    overall_feasibility: Feasibility
    season: Season
    seasonal_factors: SeasonalFactors
    warnings: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None


@dataclass(slots=True)
class TripSuitability:
    beginners: bool
    families: bool
    experienced: bool
    seniors: bool


@dataclass(slots=True)
class TripMetrics:
    driving_intensity_km: int
    rest_ratio: float
    variety_score: int
    difficulty_score: int
    comfort_level: str
    suitability: TripSuitability


@dataclass(slots=True)
class PlanningRecommendation:
    category: str
    priority: str
    title: str
    description: str
    action: str
    impact: str

"""Trip planning request/response schemas."""

from __future__ import annotations

import datetime as dt
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import FuelType, Season, VehicleProfile, VehicleType, Waypoint, WaypointKind
from ..services.planning.models import AccommodationType, Feasibility, SegmentType, StopType


class WaypointModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    name: str
    kind: WaypointKind = Field(
        default=WaypointKind.INTERMEDIATE,
        description="start, end, intermediate, campsite or accommodation ('waypoint' is accepted as intermediate)",
    )
    visit_date: Optional[dt.date] = None
    stay_duration_hours: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None

    def to_domain(self) -> Waypoint:
        return Waypoint(
            id=self.id,
            lat=self.lat,
            lng=self.lng,
            name=self.name,
            kind=self.kind,
            visit_date=self.visit_date,
            stay_duration_hours=self.stay_duration_hours,
            notes=self.notes,
        )


class VehicleProfileModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    height_m: float = Field(..., gt=0)
    width_m: float = Field(..., gt=0)
    length_m: float = Field(..., gt=0)
    weight_t: float = Field(..., gt=0)
    vehicle_type: VehicleType = VehicleType.MOTORHOME
    fuel_type: FuelType = FuelType.DIESEL

    def to_domain(self) -> VehicleProfile:
        return VehicleProfile(
            height_m=self.height_m,
            width_m=self.width_m,
            length_m=self.length_m,
            weight_t=self.weight_t,
            vehicle_type=self.vehicle_type,
            fuel_type=self.fuel_type,
        )


class TripPlanRequest(BaseModel):
    waypoints: List[WaypointModel]
    vehicle_profile: Optional[VehicleProfileModel] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = Field(
        default=None,
        description="Last day the travellers have available. Only used to flag a mismatch with the plan.",
    )
    season: Optional[Season] = Field(
        default=None,
        description="Defaults to the season of start_date, or summer when no date is given.",
    )


class RouteSegmentModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    start_waypoint: WaypointModel
    end_waypoint: WaypointModel
    distance_km: float
    driving_time_hours: float
    segment_type: SegmentType


class PlannedStopModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    waypoint_id: str
    stop_type: StopType
    min_duration_hours: float
    recommended_duration_hours: float
    max_duration_hours: float
    reasoning: str


class DailyStageModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day_number: int
    date: Optional[dt.date] = None
    start_waypoint: WaypointModel
    end_waypoint: WaypointModel
    segments: List[RouteSegmentModel]
    distance_km: float
    driving_time_hours: float
    feasibility: Feasibility
    accommodation_type: AccommodationType
    warnings: List[str]
    recommendations: List[str]
    stops: List[PlannedStopModel]


class SeasonalFactorsModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    season: Season
    temperature_band: Tuple[int, int]
    precipitation_band: str
    tourist_density: str
    campsite_availability: str
    driving_conditions: str
    recommendations: List[str]
    warnings: List[str]


class TripSuitabilityModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    beginners: bool
    families: bool
    experienced: bool
    seniors: bool


class TripMetricsModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    driving_intensity_km: int
    rest_ratio: float
    variety_score: int
    difficulty_score: int
    comfort_level: str
    suitability: TripSuitabilityModel


class PlanningRecommendationModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: str
    priority: str
    title: str
    description: str
    action: str
    impact: str


class TripPlanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_days: int
    total_distance_km: float
    total_driving_time_hours: float
    daily_stages: List[DailyStageModel]
    rest_days: int
    feasibility_score: int
    overall_feasibility: Feasibility
    season: Season
    seasonal_factors: SeasonalFactorsModel
    warnings: List[str]
    recommendations: List[str]
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    metrics: Optional[TripMetricsModel] = None
    planning_recommendations: List[PlanningRecommendationModel] = Field(default_factory=list)

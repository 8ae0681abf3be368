"""Route optimization request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..services.routing.models import (
    CampsitePreferences,
    Objective,
    OptimizationCriteria,
    TimeConstraints,
)
from .planning import VehicleProfileModel, WaypointModel


class TimeConstraintsModel(BaseModel):
    max_driving_time_hours: Optional[float] = Field(None, gt=0)
    preferred_start_hour: Optional[float] = Field(None, ge=0, le=24)
    avoid_night_driving: bool = False


class CampsitePreferencesModel(BaseModel):
    max_distance_between_stops_km: float = Field(50.0, gt=0)
    preferred_stop_duration_hours: Optional[float] = Field(None, ge=0)
    require_campsite_overnight: bool = False


class OptimizationCriteriaModel(BaseModel):
    objective: Objective = Objective.SHORTEST
    vehicle_profile: Optional[VehicleProfileModel] = None
    time_constraints: Optional[TimeConstraintsModel] = None
    campsite_preferences: Optional[CampsitePreferencesModel] = None
    fix_end: bool = Field(
        default=True,
        description="Keep the end waypoint last. When False the destination may be reordered.",
    )
    locked_waypoint_ids: List[str] = Field(
        default_factory=list,
        description="Waypoints that must keep their current position in the route.",
    )

    def to_domain(self) -> OptimizationCriteria:
        return OptimizationCriteria(
            objective=self.objective,
            vehicle_profile=self.vehicle_profile.to_domain() if self.vehicle_profile else None,
            time_constraints=TimeConstraints(**self.time_constraints.model_dump()) if self.time_constraints else None,
            campsite_preferences=(
                CampsitePreferences(**self.campsite_preferences.model_dump()) if self.campsite_preferences else None
            ),
            fix_end=self.fix_end,
            locked_waypoint_ids=list(self.locked_waypoint_ids),
        )


class OptimizeRouteRequest(BaseModel):
    waypoints: List[WaypointModel]
    criteria: Optional[OptimizationCriteriaModel] = None


class InsertionRequest(BaseModel):
    waypoints: List[WaypointModel]
    new_waypoint: WaypointModel
    criteria: Optional[OptimizationCriteriaModel] = None


class RouteAnalysisRequest(BaseModel):
    waypoints: List[WaypointModel]


class RouteSummaryModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    waypoints: List[WaypointModel]
    total_distance_km: float
    total_time_hours: float
    estimated_cost: Optional[float] = None
    reordering_applied: bool = False


class ImprovementsModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    distance_saved_km: float
    time_saved_minutes: float
    percentage_improvement: float
    cost_saved: Optional[float] = None


class OptimizationMetadataModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    algorithm: str
    iterations: int
    execution_time_ms: float
    convergence_reached: bool


class OptimizationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    original_route: RouteSummaryModel
    optimized_route: RouteSummaryModel
    improvements: ImprovementsModel
    optimization_metadata: OptimizationMetadataModel
    summary: str = ""


class InsertionOptionModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    position: int
    distance_added_km: float
    time_added_minutes: float
    efficiency: float


class InsertionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    suggested_position: int
    route_impact: InsertionOptionModel
    alternatives: List[InsertionOptionModel]


class InefficientSegmentModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    start_index: int
    end_index: int
    inefficiency_ratio: float


class RouteAnalysisResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    has_backtracking: bool
    crossing_paths: bool
    inefficient_segments: List[InefficientSegmentModel]
    overall_efficiency: float

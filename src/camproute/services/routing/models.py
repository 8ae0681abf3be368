"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ...models.domain import VehicleProfile, Waypoint


class Objective(str, Enum):
    SHORTEST = "shortest"
    FASTEST = "fastest"
    BALANCED = "balanced"


@dataclass(slots=True)
class TimeConstraints:
    max_driving_time_hours: Optional[float] = None
    preferred_start_hour: Optional[float] = None
    avoid_night_driving: bool = False


@dataclass(slots=True)
class CampsitePreferences:
    max_distance_between_stops_km: float = 50.0
    preferred_stop_duration_hours: Optional[float] = None
    require_campsite_overnight: bool = False


@dataclass(slots=True)
class OptimizationCriteria:
    objective: Objective = Objective.SHORTEST
    vehicle_profile: Optional[VehicleProfile] = None
    time_constraints: Optional[TimeConstraints] = None
    campsite_preferences: Optional[CampsitePreferences] = None
    fix_end: bool = True
    locked_waypoint_ids: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.objective = Objective(self.objective)


@dataclass(slots=True)
class RouteSummary:
    waypoints: List[Waypoint]
    total_distance_km: float
    total_time_hours: float
    estimated_cost: Optional[float] = None
    reordering_applied: bool = False


@dataclass(slots=True)
class Improvements:
    distance_saved_km: float
    time_saved_minutes: float
    percentage_improvement: float
    cost_saved: Optional[float] = None


@dataclass(slots=True)
class OptimizationMetadata:
    algorithm: str
    iterations: int
    execution_time_ms: float
    convergence_reached: bool


@dataclass(slots=True)
class OptimizationResult:
    original_route: RouteSummary
    optimized_route: RouteSummary
    improvements: Improvements
    optimization_metadata: OptimizationMetadata


@dataclass(slots=True)
class InsertionOption:
    position: int
    distance_added_km: float
    time_added_minutes: float
    efficiency: float


@dataclass(slots=True)
class InsertionResult:
    suggested_position: int
    route_impact: InsertionOption
    alternatives: List[InsertionOption]


@dataclass(slots=True)
class InefficientSegment:
    start_index: int
    end_index: int
    inefficiency_ratio: float


@dataclass(slots=True)
class RouteAnalysis:
    has_backtracking: bool
    crossing_paths: bool
    inefficient_segments: List[InefficientSegment]
    overall_efficiency: float

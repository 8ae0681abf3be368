"""Route optimization orchestration service."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Sequence

from ...config import settings
from ...errors import InvalidInputError
from ...models.domain import FuelType, VehicleProfile, VehicleType, Waypoint, WaypointKind
from ..geospatial import distance_matrix_km
from ..planning.limits import derive_limits
from ..planning.models import DrivingLimits
from ..planning.segments import total_distance_km
from .models import (
    Improvements,
    InsertionOption,
    InsertionResult,
    Objective,
    OptimizationCriteria,
    OptimizationMetadata,
    OptimizationResult,
    RouteSummary,
)
from .solver import (
    CampsiteRule,
    TourProblem,
    build_order,
    nearest_neighbor_sequence,
    route_distance_km,
    solve_sequence,
    tour_cost,
)

logger = logging.getLogger(__name__)

OBJECTIVE_WEIGHTS: dict[Objective, tuple[float, float]] = {
    Objective.SHORTEST: (1.0, 0.0),
    Objective.FASTEST: (0.0, 1.0),
    Objective.BALANCED: (0.5, 0.5),
}

INSERTION_WEIGHTS: dict[Objective, tuple[float, float]] = {
    Objective.SHORTEST: (0.8, 0.2),
    Objective.FASTEST: (0.2, 0.8),
    Objective.BALANCED: (0.5, 0.5),
}

# Detours beyond these no longer count as efficient insertions.
MAX_REASONABLE_DETOUR_KM = 50.0
MAX_REASONABLE_DETOUR_MINUTES = 60.0


def _planning_limits(criteria: OptimizationCriteria) -> DrivingLimits:
    """Driving limits for the vehicle, tightened by the caller's time constraints."""

    limits = derive_limits(criteria.vehicle_profile)
    constraints = criteria.time_constraints
    if constraints is None:
        return limits

    max_hours = limits.max_daily_driving_time_hours
    if constraints.max_driving_time_hours is not None:
        max_hours = min(max_hours, constraints.max_driving_time_hours)
    if constraints.avoid_night_driving and constraints.preferred_start_hour is not None:
        daylight_hours = settings.daylight_end_hour - constraints.preferred_start_hour
        max_hours = min(max_hours, max(daylight_hours, 1.0))
    return replace(limits, max_daily_driving_time_hours=max_hours)


def _anchors(waypoints: Sequence[Waypoint], criteria: OptimizationCriteria) -> dict[int, int]:
    """Map of route slot to the waypoint index that must occupy it."""

    size = len(waypoints)
    start_index = next((i for i, wp in enumerate(waypoints) if wp.kind is WaypointKind.START), 0)
    anchors = {0: start_index}
    if criteria.fix_end:
        end_index = next(
            (i for i, wp in enumerate(waypoints) if wp.kind is WaypointKind.END and i != start_index),
            None,
        )
        if end_index is not None:
            anchors[size - 1] = end_index

    locked = set(criteria.locked_waypoint_ids)
    for index, waypoint in enumerate(waypoints):
        if waypoint.id not in locked:
            continue
        if index in anchors or index in anchors.values():
            logger.debug(f"Ignoring lock on waypoint {waypoint.id}: its slot is taken by the start or end")
            continue
        anchors[index] = index
    return anchors


def _build_problem(waypoints: Sequence[Waypoint], criteria: OptimizationCriteria, limits: DrivingLimits) -> TourProblem:
    distance_weight, time_weight = OBJECTIVE_WEIGHTS[criteria.objective]
    campsite_rule = None
    preferences = criteria.campsite_preferences
    if preferences is not None and preferences.require_campsite_overnight:
        campsite_rule = CampsiteRule(
            campsite_indices=[i for i, wp in enumerate(waypoints) if wp.kind is WaypointKind.CAMPSITE],
            max_distance_km=preferences.max_distance_between_stops_km,
            limits=limits,
        )

    problem = TourProblem(
        keys=[waypoint.id for waypoint in waypoints],
        distances=distance_matrix_km([(wp.lat, wp.lng) for wp in waypoints]),
        average_speed_kmh=limits.average_speed_kmh,
        anchors=_anchors(waypoints, criteria),
        distance_weight=distance_weight,
        time_weight=time_weight,
        campsite_rule=campsite_rule,
    )

    # Normalise against the nearest-neighbor tour, which does not depend on the input order.
    reference = route_distance_km(problem, _seed_order(problem))
    if reference > 0:
        problem.reference_distance_km = reference
        problem.reference_time_hours = reference / limits.average_speed_kmh
    return problem


def _seed_order(problem: TourProblem) -> list[int]:
    return build_order(problem, nearest_neighbor_sequence(problem))


def fuel_consumption_per_100km(vehicle_profile: VehicleProfile | None) -> float:
    """Litres per 100 km (kWh for electric campers)."""

    if vehicle_profile is None:
        return 8.0
    weight = vehicle_profile.weight_t
    if vehicle_profile.vehicle_type is VehicleType.MOTORHOME:
        consumption = 12.0 + weight * 0.5
    elif vehicle_profile.vehicle_type is VehicleType.CARAVAN:
        consumption = 10.0 + weight * 0.3
    else:
        consumption = 9.0 + weight * 0.2
    if vehicle_profile.fuel_type is FuelType.ELECTRIC:
        return consumption * 2.2
    if vehicle_profile.fuel_type is FuelType.LPG:
        return consumption * 1.25
    return consumption


def estimate_route_cost(distance_km: float, vehicle_profile: VehicleProfile | None = None) -> float:
    """Fuel plus toll estimate in euros."""

    fuel_type = vehicle_profile.fuel_type if vehicle_profile else FuelType.DIESEL
    price = settings.fuel_prices_per_litre.get(fuel_type.value, settings.fuel_prices_per_litre["diesel"])
    fuel_cost = distance_km * fuel_consumption_per_100km(vehicle_profile) / 100 * price
    return fuel_cost + distance_km * settings.toll_cost_per_km


def _summary(
    waypoints: list[Waypoint],
    distance_km: float,
    limits: DrivingLimits,
    vehicle_profile: VehicleProfile | None,
    reordering_applied: bool = False,
) -> RouteSummary:
    return RouteSummary(
        waypoints=waypoints,
        total_distance_km=distance_km,
        total_time_hours=distance_km / limits.average_speed_kmh,
        estimated_cost=estimate_route_cost(distance_km, vehicle_profile) if vehicle_profile else None,
        reordering_applied=reordering_applied,
    )


def optimize_route(waypoints: Sequence[Waypoint], criteria: OptimizationCriteria | None = None) -> OptimizationResult:
    """Reorder the stops of a route to reduce the weighted distance/time objective.

    The start waypoint stays first, a fixed end stays last and locked stops
    keep their positions. When no strictly better ordering is found the input
    ordering is returned with zero savings.
    """

    if len(waypoints) < 3:
        raise InvalidInputError("At least 3 waypoints required for route optimization")

    started = time.perf_counter()
    criteria = criteria or OptimizationCriteria()
    original = list(waypoints)
    limits = _planning_limits(criteria)
    problem = _build_problem(original, criteria, limits)

    original_order = list(range(len(original)))
    original_cost = tour_cost(problem, original_order)
    original_distance = route_distance_km(problem, original_order)
    # Soft constraints may reorder stops but never lengthen the trip.
    problem.distance_cap_km = original_distance

    best_order, iterations, converged = solve_sequence(problem, problem.movable)
    best_cost = tour_cost(problem, best_order)
    best_distance = route_distance_km(problem, best_order)

    accepted = best_cost < original_cost - 1e-9 and best_distance <= original_distance
    if not accepted:
        best_order = original_order
        best_distance = original_distance

    optimized = [original[index] for index in best_order]
    reordered = best_order != original_order
    original_summary = _summary(original, original_distance, limits, criteria.vehicle_profile)
    optimized_summary = _summary(optimized, best_distance, limits, criteria.vehicle_profile, reordered)

    distance_saved = max(0.0, original_distance - best_distance)
    cost_saved = None
    if original_summary.estimated_cost is not None and optimized_summary.estimated_cost is not None:
        cost_saved = max(0.0, original_summary.estimated_cost - optimized_summary.estimated_cost)
    improvements = Improvements(
        distance_saved_km=distance_saved,
        time_saved_minutes=max(0.0, (original_summary.total_time_hours - optimized_summary.total_time_hours) * 60),
        percentage_improvement=distance_saved / original_distance * 100 if original_distance > 0 else 0.0,
        cost_saved=cost_saved,
    )

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"Optimized {len(original)} waypoints ({criteria.objective.value}): "
        f"{iterations} 2-opt passes, objective {original_cost:.4f} -> {min(original_cost, best_cost):.4f}, "
        f"saved {distance_saved:.1f} km in {elapsed_ms:.1f} ms"
    )
    return OptimizationResult(
        original_route=original_summary,
        optimized_route=optimized_summary,
        improvements=improvements,
        optimization_metadata=OptimizationMetadata(
            algorithm=f"nearest-neighbor + 2-opt ({criteria.objective.value})",
            iterations=iterations,
            execution_time_ms=elapsed_ms,
            convergence_reached=converged,
        ),
    )


def _insertion_efficiency(distance_added: float, minutes_added: float, objective: Objective) -> float:
    distance_score = max(0.0, 1 - distance_added / MAX_REASONABLE_DETOUR_KM)
    time_score = max(0.0, 1 - minutes_added / MAX_REASONABLE_DETOUR_MINUTES)
    distance_weight, time_weight = INSERTION_WEIGHTS[objective]
    return distance_weight * distance_score + time_weight * time_score


def find_optimal_insertion(
    waypoints: Sequence[Waypoint],
    new_waypoint: Waypoint,
    criteria: OptimizationCriteria | None = None,
) -> InsertionResult:
    """Best position for a new stop, with the next three alternatives.

    Positions before the start waypoint, or after a fixed end waypoint, are
    not considered.
    """

    criteria = criteria or OptimizationCriteria()
    existing = list(waypoints)
    if not existing:
        impact = InsertionOption(position=0, distance_added_km=0.0, time_added_minutes=0.0, efficiency=1.0)
        return InsertionResult(suggested_position=0, route_impact=impact, alternatives=[])

    limits = derive_limits(criteria.vehicle_profile)
    base_distance = total_distance_km(existing)
    last_position = len(existing)
    if criteria.fix_end and len(existing) > 1 and existing[-1].kind is WaypointKind.END:
        last_position -= 1

    options: list[InsertionOption] = []
    for position in range(1, last_position + 1):
        candidate = existing[:position] + [new_waypoint] + existing[position:]
        distance_added = total_distance_km(candidate) - base_distance
        minutes_added = distance_added / limits.average_speed_kmh * 60
        options.append(
            InsertionOption(
                position=position,
                distance_added_km=distance_added,
                time_added_minutes=minutes_added,
                efficiency=_insertion_efficiency(distance_added, minutes_added, criteria.objective),
            )
        )

    options.sort(key=lambda option: (-option.efficiency, option.distance_added_km, option.position))
    best = options[0]
    return InsertionResult(suggested_position=best.position, route_impact=best, alternatives=options[1:4])

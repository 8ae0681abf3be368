import random

import pytest

from src.camproute.errors import InvalidInputError
from src.camproute.models.domain import FuelType, VehicleProfile, VehicleType, Waypoint, WaypointKind
from src.camproute.services.planning.segments import total_distance_km
from src.camproute.services.routing.models import (
    CampsitePreferences,
    Objective,
    OptimizationCriteria,
    TimeConstraints,
)
from src.camproute.services.routing.service import (
    _planning_limits,
    estimate_route_cost,
    optimize_route,
)


def _waypoint(wid: str, lng: float, kind: WaypointKind = WaypointKind.INTERMEDIATE, lat: float = 45.0) -> Waypoint:
    return Waypoint(id=wid, lat=lat, lng=lng, name=wid.title(), kind=kind)


def _ids(waypoints) -> list[str]:
    return [wp.id for wp in waypoints]


ZIGZAG = [
    _waypoint("start", 0.0, WaypointKind.START),
    _waypoint("a", 6.0),
    _waypoint("b", 2.0),
    _waypoint("c", 8.0),
    _waypoint("d", 4.0),
    _waypoint("end", 10.0, WaypointKind.END),
]


def _random_route(seed: int, size: int = 7) -> list[Waypoint]:
    rng = random.Random(seed)
    waypoints = [
        Waypoint(
            id=f"wp{i}",
            lat=rng.uniform(41.0, 50.0),
            lng=rng.uniform(-2.0, 10.0),
            name=f"Stop {i}",
        )
        for i in range(size)
    ]
    waypoints[0] = Waypoint(id="wp0", lat=waypoints[0].lat, lng=waypoints[0].lng, name="Start", kind="start")
    last = waypoints[-1]
    waypoints[-1] = Waypoint(id=last.id, lat=last.lat, lng=last.lng, name="End", kind="end")
    return waypoints


@pytest.mark.parametrize("count", [0, 1, 2])
def test_fewer_than_three_waypoints_rejected(count):
    with pytest.raises(InvalidInputError, match="At least 3 waypoints required for route optimization"):
        optimize_route(ZIGZAG[:count])


def test_zigzag_is_untangled():
    result = optimize_route(ZIGZAG)

    assert _ids(result.optimized_route.waypoints) == ["start", "b", "d", "a", "c", "end"]
    assert result.optimized_route.reordering_applied is True
    assert result.improvements.distance_saved_km > 0
    assert result.improvements.time_saved_minutes > 0
    assert result.optimized_route.total_distance_km < result.original_route.total_distance_km
    assert result.improvements.percentage_improvement == pytest.approx(
        result.improvements.distance_saved_km / result.original_route.total_distance_km * 100
    )
    assert result.optimization_metadata.algorithm.startswith("nearest-neighbor + 2-opt")
    assert result.optimization_metadata.convergence_reached is True


def test_original_route_is_reported_unchanged():
    result = optimize_route(ZIGZAG)
    assert _ids(result.original_route.waypoints) == _ids(ZIGZAG)


def test_already_optimal_route_is_returned_as_is():
    ordered = [ZIGZAG[0], ZIGZAG[2], ZIGZAG[4], ZIGZAG[1], ZIGZAG[3], ZIGZAG[5]]
    result = optimize_route(ordered)

    assert _ids(result.optimized_route.waypoints) == _ids(ordered)
    assert result.optimized_route.reordering_applied is False
    assert result.improvements.distance_saved_km == 0
    assert result.improvements.percentage_improvement == 0


def test_start_waypoint_is_moved_to_the_front():
    shuffled = [ZIGZAG[1], ZIGZAG[0], ZIGZAG[2], ZIGZAG[3], ZIGZAG[4], ZIGZAG[5]]
    result = optimize_route(shuffled)
    assert result.optimized_route.waypoints[0].id == "start"
    assert result.optimized_route.waypoints[-1].id == "end"


def test_end_may_move_when_not_fixed():
    route = [
        _waypoint("start", 0.0, WaypointKind.START),
        _waypoint("x", 6.0),
        _waypoint("y", 4.0),
        _waypoint("end", 2.0, WaypointKind.END),
    ]

    fixed = optimize_route(route)
    assert fixed.optimized_route.waypoints[-1].id == "end"

    free = optimize_route(route, OptimizationCriteria(fix_end=False))
    assert _ids(free.optimized_route.waypoints) == ["start", "end", "y", "x"]


def test_locked_waypoint_keeps_its_position():
    result = optimize_route(ZIGZAG, OptimizationCriteria(locked_waypoint_ids=["a"]))
    optimized = _ids(result.optimized_route.waypoints)

    assert optimized[0] == "start"
    assert optimized[1] == "a"
    assert optimized[-1] == "end"
    assert sorted(optimized) == sorted(_ids(ZIGZAG))


def test_lock_on_start_slot_is_ignored():
    result = optimize_route(ZIGZAG, OptimizationCriteria(locked_waypoint_ids=["start", "end"]))
    assert _ids(result.optimized_route.waypoints) == ["start", "b", "d", "a", "c", "end"]


@pytest.mark.parametrize("objective", list(Objective))
def test_every_objective_untangles_the_zigzag(objective):
    result = optimize_route(ZIGZAG, OptimizationCriteria(objective=objective))
    assert result.improvements.distance_saved_km > 0
    assert objective.value in result.optimization_metadata.algorithm


@pytest.mark.parametrize("seed", range(8))
def test_objectives_agree_under_a_single_average_speed(seed):
    route = _random_route(seed)
    orders = {
        objective: _ids(optimize_route(route, OptimizationCriteria(objective=objective)).optimized_route.waypoints)
        for objective in Objective
    }
    assert orders[Objective.FASTEST] == orders[Objective.SHORTEST]
    assert orders[Objective.BALANCED] == orders[Objective.SHORTEST]


@pytest.mark.parametrize("seed", range(8))
def test_optimization_properties_on_random_routes(seed):
    route = _random_route(seed)
    result = optimize_route(route)
    optimized = result.optimized_route.waypoints

    assert result.improvements.percentage_improvement >= 0
    assert result.optimized_route.total_distance_km <= result.original_route.total_distance_km + 1e-9
    assert optimized[0].id == "wp0"
    assert optimized[-1].id == route[-1].id
    assert sorted(_ids(optimized)) == sorted(_ids(route))


@pytest.mark.parametrize("seed", range(8))
def test_optimizing_twice_saves_nothing_more(seed):
    criteria = OptimizationCriteria(objective=Objective.BALANCED)
    first = optimize_route(_random_route(seed), criteria)
    second = optimize_route(first.optimized_route.waypoints, criteria)

    assert _ids(second.optimized_route.waypoints) == _ids(first.optimized_route.waypoints)
    assert second.improvements.distance_saved_km == 0
    assert second.improvements.percentage_improvement == 0


def test_input_waypoints_are_not_modified():
    before = list(ZIGZAG)
    optimize_route(ZIGZAG)
    assert ZIGZAG == before


CAMPSITE_CRITERIA = OptimizationCriteria(
    campsite_preferences=CampsitePreferences(max_distance_between_stops_km=30, require_campsite_overnight=True)
)


def _campsite_route(seed: int) -> list[Waypoint]:
    waypoints = _random_route(seed)
    for index in (2, 4):
        stop = waypoints[index]
        waypoints[index] = Waypoint(id=stop.id, lat=stop.lat, lng=stop.lng, name="Camping", kind="campsite")
    return waypoints


def test_campsite_preference_moves_the_overnight_to_a_campsite():
    # Days hold about 5.3 degrees of longitude at this latitude. Visiting "q"
    # before "camp" costs one extra degree but ends the first day at the campsite.
    route = [
        _waypoint("start", 0.0, WaypointKind.START),
        _waypoint("q", 2.5),
        _waypoint("r", 1.0),
        _waypoint("camp", 2.0, WaypointKind.CAMPSITE),
        _waypoint("end", 7.0, WaypointKind.END),
    ]

    shortest = optimize_route(route)
    assert _ids(shortest.optimized_route.waypoints) == ["start", "r", "camp", "q", "end"]

    result = optimize_route(route, CAMPSITE_CRITERIA)
    assert _ids(result.optimized_route.waypoints) == ["start", "r", "q", "camp", "end"]
    assert result.optimized_route.reordering_applied is True
    assert result.optimized_route.total_distance_km > shortest.optimized_route.total_distance_km
    assert result.optimized_route.total_distance_km <= result.original_route.total_distance_km
    assert result.improvements.distance_saved_km > 0


def test_campsite_preference_never_lengthens_a_short_route():
    # The input is already the shortest order; the campsite detour would be longer.
    route = [
        _waypoint("start", 0.0, WaypointKind.START),
        _waypoint("r", 1.0),
        _waypoint("camp", 2.0, WaypointKind.CAMPSITE),
        _waypoint("q", 2.5),
        _waypoint("end", 7.0, WaypointKind.END),
    ]
    result = optimize_route(route, CAMPSITE_CRITERIA)

    assert _ids(result.optimized_route.waypoints) == _ids(route)
    assert result.optimized_route.reordering_applied is False
    assert result.optimized_route.total_distance_km == result.original_route.total_distance_km


@pytest.mark.parametrize("seed", range(120))
def test_campsite_optimization_never_lengthens_random_routes(seed):
    route = _campsite_route(seed)
    result = optimize_route(route, CAMPSITE_CRITERIA)
    optimized = result.optimized_route.waypoints

    assert total_distance_km(optimized) <= total_distance_km(route) + 1e-6
    assert result.optimized_route.total_distance_km <= result.original_route.total_distance_km + 1e-9
    assert result.improvements.percentage_improvement >= 0
    assert optimized[0].id == "wp0"
    assert optimized[-1].id == route[-1].id
    assert sorted(_ids(optimized)) == sorted(_ids(route))


def test_cost_estimate_requires_vehicle_profile():
    plain = optimize_route(ZIGZAG)
    assert plain.optimized_route.estimated_cost is None
    assert plain.improvements.cost_saved is None

    profile = VehicleProfile(height_m=3.0, width_m=2.3, length_m=6.5, weight_t=3.2)
    costed = optimize_route(ZIGZAG, OptimizationCriteria(vehicle_profile=profile))
    assert costed.optimized_route.estimated_cost > 0
    assert costed.improvements.cost_saved > 0


def test_estimate_route_cost():
    assert estimate_route_cost(100) == pytest.approx(22.8)
    motorhome = VehicleProfile(height_m=3.0, width_m=2.3, length_m=7.0, weight_t=3.5)
    assert estimate_route_cost(100, motorhome) == pytest.approx(32.0)
    assert estimate_route_cost(0, motorhome) == 0


def test_electric_campers_are_cheaper_to_run():
    diesel = VehicleProfile(3.0, 2.3, 6.0, 3.0, VehicleType.CAMPERVAN, FuelType.DIESEL)
    electric = VehicleProfile(3.0, 2.3, 6.0, 3.0, VehicleType.CAMPERVAN, FuelType.ELECTRIC)
    assert estimate_route_cost(300, electric) < estimate_route_cost(300, diesel)


def test_time_constraints_tighten_daily_hours():
    criteria = OptimizationCriteria(
        time_constraints=TimeConstraints(max_driving_time_hours=6, preferred_start_hour=16, avoid_night_driving=True)
    )
    assert _planning_limits(criteria).max_daily_driving_time_hours == 4

    relaxed = OptimizationCriteria(time_constraints=TimeConstraints(max_driving_time_hours=5))
    assert _planning_limits(relaxed).max_daily_driving_time_hours == 5

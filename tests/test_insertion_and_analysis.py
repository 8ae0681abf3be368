import pytest

from src.camproute.models.domain import Waypoint, WaypointKind
from src.camproute.services.outputs.formatter import format_duration, format_optimization_summary
from src.camproute.services.routing.analysis import analyze_route, route_efficiency
from src.camproute.services.routing.models import (
    Improvements,
    OptimizationCriteria,
    OptimizationMetadata,
    OptimizationResult,
    RouteSummary,
)
from src.camproute.services.routing.service import find_optimal_insertion


def _waypoint(wid: str, lat: float, lng: float, kind: WaypointKind = WaypointKind.INTERMEDIATE) -> Waypoint:
    return Waypoint(id=wid, lat=lat, lng=lng, name=wid.title(), kind=kind)


def _result(distance_saved: float, minutes_saved: float, percentage: float, cost_saved: float | None) -> OptimizationResult:
    summary = RouteSummary(waypoints=[], total_distance_km=100, total_time_hours=1.5)
    return OptimizationResult(
        original_route=summary,
        optimized_route=summary,
        improvements=Improvements(
            distance_saved_km=distance_saved,
            time_saved_minutes=minutes_saved,
            percentage_improvement=percentage,
            cost_saved=cost_saved,
        ),
        optimization_metadata=OptimizationMetadata(
            algorithm="nearest-neighbor + 2-opt (shortest)",
            iterations=2,
            execution_time_ms=1.0,
            convergence_reached=True,
        ),
    )


def test_insertion_between_start_and_fixed_end():
    route = [_waypoint("a", 45.0, 0.0, WaypointKind.START), _waypoint("b", 45.0, 10.0, WaypointKind.END)]
    result = find_optimal_insertion(route, _waypoint("new", 45.0, 5.0))

    assert result.suggested_position == 1
    assert result.alternatives == []
    assert result.route_impact.distance_added_km == pytest.approx(0.0, abs=5)


def test_insertion_prefers_the_smallest_detour():
    route = [
        _waypoint("a", 45.0, 0.0, WaypointKind.START),
        _waypoint("m", 45.0, 5.0),
        _waypoint("b", 45.0, 10.0, WaypointKind.END),
    ]
    result = find_optimal_insertion(route, _waypoint("new", 45.0, 2.0))

    assert result.suggested_position == 1
    assert [option.position for option in result.alternatives] == [2]
    assert result.route_impact.efficiency >= result.alternatives[0].efficiency
    assert result.alternatives[0].distance_added_km > result.route_impact.distance_added_km


def test_insertion_after_open_end():
    route = [_waypoint("a", 45.0, 0.0, WaypointKind.START), _waypoint("b", 45.0, 2.0)]
    result = find_optimal_insertion(route, _waypoint("new", 45.0, 4.0), OptimizationCriteria(fix_end=False))
    assert result.suggested_position == 2


def test_insertion_into_empty_route():
    result = find_optimal_insertion([], _waypoint("new", 45.0, 4.0))
    assert result.suggested_position == 0
    assert result.route_impact.distance_added_km == 0


def test_short_routes_have_nothing_to_analyse():
    analysis = analyze_route([_waypoint("a", 45.0, 0.0), _waypoint("b", 45.0, 1.0)])
    assert analysis.has_backtracking is False
    assert analysis.crossing_paths is False
    assert analysis.inefficient_segments == []
    assert analysis.overall_efficiency == 1.0


def test_straight_route_is_efficient():
    route = [_waypoint(f"p{i}", 45.0, float(i * 2)) for i in range(4)]
    analysis = analyze_route(route)

    assert analysis.has_backtracking is False
    assert analysis.crossing_paths is False
    assert analysis.inefficient_segments == []
    assert analysis.overall_efficiency == pytest.approx(1.0, abs=0.01)


def test_crossing_legs_detected():
    route = [
        _waypoint("a", 45.0, 0.0),
        _waypoint("b", 46.0, 2.0),
        _waypoint("c", 45.0, 2.0),
        _waypoint("d", 46.0, 0.0),
    ]
    assert analyze_route(route).crossing_paths is True


def test_backtracking_detected():
    route = [
        _waypoint("a", 45.0, 0.0),
        _waypoint("b", 45.0, 4.0),
        _waypoint("c", 45.0, 8.0),
        _waypoint("d", 45.0, 1.0),
    ]
    analysis = analyze_route(route)

    assert analysis.has_backtracking is True
    assert 1 <= len(analysis.inefficient_segments) <= 3
    ratios = [segment.inefficiency_ratio for segment in analysis.inefficient_segments]
    assert ratios == sorted(ratios, reverse=True)
    assert all(ratio > 1.5 for ratio in ratios)
    assert analysis.overall_efficiency < 0.2


def test_route_efficiency_of_round_trip_is_zero():
    route = [_waypoint("a", 45.0, 0.0), _waypoint("b", 45.0, 1.0), _waypoint("c", 45.0, 0.0)]
    assert route_efficiency(route) == 0


def test_summary_for_negligible_improvement():
    assert format_optimization_summary(_result(0.4, 0.3, 0.5, None)) == "Route is already well optimized"


def test_summary_lists_savings():
    summary = format_optimization_summary(_result(12.0, 90.0, 12.0, 5.4))
    assert "12.0 km shorter" in summary
    assert "1h 30m faster" in summary
    assert "€5 cheaper" in summary


def test_format_duration():
    assert format_duration(45) == "45m"
    assert format_duration(125) == "2h 5m"

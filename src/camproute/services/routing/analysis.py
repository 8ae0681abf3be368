"""Shape analysis of an ordered route: backtracking, crossings and detours."""

from __future__ import annotations

from typing import Sequence

from shapely.geometry import LineString

from ...models.domain import Waypoint
from ..geospatial import bearing_degrees, haversine_km
from .models import InefficientSegment, RouteAnalysis

SHARP_TURN_MIN_DEGREES = 120.0
SHARP_TURN_MAX_DEGREES = 240.0
BACKTRACK_APPROACH_RATIO = 0.8
DETOUR_RATIO_THRESHOLD = 1.5
MAX_REPORTED_SEGMENTS = 3


def _distance(a: Waypoint, b: Waypoint) -> float:
    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def _path_length(waypoints: Sequence[Waypoint]) -> float:
    return sum(_distance(a, b) for a, b in zip(waypoints, waypoints[1:]))


def route_efficiency(waypoints: Sequence[Waypoint]) -> float:
    """Straight-line distance from first to last stop divided by the distance travelled."""

    if len(waypoints) < 2:
        return 1.0
    travelled = _path_length(waypoints)
    if travelled == 0:
        return 1.0
    return _distance(waypoints[0], waypoints[-1]) / travelled


def has_backtracking(waypoints: Sequence[Waypoint]) -> bool:
    """A sharp turn that heads back toward an earlier stop."""

    for i in range(len(waypoints) - 2):
        current, following, after = waypoints[i], waypoints[i + 1], waypoints[i + 2]
        first = bearing_degrees(current.lat, current.lng, following.lat, following.lng)
        second = bearing_degrees(following.lat, following.lng, after.lat, after.lng)
        turn = abs(first - second)
        if not SHARP_TURN_MIN_DEGREES < turn < SHARP_TURN_MAX_DEGREES:
            continue
        for earlier in waypoints[:i]:
            if _distance(after, earlier) < _distance(current, earlier) * BACKTRACK_APPROACH_RATIO:
                return True
    return False


def has_crossing_paths(waypoints: Sequence[Waypoint]) -> bool:
    legs = [LineString([(a.lng, a.lat), (b.lng, b.lat)]) for a, b in zip(waypoints, waypoints[1:])]
    for i in range(len(legs)):
        for j in range(i + 2, len(legs)):
            if legs[i].crosses(legs[j]):
                return True
    return False


def find_inefficient_segments(waypoints: Sequence[Waypoint]) -> list[InefficientSegment]:
    segments: list[InefficientSegment] = []
    for i in range(len(waypoints) - 2):
        for j in range(i + 2, len(waypoints)):
            direct = _distance(waypoints[i], waypoints[j])
            if direct == 0:
                continue
            ratio = _path_length(waypoints[i : j + 1]) / direct
            if ratio > DETOUR_RATIO_THRESHOLD:
                segments.append(InefficientSegment(start_index=i, end_index=j, inefficiency_ratio=ratio))
    segments.sort(key=lambda segment: segment.inefficiency_ratio, reverse=True)
    return segments[:MAX_REPORTED_SEGMENTS]


def analyze_route(waypoints: Sequence[Waypoint]) -> RouteAnalysis:
    """Indicators that a route would benefit from optimization."""

    if len(waypoints) < 3:
        return RouteAnalysis(
            has_backtracking=False,
            crossing_paths=False,
            inefficient_segments=[],
            overall_efficiency=1.0,
        )
    return RouteAnalysis(
        has_backtracking=has_backtracking(waypoints),
        crossing_paths=has_crossing_paths(waypoints),
        inefficient_segments=find_inefficient_segments(waypoints),
        overall_efficiency=route_efficiency(waypoints),
    )

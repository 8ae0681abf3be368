import pytest

from src.camproute.models.domain import Waypoint, WaypointKind
from src.camproute.services.geospatial import road_distance_km
from src.camproute.services.planning.models import SegmentType
from src.camproute.services.planning.segments import build_segments, total_distance_km, with_speed


def _waypoint(wid: str, lat: float, lng: float, kind: WaypointKind = WaypointKind.INTERMEDIATE, **extra) -> Waypoint:
    return Waypoint(id=wid, lat=lat, lng=lng, name=wid.title(), kind=kind, **extra)


ROUTE = [
    _waypoint("paris", 48.8566, 2.3522, WaypointKind.START),
    _waypoint("lyon", 45.764, 4.8357),
    _waypoint("marseille", 43.2965, 5.3698, WaypointKind.END),
]


def test_one_segment_per_consecutive_pair():
    segments = build_segments(ROUTE)

    assert len(segments) == len(ROUTE) - 1
    assert [s.start_waypoint.id for s in segments] == ["paris", "lyon"]
    assert [s.end_waypoint.id for s in segments] == ["lyon", "marseille"]


def test_segment_distances_sum_to_road_distance():
    expected = sum(road_distance_km(a.lat, a.lng, b.lat, b.lng) for a, b in zip(ROUTE, ROUTE[1:]))
    assert sum(s.distance_km for s in build_segments(ROUTE)) == pytest.approx(expected)
    assert total_distance_km(ROUTE) == pytest.approx(expected)


def test_segments_timed_at_given_speed():
    segments = build_segments(ROUTE, average_speed_kmh=50)
    for segment in segments:
        assert segment.driving_time_hours == pytest.approx(segment.distance_km / 50)


def test_fewer_than_two_waypoints_give_no_segments():
    assert build_segments([]) == []
    assert build_segments(ROUTE[:1]) == []


def test_overnight_segment_type():
    route = [
        _waypoint("a", 45.0, 5.0, WaypointKind.START),
        _waypoint("camp", 45.5, 5.5, WaypointKind.CAMPSITE, stay_duration_hours=12),
        _waypoint("b", 46.0, 6.0, WaypointKind.END),
    ]
    segments = build_segments(route)
    assert segments[0].segment_type is SegmentType.OVERNIGHT
    assert segments[1].segment_type is SegmentType.DRIVING


def test_with_speed_keeps_geometry():
    segments = build_segments(ROUTE)
    retimed = with_speed(segments, 35)
    assert [s.distance_km for s in retimed] == [s.distance_km for s in segments]
    assert retimed[0].driving_time_hours == pytest.approx(segments[0].driving_time_hours * 2, rel=1e-6)

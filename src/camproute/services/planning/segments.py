"""Conversion of ordered waypoints into point-to-point route segments."""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from ...config import settings
from ...models.domain import Waypoint
from ..geospatial import road_distance_km
from .models import RouteSegment, SegmentType


def _segment_type(destination: Waypoint) -> SegmentType:
    return SegmentType.OVERNIGHT if destination.is_overnight_stop else SegmentType.DRIVING


def build_segments(waypoints: Sequence[Waypoint], average_speed_kmh: float | None = None) -> list[RouteSegment]:
    """One segment per consecutive waypoint pair.

    Segments carry geometry; their driving time is only an estimate at the
    given speed and is recomputed once the driving limits are known.
    """

    speed = average_speed_kmh or settings.default_average_speed_kmh
    segments: list[RouteSegment] = []
    for start, end in zip(waypoints, waypoints[1:]):
        distance = road_distance_km(start.lat, start.lng, end.lat, end.lng)
        segments.append(
            RouteSegment(
                start_waypoint=start,
                end_waypoint=end,
                distance_km=distance,
                driving_time_hours=distance / speed,
                segment_type=_segment_type(end),
            )
        )
    return segments


def with_speed(segments: Sequence[RouteSegment], average_speed_kmh: float) -> list[RouteSegment]:
    """Re-time segments for the average speed of the limits in force."""

    return [replace(segment, driving_time_hours=segment.distance_km / average_speed_kmh) for segment in segments]


def total_distance_km(waypoints: Sequence[Waypoint]) -> float:
    return sum(segment.distance_km for segment in build_segments(waypoints))

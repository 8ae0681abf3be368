"""Coarse country detection for waypoint coordinates."""

from __future__ import annotations

from typing import Iterable

from ..models.domain import Waypoint
from .geospatial import point_in_polygon

FALLBACK_REGION = "Europe"

# (lat_min, lat_max, lon_min, lon_max). Checked in order; earlier entries win where boxes overlap.
_COUNTRY_BOUNDS: tuple[tuple[str, tuple[float, float, float, float]], ...] = (
    ("Portugal", (36.9, 42.2, -9.6, -6.2)),
    ("France", (42.3, 51.1, -5.2, 8.2)),
    ("Spain", (36.0, 43.8, -9.4, 3.4)),
    ("Germany", (47.3, 55.1, 5.9, 15.1)),
    ("Italy", (36.6, 47.1, 6.6, 18.6)),
    ("Greece", (34.8, 41.8, 19.3, 28.3)),
    ("Norway", (57.9, 71.2, 4.5, 12.0)),
    ("Finland", (59.8, 70.1, 20.5, 31.6)),
    ("Sweden", (55.3, 69.1, 11.0, 20.5)),
)


def _box(bounds: tuple[float, float, float, float]) -> list[tuple[float, float]]:
    lat_min, lat_max, lon_min, lon_max = bounds
    return [(lat_min, lon_min), (lat_min, lon_max), (lat_max, lon_max), (lat_max, lon_min)]


_COUNTRY_POLYGONS = tuple((name, _box(bounds)) for name, bounds in _COUNTRY_BOUNDS)


def country_for(lat: float, lng: float) -> str:
    """Best-effort country name for a coordinate, or ``"Europe"`` when unknown."""

    for name, polygon in _COUNTRY_POLYGONS:
        if point_in_polygon(lat, lng, polygon):
            return name
    return FALLBACK_REGION


def countries_for(waypoints: Iterable[Waypoint]) -> list[str]:
    """Distinct country names in route order."""

    seen: list[str] = []
    for waypoint in waypoints:
        name = country_for(waypoint.lat, waypoint.lng)
        if name not in seen:
            seen.append(name)
    return seen

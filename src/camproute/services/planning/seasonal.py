"""Seasonal driving multipliers and travel advice."""

from __future__ import annotations

import datetime as dt
from dataclasses import replace
from typing import Sequence

from ...models.domain import Season
from .models import SeasonalAdjustment, SeasonalFactors

# Ordered from best to worst.
DRIVING_CONDITIONS = ("excellent", "good", "challenging", "difficult")

NORDIC_COUNTRIES = frozenset({"Norway", "Sweden", "Finland"})
MEDITERRANEAN_COUNTRIES = frozenset({"Spain", "Portugal", "Italy", "Greece"})

_ADJUSTMENTS: dict[Season, SeasonalAdjustment] = {
    Season.WINTER: SeasonalAdjustment(
        speed_multiplier=0.8, distance_multiplier=0.7, driving_time_multiplier=0.85, difficulty_increase=30
    ),
    Season.SPRING: SeasonalAdjustment(
        speed_multiplier=0.95, distance_multiplier=0.9, driving_time_multiplier=1.0, difficulty_increase=0
    ),
    Season.SUMMER: SeasonalAdjustment(
        speed_multiplier=1.0, distance_multiplier=1.0, driving_time_multiplier=1.0, difficulty_increase=0
    ),
    Season.AUTUMN: SeasonalAdjustment(
        speed_multiplier=0.9, distance_multiplier=0.85, driving_time_multiplier=0.95, difficulty_increase=10
    ),
}

_BASE_FACTORS: dict[Season, SeasonalFactors] = {
    Season.SPRING: SeasonalFactors(
        season=Season.SPRING,
        temperature_band=(8, 18),
        precipitation_band="medium",
        tourist_density="medium",
        campsite_availability="good",
        driving_conditions="good",
        recommendations=[
            "Perfect weather for touring, but pack layers",
            "Some mountain passes may still be closed",
            "Booking campsites in advance is recommended",
        ],
        warnings=[
            "Variable weather conditions possible",
            "Some seasonal businesses may not be open yet",
        ],
    ),
    Season.SUMMER: SeasonalFactors(
        season=Season.SUMMER,
        temperature_band=(15, 28),
        precipitation_band="low",
        tourist_density="high",
        campsite_availability="limited",
        driving_conditions="excellent",
        recommendations=[
            "Book campsites well in advance",
            "Start driving early to avoid heat and traffic",
            "Stay hydrated and use sun protection",
        ],
        warnings=[
            "Peak tourist season - expect crowds and higher prices",
            "Extreme heat possible in southern regions",
        ],
    ),
    Season.AUTUMN: SeasonalFactors(
        season=Season.AUTUMN,
        temperature_band=(5, 15),
        precipitation_band="medium",
        tourist_density="low",
        campsite_availability="good",
        driving_conditions="good",
        recommendations=[
            "Beautiful fall colors and fewer crowds",
            "Pack warm clothing for cooler evenings",
            "Great time for wine regions",
        ],
        warnings=[
            "Some campsites may close for winter",
            "Daylight hours are decreasing",
        ],
    ),
    Season.WINTER: SeasonalFactors(
        season=Season.WINTER,
        temperature_band=(-5, 8),
        precipitation_band="high",
        tourist_density="low",
        campsite_availability="poor",
        driving_conditions="challenging",
        recommendations=[
            "Focus on southern routes and cities",
            "Book heated accommodations",
            "Carry winter driving equipment",
        ],
        warnings=[
            "Many campsites closed in northern regions",
            "Snow and ice possible - check road conditions",
            "Shorter daylight hours limit driving time",
        ],
    ),
}


def resolve_season(season: Season | str | None) -> Season:
    if season is None:
        return Season.SUMMER
    return Season(season)


def season_for_date(day: dt.date) -> Season:
    """Meteorological season of a date (northern hemisphere)."""

    if day.month in (12, 1, 2):
        return Season.WINTER
    if day.month in (3, 4, 5):
        return Season.SPRING
    if day.month in (6, 7, 8):
        return Season.SUMMER
    return Season.AUTUMN


def seasonal_adjustment(season: Season | str | None) -> SeasonalAdjustment:
    return _ADJUSTMENTS[resolve_season(season)]


def seasonal_factors(season: Season | str | None, countries: Sequence[str] = ()) -> SeasonalFactors:
    """Climate, campsite and road outlook for a season across the visited countries."""

    resolved = resolve_season(season)
    base = _BASE_FACTORS[resolved]
    factors = replace(base, recommendations=list(base.recommendations), warnings=list(base.warnings))
    visited = set(countries)

    if resolved is Season.WINTER and visited & NORDIC_COUNTRIES:
        factors.temperature_band = (-15, 0)
        factors.driving_conditions = "difficult"
        factors.warnings.extend(["Arctic conditions possible", "Winter tires mandatory"])

    if resolved is Season.SUMMER and visited & MEDITERRANEAN_COUNTRIES:
        factors.temperature_band = (20, 40)
        factors.warnings.extend(["Extreme heat in inland areas", "Air conditioning essential"])

    return factors

"""Seasonal advice endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from ...schemas.planning import SeasonalFactorsModel
from ...services.planning.seasonal import seasonal_factors

router = APIRouter(prefix="/seasons", tags=["seasons"])


@router.get("/{season}", response_model=SeasonalFactorsModel, status_code=status.HTTP_200_OK)
def season_outlook(
    season: str,
    countries: List[str] = Query(default=[], description="Countries on the route, e.g. Norway or Spain"),
) -> SeasonalFactorsModel:
    try:
        factors = seasonal_factors(season.lower(), countries)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown season '{season}'") from exc
    return SeasonalFactorsModel.model_validate(factors)

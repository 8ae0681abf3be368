"""Route optimization endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.routing import (
    InsertionRequest,
    InsertionResponse,
    OptimizationResponse,
    OptimizeRouteRequest,
    RouteAnalysisRequest,
    RouteAnalysisResponse,
)
from ...services.outputs.formatter import format_optimization_summary
from ...services.routing.analysis import analyze_route
from ...services.routing.service import find_optimal_insertion, optimize_route

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=OptimizationResponse, status_code=status.HTTP_200_OK)
def optimize(payload: OptimizeRouteRequest) -> OptimizationResponse:
    try:
        result = optimize_route(
            [waypoint.to_domain() for waypoint in payload.waypoints],
            payload.criteria.to_domain() if payload.criteria else None,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}",
        ) from exc

    response = OptimizationResponse.model_validate(result)
    response.summary = format_optimization_summary(result)
    return response


@router.post("/insertion", response_model=InsertionResponse, status_code=status.HTTP_200_OK)
def insertion(payload: InsertionRequest) -> InsertionResponse:
    """Best position for a new stop in an existing route."""
    try:
        result = find_optimal_insertion(
            [waypoint.to_domain() for waypoint in payload.waypoints],
            payload.new_waypoint.to_domain(),
            payload.criteria.to_domain() if payload.criteria else None,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error finding insertion point: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to find insertion point: {str(exc)}",
        ) from exc
    return InsertionResponse.model_validate(result)


@router.post("/analysis", response_model=RouteAnalysisResponse, status_code=status.HTTP_200_OK)
def analysis(payload: RouteAnalysisRequest) -> RouteAnalysisResponse:
    """Backtracking, crossings and detours of the route as given."""
    result = analyze_route([waypoint.to_domain() for waypoint in payload.waypoints])
    return RouteAnalysisResponse.model_validate(result)

"""Trip planning endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.planning import (
    PlanningRecommendationModel,
    TripMetricsModel,
    TripPlanRequest,
    TripPlanResponse,
)
from ...services.planning.insights import calculate_trip_metrics, generate_planning_recommendations
from ...services.planning.service import create_trip_plan

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("/plan", response_model=TripPlanResponse, status_code=status.HTTP_200_OK)
def plan_trip(payload: TripPlanRequest) -> TripPlanResponse:
    vehicle_profile = payload.vehicle_profile.to_domain() if payload.vehicle_profile else None
    try:
        plan = create_trip_plan(
            [waypoint.to_domain() for waypoint in payload.waypoints],
            vehicle_profile=vehicle_profile,
            start_date=payload.start_date,
            season=payload.season,
            end_date=payload.end_date,
        )
        metrics = calculate_trip_metrics(plan)
        advice = generate_planning_recommendations(plan, metrics, vehicle_profile)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error planning trip: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to plan trip: {str(exc)}",
        ) from exc

    response = TripPlanResponse.model_validate(plan)
    response.metrics = TripMetricsModel.model_validate(metrics)
    response.planning_recommendations = [PlanningRecommendationModel.model_validate(item) for item in advice]
    return response

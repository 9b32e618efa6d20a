### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Activities API Router -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Activities Endpoints

Weather-conditioned recommendations (kept for the editor session only):
- GET /activities - List activities (optionally one weather condition)
- GET /activities/recommended - Active activities for a weather, by priority
- POST /activities - Add an activity
- PATCH /activities/{activity_id} - Edit an activity
- DELETE /activities/{activity_id} - Remove an activity
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from dashboard.dependencies import get_entity_store
from dashboard.middleware.rate_limit import limiter, write_rate_limit
from dashboard.schemas.entities import Activity, WeatherCondition
from dashboard.schemas.forms import ActivityForm, ActivityUpdateForm
from dashboard.schemas.responses import APIResponse
from dashboard.services.entity_store import EntityStore

router = APIRouter()


@router.get("", response_model=APIResponse[list[Activity]], summary="List activities")
async def list_activities(
    weather: Optional[WeatherCondition] = Query(None, description="sunny | cloudy | rainy | snowy"),
    store: EntityStore = Depends(get_entity_store),
) -> APIResponse[list[Activity]]:
    activities = [
        activity
        for activity in store.activities
        if weather is None or activity.weather_condition == weather
    ]
    return APIResponse(data=activities)


@router.get(
    "/recommended",
    response_model=APIResponse[list[Activity]],
    summary="Recommended activities",
    description="Active activities for a weather condition, priority 1 first",
)
async def recommended_activities(
    weather: WeatherCondition = Query(..., description="Current weather"),
    store: EntityStore = Depends(get_entity_store),
) -> APIResponse[list[Activity]]:
    return APIResponse(data=store.activities_for(weather))


@router.post(
    "",
    response_model=APIResponse[Activity],
    status_code=status.HTTP_201_CREATED,
    summary="Add activity",
)
@limiter.limit(write_rate_limit)
async def create_activity(
    request: Request,
    form: ActivityForm,
    store: EntityStore = Depends(get_entity_store),
) -> APIResponse[Activity]:
    activity = store.add_activity(form.model_dump()).unwrap()
    return APIResponse(data=activity, message="Activity added")


@router.patch("/{activity_id}", response_model=APIResponse[Activity], summary="Edit activity")
@limiter.limit(write_rate_limit)
async def update_activity(
    request: Request,
    activity_id: str,
    form: ActivityUpdateForm,
    store: EntityStore = Depends(get_entity_store),
) -> APIResponse[Activity]:
    activity = store.update_activity(activity_id, form.model_dump(exclude_unset=True)).unwrap()
    return APIResponse(data=activity, message="Activity updated")


@router.delete("/{activity_id}", response_model=APIResponse[Activity], summary="Delete activity")
@limiter.limit(write_rate_limit)
async def delete_activity(
    request: Request,
    activity_id: str,
    store: EntityStore = Depends(get_entity_store),
) -> APIResponse[Activity]:
    activity = store.delete_activity(activity_id).unwrap()
    return APIResponse(data=activity, message="Activity deleted")

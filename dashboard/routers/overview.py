### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Dashboard Overview Router -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Dashboard Overview Endpoint

- GET /dashboard - Stats cards, category and weather breakdowns,
  guest portal URL and the first links guests will see
"""

from fastapi import APIRouter, Depends

from dashboard.config import get_api_settings
from dashboard.dependencies import get_entity_store
from dashboard.schemas.entities import is_placeholder_id
from dashboard.schemas.responses import APIResponse, DashboardOverview, DashboardStats
from dashboard.services.entity_store import EntityStore

router = APIRouter()


@router.get("", response_model=APIResponse[DashboardOverview], summary="Dashboard overview")
async def get_overview(store: EntityStore = Depends(get_entity_store)) -> APIResponse[DashboardOverview]:
    settings = get_api_settings()

    portal_url = None
    if store.hotel is not None and not is_placeholder_id(store.hotel.id):
        portal_url = f"{settings.portal_base_url}/{store.hotel.id}"

    overview = DashboardOverview(
        hotel=store.hotel,
        user=store.user,
        stats=DashboardStats(**store.stats()),
        links_by_category=store.category_counts(),
        activities_by_weather=store.weather_counts(),
        portal_url=portal_url,
        preview_links=store.portal_preview(),
    )
    return APIResponse(data=overview)

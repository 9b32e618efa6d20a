### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Hotel Branding API Router -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Hotel Branding Endpoints

- GET /hotel - Current branding (null until first save)
- PUT /hotel - Save branding; the first save creates the hotel
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from dashboard.dependencies import get_entity_store
from dashboard.middleware.rate_limit import limiter, write_rate_limit
from dashboard.schemas.entities import Hotel
from dashboard.schemas.forms import BrandingForm
from dashboard.schemas.responses import APIResponse
from dashboard.services.entity_store import EntityStore

router = APIRouter()


@router.get("", response_model=APIResponse[Optional[Hotel]], summary="Get hotel branding")
async def get_hotel(store: EntityStore = Depends(get_entity_store)) -> APIResponse[Optional[Hotel]]:
    return APIResponse(data=store.hotel)


@router.put("", response_model=APIResponse[Hotel], summary="Save hotel branding")
@limiter.limit(write_rate_limit)
async def save_hotel(
    request: Request,
    form: BrandingForm,
    store: EntityStore = Depends(get_entity_store),
) -> APIResponse[Hotel]:
    """
    Save branding and contact details

    Creates the hotel on first save, updates the same hotel afterwards.
    On failure the previous branding is kept.
    """
    hotel = (await store.update_hotel(form.to_fields())).unwrap()
    return APIResponse(data=hotel, message="Settings saved successfully")

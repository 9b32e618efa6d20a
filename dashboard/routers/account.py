### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Account Settings API Router -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Account Settings Endpoints

- GET /account - Signed-in user profile
- PATCH /account - Update name and email

Password changes are validated here but carried out by the auth
provider; the response flags when one was requested.
"""

from fastapi import APIRouter, Depends, Request

from dashboard.dependencies import get_entity_store
from dashboard.middleware.rate_limit import limiter, write_rate_limit
from dashboard.schemas.forms import SettingsForm
from dashboard.schemas.responses import APIResponse, AccountResponse
from dashboard.services.entity_store import EntityStore

router = APIRouter()


@router.get("", response_model=APIResponse[AccountResponse], summary="Get account")
async def get_account(store: EntityStore = Depends(get_entity_store)) -> APIResponse[AccountResponse]:
    return APIResponse(data=AccountResponse(user=store.user))


@router.patch("", response_model=APIResponse[AccountResponse], summary="Update account")
@limiter.limit(write_rate_limit)
async def update_account(
    request: Request,
    form: SettingsForm,
    store: EntityStore = Depends(get_entity_store),
) -> APIResponse[AccountResponse]:
    user = store.update_user({"name": form.name, "email": form.email}).unwrap()

    message = "Profile updated"
    if form.wants_password_change:
        message += ". Use the password reset email from your sign-in provider to change your password"

    return APIResponse(
        data=AccountResponse(user=user, password_change_delegated=form.wants_password_change),
        message=message,
    )

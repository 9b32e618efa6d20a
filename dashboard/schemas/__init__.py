### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Schemas Package -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Schemas Package

Contains Pydantic models:
- entities: in-session Hotel, Link, Activity, User values
- forms: validation contracts for every dashboard submission
- responses: common response schemas
"""

from .entities import Activity, Hotel, Link, User
from .forms import (
    ActivityForm,
    ActivityUpdateForm,
    BrandingForm,
    LinkForm,
    LinkUpdateForm,
    MoveRequest,
    ReorderRequest,
    SettingsForm,
    validate_form,
)
from .responses import APIResponse, ErrorDetail, ErrorResponse

__all__ = [
    "APIResponse",
    "Activity",
    "ActivityForm",
    "ActivityUpdateForm",
    "BrandingForm",
    "ErrorDetail",
    "ErrorResponse",
    "Hotel",
    "Link",
    "LinkForm",
    "LinkUpdateForm",
    "MoveRequest",
    "ReorderRequest",
    "SettingsForm",
    "User",
    "validate_form",
]

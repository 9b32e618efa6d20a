### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Common Response Schemas -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Common Response Schemas

Pydantic models for standardized API responses.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from dashboard.schemas.entities import Hotel, Link, User

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper"""

    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class ErrorDetail(BaseModel):
    """Error detail for validation errors"""

    field: Optional[str] = None
    message: str
    code: Optional[str] = None


class ErrorResponse(BaseModel):
    """Standard error response"""

    success: bool = False
    error: str
    code: Optional[str] = None
    details: Optional[List[ErrorDetail]] = None
    request_id: Optional[str] = None
    redirect_to: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = "healthy"
    version: str
    app_db_connected: bool


class DashboardStats(BaseModel):
    """Counters shown on the overview cards"""

    total_links: int = Field(ge=0)
    active_links: int = Field(ge=0)
    total_activities: int = Field(ge=0)


class DashboardOverview(BaseModel):
    """Everything the overview page needs in one call"""

    hotel: Optional[Hotel] = None
    user: User
    stats: DashboardStats
    links_by_category: dict[str, int]
    activities_by_weather: dict[str, int]
    portal_url: Optional[str] = None
    preview_links: List[Link] = Field(default_factory=list)


class AccountResponse(BaseModel):
    """Account settings result"""

    user: User
    password_change_delegated: bool = False

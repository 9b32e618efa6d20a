### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Entity Schemas -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Entity Schemas

In-session values owned by the EntityStore:
- Hotel: branding and contact details (one per tenant)
- Link: ordered guest-portal link
- Activity: weather-conditioned recommendation (session-local)
- User: session principal resolved by the auth provider

Also maps between these values and durable store rows. Field names
match the column names except Link.order <-> links.order_index.
"""

from datetime import datetime
from typing import Any, Literal, Optional, get_args

from pydantic import BaseModel, Field

LinkCategory = Literal["hotel", "activities", "contact"]
WeatherCondition = Literal["sunny", "cloudy", "rainy", "snowy"]
UserRole = Literal["owner", "manager", "staff"]

LINK_CATEGORIES: tuple[str, ...] = get_args(LinkCategory)
WEATHER_CONDITIONS: tuple[str, ...] = get_args(WeatherCondition)

DEFAULT_HOTEL_NAME = "My Hotel"
DEFAULT_PRIMARY_COLOR = "#3B82F6"

# Placeholder identities never reach the durable store
PLACEHOLDER_PREFIX = "temp-"


def is_placeholder_id(record_id: str | None) -> bool:
    """True for the local key a record carries while its insert is in flight"""
    return bool(record_id) and record_id.startswith(PLACEHOLDER_PREFIX)


class Hotel(BaseModel):
    """Hotel branding profile"""

    id: str
    name: str
    primary_color: str = DEFAULT_PRIMARY_COLOR
    logo: Optional[str] = None
    address: str = ""
    phone: str = ""
    email: str = ""
    description: str = ""
    welcome_message: str = ""
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Hotel":
        """Build from a hotels row (NULL text columns become empty strings)"""
        return cls(
            id=row["id"],
            name=row["name"],
            primary_color=row.get("primary_color") or DEFAULT_PRIMARY_COLOR,
            logo=row.get("logo") or None,
            address=row.get("address") or "",
            phone=row.get("phone") or "",
            email=row.get("email") or "",
            description=row.get("description") or "",
            welcome_message=row.get("welcome_message") or "",
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


class Link(BaseModel):
    """Guest-portal link"""

    id: str
    hotel_id: Optional[str] = None
    title: str
    url: str
    description: Optional[str] = None
    icon: Optional[str] = None
    category: LinkCategory
    order: int
    is_active: bool = True
    created_at: datetime

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Link":
        """Build from a links row"""
        return cls(
            id=row["id"],
            hotel_id=row.get("hotel_id"),
            title=row["title"],
            url=row["url"],
            description=row.get("description"),
            icon=row.get("icon"),
            category=row["category"],
            order=row["order_index"],
            is_active=row.get("is_active", True),
            created_at=row["created_at"],
        )


class Activity(BaseModel):
    """Weather-conditioned activity recommendation"""

    id: str
    title: str
    description: str
    image_url: str
    weather_condition: WeatherCondition
    priority: int = Field(5, ge=1, le=10)  # lower = shown first
    is_active: bool = True
    created_at: datetime


class User(BaseModel):
    """Session principal"""

    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    role: UserRole = "owner"


# Editable fields per entity (identity, order and timestamps are store-managed)
HOTEL_FIELDS = frozenset(
    {"name", "primary_color", "logo", "address", "phone", "email", "description", "welcome_message"}
)
LINK_FIELDS = frozenset({"title", "url", "description", "icon", "category", "is_active"})
ACTIVITY_FIELDS = frozenset(
    {"title", "description", "image_url", "weather_condition", "priority", "is_active"}
)
USER_FIELDS = frozenset({"name", "email", "avatar"})


def hotel_payload(fields: dict[str, Any], updated_at: datetime) -> dict[str, Any]:
    """Column payload for a hotels insert/update - only the given fields"""
    payload = {key: value for key, value in fields.items() if key in HOTEL_FIELDS}
    payload["updated_at"] = updated_at
    return payload


def link_payload(fields: dict[str, Any]) -> dict[str, Any]:
    """Column payload for a links insert/update - only the given fields"""
    payload = {key: value for key, value in fields.items() if key in LINK_FIELDS}
    if "order" in fields:
        payload["order_index"] = fields["order"]
    return payload

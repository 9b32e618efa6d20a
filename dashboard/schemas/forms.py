### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Form Validation Contracts -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Form Validation Contracts

Pydantic models every dashboard submission is validated against before
it reaches the EntityStore. Invalid input never produces a store call.

- LinkForm / LinkUpdateForm: link directory entries
- ActivityForm / ActivityUpdateForm: weather activities
- BrandingForm: hotel branding and contact details
- SettingsForm: account profile (+ password confirmation check)
- ReorderRequest / MoveRequest: drag-and-drop link ordering
"""

from typing import Any, Iterable, Optional, Type, TypeVar

from pydantic import (
    AnyUrl,
    BaseModel,
    EmailStr,
    Field,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from dashboard.exceptions import FormValidationError
from dashboard.schemas.entities import LinkCategory, WeatherCondition

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"

FormT = TypeVar("FormT", bound=BaseModel)

_url_adapter = TypeAdapter(AnyUrl)


def _check_url(value: str | None, message: str = "Must be a valid URL") -> str | None:
    """Accept any absolute URL (https:, tel:, mailto:, ...), keep the text as entered"""
    if value is None:
        return value
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError(message) from None
    return value


# ========================================
# Link Forms
# ========================================


class LinkForm(BaseModel):
    """Create a link"""

    title: str = Field(..., min_length=1, max_length=100, description="Link title")
    url: str = Field(..., description="Destination URL")
    description: Optional[str] = Field(None, max_length=200, description="Short description")
    icon: Optional[str] = Field(None, max_length=50, description="Icon name (e.g. 'Wifi')")
    category: LinkCategory = Field(..., description="hotel | activities | contact")
    is_active: bool = Field(True, description="Visible on the guest portal")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _check_url(v)


class LinkUpdateForm(BaseModel):
    """Edit link fields - only fields sent are changed"""

    title: Optional[str] = Field(None, min_length=1, max_length=100)
    url: Optional[str] = None
    description: Optional[str] = Field(None, max_length=200)
    icon: Optional[str] = Field(None, max_length=50)
    category: Optional[LinkCategory] = None
    is_active: Optional[bool] = None

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        return _check_url(v)

    @field_validator("title", "url", "category", "is_active")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field cannot be null")
        return v


# ========================================
# Activity Forms
# ========================================


class ActivityForm(BaseModel):
    """Create an activity recommendation"""

    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=500)
    image_url: str = Field(..., description="Image URL")
    weather_condition: WeatherCondition
    priority: int = Field(5, ge=1, le=10, description="1 = shown first")
    is_active: bool = True

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str) -> str:
        return _check_url(v, "Must be a valid image URL")


class ActivityUpdateForm(BaseModel):
    """Edit activity fields - only fields sent are changed"""

    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    image_url: Optional[str] = None
    weather_condition: Optional[WeatherCondition] = None
    priority: Optional[int] = Field(None, ge=1, le=10)
    is_active: Optional[bool] = None

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str | None) -> str | None:
        return _check_url(v, "Must be a valid image URL")

    @field_validator("title", "description", "image_url", "weather_condition", "priority", "is_active")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field cannot be null")
        return v


# ========================================
# Branding / Settings Forms
# ========================================


class BrandingForm(BaseModel):
    """Hotel branding and contact details"""

    name: str = Field(..., min_length=1, max_length=100, description="Hotel name")
    primary_color: str = Field(..., pattern=HEX_COLOR_PATTERN, description="e.g. #3B82F6")
    logo: Optional[str] = Field(None, description="Logo URL (empty string clears it)")
    address: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: EmailStr
    description: Optional[str] = Field(None, max_length=500)
    welcome_message: Optional[str] = Field(None, max_length=200)

    @field_validator("logo")
    @classmethod
    def validate_logo(cls, v: str | None) -> str | None:
        if v == "":
            return v
        return _check_url(v)

    def to_fields(self) -> dict[str, Any]:
        """Hotel fields to merge; an empty logo clears it"""
        fields = self.model_dump(exclude_unset=True)
        if fields.get("logo") == "":
            fields["logo"] = None
        return fields


class SettingsForm(BaseModel):
    """Account settings"""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    current_password: Optional[str] = Field(None, min_length=8)
    new_password: Optional[str] = Field(None, min_length=8)
    confirm_password: Optional[str] = Field(None, min_length=8, validate_default=True)

    @field_validator("current_password", "new_password", "confirm_password", mode="before")
    @classmethod
    def blank_is_absent(cls, v: Any) -> Any:
        # Empty password inputs mean "not changing the password"
        return None if v == "" else v

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v: str | None, info: ValidationInfo) -> str | None:
        new_password = info.data.get("new_password")
        if new_password and new_password != v:
            raise ValueError("Passwords don't match")
        return v

    @property
    def wants_password_change(self) -> bool:
        return bool(self.new_password)


# ========================================
# Reorder Forms
# ========================================


class ReorderRequest(BaseModel):
    """New link sequence for the whole list or one category tab"""

    ids: list[str] = Field(..., min_length=1, description="Link ids in their new order")
    category: Optional[LinkCategory] = Field(
        None, description="Tab the sequence was dragged in (omit for all links)"
    )


class MoveRequest(BaseModel):
    """Single drag-and-drop move: drop the link where over_id sits"""

    over_id: str = Field(..., min_length=1)
    category: Optional[LinkCategory] = None


# ========================================
# Helpers
# ========================================


def collect_field_errors(errors: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Flatten pydantic/FastAPI error dicts into [{field, message}].

    The leading "body" location FastAPI adds for request bodies is dropped.
    """
    collected = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        message = err.get("msg", "Invalid value")
        # pydantic prefixes messages raised from validators
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        collected.append({"field": ".".join(loc) or None, "message": message})
    return collected


def validate_form(form_cls: Type[FormT], data: dict[str, Any]) -> FormT:
    """
    Validate raw submission data against a form contract.

    Raises:
        FormValidationError: With one {field, message} entry per failed constraint
    """
    try:
        return form_cls.model_validate(data)
    except ValidationError as e:
        raise FormValidationError(collect_field_errors(e.errors())) from e

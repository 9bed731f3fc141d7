"""Pydantic schemas for API serialisation.

Wire keys follow the client's naming (``mtrStation``, ``startingPrice``...);
Python attributes and database columns use snake_case. Unknown request keys
are dropped at this boundary.
"""

import json
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def decode_json_field(value: Any, fallback: Any = None) -> Any:
    """Decode a sub-field that older rows and clients send as a JSON string."""
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return fallback
    return value


def _decode_list(value: Any) -> Any:
    if isinstance(value, str):
        decoded = decode_json_field(value, fallback=[value] if value else [])
        return decoded if isinstance(decoded, list) else []
    return value


# --- Venue sub-structures ---


class Coordinates(BaseModel):
    lat: float
    lng: float


class TextPricing(BaseModel):
    type: Literal["text"]
    content: str = ""


class ImagePricing(BaseModel):
    type: Literal["image"]
    content: str = ""
    imageUrl: str | None = None


Pricing = Annotated[TextPricing | ImagePricing, Field(discriminator="type")]


class SportLinkIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    sport_id: int
    sort_order: int | None = None


class SportLinkOut(BaseModel):
    sport_id: int
    name: str
    name_zh: str | None
    slug: str
    sort_order: int | None


# --- Venue ---


class VenueBase(BaseModel):
    """Every editable venue field, all optional."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = None
    description: str | None = None
    address: str | None = None
    mtr_station: str | None = Field(None, alias="mtrStation")
    mtr_exit: str | None = Field(None, alias="mtrExit")
    walking_distance: int | None = Field(None, alias="walkingDistance")
    ceiling_height: float | None = Field(None, alias="ceilingHeight")
    starting_price: int | None = Field(None, alias="startingPrice")
    pricing: Pricing | None = None
    images: list[str] | None = None
    amenities: list[str] | None = None
    whatsapp: str | None = None
    social_link: str | None = Field(None, alias="socialLink")
    org_icon: str | None = Field(None, alias="orgIcon")
    coordinates: Coordinates | None = None
    sort_order: int | None = None
    membership_enabled: bool | None = None
    membership_description: str | None = None
    membership_join_link: str | None = None

    @field_validator("images", "amenities", mode="before")
    @classmethod
    def decode_list(cls, value: Any) -> Any:
        return _decode_list(value)

    @field_validator("coordinates", mode="before")
    @classmethod
    def decode_coordinates(cls, value: Any) -> Any:
        value = decode_json_field(value)
        if isinstance(value, dict) and ("lat" not in value or "lng" not in value):
            return None
        return value

    @field_validator("pricing", mode="before")
    @classmethod
    def decode_pricing(cls, value: Any) -> Any:
        if isinstance(value, str):
            decoded = decode_json_field(value)
            value = decoded if isinstance(decoded, dict) else {"type": "text", "content": value}
        if isinstance(value, dict) and "type" not in value:
            value = {**value, "type": "image" if value.get("imageUrl") else "text"}
        return value


class VenueIn(VenueBase):
    """Create and update payload.

    On update only the keys the client actually sent are written, so an
    omitted ``admin_password`` leaves the stored one alone while ``""`` or
    ``null`` clears it.
    """

    admin_password: str | None = None
    sport_data: list[SportLinkIn] | None = None


class VenueOut(VenueBase):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    images: list[str] = []
    amenities: list[str] = []
    membership_enabled: bool = False
    sport_data: list[SportLinkOut] = []

    @field_validator("images", "amenities", mode="before")
    @classmethod
    def decode_list(cls, value: Any) -> Any:
        return _decode_list(value) or []


class VenueAdminOut(VenueOut):
    """Venue as seen by the super admin, admin password hash included."""

    admin_password: str | None = None


# --- Ordering ---


class ReorderRequest(BaseModel):
    ordered_ids: list[int] = Field(alias="orderedIds")
    sport_id: int | None = Field(None, alias="sportId")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("ordered_ids")
    @classmethod
    def unique_ids(cls, value: list[int]) -> list[int]:
        if len(set(value)) != len(value):
            raise ValueError("orderedIds must not contain duplicates")
        return value


# --- Sports ---


class SportCreate(BaseModel):
    name: str | None = None
    name_en: str | None = None
    name_zh: str | None = None


class SportUpdate(BaseModel):
    name: str | None = None
    name_zh: str | None = None


class SportOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    name_zh: str | None
    slug: str


# --- Auth ---


class LoginRequest(BaseModel):
    password: str | None = None


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    allowed_venue_ids: list[int] = Field(alias="allowedVenueIds")
    is_super_admin: bool = Field(False, alias="isSuperAdmin")


# --- Misc ---


class HealthOut(BaseModel):
    status: str
    app: str

from datetime import datetime, timezone
from typing import Any, List, Optional
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from app.models.property import PropertyStatus, PropertyType
from app.schemas.common import CamelModel, ListQuery, blank_to_none, check_image_url
from app.utils.slug import is_valid_slug

_LAUNCH_DATE_FORMATS = (
    "%d-%m-%Y %H:%M",
    "%d-%m-%Y %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M:%S",
)


def parse_launch_date(value: Any) -> Optional[datetime]:
    """Accepts the day-first and ISO-ish layouts the admin forms submit.

    Naive values are taken as UTC.
    """
    value = blank_to_none(value)
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        parsed = None
        for fmt in _LAUNCH_DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
        if parsed is None:
            try:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            except ValueError:
                raise ValueError("Invalid project launch date format")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _coerce_enum(enum_cls, value: Any, message: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        raise ValueError(message)


class PropertyConfigurationIn(CamelModel):
    config_type: str = Field(..., min_length=1, max_length=100)
    custom_config_type: Optional[str] = Field(None, max_length=100)
    carpet_area_sqft: Optional[float] = Field(None, ge=0)
    price: Optional[float] = Field(None, ge=0)
    floor_plan_image: Optional[str] = None

    @field_validator("carpet_area_sqft", "price", "custom_config_type", mode="before")
    @classmethod
    def _blank_is_null(cls, value):
        return blank_to_none(value)

    @field_validator("floor_plan_image")
    @classmethod
    def _image(cls, value):
        return check_image_url(value)

    @model_validator(mode="after")
    def _resolve_custom_type(self):
        # "other" is a placeholder in the admin form for a free-text type
        if self.config_type == "other" and self.custom_config_type and self.custom_config_type.strip():
            self.config_type = self.custom_config_type.strip()
        return self


class PropertyIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    slug: Optional[str] = Field(None, max_length=200)
    type: PropertyType
    format: Optional[str] = Field(None, max_length=100)
    builder: str = Field(..., min_length=1, max_length=200)
    builder_rera_number: Optional[str] = Field(None, max_length=100)
    builder_rera_qr_code: Optional[str] = None
    description: Optional[str] = Field(None, max_length=5000)
    price: Optional[float] = Field(None, ge=0)
    location: Optional[str] = Field(None, max_length=200)
    location_advantages: List[str] = Field(default_factory=list)
    status: PropertyStatus
    main_image: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)
    map_image: Optional[str] = None
    project_launch_date: Optional[datetime] = None
    possession: Optional[str] = Field(None, max_length=100)
    meta_title: Optional[str] = Field(None, max_length=200)
    meta_keywords: Optional[str] = Field(None, max_length=500)
    meta_description: Optional[str] = Field(None, max_length=500)
    bank_account_name: Optional[str] = Field(None, max_length=200)
    bank_name: Optional[str] = Field(None, max_length=200)
    bank_account_number: Optional[str] = Field(None, max_length=50)
    bank_ifsc: Optional[str] = Field(None, max_length=20)
    bank_branch: Optional[str] = Field(None, max_length=200)
    configurations: Optional[List[PropertyConfigurationIn]] = None

    @field_validator("slug", "price", mode="before")
    @classmethod
    def _blank_is_null(cls, value):
        return blank_to_none(value)

    @field_validator("slug")
    @classmethod
    def _slug(cls, value):
        if value is not None and not is_valid_slug(value):
            raise ValueError("Slug must be URL-friendly (lowercase, hyphens only)")
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value):
        return _coerce_enum(PropertyType, value, "Invalid property type")

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        return _coerce_enum(PropertyStatus, value, "Invalid property status")

    @field_validator("main_image", "map_image", "builder_rera_qr_code")
    @classmethod
    def _single_image(cls, value):
        return check_image_url(value)

    @field_validator("images")
    @classmethod
    def _images(cls, value):
        return [check_image_url(v) for v in value if v]

    @field_validator("project_launch_date", mode="before")
    @classmethod
    def _launch_date(cls, value):
        return parse_launch_date(value)


class PropertyConfigurationOut(CamelModel):
    id: UUID
    config_type: str
    carpet_area_sqft: Optional[float] = None
    price: float
    floor_plan_image: Optional[str] = None


class PropertyOut(CamelModel):
    id: UUID
    name: str
    slug: Optional[str] = None
    type: PropertyType
    format: Optional[str] = None
    builder: str
    builder_rera_number: Optional[str] = None
    builder_rera_qr_code: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    location: Optional[str] = None
    location_advantages: List[str] = []
    status: PropertyStatus
    main_image: Optional[str] = None
    images: List[str] = []
    amenities: List[str] = []
    map_image: Optional[str] = None
    project_launch_date: Optional[datetime] = None
    possession: Optional[str] = None
    meta_title: Optional[str] = None
    meta_keywords: Optional[str] = None
    meta_description: Optional[str] = None
    bank_account_name: Optional[str] = None
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_ifsc: Optional[str] = None
    bank_branch: Optional[str] = None
    configurations: List[PropertyConfigurationOut] = []
    created_at: datetime
    updated_at: datetime


class PropertyRef(CamelModel):
    id: UUID
    name: str


class PropertyFilter(ListQuery):
    limit: int = Field(25, ge=1, le=100)
    type: Optional[PropertyType] = None
    status: Optional[PropertyStatus] = None
    builder: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value):
        value = blank_to_none(value)
        return None if value is None else _coerce_enum(PropertyType, value, "Invalid property type")

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        value = blank_to_none(value)
        return None if value is None else _coerce_enum(PropertyStatus, value, "Invalid property status")


class BuilderIn(CamelModel):
    name: Optional[str] = None
    about: Optional[str] = None

    @model_validator(mode="after")
    def _trimmed(self):
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValueError("Builder name is required")
        if len(self.name) > 200:
            raise ValueError("Builder name is too long")
        self.about = (self.about or "").strip() or None
        return self


class BuilderOut(CamelModel):
    id: UUID
    name: str
    about: Optional[str] = None
    created_at: datetime
    updated_at: datetime

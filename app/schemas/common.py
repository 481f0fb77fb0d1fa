import re
from typing import Any, Generic, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from app.core.errors import ValidationError, first_error_message

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

# Indian mobile numbers: 10 digits, first digit 6-9
MOBILE_PATTERN = re.compile(r"^[6-9]\d{9}$")


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase on the wire; either accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class Page(CamelModel, Generic[T]):
    data: List[T]
    pagination: Pagination


class Envelope(CamelModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


class MessageEnvelope(CamelModel):
    success: bool = True
    message: Optional[str] = None


def check_mobile(value: Optional[str], message: str) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not MOBILE_PATTERN.fullmatch(value):
        raise ValueError(message)
    return value


def check_image_url(value: Optional[str]) -> Optional[str]:
    """Absolute http(s) URLs, or app-relative paths such as ``/uploads/x.jpg``."""
    if value is None or value == "":
        return None
    if re.match(r"^https?://", value) or value.startswith("/"):
        return value
    raise ValueError("Invalid image URL")


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


class ListQuery(CamelModel):
    """Pagination and search parameters shared by every list endpoint."""

    page: int = Field(1, ge=1)
    limit: int = Field(25, ge=1, le=100)
    search: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _empty_means_absent(cls, value: Any, info) -> Any:
        value = blank_to_none(value)
        if value is None and info.field_name in ("page", "limit"):
            return cls.model_fields[info.field_name].default
        return value


def parse_model(model: Type[M], data: Mapping[str, Any]) -> M:
    """Validate ``data`` against ``model``, reporting the first violated rule."""
    try:
        return model.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError(first_error_message(e.errors())) from e

import re
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from app.models.content import BlogType
from app.schemas.common import CamelModel, ListQuery, blank_to_none, check_image_url
from app.utils.slug import is_valid_slug

YOUTUBE_PATTERN = re.compile(r"^(https?://)?(www\.)?(youtube\.com|youtu\.be)/.+$")
VIMEO_PATTERN = re.compile(r"^(https?://)?(www\.)?vimeo\.com/.+$")
_URL_PATTERN = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)


def is_supported_video_link(url: str) -> bool:
    return bool(YOUTUBE_PATTERN.match(url) or VIMEO_PATTERN.match(url))


class BlogIn(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    slug: Optional[str] = Field(None, max_length=200)
    type: BlogType = BlogType.TEXT
    content: str = Field(..., min_length=100)
    excerpt: Optional[str] = Field(None, max_length=500)
    image: Optional[str] = None
    video_url: Optional[str] = None
    video_thumbnail: Optional[str] = None
    meta_title: Optional[str] = Field(None, max_length=200)
    meta_keywords: Optional[str] = Field(None, max_length=500)
    meta_description: Optional[str] = Field(None, max_length=500)
    published: bool = False

    @field_validator("slug", "video_url", mode="before")
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
        if isinstance(value, str):
            try:
                return BlogType(value.strip().upper())
            except ValueError:
                raise ValueError("Invalid blog type")
        return value

    @field_validator("image", "video_thumbnail")
    @classmethod
    def _images(cls, value):
        return check_image_url(value)

    @field_validator("video_url")
    @classmethod
    def _video_url(cls, value):
        if value is not None and not _URL_PATTERN.match(value):
            raise ValueError("Invalid video URL")
        return value

    @model_validator(mode="after")
    def _video_blog_needs_url(self):
        if self.type is BlogType.VIDEO and not self.video_url:
            raise ValueError("Video URL is required for video blogs")
        return self


class BlogOut(CamelModel):
    id: UUID
    title: str
    slug: str
    type: BlogType
    content: str
    excerpt: Optional[str] = None
    image: Optional[str] = None
    video_url: Optional[str] = None
    video_thumbnail: Optional[str] = None
    meta_title: Optional[str] = None
    meta_keywords: Optional[str] = None
    meta_description: Optional[str] = None
    published: bool
    created_at: datetime
    updated_at: datetime


class BlogFilter(ListQuery):
    limit: int = Field(12, ge=1, le=100)
    published: Optional[bool] = None


class VideoIn(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    video_link: str
    thumbnail: Optional[str] = None
    description: Optional[str] = Field(None, max_length=1000)
    order: int = 0

    @field_validator("video_link")
    @classmethod
    def _provider(cls, value):
        value = value.strip()
        if not _URL_PATTERN.match(value):
            raise ValueError("Invalid video URL")
        if not is_supported_video_link(value):
            raise ValueError("Video link must be a valid YouTube or Vimeo URL")
        return value

    @field_validator("thumbnail")
    @classmethod
    def _thumbnail(cls, value):
        return check_image_url(value)

    @field_validator("order", mode="before")
    @classmethod
    def _order_default(cls, value):
        return 0 if value is None else value

    @field_validator("order")
    @classmethod
    def _order(cls, value):
        if value < 0:
            raise ValueError("Order must be non-negative")
        return value


class VideoOut(CamelModel):
    id: UUID
    title: str
    video_link: str
    thumbnail: Optional[str] = None
    description: Optional[str] = None
    order: int
    created_at: datetime
    updated_at: datetime


class VideoFilter(ListQuery):
    limit: int = Field(12, ge=1, le=100)

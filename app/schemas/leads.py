from datetime import datetime
from typing import Optional
from urllib.parse import urlparse
from uuid import UUID

from pydantic import EmailStr, Field, field_validator, model_validator

from app.models.leads import ReferralSource
from app.schemas.common import CamelModel, ListQuery, blank_to_none, check_mobile
from app.schemas.property import PropertyRef

RESUME_HOSTS = (
    "drive.google.com",
    "docs.google.com",
    "dropbox.com",
    "onedrive.live.com",
    "sharepoint.com",
    "box.com",
    "mega.nz",
    "mediafire.com",
)


def is_cloud_storage_link(url: str) -> bool:
    hostname = (urlparse(url).hostname or "").lower()
    return any(hostname == host or hostname.endswith("." + host) for host in RESUME_HOSTS)


class EnquiryIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    message: str = Field(..., min_length=10, max_length=1000)
    type: str = Field("contact", min_length=1, max_length=50)
    property_id: Optional[UUID] = None

    @field_validator("phone", "property_id", mode="before")
    @classmethod
    def _blank_is_null(cls, value):
        return blank_to_none(value)

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, value):
        return blank_to_none(value) or "contact"

    @field_validator("phone")
    @classmethod
    def _phone(cls, value):
        return check_mobile(value, "Invalid phone number (10 digits starting with 6-9)")


class EnquiryUpdate(CamelModel):
    """Partial update; only the fields present in the body are written."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    message: Optional[str] = Field(None, min_length=10, max_length=1000)
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    property_id: Optional[UUID] = None

    @field_validator("phone", "property_id", mode="before")
    @classmethod
    def _blank_is_null(cls, value):
        return blank_to_none(value)

    @field_validator("phone")
    @classmethod
    def _phone(cls, value):
        return check_mobile(value, "Invalid phone number (10 digits starting with 6-9)")

    @model_validator(mode="after")
    def _required_stay_required(self):
        for field in ("name", "email", "message", "type"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be empty")
        return self


class EnquiryOut(CamelModel):
    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    message: str
    type: str
    property_id: Optional[UUID] = None
    property: Optional[PropertyRef] = None
    created_at: datetime
    updated_at: datetime


class EnquiryFilter(ListQuery):
    limit: int = Field(25, ge=1, le=100)
    type: Optional[str] = None


class CareerApplicationIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    whatsapp_number: str
    city: str = Field(..., min_length=1, max_length=100)
    referral_source: ReferralSource
    referral_other: Optional[str] = Field(None, max_length=200)
    resume_link: str

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value):
        return value.lower()

    @field_validator("whatsapp_number")
    @classmethod
    def _whatsapp(cls, value):
        return check_mobile(value, "Invalid WhatsApp number (10 digits starting with 6-9)")

    @field_validator("referral_source", mode="before")
    @classmethod
    def _referral_source(cls, value):
        try:
            return ReferralSource(str(value).strip().upper())
        except ValueError:
            raise ValueError("Please select how you came to know about us")

    @field_validator("resume_link")
    @classmethod
    def _resume_link(cls, value):
        value = value.strip()
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Please provide a valid URL for your resume")
        if not is_cloud_storage_link(value):
            raise ValueError("Please provide a valid cloud storage link (Google Drive, Dropbox, etc.)")
        return value

    @model_validator(mode="after")
    def _other_needs_explanation(self):
        if self.referral_source is ReferralSource.OTHER:
            if not self.referral_other or not self.referral_other.strip():
                raise ValueError("Please specify how you came to know about us")
            self.referral_other = self.referral_other.strip()
        return self


class CareerApplicationOut(CamelModel):
    id: UUID
    name: str
    email: str
    whatsapp_number: str
    city: str
    referral_source: ReferralSource
    referral_other: Optional[str] = None
    resume_link: str
    created_at: datetime
    updated_at: datetime


class CareerApplicationFilter(ListQuery):
    limit: int = Field(20, ge=1, le=100)
    referral_source: Optional[ReferralSource] = Field(None, alias="referralSource")

    @field_validator("referral_source", mode="before")
    @classmethod
    def _referral_source(cls, value):
        value = blank_to_none(value)
        if value is None:
            return None
        try:
            return ReferralSource(str(value).strip().upper())
        except ValueError:
            raise ValueError("Invalid referral source")


class TACRegistrationIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str
    address: Optional[str] = Field(None, max_length=500)

    @field_validator("phone")
    @classmethod
    def _phone(cls, value):
        return check_mobile(value, "Invalid phone number (10 digits starting with 6-9)")


class TACRegistrationOut(CamelModel):
    id: UUID
    name: str
    email: str
    phone: str
    address: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TACRegistrationFilter(ListQuery):
    limit: int = Field(25, ge=1, le=100)


class EmailSubscriptionIn(CamelModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value):
        return value.lower()


class EmailSubscriptionOut(CamelModel):
    id: UUID
    email: str
    created_at: datetime
    updated_at: datetime


class EmailSubscriptionFilter(ListQuery):
    limit: int = Field(25, ge=1, le=100)


class PageTrackIn(CamelModel):
    page_name: Optional[str] = None

    @model_validator(mode="after")
    def _page_name(self):
        self.page_name = (self.page_name or "").strip()
        if not self.page_name:
            raise ValueError("Page name is required")
        if len(self.page_name) > 100:
            raise ValueError("Page name is too long")
        return self


class PageStatOut(CamelModel):
    id: UUID
    page_name: str
    click_count: int
    last_clicked: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

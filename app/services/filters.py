"""Translate optional list parameters into SQLAlchemy WHERE conditions.

Every builder returns a list of conditions that the caller ANDs together;
a parameter that was not supplied contributes nothing.
"""
from typing import List, Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

from app.models import Blog, CareerApplication, EmailSubscription, Enquiry, Property, TACRegistration, Video
from app.schemas.content import BlogFilter, VideoFilter
from app.schemas.leads import CareerApplicationFilter, EmailSubscriptionFilter, EnquiryFilter, TACRegistrationFilter
from app.schemas.property import PropertyFilter


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def contains(column, term: str) -> ColumnElement:
    return column.ilike(f"%{_escape_like(term)}%", escape="\\")


def contains_any(columns: Sequence, term: Optional[str]) -> Optional[ColumnElement]:
    """Case-insensitive substring match against any of ``columns``."""
    if not term:
        return None
    return or_(*(contains(column, term) for column in columns))


def _conditions(*candidates: Optional[ColumnElement]) -> List[ColumnElement]:
    return [c for c in candidates if c is not None]


def property_conditions(filters: PropertyFilter) -> List[ColumnElement]:
    return _conditions(
        Property.type == filters.type if filters.type else None,
        Property.status == filters.status if filters.status else None,
        contains(Property.builder, filters.builder) if filters.builder else None,
        contains_any(
            [Property.name, Property.builder, Property.location, Property.description],
            filters.search,
        ),
    )


def blog_conditions(filters: BlogFilter) -> List[ColumnElement]:
    return _conditions(
        Blog.published.is_(filters.published) if filters.published is not None else None,
        contains_any([Blog.title, Blog.excerpt, Blog.content], filters.search),
    )


def video_conditions(filters: VideoFilter) -> List[ColumnElement]:
    return _conditions(contains_any([Video.title, Video.description], filters.search))


def enquiry_conditions(filters: EnquiryFilter) -> List[ColumnElement]:
    return _conditions(
        Enquiry.type == filters.type if filters.type else None,
        contains_any([Enquiry.name, Enquiry.email, Enquiry.message], filters.search),
    )


def career_conditions(filters: CareerApplicationFilter) -> List[ColumnElement]:
    return _conditions(
        CareerApplication.referral_source == filters.referral_source if filters.referral_source else None,
        contains_any([CareerApplication.name, CareerApplication.email, CareerApplication.city], filters.search),
    )


def tac_conditions(filters: TACRegistrationFilter) -> List[ColumnElement]:
    return _conditions(
        contains_any([TACRegistration.name, TACRegistration.email, TACRegistration.phone], filters.search)
    )


def subscription_conditions(filters: EmailSubscriptionFilter) -> List[ColumnElement]:
    return _conditions(contains_any([EmailSubscription.email], filters.search))

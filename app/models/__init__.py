import uuid

from sqlalchemy import Column, DateTime, Uuid, func
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import declarative_base

# Define a common Base for all models
Base = declarative_base(cls=AsyncAttrs)


class TimestampedMixin:
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Fetch server-generated timestamps during flush so they can be serialized
    # after commit without a lazy load.
    __mapper_args__ = {"eager_defaults": True}


# Import models AFTER Base is defined
# This ensures models inherit from the *same* Base instance
from .property import Builder, Property, PropertyConfiguration, PropertyStatus, PropertyType  # noqa: E402
from .content import Blog, BlogType, Video  # noqa: E402
from .leads import CareerApplication, EmailSubscription, Enquiry, ReferralSource, TACRegistration  # noqa: E402
from .stats import PageStat  # noqa: E402

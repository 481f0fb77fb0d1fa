import enum

from sqlalchemy import Column, Enum, String, Text, Uuid

from app.models import Base, TimestampedMixin


class ReferralSource(str, enum.Enum):
    FAMILY_FRIENDS = "FAMILY_FRIENDS"
    WEBSITE = "WEBSITE"
    YOUTUBE = "YOUTUBE"
    ADVERTISEMENT = "ADVERTISEMENT"
    OTHER = "OTHER"


class Enquiry(TimestampedMixin, Base):
    __tablename__ = "enquiries"
    name = Column(String(100), nullable=False)
    email = Column(String(320), nullable=False)
    phone = Column(String(20))
    message = Column(Text, nullable=False)
    type = Column(String(50), nullable=False, default="contact", index=True)
    # Display-only link to a listing; no FK so enquiries outlive deleted properties
    property_id = Column(Uuid, nullable=True)


class CareerApplication(TimestampedMixin, Base):
    __tablename__ = "career_applications"
    name = Column(String(100), nullable=False)
    email = Column(String(320), unique=True, nullable=False)
    whatsapp_number = Column(String(20), nullable=False)
    city = Column(String(100), nullable=False)
    referral_source = Column(Enum(ReferralSource, name="referralsource"), nullable=False)
    referral_other = Column(String(200))
    resume_link = Column(String(1000), nullable=False)


class TACRegistration(TimestampedMixin, Base):
    __tablename__ = "tac_registrations"
    name = Column(String(100), nullable=False)
    email = Column(String(320), nullable=False)
    phone = Column(String(20), nullable=False)
    address = Column(Text)


class EmailSubscription(TimestampedMixin, Base):
    __tablename__ = "email_subscriptions"
    email = Column(String(320), unique=True, nullable=False)

import enum

from sqlalchemy import JSON, Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.models import Base, TimestampedMixin


class PropertyType(str, enum.Enum):
    residential = "residential"
    plot = "plot"
    commercial = "commercial"
    offices = "offices"


class PropertyStatus(str, enum.Enum):
    available = "available"
    sold = "sold"
    reserved = "reserved"


class Property(TimestampedMixin, Base):
    __tablename__ = "properties"
    name = Column(String(200), nullable=False)
    slug = Column(String(200), unique=True, nullable=True)
    type = Column(Enum(PropertyType, name="propertytype", values_callable=lambda e: [m.value for m in e]), nullable=False)
    format = Column(String(100))
    builder = Column(String(200), nullable=False, index=True)
    builder_rera_number = Column(String(100))
    builder_rera_qr_code = Column(String(500))
    description = Column(Text)
    price = Column(Numeric(14, 2, asdecimal=False))  # null means "price on request"
    location = Column(String(200))
    location_advantages = Column(JSON, nullable=False, default=list)
    status = Column(
        Enum(PropertyStatus, name="propertystatus", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        server_default=PropertyStatus.available.value,
    )
    main_image = Column(String(500))
    images = Column(JSON, nullable=False, default=list)  # ordered
    amenities = Column(JSON, nullable=False, default=list)
    map_image = Column(String(500))
    project_launch_date = Column(DateTime(timezone=True))
    possession = Column(String(100))
    meta_title = Column(String(200))
    meta_keywords = Column(String(500))
    meta_description = Column(String(500))
    bank_account_name = Column(String(200))
    bank_name = Column(String(200))
    bank_account_number = Column(String(50))
    bank_ifsc = Column(String(20))
    bank_branch = Column(String(200))

    configurations = relationship(
        "PropertyConfiguration",
        back_populates="property",
        cascade="all, delete-orphan",
        order_by="PropertyConfiguration.position",
        lazy="selectin",
    )


class PropertyConfiguration(TimestampedMixin, Base):
    __tablename__ = "property_configurations"
    property_id = Column(Uuid, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    config_type = Column(String(100), nullable=False)
    carpet_area_sqft = Column(Numeric(12, 2, asdecimal=False))
    price = Column(Numeric(14, 2, asdecimal=False), nullable=False, default=0)
    floor_plan_image = Column(String(500))

    property = relationship("Property", back_populates="configurations")


class Builder(TimestampedMixin, Base):
    __tablename__ = "builders"
    name = Column(String(200), unique=True, nullable=False)
    about = Column(Text)

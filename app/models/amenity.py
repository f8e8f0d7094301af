# app/models/amenity.py
"""
Vehicle amenities table — named, categorised, priced features (AC, WiFi, ...)
that can be attached to any rental vehicle.
Amenity names are globally unique; the DB constraint is the authoritative guard.
"""

import enum
import uuid
from sqlalchemy import Column, String, Float, Boolean, DateTime, Text, Enum, Table, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


NAME_MAX_LENGTH = 100
ICON_MAX_LENGTH = 255


class AmenityCategory(str, enum.Enum):
    CLIMATE_CONTROL = "CLIMATE_CONTROL"
    CONNECTIVITY = "CONNECTIVITY"
    ENTERTAINMENT = "ENTERTAINMENT"
    COMFORT = "COMFORT"
    LUXURY = "LUXURY"
    STORAGE = "STORAGE"
    ACCESSIBILITY = "ACCESSIBILITY"
    SAFETY = "SAFETY"


# Many-to-many link between vehicles and amenities
vehicle_amenity_links = Table(
    "vehicle_amenity_links",
    Base.metadata,
    Column("vehicle_id", String(32), ForeignKey("vehicles.id", ondelete="CASCADE"), primary_key=True),
    Column("amenity_id", String(32), ForeignKey("vehicle_amenities.id", ondelete="CASCADE"), primary_key=True),
)


class VehicleAmenity(Base):
    __tablename__ = "vehicle_amenities"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    name = Column(String(NAME_MAX_LENGTH), unique=True, nullable=False, index=True)
    description = Column(Text)
    # VARCHAR, not a native PG enum, so ORDER BY category is lexical on every backend
    category = Column(Enum(AmenityCategory, native_enum=False, length=50), nullable=False, index=True)
    price_modifier = Column(Float, default=0.0, nullable=False)
    icon = Column(String(ICON_MAX_LENGTH))
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    vehicles = relationship("Vehicle", secondary=vehicle_amenity_links, back_populates="amenities")

    def __repr__(self):
        return f"<VehicleAmenity {self.name} category={self.category} active={self.is_active}>"

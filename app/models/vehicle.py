# app/models/vehicle.py
"""
Rental vehicles table (cabs, buses, bikes).
Only the columns the amenity catalog needs: amenity links are counted
per amenity when the catalog is listed.
"""

import enum
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Enum
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.amenity import vehicle_amenity_links


class VehicleType(str, enum.Enum):
    CAB = "CAB"
    BUS = "BUS"
    BIKE = "BIKE"


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    name = Column(String(200), nullable=False)
    vehicle_type = Column(Enum(VehicleType, native_enum=False, length=20), nullable=False, index=True)
    license_plate = Column(String(50), unique=True, nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime)

    amenities = relationship("VehicleAmenity", secondary=vehicle_amenity_links, back_populates="vehicles")

    def __repr__(self):
        return f"<Vehicle {self.license_plate} name={self.name} type={self.vehicle_type}>"

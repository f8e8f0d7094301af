# tests/conftest.py
"""Shared fixtures: in-memory SQLite session and a TestClient wired to it."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Must be set before app.config is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("API_KEY", "")

from datetime import datetime
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.database import create_tables, get_db
from app.models.amenity import VehicleAmenity, AmenityCategory
from app.models.vehicle import Vehicle, VehicleType


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db):
    from app.main import app
    app.dependency_overrides[get_db] = lambda: db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _add_amenity(db, name, category=AmenityCategory.LUXURY, is_active=True, price_modifier=0.0, vehicles=0):
    """Insert an amenity directly, optionally linked to `vehicles` new vehicles."""
    amenity = VehicleAmenity(name=name, category=category, is_active=is_active,
                             price_modifier=price_modifier, created_at=datetime.utcnow())
    for i in range(vehicles):
        amenity.vehicles.append(Vehicle(name=f"{name} cab {i}", vehicle_type=VehicleType.CAB,
                                        license_plate=f"{name}-{i}"))
    db.add(amenity)
    db.commit()
    return amenity


@pytest.fixture
def sample_catalog(db):
    """AC + WiFi active under LUXURY, Heater inactive under COMFORT."""
    _add_amenity(db, "AC", AmenityCategory.LUXURY, vehicles=2)
    _add_amenity(db, "WiFi", AmenityCategory.LUXURY)
    _add_amenity(db, "Heater", AmenityCategory.COMFORT, is_active=False, vehicles=1)
    return db


@pytest.fixture
def add_amenity(db):
    """Factory fixture: add_amenity("WiFi", AmenityCategory.CONNECTIVITY, vehicles=3)."""
    def _add(name, category=AmenityCategory.LUXURY, **kwargs):
        return _add_amenity(db, name, category, **kwargs)
    return _add

# tests/test_amenity_service.py
"""Unit tests for the amenity catalog service (listing, grouping, creation)."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import IntegrityError, OperationalError
from app.exceptions import AmenityConflictError, InternalServiceError
from app.models.amenity import VehicleAmenity, AmenityCategory
from app.schemas.amenity import AmenitySearchQuery, AmenityCreate
from app.services.amenity_service import list_amenities, create_amenity, resolve_active_filter


def names(amenities):
    return [a.name for a in amenities]


def make_command(name="AC", category=AmenityCategory.LUXURY, price_modifier=5.0, **extra):
    return AmenityCreate(name=name, category=category, price_modifier=price_modifier, **extra)


class TestResolveActiveFilter:
    def test_defaults_to_active(self):
        assert resolve_active_filter(AmenitySearchQuery()) is True

    def test_explicit_false_kept(self):
        assert resolve_active_filter(AmenitySearchQuery(is_active=False)) is False


class TestListAmenities:
    def test_default_lists_only_active(self, sample_catalog):
        listing = list_amenities(sample_catalog, AmenitySearchQuery())

        assert names(listing.amenities) == ["AC", "WiFi"]
        assert {k: names(v) for k, v in listing.grouped_amenities.items()} == {"LUXURY": ["AC", "WiFi"]}
        assert AmenityCategory.COMFORT in listing.categories

    def test_inactive_on_request(self, sample_catalog):
        listing = list_amenities(sample_catalog, AmenitySearchQuery(is_active=False))
        assert names(listing.amenities) == ["Heater"]
        assert all(a.is_active is False for a in listing.amenities)

    def test_category_filter(self, db, add_amenity):
        add_amenity("GPS Tracking", AmenityCategory.SAFETY)
        add_amenity("WiFi", AmenityCategory.CONNECTIVITY)

        listing = list_amenities(db, AmenitySearchQuery(category=AmenityCategory.SAFETY))

        assert names(listing.amenities) == ["GPS Tracking"]
        assert list(listing.grouped_amenities) == ["SAFETY"]

    def test_category_and_inactive_filters_combine(self, db, add_amenity):
        add_amenity("Heater", AmenityCategory.COMFORT, is_active=False)
        add_amenity("Reclining Seats", AmenityCategory.COMFORT)
        add_amenity("Old Radio", AmenityCategory.ENTERTAINMENT, is_active=False)

        listing = list_amenities(db, AmenitySearchQuery(category=AmenityCategory.COMFORT, is_active=False))

        assert names(listing.amenities) == ["Heater"]
        assert list(listing.grouped_amenities) == ["COMFORT"]

    def test_ordered_by_category_then_name(self, db, add_amenity):
        for name, category in [("Restroom", AmenityCategory.COMFORT), ("WiFi", AmenityCategory.CONNECTIVITY),
                               ("Extra Legroom", AmenityCategory.COMFORT), ("ABS Brakes", AmenityCategory.SAFETY),
                               ("audio", AmenityCategory.COMFORT), ("Heating", AmenityCategory.CLIMATE_CONTROL)]:
            add_amenity(name, category)

        listing = list_amenities(db, AmenitySearchQuery())

        keys = [(a.category.value, a.name) for a in listing.amenities]
        assert keys == sorted(keys)
        # Case-sensitive: uppercase sorts before lowercase
        assert names(listing.amenities)[:4] == ["Heating", "Extra Legroom", "Restroom", "audio"]

    def test_groups_partition_the_list(self, db, add_amenity):
        add_amenity("Heating", AmenityCategory.CLIMATE_CONTROL)
        add_amenity("Reclining Seats", AmenityCategory.COMFORT)
        add_amenity("Extra Legroom", AmenityCategory.COMFORT)
        add_amenity("Old Radio", AmenityCategory.ENTERTAINMENT, is_active=False)

        listing = list_amenities(db, AmenitySearchQuery())

        flattened = [a for group in listing.grouped_amenities.values() for a in group]
        assert names(flattened) == names(listing.amenities)
        assert list(listing.grouped_amenities) == ["CLIMATE_CONTROL", "COMFORT"]
        assert all(listing.grouped_amenities.values())

    def test_categories_always_full_enumeration(self, sample_catalog):
        for query in (AmenitySearchQuery(), AmenitySearchQuery(category=AmenityCategory.STORAGE),
                      AmenitySearchQuery(is_active=False)):
            assert list_amenities(sample_catalog, query).categories == list(AmenityCategory)

    def test_vehicle_count_annotated(self, sample_catalog):
        listing = list_amenities(sample_catalog, AmenitySearchQuery())
        counts = {a.name: a.vehicle_count for a in listing.amenities}
        assert counts == {"AC": 2, "WiFi": 0}

    def test_empty_store(self, db):
        listing = list_amenities(db, AmenitySearchQuery())
        assert listing.amenities == []
        assert listing.grouped_amenities == {}
        assert listing.categories == list(AmenityCategory)

    def test_query_failure_becomes_internal_error(self, caplog):
        db = MagicMock()
        db.query.return_value.filter.return_value.order_by.return_value.all.side_effect = \
            OperationalError("SELECT", {}, Exception("connection lost"))

        with pytest.raises(InternalServiceError) as exc_info:
            list_amenities(db, AmenitySearchQuery())
        assert "connection lost" not in exc_info.value.message
        # Cause stays in the server log
        assert "List query failed" in caplog.text
        assert "connection lost" in caplog.text


class TestCreateAmenity:
    def test_creates_active_amenity(self, db):
        amenity = create_amenity(db, make_command("WiFi", AmenityCategory.CONNECTIVITY, 20.0, icon="wifi"))

        assert amenity.id
        assert amenity.is_active is True
        assert amenity.price_modifier == 20.0
        assert amenity.icon == "wifi"
        assert db.query(VehicleAmenity).count() == 1

    def test_zero_price_allowed(self, db):
        assert create_amenity(db, make_command(price_modifier=0)).price_modifier == 0

    def test_duplicate_name_conflicts_without_insert(self, sample_catalog):
        before = sample_catalog.query(VehicleAmenity).count()

        with pytest.raises(AmenityConflictError) as exc_info:
            create_amenity(sample_catalog, make_command("AC", AmenityCategory.LUXURY, 5))

        assert exc_info.value.message == "Amenity with this name already exists"
        assert sample_catalog.query(VehicleAmenity).count() == before

    def test_name_match_is_case_sensitive(self, sample_catalog):
        create_amenity(sample_catalog, make_command("ac"))
        assert sample_catalog.query(VehicleAmenity).count() == 4

    def test_late_unique_violation_translated_to_conflict(self):
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = None   # pre-check passes
        db.commit.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

        with pytest.raises(AmenityConflictError):
            create_amenity(db, make_command())
        db.rollback.assert_called_once()

    def test_store_failure_becomes_internal_error(self):
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = None
        db.commit.side_effect = OperationalError("INSERT", {}, Exception("timeout"))

        with pytest.raises(InternalServiceError):
            create_amenity(db, make_command())
        db.rollback.assert_called_once()

# app/services/amenity_service.py
"""
Amenity catalog: filtered listing with per-category grouping, and creation
with a unique-name guarantee.

Listing:
  - isActive defaults to True when the caller did not ask for a value
  - ordered by (category, name) ascending
  - every amenity carries vehicle_count (linked vehicles, counted at query time)
  - grouped_amenities keeps list order and omits empty categories
  - categories is always the full AmenityCategory enumeration

Creation:
  - name lookup first, for a friendly conflict error
  - the unique constraint on vehicle_amenities.name is the real guard:
    an IntegrityError on commit (concurrent insert) becomes the same conflict
"""

from dataclasses import dataclass, field
from datetime import datetime
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.models.amenity import VehicleAmenity, AmenityCategory, vehicle_amenity_links
from app.schemas.amenity import AmenitySearchQuery, AmenityCreate, AmenityOut
from app.exceptions import AmenityConflictError, InternalServiceError
from app.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_ACTIVE_FILTER = True


@dataclass
class AmenityListing:
    amenities: list[AmenityOut]
    grouped_amenities: dict[str, list[AmenityOut]] = field(default_factory=dict)
    categories: list[AmenityCategory] = field(default_factory=lambda: list(AmenityCategory))


def resolve_active_filter(query: AmenitySearchQuery) -> bool:
    """Explicit isActive wins; otherwise only active amenities are listed."""
    if query.is_active is not None:
        return query.is_active
    return DEFAULT_ACTIVE_FILTER


def group_by_category(amenities: list[AmenityOut]) -> dict[str, list[AmenityOut]]:
    """Partition in first-appearance order. Categories without members get no key."""
    groups: dict[str, list[AmenityOut]] = {}
    for amenity in amenities:
        groups.setdefault(amenity.category.value, []).append(amenity)
    return groups


def _vehicle_count_column():
    return (
        select(func.count(vehicle_amenity_links.c.vehicle_id))
        .where(vehicle_amenity_links.c.amenity_id == VehicleAmenity.id)
        .correlate(VehicleAmenity)
        .scalar_subquery()
        .label("vehicle_count")
    )


def list_amenities(db: Session, query: AmenitySearchQuery) -> AmenityListing:
    is_active = resolve_active_filter(query)

    q = db.query(VehicleAmenity, _vehicle_count_column()).filter(VehicleAmenity.is_active == is_active)
    if query.category:
        q = q.filter(VehicleAmenity.category == query.category)

    try:
        rows = q.order_by(VehicleAmenity.category.asc(), VehicleAmenity.name.asc()).all()
    except SQLAlchemyError as e:
        logger.error(f"[AMENITY] List query failed: {e}", exc_info=True)
        raise InternalServiceError() from e

    amenities = [
        AmenityOut.model_validate(amenity).model_copy(update={"vehicle_count": count or 0})
        for amenity, count in rows
    ]
    logger.debug(f"[AMENITY] Listed {len(amenities)} (category={query.category}, is_active={is_active})")

    return AmenityListing(amenities=amenities, grouped_amenities=group_by_category(amenities))


def find_amenity_by_name(db: Session, name: str):
    """Exact (case-sensitive) name lookup. Returns None if not found."""
    return db.query(VehicleAmenity).filter(VehicleAmenity.name == name).first()


def create_amenity(db: Session, command: AmenityCreate) -> VehicleAmenity:
    """Persist a new active amenity. Raises AmenityConflictError on a duplicate name."""
    try:
        existing = find_amenity_by_name(db, command.name)
    except SQLAlchemyError as e:
        logger.error(f"[AMENITY] Name lookup failed for '{command.name}': {e}", exc_info=True)
        raise InternalServiceError() from e

    if existing:
        logger.info(f"[AMENITY] Rejected duplicate name '{command.name}'")
        raise AmenityConflictError(command.name)

    now = datetime.utcnow()
    amenity = VehicleAmenity(
        name=command.name,
        description=command.description,
        category=command.category,
        price_modifier=command.price_modifier,
        icon=command.icon,
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    db.add(amenity)

    try:
        db.commit()
    except IntegrityError as e:
        # Lost the race against a concurrent insert of the same name
        db.rollback()
        logger.warning(f"[AMENITY] Unique constraint hit for '{command.name}' after pre-check")
        raise AmenityConflictError(command.name) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"[AMENITY] Insert failed for '{command.name}': {e}", exc_info=True)
        raise InternalServiceError() from e

    db.refresh(amenity)
    logger.info(f"[AMENITY] Created '{amenity.name}' ({amenity.category.value}) id={amenity.id}")
    return amenity

# app/routers/amenities.py
"""Vehicle amenity catalog — list (filter + group by category) and create."""

import json
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.amenity import AmenityOut, AmenityListOut, AmenityCreatedOut
from app.services.amenity_validation import parse_search_query, parse_create_command
from app.services.amenity_service import list_amenities, create_amenity
from app.exceptions import AmenityValidationError

router = APIRouter()


@router.get("/amenities", response_model=AmenityListOut, summary="List amenities grouped by category")
def get_amenities(request: Request, db: Session = Depends(get_db)):
    """
    Query params:
    - category: one AmenityCategory value
    - isActive: "true" | "false" — defaults to active amenities only
    """
    query = parse_search_query(request.query_params)
    listing = list_amenities(db, query)
    return AmenityListOut(
        amenities=listing.amenities,
        grouped_amenities=listing.grouped_amenities,
        categories=listing.categories,
    )


@router.post("/amenities", response_model=AmenityCreatedOut, status_code=status.HTTP_201_CREATED,
             summary="Create an amenity")
async def post_amenity(request: Request, db: Session = Depends(get_db)):
    """Body: {name, description?, category, priceModifier, icon?}. Names are unique."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise AmenityValidationError([{"field": "body", "message": "Request body must be valid JSON"}])

    command = parse_create_command(body)
    amenity = create_amenity(db, command)
    # A brand-new amenity is not linked to any vehicle yet
    out = AmenityOut.model_validate(amenity).model_copy(update={"vehicle_count": 0})
    return AmenityCreatedOut(message="Amenity created successfully", amenity=out)

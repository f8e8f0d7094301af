# app/schemas/amenity.py
from pydantic import BaseModel, Field, StrictBool, StrictStr
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional
from app.models.amenity import AmenityCategory, NAME_MAX_LENGTH, ICON_MAX_LENGTH


class AmenitySearchQuery(BaseModel):
    """Validated GET /amenities filters. isActive=None means 'not supplied'."""
    category: Optional[AmenityCategory] = None
    is_active: Optional[StrictBool] = Field(default=None, alias="isActive")

    class Config:
        frozen = True
        populate_by_name = True


class AmenityCreate(BaseModel):
    name: StrictStr = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: Optional[StrictStr] = None
    category: AmenityCategory
    price_modifier: float = Field(alias="priceModifier", ge=0, strict=True, allow_inf_nan=False)
    icon: Optional[StrictStr] = Field(default=None, max_length=ICON_MAX_LENGTH)

    class Config:
        frozen = True
        populate_by_name = True


class AmenityOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    category: AmenityCategory
    price_modifier: float
    icon: Optional[str] = None
    is_active: bool
    vehicle_count: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class AmenityListOut(BaseModel):
    amenities: list[AmenityOut]
    grouped_amenities: dict[str, list[AmenityOut]]
    categories: list[AmenityCategory]

    class Config:
        populate_by_name = True
        alias_generator = to_camel


class AmenityCreatedOut(BaseModel):
    message: str
    amenity: AmenityOut

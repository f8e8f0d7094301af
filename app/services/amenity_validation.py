# app/services/amenity_validation.py
"""
Turns raw query strings and request bodies into immutable amenity commands.
Nothing here touches the database: malformed input is rejected before any
query or insert runs.
"""

from typing import Any, Mapping
from pydantic import ValidationError
from app.schemas.amenity import AmenitySearchQuery, AmenityCreate
from app.exceptions import AmenityValidationError
from app.utils.logger import get_logger

logger = get_logger(__name__)

SEARCH_FIELDS = ("category", "isActive")
BOOLEAN_TEXT = {"true": True, "false": False}


def _violations(exc: ValidationError) -> list[dict]:
    """Flatten pydantic errors into [{"field": "a.b", "message": "..."}], keeping every entry."""
    return [
        {"field": ".".join(str(part) for part in err["loc"]) or "body", "message": err["msg"]}
        for err in exc.errors()
    ]


def _coerce_bool(value: Any) -> Any:
    """'true'/'false' (any case) → bool. Anything else is left for the schema to reject."""
    if isinstance(value, str):
        return BOOLEAN_TEXT.get(value.strip().lower(), value)
    return value


def parse_search_query(raw: Mapping[str, str]) -> AmenitySearchQuery:
    """
    Validate list filters from a query string.
    Unknown keys are dropped; category must be an AmenityCategory value.
    """
    params = {key: raw[key] for key in SEARCH_FIELDS if key in raw}
    if "isActive" in params:
        params["isActive"] = _coerce_bool(params["isActive"])

    try:
        return AmenitySearchQuery.model_validate(params)
    except ValidationError as exc:
        violations = _violations(exc)
        logger.debug(f"[AMENITY] Rejected search params {params}: {violations}")
        raise AmenityValidationError(violations, "Invalid search parameters") from exc


def parse_create_command(raw: Any) -> AmenityCreate:
    """Validate a create body. All violations are reported together."""
    if not isinstance(raw, Mapping):
        raise AmenityValidationError(
            [{"field": "body", "message": "Request body must be a JSON object"}]
        )

    try:
        return AmenityCreate.model_validate(dict(raw))
    except ValidationError as exc:
        violations = _violations(exc)
        logger.debug(f"[AMENITY] Rejected create body: {violations}")
        raise AmenityValidationError(violations) from exc

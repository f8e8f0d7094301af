# app/exceptions.py
"""
Domain errors raised by the catalog services.
Mapped to HTTP responses by the exception handlers in app/main.py.
"""

from typing import Optional


class CatalogError(Exception):
    """Base class for caller-visible catalog errors."""

    message = "Catalog error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class AmenityValidationError(CatalogError):
    """
    Malformed, missing, or out-of-enum input.
    `violations` holds every failed field, not just the first one:
    [{"field": "priceModifier", "message": "..."}, ...]
    """

    message = "Validation failed"

    def __init__(self, violations: list[dict], message: Optional[str] = None):
        super().__init__(message)
        self.violations = violations


class AmenityConflictError(CatalogError):
    """Well-formed create request rejected by the unique name constraint."""

    message = "Amenity with this name already exists"

    def __init__(self, name: str, message: Optional[str] = None):
        super().__init__(message)
        self.name = name


class InternalServiceError(CatalogError):
    """Unexpected persistence failure. Never carries internal detail to the caller."""

    message = "Internal server error"

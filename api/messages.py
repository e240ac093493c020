"""
Centralized error messages for consistent API responses.

This module provides a single source of truth for the error messages used
across the API.
"""


class ErrorMessages:
    """Centralized error messages for consistent API responses."""

    # Resource not found messages
    RESOURCE_NOT_FOUND = "Resource not found."

    # Validation messages
    BAD_REQUEST = "Bad request."
    VALIDATION_ERROR = "Validation error."

    # Location-specific validation
    LOCATION_NAME_EMPTY = "Location name cannot be empty."
    LOCATION_CODE_EMPTY = "Location code cannot be empty."

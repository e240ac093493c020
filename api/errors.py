"""
Standardized error handling utilities for the location API views.

This module provides consistent error response builders and maps the
exceptions raised by the location hierarchy service onto HTTP responses.

Mapping:
- LocationNotFound for the requested location -> 404 {"detail": ...}
- LocationNotFound for a referenced parent -> 400 {"parent_id": [...]}
- InvalidHierarchyOperation (cycle, depth) -> 400 {"parent_id": [...]}
- InvalidHierarchyOperation (other) -> 400 {"detail": ...}
- Django ValidationError -> 400 field errors
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Dict, List, Optional, Union

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.response import Response

from api.messages import ErrorMessages
from locations.exceptions import InvalidHierarchyOperation, LocationNotFound

logger = logging.getLogger(__name__)


class APIError:
    """Standard API error response builder."""

    RESOURCE_NOT_FOUND = ErrorMessages.RESOURCE_NOT_FOUND
    VALIDATION_ERROR = ErrorMessages.VALIDATION_ERROR
    BAD_REQUEST = ErrorMessages.BAD_REQUEST

    @staticmethod
    def not_found(detail: Optional[str] = None) -> Response:
        """
        Return a standard 404 Not Found response.

        Args:
            detail: Custom error message. If None, uses standard message.

        Returns:
            Response with 404 status and standard error format.
        """
        return Response(
            {"detail": detail or APIError.RESOURCE_NOT_FOUND},
            status=status.HTTP_404_NOT_FOUND,
        )

    @staticmethod
    def create_bad_request_response(detail: Optional[str] = None) -> Response:
        """
        Return a standard 400 Bad Request response.

        Args:
            detail: Custom error message. If None, uses standard message.

        Returns:
            Response with 400 status and standard error format.
        """
        return Response(
            {"detail": detail or APIError.BAD_REQUEST},
            status=status.HTTP_400_BAD_REQUEST,
        )

    @staticmethod
    def create_validation_error_response(
        errors: Union[Dict[str, List[str]], str, DjangoValidationError],
    ) -> Response:
        """
        Return a standardized validation error response.

        Args:
            errors: Validation errors in various formats:
                   - Dict mapping field names to error lists
                   - String for general validation error
                   - Django ValidationError instance

        Returns:
            Response with 400 status and standardized error format.
        """
        if isinstance(errors, DjangoValidationError):
            if hasattr(errors, "error_dict"):
                return Response(errors.message_dict, status=status.HTTP_400_BAD_REQUEST)
            return Response(
                {"detail": errors.messages[0]}, status=status.HTTP_400_BAD_REQUEST
            )
        if isinstance(errors, dict):
            return Response(errors, status=status.HTTP_400_BAD_REQUEST)
        if isinstance(errors, str):
            return Response({"detail": errors}, status=status.HTTP_400_BAD_REQUEST)
        return Response(
            {"detail": APIError.VALIDATION_ERROR},
            status=status.HTTP_400_BAD_REQUEST,
        )


def location_error_response(error: Exception) -> Response:
    """
    Convert a location service exception to a standardized API response.

    Args:
        error: LocationNotFound or a Django ValidationError (including
            InvalidHierarchyOperation).

    Returns:
        Standardized API error response.
    """
    if isinstance(error, LocationNotFound):
        if error.entity == "parent":
            return APIError.create_validation_error_response(
                {"parent_id": [str(error)]}
            )
        return APIError.not_found(str(error))

    if isinstance(error, InvalidHierarchyOperation):
        if error.code in (
            InvalidHierarchyOperation.CYCLE,
            InvalidHierarchyOperation.MAX_DEPTH,
        ):
            return APIError.create_validation_error_response(
                {"parent_id": error.messages}
            )
        return APIError.create_bad_request_response(error.reason)

    return APIError.create_validation_error_response(error)


def handle_location_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator converting location service exceptions to API responses.

    Apply to API view methods that call ``LocationService``. Anything other
    than a missing location or a validation failure propagates unchanged.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (LocationNotFound, DjangoValidationError) as e:
            logger.info(f"Location request rejected: {e}")
            return location_error_response(e)

    return wrapper

"""
Location API CRUD views.

This module provides the core CRUD operations for location management:
list, create, detail, update, delete, children and move. All hierarchy
rules live in ``LocationService``; these views only translate requests.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from api.errors import APIError, handle_location_exceptions
from api.serializers import (
    LocationMoveSerializer,
    LocationSerializer,
    LocationWriteSerializer,
)
from locations.services import LocationService

logger = logging.getLogger(__name__)


class LocationListCreateAPIView(APIView):
    """
    API view for listing and creating locations.

    GET: List every location ordered by path
    POST: Create a new location
    """

    def get(self, request):
        """List all locations in path order."""
        locations = LocationService.list()
        serializer = LocationSerializer(
            locations, many=True, context={"request": request}
        )
        return Response(serializer.data)

    @handle_location_exceptions
    def post(self, request):
        """Create a new location."""
        serializer = LocationWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return APIError.create_validation_error_response(serializer.errors)

        location = LocationService.create(**serializer.validated_data)
        logger.info(
            f"API created location '{location.name}' (ID: {location.id}) "
            f"at path '{location.path}'"
        )
        return Response(
            LocationSerializer(location, context={"request": request}).data,
            status=status.HTTP_201_CREATED,
        )


class LocationDetailAPIView(APIView):
    """
    API view for location detail, update, and delete operations.

    GET: Retrieve a location
    PATCH/PUT: Partially update a location, moving it when parent_id changes
    DELETE: Delete a childless location
    """

    @handle_location_exceptions
    def get(self, request, pk):
        """Retrieve location details."""
        location = LocationService.get(pk)
        serializer = LocationSerializer(location, context={"request": request})
        return Response(serializer.data)

    @handle_location_exceptions
    def patch(self, request, pk):
        """Update location."""
        serializer = LocationWriteSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return APIError.create_validation_error_response(serializer.errors)

        location = LocationService.update(pk, **serializer.validated_data)
        logger.info(f"API updated location '{location.name}' (ID: {location.id})")
        return Response(
            LocationSerializer(location, context={"request": request}).data
        )

    def put(self, request, pk):
        """Update location; same partial semantics as PATCH."""
        return self.patch(request, pk)

    @handle_location_exceptions
    def delete(self, request, pk):
        """Delete location."""
        LocationService.remove(pk)
        logger.info(f"API deleted location (ID: {pk})")
        return Response(status=status.HTTP_204_NO_CONTENT)


class LocationChildrenAPIView(APIView):
    """
    API view for retrieving location children.

    GET: Get immediate children of a location (empty list for unknown ids)
    """

    def get(self, request, pk):
        """Get children of a location."""
        children = LocationService.get_children(pk)
        serializer = LocationSerializer(
            children, many=True, context={"request": request}
        )
        return Response(serializer.data)


class LocationMoveAPIView(APIView):
    """API view for moving a location to a different parent."""

    @handle_location_exceptions
    def post(self, request, pk):
        """Move a location under ``parent_id`` (null moves it to the root level)."""
        serializer = LocationMoveSerializer(data=request.data)
        if not serializer.is_valid():
            return APIError.create_validation_error_response(serializer.errors)

        location = LocationService.update(
            pk, parent_id=serializer.validated_data["parent_id"]
        )
        logger.info(
            f"API moved location '{location.name}' (ID: {location.id}) "
            f"to path '{location.path}'"
        )
        return Response(
            LocationSerializer(location, context={"request": request}).data
        )

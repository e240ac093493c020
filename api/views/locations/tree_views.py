"""
Location API hierarchy views.

Read-only views that return nested trees or ordered slices of the
hierarchy.
"""

from rest_framework.response import Response
from rest_framework.views import APIView

from api.errors import handle_location_exceptions
from api.serializers import LocationSerializer, LocationTreeSerializer
from locations.services import LocationService


class LocationTreeAPIView(APIView):
    """API view for the whole location forest with nested children."""

    def get(self, request):
        """Get every root location with its descendants attached."""
        forest = LocationService.get_tree()
        serializer = LocationTreeSerializer(
            forest, many=True, context={"request": request}
        )
        return Response(serializer.data)


class LocationSubtreeAPIView(APIView):
    """API view for a single location with its descendants nested below it."""

    @handle_location_exceptions
    def get(self, request, pk):
        """Get the subtree rooted at a location."""
        node = LocationService.get_subtree(pk)
        serializer = LocationTreeSerializer(node, context={"request": request})
        return Response(serializer.data)


class LocationDescendantsAPIView(APIView):
    """API view for getting location descendants."""

    @handle_location_exceptions
    def get(self, request, pk):
        """Get all descendants of a location in path order."""
        descendants = LocationService.get_descendants(pk)
        serializer = LocationSerializer(
            descendants, many=True, context={"request": request}
        )
        return Response(serializer.data)


class LocationAncestorsAPIView(APIView):
    """API view for getting location ancestors."""

    @handle_location_exceptions
    def get(self, request, pk):
        """Get all ancestors of a location, root first."""
        ancestors = LocationService.get_ancestors(pk)
        serializer = LocationSerializer(
            ancestors, many=True, context={"request": request}
        )
        return Response(serializer.data)

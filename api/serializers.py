"""
API serializers for the location hierarchy.
"""

from rest_framework import serializers

from api.messages import ErrorMessages
from locations.models import Location


class LocationSerializer(serializers.ModelSerializer):
    """Read serializer exposing every stored field of a location."""

    parent_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Location
        fields = (
            "id",
            "name",
            "code",
            "area",
            "parent_id",
            "level",
            "path",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class LocationTreeSerializer(serializers.BaseSerializer):
    """
    Serializer for ``TreeNode`` values.

    Renders the location like ``LocationSerializer`` with a nested
    ``children`` list.
    """

    def to_representation(self, instance):
        data = LocationSerializer(instance.location, context=self.context).data
        data["children"] = [self.to_representation(child) for child in instance.children]
        return data


class LocationWriteSerializer(serializers.Serializer):
    """
    Serializer for creating and updating locations.

    Use with ``partial=True`` for updates; only the supplied fields are passed
    on to the service. An explicit ``parent_id: null`` moves a location to the
    root level.
    """

    name = serializers.CharField(max_length=255)
    code = serializers.CharField(max_length=100)
    area = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    parent_id = serializers.UUIDField(required=False, allow_null=True)

    def validate_name(self, value):
        """Validate location name."""
        if not value or not value.strip():
            raise serializers.ValidationError(ErrorMessages.LOCATION_NAME_EMPTY)
        return value.strip()

    def validate_code(self, value):
        """Validate location code."""
        if not value or not value.strip():
            raise serializers.ValidationError(ErrorMessages.LOCATION_CODE_EMPTY)
        return value.strip()


class LocationMoveSerializer(serializers.Serializer):
    """Serializer for moving a location under a new parent (null for root)."""

    parent_id = serializers.UUIDField(allow_null=True)

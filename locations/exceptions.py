"""
Exceptions raised by the location hierarchy service.
"""

from django.core.exceptions import ObjectDoesNotExist, ValidationError


class LocationNotFound(ObjectDoesNotExist):
    """
    A referenced location does not exist.

    ``entity`` tells which reference failed: ``"location"`` for the target of
    the operation, ``"parent"`` for a requested parent.
    """

    def __init__(self, pk, entity: str = "location"):
        self.pk = pk
        self.entity = entity
        label = "Parent location" if entity == "parent" else "Location"
        super().__init__(f"{label} with ID {pk} not found")


class InvalidHierarchyOperation(ValidationError):
    """
    The requested change would violate a tree invariant.

    Raised before any write takes place. ``code`` is one of ``cycle``,
    ``has_children``, ``max_depth`` or ``unknown_field``.
    """

    CYCLE = "cycle"
    HAS_CHILDREN = "has_children"
    MAX_DEPTH = "max_depth"
    UNKNOWN_FIELD = "unknown_field"

    def __init__(self, message: str, code: str):
        super().__init__(message, code=code)

    @property
    def reason(self) -> str:
        return self.messages[0]


class HierarchyIntegrityError(Exception):
    """Stored locations already violate the tree invariants."""

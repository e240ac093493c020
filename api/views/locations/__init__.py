"""
Location API views.
"""

from .crud_views import (
    LocationChildrenAPIView,
    LocationDetailAPIView,
    LocationListCreateAPIView,
    LocationMoveAPIView,
)
from .tree_views import (
    LocationAncestorsAPIView,
    LocationDescendantsAPIView,
    LocationSubtreeAPIView,
    LocationTreeAPIView,
)

__all__ = [
    "LocationListCreateAPIView",
    "LocationDetailAPIView",
    "LocationChildrenAPIView",
    "LocationMoveAPIView",
    "LocationTreeAPIView",
    "LocationSubtreeAPIView",
    "LocationDescendantsAPIView",
    "LocationAncestorsAPIView",
]

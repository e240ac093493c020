"""
URL configuration for location API endpoints.
"""

from django.urls import path

from api.views.locations import (
    LocationAncestorsAPIView,
    LocationChildrenAPIView,
    LocationDescendantsAPIView,
    LocationDetailAPIView,
    LocationListCreateAPIView,
    LocationMoveAPIView,
    LocationSubtreeAPIView,
    LocationTreeAPIView,
)

# Note: No app_name here since these are accessed as api:locations-list

urlpatterns = [
    # Location CRUD operations
    path("", LocationListCreateAPIView.as_view(), name="locations-list"),
    path("tree/", LocationTreeAPIView.as_view(), name="locations-tree"),
    path("<uuid:pk>/", LocationDetailAPIView.as_view(), name="locations-detail"),
    # Location hierarchy operations
    path(
        "<uuid:pk>/children/",
        LocationChildrenAPIView.as_view(),
        name="locations-children",
    ),
    path(
        "<uuid:pk>/descendants/",
        LocationDescendantsAPIView.as_view(),
        name="locations-descendants",
    ),
    path(
        "<uuid:pk>/ancestors/",
        LocationAncestorsAPIView.as_view(),
        name="locations-ancestors",
    ),
    path(
        "<uuid:pk>/subtree/",
        LocationSubtreeAPIView.as_view(),
        name="locations-subtree",
    ),
    path("<uuid:pk>/move/", LocationMoveAPIView.as_view(), name="locations-move"),
]

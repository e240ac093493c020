"""
URL configuration for the location_tree project.
"""

from django.urls import include, path

urlpatterns = [
    path("api/", include("api.urls")),
]

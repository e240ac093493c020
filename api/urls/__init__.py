"""
API URLs configuration.

Main API URL patterns that include all sub-modules.
"""

from django.urls import include, path

app_name = "api"

urlpatterns = [
    # Location management endpoints
    path("locations/", include("api.urls.location_urls")),
]

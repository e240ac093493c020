"""
Shared helpers for location tests.
"""

from decimal import Decimal
from itertools import count

from locations.services import LocationService

_codes = count(1)


class LocationTestMixin:
    """Adds a ``make_location`` helper that goes through the service layer."""

    def make_location(self, name, parent=None, area=Decimal("100.00"), code=None):
        """Create a location under ``parent`` (a Location or None)."""
        return LocationService.create(
            name=name,
            code=code or f"LOC-{next(_codes):04d}",
            area=area,
            parent_id=parent.pk if parent is not None else None,
        )

    def make_chain(self, depth, prefix="Level"):
        """Create a single-branch hierarchy of ``depth`` locations, root first."""
        chain = []
        parent = None
        for i in range(depth):
            parent = self.make_location(f"{prefix} {i}", parent=parent)
            chain.append(parent)
        return chain

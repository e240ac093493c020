from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Optional, Tuple

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Max, Value
from django.db.models.functions import Concat, Length, Substr
from django.utils import timezone

from core.models import NamedModelMixin, TimestampedMixin
from locations.paths import descendant_prefix, split_path


class LocationQuerySet(models.QuerySet):
    """
    Store-level operations for the location hierarchy.

    Every lookup the hierarchy service needs is expressed here as a single
    query, so that subtree reads and rewrites stay set-based and never load
    whole subtrees into memory.
    """

    def roots(self) -> "LocationQuerySet":
        return self.filter(parent__isnull=True).order_by("path")

    def children_of(self, parent_id) -> "LocationQuerySet":
        """Direct children of ``parent_id``; roots when ``parent_id`` is None."""
        if parent_id is None:
            return self.roots()
        return self.filter(parent_id=parent_id).order_by("path")

    def ordered_by_path(self) -> "LocationQuerySet":
        """All locations in pre-order: every parent precedes its subtree."""
        return self.order_by("path")

    def descendants_of(self, path: str) -> "LocationQuerySet":
        """Strict descendants of the location stored at ``path``."""
        return self.filter(path__startswith=descendant_prefix(path)).order_by("path")

    def parent_link(
        self, pk, for_update: bool = False
    ) -> Optional[Tuple[uuid.UUID, Optional[uuid.UUID]]]:
        """
        Narrow ``(id, parent_id)`` projection of a single location.

        With ``for_update`` the row stays locked until the surrounding
        transaction ends.

        Returns:
            The pair, or None if no location has this id
        """
        queryset = self.select_for_update() if for_update else self
        return queryset.filter(pk=pk).values_list("id", "parent_id").first()

    def max_path_length_under(self, path: str) -> int:
        """Length of the longest path in the subtree rooted at ``path``."""
        longest = self.descendants_of(path).aggregate(longest=Max(Length("path")))
        return max(longest["longest"] or 0, len(path))

    def rewrite_subtree(
        self, pk, old_path: str, new_path: str, level_diff: int
    ) -> int:
        """
        Move the subtree rooted at ``pk`` from ``old_path`` to ``new_path``.

        The location itself gets ``new_path``; every descendant has its
        ``old_path`` prefix replaced by ``new_path``. All rows shift their level
        by ``level_diff``. Runs as two set-based UPDATE statements; callers are
        expected to wrap it in a transaction.

        Returns:
            Number of descendant rows rewritten
        """
        now = timezone.now()
        self.filter(pk=pk).update(
            level=F("level") + level_diff,
            path=Value(new_path),
            updated_at=now,
        )
        return self.descendants_of(old_path).update(
            level=F("level") + level_diff,
            path=Concat(
                Value(new_path),
                Substr("path", len(old_path) + 1),
                output_field=models.CharField(),
            ),
            updated_at=now,
        )


class Location(TimestampedMixin, NamedModelMixin):
    """
    A node in the location hierarchy.

    Provides standardized fields through mixins:
    - TimestampedMixin: created_at, updated_at fields with indexing
    - NamedModelMixin: name field with __str__ method

    Hierarchy fields:
    - parent: Optional parent location, None for roots
    - level: Depth from the root (roots are 0)
    - path: Dot-joined ids from the root down to this location

    ``level`` and ``path`` are maintained by ``LocationService``; do not
    assign them directly.
    """

    PATH_MAX_LENGTH = 1000

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    code = models.CharField(
        max_length=100,
        unique=True,
        help_text="Location number, e.g. LOC-001",
    )

    area = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Area size of the location",
    )

    parent: models.ForeignKey = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="children",
        help_text="Parent location in the hierarchy",
    )

    level = models.PositiveIntegerField(
        default=0,
        editable=False,
        help_text="Hierarchy level of the location (0 for roots)",
    )

    path = models.CharField(
        max_length=PATH_MAX_LENGTH,
        db_index=True,
        editable=False,
        help_text="Ids from the root down to this location, joined by dots",
    )

    objects = LocationQuerySet.as_manager()

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def clean(self) -> None:
        """
        Check that level and path agree with each other and with the id.

        This validates the row in isolation; consistency with the parent chain
        is enforced by ``LocationService``.

        Raises:
            ValidationError: If validation fails
        """
        super().clean()

        if self.parent_id and self.parent_id == self.pk:
            raise ValidationError(
                {"parent": "A location cannot be its own parent."}
            )

        segments = split_path(self.path)
        if not segments or segments[-1] != str(self.pk):
            raise ValidationError({"path": "Path must end with the location's id."})

        if len(segments) != self.level + 1:
            raise ValidationError(
                {"level": "Level must equal the number of ancestors in the path."}
            )

        if (self.level == 0) != (self.parent_id is None):
            raise ValidationError(
                {"level": "Only root locations may have level 0."}
            )

    class Meta:
        db_table = "locations_location"
        ordering = ["path"]
        verbose_name = "Location"
        verbose_name_plural = "Locations"
        indexes = [
            models.Index(fields=["parent", "path"], name="location_parent_path_idx"),
        ]

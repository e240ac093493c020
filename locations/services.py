"""
Location service layer for hierarchy operations.

This module owns the tree invariants of the location hierarchy:

- every non-root location's parent exists
- ``level`` and ``path`` agree with the parent chain, for a location and for
  every descendant
- the parent graph is acyclic
- a location with children cannot be deleted

Mutations run inside a single transaction and check every precondition
before the first write. Tree reads are not transactional and may observe
concurrent changes half way through.
"""

import logging
from collections import defaultdict, deque
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from .exceptions import (
    HierarchyIntegrityError,
    InvalidHierarchyOperation,
    LocationNotFound,
)
from .models import Location
from .paths import ancestor_ids, child_position, root_position
from .tree import TreeNode, assemble, build_forest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntegrityIssue:
    """A stored location whose hierarchy fields disagree with its parent chain."""

    MISSING_PARENT = "missing_parent"
    UNREACHABLE = "unreachable"
    WRONG_LEVEL = "wrong_level"
    WRONG_PATH = "wrong_path"

    location_id: str
    problem: str
    expected: Optional[str] = None
    found: Optional[str] = None

    def __str__(self):
        if self.expected is None:
            return f"{self.location_id}: {self.problem}"
        return (
            f"{self.location_id}: {self.problem} "
            f"(expected {self.expected!r}, found {self.found!r})"
        )


def _as_id(value, entity: str = "location"):
    """
    Normalise a caller supplied id to the primary key type.

    Raises:
        LocationNotFound: If the value cannot be the id of any location
    """
    if value is None:
        return None
    try:
        return Location._meta.pk.to_python(value)
    except ValidationError as e:
        raise LocationNotFound(value, entity=entity) from e


def _as_area(value):
    """Floats go through their shortest repr so 12.34 stays two decimal places."""
    if isinstance(value, float):
        return Decimal(repr(value))
    return value


class LocationService:
    """Service class for location hierarchy operations."""

    UPDATABLE_FIELDS = frozenset({"name", "code", "area", "parent_id"})

    @classmethod
    def _load(cls, pk, entity: str = "location", for_update: bool = False) -> Location:
        queryset = Location.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        location = queryset.filter(pk=_as_id(pk, entity)).first()
        if location is None:
            raise LocationNotFound(pk, entity=entity)
        return location

    @classmethod
    def _check_path_length(cls, length: int) -> None:
        if length > Location.PATH_MAX_LENGTH:
            raise InvalidHierarchyOperation(
                f"Maximum hierarchy depth exceeded: the path would be {length} "
                f"characters long (limit {Location.PATH_MAX_LENGTH}).",
                code=InvalidHierarchyOperation.MAX_DEPTH,
            )

    @classmethod
    @transaction.atomic
    def create(cls, name: str, code: str, area, parent_id=None) -> Location:
        """
        Create a location, optionally under an existing parent.

        The id is generated when the instance is built, so level and path are
        computed before the single insert.

        Raises:
            LocationNotFound: If ``parent_id`` does not resolve
            InvalidHierarchyOperation: If the new path would be too long
            ValidationError: If a field is invalid or the code is taken
        """
        location = Location(name=name, code=code, area=_as_area(area))

        if parent_id is not None:
            parent = cls._load(parent_id, entity="parent", for_update=True)
            location.parent = parent
            location.level, location.path = child_position(
                parent.level, parent.path, location.pk
            )
        else:
            location.level, location.path = root_position(location.pk)

        cls._check_path_length(len(location.path))
        location.full_clean()
        location.save(force_insert=True)

        logger.info(
            f"Created location '{location.name}' (ID: {location.pk}) "
            f"at level {location.level}"
        )
        return location

    @classmethod
    def get(cls, pk) -> Location:
        """
        Get a single location.

        Raises:
            LocationNotFound: If no location has this id
        """
        return cls._load(pk)

    @classmethod
    def list(cls) -> List[Location]:
        """All locations ordered by path, i.e. in pre-order over the forest."""
        return list(Location.objects.ordered_by_path())

    @classmethod
    def get_children(cls, pk) -> List[Location]:
        """Direct children of ``pk``; empty when the location does not exist."""
        try:
            parent_id = _as_id(pk)
        except LocationNotFound:
            return []
        return list(Location.objects.children_of(parent_id))

    @classmethod
    def get_tree(cls) -> List[TreeNode]:
        """
        Build the whole forest, one children query per location.

        Not wrapped in a transaction: locations added or removed while the
        tree is being built may or may not appear.
        """
        return build_forest(
            Location.objects.roots(),
            lambda location: Location.objects.children_of(location.pk),
        )

    @classmethod
    def get_descendants(cls, pk) -> List[Location]:
        """Every location below ``pk``, in path order, fetched with one range scan."""
        location = cls._load(pk)
        return list(Location.objects.descendants_of(location.path))

    @classmethod
    def get_ancestors(cls, pk) -> List[Location]:
        """Ancestors of ``pk`` ordered from the root down to the immediate parent."""
        location = cls._load(pk)
        ids = ancestor_ids(location.path)
        if not ids:
            return []
        return list(Location.objects.filter(pk__in=ids).order_by("level"))

    @classmethod
    def get_subtree(cls, pk) -> TreeNode:
        """The location at ``pk`` with all of its descendants attached."""
        location = cls._load(pk)
        descendants = Location.objects.descendants_of(location.path)
        return assemble([location, *descendants])[0]

    @classmethod
    def would_create_cycle(
        cls, node_id, candidate_parent_id, for_update: bool = False
    ) -> bool:
        """
        Check whether making ``candidate_parent_id`` the parent of ``node_id``
        would create a cycle.

        Walks up from the candidate one ``(id, parent_id)`` lookup at a time,
        so the cost is bounded by the candidate's depth. With ``for_update`` each
        visited row is locked, so a concurrent move of one of the candidate's
        ancestors waits for this transaction to finish.

        Returns:
            True if the candidate is the node itself or one of its descendants;
            False when either id cannot belong to any location

        Raises:
            HierarchyIntegrityError: If the candidate's ancestry is broken (an
                ancestor is missing) or already loops
        """
        try:
            node_id = _as_id(node_id)
            candidate_parent_id = _as_id(candidate_parent_id)
        except LocationNotFound:
            return False
        if candidate_parent_id == node_id:
            return True

        visited = set()
        current = candidate_parent_id
        while current is not None:
            if current in visited:
                raise HierarchyIntegrityError(
                    f"Ancestry of location {candidate_parent_id} loops at {current}"
                )
            link = Location.objects.parent_link(current, for_update=for_update)
            if link is None:
                if not visited:
                    # Missing candidate: reported by the parent lookup instead
                    return False
                raise HierarchyIntegrityError(
                    f"Ancestry of location {candidate_parent_id} is broken: "
                    f"ancestor {current} does not exist"
                )
            visited.add(current)
            location_id, current = link
            if location_id == node_id:
                return True

        return False

    @classmethod
    def _relocate(cls, location: Location, new_parent_id) -> None:
        """Point ``location`` at its new parent and recompute level and path in memory."""
        if new_parent_id is None:
            location.parent = None
            location.level, location.path = root_position(location.pk)
            return

        if cls.would_create_cycle(location.pk, new_parent_id, for_update=True):
            logger.warning(
                f"Rejected moving location {location.pk} under {new_parent_id}: "
                f"cycle"
            )
            raise InvalidHierarchyOperation(
                "Cannot move a location to itself or to one of its descendants.",
                code=InvalidHierarchyOperation.CYCLE,
            )

        new_parent = cls._load(new_parent_id, entity="parent", for_update=True)
        location.parent = new_parent
        location.level, location.path = child_position(
            new_parent.level, new_parent.path, location.pk
        )

    @classmethod
    @transaction.atomic
    def update(cls, pk, **changes) -> Location:
        """
        Update fields of a location, moving its subtree if the parent changes.

        Accepts any subset of ``name``, ``code``, ``area`` and ``parent_id``.
        ``parent_id=None`` moves the location to the root level.

        Raises:
            LocationNotFound: If the location or the new parent does not exist
            InvalidHierarchyOperation: If the move would create a cycle or
                exceed the maximum depth, or an unknown field is given
            ValidationError: If a field is invalid or the code is taken
        """
        unknown = set(changes) - cls.UPDATABLE_FIELDS
        if unknown:
            raise InvalidHierarchyOperation(
                f"Cannot update field(s): {', '.join(sorted(unknown))}.",
                code=InvalidHierarchyOperation.UNKNOWN_FIELD,
            )

        location = cls._load(pk, for_update=True)
        old_level, old_path = location.level, location.path

        moved = False
        if "parent_id" in changes:
            new_parent_id = _as_id(changes.pop("parent_id"), entity="parent")
            if new_parent_id != location.parent_id:
                cls._relocate(location, new_parent_id)
                longest = Location.objects.max_path_length_under(old_path)
                cls._check_path_length(longest - len(old_path) + len(location.path))
                moved = True

        if "area" in changes:
            changes["area"] = _as_area(changes["area"])
        for field, value in changes.items():
            setattr(location, field, value)
        location.full_clean()

        if moved:
            level_diff = location.level - old_level
            rewritten = Location.objects.rewrite_subtree(
                location.pk, old_path, location.path, level_diff
            )
            logger.info(
                f"Moved location '{location.name}' (ID: {location.pk}) from "
                f"'{old_path}' to '{location.path}' with {rewritten} "
                f"descendant(s), level change {level_diff:+d}"
            )

        update_fields = [*changes, "updated_at"]
        if moved:
            update_fields += ["parent", "level", "path"]
        location.save(update_fields=update_fields)
        return location

    @classmethod
    @transaction.atomic
    def remove(cls, pk) -> None:
        """
        Delete a childless location.

        Raises:
            LocationNotFound: If the location does not exist
            InvalidHierarchyOperation: If the location still has children
        """
        location = cls._load(pk, for_update=True)

        if Location.objects.children_of(location.pk).exists():
            logger.warning(
                f"Rejected deleting location {location.pk}: it has children"
            )
            raise InvalidHierarchyOperation(
                "Cannot delete a location that has children.",
                code=InvalidHierarchyOperation.HAS_CHILDREN,
            )

        location.delete()
        logger.info(f"Deleted location '{location.name}' (ID: {pk})")

    @classmethod
    def _expected_positions(cls, parents: Dict) -> Dict:
        """
        Compute ``(level, path)`` for every location reachable from a root.

        ``parents`` maps each location id to its parent id.
        """
        children = defaultdict(list)
        for pk, parent_id in parents.items():
            children[parent_id].append(pk)

        expected: Dict = {}
        queue = deque((pk, root_position(pk)) for pk in children[None])
        while queue:
            pk, position = queue.popleft()
            expected[pk] = position
            level, path = position
            for child in children[pk]:
                queue.append((child, child_position(level, path, child)))
        return expected

    @classmethod
    def check_integrity(cls) -> List[IntegrityIssue]:
        """
        Report every location whose stored hierarchy fields are inconsistent.

        Loads ``(id, parent_id, level, path)`` for all rows in one query.
        """
        rows: Dict = {
            pk: (parent_id, level, path)
            for pk, parent_id, level, path in Location.objects.values_list(
                "id", "parent_id", "level", "path"
            )
        }
        expected = cls._expected_positions(
            {pk: row[0] for pk, row in rows.items()}
        )

        issues: List[IntegrityIssue] = []
        for pk, (parent_id, level, path) in rows.items():
            if parent_id is not None and parent_id not in rows:
                issues.append(
                    IntegrityIssue(str(pk), IntegrityIssue.MISSING_PARENT)
                )
                continue
            if pk not in expected:
                issues.append(IntegrityIssue(str(pk), IntegrityIssue.UNREACHABLE))
                continue
            expected_level, expected_path = expected[pk]
            if level != expected_level:
                issues.append(
                    IntegrityIssue(
                        str(pk),
                        IntegrityIssue.WRONG_LEVEL,
                        str(expected_level),
                        str(level),
                    )
                )
            if path != expected_path:
                issues.append(
                    IntegrityIssue(
                        str(pk), IntegrityIssue.WRONG_PATH, expected_path, path
                    )
                )

        return issues

    @classmethod
    @transaction.atomic
    def rebuild_paths(cls) -> int:
        """
        Recompute level and path of every location from its parent chain.

        Locations that cannot be reached from a root are left untouched.

        Returns:
            Number of locations that were rewritten
        """
        rows: Dict[object, Tuple] = {
            pk: (parent_id, level, path)
            for pk, parent_id, level, path in Location.objects.select_for_update()
            .values_list("id", "parent_id", "level", "path")
        }
        expected = cls._expected_positions(
            {pk: row[0] for pk, row in rows.items()}
        )

        now = timezone.now()
        repaired = 0
        for pk, (level, path) in expected.items():
            if rows[pk][1:] == (level, path):
                continue
            Location.objects.filter(pk=pk).update(
                level=level, path=path, updated_at=now
            )
            repaired += 1

        unreachable = len(rows) - len(expected)
        if unreachable:
            logger.warning(
                f"{unreachable} location(s) are not reachable from any root "
                f"and were not repaired"
            )
        logger.info(f"Rebuilt hierarchy paths: {repaired} location(s) repaired")
        return repaired

"""
Materialized path helpers for the location hierarchy.

A location's path is the dot-joined chain of ancestor ids from its root down
to the location itself, e.g. ``"<root-id>.<child-id>.<grandchild-id>"``.
Level is the number of ancestors (0 for roots).

All functions here are pure. A path can only be computed once the
location's own id exists, because the id is always the last segment.
"""

from typing import List, Tuple

PATH_SEPARATOR = "."


def root_position(own_id) -> Tuple[int, str]:
    """Return ``(level, path)`` for a location without a parent."""
    return 0, str(own_id)


def child_position(parent_level: int, parent_path: str, own_id) -> Tuple[int, str]:
    """Return ``(level, path)`` for a location placed under the given parent."""
    return parent_level + 1, f"{parent_path}{PATH_SEPARATOR}{own_id}"


def split_path(path: str) -> List[str]:
    """Split a path into its ids, root first and the location itself last."""
    if not path:
        return []
    return path.split(PATH_SEPARATOR)


def ancestor_ids(path: str) -> List[str]:
    """Ids of every ancestor encoded in ``path``, root first."""
    return split_path(path)[:-1]


def descendant_prefix(path: str) -> str:
    """Prefix shared by the paths of every strict descendant of ``path``."""
    return f"{path}{PATH_SEPARATOR}"

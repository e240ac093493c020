"""
Tree projections of locations.

``TreeNode`` pairs a stored ``Location`` with its children for responses that
need a nested hierarchy. It is never persisted; the storage model only knows
its parent.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List

from .models import Location


@dataclass
class TreeNode:
    location: Location
    children: List["TreeNode"] = field(default_factory=list)

    def walk(self) -> Iterator["TreeNode"]:
        """Yield this node and every node below it in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


def flatten(forest: Iterable[TreeNode]) -> List[Location]:
    """Pre-order list of the locations in ``forest``."""
    return [node.location for root in forest for node in root.walk()]


def build_forest(
    roots: Iterable[Location],
    fetch_children: Callable[[Location], Iterable[Location]],
) -> List[TreeNode]:
    """
    Attach children to every root by repeatedly calling ``fetch_children``.

    Uses an explicit stack rather than recursion, so depth is bounded only by
    the data. ``fetch_children`` is called exactly once per node.
    """
    forest = [TreeNode(root) for root in roots]
    stack = list(reversed(forest))

    while stack:
        node = stack.pop()
        node.children = [TreeNode(child) for child in fetch_children(node.location)]
        stack.extend(reversed(node.children))

    return forest


def assemble(locations: Iterable[Location]) -> List[TreeNode]:
    """
    Build a forest from locations already loaded in path order.

    Because path order is pre-order, every parent is seen before its
    children. Locations whose parent is not part of ``locations`` become
    roots of the returned forest.
    """
    nodes = {}
    forest: List[TreeNode] = []

    for location in locations:
        node = TreeNode(location)
        nodes[location.pk] = node
        parent = nodes.get(location.parent_id)
        if parent is None:
            forest.append(node)
        else:
            parent.children.append(node)

    return forest

"""
Tests for tree assembly: TreeNode, build_forest, assemble and get_tree.
"""

import uuid

from django.test import SimpleTestCase, TestCase

from locations.exceptions import LocationNotFound
from locations.models import Location
from locations.services import LocationService
from locations.tree import TreeNode, assemble, build_forest, flatten

from .base import LocationTestMixin


class TreeHelpersTest(SimpleTestCase):
    """Test the pure tree helpers on unsaved locations."""

    def make(self, name, parent=None):
        location = Location(name=name, code=name, area=1)
        location.parent_id = parent.pk if parent else None
        return location

    def test_walk_is_preorder(self):
        root = TreeNode(self.make("root"))
        a = TreeNode(self.make("a"))
        b = TreeNode(self.make("b"))
        a.children = [TreeNode(self.make("a1")), TreeNode(self.make("a2"))]
        root.children = [a, b]

        names = [node.location.name for node in root.walk()]
        self.assertEqual(names, ["root", "a", "a1", "a2", "b"])

    def test_build_forest_calls_fetch_once_per_node(self):
        root = self.make("root")
        child = self.make("child", parent=root)
        grandchild = self.make("grandchild", parent=child)
        children = {root.pk: [child], child.pk: [grandchild]}
        calls = []

        def fetch_children(location):
            calls.append(location.name)
            return children.get(location.pk, [])

        forest = build_forest([root], fetch_children)

        self.assertEqual(calls, ["root", "child", "grandchild"])
        self.assertEqual(flatten(forest), [root, child, grandchild])

    def test_build_forest_handles_deep_chains(self):
        """Test that depth is not limited by the interpreter's recursion limit."""
        chain = [self.make("n0")]
        for i in range(1, 3000):
            chain.append(self.make(f"n{i}", parent=chain[-1]))
        next_of = {a.pk: b for a, b in zip(chain, chain[1:])}

        forest = build_forest(
            [chain[0]],
            lambda location: [next_of[location.pk]] if location.pk in next_of else [],
        )

        self.assertEqual(len(flatten(forest)), 3000)

    def test_assemble_from_path_ordered_rows(self):
        root = self.make("root")
        a = self.make("a", parent=root)
        a1 = self.make("a1", parent=a)
        b = self.make("b", parent=root)

        forest = assemble([root, a, a1, b])

        self.assertEqual(len(forest), 1)
        self.assertEqual([node.location for node in forest[0].children], [a, b])
        self.assertEqual(forest[0].children[0].children[0].location, a1)

    def test_assemble_promotes_rows_without_loaded_parent(self):
        outside = self.make("outside")
        orphan = self.make("orphan", parent=outside)
        self.assertEqual([node.location for node in assemble([orphan])], [orphan])


class LocationTreeServiceTest(LocationTestMixin, TestCase):
    """Test LocationService.get_tree and get_subtree."""

    def setUp(self):
        self.root1 = self.make_location("Root 1")
        self.a = self.make_location("A", parent=self.root1)
        self.b = self.make_location("B", parent=self.root1)
        self.a1 = self.make_location("A1", parent=self.a)
        self.root2 = self.make_location("Root 2")
        self.c = self.make_location("C", parent=self.root2)

    def test_get_tree_returns_roots_with_children(self):
        forest = LocationService.get_tree()

        roots = {node.location: node for node in forest}
        self.assertEqual(set(roots), {self.root1, self.root2})
        self.assertEqual(
            {child.location for child in roots[self.root1].children}, {self.a, self.b}
        )
        self.assertEqual(
            [child.location for child in roots[self.root2].children], [self.c]
        )

    def test_get_tree_flattened_matches_list(self):
        """Test that a pre-order flattening of the tree equals list()."""
        self.assertEqual(flatten(LocationService.get_tree()), LocationService.list())

    def test_get_tree_flattened_matches_list_after_move(self):
        LocationService.update(self.a.pk, parent_id=self.c.pk)
        self.assertEqual(flatten(LocationService.get_tree()), LocationService.list())

    def test_get_tree_issues_one_query_per_node(self):
        # roots + one children query per location
        with self.assertNumQueries(1 + Location.objects.count()):
            LocationService.get_tree()

    def test_get_tree_empty(self):
        for level in (2, 1, 0):
            Location.objects.filter(level=level).delete()
        self.assertEqual(LocationService.get_tree(), [])

    def test_get_subtree(self):
        node = LocationService.get_subtree(self.root1.pk)

        self.assertEqual(node.location, self.root1)
        descendants = LocationService.get_descendants(self.root1.pk)
        self.assertEqual(flatten([node]), [self.root1, *descendants])
        a_node = next(child for child in node.children if child.location == self.a)
        self.assertEqual([child.location for child in a_node.children], [self.a1])

    def test_get_subtree_of_leaf(self):
        node = LocationService.get_subtree(self.a1.pk)
        self.assertEqual(node.children, [])

    def test_get_subtree_missing(self):
        with self.assertRaises(LocationNotFound):
            LocationService.get_subtree(uuid.uuid4())

"""
Tests for the scene model, hierarchy mutation and name allocation.
"""

import numpy as np
import pytest

from bonewrap.scene import (
    NodeKind,
    Project,
    UniqueNameAllocator,
    collect_descendant_pivots,
    deepest_first,
    insert_position_of,
    remove_if_empty,
    reparent,
)


@pytest.fixture
def project():
    """
    body
      a
      b
      c
    head
    """
    project = Project()
    body = project.add_pivot("body")
    for name in ("a", "b", "c"):
        project.add_leaf(name, parent=body)
    project.add_leaf("head")
    return project


def _names(project, handles):
    return [project.node(h).name for h in handles]


# ============================================================================
# Model
# ============================================================================


class TestProject:
    """Test the node arena."""

    def test_add_and_walk(self, project):
        assert [n.name for n in project.walk()] == ["body", "a", "b", "c", "head"]
        assert len(project) == 5
        assert _names(project, project.roots) == ["body", "head"]

    def test_kinds(self, project):
        assert [n.name for n in project.all_leaves()] == ["a", "b", "c", "head"]
        assert [n.name for n in project.all_pivots()] == ["body"]
        assert project.find("body").kind is NodeKind.PIVOT
        assert project.find("a").kind is NodeKind.LEAF

    def test_rotation_normalized_on_write(self):
        project = Project()
        leaf = project.node(project.add_leaf("x", rotation=[190, -540, 360]))

        np.testing.assert_allclose(leaf.rotation, [-170, 180, 0])

    def test_bad_components_coerced(self):
        project = Project()
        leaf = project.node(project.add_leaf("x", rotation=["bad", None], origin=None))

        np.testing.assert_array_equal(leaf.rotation, [0, 0, 0])
        np.testing.assert_array_equal(leaf.origin, [0, 0, 0])

    def test_rotation_getter_returns_copy(self, project):
        leaf = project.find("a")
        leaf.rotation[0] = 45.0
        np.testing.assert_array_equal(leaf.rotation, [0, 0, 0])

    def test_cannot_add_under_cube(self, project):
        with pytest.raises(ValueError, match="only groups have children"):
            project.add_leaf("x", parent=project.find("head").handle)

    def test_depth(self, project):
        inner = project.add_pivot("inner", parent=project.find("body").handle)
        leaf = project.add_leaf("deep", parent=inner)

        assert project.depth(project.find("body").handle) == 0
        assert project.depth(inner) == 1
        assert project.depth(leaf) == 2

    def test_delete_requires_empty(self, project):
        with pytest.raises(ValueError, match="still owns 3 node"):
            project.delete(project.find("body").handle)

        head = project.find("head").handle
        project.delete(head)
        assert head not in project
        assert _names(project, project.roots) == ["body"]

    def test_unknown_handle(self, project):
        with pytest.raises(KeyError, match="No node with handle 999"):
            project.node(999)

    def test_copy_is_independent(self, project):
        clone = project.copy()
        project.find("a").rotation = [45, 0, 0]

        np.testing.assert_array_equal(clone.find("a").rotation, [0, 0, 0])

    def test_names(self, project):
        assert project.names() == {"body", "a", "b", "c", "head"}

    def test_siblings_of(self, project):
        assert _names(project, project.siblings_of(project.find("b").handle)) == ["a", "b", "c"]
        assert _names(project, project.siblings_of(project.find("head").handle)) == [
            "body",
            "head",
        ]


# ============================================================================
# Hierarchy
# ============================================================================


class TestHierarchy:
    """Test sibling-order-preserving mutation."""

    def test_insert_position_of(self, project):
        assert insert_position_of(project, project.find("a").handle) == 0
        assert insert_position_of(project, project.find("c").handle) == 2
        assert insert_position_of(project, project.find("head").handle) is None

    def test_reparent_to_root_appends(self, project):
        b = project.find("b").handle
        reparent(project, b, None)

        assert _names(project, project.find("body").children) == ["a", "c"]
        assert _names(project, project.roots) == ["body", "head", "b"]
        assert project.node(b).parent is None

    def test_reparent_at_index(self, project):
        body = project.find("body").handle
        reparent(project, project.find("head").handle, body, 1)

        assert _names(project, project.node(body).children) == ["a", "head", "b", "c"]
        assert project.find("head").parent == body

    def test_reparent_into_cube_rejected(self, project):
        with pytest.raises(ValueError, match="under cube"):
            reparent(project, project.find("a").handle, project.find("head").handle)

    def test_reparent_into_own_subtree_rejected(self, project):
        body = project.find("body").handle
        inner = project.add_pivot("inner", parent=body)

        with pytest.raises(ValueError, match="own subtree"):
            reparent(project, body, inner)
        with pytest.raises(ValueError, match="own subtree"):
            reparent(project, body, body)

    def test_remove_if_empty(self, project):
        body = project.find("body").handle
        assert remove_if_empty(project, body) is False

        empty = project.add_pivot("empty")
        assert remove_if_empty(project, empty) is True
        assert empty not in project

    def test_collect_descendant_pivots(self, project):
        body = project.find("body").handle
        inner = project.add_pivot("inner", parent=body)
        innermost = project.add_pivot("innermost", parent=inner)
        other = project.add_pivot("other")

        collected = collect_descendant_pivots(project, [body, inner, other])

        assert collected == [body, inner, innermost, other]

    def test_deepest_first_is_stable(self, project):
        body = project.find("body").handle
        inner_a = project.add_pivot("inner_a", parent=body)
        inner_b = project.add_pivot("inner_b", parent=body)
        deep = project.add_pivot("deep", parent=inner_a)

        order = deepest_first(project, [body, inner_a, inner_b, deep])

        assert order == [deep, inner_a, inner_b, body]


# ============================================================================
# Names
# ============================================================================


class TestUniqueNameAllocator:
    """Test collision-free name allocation."""

    def test_sequential(self):
        names = UniqueNameAllocator()
        assert [names.allocate("cube_bone") for _ in range(3)] == [
            "cube_bone_1",
            "cube_bone_2",
            "cube_bone_3",
        ]

    def test_skips_existing(self):
        names = UniqueNameAllocator(["cube_bone_1", "cube_bone_3"])
        assert names.allocate("cube_bone") == "cube_bone_2"
        assert names.allocate("cube_bone") == "cube_bone_4"

    def test_reserved_mid_sequence(self):
        names = UniqueNameAllocator()
        first = names.allocate("cube_bone")
        names.reserve("cube_bone_2")
        second = names.allocate("cube_bone")

        assert first == "cube_bone_1"
        assert second == "cube_bone_3"

    def test_counters_are_per_base(self):
        names = UniqueNameAllocator()
        assert names.allocate("a") == "a_1"
        assert names.allocate("b") == "b_1"
        assert names.allocate("a") == "a_2"

    def test_no_collisions_across_bases(self):
        names = UniqueNameAllocator(["a_1_1"])
        allocated = [names.allocate(base) for base in ["a", "a_1", "a", "a_1", "a_1_1"]]

        assert len(set(allocated)) == len(allocated)
        assert "a_1_1" not in allocated
        assert all(name in names for name in allocated)

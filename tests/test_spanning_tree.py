"""Tests for union-find and Kruskal spanning tree selection."""
from __future__ import annotations

import itertools
import math
import random

import pytest

from connector_dungeon.generators.geometry.delaunay import Edge, get_edges, triangulate
from connector_dungeon.generators.geometry.spanning_tree import (
    DisjointSet, edge_length, kruskal, total_weight,
)


def _is_spanning_tree(n, edges):
    if len(edges) != n - 1:
        return False
    forest = DisjointSet(n)
    for edge in edges:
        if not forest.union(edge.a, edge.b):
            return False
    return len({forest.find(i) for i in range(n)}) == 1


def test_unit_square_tree_has_three_unit_sides(unit_square):
    edges = get_edges(triangulate(unit_square))
    tree = kruskal(unit_square, edges)

    assert len(tree) == 3
    assert total_weight(unit_square, tree) == pytest.approx(3.0)
    assert all(edge_length(unit_square, e) == pytest.approx(1.0) for e in tree)
    assert Edge(0, 2) not in tree
    assert Edge(1, 3) not in tree


def test_tree_spans_points_without_cycles():
    rng = random.Random(21)
    points = [(rng.uniform(0, 100), rng.uniform(0, 100)) for _ in range(30)]
    tree = kruskal(points, get_edges(triangulate(points)))
    assert _is_spanning_tree(len(points), tree)


def test_tree_matches_brute_force_minimum():
    rng = random.Random(4)
    points = [(rng.uniform(0, 10), rng.uniform(0, 10)) for _ in range(6)]
    candidates = get_edges(triangulate(points))
    tree = kruskal(points, candidates)

    best = math.inf
    for subset in itertools.combinations(candidates, len(points) - 1):
        if _is_spanning_tree(len(points), subset):
            best = min(best, total_weight(points, subset))

    assert total_weight(points, tree) == pytest.approx(best)


def test_tree_is_in_ascending_weight_order():
    rng = random.Random(9)
    points = [(rng.uniform(0, 10), rng.uniform(0, 10)) for _ in range(12)]
    tree = kruskal(points, get_edges(triangulate(points)))
    weights = [edge_length(points, e) for e in tree]
    assert weights == sorted(weights)


def test_equal_weights_keep_input_order(unit_square):
    edges = [Edge(2, 3), Edge(0, 1), Edge(1, 2), Edge(0, 3)]
    assert kruskal(unit_square, edges) == [Edge(2, 3), Edge(0, 1), Edge(1, 2)]


def test_empty_edges_give_empty_tree(unit_square):
    assert kruskal(unit_square, []) == []


def test_disconnected_candidates_give_forest(unit_square):
    tree = kruskal(unit_square, [Edge(0, 1), Edge(2, 3)])
    assert tree == [Edge(0, 1), Edge(2, 3)]


def test_disjoint_set_union_and_find():
    forest = DisjointSet(5)
    assert forest.union(0, 1)
    assert forest.union(1, 2)
    assert not forest.union(0, 2)
    assert forest.find(0) == forest.find(2)
    assert forest.find(3) != forest.find(0)


def test_disjoint_set_union_attaches_first_root_under_second():
    forest = DisjointSet(2)
    forest.union(0, 1)
    assert forest.parent[0] == 1
    assert forest.find(0) == 1


def test_disjoint_set_compresses_paths():
    forest = DisjointSet(4)
    forest.parent = [1, 2, 3, 3]   # Chain 0 -> 1 -> 2 -> 3
    assert forest.find(0) == 3
    assert forest.parent == [3, 3, 3, 3]

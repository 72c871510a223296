"""Tests for room-graph planning."""
from __future__ import annotations

import math
import random

import pytest

from connector_dungeon.generators.layout.room_graph import plan_room_graph, scatter_room_points
from connector_dungeon.generators.geometry.delaunay import Edge
from connector_dungeon.generators.geometry.spanning_tree import edge_length


def test_unit_square_plan(unit_square):
    graph = plan_room_graph(unit_square)
    assert len(graph.triangles) == 2
    assert len(graph.candidate_edges) == 5
    assert len(graph.tree_edges) == 3
    assert graph.total_weight == pytest.approx(3.0)

    assert len(graph.extra_edges) == 2
    assert Edge(0, 2) in graph.extra_edges
    lengths = sorted(edge_length(unit_square, e) for e in graph.extra_edges)
    assert lengths == pytest.approx([1.0, math.sqrt(2.0)])


def test_too_few_points_give_empty_plan():
    graph = plan_room_graph([(0.0, 0.0), (5.0, 5.0)])
    assert graph.triangles == []
    assert graph.tree_edges == []
    assert graph.total_weight == 0.0


def test_scatter_stays_inside_area_and_is_seeded():
    points = scatter_room_points(50, 40.0, 20.0, random.Random(6))
    assert len(points) == 50
    assert all(-20.0 <= x <= 20.0 and -10.0 <= y <= 10.0 for x, y in points)
    assert points == scatter_room_points(50, 40.0, 20.0, random.Random(6))


def test_plan_spans_scattered_points():
    points = scatter_room_points(20, 40.0, 40.0, random.Random(10))
    graph = plan_room_graph(points)
    assert len(graph.tree_edges) == len(points) - 1
    assert set(graph.tree_edges) <= set(graph.candidate_edges)

    data = graph.to_dict()
    assert len(data["points"]) == 20
    assert data["total_weight"] == pytest.approx(graph.total_weight)

"""
Room-graph planning: scatter room centres, triangulate, keep a spanning tree.

The Delaunay edges are the candidate connections between rooms; the
minimum spanning tree is the cheapest subset that still reaches every
room. Callers typically add a few non-tree Delaunay edges back as loops.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from ..geometry.delaunay import Edge, Point2, Triangle, get_edges, triangulate
from ..geometry.spanning_tree import kruskal, total_weight

logger = logging.getLogger(__name__)


@dataclass
class RoomGraph:
    """Result of planning a room graph over a point set."""
    points: List[Point2]
    triangles: List[Triangle] = field(default_factory=list)
    candidate_edges: List[Edge] = field(default_factory=list)
    tree_edges: List[Edge] = field(default_factory=list)
    total_weight: float = 0.0

    @property
    def extra_edges(self) -> List[Edge]:
        """Delaunay edges left out of the spanning tree."""
        tree = set(self.tree_edges)
        return [e for e in self.candidate_edges if e not in tree]

    def to_dict(self) -> dict:
        return {
            'points': [[float(x), float(y)] for x, y in self.points],
            'triangles': [list(t) for t in self.triangles],
            'candidate_edges': [list(e) for e in self.candidate_edges],
            'tree_edges': [list(e) for e in self.tree_edges],
            'total_weight': self.total_weight,
        }


def scatter_room_points(count: int, width: float, depth: float,
                        rng: Optional[random.Random] = None) -> List[Point2]:
    """Uniformly scatter ``count`` points in a width x depth area centred on the origin."""
    rng = rng or random.Random()
    half_w, half_d = width / 2.0, depth / 2.0
    return [(rng.uniform(-half_w, half_w), rng.uniform(-half_d, half_d)) for _ in range(count)]


def plan_room_graph(points: List[Point2]) -> RoomGraph:
    """
    Triangulate points and select the minimum spanning tree of the result.

    Args:
        points: Room centres

    Returns:
        RoomGraph; empty triangles/edges when fewer than 3 points
    """
    triangles = triangulate(points)
    candidates = get_edges(triangles)
    tree = kruskal(points, candidates)
    graph = RoomGraph(
        points=list(points),
        triangles=triangles,
        candidate_edges=candidates,
        tree_edges=tree,
        total_weight=total_weight(points, tree),
    )
    logger.info(
        "Room graph: %d points, %d triangles, %d candidate edges, %d tree edges (weight %.3f)",
        len(points), len(triangles), len(candidates), len(tree), graph.total_weight,
    )
    return graph

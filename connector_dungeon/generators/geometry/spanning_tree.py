"""
Kruskal minimum spanning tree over Delaunay (or any candidate) edges.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from .delaunay import Edge, Point2

logger = logging.getLogger(__name__)


class DisjointSet:
    """Union-find over integer indices with path compression."""

    def __init__(self, size: int):
        self.parent = list(range(size))

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        # Compress the path walked above
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, x: int, y: int) -> bool:
        """Attach root(x) under root(y). Returns False if already joined."""
        root_x, root_y = self.find(x), self.find(y)
        if root_x == root_y:
            return False
        self.parent[root_x] = root_y
        return True


def edge_length(points: Sequence[Point2], edge: Edge) -> float:
    """Euclidean distance between the two endpoints of an edge."""
    pa = np.asarray(points[edge.a], dtype=float)
    pb = np.asarray(points[edge.b], dtype=float)
    return float(np.linalg.norm(pa - pb))


def total_weight(points: Sequence[Point2], edges: Sequence[Edge]) -> float:
    """Sum of edge lengths."""
    return sum(edge_length(points, e) for e in edges)


def kruskal(points: Sequence[Point2], edges: Sequence[Edge]) -> List[Edge]:
    """
    Select a minimum-weight spanning forest from candidate edges.

    Edges are sorted ascending by length with a stable sort, so equal
    lengths keep their input order. An edge whose endpoints are already
    connected is discarded.

    Args:
        points: Point sequence the edge indices refer to
        edges: Candidate edges (typically from get_edges())

    Returns:
        Subset of ``edges`` forming the spanning tree/forest, in
        ascending weight order
    """
    if not edges:
        return []

    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    ends = np.array([(e.a, e.b) for e in edges], dtype=np.int64)
    weights = np.linalg.norm(pts[ends[:, 0]] - pts[ends[:, 1]], axis=1)
    order = np.argsort(weights, kind='stable')

    forest = DisjointSet(len(pts))
    tree: List[Edge] = []
    for idx in order:
        edge = edges[int(idx)]
        if forest.union(edge.a, edge.b):
            tree.append(edge)

    logger.debug("Spanning tree kept %d of %d candidate edges", len(tree), len(edges))
    return tree

"""
Bowyer-Watson Delaunay triangulation for 2D point sets.

Triangles and edges reference points by index into the caller's point
sequence, so indices stay valid for the lifetime of one triangulation run.

Notes on degenerate input:
- Fewer than 3 points produce an empty result (not an error).
- Collinear or coincident points silently produce degenerate or fewer
  triangles. No tolerance is applied to the in-circle test.
"""

from __future__ import annotations

import logging
from typing import Dict, List, NamedTuple, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

Point2 = Tuple[float, float]

# Super-triangle legs extend this many times the larger bounding box
# dimension beyond the box.
SUPER_TRIANGLE_SCALE = 10.0


class Edge(NamedTuple):
    """Unordered pair of point indices, stored with a < b."""
    a: int
    b: int

    @classmethod
    def of(cls, a: int, b: int) -> 'Edge':
        """Build a normalized edge from two indices in any order."""
        return cls(a, b) if a < b else cls(b, a)


class Triangle(NamedTuple):
    """Ordered triple of point indices.

    Triangles built by triangulate() are counter-clockwise.
    """
    a: int
    b: int
    c: int

    def edges(self) -> Tuple[Edge, Edge, Edge]:
        return Edge.of(self.a, self.b), Edge.of(self.b, self.c), Edge.of(self.c, self.a)

    def has_vertex(self, index: int) -> bool:
        return index == self.a or index == self.b or index == self.c


def in_circle(a: Sequence[float], b: Sequence[float], c: Sequence[float],
              p: Sequence[float]) -> bool:
    """Strict in-circle test.

    Translates a, b, c relative to p and evaluates the 3x3 determinant of
    (|v|^2, vx, vy) rows. Positive means p lies strictly inside the
    circumcircle when a, b, c are counter-clockwise; the sign flips for
    clockwise input, so callers must keep a consistent winding.
    """
    ax, ay = a[0] - p[0], a[1] - p[1]
    bx, by = b[0] - p[0], b[1] - p[1]
    cx, cy = c[0] - p[0], c[1] - p[1]
    det = ((ax * ax + ay * ay) * (bx * cy - cx * by)
           - (bx * bx + by * by) * (ax * cy - cx * ay)
           + (cx * cx + cy * cy) * (ax * by - bx * ay))
    return det > 0.0


def super_triangle(points: np.ndarray) -> np.ndarray:
    """Return the 3 corners of a counter-clockwise triangle enclosing points.

    The box size is floored at 1 unit so coincident input still gets a
    triangle with positive area.
    """
    min_x, min_y = points.min(axis=0)
    max_x, max_y = points.max(axis=0)
    delta = max(max_x - min_x, max_y - min_y, 1.0) * SUPER_TRIANGLE_SCALE
    return np.array([
        [min_x - 1.0, min_y - 1.0],
        [max_x + delta, min_y - 1.0],
        [min_x - 1.0, max_y + delta],
    ], dtype=float)


def triangulate(points: Sequence[Point2]) -> List[Triangle]:
    """
    Compute a Delaunay triangulation with the Bowyer-Watson algorithm.

    Args:
        points: Ordered sequence of (x, y) coordinates

    Returns:
        List of triangles referencing indices into ``points``. Empty when
        fewer than 3 points are given.
    """
    if len(points) < 3:
        return []

    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    count = len(pts)

    # Super-triangle corners are appended so input indices are preserved
    working = np.vstack([pts, super_triangle(pts)])
    coords = working.tolist()

    # Index-stable arena: triangles are never physically removed, only
    # marked dead, so handles collected during a pass stay valid.
    triangles: List[Triangle] = [Triangle(count, count + 1, count + 2)]
    alive: List[bool] = [True]

    for i in range(count):
        p = coords[i]
        bad = [
            handle for handle, tri in enumerate(triangles)
            if alive[handle] and in_circle(coords[tri.a], coords[tri.b], coords[tri.c], p)
        ]

        # Directed boundary edges keep their triangle's winding; an edge
        # shared by two bad triangles is interior to the hole.
        edge_uses: Dict[Edge, int] = {}
        directed: List[Tuple[int, int]] = []
        for handle in bad:
            tri = triangles[handle]
            for u, v in ((tri.a, tri.b), (tri.b, tri.c), (tri.c, tri.a)):
                key = Edge.of(u, v)
                edge_uses[key] = edge_uses.get(key, 0) + 1
                directed.append((u, v))

        for handle in bad:
            alive[handle] = False

        for u, v in directed:
            if edge_uses[Edge.of(u, v)] == 1:
                triangles.append(Triangle(u, v, i))
                alive.append(True)

    result = [
        tri for handle, tri in enumerate(triangles)
        if alive[handle] and tri.a < count and tri.b < count and tri.c < count
    ]
    logger.debug("Triangulated %d points into %d triangles", count, len(result))
    return result


def get_edges(triangles: Sequence[Triangle]) -> List[Edge]:
    """
    Collect the unique undirected edges of a triangle set.

    Edges are returned in first-seen order, which keeps tie-breaking in
    the spanning tree builder deterministic.
    """
    seen: Dict[Edge, None] = {}
    for tri in triangles:
        for edge in tri.edges():
            seen.setdefault(edge, None)
    return list(seen)

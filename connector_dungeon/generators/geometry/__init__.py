"""
Geometry Module

Delaunay triangulation and minimum spanning tree over 2D point sets.
"""

from .delaunay import (
    Edge,
    Triangle,
    Point2,
    triangulate,
    get_edges,
    in_circle,
    super_triangle,
)
from .spanning_tree import (
    DisjointSet,
    kruskal,
    edge_length,
    total_weight,
)

__all__ = [
    'Edge',
    'Triangle',
    'Point2',
    'triangulate',
    'get_edges',
    'in_circle',
    'super_triangle',
    'DisjointSet',
    'kruskal',
    'edge_length',
    'total_weight',
]

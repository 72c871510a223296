"""
Connector Dungeon

Procedural dungeon generation from connector-based room and corridor
structures, with Delaunay/spanning-tree room-graph planning.
"""

__version__ = '1.0.0'

"""
Layout Module for Connector-Based Dungeon Generation

This module provides the dungeon layout data structures, the connector
walk that fills them, and room-graph planning over scattered points.
"""

from .layout_types import (
    ConnectorJoin,
    DungeonLayout,
)
from .connector_walk import (
    ConnectorFrontier,
    FrontierEntry,
    StagedPlacement,
    WalkStats,
    WalkResult,
    generate_connector_dungeon,
)
from .room_graph import (
    RoomGraph,
    scatter_room_points,
    plan_room_graph,
)

__all__ = [
    'ConnectorJoin',
    'DungeonLayout',
    'ConnectorFrontier',
    'FrontierEntry',
    'StagedPlacement',
    'WalkStats',
    'WalkResult',
    'generate_connector_dungeon',
    'RoomGraph',
    'scatter_room_points',
    'plan_room_graph',
]

__version__ = '1.0.0'

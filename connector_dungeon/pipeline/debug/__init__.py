"""Debug utilities for the generation pipeline."""

from .graph_export import (
    export_layout_dot,
    export_layout_json,
    export_room_graph_dot,
    export_room_graph_json,
)

__all__ = [
    'export_layout_dot',
    'export_layout_json',
    'export_room_graph_dot',
    'export_room_graph_json',
]

"""
Graph export utilities for layout debugging.

Provides export functions to visualize dungeon layouts in:
- DOT format (Graphviz) for visual graph inspection
- JSON format for programmatic analysis and reproducibility tracking
"""

from typing import Any, Dict
import json

GENERATOR_NAME = 'connector-dungeon'
EXPORT_VERSION = '1.0'

# Fill colours by structure kind
KIND_COLORS = {
    'room': '#87CEEB',       # Sky blue
    'corridor': '#D3D3D3',   # Light gray
}
START_COLOR = '#90EE90'      # Light green


def _position_label(position) -> str:
    return f"({float(position[0]):g}, {float(position[1]):g})"


def export_layout_dot(layout) -> str:
    """Export a DungeonLayout as Graphviz DOT format.

    Nodes are structures, edges are connector joins labelled
    ``base_connector -> new_connector``.

    Args:
        layout: DungeonLayout to export

    Returns:
        DOT format string for visualization with Graphviz or online viewers
    """
    lines = ['graph DungeonLayout {']
    lines.append('  rankdir=LR;')
    lines.append('  node [shape=box, style=filled];')
    lines.append('')

    for structure in layout.structures:
        kind = structure.kind.value
        label = '\\n'.join([
            structure.template.name,
            f"id: {structure.id}",
            f"pos: {_position_label(structure.position)}",
        ])
        color = START_COLOR if structure.id == 0 else KIND_COLORS.get(kind, '#D3D3D3')
        shape = 'box' if kind == 'room' else 'ellipse'
        lines.append(
            f'  s_{structure.id} [label="{label}" fillcolor="{color}" shape={shape}];'
        )

    lines.append('')

    for join in layout.joins:
        lines.append(
            f'  s_{join.base_structure_id} -- s_{join.new_structure_id} '
            f'[label="{join.base_connector} -> {join.new_connector}"];'
        )

    lines.append('}')
    return '\n'.join(lines)


def export_layout_json(result) -> str:
    """Export a WalkResult as JSON with metadata.

    Args:
        result: WalkResult returned by generate_connector_dungeon()

    Returns:
        JSON string with layout and debug metadata
    """
    layout = result.layout
    template_counts: Dict[str, int] = {}
    for structure in layout.structures:
        name = structure.template.name
        template_counts[name] = template_counts.get(name, 0) + 1

    output: Dict[str, Any] = {
        'metadata': {
            'seed': result.seed,
            'version': EXPORT_VERSION,
            'generator': GENERATOR_NAME,
        },
        'statistics': {
            'room_count': layout.room_count,
            'corridor_count': layout.corridor_count,
            'join_count': len(layout.joins),
            'target_room_count': result.target_room_count,
            'reached_target': result.reached_target,
            'templates': template_counts,
            'walk': result.stats.to_dict(),
        },
        'warnings': list(result.warnings),
        'layout': layout.to_dict(),
    }
    return json.dumps(output, indent=2)


def export_room_graph_dot(graph) -> str:
    """Export a RoomGraph as Graphviz DOT format.

    Spanning tree edges are drawn solid; the remaining Delaunay edges are
    dashed. Nodes are pinned to their coordinates for ``neato -n``.
    """
    lines = ['graph RoomGraph {']
    lines.append('  node [shape=circle, style=filled, fillcolor="#87CEEB"];')
    lines.append('')

    for index, (x, y) in enumerate(graph.points):
        lines.append(f'  p_{index} [label="{index}" pos="{float(x):g},{float(y):g}!"];')

    lines.append('')

    for edge in graph.tree_edges:
        lines.append(f'  p_{edge.a} -- p_{edge.b} [style=solid, penwidth=2];')
    for edge in graph.extra_edges:
        lines.append(f'  p_{edge.a} -- p_{edge.b} [style=dashed, color=gray];')

    lines.append('}')
    return '\n'.join(lines)


def export_room_graph_json(graph, seed=None) -> str:
    """Export a RoomGraph as JSON with metadata."""
    output = {
        'metadata': {
            'seed': seed,
            'version': EXPORT_VERSION,
            'generator': GENERATOR_NAME,
        },
        'statistics': {
            'point_count': len(graph.points),
            'triangle_count': len(graph.triangles),
            'candidate_edge_count': len(graph.candidate_edges),
            'tree_edge_count': len(graph.tree_edges),
            'total_weight': graph.total_weight,
        },
        'graph': graph.to_dict(),
    }
    return json.dumps(output, indent=2)

"""
Layout types for connector-based dungeon generation.

A DungeonLayout is the output consumed by rendering and physics
collaborators: the placed structures (type + world transform) and the
connector-join graph recording which connectors were paired.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ..primitives.portal_system import StructureInstance, StructureKind


@dataclass(frozen=True)
class ConnectorJoin:
    """Link between a frontier connector and the connector that consumed it."""
    base_structure_id: int
    base_connector: str
    new_structure_id: int
    new_connector: str

    @property
    def structure_pair(self) -> Tuple[int, int]:
        return (self.base_structure_id, self.new_structure_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'base_structure_id': self.base_structure_id,
            'base_connector': self.base_connector,
            'new_structure_id': self.new_structure_id,
            'new_connector': self.new_connector,
        }


@dataclass
class DungeonLayout:
    """
    Placed structures plus the joins between them.

    Structure ids are assigned on commit and equal the structure's index
    in ``structures``.
    """
    structures: List[StructureInstance] = field(default_factory=list)
    joins: List[ConnectorJoin] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_structure(self, instance: StructureInstance) -> int:
        """Commit an instance and assign its id."""
        if instance.id is not None:
            raise ValueError(f"Structure already committed with id {instance.id}")
        instance.id = len(self.structures)
        self.structures.append(instance)
        return instance.id

    def add_join(self, join: ConnectorJoin) -> None:
        self.joins.append(join)

    def get_structure(self, structure_id: int) -> StructureInstance:
        if not 0 <= structure_id < len(self.structures):
            raise KeyError(f"No structure with id {structure_id}")
        return self.structures[structure_id]

    def rooms(self) -> List[StructureInstance]:
        return [s for s in self.structures if s.kind is StructureKind.ROOM]

    def corridors(self) -> List[StructureInstance]:
        return [s for s in self.structures if s.kind is StructureKind.CORRIDOR]

    @property
    def room_count(self) -> int:
        return len(self.rooms())

    @property
    def corridor_count(self) -> int:
        return len(self.corridors())

    def join_graph(self) -> List[Tuple[int, int]]:
        """Structure id pairs, one per join, in commit order."""
        return [join.structure_pair for join in self.joins]

    def neighbors(self, structure_id: int) -> List[int]:
        """Ids of structures joined to the given one."""
        result = []
        for a, b in self.join_graph():
            if a == structure_id:
                result.append(b)
            elif b == structure_id:
                result.append(a)
        return result

    def clear(self) -> None:
        """Drop all placed structures and joins."""
        self.structures.clear()
        self.joins.clear()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'structures': [
                {
                    'id': s.id,
                    'template': s.template.name,
                    'kind': s.kind.value,
                    'transform': s.transform.to_dict(),
                }
                for s in self.structures
            ],
            'joins': [join.to_dict() for join in self.joins],
            'metadata': dict(self.metadata),
        }

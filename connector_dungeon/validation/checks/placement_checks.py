"""
Placement validation checks.

Candidate rooms (checked before commit):
- Minimum distance to already-placed rooms (PLACE-001)
- Area bounds on the XY plane (PLACE-002)

Finished layouts (audit of the join graph):
- Joins reference committed structures (PLACE-101)
- Joined connectors have opposite polarity (PLACE-102)
- Joined connectors coincide in world space (PLACE-103)
- Entry connectors are consumed once and never reused as a base (PLACE-104)

Corridors are never checked against distance or bounds.
"""

from collections import Counter
from typing import List, Sequence, Tuple

import numpy as np

from ..core import ValidationIssue, ValidationResult, ValidationStage
from ..rules import PLACE_001, PLACE_002, PLACE_101, PLACE_102, PLACE_103, PLACE_104
from ...generators.primitives.portal_system import StructureInstance, can_join


def _fmt(position: Sequence[float]) -> str:
    return "(" + ", ".join(f"{float(v):g}" for v in position) + ")"


def check_room_spacing(
    position: Sequence[float],
    placed_rooms: Sequence[StructureInstance],
    min_distance: float,
) -> List[ValidationIssue]:
    """Check a candidate room origin against every placed room origin.

    Only the first offending room (in placement order) is reported.

    Args:
        position: Candidate world position
        placed_rooms: Rooms already committed (corridors excluded)
        min_distance: Minimum allowed distance; equal distance passes

    Returns:
        List with at most one PLACE-001 issue
    """
    candidate = np.asarray(position, dtype=float)
    for room in placed_rooms:
        distance = float(np.linalg.norm(room.position - candidate))
        if distance < min_distance:
            return [PLACE_001.issue(
                structure=str(room.id),
                position=_fmt(candidate),
                distance=distance,
                other=room.id,
                minimum=min_distance,
            )]
    return []


def check_area_bounds(
    position: Sequence[float],
    area_width: float,
    area_depth: float,
) -> List[ValidationIssue]:
    """Check a candidate origin lies within half the area extents.

    The area is centred on the origin; X is checked against the width and
    Y against the depth. Being exactly on the boundary passes.
    """
    x, y = float(position[0]), float(position[1])
    if abs(x) > area_width / 2.0 or abs(y) > area_depth / 2.0:
        return [PLACE_002.issue(position=_fmt(position), width=area_width, depth=area_depth)]
    return []


def validate_room_placement(
    position: Sequence[float],
    placed_rooms: Sequence[StructureInstance],
    min_distance: float,
    area_width: float,
    area_depth: float,
) -> ValidationResult:
    """Run all candidate-room checks.

    Returns:
        ValidationResult; the candidate may be committed only if it passed
    """
    result = ValidationResult(stage=ValidationStage.PLACEMENT)
    for issue in check_room_spacing(position, placed_rooms, min_distance):
        result.add_issue(issue)
    for issue in check_area_bounds(position, area_width, area_depth):
        result.add_issue(issue)
    return result


def validate_layout(layout) -> ValidationResult:
    """Audit the join graph of a finished DungeonLayout.

    Args:
        layout: DungeonLayout to check

    Returns:
        ValidationResult with PLACE-1xx issues
    """
    result = ValidationResult(stage=ValidationStage.LAYOUT)
    entries: Counter = Counter()
    bases = set()

    for join in layout.joins:
        ends: List[Tuple[int, str]] = [
            (join.base_structure_id, join.base_connector),
            (join.new_structure_id, join.new_connector),
        ]
        entries[ends[1]] += 1
        bases.add(ends[0])
        poses = []
        for structure_id, connector in ends:
            try:
                structure = layout.get_structure(structure_id)
                poses.append(structure.connector_pose(connector))
            except KeyError:
                result.add_issue(PLACE_101.issue(
                    structure=str(structure_id), connector=connector,
                    structure_id=structure_id,
                ))
        if len(poses) != 2:
            continue

        base, new = poses
        if not can_join(base.polarity, new.polarity):
            result.add_issue(PLACE_102.issue(
                structure=str(join.new_structure_id), connector=join.new_connector,
                polarity=new.polarity.value,
            ))
        if not base.coincides(new):
            offset = float(np.linalg.norm(base.position - new.position))
            result.add_issue(PLACE_103.issue(
                structure=str(join.new_structure_id), connector=join.new_connector,
                offset=offset, structure_id=join.new_structure_id,
            ))

    for (structure_id, connector), count in entries.items():
        if count > 1 or (structure_id, connector) in bases:
            result.add_issue(PLACE_104.issue(
                structure=str(structure_id), connector=connector, count=count,
            ))
    return result

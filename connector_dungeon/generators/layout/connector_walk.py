"""
Connector walk: grows a dungeon by attaching structures to open connectors.

Starting from one room at the origin, the walk repeatedly picks an open
connector from the frontier, consumes it, and tries 1..max_branch
branches on it. Each branch stages a room or a corridor, aligns one of its
compatible connectors onto the base connector and, for rooms only,
validates distance and bounds before committing.

Behaviour worth knowing:
- A base connector is consumed before its branches are tried and is
  never retried, so a walk can stall below the target room count
- Corridors keep adding open connectors even when every room candidate
  is rejected, so the walk is also capped at max_iterations
- Corridors are committed without distance/bounds checks
- Several branches on the same base connector attach to the same doorway

Randomness comes from a single random.Random handle. Draw order per
iteration: base connector, branch count, then per branch the room/corridor
coin flip, the corridor index (corridor branches only) and the connector
on the candidate.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .layout_types import ConnectorJoin, DungeonLayout
from ..primitives.catalog import DEFAULT_CATALOG, StructureCatalog
from ..primitives.portal_system import (
    ConnectorPose, Polarity, StructureInstance, StructureTemplate,
)
from ...pipeline.settings import GeneratorSettings
from ...validation.core import ValidationResult
from ...validation.rules import PLACE_001
from ...validation.checks.placement_checks import validate_room_placement

logger = logging.getLogger(__name__)

MAX_SEED = 2**31 - 1


# =============================================================================
# FRONTIER
# =============================================================================

@dataclass
class FrontierEntry:
    """An attachment point on a committed structure."""
    structure_id: int
    connector: str
    polarity: Polarity
    used: bool = False


class ConnectorFrontier:
    """Open connectors across all committed structures.

    Entries are never removed; taking one flips its ``used`` flag. Open
    entries are kept as arena indices in insertion order so a draw can
    index them directly.
    """

    def __init__(self):
        self._entries: List[FrontierEntry] = []
        self._open: List[int] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def open_count(self) -> int:
        return len(self._open)

    def add_structure(self, structure: StructureInstance, exclude: Optional[str] = None) -> int:
        """Add every connector of a committed structure except ``exclude``.

        Returns:
            Number of entries added
        """
        if structure.id is None:
            raise ValueError("Only committed structures can join the frontier")
        added = 0
        for spec in structure.template.connectors:
            if spec.name == exclude:
                continue
            self._open.append(len(self._entries))
            self._entries.append(FrontierEntry(structure.id, spec.name, spec.polarity))
            added += 1
        return added

    def take(self, position: int) -> FrontierEntry:
        """Consume the ``position``-th open entry (insertion order)."""
        entry = self._entries[self._open.pop(position)]
        entry.used = True
        return entry


# =============================================================================
# STAGING
# =============================================================================

@dataclass
class StagedPlacement:
    """A candidate structure that is not yet part of the layout.

    Dropping a StagedPlacement is the rollback: nothing about it is
    visible in the layout or frontier until commit().
    """
    instance: StructureInstance
    entry_connector: str
    validation: Optional[ValidationResult] = None

    def commit(self, layout: DungeonLayout, frontier: ConnectorFrontier,
               base: FrontierEntry) -> int:
        """Move the candidate into the layout and open its other connectors."""
        structure_id = layout.add_structure(self.instance)
        layout.add_join(ConnectorJoin(
            base_structure_id=base.structure_id,
            base_connector=base.connector,
            new_structure_id=structure_id,
            new_connector=self.entry_connector,
        ))
        frontier.add_structure(self.instance, exclude=self.entry_connector)
        return structure_id


def stage_candidate(
    template: StructureTemplate,
    base: FrontierEntry,
    base_pose: ConnectorPose,
    rng: random.Random,
) -> Optional[StagedPlacement]:
    """Stage ``template`` against a base connector.

    Returns:
        Aligned StagedPlacement, or None if the template has no connector
        of the opposite polarity (no random draw is made in that case)
    """
    compatible = template.connectors_with(base.polarity.opposite())
    if not compatible:
        return None
    spec = compatible[rng.randrange(len(compatible))]
    instance = StructureInstance(template)
    instance.align_connector(spec.name, base_pose)
    return StagedPlacement(instance=instance, entry_connector=spec.name)


# =============================================================================
# RESULT
# =============================================================================

@dataclass
class WalkStats:
    iterations: int = 0
    rooms_placed: int = 0        # Start room included
    corridors_placed: int = 0
    rejected_distance: int = 0
    rejected_bounds: int = 0
    incompatible: int = 0        # Branches skipped for lack of a compatible connector
    base_connectors_consumed: int = 0

    def to_dict(self) -> dict:
        return {
            'iterations': self.iterations,
            'rooms_placed': self.rooms_placed,
            'corridors_placed': self.corridors_placed,
            'rejected_distance': self.rejected_distance,
            'rejected_bounds': self.rejected_bounds,
            'incompatible': self.incompatible,
            'base_connectors_consumed': self.base_connectors_consumed,
        }


@dataclass
class WalkResult:
    layout: DungeonLayout
    seed: Optional[int]
    target_room_count: int
    stats: WalkStats = field(default_factory=WalkStats)
    warnings: List[str] = field(default_factory=list)

    @property
    def room_count(self) -> int:
        return self.stats.rooms_placed

    @property
    def reached_target(self) -> bool:
        return self.stats.rooms_placed >= self.target_room_count


# =============================================================================
# WALK
# =============================================================================

def generate_connector_dungeon(
    catalog: Optional[StructureCatalog] = None,
    settings: Optional[GeneratorSettings] = None,
    rng: Optional[random.Random] = None,
) -> WalkResult:
    """
    Generate a dungeon by walking open connectors.

    Args:
        catalog: Room and corridor templates (default: built-in catalog)
        settings: Generator settings (default: GeneratorSettings())
        rng: Random handle to draw from. When omitted one is created from
            ``settings.seed``, or from a fresh seed if that is None.

    Returns:
        WalkResult with the layout, the seed used and placement statistics

    Raises:
        SettingsError: If settings are out of range
        CatalogError: If the catalog lacks a room template, or lacks corridor
            templates when more than one room is requested
    """
    if catalog is None:
        catalog = DEFAULT_CATALOG
    if settings is None:
        settings = GeneratorSettings()
    settings.validate()
    target = settings.room_count
    if target > 1:
        catalog.require_complete()

    seed = settings.seed
    if rng is None:
        if seed is None:
            seed = random.SystemRandom().randint(0, MAX_SEED)
        rng = random.Random(seed)

    room_template = catalog.room_template
    corridors = catalog.corridor_templates

    layout = DungeonLayout(metadata={'seed': seed, 'target_room_count': target})
    frontier = ConnectorFrontier()
    result = WalkResult(layout=layout, seed=seed, target_room_count=target)
    stats = result.stats

    start = StructureInstance(room_template)
    layout.add_structure(start)
    placed_rooms = [start]
    frontier.add_structure(start)
    stats.rooms_placed = 1
    logger.debug("Start room '%s' placed with %d connectors", room_template.name, len(frontier))

    while stats.rooms_placed < target and frontier.open_count:
        if stats.iterations >= settings.max_iterations:
            break
        stats.iterations += 1

        base = frontier.take(rng.randrange(frontier.open_count))
        stats.base_connectors_consumed += 1
        base_pose = layout.get_structure(base.structure_id).connector_pose(base.connector)
        branch_count = 1 + rng.randrange(settings.max_branch)
        logger.debug(
            "Iteration %d: base %s/%s (%s), %d open, %d branch(es)",
            stats.iterations, base.structure_id, base.connector, base.polarity.value,
            frontier.open_count, branch_count,
        )

        for _ in range(branch_count):
            if stats.rooms_placed >= target:
                break

            place_room = rng.random() < settings.room_probability
            if place_room:
                template = room_template
            else:
                template = corridors[rng.randrange(len(corridors))]

            staged = stage_candidate(template, base, base_pose, rng)
            if staged is None:
                stats.incompatible += 1
                logger.debug("  %s has no %s connector, branch skipped",
                             template.name, base.polarity.opposite().value)
                continue

            if place_room:
                staged.validation = validate_room_placement(
                    staged.instance.position,
                    placed_rooms,
                    settings.min_room_distance,
                    settings.area_width,
                    settings.area_depth,
                )
                if staged.validation.failed:
                    if PLACE_001.code in staged.validation.codes:
                        stats.rejected_distance += 1
                    else:
                        stats.rejected_bounds += 1
                    logger.debug("  Rejected %s: %s", template.name,
                                 staged.validation.errors[0].message)
                    continue

            structure_id = staged.commit(layout, frontier, base)
            if place_room:
                placed_rooms.append(staged.instance)
                stats.rooms_placed += 1
            else:
                stats.corridors_placed += 1
            logger.debug("  Placed %s #%d via %s", template.name, structure_id,
                         staged.entry_connector)

    if not result.reached_target:
        reason = "Frontier exhausted" if not frontier.open_count else "Iteration limit reached"
        message = f"{reason} with {stats.rooms_placed} of {target} rooms placed"
        result.warnings.append(message)
        logger.warning(message)

    logger.info(
        "Connector walk finished: %d rooms, %d corridors, %d iterations (seed=%s)",
        stats.rooms_placed, stats.corridors_placed, stats.iterations, seed,
    )
    return result

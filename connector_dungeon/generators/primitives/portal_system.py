"""
Connector system for structure placement.

Structures (rooms and corridors) are rigid bodies that expose connectors:
attachment points with a local pose and a polarity. Two connectors may
join only when their polarities are opposite. There is no other
compatibility rule.

Authoring convention:
- +Z is up; the area bounds are measured on the XY plane
- A connector's forward vector points along the direction of travel from
  the male side into the female side, so male connectors face out of their
  structure and female connectors face into it
- Alignment matches the moving connector's forward/up basis to the fixed
  connector's basis, which puts joined structures on opposite sides of
  the shared doorway
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Sequence, Tuple

import numpy as np

Vec3 = Tuple[float, float, float]

EPSILON = 1e-9

WORLD_UP: Vec3 = (0.0, 0.0, 1.0)


# ==============================================================================
# ENUMS
# ==============================================================================

class Polarity(Enum):
    """Connector polarity. Only opposite polarities may join."""
    MALE = "male"
    FEMALE = "female"

    def opposite(self) -> 'Polarity':
        """Return the opposite polarity."""
        return Polarity.FEMALE if self is Polarity.MALE else Polarity.MALE

    @classmethod
    def from_label(cls, label: str) -> 'Polarity':
        """Parse a catalog label ("Male", "female", ...).

        Only used when authoring or loading catalogs; runtime code reads
        the polarity field directly.
        """
        try:
            return cls(label.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown connector polarity: {label!r}") from None


class StructureKind(Enum):
    """What a structure counts as during placement."""
    ROOM = "room"
    CORRIDOR = "corridor"


def can_join(a: Polarity, b: Polarity) -> bool:
    """Join compatibility rule: polarities must be opposite."""
    return a.opposite() is b


# ==============================================================================
# BASIS / TRANSFORM MATH
# ==============================================================================

def _unit(v: np.ndarray) -> np.ndarray:
    length = np.linalg.norm(v)
    if length < EPSILON:
        return v
    return v / length


def look_rotation(forward: Sequence[float], up: Sequence[float]) -> np.ndarray:
    """Build an orthonormal rotation whose columns are (right, up, forward).

    Args:
        forward: Facing direction (need not be normalized)
        up: Approximate up direction, must not be parallel to forward

    Returns:
        3x3 rotation matrix

    Raises:
        ValueError: If forward is zero or parallel to up
    """
    f = np.asarray(forward, dtype=float)
    f_len = np.linalg.norm(f)
    if f_len < EPSILON:
        raise ValueError("Connector forward vector has zero length")
    f = f / f_len

    r = np.cross(np.asarray(up, dtype=float), f)
    r_len = np.linalg.norm(r)
    if r_len < EPSILON:
        raise ValueError("Connector up vector is zero or parallel to forward")
    r = r / r_len

    u = np.cross(f, r)
    return np.column_stack((r, u, f))


@dataclass
class Transform:
    """World pose of a structure: position plus 3x3 rotation."""
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.eye(3))

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=float).reshape(3)
        self.rotation = np.asarray(self.rotation, dtype=float).reshape(3, 3)

    @classmethod
    def identity(cls) -> 'Transform':
        return cls()

    def apply_point(self, local: Sequence[float]) -> np.ndarray:
        """Transform a local point to world space."""
        return self.position + self.rotation @ np.asarray(local, dtype=float)

    def apply_vector(self, local: Sequence[float]) -> np.ndarray:
        """Rotate a local direction to world space."""
        return self.rotation @ np.asarray(local, dtype=float)

    @property
    def heading_degrees(self) -> float:
        """Yaw of the local +X axis around +Z, in [0, 360)."""
        x_axis = self.rotation[:, 0]
        return float(np.degrees(np.arctan2(x_axis[1], x_axis[0])) % 360.0)

    def copy(self) -> 'Transform':
        return Transform(self.position.copy(), self.rotation.copy())

    def to_dict(self) -> dict:
        return {
            'position': [float(v) for v in self.position],
            'rotation': [[float(v) for v in row] for row in self.rotation],
            'heading': round(self.heading_degrees, 6),
        }


# ==============================================================================
# CONNECTORS AND STRUCTURES
# ==============================================================================

@dataclass(frozen=True)
class ConnectorSpec:
    """Connector definition in a structure template's local space."""
    name: str                        # Unique within its template
    polarity: Polarity
    position: Vec3                   # Local position
    forward: Vec3 = (1.0, 0.0, 0.0)  # Local facing (see module convention)
    up: Vec3 = WORLD_UP

    def local_basis(self) -> np.ndarray:
        return look_rotation(self.forward, self.up)


@dataclass
class ConnectorPose:
    """World-space pose of a connector on a placed structure."""
    structure_id: Optional[int]
    connector_name: str
    polarity: Polarity
    position: np.ndarray
    forward: np.ndarray
    up: np.ndarray

    POSITION_TOLERANCE: ClassVar[float] = 1e-6
    DIRECTION_TOLERANCE: ClassVar[float] = 1e-6

    def basis(self) -> np.ndarray:
        return look_rotation(self.forward, self.up)

    def coincides(self, other: 'ConnectorPose') -> bool:
        """Check two poses share position and forward/up basis."""
        if np.linalg.norm(self.position - other.position) > self.POSITION_TOLERANCE:
            return False
        if np.linalg.norm(self.forward - other.forward) > self.DIRECTION_TOLERANCE:
            return False
        if np.linalg.norm(self.up - other.up) > self.DIRECTION_TOLERANCE:
            return False
        return True


@dataclass(frozen=True)
class StructureTemplate:
    """Catalog definition of a room or corridor.

    The connector set is fixed here and never mutated by placement.
    """
    name: str
    kind: StructureKind
    connectors: Tuple[ConnectorSpec, ...]
    width: float = 0.0   # Footprint along local X (informational)
    depth: float = 0.0   # Footprint along local Y (informational)

    @property
    def is_room(self) -> bool:
        return self.kind is StructureKind.ROOM

    def connector(self, name: str) -> ConnectorSpec:
        for spec in self.connectors:
            if spec.name == name:
                return spec
        raise KeyError(f"Template '{self.name}' has no connector '{name}'")

    def connectors_with(self, polarity: Polarity) -> List[ConnectorSpec]:
        """Connectors of the given polarity, in definition order."""
        return [spec for spec in self.connectors if spec.polarity is polarity]


@dataclass
class StructureInstance:
    """A structure template posed in the world.

    ``id`` stays None while the instance is staged and is assigned when
    the instance is committed to a layout.
    """
    template: StructureTemplate
    transform: Transform = field(default_factory=Transform.identity)
    id: Optional[int] = None

    @property
    def kind(self) -> StructureKind:
        return self.template.kind

    @property
    def position(self) -> np.ndarray:
        return self.transform.position

    def connector_pose(self, name: str) -> ConnectorPose:
        """World pose of one of this structure's connectors."""
        spec = self.template.connector(name)
        return ConnectorPose(
            structure_id=self.id,
            connector_name=spec.name,
            polarity=spec.polarity,
            position=self.transform.apply_point(spec.position),
            forward=_unit(self.transform.apply_vector(spec.forward)),
            up=_unit(self.transform.apply_vector(spec.up)),
        )

    def align_connector(self, moving: str, fixed: ConnectorPose) -> None:
        """Re-pose this structure so connector ``moving`` lands on ``fixed``."""
        self.transform = compute_alignment(
            self.transform, self.template.connector(moving), fixed
        )


def compute_alignment(current: Transform, moving: ConnectorSpec,
                      fixed: ConnectorPose) -> Transform:
    """
    Compute the transform that maps a connector onto a fixed connector pose.

    The structure is first rotated by ``fixed_basis * inverse(moving_world_basis)``
    so the moving connector's forward/up basis matches the fixed one, then
    translated so the moving connector's world position equals the fixed
    position.

    Because both bases are orthonormal the resulting pose depends only on
    the two connector poses, so repeated calls are idempotent and the
    structure's previous pose does not matter.

    Args:
        current: Current structure transform
        moving: Connector on the structure being moved (local space)
        fixed: World pose of the connector to attach to

    Returns:
        New structure transform
    """
    moving_world = current.rotation @ moving.local_basis()
    rot_to = fixed.basis() @ moving_world.T
    rotation = rot_to @ current.rotation

    offset = rotation @ np.asarray(moving.position, dtype=float)
    position = np.asarray(fixed.position, dtype=float) - offset
    return Transform(position, rotation)

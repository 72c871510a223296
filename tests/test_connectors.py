"""Tests for polarity, transforms and connector alignment."""
from __future__ import annotations

import random

import numpy as np
import pytest

from connector_dungeon.generators.primitives.portal_system import (
    ConnectorPose, ConnectorSpec, Polarity, StructureInstance, StructureKind,
    StructureTemplate, Transform, can_join, compute_alignment, look_rotation,
)


def _random_transform(rng):
    forward = [rng.uniform(-1, 1) for _ in range(3)]
    up = [rng.uniform(-1, 1) for _ in range(3)]
    position = [rng.uniform(-50, 50) for _ in range(3)]
    return Transform(position, look_rotation(forward, up))


def test_polarity_opposite():
    assert Polarity.MALE.opposite() is Polarity.FEMALE
    assert Polarity.FEMALE.opposite() is Polarity.MALE


def test_polarity_from_label_is_case_insensitive():
    assert Polarity.from_label("Male") is Polarity.MALE
    assert Polarity.from_label(" FEMALE ") is Polarity.FEMALE
    with pytest.raises(ValueError):
        Polarity.from_label("Neutral")


def test_can_join_requires_opposite_polarity():
    assert can_join(Polarity.MALE, Polarity.FEMALE)
    assert can_join(Polarity.FEMALE, Polarity.MALE)
    assert not can_join(Polarity.MALE, Polarity.MALE)
    assert not can_join(Polarity.FEMALE, Polarity.FEMALE)


def test_look_rotation_is_orthonormal():
    rotation = look_rotation((1.0, 2.0, 0.5), (0.0, 0.0, 1.0))
    assert np.allclose(rotation.T @ rotation, np.eye(3))
    assert np.linalg.det(rotation) == pytest.approx(1.0)
    assert np.allclose(rotation[:, 2], np.array([1.0, 2.0, 0.5]) / np.linalg.norm([1.0, 2.0, 0.5]))


@pytest.mark.parametrize("forward, up", [
    ((0.0, 0.0, 0.0), (0.0, 0.0, 1.0)),
    ((0.0, 0.0, 2.0), (0.0, 0.0, 1.0)),
    ((1.0, 0.0, 0.0), (0.0, 0.0, 0.0)),
])
def test_look_rotation_rejects_degenerate_basis(forward, up):
    with pytest.raises(ValueError):
        look_rotation(forward, up)


def test_transform_identity_and_heading():
    t = Transform.identity()
    assert np.allclose(t.apply_point((1.0, 2.0, 3.0)), (1.0, 2.0, 3.0))
    assert t.heading_degrees == pytest.approx(0.0)

    quarter = Transform((0.0, 0.0, 0.0), [[0, -1, 0], [1, 0, 0], [0, 0, 1]])
    assert quarter.heading_degrees == pytest.approx(90.0)
    assert np.allclose(quarter.apply_vector((1.0, 0.0, 0.0)), (0.0, 1.0, 0.0))


def test_template_connector_lookup(catalog):
    room = catalog.get_template("Room_A")
    assert room.is_room
    assert room.connector("Door_East_Male").polarity is Polarity.MALE
    with pytest.raises(KeyError):
        room.connector("Door_Up")
    assert [c.name for c in room.connectors_with(Polarity.FEMALE)] == [
        "Door_West_Female", "Door_South_Female",
    ]


def test_room_attaches_east_of_start_room(catalog):
    room = catalog.get_template("Room_A")
    start = StructureInstance(room, id=0)
    fixed = start.connector_pose("Door_East_Male")

    candidate = StructureInstance(room)
    candidate.align_connector("Door_West_Female", fixed)

    assert np.allclose(candidate.position, (8.0, 0.0, 0.0))
    assert candidate.connector_pose("Door_West_Female").coincides(fixed)


def test_rotated_connector_turns_structure(catalog):
    room = catalog.get_template("Room_A")
    fixed = StructureInstance(room, id=0).connector_pose("Door_East_Male")

    candidate = StructureInstance(room)
    candidate.align_connector("Door_South_Female", fixed)

    assert np.allclose(candidate.position, (8.0, 0.0, 0.0))
    # Local +Y (the south door's forward) now points along world +X
    assert np.allclose(candidate.transform.apply_vector((0.0, 1.0, 0.0)), (1.0, 0.0, 0.0))
    assert candidate.connector_pose("Door_South_Female").coincides(fixed)


def test_corridor_attaches_to_female_doorway(catalog):
    start = StructureInstance(catalog.get_template("Room_A"), id=0)
    fixed = start.connector_pose("Door_West_Female")

    corridor = StructureInstance(catalog.get_template("Floor"))
    corridor.align_connector("Exit_East_Male", fixed)

    assert np.allclose(corridor.position, (-6.0, 0.0, 0.0))
    assert corridor.connector_pose("Exit_East_Male").coincides(fixed)


def test_alignment_ignores_pre_call_transform(catalog):
    rng = random.Random(17)
    corridor = catalog.get_template("Floor_T")
    fixed = ConnectorPose(
        structure_id=3,
        connector_name="Door_North_Male",
        polarity=Polarity.MALE,
        position=np.array([5.0, -3.0, 1.5]),
        forward=np.array([1.0, 1.0, 0.0]) / np.sqrt(2.0),
        up=np.array([0.0, 0.0, 1.0]),
    )

    reference = StructureInstance(corridor)
    reference.align_connector("Entry_Female", fixed)

    for _ in range(10):
        instance = StructureInstance(corridor, transform=_random_transform(rng))
        instance.align_connector("Entry_Female", fixed)
        assert instance.connector_pose("Entry_Female").coincides(fixed)
        assert np.allclose(instance.transform.position, reference.transform.position)
        assert np.allclose(instance.transform.rotation, reference.transform.rotation)


def test_alignment_is_idempotent(catalog):
    room = catalog.get_template("Room_A")
    fixed = StructureInstance(room, id=0).connector_pose("Door_North_Male")

    instance = StructureInstance(room)
    instance.align_connector("Door_South_Female", fixed)
    first = instance.transform.copy()
    instance.align_connector("Door_South_Female", fixed)

    assert np.allclose(first.position, instance.transform.position)
    assert np.allclose(first.rotation, instance.transform.rotation)


def test_compute_alignment_keeps_rotation_orthonormal():
    spec = ConnectorSpec("Side", Polarity.FEMALE, (1.0, 2.0, 0.0), (0.0, 1.0, 0.0))
    fixed = ConnectorPose(
        structure_id=None, connector_name="Fixed", polarity=Polarity.MALE,
        position=np.zeros(3), forward=np.array([-1.0, 0.0, 0.0]), up=np.array([0.0, 0.0, 1.0]),
    )
    result = compute_alignment(_random_transform(random.Random(2)), spec, fixed)
    assert np.allclose(result.rotation.T @ result.rotation, np.eye(3))
    assert np.allclose(result.apply_point(spec.position), fixed.position)


def test_connector_pose_carries_structure_id_and_polarity():
    template = StructureTemplate(
        name="Stub",
        kind=StructureKind.CORRIDOR,
        connectors=(ConnectorSpec("Only", Polarity.MALE, (1.0, 0.0, 0.0)),),
    )
    pose = StructureInstance(template, id=7).connector_pose("Only")
    assert pose.structure_id == 7
    assert pose.polarity is Polarity.MALE
    assert np.allclose(pose.position, (1.0, 0.0, 0.0))

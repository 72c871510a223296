"""Tests for the structure catalog and its JSON persistence."""
from __future__ import annotations

import json

import pytest

from connector_dungeon.generators.primitives.catalog import (
    CatalogError, StructureCatalog, catalog_from_dict, catalog_to_dict,
    load_catalog, save_catalog,
)
from connector_dungeon.generators.primitives.portal_system import (
    ConnectorSpec, Polarity, StructureKind, StructureTemplate,
)


def _template(name, kind, *connectors):
    return StructureTemplate(name=name, kind=kind, connectors=tuple(connectors))


def test_default_catalog_contents(catalog):
    assert len(catalog) == 5
    assert catalog.room_template.name == "Room_A"
    assert [t.name for t in catalog.corridor_templates] == ["Floor", "Floor_L", "Floor_T", "Floor_X"]
    assert catalog.list_templates(StructureKind.ROOM) == ["Room_A"]
    assert "Floor_X" in catalog
    catalog.require_complete()


def test_default_templates_offer_both_polarities(catalog):
    for name in catalog.list_templates():
        template = catalog.get_template(name)
        assert template.connectors_with(Polarity.MALE)
        assert template.connectors_with(Polarity.FEMALE)


def test_unknown_template_raises(catalog):
    with pytest.raises(CatalogError):
        catalog.get_template("Room_Z")


def test_register_rejects_template_without_connectors():
    with pytest.raises(CatalogError):
        StructureCatalog().register(_template("Empty", StructureKind.ROOM))


def test_register_rejects_duplicate_connector_names():
    door = ConnectorSpec("Door", Polarity.MALE, (1.0, 0.0, 0.0))
    with pytest.raises(CatalogError):
        StructureCatalog().register(_template("Twin", StructureKind.ROOM, door, door))


def test_register_rejects_forward_parallel_to_up():
    bad = ConnectorSpec("Hatch", Polarity.FEMALE, (0.0, 0.0, 1.0), forward=(0.0, 0.0, 1.0))
    with pytest.raises(CatalogError):
        StructureCatalog().register(_template("Shaft", StructureKind.CORRIDOR, bad))


def test_require_complete_needs_room_and_corridor():
    catalog = StructureCatalog()
    with pytest.raises(CatalogError):
        catalog.require_complete()
    with pytest.raises(CatalogError):
        catalog.room_template

    catalog.register(_template("Cell", StructureKind.ROOM,
                               ConnectorSpec("Door", Polarity.MALE, (1.0, 0.0, 0.0))))
    with pytest.raises(CatalogError):
        catalog.require_complete()

    catalog.register(_template("Hall", StructureKind.CORRIDOR,
                               ConnectorSpec("End", Polarity.FEMALE, (1.0, 0.0, 0.0))))
    catalog.require_complete()


def test_register_replaces_existing_name():
    catalog = StructureCatalog()
    catalog.register(_template("Cell", StructureKind.ROOM,
                               ConnectorSpec("Door", Polarity.MALE, (1.0, 0.0, 0.0))))
    catalog.register(_template("Cell", StructureKind.ROOM,
                               ConnectorSpec("Gate", Polarity.FEMALE, (1.0, 0.0, 0.0))))
    assert len(catalog) == 1
    assert catalog.get_template("Cell").connectors[0].name == "Gate"


def test_catalog_json_round_trip(catalog, tmp_path):
    path = save_catalog(catalog, tmp_path / "catalog.json")
    loaded = load_catalog(path)

    assert loaded is not None
    assert catalog_to_dict(loaded) == catalog_to_dict(catalog)
    assert loaded.get_template("Floor_T").connector("Exit_South_Male").forward == (0.0, -1.0, 0.0)


def test_catalog_from_dict_reads_polarity_labels():
    data = {"templates": [
        {"name": "Cell", "kind": "room", "connectors": [
            {"name": "Door", "polarity": "Male", "position": [4, 0, 0]},
        ]},
        {"name": "Hall", "kind": "corridor", "connectors": [
            {"name": "End", "polarity": "FEMALE", "position": [-2, 0, 0], "forward": [1, 0, 0]},
        ]},
    ]}
    catalog = catalog_from_dict(data)
    assert catalog.get_template("Cell").connector("Door").polarity is Polarity.MALE
    assert catalog.get_template("Hall").connector("End").polarity is Polarity.FEMALE


@pytest.mark.parametrize("entry", [
    {"name": "Cell", "kind": "hall", "connectors": []},
    {"kind": "room", "connectors": []},
    {"name": "Cell", "kind": "room", "connectors": [{"name": "Door", "polarity": "other", "position": [0, 0, 0]}]},
])
def test_catalog_from_dict_rejects_malformed_entries(entry):
    with pytest.raises(CatalogError):
        catalog_from_dict({"templates": [entry]})


def test_load_catalog_missing_or_invalid(tmp_path):
    assert load_catalog(tmp_path / "missing.json") is None

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert load_catalog(broken) is None


def test_load_catalog_propagates_contract_errors(tmp_path):
    path = tmp_path / "empty_template.json"
    path.write_text(json.dumps({"templates": [{"name": "Void", "kind": "room"}]}), encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(path)

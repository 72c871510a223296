"""
Structure catalog: registry of room and corridor templates.

Templates are checked for basic contract compliance on registration:
every template needs at least one connector, connector names must be
unique within a template, and every connector needs a usable forward/up
basis. Violations raise CatalogError.

Catalogs can be persisted as JSON so the structure set can be supplied
externally.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .portal_system import (
    ConnectorSpec, Polarity, StructureKind, StructureTemplate, look_rotation,
)

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when a catalog or template violates the catalog contract."""


class StructureCatalog:
    """Registry mapping names to structure templates.

    Registration order is preserved; corridor draws index into the
    corridor templates in that order, so it is part of reproducibility.
    """

    def __init__(self):
        self._templates: Dict[str, StructureTemplate] = {}

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, name: str) -> bool:
        return name in self._templates

    def register(self, template: StructureTemplate) -> None:
        """Register a template in the catalog.

        Raises:
            CatalogError: If the template breaks the connector contract
        """
        _check_template(template)
        if template.name in self._templates:
            logger.warning("Replacing catalog template '%s'", template.name)
        self._templates[template.name] = template

    def get_template(self, name: str) -> StructureTemplate:
        try:
            return self._templates[name]
        except KeyError:
            raise CatalogError(f"Unknown structure template '{name}'") from None

    def list_templates(self, kind: Optional[StructureKind] = None) -> List[str]:
        """Template names in registration order, optionally filtered by kind."""
        return [
            name for name, template in self._templates.items()
            if kind is None or template.kind is kind
        ]

    @property
    def room_template(self) -> StructureTemplate:
        """The room template (first registered room)."""
        rooms = self.list_templates(StructureKind.ROOM)
        if not rooms:
            raise CatalogError("Catalog has no room template")
        return self._templates[rooms[0]]

    @property
    def corridor_templates(self) -> List[StructureTemplate]:
        return [self._templates[name] for name in self.list_templates(StructureKind.CORRIDOR)]

    def require_complete(self) -> None:
        """Check the catalog can drive a placement walk.

        Raises:
            CatalogError: If there is no room template or no corridor template
        """
        if not self.list_templates(StructureKind.ROOM):
            raise CatalogError("Catalog has no room template")
        if not self.corridor_templates:
            raise CatalogError("Catalog has no corridor templates")


def _check_template(template: StructureTemplate) -> None:
    if not template.connectors:
        raise CatalogError(f"Template '{template.name}' has no connectors")

    names = set()
    for spec in template.connectors:
        if spec.name in names:
            raise CatalogError(
                f"Template '{template.name}' repeats connector name '{spec.name}'"
            )
        names.add(spec.name)
        try:
            look_rotation(spec.forward, spec.up)
        except ValueError as exc:
            raise CatalogError(
                f"Template '{template.name}' connector '{spec.name}': {exc}"
            ) from exc


# ==============================================================================
# BUILT-IN TEMPLATES
# ==============================================================================
# Room_A is 8x8 with a doorway centred on each side. Corridors are 4 units
# long with a single female entry on their west end.

ROOM_HALF = 4.0
CORRIDOR_HALF = 2.0

_EAST = (1.0, 0.0, 0.0)
_NORTH = (0.0, 1.0, 0.0)
_SOUTH = (0.0, -1.0, 0.0)


def _corridor_entry() -> ConnectorSpec:
    # Female faces into its structure
    return ConnectorSpec("Entry_Female", Polarity.FEMALE, (-CORRIDOR_HALF, 0.0, 0.0), _EAST)


def build_default_catalog() -> StructureCatalog:
    """Create a catalog with the built-in room and corridor templates."""
    catalog = StructureCatalog()
    catalog.register(StructureTemplate(
        name='Room_A',
        kind=StructureKind.ROOM,
        connectors=(
            ConnectorSpec("Door_East_Male", Polarity.MALE, (ROOM_HALF, 0.0, 0.0), _EAST),
            ConnectorSpec("Door_North_Male", Polarity.MALE, (0.0, ROOM_HALF, 0.0), _NORTH),
            ConnectorSpec("Door_West_Female", Polarity.FEMALE, (-ROOM_HALF, 0.0, 0.0), _EAST),
            ConnectorSpec("Door_South_Female", Polarity.FEMALE, (0.0, -ROOM_HALF, 0.0), _NORTH),
        ),
        width=ROOM_HALF * 2,
        depth=ROOM_HALF * 2,
    ))
    catalog.register(StructureTemplate(
        name='Floor',
        kind=StructureKind.CORRIDOR,
        connectors=(
            _corridor_entry(),
            ConnectorSpec("Exit_East_Male", Polarity.MALE, (CORRIDOR_HALF, 0.0, 0.0), _EAST),
        ),
        width=CORRIDOR_HALF * 2,
        depth=CORRIDOR_HALF,
    ))
    catalog.register(StructureTemplate(
        name='Floor_L',
        kind=StructureKind.CORRIDOR,
        connectors=(
            _corridor_entry(),
            ConnectorSpec("Exit_North_Male", Polarity.MALE, (0.0, CORRIDOR_HALF, 0.0), _NORTH),
        ),
        width=CORRIDOR_HALF * 2,
        depth=CORRIDOR_HALF * 2,
    ))
    catalog.register(StructureTemplate(
        name='Floor_T',
        kind=StructureKind.CORRIDOR,
        connectors=(
            _corridor_entry(),
            ConnectorSpec("Exit_North_Male", Polarity.MALE, (0.0, CORRIDOR_HALF, 0.0), _NORTH),
            ConnectorSpec("Exit_South_Male", Polarity.MALE, (0.0, -CORRIDOR_HALF, 0.0), _SOUTH),
        ),
        width=CORRIDOR_HALF * 2,
        depth=CORRIDOR_HALF * 2,
    ))
    catalog.register(StructureTemplate(
        name='Floor_X',
        kind=StructureKind.CORRIDOR,
        connectors=(
            _corridor_entry(),
            ConnectorSpec("Exit_East_Male", Polarity.MALE, (CORRIDOR_HALF, 0.0, 0.0), _EAST),
            ConnectorSpec("Exit_North_Male", Polarity.MALE, (0.0, CORRIDOR_HALF, 0.0), _NORTH),
            ConnectorSpec("Exit_South_Male", Polarity.MALE, (0.0, -CORRIDOR_HALF, 0.0), _SOUTH),
        ),
        width=CORRIDOR_HALF * 2,
        depth=CORRIDOR_HALF * 2,
    ))
    return catalog


# ==============================================================================
# JSON PERSISTENCE
# ==============================================================================

def _connector_to_dict(spec: ConnectorSpec) -> Dict[str, Any]:
    return {
        "name": spec.name,
        "polarity": spec.polarity.value,
        "position": list(spec.position),
        "forward": list(spec.forward),
        "up": list(spec.up),
    }


def _dict_to_connector(data: Dict[str, Any]) -> ConnectorSpec:
    return ConnectorSpec(
        name=data["name"],
        polarity=Polarity.from_label(data["polarity"]),
        position=tuple(float(v) for v in data["position"]),
        forward=tuple(float(v) for v in data.get("forward", _EAST)),
        up=tuple(float(v) for v in data.get("up", (0.0, 0.0, 1.0))),
    )


def catalog_to_dict(catalog: StructureCatalog) -> Dict[str, Any]:
    """Convert a catalog to a JSON-serializable dictionary."""
    templates = []
    for name in catalog.list_templates():
        template = catalog.get_template(name)
        templates.append({
            "name": template.name,
            "kind": template.kind.value,
            "width": template.width,
            "depth": template.depth,
            "connectors": [_connector_to_dict(c) for c in template.connectors],
        })
    return {"templates": templates}


def catalog_from_dict(data: Dict[str, Any]) -> StructureCatalog:
    """Build a catalog from a dictionary.

    Raises:
        CatalogError: If a template is malformed or breaks the contract
    """
    catalog = StructureCatalog()
    for entry in data.get("templates", []):
        try:
            template = StructureTemplate(
                name=entry["name"],
                kind=StructureKind(entry["kind"]),
                connectors=tuple(_dict_to_connector(c) for c in entry.get("connectors", [])),
                width=float(entry.get("width", 0.0)),
                depth=float(entry.get("depth", 0.0)),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogError(f"Malformed template entry: {exc}") from exc
        catalog.register(template)
    return catalog


def save_catalog(catalog: StructureCatalog, file_path: Path) -> Path:
    """
    Save a catalog as JSON.

    Args:
        catalog: Catalog to save
        file_path: Destination file

    Returns:
        Path to the saved file
    """
    file_path = Path(file_path)
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(catalog_to_dict(catalog), f, indent=2, ensure_ascii=False)
    return file_path


def load_catalog(file_path: Path) -> Optional[StructureCatalog]:
    """
    Load a catalog from a JSON file.

    Args:
        file_path: Path to the JSON catalog

    Returns:
        StructureCatalog if found and readable, None otherwise

    Raises:
        CatalogError: If the file parses but a template breaks the contract
    """
    file_path = Path(file_path)
    if not file_path.exists():
        return None

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError:
        logger.warning("Catalog file %s is not valid JSON", file_path)
        return None
    return catalog_from_dict(data)


# Global singleton
DEFAULT_CATALOG = build_default_catalog()

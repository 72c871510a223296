"""
Structure Primitives Module

Connector model (polarity, transforms, alignment) and the structure catalog.
"""

from .portal_system import (
    Polarity,
    StructureKind,
    Transform,
    ConnectorSpec,
    ConnectorPose,
    StructureTemplate,
    StructureInstance,
    compute_alignment,
    look_rotation,
    can_join,
)
from .catalog import (
    StructureCatalog,
    CatalogError,
    DEFAULT_CATALOG,
    build_default_catalog,
    catalog_to_dict,
    catalog_from_dict,
    save_catalog,
    load_catalog,
)

__all__ = [
    # Connector model
    'Polarity',
    'StructureKind',
    'Transform',
    'ConnectorSpec',
    'ConnectorPose',
    'StructureTemplate',
    'StructureInstance',
    'compute_alignment',
    'look_rotation',
    'can_join',
    # Catalog
    'StructureCatalog',
    'CatalogError',
    'DEFAULT_CATALOG',
    'build_default_catalog',
    'catalog_to_dict',
    'catalog_from_dict',
    'save_catalog',
    'load_catalog',
]

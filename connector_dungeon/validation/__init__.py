"""
Validation package for connector dungeon generation.

Public API:
    - ValidationResult, ValidationIssue, Severity: Core result types
    - ValidationStage: Where a check ran (placement or layout audit)
    - ValidationRule and PLACE_* rules: Rule codes and message templates
    - ValidationError: Exception raised by ValidationResult.raise_if_failed()
    - validate_room_placement, validate_layout: Placement checks
"""

from .core import (
    Severity,
    ValidationStage,
    ValidationIssue,
    ValidationResult,
    ValidationError,
)
from .rules import (
    ValidationRule,
    PLACE_001,
    PLACE_002,
    PLACE_101,
    PLACE_102,
    PLACE_103,
    PLACE_104,
)
from .checks import validate_room_placement, validate_layout

__all__ = [
    # Core types
    'Severity',
    'ValidationStage',
    'ValidationIssue',
    'ValidationResult',
    'ValidationError',
    # Rules
    'ValidationRule',
    'PLACE_001',
    'PLACE_002',
    'PLACE_101',
    'PLACE_102',
    'PLACE_103',
    'PLACE_104',
    # Checks
    'validate_room_placement',
    'validate_layout',
]

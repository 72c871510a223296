"""
Validation check modules.

- placement_checks: Candidate room spacing/bounds, finished layout join audit
"""

from .placement_checks import (
    check_room_spacing,
    check_area_bounds,
    validate_room_placement,
    validate_layout,
)

__all__ = [
    'check_room_spacing',
    'check_area_bounds',
    'validate_room_placement',
    'validate_layout',
]

"""
Validation rule definitions.

Each rule has:
- Code: Unique identifier (e.g., "PLACE-001")
- Severity: FAIL, WARN, or INFO
- Message template: Human-readable description
- Remediation: Suggested fix

Rules are organized by range:
- PLACE-0xx: Candidate room placement (checked before commit)
- PLACE-1xx: Finished layout audit (join graph consistency)
"""

from dataclasses import dataclass
from typing import Optional

from .core import Severity, ValidationIssue


@dataclass(frozen=True)
class ValidationRule:
    """Definition of a validation rule.

    Attributes:
        code: Unique rule code
        severity: Default severity for this rule
        message_template: Template for the message (use {placeholders})
        remediation_template: Template for suggested fix
        description: Full description of the rule
    """
    code: str
    severity: Severity
    message_template: str
    remediation_template: Optional[str] = None
    description: Optional[str] = None

    def format_message(self, **kwargs) -> str:
        return self.message_template.format(**kwargs)

    def issue(self, structure: Optional[str] = None, connector: Optional[str] = None,
              **kwargs) -> ValidationIssue:
        """Create an issue for this rule with a formatted message."""
        return ValidationIssue(
            severity=self.severity,
            code=self.code,
            message=self.format_message(**kwargs),
            structure=structure,
            connector=connector,
            remediation=(self.remediation_template.format(**kwargs)
                         if self.remediation_template else None),
        )


# =============================================================================
# PLACEMENT RULES
# =============================================================================

PLACE_001 = ValidationRule(
    code="PLACE-001",
    severity=Severity.FAIL,
    message_template="Room at {position} is {distance:.3f} from room {other} (minimum {minimum:.3f})",
    remediation_template="Lower min_room_distance or attach through a corridor",
    description="Room origins must be at least min_room_distance apart",
)

PLACE_002 = ValidationRule(
    code="PLACE-002",
    severity=Severity.FAIL,
    message_template="Room at {position} is outside the {width:g}x{depth:g} area",
    remediation_template="Enlarge area_width/area_depth",
    description="Room origins must lie within half the area extents on X and Y",
)

# =============================================================================
# LAYOUT AUDIT RULES
# =============================================================================

PLACE_101 = ValidationRule(
    code="PLACE-101",
    severity=Severity.FAIL,
    message_template="Join references missing structure {structure_id}",
    description="Every join must reference committed structures",
)

PLACE_102 = ValidationRule(
    code="PLACE-102",
    severity=Severity.FAIL,
    message_template="Joined connectors share polarity {polarity}",
    description="Joined connectors must have opposite polarity",
)

PLACE_103 = ValidationRule(
    code="PLACE-103",
    severity=Severity.FAIL,
    message_template="Joined connectors are not coincident ({offset:.6f} apart)",
    remediation_template="Re-run alignment for structure {structure_id}",
    description="Joined connectors must share world position and basis",
)

PLACE_104 = ValidationRule(
    code="PLACE-104",
    severity=Severity.FAIL,
    message_template="Entry connector used by {count} joins",
    description="A structure's entry connector is consumed once and never reused as a base",
)

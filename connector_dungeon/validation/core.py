"""
Core data structures for placement validation.

Rejections during generation are normal outcomes, so checks report
issues in a ValidationResult instead of raising:
- Severity: Issue severity levels (INFO, WARN, FAIL)
- ValidationStage: Where the check ran (placement or layout audit)
- ValidationIssue: Individual finding with a rule code
- ValidationResult: Collection of issues with pass/fail status
- ValidationError: Raised only when a caller asks for fail-fast behaviour
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional


class Severity(Enum):
    """Validation issue severity levels.

    - INFO: Informational, never affects pass/fail
    - WARN: Suspicious but acceptable
    - FAIL: Placement is rejected / layout is invalid
    """
    INFO = auto()
    WARN = auto()
    FAIL = auto()

    def __str__(self) -> str:
        return self.name


class ValidationStage(Enum):
    """Where a check ran."""
    PLACEMENT = "placement"  # Candidate room before commit
    LAYOUT = "layout"        # Audit of a finished layout

    def __str__(self) -> str:
        return self.value


@dataclass
class ValidationIssue:
    """A single validation finding.

    Attributes:
        severity: Issue severity
        code: Rule code (e.g. "PLACE-001")
        message: Human-readable description
        structure: Template name or structure id the issue refers to
        connector: Connector name, if the issue is about a join
        remediation: Optional suggested fix
    """
    severity: Severity
    code: str
    message: str
    structure: Optional[str] = None
    connector: Optional[str] = None
    remediation: Optional[str] = None

    def format(self) -> str:
        """[SEVERITY] CODE structure=S connector=C :: message"""
        text = (
            f"[{self.severity}] {self.code} "
            f"structure={self.structure or '-'} connector={self.connector or '-'} :: "
            f"{self.message}"
        )
        if self.remediation:
            text += f" :: fix={self.remediation}"
        return text

    def __str__(self) -> str:
        return self.format()


@dataclass
class ValidationResult:
    """Collection of validation issues with pass/fail determination."""
    issues: List[ValidationIssue] = field(default_factory=list)
    stage: Optional[ValidationStage] = None

    @property
    def passed(self) -> bool:
        """True if no FAIL issues."""
        return not self.errors

    @property
    def failed(self) -> bool:
        return not self.passed

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.FAIL]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARN]

    @property
    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Merge another result into this one. Returns self for chaining."""
        self.issues.extend(other.issues)
        return self

    def raise_if_failed(self) -> None:
        """Raise ValidationError if any FAIL issue is present."""
        if self.failed:
            raise ValidationError(self)

    def report(self) -> str:
        """Multi-line report grouped by severity."""
        if not self.issues:
            return "Validation passed: No issues found"

        stage_str = f" ({self.stage})" if self.stage else ""
        status = "PASSED" if self.passed else "FAILED"
        lines = [f"Validation {status}{stage_str}: {len(self.issues)} issue(s)"]
        for severity in (Severity.FAIL, Severity.WARN, Severity.INFO):
            group = [i for i in self.issues if i.severity == severity]
            if group:
                lines.append(f"{severity.name} ({len(group)}):")
                lines.extend(f"  {issue.format()}" for issue in group)
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            'passed': self.passed,
            'stage': str(self.stage) if self.stage else None,
            'issues': [
                {
                    'severity': str(issue.severity),
                    'code': issue.code,
                    'message': issue.message,
                    'structure': issue.structure,
                    'connector': issue.connector,
                }
                for issue in self.issues
            ],
        }


class ValidationError(Exception):
    """Raised by ValidationResult.raise_if_failed().

    Attributes:
        result: The ValidationResult that caused the failure
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.report())

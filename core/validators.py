"""
Anomaly Configuration Guard

This module validates per-unit anomaly window calendars before any data
is generated. Window matching during generation is first-match-wins, so
an overlapping or inverted window would silently mask part of the
calendar instead of failing. The guard surfaces those mistakes at
construction time.

Philosophy:
- Hard failures: Ambiguous or impossible windows → Reject the config
- Soft warnings: Legal but suspicious layouts → Accept with warnings
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence
import logging

logger = logging.getLogger(__name__)


class ValidationSeverity(Enum):
    """Severity levels for validation issues."""
    ERROR = "error"        # Ambiguous or impossible - must reject
    WARNING = "warning"    # Suspicious - accept with warning


@dataclass
class ValidationIssue:
    """
    A single problem found in an anomaly configuration.

    Attributes:
        severity: How serious is this issue
        rule_name: Identifier for the rule that was violated
        message: Human-readable description
        serial_number: Which unit the issue belongs to
        window_index: Position of the offending window in the unit's list
    """
    severity: ValidationSeverity
    rule_name: str
    message: str
    serial_number: Optional[str] = None
    window_index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "severity": self.severity.value,
            "rule_name": self.rule_name,
            "message": self.message,
            "serial_number": self.serial_number,
            "window_index": self.window_index,
        }


@dataclass
class ValidationResult:
    """
    Result of validating an anomaly configuration.

    Attributes:
        is_valid: True if the config can be used (possibly with warnings)
        status: "accepted", "accepted_with_warnings", or "rejected"
        issues: List of all validation issues found
    """
    is_valid: bool
    status: str
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging or API responses."""
        return {
            "is_valid": self.is_valid,
            "status": self.status,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "issues": [issue.to_dict() for issue in self.issues],
        }


class AnomalyConfigError(ValueError):
    """Raised when an anomaly configuration is rejected."""

    def __init__(self, result: ValidationResult):
        self.result = result
        details = "; ".join(issue.message for issue in result.errors)
        super().__init__(f"Invalid anomaly configuration: {details}")


class AnomalyConfigGuard:
    """
    Validation guard for per-unit anomaly window calendars.

    Windows are any objects exposing integer ``start_day`` and ``end_day``
    attributes (inclusive day offsets) and a ``kind``.

    Example:
        guard = AnomalyConfigGuard()
        result = guard.validate({
            "SU-0001": [AnomalyWindow(4, 6, FaultKind.MECHANICAL)],
        })
        print(result.status)  # "accepted"
    """

    def __init__(self, strict_mode: bool = False):
        """
        Initialize the guard.

        Args:
            strict_mode: If True, treat warnings as errors
        """
        self.strict_mode = strict_mode

    def validate(self, config: Mapping[str, Sequence[Any]]) -> ValidationResult:
        """
        Validate a mapping of serial number to anomaly windows.

        Args:
            config: Serial number -> ordered window list

        Returns:
            ValidationResult with status and any issues found
        """
        issues: List[ValidationIssue] = []

        for serial_number, windows in config.items():
            if not serial_number or not str(serial_number).strip():
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    rule_name="serial_number_present",
                    message="Anomaly config contains an empty serial number",
                ))
            issues.extend(self._validate_bounds(serial_number, windows))
            issues.extend(self._validate_overlaps(serial_number, windows))
            issues.extend(self._validate_ordering(serial_number, windows))

        errors = [i for i in issues if i.severity == ValidationSeverity.ERROR]
        warnings = [i for i in issues if i.severity == ValidationSeverity.WARNING]

        if errors:
            return ValidationResult(is_valid=False, status="rejected", issues=issues)
        if warnings:
            if self.strict_mode:
                for w in warnings:
                    w.severity = ValidationSeverity.ERROR
                return ValidationResult(is_valid=False, status="rejected", issues=issues)
            return ValidationResult(
                is_valid=True,
                status="accepted_with_warnings",
                issues=issues
            )
        return ValidationResult(is_valid=True, status="accepted", issues=issues)

    def _validate_bounds(
        self,
        serial_number: str,
        windows: Sequence[Any]
    ) -> List[ValidationIssue]:
        """Each window must have start_day <= end_day."""
        issues = []
        for index, window in enumerate(windows):
            if window.start_day > window.end_day:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    rule_name="window_bounds",
                    message=(
                        f"{serial_number}: window {index} starts on day "
                        f"{window.start_day} after it ends on day {window.end_day}"
                    ),
                    serial_number=serial_number,
                    window_index=index,
                ))
            elif window.start_day < 0:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    rule_name="window_negative_start",
                    message=(
                        f"{serial_number}: window {index} starts on negative day "
                        f"{window.start_day}; offsets before 0 are never generated"
                    ),
                    serial_number=serial_number,
                    window_index=index,
                ))
        return issues

    def _validate_overlaps(
        self,
        serial_number: str,
        windows: Sequence[Any]
    ) -> List[ValidationIssue]:
        """No two windows of one unit may share a day offset."""
        issues = []
        for i, first in enumerate(windows):
            for j in range(i + 1, len(windows)):
                second = windows[j]
                if first.start_day <= second.end_day and second.start_day <= first.end_day:
                    issues.append(ValidationIssue(
                        severity=ValidationSeverity.ERROR,
                        rule_name="window_overlap",
                        message=(
                            f"{serial_number}: window {j} ({second.kind}, days "
                            f"{second.start_day}-{second.end_day}) overlaps window {i} "
                            f"({first.kind}, days {first.start_day}-{first.end_day})"
                        ),
                        serial_number=serial_number,
                        window_index=j,
                    ))
        return issues

    def _validate_ordering(
        self,
        serial_number: str,
        windows: Sequence[Any]
    ) -> List[ValidationIssue]:
        """Windows should be listed chronologically."""
        issues = []
        for index in range(1, len(windows)):
            if windows[index].start_day < windows[index - 1].start_day:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    rule_name="window_order",
                    message=(
                        f"{serial_number}: window {index} is listed before an "
                        f"earlier-starting window"
                    ),
                    serial_number=serial_number,
                    window_index=index,
                ))
        return issues


def validate_anomaly_config(
    config: Mapping[str, Sequence[Any]],
    strict: bool = False
) -> ValidationResult:
    """
    Convenience function to validate an anomaly configuration.

    Args:
        config: Serial number -> ordered window list
        strict: If True, treat warnings as errors

    Returns:
        ValidationResult
    """
    guard = AnomalyConfigGuard(strict_mode=strict)
    result = guard.validate(config)
    for issue in result.warnings:
        logger.warning(issue.message)
    return result

"""Validation result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ValidationError:
    """Single validation error.

    ``field`` holds the field's display label, which is what an author sees
    next to the message.
    """

    field: str
    message: str
    code: Optional[str] = None
    severity: str = "error"  # error, warning

    def prefixed(self, prefix: str) -> "ValidationError":
        """Copy with ``prefix`` prepended to the message."""
        return ValidationError(self.field, f"{prefix}{self.message}", self.code, self.severity)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result: Dict[str, Any] = {"field": self.field, "message": self.message}
        if self.code:
            result["code"] = self.code
        if self.severity != "error":
            result["severity"] = self.severity
        return result


@dataclass
class ValidationResult:
    """Result of validating one field or a whole schema.

    Warnings are advisory and never affect ``valid``.
    """

    valid: bool = True
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationError] = field(default_factory=list)
    field_errors: Optional[Dict[str, List[ValidationError]]] = None

    def add_error(self, error: ValidationError) -> None:
        """Add an error to the result."""
        if error.severity == "warning":
            self.warnings.append(error)
        else:
            self.errors.append(error)
            self.valid = False

    def extend(self, other: "ValidationResult", prefix: str = "") -> None:
        """Merge another result's errors and warnings, optionally prefixing messages."""
        for error in other.errors:
            self.add_error(error.prefixed(prefix) if prefix else error)
        for warning in other.warnings:
            self.add_error(warning.prefixed(prefix) if prefix else warning)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result: Dict[str, Any] = {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
        }
        if self.warnings:
            result["warnings"] = [w.to_dict() for w in self.warnings]
        if self.field_errors is not None:
            result["fieldErrors"] = {
                name: [e.to_dict() for e in errors] for name, errors in self.field_errors.items()
            }
        return result

"""Custom exception classes for blockfields.

Only configuration errors are raised. Field values that fail a constraint
are reported as ValidationError entries, never as exceptions.
"""

from typing import Optional, Dict, Any


class BlockFieldsError(Exception):
    """Base exception for all blockfields errors."""

    error_code: str = "ERR000"  # Override in subclasses

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, error_code: Optional[str] = None):
        """
        Initialize blockfields exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context
            error_code: Optional error code override
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code

    def __str__(self) -> str:
        """Return string representation with error code and details."""
        parts = [f"[{self.error_code}] {self.message}"]
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({detail_str})")
        return " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class SchemaError(BlockFieldsError):
    """Raised when a field schema is malformed.

    Examples:
        - A field node without a ``type``
        - A composite whose ``fields`` is not a mapping
        - A schema file that cannot be read or parsed
    """

    error_code = "SCH001"

    def __init__(self, message: str, field_name: Optional[str] = None, path: Optional[str] = None):
        """
        Initialize schema error.

        Args:
            message: Description of the problem
            field_name: Name of the offending field node
            path: Schema file the node was read from
        """
        details = {}
        if field_name:
            details["field"] = field_name
        if path:
            details["path"] = path
        super().__init__(message, details)
        self.field_name = field_name


class InvalidConditionalError(SchemaError):
    """Raised when a conditional rule is missing its watched field or operator."""

    error_code = "SCH002"


class FieldTypeAlreadyRegisteredError(BlockFieldsError):
    """Raised when registering a field type name that is already taken."""

    error_code = "REG001"

    def __init__(self, type_name: str):
        super().__init__(f"Field type '{type_name}' is already registered", {"type": type_name})
        self.type_name = type_name


class FieldTypeNotRegisteredError(BlockFieldsError):
    """Raised when looking up a field type name that has no handler."""

    error_code = "REG002"

    def __init__(self, type_name: str, available: Optional[list] = None):
        details: Dict[str, Any] = {"type": type_name}
        if available:
            details["available"] = ", ".join(sorted(available))
        super().__init__(f"Field type '{type_name}' is not registered", details)
        self.type_name = type_name

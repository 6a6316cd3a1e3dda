"""Data models for the form engine."""

from blockfields.models.config import (
    Conditional,
    FieldConfig,
    Option,
    Section,
    parse_fields,
)
from blockfields.models.results import ValidationError, ValidationResult

__all__ = [
    "Conditional",
    "FieldConfig",
    "Option",
    "Section",
    "ValidationError",
    "ValidationResult",
    "parse_fields",
]

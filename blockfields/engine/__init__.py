"""Render, extract and validate orchestrators."""

from __future__ import annotations

from blockfields.engine.extractor import FieldExtractor
from blockfields.engine.helpers import (
    extract_field_data,
    get_default_registry,
    render_fields,
    validate_fields,
)
from blockfields.engine.renderer import FieldRenderer
from blockfields.engine.validator import FieldValidator

__all__ = [
    "FieldExtractor",
    "FieldRenderer",
    "FieldValidator",
    "extract_field_data",
    "get_default_registry",
    "render_fields",
    "validate_fields",
]

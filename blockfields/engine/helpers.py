"""Convenience wrappers around a shared default registry.

The orchestrator classes take an explicit registry; these helpers exist for
simple call sites that are happy with the built-in field types.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from blockfields.engine.extractor import FieldExtractor
from blockfields.engine.renderer import FieldRenderer
from blockfields.engine.validator import FieldValidator
from blockfields.models.config import FieldsInput
from blockfields.models.results import ValidationResult
from blockfields.registry import FieldRegistry
from blockfields.widgets.form_view import FormView

# Default registry instance (created on first access)
_default_registry: Optional[FieldRegistry] = None


def get_default_registry() -> FieldRegistry:
    """Get the shared registry seeded with every built-in field type."""
    global _default_registry
    if _default_registry is None:
        _default_registry = FieldRegistry.create_default()
    return _default_registry


def render_fields(
    fields: FieldsInput,
    data: Optional[Mapping[str, Any]] = None,
    container_class: Optional[str] = None,
) -> FormView:
    """Render a schema with the default registry."""
    return FieldRenderer(get_default_registry()).render(fields, data, container_class=container_class)


def extract_field_data(form: FormView, fields: Optional[FieldsInput] = None) -> Dict[str, Any]:
    """Extract a form's values, nulling hidden fields.

    Falls back to the schema the form was rendered from when ``fields`` is
    omitted.
    """
    schema = fields if fields is not None else form.schema
    return FieldExtractor(form.registry).extract(form, schema)


def validate_fields(fields: FieldsInput, data: Optional[Mapping[str, Any]]) -> ValidationResult:
    """Validate a value map with the default registry."""
    return FieldValidator(get_default_registry()).validate(fields, data)

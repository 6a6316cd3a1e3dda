"""Schema-driven form engine for Textual.

Turns a declarative field schema into a tree of Textual widgets, reads the
user's values back out, and validates them against the same schema.
Fields can show or hide themselves based on other fields' values, and
composite fields nest whole sub-forms.

Usage:
    from blockfields import render_fields, extract_field_data, validate_fields

    form = render_fields(schema, values)
    ...
    data = extract_field_data(form)
    result = validate_fields(schema, data)
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "FieldConfig",
    "FieldExtractor",
    "FieldRegistry",
    "FieldRenderer",
    "FieldValidator",
    "FormPreviewApp",
    "ValidationResult",
    "evaluate",
    "extract_field_data",
    "get_default_registry",
    "render_fields",
    "validate_fields",
]

_EXPORTS = {
    "FieldConfig": "blockfields.models.config",
    "ValidationResult": "blockfields.models.results",
    "FieldRegistry": "blockfields.registry",
    "evaluate": "blockfields.conditional",
    "FieldRenderer": "blockfields.engine.renderer",
    "FieldExtractor": "blockfields.engine.extractor",
    "FieldValidator": "blockfields.engine.validator",
    "render_fields": "blockfields.engine.helpers",
    "extract_field_data": "blockfields.engine.helpers",
    "validate_fields": "blockfields.engine.helpers",
    "get_default_registry": "blockfields.engine.helpers",
    "FormPreviewApp": "blockfields.app",
}


def __getattr__(name: str):
    """Lazy import of public components."""
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    import importlib

    return getattr(importlib.import_module(module_name), name)

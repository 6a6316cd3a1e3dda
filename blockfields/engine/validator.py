"""Validate orchestrator: schema and value map in, ValidationResult out."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from blockfields.conditional import resolve_visibility
from blockfields.models.config import FieldsInput, parse_fields
from blockfields.models.results import ValidationResult
from blockfields.registry import FieldRegistry

logger = logging.getLogger(__name__)


class FieldValidator:
    """Validates a value map against a schema, skipping hidden fields."""

    def __init__(self, registry: FieldRegistry):
        self.registry = registry

    def validate(self, fields: FieldsInput, data: Optional[Mapping[str, Any]]) -> ValidationResult:
        """Validate every visible field and collect all errors.

        Returns:
            ValidationResult whose ``field_errors`` is only set when there
            are errors.
        """
        schema = parse_fields(fields)
        data = data if isinstance(data, Mapping) else {}
        visibility = resolve_visibility(schema, data)

        result = ValidationResult()
        field_errors: dict = {}

        for name, config in schema.items():
            if not visibility[name]:
                continue
            handler = self.registry.get(config.type)
            field_result = handler.validate(config, data.get(name))
            result.extend(field_result)
            if field_result.errors:
                field_errors[name] = list(field_result.errors)

        if result.errors:
            result.field_errors = field_errors
            logger.debug(f"Validation failed for {sorted(field_errors)}")
        return result

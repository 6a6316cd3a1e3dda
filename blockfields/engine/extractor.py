"""Extract orchestrator: FormView in, value map out."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from blockfields.conditional import resolve_visibility
from blockfields.models.config import FieldsInput, parse_fields
from blockfields.registry import FieldRegistry
from blockfields.widgets.field_wrapper import FormField
from blockfields.widgets.form_view import FormView

logger = logging.getLogger(__name__)


class FieldExtractor:
    """Reads a value map back out of a rendered form."""

    def __init__(self, registry: FieldRegistry):
        self.registry = registry

    def extract_field(self, wrapper: FormField) -> Any:
        """Current value of one wrapper, via the handler named by its type tag."""
        if wrapper.failed:
            return None
        if not self.registry.has(wrapper.field_type):
            logger.warning(f"No handler for field type '{wrapper.field_type}' of '{wrapper.field_name}'")
            return None
        return self.registry.get(wrapper.field_type).extract(wrapper.control)

    def extract(self, form: FormView, fields: Optional[FieldsInput] = None) -> Dict[str, Any]:
        """Extract the values of a form's own fields.

        Nested composite rows own separate FormViews, so only this level's
        wrappers are read here. When ``fields`` is given, visibility is
        recomputed from the extracted values and hidden fields become None,
        whatever their controls hold.
        """
        if not isinstance(form, FormView):
            raise TypeError(f"Expected a FormView, got {type(form).__name__}")

        data = {name: self.extract_field(wrapper) for name, wrapper in form.fields.items()}

        if fields is not None:
            schema = parse_fields(fields)
            for name, visible in resolve_visibility(schema, data).items():
                if not visible and name in data:
                    data[name] = None

        return data

"""Render orchestrator: schema and values in, FormView out."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from blockfields.conditional import resolve_visibility
from blockfields.engine.extractor import FieldExtractor
from blockfields.exceptions import BlockFieldsError
from blockfields.models.config import FieldConfig, FieldsInput, parse_fields
from blockfields.registry import FieldRegistry
from blockfields.settings import FormSettings, get_settings
from blockfields.widgets.field_wrapper import FieldErrorPlaceholder, FormField
from blockfields.widgets.form_view import FormView

logger = logging.getLogger(__name__)


class FieldRenderer:
    """Materializes a field schema into a FormView.

    Example:
        >>> renderer = FieldRenderer(FieldRegistry.create_default())
        >>> form = renderer.render({"title": {"type": "text"}}, {"title": "Hello"})
    """

    def __init__(self, registry: FieldRegistry, settings: Optional[FormSettings] = None):
        """Initialize renderer.

        Args:
            registry: Handlers used to build each field's control
            settings: Fade duration and container class (defaults to project settings)
        """
        self.registry = registry
        self.settings = settings or get_settings()

    def render_field(self, name: str, config: FieldConfig, value: Any) -> FormField:
        """Build one field's wrapper.

        Unknown types raise; any other failure inside the handler is logged
        and replaced by an error placeholder so the rest of the form renders.
        """
        handler = self.registry.get(config.type)
        try:
            control = handler.render(config, value)
        except BlockFieldsError:
            raise
        except Exception as exc:
            logger.exception(f"Failed to render field '{name}' of type '{config.type}'")
            return FormField(
                name,
                config,
                FieldErrorPlaceholder(name, exc),
                field_type=config.type,
                failed=True,
            )
        return FormField(name, config, control, field_type=config.type)

    def render(
        self,
        fields: FieldsInput,
        data: Optional[Mapping[str, Any]] = None,
        *,
        container_class: Optional[str] = None,
        nested: bool = False,
    ) -> FormView:
        """Render every field of a schema level.

        Args:
            fields: Schema map (raw mappings or FieldConfig)
            data: Initial values by field name
            container_class: CSS class for the root (defaults to settings)
            nested: Whether the form sits inside a composite row

        Returns:
            FormView holding one FormField per schema entry.
        """
        schema = parse_fields(fields)
        data = data if isinstance(data, Mapping) else {}

        classes = container_class if container_class is not None else self.settings.container_class
        form = FormView(
            schema,
            self.registry,
            fade_duration=self.settings.fade_duration,
            nested=nested,
            classes=None if nested else classes or None,
        )
        for name, config in schema.items():
            form.add_field(self.render_field(name, config, data.get(name)))

        # Controls may hold defaults the caller did not pass, so read them back
        values = FieldExtractor(self.registry).extract(form)
        for name, visible in resolve_visibility(schema, values).items():
            if not visible:
                form.fields[name].set_hidden(True)

        return form

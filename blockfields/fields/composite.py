"""Composite field types: repeater, flexible, group and tabs.

Each composite renders, extracts and validates its nested schemas with its
own registry and orchestrators. The registry is built on first use and
leaves out the composite's own type names, so a repeater cannot register
itself while it is being registered.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable, Mapping, Optional

from textual.widget import Widget

from blockfields.conditional import is_empty
from blockfields.fields.base import FieldType
from blockfields.models.config import FieldConfig, Section
from blockfields.models.results import ValidationResult
from blockfields.registry import FieldRegistry
from blockfields.widgets.form_view import FormView
from blockfields.widgets.rows import FlexibleControl, GroupControl, RepeaterControl, TabsControl, row_bound

logger = logging.getLogger(__name__)


class CompositeField(FieldType):
    """Base for handlers whose value is one or more nested field schemas."""

    # Type names left out of the private registry
    own_types: Iterable[str] = ()

    def __init__(self, registry: Optional[FieldRegistry] = None):
        """Initialize the handler.

        Args:
            registry: Registry for nested fields; built lazily from the
                defaults (minus ``own_types``) when omitted
        """
        self._registry = registry
        self._renderer = None
        self._extractor = None
        self._validator = None

    @property
    def registry(self) -> FieldRegistry:
        if self._registry is None:
            self._registry = FieldRegistry.create_default(exclude=self.own_types)
        return self._registry

    @property
    def renderer(self):
        if self._renderer is None:
            from blockfields.engine.renderer import FieldRenderer

            self._renderer = FieldRenderer(self.registry)
        return self._renderer

    @property
    def extractor(self):
        if self._extractor is None:
            from blockfields.engine.extractor import FieldExtractor

            self._extractor = FieldExtractor(self.registry)
        return self._extractor

    @property
    def validator(self):
        if self._validator is None:
            from blockfields.engine.validator import FieldValidator

            self._validator = FieldValidator(self.registry)
        return self._validator

    def render_nested(self, fields: Mapping[str, FieldConfig], data: Any) -> FormView:
        return self.renderer.render(fields, data if isinstance(data, Mapping) else {}, nested=True)


class RepeaterField(CompositeField):
    """Repeated rows sharing one nested schema; the value is a list of dicts."""

    own_types = ("repeater", "repeated")

    def render(self, config: FieldConfig, value: Any) -> Widget:
        rows = value if isinstance(value, list) else config.default_value
        if not isinstance(rows, list):
            rows = []
        return RepeaterControl(config, rows, lambda data: self.render_nested(config.fields, data))

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, RepeaterControl):
            return []
        return [self.extractor.extract(row.form, control.config.fields) for row in control.rows]

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        result = ValidationResult()
        label = self.label_for(config)

        if value is not None and not isinstance(value, list):
            result.add_error(self.error(config, f"{label} must be an array", "INVALID_TYPE"))
            return result
        rows = value or []

        if config.required and not rows:
            result.add_error(self.error(config, f"{label} is required", "REQUIRED"))

        minimum, maximum = row_bound(config.min), row_bound(config.max)
        if minimum is not None and len(rows) < minimum:
            plural = "" if minimum == 1 else "s"
            result.add_error(self.error(config, f"{label} must have at least {minimum} row{plural}", "MIN_ROWS"))
        if maximum is not None and len(rows) > maximum:
            plural = "" if maximum == 1 else "s"
            result.add_error(self.error(config, f"{label} must not exceed {maximum} row{plural}", "MAX_ROWS"))

        if config.fields:
            for index, row in enumerate(rows):
                row_result = self.validator.validate(config.fields, row if isinstance(row, Mapping) else {})
                result.extend(row_result, prefix=f"Row {index + 1}: ")
        return result


class FlexibleField(CompositeField):
    """Ordered blocks, each using one of the named ``layouts``.

    The value is a list of ``{layout, fields}``; every block is extracted and
    validated through its own layout's schema.
    """

    own_types = ("flexible",)

    def render(self, config: FieldConfig, value: Any) -> Widget:
        blocks = value if isinstance(value, list) else config.default_value
        if not isinstance(blocks, list):
            blocks = []
        blocks = [block for block in blocks if isinstance(block, Mapping)]
        return FlexibleControl(
            config,
            blocks,
            lambda section, data: self.render_nested(section.fields, data),
        )

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, FlexibleControl):
            return []
        blocks = []
        for row in control.rows:
            section = control.layouts.get(row.block_layout) if isinstance(row.block_layout, str) else None
            if row.form is None or section is None:
                continue
            blocks.append({"layout": row.block_layout, "fields": self.extractor.extract(row.form, section.fields)})
        return blocks

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        result = ValidationResult()
        label = self.label_for(config)
        blocks = value if isinstance(value, list) else []

        if config.required and not blocks:
            result.add_error(self.error(config, f"{label} is required", "REQUIRED"))

        minimum, maximum = row_bound(config.min), row_bound(config.max)
        if minimum is not None and len(blocks) < minimum:
            result.add_error(self.error(config, f"{label} must have at least {minimum} block(s)", "MIN_BLOCKS"))
        if maximum is not None and len(blocks) > maximum:
            result.add_error(self.error(config, f"{label} must have at most {maximum} block(s)", "MAX_BLOCKS"))

        for index, block in enumerate(blocks):
            layout = block.get("layout") if isinstance(block, Mapping) else None
            section: Optional[Section] = config.layouts.get(layout) if isinstance(layout, str) else None
            if section is None:
                result.add_error(
                    self.error(config, f"Block {index + 1}: unknown layout '{layout}'", "UNKNOWN_LAYOUT")
                )
                continue
            block_result = self.validator.validate(section.fields, block.get("fields") or {})
            result.extend(block_result, prefix=f"Block {index + 1} ({section.label}): ")
        return result


class GroupField(CompositeField):
    """A fixed set of nested fields stored as one dict."""

    own_types = ("group",)
    default_label = "Group"

    def render(self, config: FieldConfig, value: Any) -> Widget:
        data = value if isinstance(value, Mapping) else config.default_value
        return GroupControl(config, self.render_nested(config.fields, data))

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, GroupControl):
            return {}
        return self.extractor.extract(control.form, control.config.fields)

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        result = ValidationResult()
        label = self.label_for(config)

        if config.required:
            if not isinstance(value, Mapping) or not value or all(is_empty(v) for v in value.values()):
                result.add_error(self.error(config, f"{label} is required", "REQUIRED"))
                return result

        if config.fields:
            group_value = value if isinstance(value, Mapping) else {}
            result.extend(self.validator.validate(config.fields, group_value))
        return result


class TabsField(CompositeField):
    """Nested fields split across tabs; the value maps tab name to that tab's values."""

    own_types = ("tabs",)

    def render(self, config: FieldConfig, value: Any) -> Widget:
        data = value if isinstance(value, Mapping) else config.default_value
        data = data if isinstance(data, Mapping) else {}
        forms = {name: self.render_nested(section.fields, data.get(name)) for name, section in config.tabs.items()}
        return TabsControl(config, forms)

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, TabsControl):
            return {}
        return {
            name: self.extractor.extract(form, control.config.tabs[name].fields)
            for name, form in control.forms.items()
        }

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        result = ValidationResult()
        tabs_value = value if isinstance(value, Mapping) else {}
        for name, section in config.tabs.items():
            tab_result = self.validator.validate(section.fields, tabs_value.get(name) or {})
            for error in tab_result.errors + tab_result.warnings:
                result.add_error(replace(error, field=f"{section.label} > {error.field}"))
        return result


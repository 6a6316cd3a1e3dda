"""Choice field types: select, radio, checkbox and boolean."""

from __future__ import annotations

from typing import Any

from textual.widget import Widget

from blockfields.fields.base import FieldType
from blockfields.models.config import FieldConfig
from blockfields.models.results import ValidationResult
from blockfields.utils.values import as_text
from blockfields.widgets.controls import MultiSelectControl, RadioControl, SelectControl, ToggleControl


def coerce_bool(value: Any) -> bool:
    """Interpret stored checkbox values; the strings "true" and "1" count as checked."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1")
    if isinstance(value, (int, float)):
        return value == 1
    return False


class SelectField(FieldType):
    """Dropdown of ``options``; ``multiple`` switches to a checklist returning a list."""

    def render(self, config: FieldConfig, value: Any) -> Widget:
        options = [(str(opt.value), opt.label) for opt in config.options]
        initial = self.initial_value(value, config)
        if config.multiple:
            selected = initial if isinstance(initial, (list, tuple)) else [initial] if initial != "" else []
            return MultiSelectControl(options, [str(item) for item in selected])
        return SelectControl(options, as_text(initial), prompt=config.placeholder or "-- Select --")

    def extract(self, control: Widget) -> Any:
        if isinstance(control, MultiSelectControl):
            return list(control.value)
        if isinstance(control, SelectControl):
            return control.value
        return ""

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        result = ValidationResult()
        label = self.label_for(config)

        if not config.options:
            result.add_error(self.error(config, f"{label} has no options defined", "NO_OPTIONS"))
            return result

        valid_values = set(config.option_values())

        if config.multiple and isinstance(value, (list, tuple)):
            if config.required and len(value) == 0:
                result.add_error(self.error(config, f"{label} is required", "REQUIRED"))
            for item in value:
                if str(item) not in valid_values:
                    result.add_error(
                        self.error(
                            config,
                            f"{label} contains an invalid selection: {item} is not a valid option",
                            "INVALID_OPTION",
                        )
                    )
                    break
            return result

        return self.check_single(config, value, valid_values)

    def check_single(self, config: FieldConfig, value: Any, valid_values: set) -> ValidationResult:
        result = ValidationResult()
        label = self.label_for(config)
        if value is None or value == "":
            if config.required:
                result.add_error(self.error(config, f"{label} is required", "REQUIRED"))
            return result
        if str(value) not in valid_values:
            result.add_error(self.error(config, f"{label}: {value} is not a valid option", "INVALID_OPTION"))
        return result


class RadioField(SelectField):
    """Radio buttons; a required field starts with its first option chosen."""

    def render(self, config: FieldConfig, value: Any) -> Widget:
        options = [(str(opt.value), opt.label) for opt in config.options]
        initial = as_text(self.initial_value(value, config))
        if not initial and config.required and options:
            initial = options[0][0]
        return RadioControl(options, initial)

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, RadioControl):
            return ""
        return control.value

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        if not config.options:
            result = ValidationResult()
            label = self.label_for(config)
            result.add_error(self.error(config, f"{label} has no options defined", "NO_OPTIONS"))
            return result
        return self.check_single(config, value, set(config.option_values()))


class CheckboxField(FieldType):
    """Single checkbox; required means it must be ticked."""

    style = "checkbox"

    def render(self, config: FieldConfig, value: Any) -> Widget:
        initial = value if value is not None else config.default_value
        return ToggleControl(coerce_bool(initial), caption=config.label or "", style=self.style)

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, ToggleControl):
            return False
        return bool(control.value)

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        result = ValidationResult()
        if config.required and not self.is_checked(value):
            label = self.label_for(config)
            result.add_error(self.error(config, f"{label} must be checked", "REQUIRED"))
        return result

    def is_checked(self, value: Any) -> bool:
        return bool(value)


class BooleanField(CheckboxField):
    """True/false toggle shown as a checkbox or, with ``display: switch``, a switch."""

    def render(self, config: FieldConfig, value: Any) -> Widget:
        initial = value if value is not None else config.default_value
        style = "switch" if config.display == "switch" else "checkbox"
        caption = (config.label or "") if style == "checkbox" else ""
        return ToggleControl(coerce_bool(initial), caption=caption, style=style)

    def is_checked(self, value: Any) -> bool:
        return value is True

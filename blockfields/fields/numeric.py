"""Numeric field types: number and range."""

from __future__ import annotations

import math
from typing import Any, Optional, Union

from textual.widget import Widget

from blockfields.fields.base import FieldType
from blockfields.models.config import FieldConfig
from blockfields.models.results import ValidationResult
from blockfields.utils.values import as_text
from blockfields.widgets.controls import InputControl

Number = Union[int, float]


def parse_number(value: Any) -> Optional[Number]:
    """Parse user input into an int or float; None when it is not a finite number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    text = as_text(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


class NumberField(FieldType):
    """Free numeric entry. Blank or unparseable input extracts as None."""

    def render(self, config: FieldConfig, value: Any) -> Widget:
        return InputControl(
            as_text(self.initial_value(value, config)),
            placeholder=config.placeholder or "",
            input_type="number",
        )

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, InputControl):
            return None
        return parse_number(control.value)

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        result = ValidationResult()
        label = self.label_for(config)

        if value is None or value == "":
            if config.required:
                result.add_error(self.error(config, f"{label} is required", "REQUIRED"))
            return result

        number = parse_number(value)
        if number is None:
            result.add_error(self.error(config, f"{label} must be a valid number", "INVALID_NUMBER"))
            return result

        self.check_bounds(config, number, parse_number(config.min), parse_number(config.max), result)
        return result

    def check_bounds(
        self,
        config: FieldConfig,
        number: Number,
        minimum: Optional[Number],
        maximum: Optional[Number],
        result: ValidationResult,
    ) -> None:
        label = self.label_for(config)
        if minimum is not None and number < minimum:
            result.add_error(self.error(config, f"{label} must be at least {minimum}", "MIN_VALUE"))
        if maximum is not None and number > maximum:
            result.add_error(self.error(config, f"{label} must not exceed {maximum}", "MAX_VALUE"))


class RangeField(NumberField):
    """Bounded slider-style value; ``min`` defaults to 0, ``max`` to 100, ``step`` to 1."""

    DEFAULT_MIN = 0
    DEFAULT_MAX = 100

    def bounds(self, config: FieldConfig) -> tuple:
        minimum = parse_number(config.min)
        maximum = parse_number(config.max)
        return (
            self.DEFAULT_MIN if minimum is None else minimum,
            self.DEFAULT_MAX if maximum is None else maximum,
        )

    def render(self, config: FieldConfig, value: Any) -> Widget:
        minimum, maximum = self.bounds(config)
        step = config.step if config.step is not None else 1
        return InputControl(
            as_text(self.initial_value(value, config, fallback=0)),
            placeholder=f"{minimum} to {maximum}, step {step}",
            input_type="number",
        )

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, InputControl):
            return 0
        number = parse_number(control.value)
        return 0 if number is None else number

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        result = ValidationResult()
        number = parse_number(value)
        if number is None:
            label = self.label_for(config)
            result.add_error(self.error(config, f"{label} must be a valid number", "INVALID_NUMBER"))
            return result
        minimum, maximum = self.bounds(config)
        self.check_bounds(config, number, minimum, maximum, result)
        return result

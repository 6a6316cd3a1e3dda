"""Base class for field-type handlers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from textual.widget import Widget

from blockfields.models.config import FieldConfig
from blockfields.models.results import ValidationError, ValidationResult


class FieldType(ABC):
    """Renders, extracts and validates one kind of field.

    Subclasses implement three operations:

    - ``render(config, value)`` builds the control widget for a value
    - ``extract(control)`` reads the value back out of that control
    - ``validate(config, value)`` checks a value against the field's constraints

    Validation never raises for bad data; problems are returned as
    ValidationError entries.
    """

    # Label used in error messages when the schema node has none
    default_label = "Field"

    @abstractmethod
    def render(self, config: FieldConfig, value: Any) -> Widget:
        """Build the control widget for ``value``."""

    @abstractmethod
    def extract(self, control: Widget) -> Any:
        """Read the current value from a control built by ``render``."""

    @abstractmethod
    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        """Check ``value`` against the field's constraints."""

    def label_for(self, config: FieldConfig) -> str:
        return config.get_label(self.default_label)

    def error(
        self,
        config: FieldConfig,
        message: str,
        code: Optional[str] = None,
        severity: str = "error",
    ) -> ValidationError:
        return ValidationError(field=self.label_for(config), message=message, code=code, severity=severity)

    @staticmethod
    def initial_value(value: Any, config: FieldConfig, fallback: Any = "") -> Any:
        """The value to render: ``value``, else the schema default, else ``fallback``."""
        if value is not None and value != "":
            return value
        if config.default_value is not None:
            return config.default_value
        return fallback

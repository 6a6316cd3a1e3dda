"""Free-text field types: text, textarea, email, password and wysiwyg."""

from __future__ import annotations

import logging
import re
from typing import Any

from textual.widget import Widget

from blockfields.fields.base import FieldType
from blockfields.models.config import FieldConfig
from blockfields.models.results import ValidationResult
from blockfields.utils.values import as_text, strip_markup
from blockfields.widgets.controls import InputControl, TextAreaControl

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$"
)


class TextField(FieldType):
    """Single-line text. Extraction trims surrounding whitespace."""

    max_length_message = "{label} must not exceed {limit} characters"

    def render(self, config: FieldConfig, value: Any) -> Widget:
        return InputControl(
            as_text(self.initial_value(value, config)),
            placeholder=config.placeholder or "",
            max_length=config.max_length,
        )

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, InputControl):
            return ""
        return control.value.strip()

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        return self.check_length(config, as_text(value))

    def check_length(
        self,
        config: FieldConfig,
        text: str,
        measured: str | None = None,
        use_pattern: bool = True,
    ) -> ValidationResult:
        """Required and length checks shared by the text-like types.

        Args:
            config: Field schema node
            text: Value as entered
            measured: Text the length limits apply to (defaults to ``text``)
            use_pattern: Whether ``config.pattern`` is enforced
        """
        result = ValidationResult()
        label = self.label_for(config)
        measured = text if measured is None else measured

        if measured.strip() == "":
            if config.required:
                result.add_error(self.error(config, f"{label} is required", "REQUIRED"))
            return result

        if config.min_length is not None and len(measured) < config.min_length:
            result.add_error(
                self.error(config, f"{label} must be at least {config.min_length} characters", "MIN_LENGTH")
            )
        if config.max_length is not None and len(measured) > config.max_length:
            result.add_error(
                self.error(
                    config,
                    self.max_length_message.format(label=label, limit=config.max_length),
                    "MAX_LENGTH",
                )
            )
        if use_pattern and config.pattern and not self._matches(config.pattern, text):
            result.add_error(self.error(config, f"{label} format is invalid", "PATTERN"))
        return result

    @staticmethod
    def _matches(pattern: str, text: str) -> bool:
        try:
            return re.search(pattern, text) is not None
        except re.error as exc:
            logger.warning(f"Ignoring invalid pattern {pattern!r}: {exc}")
            return True


class TextareaField(TextField):
    """Multi-line text; ``rows`` sets the visible height."""

    def render(self, config: FieldConfig, value: Any) -> Widget:
        return TextAreaControl(as_text(self.initial_value(value, config)), rows=config.rows or 4)

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, TextAreaControl):
            return ""
        return control.value.strip()

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        # Patterns only apply to single-line text
        return self.check_length(config, as_text(value), use_pattern=False)


class EmailField(TextField):
    """Email address. Extraction trims and lower-cases."""

    default_label = "Email"

    def render(self, config: FieldConfig, value: Any) -> Widget:
        return InputControl(
            as_text(self.initial_value(value, config)),
            placeholder=config.placeholder or "name@example.com",
        )

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, InputControl):
            return ""
        return control.value.strip().lower()

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        result = ValidationResult()
        label = self.label_for(config)
        text = as_text(value)

        if text.strip() == "":
            if config.required:
                result.add_error(self.error(config, f"{label} is required", "REQUIRED"))
            return result

        if ".." in text or not EMAIL_PATTERN.match(text):
            result.add_error(self.error(config, f"{label} must be a valid email address", "INVALID_EMAIL"))
        return result


class PasswordField(TextField):
    """Masked secret entry. Whitespace is significant, so nothing is trimmed."""

    max_length_message = "{label} cannot exceed {limit} characters"

    def render(self, config: FieldConfig, value: Any) -> Widget:
        return InputControl(
            as_text(self.initial_value(value, config)),
            placeholder=config.placeholder or "",
            password=True,
        )

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, InputControl):
            return ""
        return control.value

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        text = as_text(value)
        result = ValidationResult()
        label = self.label_for(config)
        if text == "":
            if config.required:
                result.add_error(self.error(config, f"{label} is required", "REQUIRED"))
            return result
        # A password of spaces is still a password; measure it verbatim
        if config.min_length is not None and len(text) < config.min_length:
            result.add_error(
                self.error(config, f"{label} must be at least {config.min_length} characters", "MIN_LENGTH")
            )
        if config.max_length is not None and len(text) > config.max_length:
            result.add_error(
                self.error(config, self.max_length_message.format(label=label, limit=config.max_length), "MAX_LENGTH")
            )
        return result


class WysiwygField(TextField):
    """Rich text stored as markup; limits apply to the visible text."""

    max_length_message = "{label} must be at most {limit} characters"

    def render(self, config: FieldConfig, value: Any) -> Widget:
        return TextAreaControl(as_text(self.initial_value(value, config)), rows=config.rows or 8)

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, TextAreaControl):
            return ""
        if strip_markup(control.value).strip() == "":
            return ""
        return control.value

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        text = as_text(value)
        return self.check_length(config, text, strip_markup(text), use_pattern=False)

"""Labelled wrapper placed around every rendered field control."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widget import Widget
from textual.widgets import Label, Static

from blockfields.models.config import FieldConfig

if TYPE_CHECKING:
    from blockfields.widgets.form_view import FormView

logger = logging.getLogger(__name__)


class FieldErrorPlaceholder(Static):
    """Shown in place of a control whose handler failed to render."""

    DEFAULT_CSS = """
    FieldErrorPlaceholder {
        color: $error;
        border: round $error;
        padding: 0 1;
        height: auto;
    }
    """

    def __init__(self, field_name: str, error: Exception) -> None:
        super().__init__(escape(f"Unable to render field '{field_name}': {error}"))
        self.field_name = field_name
        self.error = error


class FormField(Vertical):
    """Wrapper holding one field's label, control, description and error slot.

    Attributes:
        field_name: Key of the field in its schema map
        field_type: Registry key the control was rendered with; extraction
            dispatches on it
        config: Schema node the field was rendered from
        control: Widget returned by the handler (or an error placeholder)
        form: FormView that owns this wrapper
        row_index: Position of the owning composite row, if any
        conditional_hidden: Whether the field's conditional currently hides it
        failed: Whether rendering fell back to an error placeholder
    """

    DEFAULT_CSS = """
    FormField {
        height: auto;
        margin-bottom: 1;
    }

    FormField .field-label {
        color: $text;
        margin-bottom: 0;
    }

    FormField .help-text {
        color: $text-muted;
        height: auto;
        margin-top: 0;
    }

    FormField .error-text {
        color: $error;
        height: auto;
        margin-top: 0;
    }

    FormField.-conditional-hidden {
        display: none;
    }
    """

    def __init__(
        self,
        field_name: str,
        config: FieldConfig,
        control: Widget,
        *,
        field_type: str,
        failed: bool = False,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.field_name = field_name
        self.field_type = field_type
        self.config = config
        self.control = control
        self.failed = failed
        self.form: FormView | None = None
        self.row_index: int | None = None
        self.conditional_hidden = False
        self.error_message = ""
        self.error_slot = Static("", classes="error-text")
        if config.class_name:
            self.add_class(*config.class_name.split())

    def compose(self) -> ComposeResult:
        """Compose the wrapper layout."""
        label = self.config.label
        if label and not getattr(self.control, "inline_label", False):
            label_display = escape(label)
            if self.config.required:
                label_display = f"{label_display} [red]*[/red]"
            yield Label(label_display, classes="field-label")
        yield self.control
        if self.config.description:
            yield Static(escape(self.config.description), classes="help-text")
        yield self.error_slot

    def set_hidden(self, hidden: bool, fade_duration: float = 0.0) -> None:
        """Hide or show the field without removing it from the tree.

        Showing a mounted field fades it in over ``fade_duration`` seconds.
        """
        self.conditional_hidden = hidden
        self.display = not hidden
        self.set_class(hidden, "-conditional-hidden")
        if hidden:
            self.clear_error()
        elif fade_duration > 0 and self.is_mounted:
            self.styles.opacity = 0.0
            self.styles.animate("opacity", value=1.0, duration=fade_duration)
        logger.debug(f"Field '{self.field_name}' {'hidden' if hidden else 'shown'}")

    def set_error(self, messages: Iterable[str]) -> None:
        """Show messages in this field's error slot; hidden fields stay clean."""
        self.error_message = "" if self.conditional_hidden else "\n".join(messages)
        self.error_slot.update(escape(self.error_message))
        self.set_class(bool(self.error_message), "-invalid")

    def clear_error(self) -> None:
        self.set_error([])

    def set_row_index(self, index: int | None) -> None:
        self.row_index = index

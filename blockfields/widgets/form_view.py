"""Root container of a rendered form."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING, Any

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widget import Widget

from blockfields.conditional import build_dependents, evaluate
from blockfields.models.config import FieldConfig
from blockfields.models.results import ValidationResult
from blockfields.widgets.controls import FieldControl
from blockfields.widgets.field_wrapper import FormField

if TYPE_CHECKING:
    from blockfields.registry import FieldRegistry

logger = logging.getLogger(__name__)


class FormView(Vertical):
    """Holds one schema level's FormField wrappers and keeps their visibility current.

    Controls publish ``FieldControl.Edited``/``FieldControl.Changed``; both
    bubble here, where the dependents of the changed field are re-evaluated
    before the handler returns. A field that becomes hidden hides its own
    dependents in the same pass.

    Attributes:
        schema: Parsed schema this form was rendered from
        registry: Registry used to read live values
        fields: Wrappers by field name, in schema order
        dependents: Watched field name to the names of fields watching it
    """

    DEFAULT_CSS = """
    FormView {
        height: auto;
    }

    FormView.-nested {
        padding-left: 1;
        border-left: tall $primary-background;
    }
    """

    def __init__(
        self,
        schema: dict[str, FieldConfig],
        registry: "FieldRegistry",
        *,
        fade_duration: float = 0.0,
        nested: bool = False,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.schema = schema
        self.registry = registry
        self.fade_duration = fade_duration
        self.nested = nested
        self.fields: dict[str, FormField] = {}
        self.dependents = build_dependents(schema)
        self.set_class(nested, "-nested")

    def compose(self) -> ComposeResult:
        yield from self.fields.values()

    def add_field(self, wrapper: FormField) -> None:
        """Attach a wrapper to this form (mounting it if the form is live)."""
        wrapper.form = self
        self.fields[wrapper.field_name] = wrapper
        if self.is_mounted:
            self.mount(wrapper)

    def get_field(self, name: str) -> FormField | None:
        return self.fields.get(name)

    def set_row_index(self, index: int | None) -> None:
        """Stamp every wrapper of this form with its composite row index."""
        for wrapper in self.fields.values():
            wrapper.set_row_index(index)

    def on_field_control_edited(self, event: FieldControl.Edited) -> None:
        """Continuous input (typing)."""
        self._handle_published(event.field_control)

    def on_field_control_changed(self, event: FieldControl.Changed) -> None:
        """Discrete change (selection, toggle, rows)."""
        self._handle_published(event.field_control)

    def _handle_published(self, control: Widget) -> None:
        wrapper = self._owning_field(control)
        if wrapper is not None and wrapper.field_name in self.dependents:
            self.refresh_dependents(wrapper.field_name)

    def _owning_field(self, widget: Widget) -> FormField | None:
        """Nearest wrapper above ``widget`` that belongs to this form."""
        for node in widget.ancestors_with_self:
            if isinstance(node, FormField) and node.form is self:
                return node
            if node is self:
                break
        return None

    def live_value(self, name: str) -> Any:
        """Current value of one field, read through its handler."""
        from blockfields.engine.extractor import FieldExtractor

        wrapper = self.fields.get(name)
        if wrapper is None:
            return None
        return FieldExtractor(self.registry).extract_field(wrapper)

    def refresh_dependents(self, name: str) -> list[str]:
        """Re-evaluate the fields that watch ``name``, cascading through chains.

        Returns:
            Names of the fields whose visibility changed.
        """
        toggled: list[str] = []
        visited = {name}
        queue = deque([name])

        while queue:
            watched = queue.popleft()
            source = self.fields.get(watched)
            if source is None:
                continue
            watched_visible = not source.conditional_hidden
            value = self.live_value(watched)

            for dependent in self.dependents.get(watched, []):
                wrapper = self.fields.get(dependent)
                conditional = self.schema[dependent].conditional
                if wrapper is None or conditional is None:
                    continue
                visible = watched_visible and evaluate(conditional, value)
                if visible == (not wrapper.conditional_hidden):
                    continue
                wrapper.set_hidden(not visible, self.fade_duration)
                toggled.append(dependent)
                if dependent not in visited:
                    visited.add(dependent)
                    queue.append(dependent)

        if toggled:
            logger.debug(f"Change to '{name}' toggled {toggled}")
        return toggled

    def show_errors(self, result: ValidationResult) -> None:
        """Write each field's messages into its own error slot, clearing the rest."""
        field_errors = result.field_errors or {}
        for name, wrapper in self.fields.items():
            if wrapper.conditional_hidden:
                wrapper.clear_error()
                continue
            wrapper.set_error(error.message for error in field_errors.get(name, []))

    def clear_errors(self) -> None:
        for wrapper in self.fields.values():
            wrapper.clear_error()

"""Textual application for previewing a field schema as a live form.

Renders the schema, lets the user fill it in, and on ctrl+s extracts the
values, validates them, marks failing fields and shows the extracted data
as YAML beside the form.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import yaml
from rich.markup import escape
from textual.app import App, ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Footer, Header, Static

from blockfields.engine.extractor import FieldExtractor
from blockfields.engine.renderer import FieldRenderer
from blockfields.engine.validator import FieldValidator
from blockfields.models.config import FieldsInput, parse_fields
from blockfields.models.results import ValidationResult
from blockfields.registry import FieldRegistry
from blockfields.settings import FormSettings, get_settings
from blockfields.widgets.form_view import FormView

logger = logging.getLogger(__name__)


class FormPreviewApp(App):
    """Single-screen form preview.

    Attributes:
        schema: Parsed schema being previewed
        form: Rendered root FormView
        last_values: Values from the most recent validate action
        last_result: Result of the most recent validate action
    """

    TITLE = "blockfields preview"

    BINDINGS = [
        ("ctrl+s", "validate", "Validate"),
        ("ctrl+q", "quit", "Quit"),
    ]

    CSS = """
    #main {
        height: 1fr;
    }

    #form-panel {
        width: 2fr;
        padding: 0 1;
    }

    #side-panel {
        width: 1fr;
        border-left: solid $primary;
        padding: 0 1;
    }

    #status {
        height: auto;
        padding: 1 0;
    }

    #status.-valid {
        color: $success;
    }

    #status.-invalid {
        color: $error;
    }
    """

    def __init__(
        self,
        schema: FieldsInput,
        data: Mapping[str, Any] | None = None,
        *,
        settings: FormSettings | None = None,
        registry: FieldRegistry | None = None,
    ) -> None:
        """Initialize the preview app.

        Args:
            schema: Field schema map (raw mappings or FieldConfig)
            data: Initial values by field name
            settings: Form settings (defaults to project settings)
            registry: Field types to render with (defaults to the built-ins)
        """
        super().__init__()
        self.settings = settings or get_settings()
        self.registry = registry or FieldRegistry.create_default()
        self.schema = parse_fields(schema)
        self.form: FormView = FieldRenderer(self.registry, self.settings).render(self.schema, data)
        self.last_values: dict[str, Any] | None = None
        self.last_result: ValidationResult | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main"):
            with VerticalScroll(id="form-panel"):
                yield self.form
            with VerticalScroll(id="side-panel"):
                yield Static("", id="status")
                yield Static("[dim]Press ctrl+s to validate.[/dim]", id="preview")
        yield Footer()

    def action_validate(self) -> None:
        """Extract, validate and show the outcome."""
        values = FieldExtractor(self.registry).extract(self.form, self.schema)
        result = FieldValidator(self.registry).validate(self.schema, values)
        self.form.show_errors(result)
        self.last_values = values
        self.last_result = result

        status = self.query_one("#status", Static)
        status.set_class(result.valid, "-valid")
        status.set_class(not result.valid, "-invalid")
        if result.valid:
            status.update("Valid")
        else:
            status.update(f"{len(result.errors)} error(s)")
            logger.info(f"Validation failed with {len(result.errors)} error(s)")

        lines = [escape(yaml.safe_dump(values, sort_keys=False, allow_unicode=True))]
        for warning in result.warnings:
            lines.append(f"[yellow]{escape(warning.field)}: {escape(warning.message)}[/yellow]")
        self.query_one("#preview", Static).update("\n".join(lines))

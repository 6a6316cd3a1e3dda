"""Shared fixtures for Textual interaction tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest
from textual.app import App, ComposeResult

from blockfields.engine.renderer import FieldRenderer
from blockfields.widgets.form_view import FormView


class FormHost(App):
    """Minimal app that mounts one rendered form."""

    def __init__(self, form: FormView) -> None:
        super().__init__()
        self.form = form

    def compose(self) -> ComposeResult:
        yield self.form


@pytest.fixture
def host(renderer: FieldRenderer) -> Callable[..., FormHost]:
    """Build a FormHost around a freshly rendered schema."""

    def build(schema: dict[str, Any], data: dict[str, Any] | None = None) -> FormHost:
        return FormHost(renderer.render(schema, data))

    return build

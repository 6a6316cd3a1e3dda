"""Tests for the render orchestrator."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from blockfields.engine.extractor import FieldExtractor
from blockfields.engine.renderer import FieldRenderer
from blockfields.exceptions import FieldTypeNotRegisteredError, InvalidConditionalError
from blockfields.fields.base import FieldType
from blockfields.models.config import FieldConfig
from blockfields.models.results import ValidationResult
from blockfields.registry import FieldRegistry
from blockfields.settings import FormSettings
from blockfields.widgets.field_wrapper import FieldErrorPlaceholder, FormField
from blockfields.widgets.form_view import FormView


class ExplodingField(FieldType):
    """Handler whose render always fails."""

    def render(self, config: FieldConfig, value: Any):
        raise RuntimeError("kaboom")

    def extract(self, control):
        return "never"

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        return ValidationResult()


class TestFieldRenderer:
    """Tests for FieldRenderer.render."""

    def test_wrappers_in_schema_order(self, renderer: FieldRenderer) -> None:
        form = renderer.render(
            {"title": {"type": "text", "label": "Title"}, "count": {"type": "number"}},
            {"title": "Hello"},
        )
        assert isinstance(form, FormView)
        assert list(form.fields) == ["title", "count"]
        wrapper = form.fields["title"]
        assert isinstance(wrapper, FormField)
        assert wrapper.field_name == "title"
        assert wrapper.field_type == "text"
        assert wrapper.form is form
        assert wrapper.control.value == "Hello"

    def test_container_class(self, registry: FieldRegistry) -> None:
        renderer = FieldRenderer(registry, FormSettings(container_class="hero-fields"))
        assert renderer.render({}).has_class("hero-fields")
        assert renderer.render({}, container_class="custom").has_class("custom")

    def test_nested_forms_skip_container_class(self, renderer: FieldRenderer) -> None:
        form = renderer.render({}, nested=True)
        assert form.has_class("-nested")
        assert not form.has_class("form-fields")

    def test_rows_render_without_placeholder(self, renderer: FieldRenderer, extractor: FieldExtractor) -> None:
        """Repeater rows and flexible blocks build real controls and extract their values."""
        schema = {
            "items": {"type": "repeated", "min": 1, "max": 3, "fields": {"name": {"type": "text"}}},
            "body": {
                "type": "flexible",
                "layouts": {"quote": {"label": "Quote", "fields": {"text": {"type": "textarea"}}}},
            },
        }
        data = {
            "items": [{"name": "a"}, {"name": "b"}],
            "body": [{"layout": "quote", "fields": {"text": "Be kind"}}],
        }
        form = renderer.render(schema, data)

        for name in ("items", "body"):
            assert form.fields[name].failed is False
            assert not isinstance(form.fields[name].control, FieldErrorPlaceholder)
        assert extractor.extract(form, schema) == data

    def test_initial_visibility_uses_defaults(self, renderer: FieldRenderer, cta_schema: dict) -> None:
        schema = dict(cta_schema)
        schema["showCTA"] = {**cta_schema["showCTA"], "defaultValue": True}
        form = renderer.render(schema)
        assert form.fields["ctaText"].conditional_hidden is False

    def test_initial_visibility(self, renderer: FieldRenderer, cta_schema: dict) -> None:
        hidden = renderer.render(cta_schema, {"showCTA": False})
        assert hidden.fields["ctaText"].conditional_hidden is True
        assert hidden.fields["ctaText"].display is False
        assert hidden.fields["ctaText"].has_class("-conditional-hidden")

        shown = renderer.render(cta_schema, {"showCTA": True})
        assert shown.fields["ctaText"].conditional_hidden is False

    def test_dependents_map(self, renderer: FieldRenderer, chain_schema: dict) -> None:
        form = renderer.render(chain_schema)
        assert form.dependents == {"kind": ["source"], "source": ["videoUrl"]}

    def test_unknown_type_raises(self, renderer: FieldRenderer) -> None:
        with pytest.raises(FieldTypeNotRegisteredError):
            renderer.render({"x": {"type": "hologram"}})

    def test_malformed_conditional_raises(self, renderer: FieldRenderer) -> None:
        with pytest.raises(InvalidConditionalError):
            renderer.render({"x": {"type": "text", "conditional": {"operator": "=="}}})

    def test_handler_failure_degrades(self, settings: FormSettings, caplog: pytest.LogCaptureFixture) -> None:
        """A failing handler yields a placeholder; the rest of the form renders."""
        registry = FieldRegistry.create_default()
        registry.register("exploding", ExplodingField())
        renderer = FieldRenderer(registry, settings)

        with caplog.at_level(logging.ERROR, logger="blockfields.engine.renderer"):
            form = renderer.render({"bad": {"type": "exploding"}, "good": {"type": "text"}}, {"good": "ok"})

        bad = form.fields["bad"]
        assert bad.failed is True
        assert isinstance(bad.control, FieldErrorPlaceholder)
        assert "Failed to render field 'bad'" in caplog.text
        assert form.fields["good"].control.value == "ok"

    def test_class_name_applied(self, renderer: FieldRenderer) -> None:
        form = renderer.render({"title": {"type": "text", "className": "wide bold"}})
        assert form.fields["title"].has_class("wide", "bold")


class TestRefreshDependents:
    """Tests for FormView.refresh_dependents without a running app."""

    def test_toggle_follows_value(self, renderer: FieldRenderer, cta_schema: dict) -> None:
        form = renderer.render(cta_schema, {"showCTA": False})
        form.fields["showCTA"].control.value = True

        assert form.refresh_dependents("showCTA") == ["ctaText"]
        assert form.fields["ctaText"].conditional_hidden is False

    def test_full_cascade(self, renderer: FieldRenderer, chain_schema: dict) -> None:
        """Hiding a field hides everything that watches it, transitively."""
        form = renderer.render(chain_schema, {"kind": "video", "source": "youtube"})
        assert not form.fields["videoUrl"].conditional_hidden

        form.fields["kind"].control.value = "text"
        toggled = form.refresh_dependents("kind")

        assert toggled == ["source", "videoUrl"]
        assert form.fields["source"].conditional_hidden
        assert form.fields["videoUrl"].conditional_hidden

        form.fields["kind"].control.value = "video"
        assert form.refresh_dependents("kind") == ["source", "videoUrl"]
        assert not form.fields["videoUrl"].conditional_hidden

    def test_hidden_field_has_no_error(self, renderer: FieldRenderer, cta_schema: dict) -> None:
        form = renderer.render(cta_schema, {"showCTA": False})
        form.fields["ctaText"].set_error(["CTA Text is required"])
        assert form.fields["ctaText"].error_message == ""

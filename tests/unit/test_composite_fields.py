"""Tests for repeater, flexible, group and tabs fields."""

from __future__ import annotations

from typing import Any

import pytest

from blockfields.fields import FlexibleField, GroupField, RepeaterField, TabsField
from blockfields.models.config import FieldConfig
from blockfields.widgets.rows import FlexibleControl, GroupControl, RepeaterControl, TabsControl


def codes(result) -> list:
    return [error.code for error in result.errors]


@pytest.fixture
def repeater_config(team_schema: dict[str, Any]) -> FieldConfig:
    return FieldConfig.from_dict(team_schema["members"], name="members")


@pytest.fixture
def flexible_config() -> FieldConfig:
    return FieldConfig.from_dict(
        {
            "type": "flexible",
            "label": "Content",
            "max": 2,
            "layouts": {
                "hero": {"label": "Hero", "fields": {"heading": {"type": "text", "label": "Heading", "required": True}}},
                "quote": {"label": "Quote", "fields": {"text": {"type": "textarea", "label": "Text"}}},
            },
        }
    )


class TestRepeaterField:
    """Tests for RepeaterField."""

    def test_render_and_extract(self, repeater_config: FieldConfig) -> None:
        handler = RepeaterField()
        rows = [{"name": "Ada", "role": "lead"}, {"name": "Linus", "role": "member"}]
        control = handler.render(repeater_config, rows)

        assert isinstance(control, RepeaterControl)
        assert len(control.rows) == 2
        assert handler.extract(control) == rows

    def test_render_ignores_non_list(self, repeater_config: FieldConfig) -> None:
        control = RepeaterField().render(repeater_config, "oops")
        assert control.rows == []

    def test_add_row_respects_max(self, repeater_config: FieldConfig) -> None:
        control = RepeaterField().render(repeater_config, [{"name": "a"}, {"name": "b"}])
        assert control.add_row({"name": "c"}) is not None
        assert control.add_row({"name": "d"}) is None
        assert len(control.rows) == 3
        assert control.can_add() is False

    def test_remove_row_respects_min(self, repeater_config: FieldConfig) -> None:
        control = RepeaterField().render(repeater_config, [{"name": "a"}, {"name": "b"}])
        assert control.remove_row(control.rows[0]) is True
        assert control.remove_row(control.rows[0]) is False
        assert RepeaterField().extract(control) == [{"name": "b", "role": ""}]

    def test_reorder_restamps_rows(self, repeater_config: FieldConfig) -> None:
        """Moving a row updates its index, title and nested wrappers."""
        handler = RepeaterField()
        control = handler.render(repeater_config, [{"name": "a"}, {"name": "b"}, {"name": "c"}])
        last = control.rows[2]

        assert control.move_row_up(last) is True
        assert control.rows.index(last) == 1
        assert last.row_index == 1
        assert last.form.fields["name"].row_index == 1
        assert control.rows[2].form.fields["name"].row_index == 2
        assert [row["name"] for row in handler.extract(control)] == ["a", "c", "b"]

        assert control.move_row_up(control.rows[0]) is False
        assert control.move_row_down(control.rows[2]) is False
        assert control.move_row_down(control.rows[0]) is True
        assert [row["name"] for row in handler.extract(control)] == ["c", "a", "b"]

    def test_validate_bounds(self, repeater_config: FieldConfig) -> None:
        handler = RepeaterField()
        too_many = [{"name": str(i)} for i in range(4)]
        result = handler.validate(repeater_config, too_many)
        assert codes(result) == ["MAX_ROWS"]
        assert result.errors[0].message == "Members must not exceed 3 rows"
        assert handler.validate(repeater_config, []).errors[0].message == "Members must have at least 1 row"

    def test_validate_required_reports_min_too(self, repeater_config: FieldConfig) -> None:
        config = FieldConfig.from_dict({"type": "repeated", "label": "Members", "required": True, "min": 1})
        assert codes(RepeaterField().validate(config, [])) == ["REQUIRED", "MIN_ROWS"]

    def test_validate_type(self, repeater_config: FieldConfig) -> None:
        result = RepeaterField().validate(repeater_config, {"name": "x"})
        assert result.errors[0].message == "Members must be an array"

    def test_row_errors_are_prefixed(self, repeater_config: FieldConfig) -> None:
        result = RepeaterField().validate(repeater_config, [{"name": "Ada"}, {"name": "", "role": "boss"}])
        assert [error.message for error in result.errors] == [
            "Row 2: Name is required",
            "Row 2: Role: boss is not a valid option",
        ]


class TestFlexibleField:
    """Tests for FlexibleField."""

    def test_render_and_extract(self, flexible_config: FieldConfig) -> None:
        handler = FlexibleField()
        blocks = [
            {"layout": "hero", "fields": {"heading": "Welcome"}},
            {"layout": "quote", "fields": {"text": "Be kind"}},
        ]
        control = handler.render(flexible_config, blocks)

        assert isinstance(control, FlexibleControl)
        assert [control.row_title(row) for row in control.rows] == ["1. Hero", "2. Quote"]
        assert handler.extract(control) == blocks

    def test_unknown_layout_is_skipped(self, flexible_config: FieldConfig) -> None:
        handler = FlexibleField()
        control = handler.render(flexible_config, [{"layout": "gallery", "fields": {}}])

        assert control.rows[0].form is None
        assert "Unknown layout" in control.rows[0].error
        assert handler.extract(control) == []

    def test_add_block(self, flexible_config: FieldConfig) -> None:
        control = FlexibleField().render(flexible_config, [])
        assert control.add_block("missing") is None
        assert control.add_block("quote", {"text": "Hi"}) is not None
        assert control.add_block("hero") is not None
        assert control.add_block("hero") is None
        assert [row.block_layout for row in control.rows] == ["quote", "hero"]

    def test_add_button_action(self, flexible_config: FieldConfig, repeater_config: FieldConfig) -> None:
        """The add action appends a row, or a block of the first layout when none is picked."""
        flexible = FlexibleField().render(flexible_config, [])
        flexible.on_add()
        assert [row.block_layout for row in flexible.rows] == ["hero"]
        assert flexible.add_label == "Add Block"

        repeater = RepeaterField().render(repeater_config, [])
        repeater.on_add()
        assert len(repeater.rows) == 1
        assert repeater.add_label == "Add Row"

    def test_remove_block(self, flexible_config: FieldConfig) -> None:
        control = FlexibleField().render(flexible_config, [{"layout": "quote", "fields": {}}])
        assert control.remove_block(control.rows[0]) is True
        assert control.rows == []

    def test_validate(self, flexible_config: FieldConfig) -> None:
        handler = FlexibleField()
        result = handler.validate(
            flexible_config,
            [{"layout": "hero", "fields": {"heading": ""}}, {"layout": "gallery"}, {"layout": "quote"}],
        )
        assert [error.message for error in result.errors] == [
            "Content must have at most 2 block(s)",
            "Block 1 (Hero): Heading is required",
            "Block 2: unknown layout 'gallery'",
        ]
        assert codes(result) == ["MAX_BLOCKS", "REQUIRED", "UNKNOWN_LAYOUT"]

    def test_validate_required(self) -> None:
        config = FieldConfig.from_dict({"type": "flexible", "label": "Body", "required": True, "min": 1})
        assert codes(FlexibleField().validate(config, [])) == ["REQUIRED", "MIN_BLOCKS"]


class TestGroupField:
    """Tests for GroupField."""

    @pytest.fixture
    def address(self) -> FieldConfig:
        return FieldConfig.from_dict(
            {
                "type": "group",
                "label": "Address",
                "collapsible": True,
                "fields": {
                    "street": {"type": "text", "label": "Street"},
                    "zip": {"type": "text", "label": "ZIP", "pattern": r"^\d{5}$"},
                },
            }
        )

    def test_render_and_extract(self, address: FieldConfig) -> None:
        handler = GroupField()
        control = handler.render(address, {"street": "Main St", "zip": "12345"})
        assert isinstance(control, GroupControl)
        assert handler.extract(control) == {"street": "Main St", "zip": "12345"}

    def test_required_when_all_empty(self, address: FieldConfig) -> None:
        address.required = True
        result = GroupField().validate(address, {"street": "", "zip": " "})
        assert codes(result) == ["REQUIRED"]
        assert result.errors[0].message == "Address is required"

    def test_nested_errors(self, address: FieldConfig) -> None:
        result = GroupField().validate(address, {"street": "Main", "zip": "12"})
        assert [error.message for error in result.errors] == ["ZIP format is invalid"]

    def test_default_label(self) -> None:
        config = FieldConfig.from_dict({"type": "group", "required": True})
        assert GroupField().validate(config, None).errors[0].field == "Group"


class TestTabsField:
    """Tests for TabsField."""

    @pytest.fixture
    def tabs(self) -> FieldConfig:
        return FieldConfig.from_dict(
            {
                "type": "tabs",
                "fields": {
                    "content": {"label": "Content", "fields": {"title": {"type": "text", "label": "Title", "required": True}}},
                    "seo": {"label": "SEO", "fields": {"slug": {"type": "text", "label": "Slug"}}},
                },
            }
        )

    def test_render_and_extract(self, tabs: FieldConfig) -> None:
        handler = TabsField()
        value = {"content": {"title": "Hello"}, "seo": {"slug": "hello"}}
        control = handler.render(tabs, value)
        assert isinstance(control, TabsControl)
        assert list(control.forms) == ["content", "seo"]
        assert handler.extract(control) == value

    def test_errors_name_the_tab(self, tabs: FieldConfig) -> None:
        result = TabsField().validate(tabs, {"seo": {"slug": "x"}})
        assert not result.valid
        assert result.errors[0].field == "Content > Title"
        assert result.errors[0].message == "Title is required"

"""Textual widgets making up a rendered form."""

from __future__ import annotations

from blockfields.widgets.controls import (
    ColorControl,
    FieldControl,
    FileControl,
    InputControl,
    LinkControl,
    MultiSelectControl,
    OEmbedControl,
    RadioControl,
    SelectControl,
    TextAreaControl,
    ToggleControl,
)
from blockfields.widgets.field_wrapper import FieldErrorPlaceholder, FormField
from blockfields.widgets.form_view import FormView
from blockfields.widgets.rows import (
    FieldRow,
    FlexibleControl,
    GroupControl,
    RepeaterControl,
    RowButton,
    TabsControl,
)

__all__ = [
    "ColorControl",
    "FieldControl",
    "FieldErrorPlaceholder",
    "FieldRow",
    "FileControl",
    "FlexibleControl",
    "FormField",
    "FormView",
    "GroupControl",
    "InputControl",
    "LinkControl",
    "MultiSelectControl",
    "OEmbedControl",
    "RadioControl",
    "RepeaterControl",
    "RowButton",
    "SelectControl",
    "TabsControl",
    "TextAreaControl",
    "ToggleControl",
]

"""Input controls rendered by the leaf field handlers.

Every control keeps a ``value`` mirror of what the user entered. The mirror
is seeded at construction and updated from the inner Textual widget's
change events, so extraction reads the same thing before and after the
control is mounted.
"""

from __future__ import annotations

from typing import Any, Literal

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import (
    Checkbox,
    Input,
    Label,
    RadioButton,
    RadioSet,
    Select,
    SelectionList,
    Static,
    Switch,
    TextArea,
)

from blockfields.utils.values import HEX_COLOR, describe_file, detect_service, format_file_size


class FieldControl(Vertical):
    """Base class for the widget a field handler renders.

    Controls publish ``Edited`` for continuous input (typing) and
    ``Changed`` for discrete changes (selection, toggles, rows added or
    removed). Both bubble up to the owning FormView.
    """

    DEFAULT_CSS = """
    FieldControl {
        height: auto;
    }
    """

    # Controls that show the field label themselves (e.g. a checkbox caption)
    inline_label = False

    class Edited(Message):
        """Posted while the user types into the control."""

        def __init__(self, field_control: "FieldControl") -> None:
            super().__init__()
            self.field_control = field_control

        @property
        def control(self) -> "FieldControl":
            return self.field_control

    class Changed(Message):
        """Posted when the control's value changes discretely."""

        def __init__(self, field_control: "FieldControl") -> None:
            super().__init__()
            self.field_control = field_control

        @property
        def control(self) -> "FieldControl":
            return self.field_control

    def __init__(self, *, id: str | None = None, classes: str | None = None) -> None:
        super().__init__(id=id, classes=classes)

    def publish(self, continuous: bool = False) -> None:
        """Announce a value change to the owning form."""
        if not self.is_mounted:
            return
        if continuous:
            self.post_message(self.Edited(self))
        else:
            self.post_message(self.Changed(self))


class InputControl(FieldControl):
    """Single-line text entry (text, email, password, number, url, date)."""

    value: reactive[str] = reactive("")

    def __init__(
        self,
        value: str = "",
        *,
        placeholder: str = "",
        password: bool = False,
        input_type: Literal["text", "number", "integer"] = "text",
        max_length: int | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the input control.

        Args:
            value: Initial text
            placeholder: Placeholder text in input
            password: Whether to mask input
            input_type: Textual input type used to restrict keystrokes
            max_length: Maximum number of characters accepted
            id: Widget ID
            classes: CSS classes
        """
        super().__init__(id=id, classes=classes)
        self.placeholder = placeholder
        self.password = password
        self.input_type = input_type
        self.max_length = max_length
        self.input: Input | None = None
        self.value = value

    def compose(self) -> ComposeResult:
        self.input = Input(
            value=self.value,
            placeholder=self.placeholder,
            password=self.password,
            type=self.input_type,
            max_length=self.max_length or 0,
        )
        yield self.input

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.value = event.value
        self.publish(continuous=True)

    def set_value(self, value: str) -> None:
        """Set the text programmatically."""
        self.value = value
        if self.input is not None and self.input.is_mounted:
            self.input.value = value


class ColorControl(InputControl):
    """Hex color entry with a swatch preview."""

    DEFAULT_CSS = """
    ColorControl Horizontal {
        height: auto;
    }

    ColorControl .color-swatch {
        width: 6;
        height: 3;
        margin-left: 1;
    }

    ColorControl Input {
        width: 1fr;
    }
    """

    def compose(self) -> ComposeResult:
        self.swatch = Static("", classes="color-swatch")
        self._paint_swatch()
        with Horizontal():
            yield from super().compose()
            yield self.swatch

    def on_input_changed(self, event: Input.Changed) -> None:
        super().on_input_changed(event)
        self._paint_swatch()

    def _paint_swatch(self) -> None:
        if HEX_COLOR.match(self.value.strip()):
            self.swatch.styles.background = self.value.strip()


class TextAreaControl(FieldControl):
    """Multi-line text entry (textarea and wysiwyg fields)."""

    value: reactive[str] = reactive("")

    def __init__(
        self,
        value: str = "",
        *,
        rows: int = 4,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.rows = rows
        self.text_area: TextArea | None = None
        self.value = value

    def compose(self) -> ComposeResult:
        self.text_area = TextArea(self.value, soft_wrap=True)
        self.text_area.styles.height = self.rows + 2
        yield self.text_area

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        event.stop()
        self.value = event.text_area.text
        self.publish(continuous=True)

    def set_value(self, value: str) -> None:
        self.value = value
        if self.text_area is not None and self.text_area.is_mounted:
            self.text_area.text = value


class SelectControl(FieldControl):
    """Dropdown with a single selection.

    Options are ``(value, label)`` tuples; the mirror holds the selected
    value or an empty string when nothing is selected.
    """

    value: reactive[str] = reactive("")

    def __init__(
        self,
        options: list[tuple[str, str]],
        value: str = "",
        *,
        prompt: str = "-- Select --",
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.options = options
        self.prompt = prompt
        self.select: Select[str] | None = None
        values = [option_value for option_value, _ in options]
        self.value = value if value in values else ""

    def compose(self) -> ComposeResult:
        kwargs: dict[str, Any] = {}
        if self.value:
            kwargs["value"] = self.value
        self.select = Select(
            [(label, option_value) for option_value, label in self.options],
            prompt=self.prompt,
            allow_blank=True,
            **kwargs,
        )
        yield self.select

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        # Blank selections carry a sentinel rather than one of our string values
        self.value = event.value if isinstance(event.value, str) else ""
        self.publish()


class MultiSelectControl(FieldControl):
    """Checklist allowing several selections; the mirror is a list in option order."""

    DEFAULT_CSS = """
    MultiSelectControl SelectionList {
        height: auto;
        max-height: 10;
    }
    """

    def __init__(
        self,
        options: list[tuple[str, str]],
        value: list[str] | None = None,
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.options = options
        selected = set(value or [])
        self.value: list[str] = [option_value for option_value, _ in options if option_value in selected]

    def compose(self) -> ComposeResult:
        yield SelectionList[str](
            *[(label, option_value, option_value in self.value) for option_value, label in self.options]
        )

    def on_selection_list_selected_changed(self, event: SelectionList.SelectedChanged) -> None:
        event.stop()
        selected = set(event.selection_list.selected)
        self.value = [option_value for option_value, _ in self.options if option_value in selected]
        self.publish()


class RadioControl(FieldControl):
    """Set of mutually exclusive radio buttons."""

    value: reactive[str] = reactive("")

    def __init__(
        self,
        options: list[tuple[str, str]],
        value: str = "",
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.options = options
        values = [option_value for option_value, _ in options]
        self.value = value if value in values else ""

    def compose(self) -> ComposeResult:
        yield RadioSet(
            *[RadioButton(label, value=option_value == self.value) for option_value, label in self.options]
        )

    def on_radio_set_changed(self, event: RadioSet.Changed) -> None:
        event.stop()
        index = event.index
        self.value = self.options[index][0] if 0 <= index < len(self.options) else ""
        self.publish()


class ToggleControl(FieldControl):
    """On/off toggle rendered as a checkbox or a switch."""

    value: reactive[bool] = reactive(False)

    def __init__(
        self,
        value: bool = False,
        *,
        caption: str = "",
        style: Literal["checkbox", "switch"] = "checkbox",
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.caption = caption
        self.toggle_style = style
        self.inline_label = style == "checkbox" and bool(caption)
        self.value = value

    def compose(self) -> ComposeResult:
        if self.toggle_style == "switch":
            with Horizontal(classes="switch-row"):
                yield Switch(value=self.value)
                if self.caption:
                    yield Label(self.caption, classes="switch-caption")
        else:
            yield Checkbox(self.caption, value=self.value)

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        event.stop()
        self.value = bool(event.value)
        self.publish()

    def on_switch_changed(self, event: Switch.Changed) -> None:
        event.stop()
        self.value = bool(event.value)
        self.publish()


class LinkControl(FieldControl):
    """URL, title and target entry for link fields."""

    TARGETS = [("_self", "Same window"), ("_blank", "New window")]

    def __init__(
        self,
        value: dict[str, str],
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.value: dict[str, str] = dict(value)
        self.url_input: Input | None = None
        self.title_input: Input | None = None

    def compose(self) -> ComposeResult:
        self.url_input = Input(value=self.value["url"], placeholder="https://example.com")
        self.title_input = Input(value=self.value["title"], placeholder="Link text")
        yield self.url_input
        yield self.title_input
        target = self.value["target"] if self.value["target"] in dict(self.TARGETS) else "_self"
        yield Select([(label, key) for key, label in self.TARGETS], value=target, allow_blank=False)

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        key = "url" if event.input is self.url_input else "title"
        self.value = {**self.value, key: event.value}
        self.publish(continuous=True)

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        if isinstance(event.value, str):
            self.value = {**self.value, "target": event.value}
            self.publish()


class FileControl(FieldControl):
    """File chooser: a local path or URL resolved into ``{name, url, size, type}``."""

    def __init__(
        self,
        value: dict[str, Any] | None,
        *,
        accept: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.accept = accept
        self.value: dict[str, Any] | None = value
        self.info = Static(self._describe(), classes="help-text")

    def compose(self) -> ComposeResult:
        placeholder = f"Path to file ({self.accept})" if self.accept else "Path to file"
        location = ""
        if self.value:
            location = self.value.get("url", "")
        yield Input(value=location, placeholder=placeholder)
        yield self.info

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        if self.value and event.value == self.value.get("url"):
            return
        self.value = describe_file(event.value)
        self.info.update(self._describe())
        self.publish(continuous=True)

    def _describe(self) -> str:
        if not self.value:
            return "No file selected"
        return f"{self.value.get('name', '')} ({format_file_size(self.value.get('size') or 0)})"


class OEmbedControl(FieldControl):
    """Embed URL entry showing which service was recognised."""

    def __init__(
        self,
        value: dict[str, str],
        *,
        placeholder: str = "",
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.placeholder = placeholder or "Paste YouTube, Vimeo, or Twitter URL..."
        self.value: dict[str, str] = dict(value)
        self.badge = Static(self._badge_text(), classes="help-text")

    def compose(self) -> ComposeResult:
        yield Input(value=self.value["url"], placeholder=self.placeholder)
        yield self.badge

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        url = event.value.strip()
        self.value = {"url": url, "service": detect_service(url)}
        self.badge.update(self._badge_text())
        self.publish(continuous=True)

    def _badge_text(self) -> str:
        if not self.value["url"]:
            return ""
        return f"Service: {self.value['service']}"

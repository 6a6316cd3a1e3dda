"""Controls rendered by the composite field handlers.

Repeater and flexible controls keep their rows in a plain list. Adding,
removing and reordering update that list first and then mirror the change
into the mounted widget tree, re-stamping row indices afterwards.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Collapsible, Select, Static, TabbedContent, TabPane

from blockfields.models.config import FieldConfig, Section
from blockfields.widgets.controls import FieldControl
from blockfields.widgets.form_view import FormView

logger = logging.getLogger(__name__)

FormFactory = Callable[[Mapping[str, Any]], FormView]


def row_bound(value: Any) -> Optional[int]:
    """Row-count bound from a schema value (None when unset or unusable)."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class RowButton(Button):
    """Button acting on a composite control or one of its rows."""

    def __init__(
        self,
        label: str,
        row_action: str,
        *,
        owner: "RowListControl",
        row: Optional["FieldRow"] = None,
        variant: str = "default",
        disabled: bool = False,
        classes: str | None = None,
    ) -> None:
        super().__init__(label, variant=variant, disabled=disabled, classes=classes)
        self.row_action = row_action
        self.owner = owner
        self.row = row


class FieldRow(Vertical):
    """One repeater row or flexible block, owning its own nested form."""

    DEFAULT_CSS = """
    FieldRow {
        height: auto;
        border: round $primary-background;
        padding: 0 1;
        margin-bottom: 1;
    }

    FieldRow .row-header {
        height: auto;
    }

    FieldRow .row-title {
        width: 1fr;
        text-style: bold;
        padding-top: 1;
    }

    FieldRow .row-error {
        color: $error;
    }
    """

    def __init__(
        self,
        form: FormView | None,
        owner: "RowListControl",
        index: int,
        *,
        layout: str | None = None,
        error: str = "",
    ) -> None:
        super().__init__()
        self.form = form
        self.owner = owner
        self.block_layout = layout
        self.error = error
        self.row_index = index
        self.title_label = Static("", classes="row-title")
        self.remove_button: RowButton | None = None
        self.set_index(index)

    def compose(self) -> ComposeResult:
        with Horizontal(classes="row-header"):
            yield self.title_label
            yield RowButton("▲", "up", owner=self.owner, row=self)
            yield RowButton("▼", "down", owner=self.owner, row=self)
            self.remove_button = RowButton(
                "Remove",
                "remove",
                owner=self.owner,
                row=self,
                variant="error",
                disabled=not self.owner.can_remove(),
            )
            yield self.remove_button
        if self.form is not None:
            yield self.form
        else:
            yield Static(escape(self.error), classes="row-error")

    def set_index(self, index: int) -> None:
        """Re-stamp this row (and the wrappers inside it) with ``index``."""
        self.row_index = index
        if self.form is not None:
            self.form.set_row_index(index)
        self.title_label.update(escape(self.owner.row_title(self)))


class RowListControl(FieldControl):
    """Shared add/remove/reorder behaviour for repeater and flexible controls."""

    DEFAULT_CSS = """
    RowListControl {
        height: auto;
    }

    RowListControl .composite-rows {
        height: auto;
    }

    RowListControl .composite-actions {
        height: auto;
    }
    """

    def __init__(
        self,
        config: FieldConfig,
        add_label: str,
        on_add: Callable[[], Any],
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.config = config
        self.add_label = add_label
        self.on_add = on_add
        self.min_rows = row_bound(config.min)
        self.max_rows = row_bound(config.max)
        self.rows: list[FieldRow] = []
        self.rows_container: Vertical | None = None
        self.add_button: RowButton | None = None

    def compose(self) -> ComposeResult:
        self.rows_container = Vertical(*self.rows, classes="composite-rows")
        yield self.rows_container
        with Horizontal(classes="composite-actions"):
            yield from self.compose_actions()

    def compose_actions(self) -> ComposeResult:
        self.add_button = RowButton(
            self.config.button_label or self.add_label,
            "add",
            owner=self,
            variant="primary",
            disabled=not self.can_add(),
        )
        yield self.add_button

    def row_title(self, row: FieldRow) -> str:
        return f"Row {row.row_index + 1}"

    def can_add(self) -> bool:
        return self.max_rows is None or len(self.rows) < self.max_rows

    def can_remove(self) -> bool:
        return self.min_rows is None or len(self.rows) > self.min_rows

    @property
    def _live(self) -> bool:
        return self.rows_container is not None and self.rows_container.is_mounted

    def _append(self, row: FieldRow) -> FieldRow:
        self.rows.append(row)
        if self._live:
            self.rows_container.mount(row)
        self._after_change()
        return row

    def remove_row(self, row: FieldRow) -> bool:
        """Remove ``row`` unless that would drop below ``min``."""
        if row not in self.rows or not self.can_remove():
            return False
        self.rows.remove(row)
        if row.is_mounted:
            row.remove()
        self._after_change()
        return True

    def move_row_up(self, row: FieldRow) -> bool:
        index = self.rows.index(row)
        if index == 0:
            return False
        self.rows[index - 1], self.rows[index] = row, self.rows[index - 1]
        if self._live:
            self.rows_container.move_child(row, before=self.rows[index])
        self._after_change()
        return True

    def move_row_down(self, row: FieldRow) -> bool:
        index = self.rows.index(row)
        if index >= len(self.rows) - 1:
            return False
        self.rows[index + 1], self.rows[index] = row, self.rows[index + 1]
        if self._live:
            self.rows_container.move_child(row, after=self.rows[index])
        self._after_change()
        return True

    def _after_change(self) -> None:
        for index, row in enumerate(self.rows):
            row.set_index(index)
        if self.add_button is not None:
            self.add_button.disabled = not self.can_add()
        removable = self.can_remove()
        for row in self.rows:
            if row.remove_button is not None:
                row.remove_button.disabled = not removable
        self.publish()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button = event.button
        if not isinstance(button, RowButton) or button.owner is not self:
            return
        event.stop()
        if button.row_action == "add":
            self.on_add()
        elif button.row is None:
            return
        elif button.row_action == "remove":
            self.remove_row(button.row)
        elif button.row_action == "up":
            self.move_row_up(button.row)
        elif button.row_action == "down":
            self.move_row_down(button.row)


class RepeaterControl(RowListControl):
    """Rows that all share the same nested schema."""

    def __init__(
        self,
        config: FieldConfig,
        rows_data: list[Mapping[str, Any]],
        build_form: FormFactory,
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(config, "Add Row", lambda: self.add_row(), id=id, classes=classes)
        self.build_form = build_form
        for data in rows_data:
            self.rows.append(FieldRow(self.build_form(data), self, len(self.rows)))

    def add_row(self, data: Mapping[str, Any] | None = None) -> FieldRow | None:
        """Append a row unless ``max`` is reached."""
        if not self.can_add():
            return None
        return self._append(FieldRow(self.build_form(data or {}), self, len(self.rows)))


class FlexibleControl(RowListControl):
    """Blocks that each pick one of several named layouts."""

    def __init__(
        self,
        config: FieldConfig,
        blocks: list[Mapping[str, Any]],
        build_form: Callable[[Section, Mapping[str, Any]], FormView],
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(config, "Add Block", lambda: self.add_selected_block(), id=id, classes=classes)
        self.layouts = config.layouts
        self.build_form = build_form
        self.picker: Select[str] | None = None
        for block in blocks:
            self.rows.append(self._make_block(block.get("layout"), block.get("fields") or {}))

    def _make_block(self, layout: Any, data: Mapping[str, Any]) -> FieldRow:
        section = self.layouts.get(layout) if isinstance(layout, str) else None
        if section is None:
            logger.warning(f"Unknown flexible layout '{layout}'")
            return FieldRow(None, self, len(self.rows), layout=layout, error=f"Unknown layout: {layout}")
        return FieldRow(self.build_form(section, data), self, len(self.rows), layout=layout)

    def row_title(self, row: FieldRow) -> str:
        section = self.layouts.get(row.block_layout) if isinstance(row.block_layout, str) else None
        label = section.label if section is not None else str(row.block_layout)
        return f"{row.row_index + 1}. {label}"

    def compose_actions(self) -> ComposeResult:
        self.picker = Select(
            [(section.label, key) for key, section in self.layouts.items()],
            prompt="Choose a layout",
            allow_blank=True,
        )
        yield self.picker
        yield from super().compose_actions()

    def add_block(self, layout: str, data: Mapping[str, Any] | None = None) -> FieldRow | None:
        """Append a block using ``layout`` unless ``max`` is reached or the layout is unknown."""
        if not self.can_add() or layout not in self.layouts:
            return None
        return self._append(self._make_block(layout, data or {}))

    def remove_block(self, row: FieldRow) -> bool:
        return self.remove_row(row)

    def add_selected_block(self) -> FieldRow | None:
        """Append a block using the picker's layout, or the first layout when none is picked."""
        layout = self.picker.value if self.picker is not None else None
        if not isinstance(layout, str):
            layout = next(iter(self.layouts), None)
        if layout is None:
            return None
        return self.add_block(layout)

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select is self.picker:
            event.stop()


class GroupControl(FieldControl):
    """A nested form, optionally inside a collapsible section."""

    def __init__(
        self,
        config: FieldConfig,
        form: FormView,
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.config = config
        self.form = form

    def compose(self) -> ComposeResult:
        if self.config.collapsible:
            yield Collapsible(
                self.form,
                title=self.config.get_label("Group"),
                collapsed=self.config.collapsed,
            )
        else:
            yield self.form


class TabsControl(FieldControl):
    """One nested form per tab pane."""

    def __init__(
        self,
        config: FieldConfig,
        forms: dict[str, FormView],
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.config = config
        self.forms = forms

    def compose(self) -> ComposeResult:
        with TabbedContent():
            for name, form in self.forms.items():
                with TabPane(self.config.tabs[name].label):
                    yield form

"""Field schema definitions.

A schema is a mapping of field name to FieldConfig. Composite nodes nest
further schemas: ``fields`` for groups and repeaters, ``layouts`` for
flexible blocks, and one Section per tab for tab containers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from blockfields.exceptions import InvalidConditionalError, SchemaError

logger = logging.getLogger(__name__)

# Schema keys accepted in camelCase and mapped onto dataclass attributes
_KEY_ALIASES = {
    "defaultValue": "default_value",
    "minLength": "min_length",
    "maxLength": "max_length",
    "maxSize": "max_size",
    "buttonLabel": "button_label",
    "className": "class_name",
}

_SIMPLE_KEYS = (
    "label",
    "description",
    "placeholder",
    "required",
    "default_value",
    "min",
    "max",
    "min_length",
    "max_length",
    "pattern",
    "step",
    "multiple",
    "display",
    "rows",
    "max_size",
    "accept",
    "button_label",
    "collapsible",
    "collapsed",
    "layout",
    "class_name",
)

_STRUCTURAL_KEYS = {"type", "options", "fields", "layouts", "conditional"}


def _normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {_KEY_ALIASES.get(key, key): value for key, value in data.items()}


@dataclass
class Option:
    """One choice of a select or radio field."""

    value: Any
    label: str

    @classmethod
    def from_value(cls, data: Any) -> "Option":
        """Create from a ``{value, label}`` mapping or a bare value."""
        if isinstance(data, Mapping):
            value = data.get("value")
            return cls(value=value, label=str(data.get("label", value)))
        return cls(value=data, label=str(data))

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "label": self.label}


@dataclass
class Conditional:
    """Visibility rule: show the owning field when ``field`` satisfies ``operator``/``value``."""

    field: str
    operator: str
    value: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], owner: Optional[str] = None) -> "Conditional":
        """Create from dictionary.

        Raises:
            InvalidConditionalError: If the watched field or operator is missing.
        """
        if not isinstance(data, Mapping):
            raise InvalidConditionalError("Conditional must be a mapping", field_name=owner)
        watched = data.get("field")
        if not watched or not isinstance(watched, str):
            raise InvalidConditionalError("Conditional is missing the watched 'field'", field_name=owner)
        operator = data.get("operator")
        if operator is None or operator == "":
            raise InvalidConditionalError("Conditional is missing an 'operator'", field_name=owner)
        return cls(field=watched, operator=str(operator), value=data.get("value"))

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "operator": self.operator, "value": self.value}


@dataclass
class Section:
    """A labelled nested schema: one flexible layout or one tab pane."""

    label: str
    fields: Dict[str, "FieldConfig"] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, name: str, data: Any) -> "Section":
        if isinstance(data, Section):
            return data
        if not isinstance(data, Mapping):
            raise SchemaError(f"Section '{name}' must be a mapping", field_name=name)
        return cls(label=str(data.get("label") or name), fields=parse_fields(data.get("fields") or {}))

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "fields": {name: cfg.to_dict() for name, cfg in self.fields.items()}}


@dataclass
class FieldConfig:
    """One schema node.

    Attributes:
        type: Registry key of the handler that renders this field
        label: Display label, also used to name validation errors
        required: Whether an empty value is a validation error
        default_value: Initial value when no data is supplied
        options: Choices for select and radio fields
        fields: Nested schema for group and repeater fields
        tabs: One section per tab for tab containers
        layouts: Available block layouts for flexible fields
        conditional: Optional visibility rule against a sibling field
        extra: Schema keys this class does not model, kept verbatim
    """

    type: str
    label: Optional[str] = None
    description: Optional[str] = None
    placeholder: Optional[str] = None
    required: bool = False
    default_value: Any = None
    min: Optional[Union[int, float, str]] = None
    max: Optional[Union[int, float, str]] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    step: Optional[Union[int, float]] = None
    options: List[Option] = field(default_factory=list)
    multiple: bool = False
    display: Optional[str] = None
    rows: Optional[int] = None
    max_size: Optional[int] = None
    accept: Optional[str] = None
    button_label: Optional[str] = None
    collapsible: bool = False
    collapsed: bool = False
    layout: Optional[str] = None
    class_name: Optional[str] = None
    fields: Dict[str, "FieldConfig"] = field(default_factory=dict)
    tabs: Dict[str, Section] = field(default_factory=dict)
    layouts: Dict[str, Section] = field(default_factory=dict)
    conditional: Optional[Conditional] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], name: Optional[str] = None) -> "FieldConfig":
        """Create from dictionary.

        Args:
            data: Raw schema node (camelCase or snake_case keys)
            name: Field name, used in error details

        Raises:
            SchemaError: If the node is not a mapping or has no type.
            InvalidConditionalError: If the conditional is malformed.
        """
        if not isinstance(data, Mapping):
            raise SchemaError("Field config must be a mapping", field_name=name)

        normalized = _normalize_keys(data)
        field_type = normalized.get("type")
        if not field_type or not isinstance(field_type, str):
            raise SchemaError("Field config is missing a 'type'", field_name=name)

        kwargs: Dict[str, Any] = {key: normalized[key] for key in _SIMPLE_KEYS if key in normalized}
        kwargs["required"] = bool(kwargs.get("required", False))
        kwargs["multiple"] = bool(kwargs.get("multiple", False))
        kwargs["collapsible"] = bool(kwargs.get("collapsible", False))
        kwargs["collapsed"] = bool(kwargs.get("collapsed", False))

        options = normalized.get("options") or []
        kwargs["options"] = [opt if isinstance(opt, Option) else Option.from_value(opt) for opt in options]

        raw_fields = normalized.get("fields") or {}
        if field_type == "tabs":
            if not isinstance(raw_fields, Mapping):
                raise SchemaError("Tabs 'fields' must map tab names to sections", field_name=name)
            kwargs["tabs"] = {tab: Section.from_dict(tab, section) for tab, section in raw_fields.items()}
        else:
            kwargs["fields"] = parse_fields(raw_fields)

        raw_layouts = normalized.get("layouts") or {}
        if not isinstance(raw_layouts, Mapping):
            raise SchemaError("'layouts' must map layout names to sections", field_name=name)
        kwargs["layouts"] = {key: Section.from_dict(key, layout) for key, layout in raw_layouts.items()}

        if normalized.get("conditional") is not None:
            kwargs["conditional"] = Conditional.from_dict(normalized["conditional"], owner=name)

        kwargs["extra"] = {
            key: value
            for key, value in normalized.items()
            if key not in _SIMPLE_KEYS and key not in _STRUCTURAL_KEYS
        }
        return cls(type=field_type, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (camelCase keys, defaults omitted)."""
        reverse_aliases = {attr: key for key, attr in _KEY_ALIASES.items()}
        result: Dict[str, Any] = {"type": self.type}
        for key in _SIMPLE_KEYS:
            value = getattr(self, key)
            if value is None or value is False:
                continue
            result[reverse_aliases.get(key, key)] = value
        if self.options:
            result["options"] = [opt.to_dict() for opt in self.options]
        if self.fields:
            result["fields"] = {name: cfg.to_dict() for name, cfg in self.fields.items()}
        if self.tabs:
            result["fields"] = {name: section.to_dict() for name, section in self.tabs.items()}
        if self.layouts:
            result["layouts"] = {name: section.to_dict() for name, section in self.layouts.items()}
        if self.conditional is not None:
            result["conditional"] = self.conditional.to_dict()
        result.update(self.extra)
        return result

    def get_label(self, default: str = "Field") -> str:
        """Label used for display and for naming validation errors."""
        return self.label or default

    def option_values(self) -> List[str]:
        """Option values as strings, in declaration order."""
        return [str(opt.value) for opt in self.options]


FieldsInput = Mapping[str, Union[FieldConfig, Mapping[str, Any]]]


def parse_fields(fields: Optional[FieldsInput]) -> Dict[str, FieldConfig]:
    """Normalize a raw schema map into FieldConfig instances.

    Already-parsed FieldConfig values are passed through untouched, so every
    orchestrator can accept either form.

    Raises:
        SchemaError: If the map or any node in it is malformed.
    """
    if fields is None:
        return {}
    if not isinstance(fields, Mapping):
        raise SchemaError("Field schema must be a mapping of name to field config")
    return {
        name: cfg if isinstance(cfg, FieldConfig) else FieldConfig.from_dict(cfg, name=name)
        for name, cfg in fields.items()
    }

"""Registry of field-type handlers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List

from blockfields.exceptions import FieldTypeAlreadyRegisteredError, FieldTypeNotRegisteredError

if TYPE_CHECKING:
    from blockfields.fields.base import FieldType

logger = logging.getLogger(__name__)


def default_handlers() -> Dict[str, "FieldType"]:
    """Fresh instances of every built-in handler, keyed by type name."""
    from blockfields.fields.choice import BooleanField, CheckboxField, RadioField, SelectField
    from blockfields.fields.composite import FlexibleField, GroupField, RepeaterField, TabsField
    from blockfields.fields.numeric import NumberField, RangeField
    from blockfields.fields.special import (
        ColorField,
        DateField,
        FileField,
        ImageField,
        LinkField,
        OEmbedField,
    )
    from blockfields.fields.text import (
        EmailField,
        PasswordField,
        TextareaField,
        TextField,
        WysiwygField,
    )

    repeater = RepeaterField()
    return {
        "text": TextField(),
        "textarea": TextareaField(),
        "email": EmailField(),
        "password": PasswordField(),
        "wysiwyg": WysiwygField(),
        "number": NumberField(),
        "range": RangeField(),
        "select": SelectField(),
        "radio": RadioField(),
        "checkbox": CheckboxField(),
        "boolean": BooleanField(),
        "color": ColorField(),
        "date": DateField(),
        "link": LinkField(),
        "image": ImageField(),
        "file": FileField(),
        "oembed": OEmbedField(),
        "repeater": repeater,
        "repeated": repeater,
        "flexible": FlexibleField(),
        "group": GroupField(),
        "tabs": TabsField(),
    }


class FieldRegistry:
    """Name to handler lookup used by the render, extract and validate orchestrators.

    Example:
        >>> registry = FieldRegistry.create_default()
        >>> registry.register("slug", SlugField())
        >>> registry.get("slug")
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, "FieldType"] = {}

    def register(self, name: str, handler: "FieldType") -> None:
        """Register a handler under ``name``.

        Raises:
            FieldTypeAlreadyRegisteredError: If ``name`` is taken.
        """
        if name in self._handlers:
            raise FieldTypeAlreadyRegisteredError(name)
        self._handlers[name] = handler
        logger.debug(f"Registered field type '{name}'")

    def get(self, name: str) -> "FieldType":
        """Look up the handler for ``name``.

        Raises:
            FieldTypeNotRegisteredError: If no handler is registered.
        """
        try:
            return self._handlers[name]
        except KeyError:
            raise FieldTypeNotRegisteredError(name, list(self._handlers)) from None

    def has(self, name: str) -> bool:
        return name in self._handlers

    def unregister(self, name: str) -> None:
        """Remove ``name``; unknown names are ignored."""
        self._handlers.pop(name, None)

    def types(self) -> List[str]:
        """Registered type names in registration order."""
        return list(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    @classmethod
    def create_default(cls, exclude: Iterable[str] = ()) -> "FieldRegistry":
        """Create a registry seeded with every built-in handler.

        Args:
            exclude: Type names to leave out (composites exclude themselves)
        """
        skipped = set(exclude)
        registry = cls()
        for name, handler in default_handlers().items():
            if name not in skipped:
                registry.register(name, handler)
        return registry

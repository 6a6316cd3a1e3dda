"""Built-in field-type handlers."""

from __future__ import annotations

from blockfields.fields.base import FieldType
from blockfields.fields.choice import BooleanField, CheckboxField, RadioField, SelectField
from blockfields.fields.composite import CompositeField, FlexibleField, GroupField, RepeaterField, TabsField
from blockfields.fields.numeric import NumberField, RangeField
from blockfields.fields.special import ColorField, DateField, FileField, ImageField, LinkField, OEmbedField
from blockfields.fields.text import EmailField, PasswordField, TextareaField, TextField, WysiwygField

__all__ = [
    "BooleanField",
    "CheckboxField",
    "ColorField",
    "CompositeField",
    "DateField",
    "EmailField",
    "FieldType",
    "FileField",
    "FlexibleField",
    "GroupField",
    "ImageField",
    "LinkField",
    "NumberField",
    "OEmbedField",
    "PasswordField",
    "RadioField",
    "RangeField",
    "RepeaterField",
    "SelectField",
    "TabsField",
    "TextField",
    "TextareaField",
    "WysiwygField",
]

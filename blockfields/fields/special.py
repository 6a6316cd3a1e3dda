"""Structured and formatted field types: color, date, link, image, file and oembed."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional

from textual.widget import Widget

from blockfields.fields.base import FieldType
from blockfields.fields.numeric import parse_number
from blockfields.models.config import FieldConfig
from blockfields.models.results import ValidationResult
from blockfields.utils.values import (
    HEX_COLOR,
    HTTP_URL,
    as_text,
    detect_service,
    format_file_size,
    normalize_color,
)
from blockfields.widgets.controls import (
    ColorControl,
    FileControl,
    InputControl,
    LinkControl,
    OEmbedControl,
)

DATE_FORMAT = re.compile(r"^\d{4}-\d{2}-\d{2}$")
LINK_TARGETS = ("_self", "_blank")


class ColorField(FieldType):
    """Hex color. Three-digit colors are expanded; an empty control reads as black."""

    DEFAULT_COLOR = "#000000"

    def render(self, config: FieldConfig, value: Any) -> Widget:
        initial = normalize_color(self.initial_value(value, config), self.DEFAULT_COLOR)
        return ColorControl(initial, placeholder="#rrggbb")

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, InputControl):
            return self.DEFAULT_COLOR
        text = control.value.strip()
        if not text:
            return self.DEFAULT_COLOR
        # Leave malformed input as typed so validation can report it
        return normalize_color(text) if HEX_COLOR.match(text) else text

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        result = ValidationResult()
        label = self.label_for(config)
        text = as_text(value)
        if text.strip() == "":
            if config.required:
                result.add_error(self.error(config, f"{label} is required", "REQUIRED"))
            return result
        if not HEX_COLOR.match(text):
            result.add_error(
                self.error(config, f"{label} must be a valid hex color (e.g., #ff5733 or #f00)", "INVALID_COLOR")
            )
        return result


def _parse_date(value: Any) -> Optional[date]:
    try:
        return datetime.strptime(as_text(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


class DateField(FieldType):
    """Calendar date stored as ``YYYY-MM-DD``; ``min``/``max`` are dates in the same format."""

    def render(self, config: FieldConfig, value: Any) -> Widget:
        return InputControl(as_text(self.initial_value(value, config)), placeholder="YYYY-MM-DD")

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, InputControl):
            return ""
        return control.value.strip()

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        result = ValidationResult()
        label = self.label_for(config)
        text = as_text(value)

        if text.strip() == "":
            if config.required:
                result.add_error(self.error(config, f"{label} is required", "REQUIRED"))
            return result

        if not DATE_FORMAT.match(text):
            result.add_error(self.error(config, f"{label} must be in YYYY-MM-DD format", "INVALID_FORMAT"))
            return result

        parsed = _parse_date(text)
        if parsed is None:
            result.add_error(self.error(config, f"{label} is not a valid date", "INVALID_DATE"))
            return result

        earliest = _parse_date(config.min) if config.min is not None else None
        latest = _parse_date(config.max) if config.max is not None else None
        if earliest is not None and parsed < earliest:
            result.add_error(self.error(config, f"{label} must be on or after {config.min}", "MIN_DATE"))
        if latest is not None and parsed > latest:
            result.add_error(self.error(config, f"{label} must be on or before {config.max}", "MAX_DATE"))
        return result


class LinkField(FieldType):
    """Hyperlink ``{url, title, target}`` where target is ``_self`` or ``_blank``."""

    default_label = "Link"

    @staticmethod
    def parse_value(value: Any, default: Any = None) -> dict:
        source = value if value not in (None, "") else default
        if isinstance(source, str):
            return {"url": source, "title": "", "target": "_self"}
        if not isinstance(source, dict):
            source = {}
        return {
            "url": as_text(source.get("url")),
            "title": as_text(source.get("title")),
            "target": as_text(source.get("target")) or "_self",
        }

    def render(self, config: FieldConfig, value: Any) -> Widget:
        return LinkControl(self.parse_value(value, config.default_value))

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, LinkControl):
            return {"url": "", "title": "", "target": "_self"}
        return {
            "url": control.value["url"].strip(),
            "title": control.value["title"].strip(),
            "target": control.value["target"],
        }

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        result = ValidationResult()
        label = self.label_for(config)
        link = self.parse_value(value)
        url = link["url"].strip()
        title = link["title"].strip()

        if not url and not title and not config.required:
            return result

        if config.required and not url:
            result.add_error(self.error(config, "URL is required", "REQUIRED"))
        if config.required and not title:
            result.add_error(self.error(config, "Title is required", "REQUIRED"))
        if url and not HTTP_URL.match(url):
            result.add_error(self.error(config, "URL must be a valid http or https URL", "INVALID_URL"))
        if link["target"] not in LINK_TARGETS:
            result.add_error(self.error(config, "Target must be either _self or _blank", "INVALID_TARGET"))
        return result


class ImageField(FieldType):
    """Image reference: an http(s) URL or an inline ``data:image/`` URL."""

    def render(self, config: FieldConfig, value: Any) -> Widget:
        return InputControl(
            as_text(self.initial_value(value, config)),
            placeholder=config.placeholder or "https://example.com/image.png",
        )

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, InputControl):
            return ""
        return control.value.strip()

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        result = ValidationResult()
        label = self.label_for(config)
        text = as_text(value)
        if text.strip() == "":
            if config.required:
                result.add_error(self.error(config, f"{label} is required", "REQUIRED"))
            return result
        if not text.startswith(("http://", "https://", "data:image/")):
            result.add_error(self.error(config, f"{label} must be a valid URL or data URL", "INVALID_URL"))
        return result


class FileField(FieldType):
    """Uploaded file described as ``{name, url, size, type}``; ``maxSize`` is in bytes."""

    @staticmethod
    def parse_value(value: Any) -> Optional[dict]:
        if not isinstance(value, dict) or not value.get("url"):
            return None
        return {
            "name": as_text(value.get("name")),
            "url": as_text(value.get("url")),
            "size": parse_number(value.get("size")) or 0,
            "type": as_text(value.get("type")),
        }

    def render(self, config: FieldConfig, value: Any) -> Widget:
        return FileControl(self.parse_value(value), accept=config.accept)

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, FileControl) or not control.value:
            return None
        return dict(control.value)

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        result = ValidationResult()
        label = self.label_for(config)
        file_value = self.parse_value(value)
        if file_value is None:
            if config.required:
                result.add_error(self.error(config, f"{label} is required", "REQUIRED"))
            return result
        max_size = parse_number(config.max_size)
        if max_size and file_value["size"] > max_size:
            result.add_error(
                self.error(
                    config,
                    f"{label} must be smaller than {format_file_size(max_size)}",
                    "FILE_TOO_LARGE",
                )
            )
        return result


class OEmbedField(FieldType):
    """Embeddable media URL with the detected service (youtube, vimeo, twitter or unknown)."""

    default_label = "Embed"

    @staticmethod
    def parse_value(value: Any, default: Any = None) -> dict:
        source = value if value not in (None, "") else default
        if isinstance(source, str):
            url = source.strip()
        elif isinstance(source, dict):
            url = as_text(source.get("url")).strip()
        else:
            url = ""
        return {"url": url, "service": detect_service(url)}

    def render(self, config: FieldConfig, value: Any) -> Widget:
        return OEmbedControl(self.parse_value(value, config.default_value), placeholder=config.placeholder or "")

    def extract(self, control: Widget) -> Any:
        if not isinstance(control, OEmbedControl):
            return {"url": "", "service": "unknown"}
        return self.parse_value(control.value)

    def validate(self, config: FieldConfig, value: Any) -> ValidationResult:
        result = ValidationResult()
        label = self.label_for(config)
        embed = self.parse_value(value)

        if not embed["url"]:
            if config.required:
                result.add_error(self.error(config, f"{label} is required", "REQUIRED"))
            return result

        if not HTTP_URL.match(embed["url"]):
            result.add_error(self.error(config, f"{label} must be a valid http or https URL", "INVALID_URL"))
        if embed["service"] == "unknown":
            result.add_error(
                self.error(
                    config,
                    "URL is valid but service is not recognized. Supported: YouTube, Vimeo, Twitter",
                    "UNSUPPORTED_SERVICE",
                    severity="warning",
                )
            )
        return result

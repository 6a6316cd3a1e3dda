"""Value normalization helpers shared by field handlers and their controls."""

from __future__ import annotations

import mimetypes
import re
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

HEX_COLOR = re.compile(r"^#([A-Fa-f0-9]{3}|[A-Fa-f0-9]{6})$")
HTTP_URL = re.compile(r"^https?://.+")
_MARKUP_TAG = re.compile(r"<[^>]*>")

# Embed services recognised by oembed fields
SERVICE_PATTERNS = {
    "youtube": re.compile(r"(?:youtube\.com/(?:watch\?v=|embed/|v/)|youtu\.be/)([a-zA-Z0-9_-]+)"),
    "vimeo": re.compile(r"vimeo\.com/(\d+)"),
    "twitter": re.compile(r"twitter\.com/\w+/status/(\d+)"),
}


def as_text(value: Any) -> str:
    """Render a value as text, treating None as empty."""
    if value is None:
        return ""
    return str(value)


def normalize_color(value: Any, default: str = "#000000") -> str:
    """Normalize to lower-case ``#rrggbb``; invalid input yields ``default``."""
    text = as_text(value).strip()
    if not HEX_COLOR.match(text):
        return default
    if len(text) == 4:
        text = "#" + "".join(ch * 2 for ch in text[1:])
    return text.lower()


def detect_service(url: str) -> str:
    """Name of the embed service a URL points at, or ``unknown``."""
    if not url:
        return "unknown"
    for service, pattern in SERVICE_PATTERNS.items():
        if pattern.search(url):
            return service
    return "unknown"


def strip_markup(value: Any) -> str:
    """Drop markup tags, leaving the visible text."""
    return _MARKUP_TAG.sub("", as_text(value))


def format_file_size(size: float) -> str:
    """Human-readable size, e.g. ``1.5 MB``."""
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    index = 0
    while size >= 1024 and index < len(units) - 1:
        size /= 1024
        index += 1
    text = f"{size:.2f}".rstrip("0").rstrip(".")
    return f"{text} {units[index]}"


def describe_file(location: str) -> dict[str, Any] | None:
    """Build a file value ``{name, url, size, type}`` from a local path or URL.

    Returns None when the location is blank or a local path does not exist.
    """
    location = location.strip()
    if not location:
        return None

    if HTTP_URL.match(location):
        name = Path(unquote(urlparse(location).path)).name or location
        return {
            "name": name,
            "url": location,
            "size": 0,
            "type": mimetypes.guess_type(name)[0] or "",
        }

    path = Path(location).expanduser()
    if not path.is_file():
        return None
    path = path.resolve()
    return {
        "name": path.name,
        "url": path.as_uri(),
        "size": path.stat().st_size,
        "type": mimetypes.guess_type(path.name)[0] or "",
    }

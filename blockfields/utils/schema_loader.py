"""Read field schemas and value maps from YAML or JSON files.

A schema document is either the field map itself or a mapping with a
``fields`` key holding it:

    fields:
      title:
        type: text
        required: true
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from blockfields.exceptions import SchemaError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def _read_document(path: Path) -> Any:
    """Parse a YAML or JSON file, choosing the parser by suffix."""
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                return yaml.safe_load(f)
            return json.load(f)
    except OSError as exc:
        raise SchemaError(f"Cannot read file: {exc.strerror or exc}", path=str(path)) from exc
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SchemaError(f"Cannot parse file: {exc}", path=str(path)) from exc


def _is_fields_document(document: Any) -> bool:
    """True for a document whose only key is ``fields`` holding the field map.

    A ``fields`` value with a string ``type`` is a field config, so the document
    is a field map containing one field named ``fields``.
    """
    if not isinstance(document, dict) or list(document) != ["fields"]:
        return False
    inner = document["fields"]
    return isinstance(inner, dict) and not isinstance(inner.get("type"), str)


def load_schema(path: str | Path) -> dict[str, Any]:
    """Load a field schema map.

    Args:
        path: YAML (.yaml/.yml) or JSON file

    Returns:
        Raw field map, ready for ``parse_fields``.

    Raises:
        SchemaError: If the file is unreadable or does not hold a mapping
    """
    path = Path(path)
    document = _read_document(path)
    if _is_fields_document(document):
        document = document["fields"]
    if not isinstance(document, dict):
        raise SchemaError("Schema must be a mapping of field names to field configs", path=str(path))
    logger.debug(f"Loaded {len(document)} field(s) from {path}")
    return document


def load_values(path: str | Path) -> dict[str, Any]:
    """Load an initial value map. An empty file yields an empty map."""
    path = Path(path)
    document = _read_document(path)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise SchemaError("Values file must hold a mapping of field names to values", path=str(path))
    return document

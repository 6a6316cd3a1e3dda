"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from blockfields.engine.extractor import FieldExtractor  # noqa: E402
from blockfields.engine.renderer import FieldRenderer  # noqa: E402
from blockfields.engine.validator import FieldValidator  # noqa: E402
from blockfields.registry import FieldRegistry  # noqa: E402
from blockfields.settings import FormSettings  # noqa: E402


@pytest.fixture
def registry() -> FieldRegistry:
    """Registry seeded with every built-in field type."""
    return FieldRegistry.create_default()


@pytest.fixture
def settings() -> FormSettings:
    """Settings with the fade disabled so visibility changes are immediate."""
    return FormSettings(fade_duration=0.0)


@pytest.fixture
def renderer(registry: FieldRegistry, settings: FormSettings) -> FieldRenderer:
    return FieldRenderer(registry, settings)


@pytest.fixture
def extractor(registry: FieldRegistry) -> FieldExtractor:
    return FieldExtractor(registry)


@pytest.fixture
def validator(registry: FieldRegistry) -> FieldValidator:
    return FieldValidator(registry)


@pytest.fixture
def cta_schema() -> dict[str, Any]:
    """A call-to-action text that only shows when its toggle is on."""
    return {
        "showCTA": {"type": "boolean", "label": "Show CTA"},
        "ctaText": {
            "type": "text",
            "label": "CTA Text",
            "required": True,
            "conditional": {"field": "showCTA", "operator": "==", "value": True},
        },
    }


@pytest.fixture
def chain_schema() -> dict[str, Any]:
    """Three fields where each watches the previous one."""
    return {
        "kind": {
            "type": "select",
            "label": "Kind",
            "options": [{"value": "video", "label": "Video"}, {"value": "text", "label": "Text"}],
        },
        "source": {
            "type": "select",
            "label": "Source",
            "options": ["youtube", "upload"],
            "conditional": {"field": "kind", "operator": "==", "value": "video"},
        },
        "videoUrl": {
            "type": "text",
            "label": "Video URL",
            "required": True,
            "conditional": {"field": "source", "operator": "==", "value": "youtube"},
        },
    }


@pytest.fixture
def team_schema() -> dict[str, Any]:
    """A bounded repeater of team members."""
    return {
        "members": {
            "type": "repeater",
            "label": "Members",
            "min": 1,
            "max": 3,
            "fields": {
                "name": {"type": "text", "label": "Name", "required": True},
                "role": {"type": "select", "label": "Role", "options": ["lead", "member"]},
            },
        },
    }


@pytest.fixture
def tmp_schema_yaml(tmp_path: Path) -> Path:
    """A schema file using the ``fields:`` document layout."""
    schema_file = tmp_path / "hero.yaml"
    schema_file.write_text(
        """
fields:
  title:
    type: text
    label: Title
    required: true
    maxLength: 60
  showCTA:
    type: boolean
    label: Show CTA
  ctaText:
    type: text
    label: CTA Text
    conditional:
      field: showCTA
      operator: "=="
      value: true
""",
        encoding="utf-8",
    )
    return schema_file

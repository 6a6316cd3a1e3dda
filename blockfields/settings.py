"""Form engine project settings loader.

Reads project-specific configuration from .blockfields.yaml in the
project root, so teams can tune rendering behavior per project.

Example .blockfields.yaml:
    forms:
      fade_duration: 0.2            # Seconds to fade in a revealed field (0 disables)
      container_class: form-fields  # CSS class added to every rendered form root
      log_file: ./logs/blockfields.log
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

SETTINGS_FILENAME = ".blockfields.yaml"


@dataclass
class FormSettings:
    """Form engine configuration settings."""

    # Seconds spent fading a field in when its condition starts to match
    fade_duration: float = 0.2

    # CSS class given to each FormView root the renderer creates
    container_class: str = "form-fields"

    # Where the preview app writes its log (the terminal belongs to Textual)
    log_file: str | None = None

    @classmethod
    def load(cls, project_root: Path | None = None) -> "FormSettings":
        """Load settings from .blockfields.yaml in project root.

        Args:
            project_root: Project root directory. Defaults to cwd.

        Returns:
            FormSettings with values from config file or defaults.
        """
        root = project_root or Path.cwd()
        config_path = root / SETTINGS_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}

            forms_config = config.get("forms") or {}
            return cls(
                fade_duration=float(forms_config.get("fade_duration", cls.fade_duration)),
                container_class=str(forms_config.get("container_class", cls.container_class)),
                log_file=forms_config.get("log_file", cls.log_file),
            )
        except (OSError, yaml.YAMLError, AttributeError, TypeError, ValueError):
            # If config file is malformed, use defaults
            return cls()

    def get_log_file(self, project_root: Path | None = None) -> Path | None:
        """Get absolute path to the log file, if one is configured."""
        if not self.log_file:
            return None
        root = project_root or Path.cwd()
        return (root / self.log_file).resolve()


# Global settings instance (loaded on first access)
_settings: FormSettings | None = None


def get_settings(reload: bool = False) -> FormSettings:
    """Get the global form settings.

    Args:
        reload: Force reload from config file.

    Returns:
        FormSettings instance.
    """
    global _settings
    if _settings is None or reload:
        _settings = FormSettings.load()
    return _settings

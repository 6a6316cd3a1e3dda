"""Tests for project settings loading."""

from __future__ import annotations

from pathlib import Path

from blockfields.settings import SETTINGS_FILENAME, FormSettings


class TestFormSettings:
    """Tests for FormSettings.load."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        settings = FormSettings.load(tmp_path)
        assert settings == FormSettings()
        assert settings.fade_duration == 0.2
        assert settings.container_class == "form-fields"
        assert settings.log_file is None

    def test_reads_forms_section(self, tmp_path: Path) -> None:
        (tmp_path / SETTINGS_FILENAME).write_text(
            "forms:\n  fade_duration: 0\n  container_class: hero\n  log_file: logs/app.log\n",
            encoding="utf-8",
        )
        settings = FormSettings.load(tmp_path)
        assert settings.fade_duration == 0.0
        assert settings.container_class == "hero"
        assert settings.get_log_file(tmp_path) == (tmp_path / "logs" / "app.log").resolve()

    def test_partial_file_keeps_defaults(self, tmp_path: Path) -> None:
        (tmp_path / SETTINGS_FILENAME).write_text("forms:\n  container_class: hero\n", encoding="utf-8")
        settings = FormSettings.load(tmp_path)
        assert settings.fade_duration == 0.2
        assert settings.container_class == "hero"

    def test_malformed_file_falls_back(self, tmp_path: Path) -> None:
        (tmp_path / SETTINGS_FILENAME).write_text("forms: [unclosed\n", encoding="utf-8")
        assert FormSettings.load(tmp_path) == FormSettings()

    def test_wrong_types_fall_back(self, tmp_path: Path) -> None:
        (tmp_path / SETTINGS_FILENAME).write_text("forms:\n  fade_duration: slow\n", encoding="utf-8")
        assert FormSettings.load(tmp_path) == FormSettings()

    def test_no_log_file(self) -> None:
        assert FormSettings().get_log_file() is None

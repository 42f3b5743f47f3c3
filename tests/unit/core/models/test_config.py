"""Tests for configuration models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from widgetize.core.models.config import (
    CaptureConfig,
    Config,
    ExportConfig,
    RecognitionConfig,
)


class TestDefaults:
    """Tests for default configuration values."""

    def test_default_config(self):
        """Default config matches Elementor import expectations."""
        config = Config()
        assert config.recognition.max_depth == 64
        assert config.recognition.max_nodes == 20000
        assert config.recognition.min_confidence == 0
        assert config.export.elementor_version == "3.16.0"
        assert config.export.page_title == "Imported Page"
        assert config.export.fallback_to_html is True
        assert config.capture.viewport_width == 1920
        assert config.logs.level == "INFO"
        assert config.plugins.disabled == []

    def test_to_dict_is_plain(self):
        data = Config().to_dict()
        assert set(data) == {"recognition", "export", "capture", "logs", "plugins"}
        assert data["export"]["page_type"] == "page"


class TestValidation:
    """Tests for field constraints."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_depth": 0},
            {"max_depth": 1000},
            {"max_nodes": 0},
            {"min_confidence": 101},
        ],
    )
    def test_recognition_limits(self, kwargs):
        with pytest.raises(ValidationError):
            RecognitionConfig(**kwargs)

    def test_page_type(self):
        """Only Elementor document types are accepted."""
        assert ExportConfig(page_type="section").page_type == "section"
        with pytest.raises(ValidationError):
            ExportConfig(page_type="post")

    def test_viewport_bounds(self):
        with pytest.raises(ValidationError):
            CaptureConfig(viewport_width=100)

    def test_from_dict_validates_nested(self):
        """Nested sections are validated too."""
        with pytest.raises(ValidationError):
            Config.from_dict({"logs": {"level": "LOUD"}})


class TestYaml:
    """Tests for YAML persistence."""

    def test_round_trip(self, tmp_path):
        """A saved config loads back unchanged."""
        path = tmp_path / "nested" / "widgetize.yaml"
        config = Config.from_dict({"export": {"page_title": "Landing"}, "recognition": {"max_depth": 32}})
        config.to_yaml(path)

        loaded = Config.from_yaml(path)
        assert loaded.export.page_title == "Landing"
        assert loaded.recognition.max_depth == 32
        assert loaded.to_dict() == config.to_dict()

    def test_partial_file(self, tmp_path):
        """Sections missing from the file keep their defaults."""
        path = tmp_path / "widgetize.yaml"
        path.write_text("plugins:\n  disabled: [legacy]\n")
        config = Config.from_yaml(path)
        assert config.plugins.disabled == ["legacy"]
        assert config.export.page_title == "Imported Page"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert Config.from_yaml(path).to_dict() == Config().to_dict()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(tmp_path / "missing.yaml")


class TestMergeAndEnvironment:
    """Tests for merging and environment overrides."""

    def test_merge_prefers_other(self):
        base = Config.from_dict({"export": {"page_title": "Base"}})
        override = Config.from_dict({"export": {"page_title": "Override"}})
        merged = base.merge(override)
        assert merged.export.page_title == "Override"
        assert merged.recognition.max_depth == 64

    def test_nested_environment_variables(self, monkeypatch):
        """WIDGETIZE_ variables with __ reach nested fields."""
        monkeypatch.setenv("WIDGETIZE_RECOGNITION__MAX_DEPTH", "16")
        monkeypatch.setenv("WIDGETIZE_EXPORT__FALLBACK_TO_HTML", "false")
        config = Config()
        assert config.recognition.max_depth == 16
        assert config.export.fallback_to_html is False

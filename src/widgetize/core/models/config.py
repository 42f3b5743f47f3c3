"""Configuration models using Pydantic."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RecognitionConfig(BaseModel):
    """Recognition pass limits."""

    max_depth: int = Field(default=64, ge=1, le=512)  # Nodes deeper than this are not visited
    max_nodes: int = Field(default=20000, ge=1)  # Maximum nodes visited per pass
    min_confidence: int = Field(default=0, ge=0, le=100)  # Candidates below this are discarded


class ExportConfig(BaseModel):
    """Elementor export configuration."""

    elementor_version: str = "3.16.0"
    page_title: str = "Imported Page"
    page_type: Literal["page", "section", "container"] = "page"
    fallback_to_html: bool = True  # Unmapped custom types become HTML widgets


class CaptureConfig(BaseModel):
    """Live page capture configuration."""

    viewport_width: int = Field(default=1920, ge=320, le=7680)
    viewport_height: int = Field(default=1080, ge=240, le=4320)
    max_depth: int = Field(default=64, ge=1, le=512)
    max_text_length: int = Field(default=2000, ge=0)


class LogConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    structured: bool = False


class PluginConfig(BaseModel):
    """Plugin configuration."""

    enabled: bool = True
    autoload: bool = True
    disabled: list[str] = []


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="WIDGETIZE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    recognition: RecognitionConfig = Field(default_factory=RecognitionConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    logs: LogConfig = Field(default_factory=LogConfig)
    plugins: PluginConfig = Field(default_factory=PluginConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> Config:
        """Load configuration from YAML file."""
        import yaml

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open() as f:
            data = yaml.safe_load(f)

        return cls(**data) if data else cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Create configuration from dictionary."""
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return self.model_dump(mode="json")

    def to_yaml(self, path: Path | str) -> None:
        """Save configuration to YAML file."""
        import yaml

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("w") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def merge(self, other: Config) -> Config:
        """Merge with another config, other takes precedence."""

        def deep_merge(base: dict, override: dict) -> dict:
            result = base.copy()
            for key, value in override.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = deep_merge(result[key], value)
                else:
                    result[key] = value
            return result

        return Config(**deep_merge(self.to_dict(), other.to_dict()))

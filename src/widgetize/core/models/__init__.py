"""Configuration models."""

from widgetize.core.models.config import (
    CaptureConfig,
    Config,
    ExportConfig,
    LogConfig,
    PluginConfig,
    RecognitionConfig,
)

__all__ = [
    "Config",
    "RecognitionConfig",
    "ExportConfig",
    "CaptureConfig",
    "LogConfig",
    "PluginConfig",
]

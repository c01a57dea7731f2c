"""Configuration management module."""

from .config_manager import ConfigManager
from .models import (
    ArtifactsConfig,
    Config,
    FilesConfig,
    LoggingConfig,
    StorageConfig,
    TMDbConfig,
)

__all__ = [
    "ConfigManager",
    "Config",
    "ArtifactsConfig",
    "FilesConfig",
    "LoggingConfig",
    "StorageConfig",
    "TMDbConfig",
]

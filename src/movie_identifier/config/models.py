"""Configuration data models."""

import os
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TMDbConfig(BaseModel):
    """TMDb API configuration."""

    api_key: str = Field(..., description="TMDb API key")
    base_url: str = Field(
        default="https://api.themoviedb.org/3",
        validate_default=True,
        description="TMDb API base URL",
    )
    image_base_url: str = Field(
        default="https://image.tmdb.org/t/p/",
        validate_default=True,
        description="Image base URL used when /configuration is unavailable",
    )
    poster_size: str = Field(default="w342", description="Poster image size")
    backdrop_size: str = Field(default="w1280", description="Backdrop image size")
    timeout: int = Field(default=10, gt=0, description="Request timeout in seconds")

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Expand environment variables in API key."""
        return os.path.expandvars(v)

    @field_validator("base_url", "image_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize URLs so paths can be appended."""
        return v.rstrip("/")


class StorageConfig(BaseModel):
    """Library storage configuration."""

    database_path: str = Field(
        default="~/.movie_identifier/library.db",
        validate_default=True,
        description="SQLite database path",
    )
    artifact_dir: str = Field(
        default="~/.movie_identifier/artifacts",
        validate_default=True,
        description="Directory for cached images",
    )

    @field_validator("database_path", "artifact_dir")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand user home and environment variables."""
        return os.path.expanduser(os.path.expandvars(v))


class ArtifactsConfig(BaseModel):
    """Image download configuration."""

    download_timeout: int = Field(default=30, gt=0, description="Download timeout in seconds")
    retry_attempts: int = Field(
        default=2, ge=1, description="Attempts per download, including the first"
    )
    retry_wait_seconds: float = Field(
        default=1.0, ge=0.0, description="Pause between download attempts"
    )


class FilesConfig(BaseModel):
    """File scanning configuration."""

    extensions: List[str] = Field(
        default_factory=lambda: [
            ".mkv",
            ".mp4",
            ".avi",
            ".mov",
            ".wmv",
            ".m4v",
            ".m2ts",
            ".ts",
            ".iso",
            ".webm",
        ],
        description="Video file extensions",
    )
    ignore_patterns: List[str] = Field(
        default_factory=lambda: ["sample", "trailer", "extras", "behind.the.scenes"],
        description="Patterns to ignore in filenames",
    )
    min_file_size_mb: int = Field(default=0, ge=0, description="Minimum file size in MB")
    scan_depth: int = Field(default=3, ge=0, description="Maximum directory scan depth")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    file: Optional[str] = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, gt=0, description="Maximum log file size in MB")
    backup_count: int = Field(default=5, ge=0, description="Number of backup log files")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Logging level must be one of: {allowed}")
        return v.upper()


class Config(BaseModel):
    """Main configuration model."""

    tmdb: TMDbConfig = Field(..., description="TMDb configuration")
    storage: StorageConfig = Field(
        default_factory=StorageConfig, description="Storage configuration"
    )
    artifacts: ArtifactsConfig = Field(
        default_factory=ArtifactsConfig, description="Image download configuration"
    )
    files: FilesConfig = Field(default_factory=FilesConfig, description="File scanning")
    preferences: Dict[str, str] = Field(
        default_factory=lambda: {"language_preference": "en"},
        description="User preferences (key/value)",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
    )

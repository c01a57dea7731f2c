"""Configuration management."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from .models import Config

DEFAULT_CONFIG: Dict[str, Any] = {
    "tmdb": {
        "api_key": "${TMDB_API_KEY}",
        "poster_size": "w342",
        "backdrop_size": "w1280",
    },
    "storage": {
        "database_path": "~/.movie_identifier/library.db",
        "artifact_dir": "~/.movie_identifier/artifacts",
    },
    "preferences": {
        "language_preference": "en",
    },
}


class ConfigManager:
    """Manages application configuration loading and validation."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file. If None, searches standard locations.
        """
        self._config_path = config_path
        self._config: Optional[Config] = None

    def load_config(self) -> Config:
        """Load and validate configuration.

        Returns:
            Validated configuration object.

        Raises:
            FileNotFoundError: If configuration file is not found.
            ValueError: If configuration is invalid.
            yaml.YAMLError: If YAML parsing fails.
        """
        if self._config is not None:
            return self._config

        # Values from a local .env file become visible to ${VAR} expansion
        load_dotenv()

        config_path = self._find_config_file()
        raw_config = self._load_yaml_file(config_path)

        try:
            self._config = Config(**raw_config)
        except ValidationError as e:
            raise ValueError(f"Configuration validation failed: {e}")

        return self._config

    def reload_config(self) -> Config:
        """Reload configuration from file.

        Returns:
            Newly loaded configuration object.
        """
        self._config = None
        return self.load_config()

    def get_config(self) -> Config:
        """Get current configuration, loading if necessary.

        Returns:
            Current configuration object.
        """
        if self._config is None:
            return self.load_config()
        return self._config

    def _find_config_file(self) -> Path:
        """Find configuration file in standard locations.

        Returns:
            Path to configuration file.

        Raises:
            FileNotFoundError: If no configuration file is found.
        """
        if self._config_path is not None:
            if self._config_path.exists():
                return self._config_path
            raise FileNotFoundError(f"Configuration file not found: {self._config_path}")

        search_paths = [
            Path.cwd() / "config" / "config.yaml",
            Path.cwd() / "config.yaml",
            Path.home() / ".config" / "movie_identifier" / "config.yaml",
        ]

        env_config = os.getenv("MOVIE_IDENTIFIER_CONFIG")
        if env_config:
            search_paths.insert(0, Path(env_config))

        for path in search_paths:
            if path.exists():
                return path

        raise FileNotFoundError(
            f"Configuration file not found in any of these locations: "
            f"{[str(p) for p in search_paths]}"
        )

    def _load_yaml_file(self, path: Path) -> Dict[str, Any]:
        """Load YAML file with environment variable expansion.

        Args:
            path: Path to YAML file.

        Returns:
            Parsed YAML data with environment variables expanded.

        Raises:
            yaml.YAMLError: If YAML parsing fails.
        """
        with open(path, "r", encoding="utf-8") as f:
            content = os.path.expandvars(f.read())

        try:
            result = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}")

        if not isinstance(result, dict):
            raise yaml.YAMLError(f"YAML file {path} must contain a dictionary at root level")
        return result

    @classmethod
    def create_default_config(cls, output_path: Path) -> None:
        """Create a default configuration file.

        Args:
            output_path: Path where to create the configuration file.
        """
        with open(output_path, "w", encoding="utf-8") as f:
            yaml.dump(DEFAULT_CONFIG, f, default_flow_style=False, indent=2)

    def validate_config_file(self, config_path: Path) -> bool:
        """Validate a configuration file without loading it as current config.

        Args:
            config_path: Path to configuration file to validate.

        Returns:
            True if configuration is valid, False otherwise.
        """
        try:
            Config(**self._load_yaml_file(config_path))
            return True
        except (ValidationError, yaml.YAMLError, FileNotFoundError):
            return False

"""Test configuration management."""

from pathlib import Path

import pytest
import yaml

from movie_identifier.config import Config, ConfigManager


@pytest.mark.unit
def test_config_manager_loads_config(config_manager, tmp_path):
    """Test that config manager loads configuration correctly."""
    config = config_manager.load_config()

    assert isinstance(config, Config)
    assert config.tmdb.api_key == "test-tmdb-key"
    assert config.tmdb.base_url == "https://api.themoviedb.org/3"
    assert config.storage.database_path == str(tmp_path / "library.db")
    assert config.artifacts.retry_wait_seconds == 0
    assert config.preferences["language_preference"] == "en"


@pytest.mark.unit
def test_config_manager_caches_config(config_manager):
    """Test that config manager caches loaded configuration."""
    config1 = config_manager.load_config()
    config2 = config_manager.get_config()

    assert config1 is config2


@pytest.mark.unit
def test_config_manager_reload_config(config_manager):
    """Test that config manager can reload configuration."""
    config1 = config_manager.load_config()
    config2 = config_manager.reload_config()

    assert config1 is not config2
    assert config1.tmdb.api_key == config2.tmdb.api_key


@pytest.mark.unit
def test_config_manager_missing_file():
    """Test that config manager raises error for missing file."""
    config_manager = ConfigManager(Path("nonexistent.yaml"))

    with pytest.raises(FileNotFoundError):
        config_manager.load_config()


@pytest.mark.unit
def test_config_requires_tmdb_section(tmp_path):
    """Test config validation without a TMDb section."""
    config_file = tmp_path / "invalid.yaml"
    config_file.write_text("storage:\n  database_path: /tmp/library.db\n")

    with pytest.raises(ValueError, match="Configuration validation failed"):
        ConfigManager(config_file).load_config()


@pytest.mark.unit
def test_config_rejects_invalid_logging_level(tmp_path):
    """Test config validation with an unknown logging level."""
    config_file = tmp_path / "invalid.yaml"
    config_file.write_text('tmdb:\n  api_key: "key"\nlogging:\n  level: "LOUD"\n')

    with pytest.raises(ValueError):
        ConfigManager(config_file).load_config()


@pytest.mark.unit
def test_config_rejects_zero_retry_attempts(tmp_path):
    """Test that downloads are attempted at least once."""
    config_file = tmp_path / "invalid.yaml"
    config_file.write_text('tmdb:\n  api_key: "key"\nartifacts:\n  retry_attempts: 0\n')

    with pytest.raises(ValueError):
        ConfigManager(config_file).load_config()


@pytest.mark.unit
def test_environment_variables_are_expanded(tmp_path, monkeypatch):
    """Test ${VAR} expansion in configuration values."""
    monkeypatch.setenv("TEST_TMDB_KEY", "from-environment")
    monkeypatch.setenv("TEST_LIBRARY_DIR", str(tmp_path / "lib"))
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        'tmdb:\n  api_key: "${TEST_TMDB_KEY}"\n'
        'storage:\n  database_path: "${TEST_LIBRARY_DIR}/library.db"\n'
    )

    config = ConfigManager(config_file).load_config()

    assert config.tmdb.api_key == "from-environment"
    assert config.storage.database_path == str(tmp_path / "lib" / "library.db")


@pytest.mark.unit
def test_config_found_through_environment(tmp_path, monkeypatch, temp_config_file):
    """Test lookup through MOVIE_IDENTIFIER_CONFIG."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MOVIE_IDENTIFIER_CONFIG", str(temp_config_file))

    config = ConfigManager().load_config()

    assert config.tmdb.api_key == "test-tmdb-key"


@pytest.mark.unit
def test_defaults_and_url_normalization(tmp_path):
    """Test default sections and trailing slash handling."""
    config = Config(tmdb={"api_key": "key", "base_url": "https://api.example.test/3/"})

    assert config.tmdb.base_url == "https://api.example.test/3"
    assert config.tmdb.image_base_url == "https://image.tmdb.org/t/p"
    assert config.artifacts.retry_attempts == 2
    assert config.preferences == {"language_preference": "en"}
    assert not config.storage.database_path.startswith("~")


@pytest.mark.unit
def test_create_default_config(tmp_path):
    """Test writing and validating the default configuration."""
    output = tmp_path / "config.yaml"

    ConfigManager.create_default_config(output)

    data = yaml.safe_load(output.read_text())
    assert data["tmdb"]["api_key"] == "${TMDB_API_KEY}"
    assert data["preferences"]["language_preference"] == "en"
    assert ConfigManager().validate_config_file(output)


@pytest.mark.unit
def test_validate_config_file_rejects_invalid(tmp_path):
    """Test validation of a file without required settings."""
    config_file = tmp_path / "invalid.yaml"
    config_file.write_text("files:\n  scan_depth: 2\n")

    assert not ConfigManager().validate_config_file(config_file)


@pytest.mark.unit
def test_example_config_matches_model():
    """Test that the shipped example only uses sections the model reads."""
    example = Path(__file__).resolve().parents[2] / "config" / "config.example.yaml"

    data = yaml.safe_load(example.read_text())

    assert set(data) == set(Config.model_fields)
    assert ConfigManager(example).validate_config_file(example)

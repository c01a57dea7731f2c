"""Preference store backed by the ``preferences`` section of the config."""

from ...config.models import Config
from ..interfaces import IPreferenceStore


class ConfigPreferenceStore(IPreferenceStore):
    """Reads user preferences from the loaded configuration."""

    def __init__(self, config: Config):
        self._preferences = config.preferences

    def get_string(self, key: str, default: str) -> str:
        value = self._preferences.get(key)
        return value if value else default

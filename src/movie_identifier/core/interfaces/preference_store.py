"""Preference store interface."""

from abc import ABC, abstractmethod

LANGUAGE_PREFERENCE = "language_preference"


class IPreferenceStore(ABC):
    """Interface for simple key/value user preferences."""

    @abstractmethod
    def get_string(self, key: str, default: str) -> str:
        """Read a string preference.

        Args:
            key: Preference key.
            default: Value returned when the key is not set.

        Returns:
            Stored value or the default.
        """
        pass

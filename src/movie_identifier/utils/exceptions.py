"""Custom exceptions for the application."""


class MovieIdentifierError(Exception):
    """Base exception for all application errors."""

    pass


class ConfigurationError(MovieIdentifierError):
    """Configuration-related errors."""

    pass


class LookupClientError(MovieIdentifierError):
    """Metadata provider transport or payload errors."""

    pass


class StoreError(MovieIdentifierError):
    """Persistent store read or write errors."""

    pass


class ArtifactCacheError(MovieIdentifierError):
    """Artifact download or storage errors."""

    pass


class IdentificationError(MovieIdentifierError):
    """Batch identification errors."""

    pass


class FileScannerError(MovieIdentifierError):
    """File scanner errors."""

    pass

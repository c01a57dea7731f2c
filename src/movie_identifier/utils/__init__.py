"""Utility functions and classes."""

from .exceptions import (
    ArtifactCacheError,
    ConfigurationError,
    FileScannerError,
    IdentificationError,
    LookupClientError,
    MovieIdentifierError,
    StoreError,
)
from .filename_parser import (
    clean_movie_filename,
    clean_movie_name,
    extract_imdb_id,
    extract_year,
)

__all__ = [
    "MovieIdentifierError",
    "ConfigurationError",
    "LookupClientError",
    "StoreError",
    "ArtifactCacheError",
    "IdentificationError",
    "FileScannerError",
    "clean_movie_filename",
    "clean_movie_name",
    "extract_imdb_id",
    "extract_year",
]

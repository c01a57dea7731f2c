"""File descriptor data model."""

from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ...utils.filename_parser import clean_movie_filename, clean_movie_name, extract_imdb_id


class FileDescriptor(BaseModel):
    """One local video file plus the metadata inferred from its name and location."""

    filepath: str = Field(..., description="Full path to the video file")
    imdb_id: Optional[str] = Field(None, description="Embedded IMDb id, e.g. tt1375666")
    title: str = Field(default="", description="Title inferred from the filename")
    release_year: Optional[int] = Field(
        None, description="Year inferred from the filename; negative means unknown"
    )
    parent_folder_name: str = Field(
        default="", description="Cleaned name of the parent folder"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def has_imdb_id(self) -> bool:
        """Check if the file carries an external IMDb id."""
        return bool(self.imdb_id)

    @property
    def has_year(self) -> bool:
        """Check if a usable release year is known."""
        return self.release_year is not None and self.release_year >= 0

    @property
    def filename(self) -> str:
        """Get the bare filename."""
        return Path(self.filepath).name

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "FileDescriptor":
        """Build a descriptor by parsing a file path.

        The path is made absolute so the same file always maps to the same
        library key. The year is taken from the filename, falling back to the
        parent folder.

        Args:
            path: Path to a video file.

        Returns:
            File descriptor for the path.
        """
        path = Path(path).expanduser().resolve()
        title, year = clean_movie_filename(path)
        folder_title, folder_year = "", None
        if path.parent.name:
            folder_title, folder_year = clean_movie_name(path.parent.name)

        return cls(
            filepath=str(path),
            imdb_id=extract_imdb_id(path.name) or extract_imdb_id(path.parent.name),
            title=title,
            release_year=year if year is not None else folder_year,
            parent_folder_name=folder_title,
        )

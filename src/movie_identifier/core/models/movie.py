"""Movie-related data models."""

from typing import Optional

from pydantic import BaseModel, Field

UNIDENTIFIED_ID = -1
"""Reserved movie id meaning "no match found / not yet identified"."""


class CandidateRecord(BaseModel):
    """Lightweight search hit from the metadata provider."""

    movie_id: int = Field(..., description="TMDb movie id")
    title: str = Field(default="", description="Movie title")
    original_title: Optional[str] = Field(None, description="Original title")
    release_date: Optional[str] = Field(None, description="Release date (YYYY-MM-DD)")
    popularity: Optional[float] = Field(None, description="TMDb popularity score")


class CollectionInfo(BaseModel):
    """Collection (franchise) a movie belongs to."""

    collection_id: int = Field(..., description="TMDb collection id")
    name: str = Field(default="", description="Collection name")
    poster_path: Optional[str] = Field(None, description="Relative poster path")
    poster_url: Optional[str] = Field(None, description="Absolute poster URL")


class MetadataRecord(BaseModel):
    """Full canonical record for a matched movie."""

    movie_id: int = Field(default=UNIDENTIFIED_ID, description="TMDb movie id")
    title: str = Field(default="", description="Movie title")
    overview: str = Field(default="", description="Plot overview")
    imdb_id: str = Field(default="", description="IMDb cross-reference id")
    vote_average: float = Field(default=0.0, description="Average rating")
    tagline: str = Field(default="", description="Tagline")
    release_date: str = Field(default="", description="Release date (YYYY-MM-DD)")
    runtime: int = Field(default=0, description="Runtime in minutes")
    poster_path: Optional[str] = Field(None, description="Relative poster path")
    poster_url: Optional[str] = Field(None, description="Absolute poster URL")
    backdrop_path: Optional[str] = Field(None, description="Relative backdrop path")
    backdrop_url: Optional[str] = Field(None, description="Absolute backdrop URL")
    collection: Optional[CollectionInfo] = Field(None, description="Collection reference")

    @property
    def is_identified(self) -> bool:
        """Check if this record is a real match rather than the sentinel."""
        return self.movie_id != UNIDENTIFIED_ID

    @classmethod
    def unidentified(cls) -> "MetadataRecord":
        """Create the empty sentinel record."""
        return cls()


class PersistedMovie(BaseModel):
    """Movie row as stored in the library database."""

    movie_id: int
    title: str = ""
    plot: str = ""
    imdb_id: str = ""
    rating: str = "0.0"
    tagline: str = ""
    release_date: str = ""
    certification: str = ""
    runtime: str = "0"
    trailer: str = ""
    genres: str = ""
    favourite: str = "0"
    actors: str = ""
    collection: str = ""
    collection_id: str = ""
    to_watch: str = "0"
    has_watched: str = "0"
    date_added: str = ""

    @classmethod
    def from_record(cls, record: MetadataRecord, timestamp_ms: int) -> "PersistedMovie":
        """Build the stored row for a metadata record.

        Columns unknown at identification time are written empty or zero.

        Args:
            record: Resolved metadata record.
            timestamp_ms: Last-updated stamp in epoch milliseconds.

        Returns:
            Row ready to upsert.
        """
        collection = record.collection
        return cls(
            movie_id=record.movie_id,
            title=record.title,
            plot=record.overview,
            imdb_id=record.imdb_id,
            rating=str(record.vote_average),
            tagline=record.tagline,
            release_date=record.release_date,
            runtime=str(record.runtime),
            collection=collection.name if collection else "",
            collection_id=str(collection.collection_id) if collection else "",
            date_added=str(timestamp_ms),
        )

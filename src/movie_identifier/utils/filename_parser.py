"""Filename parsing used to infer titles, years and IMDb ids from paths."""

import re
from pathlib import Path
from typing import Optional, Tuple, Union

IMDB_ID_PATTERN = re.compile(r"\b(tt\d{7,8})\b", re.IGNORECASE)

_YEAR_PATTERNS = [
    re.compile(r"\((\d{4})\)"),
    re.compile(r"\[(\d{4})\]"),
]
_BARE_YEAR_PATTERN = re.compile(r"\b(19\d{2}|20\d{2})\b")

_NOISE_PATTERNS = [
    # Quality and source
    r"\b(2160p|1080p|720p|576p|480p|4k|uhd|hdr|hd|sd)\b",
    r"\b(bluray|blu-ray|bdrip|brrip|webrip|web-dl|webdl|web|hdtv|dvdrip|dvdscr|dvd|vhs)\b",
    # Codecs
    r"\b(x264|x265|h264|h265|hevc|xvid|divx|avc)\b",
    r"\b(10bit|8bit|hi10p)\b",
    # Audio
    r"\b(aac|ac3|dts-hd|dts|truehd|atmos|dd|eac3|flac|mp3|pcm|ma)\b",
    r"\b[257]\.1\b",
    # Editions and release tags
    r"\b(extended|unrated|remastered|theatrical|directors?\.?cut|final\.cut)\b",
    r"\b(remux|repack|proper|real|retail|internal|limited|subbed|dubbed|multi|dual)\b",
    r"\bsample\b",
]


def extract_year(text: str) -> Optional[int]:
    """Extract a plausible release year from text.

    Args:
        text: Filename or folder name.

    Returns:
        Year between 1900 and 2099, or None.
    """
    for pattern in _YEAR_PATTERNS:
        match = pattern.search(text)
        if match and 1900 <= int(match.group(1)) <= 2099:
            return int(match.group(1))

    # The last bare year wins, so "2001.A.Space.Odyssey.1968" yields 1968
    matches = _BARE_YEAR_PATTERN.findall(text)
    return int(matches[-1]) if matches else None


def extract_imdb_id(text: Union[str, Path]) -> Optional[str]:
    """Extract an embedded IMDb id such as ``tt1375666``.

    Args:
        text: Path or name to search.

    Returns:
        Lower-cased IMDb id or None.
    """
    match = IMDB_ID_PATTERN.search(str(text))
    return match.group(1).lower() if match else None


def clean_movie_name(name: str) -> Tuple[str, Optional[int]]:
    """Strip release noise from a file or folder name.

    Args:
        name: File stem or folder name, without extension.

    Returns:
        Tuple of (cleaned title, year or None).

    Examples:
        >>> clean_movie_name("The.Matrix.1999.1080p.BluRay.x264-GROUP")
        ('The Matrix', 1999)
        >>> clean_movie_name("Inception (2010) [1080p]")
        ('Inception', 2010)
    """
    original = name
    year = extract_year(name)

    cleaned = IMDB_ID_PATTERN.sub(" ", name)
    cleaned = re.sub(r"\[[^\]]*\]|\([^)]*\)|\{[^}]*\}", " ", cleaned)

    title_found = False
    if year:
        # Everything after the last occurrence of the year is release information
        head, _, _ = cleaned.rpartition(str(year))
        if head.strip(" ._-"):
            cleaned = head
            title_found = True
        else:
            cleaned = cleaned.replace(str(year), " ")

    if not title_found:
        for pattern in _NOISE_PATTERNS:
            cleaned = re.sub(pattern, " ", cleaned, flags=re.IGNORECASE)
        # Release group after the last dash
        cleaned = re.sub(r"-[A-Za-z0-9]+\s*$", "", cleaned.strip())

    cleaned = re.sub(r"[._]", " ", cleaned)
    cleaned = re.sub(r"\s+", " ", cleaned).strip(" -")

    if not cleaned:
        cleaned = re.sub(r"\s+", " ", re.sub(r"[._]", " ", original)).strip()

    return cleaned, year


def clean_movie_filename(filename: Union[str, Path]) -> Tuple[str, Optional[int]]:
    """Clean a movie filename, dropping its extension first.

    Args:
        filename: Full path or bare filename.

    Returns:
        Tuple of (cleaned title, year or None).
    """
    if isinstance(filename, Path):
        stem = filename.stem
    else:
        stem = re.sub(r"\.[A-Za-z0-9]{2,4}$", "", Path(filename).name)
    return clean_movie_name(stem)

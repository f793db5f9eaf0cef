from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

import numpy as np
import pandas as pd


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Movie:
    movie_id: int
    title: str
    genres: frozenset[str] = frozenset()


@dataclass(frozen=True)
class Rating:
    user_id: int
    movie_id: int
    rating: float
    timestamp: str = ""


@dataclass(frozen=True)
class RawMovieLensData:
    movies: pd.DataFrame
    ratings: pd.DataFrame


REQUIRED_COLUMNS: Dict[str, Tuple[str, ...]] = {
    "movies": ("movieId", "title", "genres"),
    "ratings": ("userId", "movieId", "rating", "timestamp"),
}


def parse_genres(genres: str) -> frozenset[str]:
    """Parse pipe-separated genre tokens into a set."""
    if genres is None or (isinstance(genres, float) and pd.isna(genres)) or genres is pd.NA:
        return frozenset()
    tokens = [g.strip() for g in str(genres).split("|")]
    return frozenset(t for t in tokens if t)


def load_raw_data(raw_dir: Path) -> RawMovieLensData:
    """Load `movies.csv` and `ratings.csv` from a directory.

    Notes
    -----
    Timestamps are read as strings: they are carried along with each rating
    but never interpreted.
    """
    raw_dir = Path(raw_dir)
    for name in ("movies.csv", "ratings.csv"):
        if not (raw_dir / name).exists():
            raise FileNotFoundError(f"{name} not found in {raw_dir}")

    movies = pd.read_csv(
        raw_dir / "movies.csv",
        dtype={"movieId": "int64", "title": "string", "genres": "string"},
    )
    ratings = pd.read_csv(
        raw_dir / "ratings.csv",
        dtype={"userId": "int64", "movieId": "int64", "rating": "float64", "timestamp": "string"},
    )

    data = RawMovieLensData(movies=movies, ratings=ratings)
    validate_schema(data)
    logger.info("Loaded %d movies and %d ratings from %s", len(movies), len(ratings), raw_dir)
    return data


def validate_schema(data: RawMovieLensData) -> None:
    """Validate that all required columns exist and basic constraints hold."""
    for name, cols in REQUIRED_COLUMNS.items():
        df = getattr(data, name)
        missing = [c for c in cols if c not in df.columns]
        if missing:
            raise ValueError(f"{name}.csv missing columns: {missing}")

    if data.movies["movieId"].duplicated().any():
        raise ValueError("movies.csv has duplicate movieId values")

    if data.movies["title"].isna().any():
        raise ValueError("movies.csv has rows without a title")

    ratings = data.ratings
    if ratings[["userId", "movieId", "rating"]].isna().any().any():
        raise ValueError("ratings.csv has rows with missing userId/movieId/rating")

    if not np.isfinite(ratings["rating"].to_numpy(dtype=np.float64)).all():
        raise ValueError("ratings.csv contains non-finite rating values")

    # Duplicates are legal (last one wins when indexing) but worth knowing about.
    n_dup = int(ratings.duplicated(subset=["userId", "movieId"]).sum())
    if n_dup:
        logger.warning("ratings.csv contains %d duplicate (userId, movieId) rows", n_dup)


def movies_from_frame(df: pd.DataFrame) -> List[Movie]:
    """Convert a movies table to `Movie` records, preserving row order."""
    return [
        Movie(movie_id=int(row.movieId), title=str(row.title), genres=parse_genres(row.genres))
        for row in df[["movieId", "title", "genres"]].itertuples(index=False)
    ]


def ratings_from_frame(df: pd.DataFrame) -> List[Rating]:
    """Convert a ratings table to `Rating` records, preserving row order."""
    out: List[Rating] = []
    for row in df[["userId", "movieId", "rating", "timestamp"]].itertuples(index=False):
        ts = row.timestamp
        out.append(
            Rating(
                user_id=int(row.userId),
                movie_id=int(row.movieId),
                rating=float(row.rating),
                timestamp="" if ts is None or ts is pd.NA else str(ts),
            )
        )
    return out


def load_records(raw_dir: Path) -> tuple[List[Movie], List[Rating]]:
    """Load the raw CSVs and return fully materialized (movies, ratings) records."""
    data = load_raw_data(raw_dir)
    return movies_from_frame(data.movies), ratings_from_frame(data.ratings)

"""Movie catalog with identity lookups (title -> movieId -> row position)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import Iterator, Optional, Sequence

from ..data import Movie
from ..errors import NotFoundError
from ..index.rating_index import row_map


_TITLE_YEAR_SUFFIX_RE = re.compile(r"\(\d{4}\)\s*$")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_MULTISPACE_RE = re.compile(r"\s+")


def normalize_title(text: str) -> str:
    """Normalize title-ish text for fuzzy suggestions.

    - Lowercase
    - Strip
    - Remove trailing "(YYYY)"
    - Remove punctuation (keep a-z, 0-9)
    - Collapse whitespace
    """
    text = "" if text is None else str(text)
    text = text.strip().lower()
    text = _TITLE_YEAR_SUFFIX_RE.sub("", text).strip()
    text = _NON_ALNUM_RE.sub(" ", text)
    text = _MULTISPACE_RE.sub(" ", text).strip()
    return text


@dataclass(frozen=True)
class MovieCatalog:
    """Ordered movie list with lookup maps built once.

    Row positions are the catalog order and match the rows of the rating
    matrix built from the same movie sequence.
    """

    movies: tuple[Movie, ...]
    movie_id_to_row: dict[int, int]
    title_to_movie_id: dict[str, int]

    @classmethod
    def from_movies(cls, movies: Sequence[Movie]) -> "MovieCatalog":
        movies = tuple(movies)
        movie_id_to_row = row_map([m.movie_id for m in movies])
        title_to_movie_id: dict[str, int] = {}
        for movie in movies:
            # First occurrence wins for duplicate titles.
            title_to_movie_id.setdefault(movie.title, int(movie.movie_id))
        return cls(movies=movies, movie_id_to_row=movie_id_to_row, title_to_movie_id=title_to_movie_id)

    def __len__(self) -> int:
        return len(self.movies)

    def __iter__(self) -> Iterator[Movie]:
        return iter(self.movies)

    def find_movie_id(self, title: str) -> Optional[int]:
        """Exact title match; None when no movie carries that title."""
        return self.title_to_movie_id.get(title)

    def row_of(self, movie_id: int) -> int:
        """Row position of `movie_id` in catalog order."""
        movie_id = int(movie_id)
        if movie_id not in self.movie_id_to_row:
            raise NotFoundError(f"No movies found with provided ID {movie_id}")
        return self.movie_id_to_row[movie_id]

    def movie_at(self, row: int) -> Movie:
        return self.movies[int(row)]

    def title_of(self, movie_id: int) -> str:
        return self.movies[self.row_of(movie_id)].title

    def suggest_titles(self, query: str, *, limit: int = 5, min_similarity: float = 0.5) -> list[str]:
        """Return catalog titles that look like `query`, best match first."""
        query_norm = normalize_title(query)
        if not query_norm:
            return []

        scored: list[tuple[float, int, str]] = []
        for row, movie in enumerate(self.movies):
            s = SequenceMatcher(None, query_norm, normalize_title(movie.title)).ratio()
            if s >= float(min_similarity):
                scored.append((-s, row, movie.title))

        scored.sort()
        return [title for _, _, title in scored[: max(1, int(limit))]]

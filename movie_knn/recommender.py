"""Item-item similar-movie recommender over dense rating vectors."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .config import AppConfig, KNNConfig
from .data import Movie, Rating, load_records
from .errors import NotFoundError
from .index.rating_index import RatingIndex, build_rating_index
from .neighbors.distance import get_distance
from .neighbors.scan import scan_with_distances
from .store.catalog import MovieCatalog


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimilarMovie:
    movieId: int
    title: str
    distance: float


class ItemKNNRecommender:
    """Finds movies whose rating vectors are closest to a query movie's vector.

    Built once from fully materialized movies and ratings; read only afterwards.
    """

    def __init__(
        self,
        movies: Sequence[Movie],
        ratings: Sequence[Rating],
        *,
        config: KNNConfig | None = None,
    ) -> None:
        self.config = config or KNNConfig()
        self.catalog = MovieCatalog.from_movies(movies)
        self.index: RatingIndex = build_rating_index(
            ratings,
            self.catalog.movies,
            user_slots=self.config.user_slots,
            movie_id_to_row=self.catalog.movie_id_to_row,
        )
        # Fail on a bad default metric at startup rather than on the first query.
        get_distance(self.config.metric)

    @classmethod
    def from_raw_dir(cls, raw_dir: Path, config: AppConfig | None = None) -> "ItemKNNRecommender":
        cfg = config or AppConfig()
        movies, ratings = load_records(Path(raw_dir))
        return cls(movies, ratings, config=cfg.knn)

    def resolve_title(self, title: str) -> int:
        """Return the movieId for an exact title, raising NotFoundError otherwise."""
        movie_id = self.catalog.find_movie_id(title)
        if movie_id is None:
            msg = f"No movie with that name: {title!r}"
            suggestions = self.catalog.suggest_titles(title, limit=3)
            if suggestions:
                msg += f" (did you mean: {', '.join(repr(s) for s in suggestions)}?)"
            raise NotFoundError(msg)
        return movie_id

    def similar_movies(
        self,
        title: str,
        *,
        k: int | None = None,
        metric: str | None = None,
        include_self: bool | None = None,
    ) -> list[SimilarMovie]:
        """Return up to `k` movies nearest to `title`, nearest first.

        Scoring:
        - Every catalog movie is compared with the query movie's rating vector
        - Ties in distance keep catalog order
        - The query movie itself is dropped unless `include_self` is set
        """
        k = self.config.k if k is None else k
        metric = self.config.metric if metric is None else metric
        include_self = self.config.include_self if include_self is None else include_self

        movie_id = self.resolve_title(title)
        query_row = self.catalog.row_of(movie_id)
        query = self.index.matrix[query_row]

        neighbors = scan_with_distances(
            self.index.matrix,
            query,
            k,
            get_distance(metric),
            exclude=() if include_self else (query_row,),
        )
        if not neighbors:
            logger.info("No neighbors found for %r (k=%s)", title, k)
            return []

        out: list[SimilarMovie] = []
        for n in neighbors:
            movie = self.catalog.movie_at(n.row)
            out.append(SimilarMovie(movieId=int(movie.movie_id), title=movie.title, distance=float(n.distance)))
        return out

    def similar_titles(self, title: str, **kwargs) -> list[str]:
        return [m.title for m in self.similar_movies(title, **kwargs)]

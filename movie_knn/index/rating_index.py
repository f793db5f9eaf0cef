"""Dense rating index: one vector per catalog movie, one slot per user.

The builder turns sparse (user, movie, rating) observations into a
`(n_movies, n_users)` float32 matrix. Row order follows the movie catalog;
slot order follows the user numbering:

- ``max_id``: N is the largest user id; user ``u`` owns slot ``u - 1``.
  Gaps in the numbering leave all-zero slots that belong to no real user.
- ``distinct``: N is the number of distinct user ids; slots follow the
  sorted user ids.

A rating that was never observed is 0.0. That is normal data, not an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Literal, Mapping, Optional, Sequence

import numpy as np

from ..data import Movie, Rating
from ..errors import EmptyInputError, InvalidArgumentError, NotFoundError


logger = logging.getLogger(__name__)

UserSlots = Literal["max_id", "distinct"]
USER_SLOT_MODES: tuple[str, ...] = ("max_id", "distinct")


@dataclass(frozen=True)
class RatingIndex:
    """Read-only mapping from movie id to its dense rating vector."""

    matrix: np.ndarray
    movie_ids: tuple[int, ...]
    movie_id_to_row: Mapping[int, int]
    user_ids: tuple[int, ...]

    @property
    def n_users(self) -> int:
        return int(self.matrix.shape[1])

    @property
    def n_movies(self) -> int:
        return int(self.matrix.shape[0])

    def row_of(self, movie_id: int) -> int:
        movie_id = int(movie_id)
        if movie_id not in self.movie_id_to_row:
            raise NotFoundError(f"No movie found with id {movie_id}")
        return self.movie_id_to_row[movie_id]

    def vector(self, movie_id: int) -> np.ndarray:
        """Return the RatingVector of `movie_id` (a read-only row view)."""
        return self.matrix[self.row_of(movie_id)]

    def vectors(self) -> Dict[int, np.ndarray]:
        return {mid: self.matrix[row] for mid, row in self.movie_id_to_row.items()}

    def density(self) -> float:
        """Fraction of non-zero cells in the matrix."""
        if self.matrix.size == 0:
            return 0.0
        return float(np.count_nonzero(self.matrix)) / float(self.matrix.size)


def row_map(movie_ids: Sequence[int]) -> Dict[int, int]:
    """Map each movie id to its position; duplicate ids are rejected."""
    out: Dict[int, int] = {}
    for row, mid in enumerate(movie_ids):
        mid = int(mid)
        if mid in out:
            raise InvalidArgumentError(f"Duplicate movie id in catalog: {mid}")
        out[mid] = row
    return out


def group_by_user(ratings: Sequence[Rating]) -> tuple[Dict[int, Dict[int, float]], int]:
    """Group observations into `user_id -> {movie_id: rating}`.

    The last occurrence of a (user, movie) pair in input order wins.
    Returns the grouping and the number of overwritten observations.
    """
    user_rates: Dict[int, Dict[int, float]] = {}
    overwritten = 0
    for r in ratings:
        rates = user_rates.setdefault(int(r.user_id), {})
        if int(r.movie_id) in rates:
            overwritten += 1
        rates[int(r.movie_id)] = float(r.rating)
    return user_rates, overwritten


def _user_slot_map(user_ids: Sequence[int], user_slots: str) -> tuple[Dict[int, int], tuple[int, ...]]:
    if user_slots == "max_id":
        lowest = min(user_ids)
        if lowest < 1:
            raise InvalidArgumentError(
                f"user ids must be >= 1 when user_slots='max_id' (got {lowest})"
            )
        n_users = max(user_ids)
        phantom = n_users - len(user_ids)
        if phantom:
            logger.warning(
                "User ids are not contiguous: %d of %d slots belong to no observed user",
                phantom,
                n_users,
            )
        slot_user_ids = tuple(range(1, n_users + 1))
        return {uid: uid - 1 for uid in user_ids}, slot_user_ids

    if user_slots == "distinct":
        ordered = tuple(sorted(user_ids))
        return {uid: i for i, uid in enumerate(ordered)}, ordered

    raise InvalidArgumentError(f"user_slots must be one of {USER_SLOT_MODES}, got {user_slots!r}")


def build_rating_index(
    ratings: Sequence[Rating],
    movies: Sequence[Movie],
    *,
    user_slots: UserSlots | str = "max_id",
    movie_id_to_row: Optional[Mapping[int, int]] = None,
) -> RatingIndex:
    """Build a dense RatingVector for every movie in `movies`.

    Parameters
    ----------
    ratings:
        All rating observations. Must be non-empty.
    movies:
        The movie catalog; its order defines the matrix row order.
    user_slots:
        How the user dimension is derived (see module docstring).
    movie_id_to_row:
        Row position of every movie in `movies`, when the caller already holds
        one (e.g. a `MovieCatalog`). Built here otherwise.
    """
    if not ratings:
        raise EmptyInputError("No rating provided: cannot derive the number of users")

    movie_ids = tuple(int(m.movie_id) for m in movies)
    if movie_id_to_row is None:
        movie_id_to_row = row_map(movie_ids)
    elif len(movie_id_to_row) != len(movie_ids) or any(
        movie_id_to_row.get(mid) != row for row, mid in enumerate(movie_ids)
    ):
        raise InvalidArgumentError("movie_id_to_row does not match the order of `movies`")

    user_rates, overwritten = group_by_user(ratings)
    if overwritten:
        logger.warning("%d duplicate (user, movie) ratings overwritten (last one wins)", overwritten)

    slot_of, slot_user_ids = _user_slot_map(list(user_rates.keys()), str(user_slots))
    n_users = len(slot_user_ids)

    matrix = np.zeros((len(movie_ids), n_users), dtype=np.float32)
    unknown_movies: set[int] = set()
    for uid, rates in user_rates.items():
        slot = slot_of[uid]
        for mid, value in rates.items():
            row = movie_id_to_row.get(mid)
            if row is None:
                unknown_movies.add(mid)
                continue
            matrix[row, slot] = value

    if unknown_movies:
        logger.warning("Skipped ratings for %d movie ids absent from the catalog", len(unknown_movies))

    matrix.setflags(write=False)
    index = RatingIndex(
        matrix=matrix,
        movie_ids=movie_ids,
        movie_id_to_row=movie_id_to_row,
        user_ids=slot_user_ids,
    )
    logger.info(
        "Rating index built: movies=%d users=%d ratings=%d density=%.4f",
        index.n_movies,
        index.n_users,
        len(ratings),
        index.density(),
    )
    return index


def build_matrix(index: RatingIndex, movies: Sequence[Movie]) -> np.ndarray:
    """Stack the RatingVectors of `movies` in the given order (one row per movie)."""
    if not movies:
        return np.zeros((0, index.n_users), dtype=np.float32)
    rows: List[int] = [index.row_of(m.movie_id) for m in movies]
    return index.matrix[rows]

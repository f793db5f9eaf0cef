from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np

from ..errors import InvalidArgumentError
from .distance import Distance, euclidean


@dataclass(frozen=True)
class Neighbor:
    row: int
    distance: float


def _check_k(k: int) -> int:
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidArgumentError(f"k must be an integer, got {k!r}")
    if int(k) < 0:
        raise InvalidArgumentError(f"k must be >= 0, got {k}")
    return int(k)


def _as_matrix(matrix) -> np.ndarray:
    if isinstance(matrix, np.ndarray):
        out = matrix
    else:
        try:
            out = np.asarray(matrix, dtype=np.float64)
        except ValueError as exc:
            # Ragged rows: at least one row differs in length from the others.
            raise InvalidArgumentError(f"matrix rows must all have the same length: {exc}") from exc
    if out.ndim == 0:
        raise InvalidArgumentError(f"matrix must be 2-dimensional, got a scalar {matrix!r}")
    return out


def scan_with_distances(
    matrix: np.ndarray,
    query: np.ndarray,
    k: int,
    distance: Distance = euclidean,
    *,
    exclude: Iterable[int] = (),
) -> Optional[List[Neighbor]]:
    """Rank every row of `matrix` by distance to `query` and keep the K closest.

    Brute force: every row is compared with the query. Ties are broken by row
    index so results are reproducible. Rows listed in `exclude` never appear
    in the result.

    Returns None when the matrix has no rows or `k` is 0.
    """
    k = _check_k(k)
    matrix = _as_matrix(matrix)
    query = np.asarray(query).reshape(-1)

    n_rows = int(matrix.shape[0])
    if n_rows == 0 or k == 0:
        return None
    if matrix.ndim != 2:
        raise InvalidArgumentError(f"matrix must be 2-dimensional, got shape {matrix.shape}")

    if int(matrix.shape[1]) != int(query.shape[0]):
        raise InvalidArgumentError(
            f"Query length {query.shape[0]} does not match matrix row length {matrix.shape[1]}"
        )

    skip = {int(r) for r in exclude}
    scored = [
        (float(distance(query, matrix[row])), row)
        for row in range(n_rows)
        if row not in skip
    ]
    scored.sort()
    return [Neighbor(row=row, distance=dist) for dist, row in scored[:k]]


def scan(
    matrix: np.ndarray,
    query: np.ndarray,
    k: int,
    distance: Distance = euclidean,
    *,
    exclude: Iterable[int] = (),
) -> Optional[List[int]]:
    """Row positions of the K rows closest to `query`, nearest first."""
    neighbors = scan_with_distances(matrix, query, k, distance, exclude=exclude)
    if neighbors is None:
        return None
    return [n.row for n in neighbors]

from __future__ import annotations

import math

import numpy as np
import pytest

from movie_knn.errors import InvalidArgumentError
from movie_knn.neighbors.distance import DISTANCES, cosine, euclidean, get_distance, manhattan
from movie_knn.neighbors.scan import scan, scan_with_distances


MATRIX = np.array(
    [
        [5.0, 1.0],
        [5.0, 0.0],
        [0.0, 5.0],
    ],
    dtype=np.float32,
)


def test_euclidean_worked_example() -> None:
    assert euclidean(MATRIX[0], MATRIX[1]) == pytest.approx(1.0)
    assert euclidean(MATRIX[0], MATRIX[2]) == pytest.approx(math.sqrt(41.0))


@pytest.mark.parametrize("name", sorted(DISTANCES))
def test_metrics_are_symmetric_and_zero_on_self(name: str) -> None:
    dist = get_distance(name)
    a = np.array([4.0, 0.0, 3.5, 1.0])
    b = np.array([0.5, 2.0, 3.0, 0.0])
    assert dist(a, b) == pytest.approx(dist(b, a))
    assert dist(a, b) >= 0.0
    assert dist(a, a) == pytest.approx(0.0, abs=1e-12)


def test_manhattan_and_cosine_values() -> None:
    assert manhattan([1.0, 2.0], [3.0, 0.0]) == pytest.approx(4.0)
    assert cosine([1.0, 0.0], [0.0, 2.0]) == pytest.approx(1.0)
    assert cosine([0.0, 0.0], [0.0, 0.0]) == 0.0
    assert cosine([0.0, 0.0], [1.0, 0.0]) == 1.0


def test_metric_length_mismatch_and_unknown_name() -> None:
    with pytest.raises(InvalidArgumentError):
        euclidean([1.0, 2.0], [1.0])
    with pytest.raises(InvalidArgumentError):
        get_distance("chebyshev")


def test_scan_orders_by_ascending_distance() -> None:
    assert scan(MATRIX, MATRIX[0], 2) == [0, 1]
    assert scan(MATRIX, MATRIX[0], 3) == [0, 1, 2]


def test_scan_excluded_rows_never_returned() -> None:
    assert scan(MATRIX, MATRIX[0], 2, exclude=(0,)) == [1, 2]


def test_scan_never_returns_more_than_rows_or_k() -> None:
    assert scan(MATRIX, MATRIX[2], 10) == [2, 0, 1]
    assert len(scan(MATRIX, MATRIX[2], 10)) == 3
    assert len(scan(MATRIX, MATRIX[2], 1)) == 1


def test_scan_with_k_equal_rows_returns_each_row_once_sorted() -> None:
    rng = np.random.default_rng(7)
    matrix = rng.integers(0, 6, size=(25, 8)).astype(np.float32)
    query = matrix[3]

    neighbors = scan_with_distances(matrix, query, len(matrix))
    assert neighbors is not None
    rows = [n.row for n in neighbors]
    dists = [n.distance for n in neighbors]
    assert sorted(rows) == list(range(len(matrix)))
    assert dists == sorted(dists)


def test_scan_breaks_ties_by_row_index() -> None:
    matrix = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 0.0], [0.0, 1.0]])
    query = np.array([1.0, 1.0])
    assert scan(matrix, query, 4) == [0, 1, 2, 3]


def test_scan_uses_passed_distance_function() -> None:
    matrix = np.array([[3.0, 3.0], [0.0, 4.1]])
    query = np.array([0.0, 0.0])
    assert scan(matrix, query, 1, euclidean) == [1]
    assert scan(matrix, query, 1, lambda a, b: abs(float(b[0]) - float(a[0]) - 3.0)) == [0]


def test_scan_returns_none_on_empty_matrix_or_zero_k() -> None:
    assert scan(np.zeros((0, 2)), np.zeros(2), 3) is None
    assert scan(MATRIX, MATRIX[0], 0) is None


@pytest.mark.parametrize("k", [-1, 2.5, True])
def test_scan_rejects_invalid_k(k: object) -> None:
    with pytest.raises(InvalidArgumentError):
        scan(MATRIX, MATRIX[0], k)  # type: ignore[arg-type]


def test_scan_rejects_query_length_mismatch() -> None:
    with pytest.raises(InvalidArgumentError):
        scan(MATRIX, np.zeros(3), 2)


def test_scan_accepts_plain_lists_and_empty_list_is_no_result() -> None:
    assert scan([], [1.0, 2.0], 3) is None
    assert scan([[5.0, 1.0], [5.0, 0.0], [0.0, 5.0]], [5.0, 1.0], 2) == [0, 1]


def test_scan_rejects_ragged_rows() -> None:
    with pytest.raises(InvalidArgumentError, match="same length"):
        scan([[1.0, 2.0], [1.0]], [1.0, 2.0], 1)

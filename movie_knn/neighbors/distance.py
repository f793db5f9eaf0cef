"""Distance metrics between two equal-length rating vectors.

All metrics are symmetric and non-negative, with ``d(a, a) == 0``.
"""

from __future__ import annotations

from typing import Callable, Dict

import numpy as np

from ..errors import InvalidArgumentError


Distance = Callable[[np.ndarray, np.ndarray], float]


def _pair(a: np.ndarray, b: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    a = np.asarray(a, dtype=np.float64).reshape(-1)
    b = np.asarray(b, dtype=np.float64).reshape(-1)
    if a.shape[0] != b.shape[0]:
        raise InvalidArgumentError(f"Vector length mismatch: {a.shape[0]} != {b.shape[0]}")
    return a, b


def euclidean(a: np.ndarray, b: np.ndarray) -> float:
    """Square root of the sum of squared element-wise differences."""
    a, b = _pair(a, b)
    return float(np.sqrt(np.sum((a - b) ** 2)))


def manhattan(a: np.ndarray, b: np.ndarray) -> float:
    a, b = _pair(a, b)
    return float(np.sum(np.abs(a - b)))


def cosine(a: np.ndarray, b: np.ndarray) -> float:
    """``1 - cos(a, b)``, clipped to [0, 2].

    A zero vector is at distance 0.0 from another zero vector and 1.0 from
    anything else.
    """
    a, b = _pair(a, b)
    a_norm = float(np.linalg.norm(a))
    b_norm = float(np.linalg.norm(b))
    if a_norm == 0.0 or b_norm == 0.0:
        return 0.0 if a_norm == b_norm else 1.0
    sim = float(np.dot(a, b)) / (a_norm * b_norm)
    return float(np.clip(1.0 - sim, 0.0, 2.0))


DISTANCES: Dict[str, Distance] = {
    "euclidean": euclidean,
    "manhattan": manhattan,
    "cosine": cosine,
}


def get_distance(name: str) -> Distance:
    key = str(name).strip().lower()
    if key not in DISTANCES:
        raise InvalidArgumentError(f"Unknown distance metric {name!r}; expected one of {sorted(DISTANCES)}")
    return DISTANCES[key]

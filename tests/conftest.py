from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure `import movie_knn...` works when pytest uses importlib import mode.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from movie_knn.data import Movie, Rating  # noqa: E402


@pytest.fixture
def small_movies() -> list[Movie]:
    return [
        Movie(movie_id=1, title="A", genres=frozenset({"Comedy"})),
        Movie(movie_id=2, title="B", genres=frozenset({"Drama"})),
        Movie(movie_id=3, title="C", genres=frozenset()),
    ]


@pytest.fixture
def small_ratings() -> list[Rating]:
    return [
        Rating(user_id=1, movie_id=1, rating=5.0, timestamp="964982703"),
        Rating(user_id=1, movie_id=2, rating=5.0, timestamp="964981247"),
        Rating(user_id=2, movie_id=1, rating=1.0, timestamp="964982224"),
        Rating(user_id=2, movie_id=3, rating=5.0, timestamp="964983815"),
    ]

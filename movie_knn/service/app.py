"""FastAPI service entrypoint for the item-based similar-movies recommender."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query

from ..config import AppConfig, load_config
from ..errors import InvalidArgumentError, NotFoundError
from ..paths import ProjectPaths, get_repo_root, resolve_path
from ..recommender import ItemKNNRecommender
from ..utils import setup_logging
from .schemas import HealthResponse, SimilarRequest, SimilarResponse

logger = logging.getLogger(__name__)


def _get_env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or str(raw).strip() == "":
        return default
    return resolve_path(get_repo_root(), str(raw).strip())


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))

    repo_root = get_repo_root()
    config_path = _get_env_path("CONFIG_PATH", repo_root / "config.yaml")
    cfg = load_config(config_path) if config_path.exists() else AppConfig()
    raw_dir = _get_env_path("RAW_DIR", ProjectPaths.from_repo_root(repo_root, raw_dir=cfg.dataset.raw_dir).raw_dir)

    logger.info("Starting service with config=%s raw_dir=%s", config_path, raw_dir)
    app.state.recommender = ItemKNNRecommender.from_raw_dir(raw_dir, cfg)
    yield


app = FastAPI(title="MovieLens Item-KNN Similarity Service", lifespan=lifespan)


def _recommender(app_: FastAPI) -> ItemKNNRecommender:
    rec = getattr(app_.state, "recommender", None)
    if rec is None:
        raise HTTPException(status_code=503, detail="Recommender not initialized")
    return rec


@app.get("/health", response_model=HealthResponse)
def health() -> dict:
    rec = _recommender(app)
    return {"status": "ok", "movies": rec.index.n_movies, "users": rec.index.n_users}


@app.post("/similar", response_model=SimilarResponse)
def similar(req: SimilarRequest) -> dict:
    """Return the movies whose rating vectors are nearest to `title`."""
    rec = _recommender(app)
    metric = req.metric or rec.config.metric
    try:
        movie_id = rec.resolve_title(req.title)
        results = rec.similar_movies(
            req.title,
            k=int(req.k),
            metric=metric,
            include_self=req.include_self,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidArgumentError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return {
        "title": req.title,
        "resolved_movieId": int(movie_id),
        "metric": metric,
        "k": int(req.k),
        "results": [r.__dict__ for r in results],
    }


@app.get("/movies/search")
def movies_search(q: str = Query(..., min_length=1), limit: int = Query(10, ge=1, le=50)) -> dict:
    """Suggest catalog titles close to `q` (useful to find the exact title)."""
    rec = _recommender(app)
    return {"query": q, "results": rec.catalog.suggest_titles(q, limit=int(limit))}

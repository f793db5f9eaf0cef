"""Print the movies whose rating patterns are closest to a given title.

Each movie is a vector of user ratings (ratings.csv); similar movies are the
nearest vectors under the chosen distance metric.
"""
from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from .config import AppConfig, load_config
from .errors import MovieKNNError
from .index.rating_index import USER_SLOT_MODES
from .neighbors.distance import DISTANCES
from .paths import ProjectPaths, get_repo_root, resolve_path
from .recommender import ItemKNNRecommender
from .utils import setup_logging


logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Item-based collaborative filtering: movies similar to TITLE")
    p.add_argument("title", type=str, help="Exact movie title as it appears in movies.csv")
    p.add_argument("--k", type=int, default=None, help="How many similar movies to return (default from config)")
    p.add_argument("--metric", type=str, choices=sorted(DISTANCES), default=None, help="Distance metric")
    p.add_argument(
        "--include-self",
        action="store_true",
        default=None,
        help="Keep the query movie itself in the results",
    )
    p.add_argument("--user-slots", type=str, choices=list(USER_SLOT_MODES), default=None, help="User dimension mode")
    p.add_argument("--raw-dir", type=Path, default=None, help="Directory holding movies.csv and ratings.csv")
    p.add_argument("--config", type=Path, default=None, help="Path to config YAML (default: <repo>/config.yaml)")
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=os.getenv("LOG_LEVEL", "INFO"),
        help="Logging level",
    )
    return p


def _load_app_config(config_path: Path | None) -> tuple[AppConfig, Path]:
    if config_path is not None:
        return load_config(config_path), Path(config_path).resolve().parent
    try:
        repo_root = get_repo_root()
    except FileNotFoundError:
        return AppConfig(), Path.cwd()
    default_path = repo_root / "config.yaml"
    if default_path.is_file():
        return load_config(default_path), repo_root
    return AppConfig(), repo_root


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    try:
        setup_logging(args.log_level)
        cfg, base_dir = _load_app_config(args.config)
        cfg = cfg.with_overrides(
            k=args.k,
            metric=args.metric,
            include_self=args.include_self,
            user_slots=args.user_slots,
        )
        raw_dir = (
            resolve_path(Path.cwd(), args.raw_dir)
            if args.raw_dir is not None
            else ProjectPaths.from_repo_root(base_dir, raw_dir=cfg.dataset.raw_dir).raw_dir
        )

        rec = ItemKNNRecommender.from_raw_dir(raw_dir, cfg)
        logger.info("NB movies %d", len(rec.catalog))
        titles = rec.similar_titles(args.title)
    except (MovieKNNError, FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    if titles:
        for title in titles:
            print(title)
    else:
        print("No result")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""YAML configuration for the similar-movies pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class KNNConfig:
    k: int = 5
    metric: str = "euclidean"
    include_self: bool = False
    user_slots: str = "max_id"


@dataclass(frozen=True)
class DatasetConfig:
    raw_dir: str = "data/raw"


@dataclass(frozen=True)
class AppConfig:
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    knn: KNNConfig = field(default_factory=KNNConfig)

    def with_overrides(self, **knn_overrides: Any) -> "AppConfig":
        """Return a copy with non-None `knn` fields replaced (CLI flags win over YAML)."""
        updates = {k: v for k, v in knn_overrides.items() if v is not None}
        if not updates:
            return self
        return replace(self, knn=replace(self.knn, **updates))


def _section(cfg_yaml: dict[str, Any], name: str) -> dict[str, Any]:
    raw = cfg_yaml.get(name, {})
    return raw if isinstance(raw, dict) else {}


_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise ValueError(f"{name} must be an integer, got {value!r}")


def config_from_mapping(cfg_yaml: dict[str, Any]) -> AppConfig:
    dataset_raw = _section(cfg_yaml, "dataset")
    knn_raw = _section(cfg_yaml, "knn")
    defaults = KNNConfig()
    return AppConfig(
        dataset=DatasetConfig(raw_dir=str(dataset_raw.get("raw_dir", DatasetConfig.raw_dir))),
        knn=KNNConfig(
            k=_as_int("knn.k", knn_raw.get("k", defaults.k)),
            metric=str(knn_raw.get("metric", defaults.metric)),
            include_self=_as_bool("knn.include_self", knn_raw.get("include_self", defaults.include_self)),
            user_slots=str(knn_raw.get("user_slots", defaults.user_slots)),
        ),
    )


def load_config(path: Path) -> AppConfig:
    """Parse `config.yaml`; sections that are absent fall back to defaults."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    obj = yaml.safe_load(path.read_text())
    if obj is None:
        obj = {}
    if not isinstance(obj, dict):
        raise ValueError(f"Expected YAML mapping at {path}, got {type(obj)}")
    return config_from_mapping(obj)

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ProjectPaths:
    raw_dir: Path

    @classmethod
    def from_repo_root(
        cls,
        repo_root: Path,
        *,
        raw_dir: Path | str = "data/raw",
    ) -> "ProjectPaths":
        return cls(raw_dir=resolve_path(repo_root, raw_dir))


def resolve_path(repo_root: Path, path: Path | str) -> Path:
    """Resolve `path` against `repo_root` unless it is already absolute."""
    p = Path(path) if isinstance(path, str) else path
    if not p.is_absolute():
        p = repo_root / p
    return p.resolve()


ROOT_MARKERS = ("config.yaml", ".git")


def find_root_above(start: Path) -> Path | None:
    """First directory at or above `start` holding `config.yaml` or `.git`."""
    start = start.resolve()
    if start.is_file():
        start = start.parent
    for candidate in (start, *start.parents):
        if (candidate / "config.yaml").is_file() or (candidate / ".git").exists():
            return candidate
    return None


def get_repo_root() -> Path:
    """Repo root above the working directory, else above the installed package."""
    root = find_root_above(Path.cwd()) or find_root_above(Path(__file__).parent)
    if root is None:
        raise FileNotFoundError(f"Could not locate repo root (expected one of {ROOT_MARKERS}).")
    return root

from __future__ import annotations

from pathlib import Path

import pytest

from movie_knn.paths import ProjectPaths, find_root_above, get_repo_root, resolve_path


def test_find_root_above_walks_up_to_config(tmp_path: Path) -> None:
    (tmp_path / "config.yaml").write_text("knn: {}\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_root_above(nested) == tmp_path.resolve()
    assert find_root_above(tmp_path / "config.yaml") == tmp_path.resolve()


def test_get_repo_root_prefers_working_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "config.yaml").write_text("")
    monkeypatch.chdir(tmp_path)
    assert get_repo_root() == tmp_path.resolve()


def test_relative_paths_resolve_against_root(tmp_path: Path) -> None:
    assert resolve_path(tmp_path, "data/raw") == (tmp_path / "data" / "raw").resolve()
    absolute = (tmp_path / "elsewhere").resolve()
    assert resolve_path(Path("/unused"), absolute) == absolute
    assert ProjectPaths.from_repo_root(tmp_path).raw_dir == (tmp_path / "data" / "raw").resolve()

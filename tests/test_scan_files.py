from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from scan.files import _gitignore_matcher, find_python_files

if TYPE_CHECKING:
    from pathlib import Path


def _rel(root: Path, **kwargs: object) -> list[str]:
    return [
        path.relative_to(root).as_posix()
        for path in find_python_files(root, **kwargs)
    ]


def _touch(path: Path, text: str = "x = 1\n") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_files_are_sorted_and_output_dir_skipped(tmp_path: Path) -> None:
    for rel in ("b/mod.py", "a.py", "b/__init__.py", ".restmap/gen.py", "notes.txt"):
        _touch(tmp_path / rel)

    assert _rel(tmp_path) == ["a.py", "b/__init__.py", "b/mod.py"]


def test_include_and_exclude_patterns(tmp_path: Path) -> None:
    for rel in ("api/users.py", "api/tests/test_users.py", "tools/gen.py"):
        _touch(tmp_path / rel)

    assert _rel(tmp_path, include_patterns=["api/*"]) == [
        "api/tests/test_users.py",
        "api/users.py",
    ]
    filtered = _rel(tmp_path, include_patterns=["api/*"], exclude_patterns=["*/tests/*"])
    assert filtered == ["api/users.py"]


def test_root_gitignore_is_respected(tmp_path: Path) -> None:
    _touch(tmp_path / "keep.py")
    _touch(tmp_path / "build" / "gen.py")
    _touch(tmp_path / ".gitignore", "build/\n")

    assert _rel(tmp_path) == ["keep.py"]


def test_nested_gitignore_only_when_enabled(tmp_path: Path) -> None:
    _touch(tmp_path / "pkg" / "keep.py")
    _touch(tmp_path / "pkg" / "generated.py")
    _touch(tmp_path / "pkg" / ".gitignore", "generated.py\n")

    assert _rel(tmp_path) == ["pkg/generated.py", "pkg/keep.py"]
    assert _rel(tmp_path, nested_gitignore=True) == ["pkg/keep.py"]


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_find_python_files_skips_symlinked_dirs(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _touch(repo_root / "pkg" / "module.py")

    external_root = tmp_path / "external"
    _touch(external_root / "leak.py")

    (repo_root / "linked").symlink_to(external_root, target_is_directory=True)

    results = _rel(repo_root)

    assert "pkg/module.py" in results
    assert "linked/leak.py" not in results


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_nested_gitignore_skips_symlinked_gitignore(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _touch(repo_root / "pkg" / "module.py")
    _touch(repo_root / ".gitignore", "*.bin\n")

    external_root = tmp_path / "external"
    _touch(external_root / ".gitignore", "pkg/module.py\n")
    (repo_root / "sub").mkdir()
    (repo_root / "sub" / ".gitignore").symlink_to(external_root / ".gitignore")

    matcher = _gitignore_matcher(repo_root, nested=True)
    assert matcher is not None
    assert matcher(str(repo_root / "pkg" / "module.py")) is False

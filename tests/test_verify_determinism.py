from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from artifacts.write import generate_all_artifacts
from verify.verify import DeterminismResult, verify_determinism

FIXTURE_REPO = Path(__file__).parent / "fixtures" / "shop_api"


def test_verify_determinism_requires_artifacts_dir(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    shutil.copytree(FIXTURE_REPO, repo_root)

    missing_dir = tmp_path / "missing"
    with pytest.raises(FileNotFoundError, match="Artifacts directory does not exist"):
        verify_determinism(root=repo_root, artifacts_dir=missing_dir)


def test_verify_determinism_passes_for_fresh_artifacts(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    shutil.copytree(FIXTURE_REPO, repo_root)
    artifacts_dir = tmp_path / "artifacts"
    generate_all_artifacts(root=repo_root, out_dir=artifacts_dir)

    result = verify_determinism(root=repo_root, artifacts_dir=artifacts_dir)

    assert result == DeterminismResult(ok=True)


def test_verify_determinism_reports_stale_artifacts(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    shutil.copytree(FIXTURE_REPO, repo_root)
    artifacts_dir = tmp_path / "artifacts"
    generate_all_artifacts(root=repo_root, out_dir=artifacts_dir)

    (repo_root / "shop_api" / "resources" / "orders.py").unlink()
    (artifacts_dir / "notes.txt").write_text("extra", encoding="utf-8")

    result = verify_determinism(root=repo_root, artifacts_dir=artifacts_dir)

    assert result.ok is False
    assert result.missing == ("notes.txt",)
    assert result.extra == ()
    assert result.mismatches == ("models.jsonl", "resources.jsonl", "summary.json")

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.generators import GraphGenerator
from contract.artifacts import MODELS_JSONL, RESOURCES_JSONL, SUMMARY_JSON
from rules.config import load_config, resolve_output_dir

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import RestMapConfig


def generate_all_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: RestMapConfig | None = None,
) -> dict[str, object]:
    """Generate the documentation graph artifacts for a repository.

    Args:
        root: Root directory of the repository to analyze
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration; loaded from restmap.toml when omitted

    Returns:
        Dictionary with counts and list of generated artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    graph_gen = GraphGenerator()
    _, summary = graph_gen.generate(
        root=root,
        out_dir=out_dir,
        extraction=config.extraction,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
    )

    artifacts_list = [RESOURCES_JSONL, MODELS_JSONL, SUMMARY_JSON]

    return {
        "resource_count": summary["resource_count"],
        "endpoint_count": summary["endpoint_count"],
        "model_count": summary["model_count"],
        "artifacts": [str(out_dir / name) for name in artifacts_list],
    }

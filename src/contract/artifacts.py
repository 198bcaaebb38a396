"""Graph artifact contract definitions.

This module defines the stable filenames and formats of generated artifacts.
"""

from __future__ import annotations

from dataclasses import dataclass

from artifacts.models.artifacts.resources import SCHEMA_VERSION

# Artifact schema version for graph artifacts.
ARTIFACT_SCHEMA_VERSION = SCHEMA_VERSION

# Artifact filename constants (stable contract identifiers).
RESOURCES_JSONL = "resources.jsonl"
MODELS_JSONL = "models.jsonl"
SUMMARY_JSON = "summary.json"


@dataclass(frozen=True)
class GraphArtifactSpec:
    """Filename and format of one graph artifact."""

    filename: str
    format: str


GRAPH_ARTIFACT_SPECS: dict[str, GraphArtifactSpec] = {
    "resources": GraphArtifactSpec(filename=RESOURCES_JSONL, format="jsonl"),
    "models": GraphArtifactSpec(filename=MODELS_JSONL, format="jsonl"),
    "summary": GraphArtifactSpec(filename=SUMMARY_JSON, format="json"),
}

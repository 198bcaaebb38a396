"""Stable artifact contract surface for restmap-core.

Treat these exports as the authoritative boundary for consumers of the
generated graph artifacts.
"""

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    GRAPH_ARTIFACT_SPECS,
    MODELS_JSONL,
    RESOURCES_JSONL,
    SUMMARY_JSON,
    GraphArtifactSpec,
)


def __getattr__(name: str) -> object:
    if name in {"GraphSummary", "ModelRecord", "ResourceRecord"}:
        from contract.models import GraphSummary, ModelRecord, ResourceRecord

        return {
            "GraphSummary": GraphSummary,
            "ModelRecord": ModelRecord,
            "ResourceRecord": ResourceRecord,
        }[name]

    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_artifacts,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_artifacts": validate_artifacts,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "GRAPH_ARTIFACT_SPECS",
    "MODELS_JSONL",
    "RESOURCES_JSONL",
    "SUMMARY_JSON",
    "GraphArtifactSpec",
    "GraphSummary",
    "ModelRecord",
    "ResourceRecord",
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]

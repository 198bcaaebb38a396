"""Validation helpers for graph artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

import orjson
from pydantic import ValidationError

from contract.artifacts import ARTIFACT_SCHEMA_VERSION, GRAPH_ARTIFACT_SPECS
from contract.models import GraphSummary, ModelRecord, ResourceRecord

if TYPE_CHECKING:
    from pathlib import Path


class _SchemaModel(Protocol):
    schema_version: int

    @classmethod
    def model_validate(cls, obj: Any) -> _SchemaModel: ...


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, object]:
        return {
            "artifact": self.artifact,
            "path": str(self.path),
            "line": self.line,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_artifacts(artifacts_dir: Path) -> ValidationResult:
    result = ValidationResult()

    if not artifacts_dir.is_dir():
        message = (
            "Artifacts path is not a directory."
            if artifacts_dir.exists()
            else "Artifacts directory does not exist."
        )
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir", path=artifacts_dir, message=message
            )
        )
        return result

    model_ids: set[str] = set()
    for artifact_name, spec in GRAPH_ARTIFACT_SPECS.items():
        path = artifacts_dir / spec.filename
        if not path.exists():
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    message="Required artifact file is missing.",
                )
            )
            continue

        if spec.format == "jsonl":
            records = _validate_jsonl(
                artifact_name, path, _jsonl_model_for_artifact(artifact_name), result
            )
            if artifact_name == "models":
                _check_unique_model_ids(artifact_name, path, records, model_ids, result)
        else:
            _validate_json(artifact_name, path, GraphSummary, result)

    return result


def _jsonl_model_for_artifact(artifact_name: str) -> type[_SchemaModel]:
    if artifact_name == "resources":
        return ResourceRecord
    if artifact_name == "models":
        return ModelRecord
    msg = f"Unknown jsonl artifact: {artifact_name}"
    raise ValueError(msg)


def _validate_jsonl(
    artifact_name: str,
    path: Path,
    model: type[_SchemaModel],
    result: ValidationResult,
) -> list[tuple[int, _SchemaModel]]:
    records: list[tuple[int, _SchemaModel]] = []
    try:
        lines = path.read_bytes().splitlines()
    except OSError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Failed to read file: {exc}.",
            )
        )
        return records

    for line_number, raw_line in enumerate(lines, 1):
        line = raw_line.strip()
        if not line:
            continue
        record = _validate_payload(artifact_name, path, line, model, result, line_number)
        if record is not None:
            records.append((line_number, record))
    return records


def _validate_json(
    artifact_name: str,
    path: Path,
    model: type[_SchemaModel],
    result: ValidationResult,
) -> None:
    try:
        payload = path.read_bytes()
    except OSError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Failed to read file: {exc}.",
            )
        )
        return
    _validate_payload(artifact_name, path, payload, model, result, None)


def _validate_payload(
    artifact_name: str,
    path: Path,
    payload: bytes,
    model: type[_SchemaModel],
    result: ValidationResult,
    line: int | None,
) -> _SchemaModel | None:
    try:
        data = orjson.loads(payload)
    except orjson.JSONDecodeError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                line=line,
                message=f"Invalid JSON: {exc}.",
            )
        )
        return None

    try:
        record = model.model_validate(data)
    except ValidationError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                line=line,
                message=f"Schema validation failed: {exc}.",
            )
        )
        return None

    if record.schema_version != ARTIFACT_SCHEMA_VERSION:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                line=line,
                message=(
                    "Schema version mismatch: "
                    f"expected {ARTIFACT_SCHEMA_VERSION}, got {record.schema_version}."
                ),
            )
        )
    elif isinstance(data, dict) and "schema_version" not in data:
        result.warnings.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                line=line,
                message=(
                    f"Missing schema_version; defaulted to {ARTIFACT_SCHEMA_VERSION}."
                ),
            )
        )
    return record


def _check_unique_model_ids(
    artifact_name: str,
    path: Path,
    records: list[tuple[int, _SchemaModel]],
    seen: set[str],
    result: ValidationResult,
) -> None:
    for line_number, record in records:
        model_id = getattr(record, "id", None)
        if not isinstance(model_id, str):
            continue
        if model_id in seen:
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    line=line_number,
                    message=f"Duplicate model id '{model_id}'.",
                )
            )
        seen.add(model_id)


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]

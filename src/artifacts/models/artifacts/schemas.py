"""Schema model records for graph artifacts."""

from __future__ import annotations

from pydantic import BaseModel, Field

from artifacts.models.artifacts.resources import SCHEMA_VERSION
from extract.models import SchemaModel


class ModelRecord(SchemaModel):
    """One schema model of the global catalog."""

    schema_version: int = Field(default=SCHEMA_VERSION)


class GraphSummary(BaseModel):
    """Counts describing one generated graph."""

    schema_version: int = Field(default=SCHEMA_VERSION)
    file_count: int
    type_count: int
    resource_count: int
    endpoint_count: int
    model_count: int
    skipped_operation_count: int


__all__ = ["GraphSummary", "ModelRecord"]

"""Resource models for graph artifacts.

A resource is a class carrying a ``Path`` marker; its record holds the
endpoint descriptors of every operation declared on it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from extract.models import EndpointDescriptor

# Schema version constant
SCHEMA_VERSION = 1


class ResourceRecord(BaseModel):
    """Endpoint descriptors extracted from one resource class."""

    schema_version: int = Field(default=SCHEMA_VERSION)
    path: str = Field(description="Source file, relative to the repo root")
    resource: str = Field(description="Qualified name of the resource class")
    base_path: str
    endpoints: list[EndpointDescriptor] = Field(default_factory=list)
    skipped_operations: list[str] = Field(
        default_factory=list,
        description="Methods without an HTTP method marker",
    )


__all__ = ["SCHEMA_VERSION", "ResourceRecord"]

"""Model namespace for restmap-core artifact schemas."""

from artifacts.models.artifacts.resources import ResourceRecord
from artifacts.models.artifacts.schemas import GraphSummary, ModelRecord

__all__ = [
    "GraphSummary",
    "ModelRecord",
    "ResourceRecord",
]

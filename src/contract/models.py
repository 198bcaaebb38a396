"""Graph artifact models exposed at the contract boundary."""

from artifacts.models.artifacts.resources import ResourceRecord
from artifacts.models.artifacts.schemas import GraphSummary, ModelRecord

__all__ = ["GraphSummary", "ModelRecord", "ResourceRecord"]

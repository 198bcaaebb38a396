"""Schema graph and endpoint descriptor extraction."""

from extract.endpoint import EndpointExtractor, extract_endpoint
from extract.models import (
    EndpointDescriptor,
    EnumProperty,
    ModelCatalog,
    ModelSet,
    ParameterDescriptor,
    ResponseDescriptor,
    SchemaModel,
    TypedProperty,
)
from extract.schema import SchemaExtractor, extract_schemas

__all__ = [
    "EndpointDescriptor",
    "EndpointExtractor",
    "EnumProperty",
    "ModelCatalog",
    "ModelSet",
    "ParameterDescriptor",
    "ResponseDescriptor",
    "SchemaExtractor",
    "SchemaModel",
    "TypedProperty",
    "extract_endpoint",
    "extract_schemas",
]

"""Documentation graph models.

Schema models describe the documentable shape of data types; endpoint
descriptors describe one REST operation each.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

ParameterKind = Literal["path", "query", "header", "form", "body"]
HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "HEAD", "OPTIONS", "PATCH"]


class EnumProperty(BaseModel):
    kind: Literal["enum"] = "enum"
    values: list[str]
    description: str | None = None


class TypedProperty(BaseModel):
    kind: Literal["typed"] = "typed"
    type: str
    items: str | None = Field(
        default=None, description="Container element type name"
    )
    description: str | None = None


Property = Annotated[EnumProperty | TypedProperty, Field(discriminator="kind")]


class SchemaModel(BaseModel):
    """A named, flattened data type. Identity is ``id``."""

    id: str
    properties: dict[str, Property]


class ParameterDescriptor(BaseModel):
    kind: ParameterKind
    name: str
    description: str = ""
    type: str


class ResponseDescriptor(BaseModel):
    code: int
    message: str


class EndpointDescriptor(BaseModel):
    method: HttpMethod
    name: str
    path: str
    parameters: list[ParameterDescriptor] = Field(default_factory=list)
    responses: list[ResponseDescriptor] = Field(default_factory=list)
    summary: str = ""
    description: str = ""
    return_type: str


class ModelSet:
    """Insertion-ordered schema models, unique by id.

    ``add`` only registers a model whose id is not present yet, so the first
    registration of a name wins.
    """

    def __init__(self, models: Iterable[SchemaModel] = ()) -> None:
        self._models: dict[str, SchemaModel] = {}
        for model in models:
            self.add(model)

    def add(self, model: SchemaModel) -> bool:
        if model.id in self._models:
            return False
        self._models[model.id] = model
        return True

    def merge(self, other: Iterable[SchemaModel]) -> int:
        """Add every model of ``other``; return how many were new."""
        return sum(1 for model in list(other) if self.add(model))

    def get(self, model_id: str) -> SchemaModel | None:
        return self._models.get(model_id)

    def ids(self) -> list[str]:
        return list(self._models)

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._models

    def __iter__(self) -> Iterator[SchemaModel]:
        return iter(list(self._models.values()))

    def __len__(self) -> int:
        return len(self._models)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModelSet):
            return NotImplemented
        return list(self) == list(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.ids()!r})"


class ModelCatalog(ModelSet):
    """A ModelSet shared by many extraction requests.

    Insert-if-absent is serialized so the register-once-by-name rule holds
    across concurrent writers.
    """

    def __init__(self, models: Iterable[SchemaModel] = ()) -> None:
        self._lock = threading.Lock()
        super().__init__(models)

    def add(self, model: SchemaModel) -> bool:
        with self._lock:
            return super().add(model)

    def merge(self, other: Iterable[SchemaModel]) -> int:
        models = list(other)
        with self._lock:
            return sum(1 for model in models if ModelSet.add(self, model))


__all__ = [
    "EndpointDescriptor",
    "EnumProperty",
    "HttpMethod",
    "ModelCatalog",
    "ModelSet",
    "ParameterDescriptor",
    "ParameterKind",
    "Property",
    "ResponseDescriptor",
    "SchemaModel",
    "TypedProperty",
]

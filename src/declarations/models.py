"""Declaration records produced by the source loader.

These models are an immutable snapshot of what a source file declares:
types, their fields and methods, operation parameters, metadata markers and
docstring comments. Nothing here executes the target program.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class TypeRef(BaseModel):
    """A reference to a type as written in an annotation."""

    name: str
    qualified_name: str
    args: list[TypeRef] = Field(default_factory=list)

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    @property
    def is_parameterized(self) -> bool:
        return bool(self.args)


class Marker(BaseModel):
    """A metadata marker attached to a declaration (decorator or annotation)."""

    name: str
    qualified_name: str
    args: list[str] = Field(default_factory=list)
    kwargs: dict[str, str] = Field(default_factory=dict)
    source: str = Field(
        default="", description="Argument source text (serialized form)"
    )

    @property
    def value(self) -> str | None:
        if "value" in self.kwargs:
            return self.kwargs["value"]
        if self.args:
            return self.args[0]
        return None


class DocComment(BaseModel):
    """A parsed docstring."""

    text: str = ""
    first_sentence: str = ""
    tags: dict[str, list[str]] = Field(default_factory=dict)
    param_tags: dict[str, str] = Field(default_factory=dict)


class FieldDecl(BaseModel):
    name: str
    type: TypeRef
    is_static: bool = False
    markers: list[Marker] = Field(default_factory=list)
    comment: DocComment = Field(default_factory=DocComment)


class ParamDecl(BaseModel):
    name: str
    type: TypeRef
    markers: list[Marker] = Field(default_factory=list)


class MethodDecl(BaseModel):
    name: str
    owner: str = Field(description="Qualified name of the enclosing type")
    params: list[ParamDecl] = Field(default_factory=list)
    return_type: TypeRef
    is_static: bool = False
    markers: list[Marker] = Field(default_factory=list)
    comment: DocComment = Field(default_factory=DocComment)


class TypeDecl(BaseModel):
    name: str
    qualified_name: str
    path: str = ""
    bases: list[TypeRef] = Field(default_factory=list)
    fields: list[FieldDecl] = Field(default_factory=list)
    methods: list[MethodDecl] = Field(default_factory=list)
    enum_constants: list[str] = Field(default_factory=list)
    is_enum: bool = False
    markers: list[Marker] = Field(default_factory=list)
    comment: DocComment = Field(default_factory=DocComment)


TypeRef.model_rebuild()


def find_marker(markers: list[Marker], *names: str) -> Marker | None:
    """Return the first marker whose simple name is one of ``names``."""
    for marker in markers:
        if marker.name in names:
            return marker
    return None


def has_marker(markers: list[Marker], *names: str) -> bool:
    return find_marker(markers, *names) is not None


__all__ = [
    "DocComment",
    "FieldDecl",
    "Marker",
    "MethodDecl",
    "ParamDecl",
    "TypeDecl",
    "TypeRef",
    "find_marker",
    "has_marker",
]

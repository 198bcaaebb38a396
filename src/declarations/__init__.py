"""Declaration snapshot and introspection provider."""

from declarations.models import (
    DocComment,
    FieldDecl,
    Marker,
    MethodDecl,
    ParamDecl,
    TypeDecl,
    TypeRef,
    find_marker,
    has_marker,
)
from declarations.provider import DeclarationIndex, DeclarationProvider

__all__ = [
    "DeclarationIndex",
    "DeclarationProvider",
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

"""Declaration introspection over a loaded declaration snapshot."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from declarations.models import (
        DocComment,
        FieldDecl,
        Marker,
        MethodDecl,
        ParamDecl,
        TypeDecl,
        TypeRef,
    )

# Bases that make a class an enumeration.
ENUM_BASES = frozenset(
    {
        "enum.Enum",
        "enum.IntEnum",
        "enum.StrEnum",
        "enum.Flag",
        "enum.IntFlag",
    }
)

# Bases that never act as a superclass for property inheritance.
_NON_STRUCTURAL_BASES = frozenset({"typing.Generic", "typing.Protocol"})


class DeclarationProvider(Protocol):
    """Read-only access to declarations, consumed by the extractors."""

    def resolve(self, ref: TypeRef) -> TypeDecl | None: ...

    def fields(self, decl: TypeDecl) -> list[FieldDecl]: ...

    def methods(self, decl: TypeDecl) -> list[MethodDecl]: ...

    def superclass(self, decl: TypeDecl) -> TypeRef | None: ...

    def type_arguments(self, ref: TypeRef) -> list[TypeRef]: ...

    def enum_constants(self, decl: TypeDecl) -> list[str] | None: ...

    def markers(self, decl: TypeDecl | FieldDecl | MethodDecl) -> list[Marker]: ...

    def param_markers(self, param: ParamDecl) -> list[Marker]: ...

    def comment(self, decl: TypeDecl | FieldDecl | MethodDecl) -> DocComment: ...

    def enclosing_type(self, method: MethodDecl) -> TypeDecl | None: ...


class DeclarationIndex:
    """In-memory provider keyed by qualified type name.

    Lookups fall back to the simple name when it identifies exactly one
    declared type, so references the loader could not qualify still resolve.
    """

    def __init__(self, decls: Iterable[TypeDecl] = ()) -> None:
        self._by_qualified_name: dict[str, TypeDecl] = {}
        self._by_simple_name: dict[str, list[TypeDecl]] = {}
        for decl in decls:
            self.add(decl)

    def add(self, decl: TypeDecl) -> None:
        if decl.qualified_name in self._by_qualified_name:
            return
        self._by_qualified_name[decl.qualified_name] = decl
        self._by_simple_name.setdefault(decl.name, []).append(decl)

    def __len__(self) -> int:
        return len(self._by_qualified_name)

    def __iter__(self) -> Iterator[TypeDecl]:
        return iter(self._by_qualified_name.values())

    def get(self, qualified_name: str) -> TypeDecl | None:
        return self._by_qualified_name.get(qualified_name)

    def resolve(self, ref: TypeRef) -> TypeDecl | None:
        decl = self._by_qualified_name.get(ref.qualified_name)
        if decl is not None:
            return decl
        candidates = self._by_simple_name.get(ref.simple_name, [])
        if len(candidates) == 1 and "." not in ref.qualified_name:
            return candidates[0]
        return None

    def fields(self, decl: TypeDecl) -> list[FieldDecl]:
        return list(decl.fields)

    def methods(self, decl: TypeDecl) -> list[MethodDecl]:
        return list(decl.methods)

    def superclass(self, decl: TypeDecl) -> TypeRef | None:
        for base in decl.bases:
            if base.qualified_name in _NON_STRUCTURAL_BASES:
                continue
            return base
        return None

    def type_arguments(self, ref: TypeRef) -> list[TypeRef]:
        return list(ref.args)

    def enum_constants(self, decl: TypeDecl) -> list[str] | None:
        if not self.is_enum(decl):
            return None
        return list(decl.enum_constants)

    def is_enum(self, decl: TypeDecl, _seen: frozenset[str] = frozenset()) -> bool:
        if decl.is_enum:
            return True
        for base in decl.bases:
            if base.qualified_name in ENUM_BASES:
                return True
            base_decl = self.resolve(base)
            if base_decl is None or base_decl.qualified_name in _seen:
                continue
            if self.is_enum(base_decl, _seen | {decl.qualified_name}):
                return True
        return False

    def markers(self, decl: TypeDecl | FieldDecl | MethodDecl) -> list[Marker]:
        return list(decl.markers)

    def param_markers(self, param: ParamDecl) -> list[Marker]:
        return list(param.markers)

    def comment(self, decl: TypeDecl | FieldDecl | MethodDecl) -> DocComment:
        return decl.comment

    def enclosing_type(self, method: MethodDecl) -> TypeDecl | None:
        return self._by_qualified_name.get(method.owner)


__all__ = ["ENUM_BASES", "DeclarationIndex", "DeclarationProvider"]

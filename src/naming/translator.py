"""Name translation policies.

A translator turns a declared type, field or method into the name it carries
in the documentation graph. ``None`` from ``field_name`` or ``method_name``
means the member is omitted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from declarations.models import find_marker, has_marker

if TYPE_CHECKING:
    from declarations.models import FieldDecl, MethodDecl, TypeRef
    from declarations.provider import DeclarationProvider

# Documentation names for builtin and typing names, keyed by qualified name.
BUILTIN_TYPE_NAMES: dict[str, str] = {
    "builtins.str": "string",
    "builtins.int": "integer",
    "builtins.float": "number",
    "builtins.complex": "number",
    "builtins.bool": "boolean",
    "builtins.bytes": "byte",
    "builtins.bytearray": "byte",
    "builtins.None": "void",
    "builtins.object": "object",
    "typing.Any": "object",
    "decimal.Decimal": "number",
    "datetime.datetime": "Date",
    "datetime.date": "Date",
    "uuid.UUID": "string",
    "builtins.list": "List",
    "builtins.tuple": "List",
    "typing.List": "List",
    "typing.Tuple": "List",
    "typing.Sequence": "List",
    "typing.Iterable": "List",
    "collections.abc.Sequence": "List",
    "collections.abc.Iterable": "List",
    "builtins.set": "Set",
    "builtins.frozenset": "Set",
    "typing.Set": "Set",
    "typing.FrozenSet": "Set",
    "collections.abc.Set": "Set",
    "builtins.dict": "Map",
    "typing.Dict": "Map",
    "typing.Mapping": "Map",
    "collections.abc.Mapping": "Map",
}

IGNORE_MARKERS = ("JsonIgnore",)
RENAME_MARKERS = ("JsonProperty",)
ROOT_NAME_MARKERS = ("JsonRootName", "XmlRootElement")

_GETTER_PREFIXES = ("get_", "is_")


class NameTranslator(Protocol):
    def type_name(self, ref: TypeRef) -> str: ...

    def field_name(self, field: FieldDecl) -> str | None: ...

    def method_name(self, method: MethodDecl) -> str | None: ...


class NameBasedTranslator:
    """Derive names purely from declared identifiers."""

    def type_name(self, ref: TypeRef) -> str:
        if ref.qualified_name in BUILTIN_TYPE_NAMES:
            return BUILTIN_TYPE_NAMES[ref.qualified_name]
        return ref.simple_name

    def field_name(self, field: FieldDecl) -> str | None:
        if field.name.startswith("_"):
            return None
        return field.name

    def method_name(self, method: MethodDecl) -> str | None:
        name = method.name
        if name.startswith("_") or method.is_static:
            return None
        if has_marker(method.markers, "property", "cached_property"):
            return name
        if method.params:
            return None
        for prefix in _GETTER_PREFIXES:
            if name.startswith(prefix) and len(name) > len(prefix):
                return name[len(prefix) :]
        return None


class MarkerAwareTranslator:
    """Apply naming markers first, then defer to ``fallback``.

    ``JsonIgnore`` omits a member, ``JsonProperty("name")`` renames it, and
    ``JsonRootName("name")`` or ``XmlRootElement(name="name")`` on a declared
    type renames the type.
    """

    def __init__(
        self,
        fallback: NameTranslator | None = None,
        provider: DeclarationProvider | None = None,
    ) -> None:
        self.fallback = fallback or NameBasedTranslator()
        self.provider = provider

    def type_name(self, ref: TypeRef) -> str:
        if self.provider is not None:
            decl = self.provider.resolve(ref)
            if decl is not None:
                marker = find_marker(self.provider.markers(decl), *ROOT_NAME_MARKERS)
                if marker is not None:
                    name = marker.kwargs.get("name") or marker.value
                    if name:
                        return name
        return self.fallback.type_name(ref)

    def field_name(self, field: FieldDecl) -> str | None:
        if has_marker(field.markers, *IGNORE_MARKERS):
            return None
        return self._marked_name(field) or self.fallback.field_name(field)

    def method_name(self, method: MethodDecl) -> str | None:
        if has_marker(method.markers, *IGNORE_MARKERS):
            return None
        return self._marked_name(method) or self.fallback.method_name(method)

    def _marked_name(self, member: FieldDecl | MethodDecl) -> str | None:
        marker = find_marker(member.markers, *RENAME_MARKERS)
        if marker is None:
            return None
        return marker.value or None


__all__ = [
    "BUILTIN_TYPE_NAMES",
    "MarkerAwareTranslator",
    "NameBasedTranslator",
    "NameTranslator",
]

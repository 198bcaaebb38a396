"""Schema graph extraction.

Walks the type graph reachable from a root type and emits one SchemaModel
per admissible type, deduplicated by translated name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from declarations.models import Marker, TypeRef
from extract.markers import JSON_VIEW
from extract.models import EnumProperty, ModelSet, SchemaModel, TypedProperty
from rules.config import ExtractionConfig

if TYPE_CHECKING:
    from declarations.models import DocComment, TypeDecl
    from declarations.provider import DeclarationProvider
    from extract.models import Property
    from naming.translator import NameTranslator

logger = logging.getLogger(__name__)

# Qualified names of primitive and value types.
VALUE_TYPES = frozenset(
    {
        "builtins.str",
        "builtins.int",
        "builtins.float",
        "builtins.complex",
        "builtins.bool",
        "builtins.bytes",
        "builtins.bytearray",
        "builtins.None",
        "typing.Any",
        "decimal.Decimal",
        "datetime.datetime",
        "datetime.date",
        "datetime.time",
        "datetime.timedelta",
        "uuid.UUID",
    }
)

BASE_OBJECT = "builtins.object"

# Superclasses under these prefixes never contribute inherited properties.
PLATFORM_BASE_PREFIXES = ("builtins.",)

# Simple-name suffixes that mark a key/value container.
MAP_SUFFIXES = ("Map", "Dict", "dict", "Mapping")


@dataclass
class _Member:
    """A referenced member: its declared type plus what describes it."""

    type: TypeRef
    comment: DocComment
    markers: list[Marker] = field(default_factory=list)


def container_element_type(ref: TypeRef) -> TypeRef | None:
    """Return the modeled element type of a parameterized container.

    The first generic argument, except for map-like names with at least two
    arguments, where the value (second) argument is used. The check is on
    the simple name only.
    """
    if not ref.args:
        return None
    if ref.simple_name.endswith(MAP_SUFFIXES) and len(ref.args) > 1:
        return ref.args[1]
    return ref.args[0]


def views_line(markers: list[Marker]) -> str | None:
    """Render the visibility-scope markers on a declaration, if any."""
    views: list[str] = []
    for marker in markers:
        if marker.name == JSON_VIEW:
            views.extend(marker.args)
    if not views:
        return None
    return "VIEWS: " + ",".join(views)


def _describe(member: _Member) -> str | None:
    lines = [member.comment.text] if member.comment.text else []
    views = views_line(member.markers)
    if views:
        lines.append(views)
    return "\n".join(lines) or None


class SchemaExtractor:
    """Extract schema models reachable from a root type."""

    def __init__(
        self,
        provider: DeclarationProvider,
        translator: NameTranslator,
        config: ExtractionConfig | None = None,
    ) -> None:
        self.provider = provider
        self.translator = translator
        self.config = config or ExtractionConfig()
        self.models = ModelSet()

    def extract(self, root: TypeRef) -> ModelSet:
        """Walk ``root`` and return a fresh set of the models discovered."""
        self.models = ModelSet()
        self._parse_model(root)
        return self.models

    def is_opaque(self, ref: TypeRef) -> bool:
        qualified_name = ref.qualified_name
        if qualified_name in VALUE_TYPES or qualified_name == BASE_OBJECT:
            return True
        if qualified_name.startswith(tuple(self.config.platform_namespaces)):
            return True
        if qualified_name in self.config.opaque_types:
            return True
        return self.provider.resolve(ref) is None

    def _parse_model(self, ref: TypeRef) -> None:
        if self.is_opaque(ref):
            return
        name = self.translator.type_name(ref)
        if name in self.models:
            return

        decl = self.provider.resolve(ref)
        if decl is None:
            return

        members = self._find_referenced_members(decl, {}, {decl.qualified_name})
        properties = self._build_properties(members)
        if not properties:
            logger.debug("No properties for %s; not modeled", ref.qualified_name)
            return

        self.models.add(SchemaModel(id=name, properties=properties))
        logger.debug("Registered model %s (%d properties)", name, len(properties))

        for member in members.values():
            self._parse_model(member.type)
            element = container_element_type(member.type)
            if element is not None:
                self._parse_model(element)

    def _find_referenced_members(
        self,
        decl: TypeDecl,
        members: dict[str, _Member],
        seen: set[str],
    ) -> dict[str, _Member]:
        for field_decl in self.provider.fields(decl):
            if field_decl.is_static:
                continue
            name = self.translator.field_name(field_decl)
            if name is not None and name not in members:
                members[name] = _Member(
                    type=field_decl.type,
                    comment=self.provider.comment(field_decl),
                    markers=self.provider.markers(field_decl),
                )

        for method in self.provider.methods(decl):
            name = self.translator.method_name(method)
            if name is not None and name not in members:
                members[name] = _Member(
                    type=method.return_type,
                    comment=self.provider.comment(method),
                    markers=self.provider.markers(method),
                )

        superclass = self.provider.superclass(decl)
        if (
            superclass is not None
            and not self.is_opaque(superclass)
            and not superclass.qualified_name.startswith(PLATFORM_BASE_PREFIXES)
        ):
            super_decl = self.provider.resolve(superclass)
            if super_decl is not None and super_decl.qualified_name not in seen:
                seen.add(super_decl.qualified_name)
                self._find_referenced_members(super_decl, members, seen)

        return members

    def _build_properties(self, members: dict[str, _Member]) -> dict[str, Property]:
        properties: dict[str, Property] = {}
        for name, member in members.items():
            description = _describe(member)
            decl = self.provider.resolve(member.type)
            constants = self.provider.enum_constants(decl) if decl else None
            if constants is not None:
                properties[name] = EnumProperty(
                    values=constants, description=description
                )
                continue

            element = container_element_type(member.type)
            properties[name] = TypedProperty(
                type=self.translator.type_name(member.type),
                items=self.translator.type_name(element) if element else None,
                description=description,
            )
        return properties


def extract_schemas(
    provider: DeclarationProvider,
    root: TypeRef,
    translator: NameTranslator,
    config: ExtractionConfig | None = None,
) -> ModelSet:
    """Extract every schema model reachable from ``root``."""
    return SchemaExtractor(provider, translator, config).extract(root)


__all__ = [
    "MAP_SUFFIXES",
    "SchemaExtractor",
    "container_element_type",
    "extract_schemas",
    "views_line",
]

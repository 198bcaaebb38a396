"""Annotation and decorator expressions as type references and markers.

Expression text comes from the tree-sitter walk; each expression is parsed
with ``ast`` in eval mode so nested generics, string forward references and
literal marker arguments are handled uniformly.
"""

from __future__ import annotations

import ast
import builtins
from dataclasses import dataclass, field

from declarations.models import Marker, TypeRef

_OPTIONAL = frozenset({"typing.Optional", "typing_extensions.Optional"})
_UNION = frozenset({"typing.Union", "typing_extensions.Union"})
_ANNOTATED = frozenset({"typing.Annotated", "typing_extensions.Annotated"})
_STATIC = frozenset({"typing.ClassVar", "typing_extensions.ClassVar"})
_QUALIFIERS = frozenset(
    {"typing.Final", "typing.Required", "typing.NotRequired", "typing.ReadOnly"}
)
_LITERAL = frozenset({"typing.Literal", "typing_extensions.Literal"})

NONE_REF = TypeRef(name="None", qualified_name="builtins.None")
ANY_REF = TypeRef(name="Any", qualified_name="typing.Any")


@dataclass(frozen=True)
class NameScope:
    """Resolves dotted names written in one module to qualified names."""

    module_name: str
    imports: dict[str, str] = field(default_factory=dict)
    local_types: frozenset[str] = frozenset()

    def qualify(self, dotted: str) -> str:
        head, _, rest = dotted.partition(".")
        if head in self.imports:
            base = self.imports[head]
            return f"{base}.{rest}" if rest else base
        if head in self.local_types:
            return f"{self.module_name}.{dotted}" if self.module_name else dotted
        if head == "None" or hasattr(builtins, head):
            return f"builtins.{dotted}"
        return dotted


@dataclass
class ParsedAnnotation:
    type: TypeRef
    markers: list[Marker] = field(default_factory=list)
    is_static: bool = False


def _dotted_name(node: ast.expr) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        parent = _dotted_name(node.value)
        return f"{parent}.{node.attr}" if parent else None
    return None


def _elements(node: ast.expr) -> list[ast.expr]:
    if isinstance(node, ast.Tuple):
        return list(node.elts)
    return [node]


def _is_none(node: ast.expr) -> bool:
    return isinstance(node, ast.Constant) and node.value is None


def _union_members(node: ast.expr) -> list[ast.expr]:
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        return [*_union_members(node.left), *_union_members(node.right)]
    return [node]


def _first_not_none(nodes: list[ast.expr]) -> ast.expr | None:
    for node in nodes:
        if not _is_none(node):
            return node
    return None


def _literal_type(elements: list[ast.expr], base: TypeRef) -> TypeRef:
    """Type of the first non-None literal value; values are never type arguments."""
    for element in elements:
        if not isinstance(element, ast.Constant) or element.value is None:
            continue
        name = type(element.value).__name__
        return TypeRef(name=name, qualified_name=f"builtins.{name}")
    if elements and all(_is_none(element) for element in elements):
        return NONE_REF
    return base


def _unresolved(node: ast.expr) -> TypeRef:
    text = ast.unparse(node)
    return TypeRef(name=text, qualified_name=text)


def _type_from_node(
    node: ast.expr, scope: NameScope, parsed: ParsedAnnotation
) -> TypeRef:
    if isinstance(node, ast.Constant):
        if node.value is None:
            return NONE_REF
        if isinstance(node.value, str):
            try:
                inner = ast.parse(node.value.strip(), mode="eval").body
            except SyntaxError:
                return TypeRef(name=node.value, qualified_name=node.value)
            return _type_from_node(inner, scope, parsed)
        return _unresolved(node)

    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        member = _first_not_none(_union_members(node))
        return _type_from_node(member, scope, parsed) if member else NONE_REF

    dotted = _dotted_name(node)
    if dotted is not None:
        return TypeRef(name=dotted, qualified_name=scope.qualify(dotted))

    if not isinstance(node, ast.Subscript):
        return _unresolved(node)

    base = _dotted_name(node.value)
    if base is None:
        return _unresolved(node)
    qualified_name = scope.qualify(base)
    elements = _elements(node.slice)

    if qualified_name in _OPTIONAL or qualified_name in _UNION:
        member = _first_not_none(elements)
        return _type_from_node(member, scope, parsed) if member else NONE_REF
    if qualified_name in _ANNOTATED:
        for extra in elements[1:]:
            marker = marker_from_node(extra, scope)
            if marker is not None:
                parsed.markers.append(marker)
        return _type_from_node(elements[0], scope, parsed)
    if qualified_name in _STATIC:
        parsed.is_static = True
        return _type_from_node(elements[0], scope, parsed) if elements else ANY_REF
    if qualified_name in _QUALIFIERS:
        return _type_from_node(elements[0], scope, parsed)
    if qualified_name in _LITERAL:
        return _literal_type(
            elements, TypeRef(name=base, qualified_name=qualified_name)
        )

    args = [
        _type_from_node(element, scope, parsed)
        for element in elements
        if not (isinstance(element, ast.Constant) and element.value is Ellipsis)
    ]
    return TypeRef(name=base, qualified_name=qualified_name, args=args)


def parse_annotation(text: str, scope: NameScope) -> ParsedAnnotation:
    """Parse annotation source text into a type reference plus markers.

    ``Optional[X]``, ``X | None`` and ``Union[X, ...]`` collapse to their
    first non-None member; ``Annotated[T, m...]`` yields ``T`` with markers
    ``m...``; ``ClassVar[T]`` marks the annotation static; ``Literal[v, ...]``
    yields the builtin type of its first non-None value.
    """
    parsed = ParsedAnnotation(type=ANY_REF)
    try:
        node = ast.parse(text.strip(), mode="eval").body
    except SyntaxError:
        parsed.type = TypeRef(name=text, qualified_name=text)
        return parsed
    parsed.type = _type_from_node(node, scope, parsed)
    return parsed


def _literal_strings(node: ast.expr) -> list[str]:
    try:
        value = ast.literal_eval(node)
    except (ValueError, TypeError, SyntaxError):
        return [ast.unparse(node)]
    if isinstance(value, (list, tuple, set, frozenset)):
        return [str(item) for item in value]
    return [str(value)]


def marker_from_node(node: ast.expr, scope: NameScope) -> Marker | None:
    """Build a marker from a decorator or ``Annotated`` metadata expression."""
    if isinstance(node, ast.Call):
        dotted = _dotted_name(node.func)
        if dotted is None:
            return None
        args: list[str] = []
        for arg in node.args:
            args.extend(_literal_strings(arg))
        kwargs = {
            keyword.arg: ",".join(_literal_strings(keyword.value))
            for keyword in node.keywords
            if keyword.arg is not None
        }
        source = ", ".join(
            [ast.unparse(arg) for arg in node.args]
            + [
                f"{keyword.arg}={ast.unparse(keyword.value)}"
                for keyword in node.keywords
                if keyword.arg is not None
            ]
        )
        return Marker(
            name=dotted.rsplit(".", 1)[-1],
            qualified_name=scope.qualify(dotted),
            args=args,
            kwargs=kwargs,
            source=source,
        )

    dotted = _dotted_name(node)
    if dotted is None:
        return None
    return Marker(name=dotted.rsplit(".", 1)[-1], qualified_name=scope.qualify(dotted))


def parse_marker(text: str, scope: NameScope) -> Marker | None:
    """Parse decorator (or call-valued default) source text into a marker."""
    try:
        node = ast.parse(text.strip(), mode="eval").body
    except SyntaxError:
        return None
    return marker_from_node(node, scope)


__all__ = [
    "ANY_REF",
    "NONE_REF",
    "NameScope",
    "ParsedAnnotation",
    "marker_from_node",
    "parse_annotation",
    "parse_marker",
]

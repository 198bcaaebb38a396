"""Tree-sitter based declaration extraction.

Walks class definitions in a Python source file and records their fields,
methods, parameters, decorators and docstrings as declaration records.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tree_sitter import Language, Node, Parser
from tree_sitter_python import language as get_python_language

from declarations.models import (
    FieldDecl,
    Marker,
    MethodDecl,
    ParamDecl,
    TypeDecl,
)
from declarations.provider import ENUM_BASES
from parse.annotations import (
    ANY_REF,
    NameScope,
    parse_annotation,
    parse_marker,
)
from parse.ast_imports import build_import_table
from parse.docstrings import parse_docstring, string_literal_value

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_PARSER: Parser | None = None

_STATIC_DECORATORS = frozenset({"staticmethod", "classmethod"})
_RECEIVER_NAMES = frozenset({"self", "cls"})


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with Python language."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_python_language())
        _PARSER = Parser(lang)

    return _PARSER


def _text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf8")


def _unwrap_decorated(node: Node) -> tuple[Node | None, list[Node]]:
    """Return (definition, decorator expressions) for a possibly decorated node."""
    if node.type != "decorated_definition":
        return node, []
    decorators = [
        child.named_children[0]
        for child in node.children
        if child.type == "decorator" and child.named_children
    ]
    return node.child_by_field_name("definition"), decorators


def _docstring_of(body: Node | None) -> str | None:
    """Return the docstring of a class or function body, if present."""
    if body is None:
        return None
    for child in body.named_children:
        if child.type == "comment":
            continue
        if child.type == "expression_statement" and child.named_children:
            first = child.named_children[0]
            if first.type == "string":
                return string_literal_value(_text(first))
        return None
    return None


def _string_statement(node: Node | None) -> str | None:
    """Return the value of a bare string statement (an attribute docstring)."""
    if node is None or node.type != "expression_statement":
        return None
    if len(node.named_children) != 1 or node.named_children[0].type != "string":
        return None
    return string_literal_value(_text(node.named_children[0]))


def _markers(expressions: list[Node], scope: NameScope) -> list[Marker]:
    markers: list[Marker] = []
    for expression in expressions:
        marker = parse_marker(_text(expression), scope)
        if marker is not None:
            markers.append(marker)
    return markers


def _base_expressions(class_node: Node) -> list[str]:
    superclasses = class_node.child_by_field_name("superclasses")
    if superclasses is None:
        return []
    return [
        _text(child)
        for child in superclasses.named_children
        if child.type not in ("keyword_argument", "comment")
    ]


def _extract_param(node: Node, scope: NameScope) -> ParamDecl | None:
    """Build a parameter declaration; splats and separators yield None."""
    if node.type == "identifier":
        return ParamDecl(name=_text(node), type=ANY_REF)

    if node.type == "typed_parameter":
        name_node = node.named_children[0] if node.named_children else None
        if name_node is None or name_node.type != "identifier":
            return None
        parsed = parse_annotation(_text(node.child_by_field_name("type")), scope)
        return ParamDecl(
            name=_text(name_node), type=parsed.type, markers=parsed.markers
        )

    if node.type in ("default_parameter", "typed_default_parameter"):
        name_node = node.child_by_field_name("name")
        if name_node is None or name_node.type != "identifier":
            return None
        type_node = node.child_by_field_name("type")
        if type_node is not None:
            parsed = parse_annotation(_text(type_node), scope)
            param_type, markers = parsed.type, list(parsed.markers)
        else:
            param_type, markers = ANY_REF, []
        value = node.child_by_field_name("value")
        if value is not None and value.type == "call":
            marker = parse_marker(_text(value), scope)
            if marker is not None:
                markers.append(marker)
        return ParamDecl(name=_text(name_node), type=param_type, markers=markers)

    return None


def _extract_method(
    node: Node,
    decorators: list[Node],
    owner: str,
    scope: NameScope,
) -> MethodDecl | None:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None

    markers = _markers(decorators, scope)
    is_static = any(marker.name in _STATIC_DECORATORS for marker in markers)

    params: list[ParamDecl] = []
    parameters = node.child_by_field_name("parameters")
    for index, child in enumerate(parameters.named_children if parameters else []):
        param = _extract_param(child, scope)
        if param is None:
            continue
        if index == 0 and param.name in _RECEIVER_NAMES:
            continue
        params.append(param)

    return_node = node.child_by_field_name("return_type")
    return_type = (
        parse_annotation(_text(return_node), scope).type if return_node else ANY_REF
    )

    return MethodDecl(
        name=_text(name_node),
        owner=owner,
        params=params,
        return_type=return_type,
        is_static=is_static,
        markers=markers,
        comment=parse_docstring(_docstring_of(node.child_by_field_name("body"))),
    )


def _extract_assignment(
    statement: Node,
    next_statement: Node | None,
    decl: TypeDecl,
    scope: NameScope,
) -> None:
    """Record a class-level assignment as a field or a class constant."""
    assignment = statement.named_children[0]
    left = assignment.child_by_field_name("left")
    if left is None or left.type != "identifier":
        return
    name = _text(left)

    type_node = assignment.child_by_field_name("type")
    if type_node is None:
        if not name.startswith("_"):
            decl.enum_constants.append(name)
        return

    parsed = parse_annotation(_text(type_node), scope)
    decl.fields.append(
        FieldDecl(
            name=name,
            type=parsed.type,
            is_static=parsed.is_static,
            markers=parsed.markers,
            comment=parse_docstring(_string_statement(next_statement)),
        )
    )


def _extract_class(
    node: Node,
    decorators: list[Node],
    parent_qualified_name: str,
    relative_path: str,
    scope: NameScope,
    decls: list[TypeDecl],
) -> None:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return

    name = _text(name_node)
    qualified_name = (
        f"{parent_qualified_name}.{name}" if parent_qualified_name else name
    )
    bases = [parse_annotation(text, scope).type for text in _base_expressions(node)]
    body = node.child_by_field_name("body")

    decl = TypeDecl(
        name=name,
        qualified_name=qualified_name,
        path=relative_path,
        bases=bases,
        is_enum=any(base.qualified_name in ENUM_BASES for base in bases),
        markers=_markers(decorators, scope),
        comment=parse_docstring(_docstring_of(body)),
    )
    decls.append(decl)

    statements = body.named_children if body is not None else []
    for index, statement in enumerate(statements):
        next_statement = statements[index + 1] if index + 1 < len(statements) else None
        if (
            statement.type == "expression_statement"
            and statement.named_children
            and statement.named_children[0].type == "assignment"
        ):
            _extract_assignment(statement, next_statement, decl, scope)
            continue

        definition, inner_decorators = _unwrap_decorated(statement)
        if definition is None:
            continue
        if definition.type == "function_definition":
            method = _extract_method(
                definition, inner_decorators, qualified_name, scope
            )
            if method is not None:
                decl.methods.append(method)
        elif definition.type == "class_definition":
            _extract_class(
                definition,
                inner_decorators,
                qualified_name,
                relative_path,
                scope,
                decls,
            )


def _local_type_names(root: Node) -> frozenset[str]:
    names: set[str] = set()
    for child in root.named_children:
        definition, _ = _unwrap_decorated(child)
        if definition is not None and definition.type == "class_definition":
            names.add(_text(definition.child_by_field_name("name")))
    return frozenset(names)


def extract_declarations_treesitter(
    file_path: Path,
    relative_path: str,
    module_name: str,
) -> list[TypeDecl]:
    """Extract type declarations from a Python file using Tree-sitter.

    Args:
        file_path: Absolute path to the Python file
        relative_path: Path relative to repo root (for output)
        module_name: Module name derived from relative path (e.g., "app.users")

    Returns:
        List of TypeDecl records, nested classes included, in source order.
        Unreadable files yield no declarations.
    """
    parser = _get_parser()

    try:
        source_bytes = file_path.read_bytes()
        source = source_bytes.decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Skipping %s: %s", relative_path, exc)
        return []

    importing_module = module_name
    if relative_path.endswith("__init__.py"):
        importing_module = f"{module_name}.__init__"

    root_node = parser.parse(source_bytes).root_node
    scope = NameScope(
        module_name=module_name,
        imports=build_import_table(source, importing_module),
        local_types=_local_type_names(root_node),
    )

    decls: list[TypeDecl] = []
    for child in root_node.named_children:
        definition, decorators = _unwrap_decorated(child)
        if definition is not None and definition.type == "class_definition":
            _extract_class(
                definition, decorators, module_name, relative_path, scope, decls
            )

    return decls


__all__ = ["extract_declarations_treesitter"]

"""AST-based import tables for declaration loading."""

from __future__ import annotations

import ast

ImportTable = dict[str, str]


def _process_import_node(node: ast.Import, table: ImportTable) -> None:
    """Bind names from a standard import node (import x, import x.y as z)."""
    for name in node.names:
        if name.asname:
            table[name.asname] = name.name
        else:
            top_level = name.name.split(".", 1)[0]
            table[top_level] = top_level


def _process_import_from_node(
    node: ast.ImportFrom, table: ImportTable, importing_module: str
) -> None:
    """Bind names from a from-import node (from x import y as z)."""
    module = node.module or ""
    if node.level > 0:
        module = resolve_relative_import(importing_module, module, node.level)

    for name in node.names:
        if name.name == "*":
            continue
        local_name = name.asname or name.name
        table[local_name] = f"{module}.{name.name}" if module else name.name


def build_import_table(source: str, importing_module: str) -> ImportTable:
    """Map each module-level imported local name to its qualified name.

    Args:
        source: Python source text
        importing_module: Module name of the source, used for relative imports.
            Package ``__init__`` modules should pass ``"pkg.__init__"`` so a
            single-dot import resolves inside the package.

    Returns:
        Dictionary of local name -> qualified name. Invalid sources yield an
        empty table.
    """
    table: ImportTable = {}

    try:
        tree = ast.parse(source)
    except SyntaxError:
        # Invalid syntax: treat as no imports to keep loading deterministic.
        return table

    for node in tree.body:
        if isinstance(node, ast.Import):
            _process_import_node(node, table)
        elif isinstance(node, ast.ImportFrom):
            _process_import_from_node(node, table, importing_module)
        elif isinstance(node, ast.If):
            # `if TYPE_CHECKING:` blocks still name the annotation types.
            for child in node.body:
                if isinstance(child, ast.Import):
                    _process_import_node(child, table)
                elif isinstance(child, ast.ImportFrom):
                    _process_import_from_node(child, table, importing_module)

    return table


def resolve_relative_import(
    importing_module: str,
    relative_module: str,
    level: int,
) -> str:
    """Resolve a relative import to an absolute module name.

    Args:
        importing_module: The module doing the import (e.g., "pkg.sub.mod")
        relative_module: The relative module name (e.g., "foo" from ".foo")
        level: Number of dots (1 for ".", 2 for "..", etc.)

    Returns:
        Absolute module name (e.g., "pkg.sub.foo")

    Examples:
        >>> resolve_relative_import("pkg.sub.mod", "foo", 1)
        'pkg.sub.foo'
        >>> resolve_relative_import("pkg.sub.mod", "", 1)
        'pkg.sub'
        >>> resolve_relative_import("pkg.sub.mod", "bar", 2)
        'pkg.bar'
    """
    parts = importing_module.split(".")

    if level > len(parts):
        return relative_module or importing_module

    base_parts = parts[: len(parts) - level]

    if relative_module:
        return ".".join([*base_parts, relative_module])
    if base_parts:
        return ".".join(base_parts)
    return importing_module

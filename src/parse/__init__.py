"""Source parsing utilities for declaration loading."""

from parse.annotations import NameScope, parse_annotation, parse_marker
from parse.ast_imports import build_import_table, resolve_relative_import
from parse.docstrings import parse_docstring
from parse.treesitter_declarations import extract_declarations_treesitter

__all__ = [
    "NameScope",
    "build_import_table",
    "extract_declarations_treesitter",
    "parse_annotation",
    "parse_docstring",
    "parse_marker",
    "resolve_relative_import",
]

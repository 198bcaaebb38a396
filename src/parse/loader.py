"""Load a declaration snapshot for a source tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from declarations.provider import DeclarationIndex
from parse.treesitter_declarations import extract_declarations_treesitter
from scan.files import find_python_files
from utils import path_to_module

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedDeclarations:
    index: DeclarationIndex
    file_count: int


def load_declarations(
    root: Path,
    *,
    output_dir: str = ".restmap",
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> LoadedDeclarations:
    """Parse every Python file under ``root`` into one declaration index.

    Files are visited in sorted relative-path order, so when two files
    declare the same qualified name the first one wins.
    """
    index = DeclarationIndex()
    file_count = 0

    for file_path in find_python_files(
        root,
        output_dir=output_dir,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
        nested_gitignore=nested_gitignore,
    ):
        relative_path = file_path.relative_to(root).as_posix()
        module_name = path_to_module(relative_path)
        decls = extract_declarations_treesitter(file_path, relative_path, module_name)
        for decl in decls:
            index.add(decl)
        file_count += 1

    logger.info("Loaded %d types from %d files", len(index), file_count)
    return LoadedDeclarations(index=index, file_count=file_count)


__all__ = ["LoadedDeclarations", "load_declarations"]

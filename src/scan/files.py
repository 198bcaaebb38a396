"""Source file discovery for declaration loading."""

from __future__ import annotations

import logging
from collections.abc import Callable
from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

logger = logging.getLogger(__name__)

GitignoreMatcher = Callable[[str], bool]


def _resolves_within(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        path.resolve().relative_to(root.resolve())
    except (OSError, ValueError):
        return False
    return True


def _matches_any(rel_path: str, patterns: list[str] | None) -> bool:
    return bool(patterns) and any(fnmatch(rel_path, pat) for pat in patterns or [])


def _is_source_file(
    path: Path,
    root: Path,
    *,
    output_dir: str,
    ignored: GitignoreMatcher | None,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    """Apply every filtering rule to one candidate path."""
    if not path.is_file() or path.is_symlink() or not _resolves_within(path, root):
        return False

    rel_path = path.relative_to(root)
    if output_dir and rel_path.parts and rel_path.parts[0] == output_dir:
        return False

    if ignored is not None and ignored(str(path)):
        return False

    rel_path_str = rel_path.as_posix()
    if include_patterns and not _matches_any(rel_path_str, include_patterns):
        return False
    return not _matches_any(rel_path_str, exclude_patterns)


def _gitignore_matcher(root: Path, *, nested: bool) -> GitignoreMatcher | None:
    """Build a matcher for the root .gitignore, or every .gitignore if nested."""
    if nested:
        candidates = {root / ".gitignore", *root.rglob(".gitignore")}
    else:
        candidates = {root / ".gitignore"}
    gitignore_paths = sorted(
        (
            path
            for path in candidates
            if path.is_file()
            and not path.is_symlink()
            and _resolves_within(path, root)
        ),
        key=lambda p: p.relative_to(root).as_posix(),
    )
    if not gitignore_paths:
        return None

    matchers = [
        cast("GitignoreMatcher", parse_gitignore(path)) for path in gitignore_paths
    ]

    def ignored(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return ignored


def find_python_files(
    directory: Path,
    *,
    output_dir: str = ".restmap",
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find Python source files under a directory, respecting .gitignore.

    Args:
        directory: Directory to search for Python files
        output_dir: Directory name to skip (default ".restmap")
        include_patterns: Optional fnmatch patterns; if provided, files must
            match at least one pattern to be included
        exclude_patterns: Optional fnmatch patterns; matching files are skipped
        nested_gitignore: Also honor .gitignore files below the root

    Yields:
        Paths sorted lexicographically by relative path.
    """
    ignored = _gitignore_matcher(directory, nested=nested_gitignore)

    matched_files: list[Path] = []
    for path in directory.rglob("*.py"):
        if _is_source_file(
            path,
            directory,
            output_dir=output_dir,
            ignored=ignored,
            include_patterns=include_patterns,
            exclude_patterns=exclude_patterns,
        ):
            matched_files.append(path)
        else:
            logger.debug("Skipping %s", path)

    matched_files.sort(key=lambda p: p.relative_to(directory).as_posix())

    yield from matched_files


__all__ = ["find_python_files"]

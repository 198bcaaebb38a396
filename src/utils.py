"""Shared utilities for restmap-core."""

from __future__ import annotations

from pathlib import Path


def path_to_module(file_path: str | Path) -> str:
    """Convert a relative file path to a dotted module name.

    Sources under ``src/<package>/`` drop the ``src`` prefix, and package
    ``__init__.py`` files map to the package itself.

    Examples:
        >>> path_to_module("src/shop_api/resources/users.py")
        'shop_api.resources.users'
        >>> path_to_module("shop_api/__init__.py")
        'shop_api'
        >>> path_to_module(Path("models.py"))
        'models'
    """
    path_str = file_path.as_posix() if isinstance(file_path, Path) else str(file_path)
    parts = [part for part in path_str.replace("\\", "/").split("/") if part]

    if len(parts) >= 2 and parts[0] == "src":
        parts = parts[1:]

    if parts and parts[-1].endswith(".py"):
        parts[-1] = parts[-1][: -len(".py")]

    if parts and parts[-1] == "__init__":
        parts = parts[:-1]

    return ".".join(parts)

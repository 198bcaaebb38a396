from __future__ import annotations

from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = "restmap.toml"

DEFAULT_PLATFORM_NAMESPACES = [
    "builtins.",
    "typing.",
    "collections.",
    "enum.",
    "abc.",
    "datetime.",
    "decimal.",
    "uuid.",
    "pathlib.",
]


class ExtractionConfig(BaseModel):
    """Options consumed by the schema and endpoint extractors."""

    model_config = ConfigDict(extra="forbid")

    parse_models: bool = Field(
        default=True,
        description="Expand parameter and return types into schema models",
    )
    response_tags: list[str] = Field(
        default_factory=lambda: ["HTTP", "errorResponse"],
        description="Docstring tag names read as '<code> <message>' responses",
    )
    opaque_types: list[str] = Field(
        default_factory=list,
        description="Qualified type names never expanded into models",
    )
    excluded_markers: list[str] = Field(
        default_factory=lambda: ["Context"],
        description="Parameter markers that exclude a parameter from docs",
    )
    platform_namespaces: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PLATFORM_NAMESPACES),
        description="Qualified-name prefixes of platform-reserved types",
    )
    metadata_shadow_types: list[str] = Field(
        default_factory=lambda: ["FormDataContentDisposition"],
        description=(
            "Parameter types that only describe a sibling parameter "
            "(matched by qualified or simple name)"
        ),
    )

    @field_validator("response_tags", "excluded_markers", mode="before")
    @classmethod
    def validate_names(cls, v: Any) -> Any:
        """Reject blank names, which would match every untagged line."""
        if v is None:
            return []
        if not isinstance(v, list):
            msg = "expected a list of names"
            raise TypeError(msg)
        for name in v:
            if not isinstance(name, str) or not name.strip():
                msg = f"Invalid name {name!r}: names must be non-empty strings"
                raise ValueError(msg)
        return v


class RestMapConfig(BaseModel):
    """Configuration for restmap-core graph generation."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=".restmap",
        description="Output directory for generated artifacts",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all Python files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    extraction: ExtractionConfig = Field(
        default_factory=ExtractionConfig,
        description="Schema and endpoint extraction options",
    )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the repo root.

    The config output_dir must be a non-empty relative path that remains
    within the repository root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_dir.startswith("~") or output_path.is_absolute():
        msg = "output_dir must be a relative path within the repo root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the repository root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> RestMapConfig:
    """Load configuration from restmap.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return RestMapConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return RestMapConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e

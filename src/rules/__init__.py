"""Configuration loading for restmap-core."""

from rules.config import (
    ConfigError,
    ExtractionConfig,
    RestMapConfig,
    load_config,
    resolve_output_dir,
)

__all__ = [
    "ConfigError",
    "ExtractionConfig",
    "RestMapConfig",
    "load_config",
    "resolve_output_dir",
]

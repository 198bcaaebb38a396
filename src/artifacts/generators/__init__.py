"""Artifact generators for restmap-core."""

from artifacts.generators.graph import GraphGenerator

__all__ = ["GraphGenerator"]

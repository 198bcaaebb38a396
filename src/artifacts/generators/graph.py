"""Documentation graph artifact generator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from artifacts.models.artifacts.resources import ResourceRecord
from artifacts.models.artifacts.schemas import GraphSummary, ModelRecord
from artifacts.utils import _get_output_dir_name, _write_json, _write_jsonl
from contract.artifacts import MODELS_JSONL, RESOURCES_JSONL, SUMMARY_JSON
from declarations.models import find_marker
from extract.endpoint import EndpointExtractor
from extract.markers import PATH
from extract.models import ModelCatalog
from naming.translator import MarkerAwareTranslator, NameBasedTranslator
from parse.loader import load_declarations
from rules.config import ExtractionConfig

if TYPE_CHECKING:
    from pathlib import Path

    from declarations.models import TypeDecl
    from declarations.provider import DeclarationProvider, DeclarationIndex
    from naming.translator import NameTranslator

logger = logging.getLogger(__name__)


def find_resources(index: DeclarationIndex) -> list[TypeDecl]:
    """Return every declared type carrying a class-level ``Path`` marker."""
    return [
        decl
        for decl in index
        if find_marker(index.markers(decl), PATH) is not None
    ]


def extract_resource(
    resource: TypeDecl,
    provider: DeclarationProvider,
    translator: NameTranslator,
    config: ExtractionConfig,
    catalog: ModelCatalog,
) -> ResourceRecord:
    """Extract every operation of one resource, merging models into ``catalog``."""
    path_marker = find_marker(provider.markers(resource), PATH)
    base_path = (path_marker.value if path_marker else None) or ""

    extractor = EndpointExtractor(provider, translator, config)
    record = ResourceRecord(
        path=resource.path,
        resource=resource.qualified_name,
        base_path=base_path,
    )
    for method in provider.methods(resource):
        endpoint = extractor.extract(base_path, method)
        if endpoint is None:
            record.skipped_operations.append(method.name)
            continue
        record.endpoints.append(endpoint)
        catalog.merge(extractor.models)

    return record


class GraphGenerator:
    """Generates resources.jsonl, models.jsonl and summary.json."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "graph"

    def generate(
        self,
        root: Path,
        out_dir: Path,
        **kwargs: Any,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Generate graph artifacts; returns resource dicts and the summary."""
        config: ExtractionConfig = kwargs.get("extraction") or ExtractionConfig()

        out_dir.mkdir(parents=True, exist_ok=True)

        loaded = load_declarations(
            root,
            output_dir=_get_output_dir_name(out_dir, root),
            include_patterns=kwargs.get("include_patterns"),
            exclude_patterns=kwargs.get("exclude_patterns"),
            nested_gitignore=kwargs.get("nested_gitignore", False),
        )
        index = loaded.index
        translator = MarkerAwareTranslator(NameBasedTranslator(), provider=index)

        catalog = ModelCatalog()
        resources = [
            extract_resource(resource, index, translator, config, catalog)
            for resource in find_resources(index)
        ]
        resources.sort(key=lambda r: (r.path, r.resource))
        models = [ModelRecord(**model.model_dump()) for model in catalog]

        summary = GraphSummary(
            file_count=loaded.file_count,
            type_count=len(index),
            resource_count=len(resources),
            endpoint_count=sum(len(r.endpoints) for r in resources),
            model_count=len(models),
            skipped_operation_count=sum(len(r.skipped_operations) for r in resources),
        )
        logger.info(
            "Extracted %d endpoints and %d models from %d resources",
            summary.endpoint_count,
            summary.model_count,
            summary.resource_count,
        )

        _write_jsonl(out_dir / RESOURCES_JSONL, resources)
        _write_jsonl(out_dir / MODELS_JSONL, models)
        _write_json(out_dir / SUMMARY_JSON, summary)

        return [r.model_dump() for r in resources], summary.model_dump()


__all__ = ["GraphGenerator", "extract_resource", "find_resources"]

"""Endpoint descriptor extraction for a single operation."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from declarations.models import find_marker
from extract.markers import (
    ANY_ROLES,
    BINDING_MARKERS,
    HTTP_METHOD_MARKERS,
    PATH,
    PERMIT_ALL,
    ROLES_ALLOWED,
)
from extract.models import (
    EndpointDescriptor,
    ModelSet,
    ParameterDescriptor,
    ResponseDescriptor,
)
from extract.schema import SchemaExtractor, views_line
from rules.config import ExtractionConfig

if TYPE_CHECKING:
    from declarations.models import Marker, MethodDecl, ParamDecl, TypeRef
    from declarations.provider import DeclarationProvider
    from extract.models import HttpMethod, ParameterKind
    from naming.translator import NameTranslator

logger = logging.getLogger(__name__)

# "<code><space><text>", searched anywhere in the tag text.
RESPONSE_PATTERN = re.compile(r"(\d+) (.+)")

COLLECTION_NAMES = frozenset({"List", "Set"})


def http_method_of(markers: list[Marker]) -> HttpMethod | None:
    """Return the first recognized HTTP verb marker, if any."""
    for marker in markers:
        if marker.name in HTTP_METHOD_MARKERS:
            return marker.name  # type: ignore[return-value]
    return None


def parse_response(text: str) -> ResponseDescriptor | None:
    match = RESPONSE_PATTERN.search(text)
    if match is None:
        return None
    return ResponseDescriptor(code=int(match.group(1)), message=match.group(2))


def roles_of(markers: list[Marker]) -> str | None:
    """Resolve the role value declared by ``markers``, or None if silent."""
    if find_marker(markers, PERMIT_ALL) is not None:
        return ANY_ROLES
    marker = find_marker(markers, ROLES_ALLOWED)
    if marker is not None:
        return marker.source
    return None


class EndpointExtractor:
    """Build the endpoint descriptor of one operation.

    ``models`` holds the schema models discovered by the latest ``extract``
    call; every call starts from an empty set.
    """

    def __init__(
        self,
        provider: DeclarationProvider,
        translator: NameTranslator,
        config: ExtractionConfig | None = None,
    ) -> None:
        self.provider = provider
        self.translator = translator
        self.config = config or ExtractionConfig()
        self.models = ModelSet()

    def extract(self, base_path: str, method: MethodDecl) -> EndpointDescriptor | None:
        self.models = ModelSet()
        markers = self.provider.markers(method)

        http_method = http_method_of(markers)
        if http_method is None:
            logger.debug("%s.%s has no HTTP method marker", method.owner, method.name)
            return None

        path_marker = find_marker(markers, PATH)
        own_path = path_marker.value if path_marker else None
        path = base_path + (own_path or "")

        parameters: list[ParameterDescriptor] = []
        param_docs = self.provider.comment(method).param_tags
        for param in method.params:
            if not self.should_include_parameter(http_method, param):
                continue
            if self.config.parse_models:
                self._expand(param.type)
            kind, name = self._binding_of(param)
            parameters.append(
                ParameterDescriptor(
                    kind=kind,
                    name=name,
                    description=param_docs.get(param.name, ""),
                    type=self.translator.type_name(param.type),
                )
            )

        return_type, element = self._return_type(method.return_type)
        if self.config.parse_models:
            self._expand(method.return_type)
            if element is not None:
                self._expand(element)

        summary, description = self._documentation(method)
        return EndpointDescriptor(
            method=http_method,
            name=method.name,
            path=path,
            parameters=parameters,
            responses=self._responses(method),
            summary=summary,
            description=description,
            return_type=return_type,
        )

    def should_include_parameter(self, http_method: str, param: ParamDecl) -> bool:
        """Decide whether ``param`` is documented, in priority order.

        1. Metadata shadow parameters are never documented.
        2. A configured exclusion marker excludes the parameter.
        3. A request-binding marker includes it.
        4. Implicit POST body rule: a parameter without any marker is
           included only on POST operations, as the request body.
        """
        shadow_types = self.config.metadata_shadow_types
        if (
            param.type.qualified_name in shadow_types
            or param.type.simple_name in shadow_types
        ):
            return False

        markers = self.provider.param_markers(param)
        if any(marker.name in self.config.excluded_markers for marker in markers):
            return False

        if any(marker.name in BINDING_MARKERS for marker in markers):
            return True

        return not markers and http_method == "POST"

    def _binding_of(self, param: ParamDecl) -> tuple[ParameterKind, str]:
        for marker in self.provider.param_markers(param):
            if marker.name in BINDING_MARKERS:
                return BINDING_MARKERS[marker.name], marker.value or param.name
        return "body", param.name

    def _responses(self, method: MethodDecl) -> list[ResponseDescriptor]:
        tags = self.provider.comment(method).tags
        responses: list[ResponseDescriptor] = []
        for tag_name in self.config.response_tags:
            for text in tags.get(tag_name, []):
                response = parse_response(text)
                if response is not None:
                    responses.append(response)
        return responses

    def _return_type(self, ref: TypeRef) -> tuple[str, TypeRef | None]:
        return_type = self.translator.type_name(ref)
        args = self.provider.type_arguments(ref)
        if return_type in COLLECTION_NAMES and args:
            element = args[0]
            return f"{return_type}[{self.translator.type_name(element)}]", element
        return return_type, None

    def _documentation(self, method: MethodDecl) -> tuple[str, str]:
        comment = self.provider.comment(method)
        markers = self.provider.markers(method)

        roles = roles_of(markers)
        if roles is None:
            owner = self.provider.enclosing_type(method)
            if owner is not None:
                roles = roles_of(self.provider.markers(owner))
        if roles is None:
            roles = ANY_ROLES

        first_sentence = comment.first_sentence
        auth = "No" if roles == ANY_ROLES else "Yes"
        summary = f"{first_sentence} Auth is required: {auth}".lstrip()

        lines = []
        remainder = comment.text.replace(first_sentence, "", 1).strip()
        if remainder:
            lines.append(remainder)
        lines.append(f"ROLES: {roles}")
        views = views_line(markers)
        if views:
            lines.append(views)
        return summary, "\n".join(lines)

    def _expand(self, ref: TypeRef) -> None:
        extractor = SchemaExtractor(self.provider, self.translator, self.config)
        self.models.merge(extractor.extract(ref))


def extract_endpoint(
    provider: DeclarationProvider,
    base_path: str,
    method: MethodDecl,
    translator: NameTranslator,
    config: ExtractionConfig | None = None,
) -> tuple[EndpointDescriptor | None, ModelSet]:
    """Extract one endpoint and the schema models it references."""
    extractor = EndpointExtractor(provider, translator, config)
    endpoint = extractor.extract(base_path, method)
    return endpoint, extractor.models


__all__ = [
    "COLLECTION_NAMES",
    "EndpointExtractor",
    "extract_endpoint",
    "http_method_of",
    "parse_response",
    "roles_of",
]

"""Marker names recognized by the extractors.

Markers are matched by simple name, so ``@GET`` and ``@jaxrs.GET`` are the
same marker.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from extract.models import HttpMethod, ParameterKind

HTTP_METHOD_MARKERS: tuple[HttpMethod, ...] = (
    "GET",
    "POST",
    "PUT",
    "DELETE",
    "HEAD",
    "OPTIONS",
    "PATCH",
)

PATH = "Path"

# Request-binding markers and the parameter kind each one selects.
BINDING_MARKERS: dict[str, ParameterKind] = {
    "PathParam": "path",
    "QueryParam": "query",
    "HeaderParam": "header",
    "FormParam": "form",
    "FormDataParam": "form",
}

PERMIT_ALL = "PermitAll"
ROLES_ALLOWED = "RolesAllowed"
ANY_ROLES = "Any"

# Visibility-scope marker; its arguments name the views a member belongs to.
JSON_VIEW = "JsonView"


__all__ = [
    "ANY_ROLES",
    "BINDING_MARKERS",
    "HTTP_METHOD_MARKERS",
    "JSON_VIEW",
    "PATH",
    "PERMIT_ALL",
    "ROLES_ALLOWED",
]

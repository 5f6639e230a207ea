"""Build canonical endpoints from the ``paths`` section.

For each path + method pair :func:`build_endpoint` drives the parameter,
body, response, trait and security mappers. It works from two views of the
operation: the raw one, where trait references are still visible, and the
dereferenced one, which supplies their content. Which view feeds which
mapper matters:

* traits, headers and path parameters read the raw entries;
* the query string reads the dereferenced entries, so parameters shared
  through references are inlined there;
* the request body and path parameters fall back to the dereferenced entry
  wherever a raw entry is a reference.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from swagport.importer.body import map_request_body
from swagport.importer.jsontext import stringify
from swagport.importer.mime import (
    FORM_MIME_TYPE,
    JSON_MIME_TYPE,
    find_default_mime_type,
    without_defaults,
)
from swagport.importer.params import (
    declared_location,
    map_headers,
    map_path_params,
    map_query_string,
    resolve_entries,
)
from swagport.importer.responses import map_responses
from swagport.importer.security import map_secured_by
from swagport.importer.traits import map_endpoint_traits
from swagport.models import (
    Endpoint,
    ExternalDocs,
    HTTPMethod,
    ObjectSchema,
    ParameterLocation,
)

logger = logging.getLogger(__name__)

SUMMARY_MAX_LENGTH = 139
PATH_PARAMETERS_KEY = "parameters"
BODYLESS_METHODS = frozenset({HTTPMethod.GET, HTTPMethod.HEAD})

_NON_WORD = re.compile(r"[^A-Za-z0-9]+")


@dataclass(frozen=True)
class DocumentDefaults:
    """Document-level settings every endpoint of a pass is built against.

    Attributes:
        consumes: Default request mime types; never repeated per endpoint.
        produces: Default response mime types; never repeated per endpoint.
        security_definitions: The raw ``securityDefinitions`` map.
        known_trait_refs: Pointers to document-level trait responses.
        response_mime_type: Forces the mime type whose response example is
            kept; ``None`` uses each endpoint's preferred produces type.
    """

    consumes: tuple[str, ...] = ()
    produces: tuple[str, ...] = ()
    security_definitions: Mapping[str, Any] = field(default_factory=dict)
    known_trait_refs: frozenset[str] = frozenset()
    response_mime_type: Optional[str] = None


def derive_operation_id(method: HTTPMethod, path: str) -> str:
    """Derive an operation id from the method and path template.

    ``GET /pets/{petId}`` gives ``GET_pets_petId``.
    """
    slug = _NON_WORD.sub("_", path).strip("_")
    return f"{method.value.upper()}_{slug}" if slug else method.value.upper()


def _external_docs(value: Any) -> Optional[ExternalDocs]:
    if not isinstance(value, dict):
        return None
    return ExternalDocs(description=value.get("description"), url=value.get("url"))


def _implied_consumes(params: list[Any]) -> list[str]:
    locations = {declared_location(param) for param in params}
    implied = []
    if ParameterLocation.BODY in locations:
        implied.append(JSON_MIME_TYPE)
    if ParameterLocation.FORM_DATA in locations:
        implied.append(FORM_MIME_TYPE)
    return implied


def build_endpoint(
    path: str,
    method: HTTPMethod,
    operation: dict[str, Any],
    resolved_operation: dict[str, Any],
    path_params: ObjectSchema,
    defaults: DocumentDefaults,
) -> Endpoint:
    """Build one endpoint.

    Args:
        path: The path template, e.g. ``/pets/{petId}``.
        method: The operation's HTTP method.
        operation: The raw operation object.
        resolved_operation: The same operation from the dereferenced document.
        path_params: Path parameters declared at path level; operation-level
            declarations override them by name.
        defaults: Document-level settings.
    """
    raw_params = operation.get("parameters") or []
    resolved_params = resolved_operation.get("parameters") or []
    raw_responses = operation.get("responses") or {}

    # Must read the raw entries before anything below looks past the references.
    traits = map_endpoint_traits(raw_params, raw_responses)

    params = resolve_entries(raw_params, resolved_params)
    consumes = without_defaults(
        _implied_consumes(params) + list(operation.get("consumes") or []),
        defaults.consumes,
    )
    produces = without_defaults(operation.get("produces") or [], defaults.produces)

    body = None
    if method not in BODYLESS_METHODS:
        body = map_request_body(raw_params, resolved_params)

    response_mime_type = defaults.response_mime_type or find_default_mime_type(
        operation.get("produces") or defaults.produces
    )

    # YAML loads unquoted scalars such as ``summary: 404`` as numbers.
    summary = operation.get("summary")
    if summary is not None:
        summary = str(summary)[:SUMMARY_MAX_LENGTH]
    tags = operation.get("tags")
    operation_id = operation.get("operationId")

    return Endpoint(
        method=method,
        path=path,
        summary=summary,
        description=stringify(operation.get("description")),
        tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
        deprecated=bool(operation.get("deprecated", False)),
        operation_id=str(operation_id) if operation_id else derive_operation_id(method, path),
        external_docs=_external_docs(operation.get("externalDocs")),
        consumes=consumes,
        produces=produces,
        path_params=path_params.merged(map_path_params(raw_params, resolved_params)),
        query_string=map_query_string(resolved_params, skip_refs=True),
        headers=map_headers(raw_params, skip_refs=True),
        body=body,
        responses=map_responses(
            raw_responses,
            skip_refs=True,
            resolved=resolved_operation.get("responses"),
            known_refs=defaults.known_trait_refs,
            mime_type=response_mime_type,
        ),
        secured_by=map_secured_by(operation.get("security"), defaults.security_definitions),
        traits=traits,
    )


def map_endpoints(
    raw: dict[str, Any],
    dereferenced: dict[str, Any],
    defaults: Optional[DocumentDefaults] = None,
) -> list[Endpoint]:
    """Build an endpoint for every path + method pair of the document.

    Path-level ``parameters`` are shared by every method of the path.
    Path-item keys that are not HTTP methods (``parameters``, ``$ref``,
    ``x-`` extensions) produce no endpoint.
    """
    defaults = defaults or DocumentDefaults()
    resolved_paths = dereferenced.get("paths") or {}
    endpoints: list[Endpoint] = []

    for path, path_item in (raw.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        resolved_item = resolved_paths.get(path)
        if not isinstance(resolved_item, dict):
            resolved_item = path_item

        path_params = map_path_params(
            path_item.get(PATH_PARAMETERS_KEY), resolved_item.get(PATH_PARAMETERS_KEY)
        )

        for key, operation in path_item.items():
            if key == PATH_PARAMETERS_KEY or not isinstance(operation, dict):
                continue
            try:
                method = HTTPMethod(str(key).lower())
            except ValueError:
                logger.debug("Skipping non-operation key '%s' under %s", key, path)
                continue

            resolved_operation = resolved_item.get(key)
            if not isinstance(resolved_operation, dict):
                resolved_operation = operation

            endpoints.append(
                build_endpoint(path, method, operation, resolved_operation, path_params, defaults)
            )
    return endpoints

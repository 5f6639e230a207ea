"""Assemble a :class:`~swagport.models.Project` from a loaded document.

:func:`assemble_project` is the top of the mapping pass. It reads the
document-level sections (``info``, ``host``, ``schemes``,
``securityDefinitions``, ``parameters``/``responses`` traits,
``definitions``) and drives the endpoint builder over every path. The
mapping is synchronous and does no I/O; everything it needs was fetched by
the load phase (:mod:`swagport.parser.document`).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from swagport.importer.endpoints import DocumentDefaults, map_endpoints
from swagport.importer.jsontext import stringify
from swagport.importer.schemas import map_schemas
from swagport.importer.security import map_security_definitions
from swagport.importer.traits import known_trait_references, map_traits
from swagport.models import Contact, Environment, ExternalDocs, License, Project
from swagport.parser.document import LoadedDocument

logger = logging.getLogger(__name__)

DEFAULT_PROTOCOL = "http"


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _strings(value: Any) -> list[str]:
    return [str(item) for item in value] if isinstance(value, list) else []


def _subset(value: Any, model: type, keys: tuple[str, ...]) -> Any:
    """Build *model* from the truthy *keys* of *value*, or ``None`` if *value* is not a mapping."""
    if not isinstance(value, dict):
        return None
    return model(**{key: value[key] for key in keys if value.get(key)})


def map_environment(raw: dict[str, Any]) -> Environment:
    """Map the document-wide settings: protocols, host, defaults and metadata."""
    info = _mapping(raw.get("info"))
    protocols = _strings(raw.get("schemes"))
    protocol = protocols[0] if protocols else DEFAULT_PROTOCOL
    host = raw.get("host")

    external_docs = None
    if isinstance(raw.get("externalDocs"), dict):
        external_docs = ExternalDocs(
            description=raw["externalDocs"].get("description"),
            url=raw["externalDocs"].get("url"),
        )

    return Environment(
        protocols=protocols,
        default_protocol=protocol,
        base_path=raw.get("basePath") or "",
        host=f"{protocol}://{host}" if host else "",
        version=str(info["version"]) if info.get("version") is not None else None,
        summary=stringify(info.get("description")) or "",
        external_docs=external_docs,
        contact_info=_subset(info.get("contact"), Contact, ("name", "url", "email")),
        license=_subset(info.get("license"), License, ("name", "url")),
        terms_of_service=info.get("termsOfService") or None,
        consumes=_strings(raw.get("consumes")),
        produces=_strings(raw.get("produces")),
        security_schemes=map_security_definitions(_mapping(raw.get("securityDefinitions"))),
    )


def assemble_project(
    document: LoadedDocument, response_mime_type: Optional[str] = None
) -> Project:
    """Map a loaded document onto a finished :class:`~swagport.models.Project`.

    Args:
        document: The raw and dereferenced views produced by the load phase.
        response_mime_type: Forces which per-mime-type response example is
            kept; by default each endpoint's preferred produces type decides.

    Returns:
        The populated project. Endpoints keep path order, then method order
        within each path.

    Raises:
        DuplicateEndpointError: If two endpoints share a path and method.
    """
    raw = document.raw
    dereferenced = document.dereferenced
    info = _mapping(raw.get("info"))
    environment = map_environment(raw)

    traits = map_traits(
        _mapping(raw.get("parameters")),
        _mapping(raw.get("responses")),
        resolved_parameters=_mapping(dereferenced.get("parameters")),
        resolved_responses=_mapping(dereferenced.get("responses")),
    )
    schemas = map_schemas(_mapping(raw.get("definitions")))

    defaults = DocumentDefaults(
        consumes=tuple(environment.consumes),
        produces=tuple(environment.produces),
        security_definitions=_mapping(raw.get("securityDefinitions")),
        known_trait_refs=known_trait_references(_mapping(raw.get("responses"))),
        response_mime_type=response_mime_type,
    )

    project = Project(
        title=str(info.get("title") or ""),
        description=stringify(info.get("description")) or "",
        environment=environment,
    )
    for trait in traits:
        project.add_trait(trait)
    for schema in schemas:
        project.add_schema(schema)
    for endpoint in map_endpoints(raw, dereferenced, defaults):
        project.add_endpoint(endpoint)

    logger.info(
        "Imported '%s': %d endpoint(s), %d schema(s), %d trait(s)",
        project.title,
        len(project.endpoints),
        len(project.schemas),
        len(project.traits),
    )
    return project

"""Traits: reusable request/response fragments shared between endpoints.

Two passes live here:

* :func:`map_traits` runs once per document. It reads the document-level
  ``parameters`` and ``responses`` maps, groups entries by trait name (see
  :func:`~swagport.importer.refs.parse_trait_key`) and emits one
  :class:`~swagport.models.Trait` per name.
* :func:`map_endpoint_traits` runs per endpoint, on the *raw* parameter and
  response entries. Once the other mappers have dereferenced or skipped
  those entries the references are gone, so it has to see them first.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from swagport.importer.params import declared_location, map_headers, map_query_string
from swagport.importer.refs import (
    TraitKind,
    is_trait_reference,
    parse_trait_key,
    trait_name_from_reference,
)
from swagport.importer.responses import map_responses
from swagport.models import ParameterLocation, Trait, TraitRequest
from swagport.parser.resolver import escape_pointer_segment

logger = logging.getLogger(__name__)


def known_trait_references(responses: Optional[Mapping[str, Any]]) -> frozenset[str]:
    """Return the ``#/responses/<key>`` pointer of every document-level response."""
    return frozenset(
        f"#/responses/{escape_pointer_segment(str(key))}" for key in (responses or {})
    )


def map_traits(
    parameters: Optional[Mapping[str, Any]],
    responses: Optional[Mapping[str, Any]],
    resolved_parameters: Optional[Mapping[str, Any]] = None,
    resolved_responses: Optional[Mapping[str, Any]] = None,
) -> list[Trait]:
    """Materialise document-level traits.

    ``query`` and ``header`` parameters become the trait's query-string and
    headers schemas; responses become its response list, one per status
    code. Parameters in other locations do not form traits.

    Args:
        parameters: The document's ``parameters`` map.
        responses: The document's ``responses`` map.
        resolved_parameters: Dereferenced ``parameters``, used for entries
            that are themselves references.
        resolved_responses: Dereferenced ``responses``.

    Returns:
        One trait per distinct name: names with query parameters first,
        then names with only headers, then names with only responses, each
        group in first-seen order.
    """
    resolved_parameters = resolved_parameters or {}
    resolved_responses = resolved_responses or {}

    query_params: dict[str, list[dict[str, Any]]] = {}
    header_params: dict[str, list[dict[str, Any]]] = {}
    trait_responses: dict[str, dict[str, Any]] = {}
    resolved_trait_responses: dict[str, dict[str, Any]] = {}

    for key, param in (parameters or {}).items():
        if is_trait_reference(param):
            param = resolved_parameters.get(key, param)
        location = declared_location(param)
        if location not in (ParameterLocation.QUERY, ParameterLocation.HEADER):
            continue
        name = parse_trait_key(str(key), TraitKind.PARAMETER).name
        bucket = query_params if location is ParameterLocation.QUERY else header_params
        bucket.setdefault(name, []).append(param)

    for key, response in (responses or {}).items():
        trait_key = parse_trait_key(str(key), TraitKind.RESPONSE)
        trait_responses.setdefault(trait_key.name, {})[trait_key.code] = response
        if key in resolved_responses:
            resolved_trait_responses.setdefault(trait_key.name, {})[trait_key.code] = (
                resolved_responses[key]
            )

    names = dict.fromkeys([*query_params, *header_params, *trait_responses])
    traits = []
    for name in names:
        request = TraitRequest(
            query_string=map_query_string(query_params[name]) if name in query_params else None,
            headers=map_headers(header_params[name]) if name in header_params else None,
        )
        traits.append(
            Trait(
                id=name,
                name=name,
                request=request,
                responses=map_responses(
                    trait_responses.get(name),
                    resolved=resolved_trait_responses.get(name),
                ),
            )
        )
    logger.debug("Mapped %d document-level trait(s)", len(traits))
    return traits


def map_endpoint_traits(
    params: Optional[Sequence[Any]], responses: Optional[Mapping[Any, Any]]
) -> list[str]:
    """Return the names of the traits an endpoint references.

    Args:
        params: The operation's raw ``parameters`` list.
        responses: The operation's raw ``responses`` map.

    Returns:
        Trait names in order of first reference, without duplicates.
    """
    entries = list(params or []) + list((responses or {}).values())
    names: list[str] = []
    seen: set[str] = set()
    for entry in entries:
        if not is_trait_reference(entry):
            continue
        name = trait_name_from_reference(entry["$ref"])
        if name not in seen:
            seen.add(name)
            names.append(name)
    return names

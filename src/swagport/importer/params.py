"""Map Swagger parameter lists onto object-shaped field schemas.

Each mapper takes a list of raw parameter entries and produces an
:class:`~swagport.models.ObjectSchema` for one location: the parameter
``name`` becomes a property, the parameter's schema-like fields become the
property's field schema, and required names are listed in order without
duplicates. Entries declared for another location are ignored.

Path parameters are always required: a URL template cannot omit a segment,
whatever the source says.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Optional, Sequence

from swagport.importer.refs import is_trait_reference
from swagport.models import ObjectSchema, ParameterLocation

logger = logging.getLogger(__name__)

# Parameter Object fields that describe the value itself.
PARAMETER_FIELDS = (
    "type",
    "format",
    "description",
    "default",
    "enum",
    "items",
    "collectionFormat",
    "allowEmptyValue",
    "maximum",
    "exclusiveMaximum",
    "minimum",
    "exclusiveMinimum",
    "maxLength",
    "minLength",
    "pattern",
    "maxItems",
    "minItems",
    "uniqueItems",
    "multipleOf",
)


def declared_location(param: Any) -> Optional[ParameterLocation]:
    """Return the parameter's ``in`` value as a :class:`ParameterLocation`.

    ``None`` when the entry is not a mapping, declares no location, or
    declares one Swagger 2.0 does not know.
    """
    if not isinstance(param, dict) or "in" not in param:
        return None
    try:
        return ParameterLocation(param["in"])
    except ValueError:
        logger.debug(
            "Ignoring parameter '%s' with unknown location %r",
            param.get("name"),
            param["in"],
        )
        return None


def field_schema(param: dict[str, Any]) -> dict[str, Any]:
    """Copy the value-describing fields of *param* into a new field schema."""
    return {
        key: copy.deepcopy(param[key]) for key in PARAMETER_FIELDS if key in param
    }


def resolve_entries(
    params: Optional[Sequence[Any]], resolved: Optional[Sequence[Any]]
) -> list[Any]:
    """Replace trait references in *params* with their dereferenced counterparts.

    Counterparts are matched by position. References without a counterpart
    are kept as they are.
    """
    entries = list(params or [])
    counterparts = list(resolved or [])
    return [
        counterparts[index]
        if is_trait_reference(entry) and index < len(counterparts)
        else entry
        for index, entry in enumerate(entries)
    ]


def _map_location(
    params: Sequence[Any],
    location: ParameterLocation,
    allow_undeclared: bool,
    skip_refs: bool,
    always_required: bool = False,
) -> ObjectSchema:
    schema = ObjectSchema()
    for param in params:
        if not isinstance(param, dict):
            continue
        if is_trait_reference(param):
            if not skip_refs:
                logger.debug("Unresolved parameter reference %s ignored", param["$ref"])
            continue

        declared = declared_location(param)
        if declared is not location and not (allow_undeclared and "in" not in param):
            continue

        name = param.get("name")
        if not name:
            logger.debug("Ignoring %s parameter without a name", location.value)
            continue
        schema.add_property(
            name, field_schema(param), always_required or bool(param.get("required"))
        )
    return schema


def map_query_string(
    params: Optional[Sequence[Any]], skip_refs: bool = False
) -> ObjectSchema:
    """Build the query-string schema from ``query`` parameters.

    Entries that declare no location at all are treated as query parameters.

    Args:
        params: Parameter entries, raw or dereferenced.
        skip_refs: Silently skip entries that are still trait references.
    """
    return _map_location(
        params or [], ParameterLocation.QUERY, allow_undeclared=True, skip_refs=skip_refs
    )


def map_headers(params: Optional[Sequence[Any]], skip_refs: bool = False) -> ObjectSchema:
    """Build the headers schema from ``header`` parameters."""
    return _map_location(
        params or [], ParameterLocation.HEADER, allow_undeclared=False, skip_refs=skip_refs
    )


def map_path_params(
    params: Optional[Sequence[Any]], resolved: Optional[Sequence[Any]] = None
) -> ObjectSchema:
    """Build the path-parameters schema from ``path`` parameters.

    Args:
        params: Raw parameter entries.
        resolved: The dereferenced counterpart of *params*; an entry that is
            still a trait reference is replaced by the entry at the same
            position here.

    Every matched parameter is listed as required.
    """
    return _map_location(
        resolve_entries(params, resolved),
        ParameterLocation.PATH,
        allow_undeclared=True,
        skip_refs=True,
        always_required=True,
    )

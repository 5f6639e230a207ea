"""Build the canonical request body from ``body`` and ``formData`` parameters."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from swagport.importer.jsontext import hoist_example, stringify
from swagport.importer.params import declared_location, field_schema, resolve_entries
from swagport.models import ParameterLocation, RequestBody

BODY_LOCATIONS = (ParameterLocation.BODY, ParameterLocation.FORM_DATA)


def map_request_body(
    params: Optional[Sequence[Any]], resolved: Optional[Sequence[Any]] = None
) -> Optional[RequestBody]:
    """Map an operation's parameters onto a :class:`~swagport.models.RequestBody`.

    A ``body`` parameter contributes its schema verbatim, minus a top-level
    ``example`` which moves to :attr:`RequestBody.example`. Each ``formData``
    parameter becomes one property of the body, listed as required when the
    parameter is. An empty ``required`` list is dropped. The last non-empty
    description among these parameters describes the body.

    Args:
        params: Raw parameter entries of the operation.
        resolved: Their dereferenced counterparts, used for trait references.

    Returns:
        ``None`` when no parameter is located in the body or form data.
    """
    located = [
        (param, location)
        for param, location in (
            (entry, declared_location(entry)) for entry in resolve_entries(params, resolved)
        )
        if location in BODY_LOCATIONS
    ]
    if not located:
        return None

    body: dict[str, Any] = {"properties": {}, "required": []}
    example = ""
    description: Optional[str] = None

    for param, location in located:
        if location is ParameterLocation.BODY:
            schema = param.get("schema")
            body, hoisted = hoist_example(schema if isinstance(schema, dict) else {})
            if hoisted is not None:
                example = hoisted
        else:
            name = param.get("name")
            if not name:
                continue
            body.setdefault("properties", {})[name] = field_schema(param)
            if param.get("required"):
                required = body.setdefault("required", [])
                if name not in required:
                    required.append(name)

        if param.get("description"):
            description = stringify(param["description"])

    if "required" in body and not body["required"]:
        del body["required"]

    return RequestBody(body=body, example=example, description=description)

"""Map an operation's per-status-code response map onto canonical responses.

Responses that point at document-level trait responses are left out: traits
are materialised once on the project and attached to endpoints by name (see
:mod:`swagport.importer.traits`), not inlined into every endpoint.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Collection, Mapping, Optional

from swagport.importer.jsontext import EXAMPLE_INDENT, stringify
from swagport.importer.mime import find_default_mime_type
from swagport.importer.refs import TRAIT_PREFIX, is_trait_reference
from swagport.models import Response

logger = logging.getLogger(__name__)


def _counterpart(resolved: Optional[Mapping[Any, Any]], code: Any) -> Optional[dict[str, Any]]:
    if not resolved:
        return None
    # YAML may load status codes as integers on one side only.
    entry = resolved.get(code, resolved.get(str(code)))
    return entry if isinstance(entry, dict) else None


def _is_mime_keyed(examples: Any) -> bool:
    return (
        isinstance(examples, dict)
        and bool(examples)
        and all(isinstance(key, str) and "/" in key for key in examples)
    )


def select_example(examples: Any, mime_type: Optional[str] = None) -> str:
    """Render a response's ``examples`` as text.

    A mapping keyed by mime type keeps a single example: the one for
    *mime_type* when present, otherwise the one for the preferred mime type
    among its keys (``application/json``, else the first). Any other value,
    including a mapping whose keys are not all mime types, is rendered whole.
    """
    if not _is_mime_keyed(examples):
        return stringify(examples, EXAMPLE_INDENT) or ""
    selected = mime_type if mime_type in examples else find_default_mime_type(examples)
    if selected is None:
        return ""
    return stringify(examples[selected], EXAMPLE_INDENT) or ""


def is_skipped_trait_response(entry: Any, known_refs: Collection[str]) -> bool:
    """True for a trait reference that names a trait or a known trait response."""
    if not is_trait_reference(entry):
        return False
    ref = entry["$ref"]
    return TRAIT_PREFIX in ref or ref in known_refs


def map_responses(
    responses: Optional[Mapping[Any, Any]],
    skip_refs: bool = False,
    resolved: Optional[Mapping[Any, Any]] = None,
    known_refs: Collection[str] = (),
    mime_type: Optional[str] = None,
) -> list[Response]:
    """Build one :class:`~swagport.models.Response` per status code.

    Args:
        responses: The raw ``responses`` map, keyed by status code.
        skip_refs: Leave out entries referencing trait responses.
        resolved: The dereferenced counterpart of *responses*. When an entry
            or its schema is still a trait reference, body and description
            come from here.
        known_refs: ``$ref`` strings of document-level trait responses.
        mime_type: Mime type whose example is kept when examples are given
            per mime type.

    Returns:
        The responses in source order, each with a single status code.
    """
    result: list[Response] = []
    for code, entry in (responses or {}).items():
        if not isinstance(entry, dict):
            continue
        if skip_refs and is_skipped_trait_response(entry, known_refs):
            continue

        counterpart = _counterpart(resolved, code)
        source = entry
        if is_trait_reference(entry) or is_trait_reference(entry.get("schema")):
            if counterpart is None:
                logger.debug("No dereferenced response for status %s; body left empty", code)
            else:
                source = counterpart

        schema = source.get("schema")
        body = copy.deepcopy(schema) if isinstance(schema, dict) else {}

        example = ""
        if source.get("examples"):
            example = select_example(source["examples"], mime_type)

        result.append(
            Response(
                codes=[str(code)],
                body=body,
                example=example,
                description=stringify(source.get("description") or entry.get("description")),
            )
        )
    return result

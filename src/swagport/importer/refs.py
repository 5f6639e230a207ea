"""Trait references and the ``trait:`` key naming convention.

A Swagger document marks reusable request/response fragments ("traits") in
two ways:

* an operation points at a document-level entry with a reference such as
  ``{"$ref": "#/parameters/trait:paged:limit"}`` or
  ``{"$ref": "#/responses/trait:errors:404"}``;
* the document-level entries themselves are keyed ``trait:<name>[:...]``
  under ``parameters`` and ``trait:<name>:<code>`` under ``responses``.

:func:`is_trait_reference` is the only place that decides whether a value is
such a reference; the other mappers ask it instead of inspecting ``$ref``
strings. :func:`parse_trait_key` and :func:`trait_name_from_reference` turn
the naming convention into a :class:`TraitKey`.
"""

from __future__ import annotations

import enum
import re
from typing import Any, NamedTuple, Optional

from swagport.parser.resolver import pointer_segments

TRAIT_PREFIX = "trait"
DEFAULT_TRAIT_RESPONSE_CODE = "200"

_TRAIT_SECTION = re.compile(r"/(parameters|responses)/", re.IGNORECASE)


class TraitKind(str, enum.Enum):
    """Which document-level section a trait fragment lives in."""

    PARAMETER = "parameter"
    RESPONSE = "response"


class TraitKey(NamedTuple):
    """A parsed trait key: ``trait:paged:limit`` -> ``(PARAMETER, "paged", None)``."""

    kind: TraitKind
    name: str
    code: Optional[str] = None


def is_trait_reference(value: Any) -> bool:
    """Return True if *value* is a ``$ref`` into a ``parameters`` or ``responses`` section."""
    if not isinstance(value, dict):
        return False
    ref = value.get("$ref")
    return isinstance(ref, str) and _TRAIT_SECTION.search(ref) is not None


def parse_trait_key(key: str, kind: TraitKind) -> TraitKey:
    """Parse a document-level ``parameters``/``responses`` key.

    Parameter keys name the trait in their second part (``trait:<name>:...``).
    Response keys only carry a name and a status code in the exact
    three-part form ``trait:<name>:<code>``. Keys that do not follow the
    convention are used verbatim as the trait name; response keys then
    default to code ``200``.
    """
    parts = key.split(":")
    if kind is TraitKind.PARAMETER:
        if parts[0] == TRAIT_PREFIX and len(parts) > 1 and parts[1]:
            return TraitKey(kind, parts[1])
        return TraitKey(kind, key)

    if len(parts) == 3 and parts[0] == TRAIT_PREFIX:
        return TraitKey(kind, parts[1], parts[2])
    return TraitKey(kind, key, DEFAULT_TRAIT_RESPONSE_CODE)


def trait_name_from_reference(ref: str) -> str:
    """Return the trait name carried by the last segment of *ref*.

    ``#/parameters/trait:paged:limit`` gives ``paged``;
    ``#/responses/notFound`` gives ``notFound``.
    """
    last = pointer_segments(ref)[-1]
    parts = last.split(":")
    if parts[0] == TRAIT_PREFIX and len(parts) > 1:
        return parts[1]
    return parts[0]

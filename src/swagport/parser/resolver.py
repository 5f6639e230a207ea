"""Dereference internal ``$ref`` pointers in Swagger documents.

Swagger 2.0 documents share definitions through JSON References such as
``{"$ref": "#/definitions/Pet"}`` or ``{"$ref": "#/parameters/trait:paged:limit"}``.
The importer needs two views of the same document: the raw one, where those
pointers still tell it *what* was reused, and a dereferenced copy where every
pointer has been replaced by its target. This module builds the second view.

Only **internal** references (``#/...``) are supported; anything else raises
:class:`~swagport.exceptions.SpecParseError`, which aborts the load phase.

A pointer that leads back into itself (a recursive schema such as a tree
node) is left as a ``$ref`` dict at the point where the cycle closes.
"""

from __future__ import annotations

import copy
from typing import Any

from swagport.exceptions import SpecParseError


def pointer_segments(ref: str) -> list[str]:
    """Split an internal JSON pointer into unescaped segments.

    ``"#/parameters/trait:paged:limit"`` gives ``["parameters",
    "trait:paged:limit"]``; ``~1`` and ``~0`` are decoded per RFC 6901.

    Raises:
        SpecParseError: If *ref* is not an internal (``#/``) pointer.
    """
    if not ref.startswith("#/"):
        raise SpecParseError(
            f"External $ref not supported: {ref}. "
            "Only internal references (#/...) are handled."
        )
    return [
        segment.replace("~1", "/").replace("~0", "~")
        for segment in ref[2:].split("/")
    ]


def escape_pointer_segment(segment: str) -> str:
    """Encode *segment* for use inside a JSON pointer."""
    return segment.replace("~", "~0").replace("/", "~1")


def resolve_refs(spec: dict[str, Any]) -> dict[str, Any]:
    """Return a dereferenced deep copy of *spec*.

    Every ``{"$ref": "#/..."}`` dict is replaced with the object it points
    to, recursively. The input is never modified.

    Args:
        spec: The raw Swagger document as returned by
            :func:`~swagport.parser.loader.load_spec`.

    Returns:
        A new dictionary with all resolvable pointers inlined.

    Raises:
        SpecParseError: If a pointer is external or leads nowhere.

    Example::

        raw = load_spec("petstore.yaml")
        resolved = resolve_refs(raw)
        # resolved["paths"]["/pets"]["get"]["parameters"][0] is now the
        # parameter object rather than {"$ref": "#/parameters/limit"}.
    """
    root = copy.deepcopy(spec)
    return _deep_resolve(root, root, frozenset())


def lookup_pointer(ref: str, root: dict[str, Any]) -> Any:
    """Return the value *ref* points to inside *root*.

    Raises:
        SpecParseError: If the pointer is external, or any segment does not
            exist in the document.
    """
    current: Any = root
    for segment in pointer_segments(ref):
        if isinstance(current, dict):
            if segment not in current:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': "
                    f"key '{segment}' not found at path"
                )
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': "
                    f"invalid array index '{segment}'"
                ) from exc
        else:
            raise SpecParseError(
                f"Cannot resolve $ref '{ref}': "
                f"cannot navigate into {type(current).__name__}"
            )
    return current


def _deep_resolve(obj: Any, root: dict[str, Any], active: frozenset[str]) -> Any:
    """Recursively inline pointers within *obj*.

    *active* holds the pointers currently being expanded on this branch; a
    pointer met again while active is a cycle and stays unresolved. Sibling
    branches each get their own set.
    """
    if isinstance(obj, dict):
        ref = obj.get("$ref")
        if isinstance(ref, str):
            if ref in active:
                return obj
            target = lookup_pointer(ref, root)
            return _deep_resolve(target, root, active | {ref})
        return {key: _deep_resolve(value, root, active) for key, value in obj.items()}

    if isinstance(obj, list):
        return [_deep_resolve(item, root, active) for item in obj]

    return obj

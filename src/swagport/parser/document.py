"""The load phase: fetch, parse, version-check and dereference a document.

The importer maps from two views of one Swagger document. The raw view keeps
internal ``$ref`` pointers, which is how trait reuse is detected; the
dereferenced view supplies the content behind those pointers. Both are built
here, once per conversion pass, before any mapping starts. Every failure in
this phase raises :class:`~swagport.exceptions.SpecParseError` (or
:class:`~swagport.exceptions.ConnectionError_` for unreachable URLs), so no
partially imported project can exist.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any

from swagport.parser.loader import (
    DEFAULT_TIMEOUT,
    aload_spec,
    load_spec,
    load_spec_text,
    validate_swagger_version,
)
from swagport.parser.resolver import resolve_refs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedDocument:
    """A loaded Swagger document in its raw and dereferenced forms.

    Attributes:
        raw: The parsed document, internal references intact (or the
            dereferenced copy when loaded with ``expand=True``).
        dereferenced: A copy with every internal reference inlined.
        version: The validated ``swagger`` version string.
    """

    raw: dict[str, Any]
    dereferenced: dict[str, Any]
    version: str = "2.0"


def prepare_document(spec: dict[str, Any], expand: bool = False) -> LoadedDocument:
    """Validate and dereference an already parsed document.

    Args:
        spec: The parsed document dictionary. It is not modified.
        expand: Map the dereferenced view in place of the raw one, so that
            every reference (traits included) ends up inlined.

    Raises:
        SpecParseError: If the version is unsupported or a reference cannot
            be resolved.
    """
    version = validate_swagger_version(spec)
    dereferenced = resolve_refs(spec)
    raw = copy.deepcopy(dereferenced) if expand else copy.deepcopy(spec)
    logger.debug(
        "Prepared Swagger %s document with %d path(s)%s",
        version,
        len(raw.get("paths") or {}),
        " (expanded)" if expand else "",
    )
    return LoadedDocument(raw=raw, dereferenced=dereferenced, version=version)


def load_document(
    source: str, expand: bool = False, timeout: float = DEFAULT_TIMEOUT
) -> LoadedDocument:
    """Load *source* (URL, path or ``-``) and prepare both views of it."""
    return prepare_document(load_spec(source, timeout=timeout), expand=expand)


def load_document_text(text: str, expand: bool = False) -> LoadedDocument:
    """Parse JSON or YAML *text* and prepare both views of it."""
    return prepare_document(load_spec_text(text), expand=expand)


async def aload_document(
    source: str, expand: bool = False, timeout: float = DEFAULT_TIMEOUT
) -> LoadedDocument:
    """Coroutine counterpart of :func:`load_document`."""
    spec = await aload_spec(source, timeout=timeout)
    return prepare_document(spec, expand=expand)

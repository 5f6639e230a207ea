"""Mime-type list helpers shared by the endpoint and response mappers."""

from __future__ import annotations

from typing import Iterable, Optional

JSON_MIME_TYPE = "application/json"
FORM_MIME_TYPE = "multipart/form-data"


def find_default_mime_type(mime_types: Optional[Iterable[str]]) -> Optional[str]:
    """Pick the preferred mime type: ``application/json`` if listed, else the first."""
    candidates = list(mime_types or [])
    if not candidates:
        return None
    if JSON_MIME_TYPE in candidates:
        return JSON_MIME_TYPE
    return candidates[0]


def without_defaults(
    mime_types: Iterable[str], defaults: Optional[Iterable[str]]
) -> list[str]:
    """Deduplicate *mime_types* in order, dropping any document-level default."""
    excluded = set(defaults or [])
    result: list[str] = []
    for mime_type in mime_types:
        if mime_type in excluded:
            continue
        excluded.add(mime_type)
        result.append(mime_type)
    return result

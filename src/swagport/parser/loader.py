"""Load Swagger documents from a URL, local file, stdin, or raw text.

This module handles all I/O for fetching raw Swagger 2.0 documents and
converting them into Python dictionaries.  It supports both JSON and YAML
formats with automatic format detection, and validates that the document
declares the supported ``swagger: "2.0"`` version.

The public functions are:

* :func:`load_spec` -- Load and parse a document from any supported source.
* :func:`aload_spec` -- Coroutine counterpart of :func:`load_spec`.
* :func:`load_spec_text` -- Parse a document already held in memory.
* :func:`validate_swagger_version` -- Check and return the ``swagger``
  version string, rejecting OpenAPI 3.x and unknown versions.

After loading, the raw dict should be passed to
:func:`~swagport.parser.document.load_document` (or
:func:`~swagport.parser.resolver.resolve_refs` directly) to produce the
dereferenced counterpart the importer maps from.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from swagport.exceptions import ConnectionError_, SpecParseError

DEFAULT_TIMEOUT = 30.0


def load_spec(source: str, timeout: float = DEFAULT_TIMEOUT) -> dict[str, Any]:
    """Load a Swagger document from URL, file path, or stdin ('-').

    Supports JSON and YAML formats.
    Auto-detects format from content/extension.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.
        timeout: Timeout in seconds for remote documents.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SpecParseError: If the source cannot be read or parsed.
        ConnectionError_: If a remote document cannot be reached.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source, timeout)
    else:
        return _load_from_file(source)


async def aload_spec(source: str, timeout: float = DEFAULT_TIMEOUT) -> dict[str, Any]:
    """Load a Swagger document without blocking the running event loop.

    URLs are fetched with :class:`httpx.AsyncClient`; files and stdin are
    read in a worker thread.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.
        timeout: Timeout in seconds for remote documents.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SpecParseError: If the source cannot be read or parsed.
        ConnectionError_: If a remote document cannot be reached.
    """
    if not source.startswith(("http://", "https://")):
        return await asyncio.to_thread(load_spec, source, timeout)

    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            response = await client.get(source)
            response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching document from {source}"
        ) from exc
    except httpx.RequestError as exc:
        raise ConnectionError_(f"Failed to fetch document from {source}: {exc}") from exc

    return _parse_content(response.text, hint=_hint_from_content_type(response))


def load_spec_text(content: str) -> dict[str, Any]:
    """Parse a document held in memory as JSON, falling back to YAML.

    Raises:
        SpecParseError: If *content* is blank or cannot be parsed.
    """
    if not content.strip():
        raise SpecParseError("Document is empty")
    return _parse_content(content)


def _load_from_stdin() -> dict[str, Any]:
    """Read a document from stdin.

    Reads all available input and attempts to parse as JSON, then YAML.

    Raises:
        SpecParseError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str, timeout: float = DEFAULT_TIMEOUT) -> dict[str, Any]:
    """Fetch a document from URL. Supports JSON and YAML responses.

    Args:
        url: The HTTP(S) URL to fetch.
        timeout: Request timeout in seconds.

    Raises:
        SpecParseError: If the server answers with an error status or the
            content cannot be parsed.
        ConnectionError_: If the URL cannot be reached at all.
    """
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise ConnectionError_(f"Failed to fetch document from {url}: {exc}") from exc

    return _parse_content(response.text, hint=_hint_from_content_type(response))


def _hint_from_content_type(response: httpx.Response) -> str:
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        return "json"
    if "yaml" in content_type or "yml" in content_type:
        return "yaml"
    return ""


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a document from a local file.

    Supports .json, .yaml, and .yml extensions. Falls back to content-based
    detection if the extension is not recognized.

    Raises:
        SpecParseError: If the file cannot be read or content cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Document not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read document {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Document is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    Valid JSON is also valid YAML, but JSON parsing is stricter and faster.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Raises:
        SpecParseError: If the content cannot be parsed as either format, or
            does not decode to a mapping.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
            if not isinstance(result, dict):
                raise SpecParseError(
                    "Document must be a JSON/YAML object (got "
                    f"{type(result).__name__})"
                )
            return result
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc

    try:
        result = yaml.safe_load(content)
        if not isinstance(result, dict):
            raise SpecParseError(
                "Document must be a JSON/YAML object (got "
                f"{type(result).__name__ if result is not None else 'empty document'})"
            )
        return result
    except yaml.YAMLError as exc:
        yaml_error = exc

    msg = "Failed to parse document as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise SpecParseError(msg)


def validate_swagger_version(spec: dict[str, Any]) -> str:
    """Validate and return the Swagger version string.

    Only Swagger 2.0 documents are accepted.

    Args:
        spec: The parsed document dictionary.

    Returns:
        The version string (``"2.0"``).

    Raises:
        SpecParseError: If the version is missing, belongs to OpenAPI 3.x,
            or is any other unsupported value.
    """
    if "openapi" in spec:
        raise SpecParseError(
            f"OpenAPI {spec['openapi']} is not supported. "
            "Only Swagger 2.0 documents can be imported."
        )

    swagger_version = spec.get("swagger")
    if swagger_version is None:
        raise SpecParseError(
            "Missing 'swagger' field. Is this a Swagger 2.0 document?"
        )

    version_str = str(swagger_version)
    if version_str in ("2", "2.0"):
        return "2.0"

    raise SpecParseError(
        f"Unsupported Swagger version: {version_str}. "
        "Only Swagger 2.0 is supported."
    )

"""Swagger document parser -- load, version-check and dereference.

This sub-package is the load phase of a conversion pass: it turns a Swagger
2.0 document (JSON or YAML, local file, remote URL, stdin or in-memory text)
into a :class:`~swagport.parser.document.LoadedDocument` holding the raw and
the dereferenced views that the importer maps from.

Typical usage::

    from swagport.parser import load_document

    document = load_document("https://petstore.swagger.io/v2/swagger.json")
    document.raw["paths"]           # references intact
    document.dereferenced["paths"]  # references inlined

Sub-modules:

* :mod:`~swagport.parser.loader` -- I/O layer (URL, file, stdin, text) plus
  format detection and Swagger version validation.
* :mod:`~swagport.parser.resolver` -- Recursive ``$ref`` resolution with
  circular-reference detection.
* :mod:`~swagport.parser.document` -- Combines the two into the load phase.
"""

from swagport.parser.document import (
    LoadedDocument,
    aload_document,
    load_document,
    load_document_text,
    prepare_document,
)
from swagport.parser.loader import load_spec, validate_swagger_version

__all__ = [
    "LoadedDocument",
    "aload_document",
    "load_document",
    "load_document_text",
    "prepare_document",
    "load_spec",
    "validate_swagger_version",
]

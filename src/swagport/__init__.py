"""swagport -- Import Swagger 2.0 documents into a canonical API model.

This package loads a Swagger 2.0 description (JSON or YAML, local file, URL or
stdin), dereferences it, and maps it onto a format-agnostic
:class:`~swagport.models.Project`: endpoints, schemas, reusable traits and
security schemes. Downstream exporters render the project into other
description formats.

Typical workflow::

    swagport -o petstore.project.json convert petstore.yaml
    swagport inspect endpoints petstore.yaml

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models for the canonical project and configuration.
    config: XDG-aware layered configuration.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    parser: Document loading, version checks and ``$ref`` resolution.
    importer: Mapping of a loaded document onto the canonical project.
"""

__version__ = "0.3.0"

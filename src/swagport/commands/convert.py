"""Convert command -- import a Swagger document and print its project.

Also provides :func:`load_project`, the shared "resolve config, load,
import" step used by the ``inspect`` commands.
"""

from __future__ import annotations

from typing import Optional

import typer

from swagport.exceptions import SwagportError
from swagport.models import Project
from swagport.output import debug, error, format_data, success, warning


def load_project(
    source: str,
    expand: Optional[bool] = None,
    response_mime_type: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Project:
    """Resolve the effective config, then load and import *source*.

    Raises:
        typer.Exit: With the error's exit code when config resolution,
            loading, or importing fails.
    """
    from swagport.config import resolve_config
    from swagport.importer import SwaggerImporter

    try:
        config = resolve_config(
            cli_expand=expand,
            cli_response_mime_type=response_mime_type,
            cli_timeout=timeout,
        )
        debug(f"Loading document from {source}")
        importer = SwaggerImporter(config.importer)
        importer.load_file(source)
        return importer.import_project()
    except SwagportError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def convert_command(
    source: str = typer.Argument(
        help="Swagger 2.0 document: file path, URL, or '-' for stdin."
    ),
    expand: Optional[bool] = typer.Option(
        None,
        "--expand/--no-expand",
        help="Inline every reference, traits included.",
    ),
    response_mime_type: Optional[str] = typer.Option(
        None,
        "--response-mime-type",
        help="Keep the response example declared for this mime type.",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Timeout in seconds for remote documents."
    ),
) -> None:
    """Convert a Swagger 2.0 document into the canonical project JSON.

    Example::

        swagport convert petstore.yaml
        swagport -o petstore.json convert https://petstore.swagger.io/v2/swagger.json
    """
    project = load_project(source, expand, response_mime_type, timeout)
    if not project.endpoints:
        warning(f"No endpoints found in {source}")
    format_data(project.to_dict())
    success(
        f"Converted '{project.title}': {len(project.endpoints)} endpoint(s), "
        f"{len(project.schemas)} schema(s), {len(project.traits)} trait(s)"
    )

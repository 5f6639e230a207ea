"""Inspect commands -- summarise what a document imports to.

Provides the ``swagport inspect`` sub-command group with read-only views
of an imported project: endpoints, schemas, traits and security schemes.
Each command loads and imports the document, then prints a table (or JSON
records with ``--json``).
"""

from __future__ import annotations

import typer

from swagport.commands.convert import load_project
from swagport.output import get_output, info


inspect_app = typer.Typer(no_args_is_help=True)

SOURCE_ARGUMENT = typer.Argument(
    help="Swagger 2.0 document: file path, URL, or '-' for stdin."
)


@inspect_app.command("endpoints")
def inspect_endpoints(source: str = SOURCE_ARGUMENT) -> None:
    """List every endpoint with its operation id, traits and security.

    Example::

        swagport inspect endpoints petstore.yaml
    """
    project = load_project(source)
    rows = [
        [
            endpoint.method.value.upper(),
            endpoint.path,
            endpoint.operation_id,
            ", ".join(endpoint.traits) or "-",
            ", ".join(sorted(endpoint.secured_by)),
            "Yes" if endpoint.deprecated else "",
        ]
        for endpoint in project.endpoints
    ]
    get_output().print_table(
        ["Method", "Path", "Operation", "Traits", "Secured by", "Deprecated"],
        rows,
        title=f"{project.title} -- Endpoints ({len(rows)})",
    )


@inspect_app.command("schemas")
def inspect_schemas(source: str = SOURCE_ARGUMENT) -> None:
    """List the named schemas with their type and first properties."""
    project = load_project(source)
    if not project.schemas:
        info("No schemas defined in this document.")
        return

    rows: list[list[str]] = []
    for schema in project.schemas:
        prop_names = list(schema.definition.get("properties") or {})
        props = ", ".join(prop_names[:5])
        if len(prop_names) > 5:
            props += "..."
        rows.append([schema.name, str(schema.definition.get("type", "object")), props])

    get_output().print_table(
        ["Schema", "Type", "Properties"],
        rows,
        title=f"{project.title} -- Schemas ({len(rows)})",
    )


@inspect_app.command("traits")
def inspect_traits(source: str = SOURCE_ARGUMENT) -> None:
    """List the document-level traits and what each contributes."""
    project = load_project(source)
    if not project.traits:
        info("No traits defined in this document.")
        return

    rows = []
    for trait in project.traits:
        query = trait.request.query_string
        headers = trait.request.headers
        rows.append([
            trait.name,
            ", ".join(query.properties) if query else "-",
            ", ".join(headers.properties) if headers else "-",
            ", ".join(code for response in trait.responses for code in response.codes) or "-",
        ])

    get_output().print_table(
        ["Trait", "Query", "Headers", "Responses"],
        rows,
        title=f"{project.title} -- Traits ({len(rows)})",
    )


@inspect_app.command("security")
def inspect_security(source: str = SOURCE_ARGUMENT) -> None:
    """List the security schemes by type."""
    project = load_project(source)
    schemes = project.environment.security_schemes

    rows: list[list[str]] = []
    if schemes.api_key:
        for credential in schemes.api_key.headers:
            rows.append([credential.external_name, "apiKey", f"header: {credential.name}"])
        for credential in schemes.api_key.query_string:
            rows.append([credential.external_name, "apiKey", f"query: {credential.name}"])
    if schemes.oauth2:
        scopes = ", ".join(scope.name for scope in schemes.oauth2.scopes or [])
        rows.append([schemes.oauth2.name, "oauth2", scopes or "-"])
    if schemes.basic:
        rows.append([schemes.basic.name, "basic", schemes.basic.description or "-"])

    if not rows:
        info("No security schemes defined in this document.")
        return

    get_output().print_table(
        ["Name", "Type", "Details"],
        rows,
        title=f"{project.title} -- Security schemes ({len(rows)})",
    )

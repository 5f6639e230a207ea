"""Canonical Pydantic models shared across all swagport modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into two groups:

**Configuration models** -- serialised as JSON in the user's config directory
or in a project-local ``swagport.json``:
    :class:`ImportConfig`, :class:`OutputConfig` and :class:`GlobalConfig`.

**Canonical project models** -- produced by the Swagger importer and consumed
by downstream exporters:
    :class:`HTTPMethod`, :class:`ParameterLocation`,
    :class:`SecuritySchemeType`, :class:`ObjectSchema`, :class:`RequestBody`,
    :class:`Response`, :class:`Endpoint`, :class:`Schema`,
    :class:`TraitRequest`, :class:`Trait`, the security scheme records, and
    the :class:`Environment` / :class:`Project` aggregate.

Canonical models serialise with camelCase aliases
(``model_dump(by_alias=True)``) and accept their snake_case field names on
construction. Every field starts from an explicit empty default so that a
sparse source document always yields a complete value.
"""

from __future__ import annotations

import enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from swagport.exceptions import DuplicateEndpointError


# --- Configuration ---


class ImportConfig(BaseModel):
    """Settings that influence how a document is loaded and mapped."""

    expand: bool = Field(
        default=False,
        description="Map the fully dereferenced document instead of the raw one",
    )
    response_mime_type: Optional[str] = Field(
        default=None,
        description="Mime type whose example is kept when responses declare "
        "examples per mime type (defaults to the endpoint's preferred produces type)",
    )
    timeout: float = Field(
        default=30.0, description="Timeout in seconds for fetching remote documents"
    )


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: Literal["auto", "json", "plain", "rich"] = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )
    indent: int = Field(default=2, description="Indent of the emitted project JSON")


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/swagport/config.json``.

    Loaded and saved by :func:`~swagport.config.load_global_config` and
    :func:`~swagport.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by project config, environment
    variables, or CLI flags. See :func:`~swagport.config.resolve_config`
    for the full precedence chain.
    """

    importer: ImportConfig = Field(default_factory=ImportConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Enumerations ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by Swagger 2.0 path-item objects."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"


class ParameterLocation(str, enum.Enum):
    """Locations where a Swagger 2.0 parameter can appear, per its ``in`` field."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    FORM_DATA = "formData"
    BODY = "body"


class SecuritySchemeType(str, enum.Enum):
    """Security scheme types defined by Swagger 2.0 ``securityDefinitions``."""

    API_KEY = "apiKey"
    OAUTH2 = "oauth2"
    BASIC = "basic"


# --- Canonical project ---


class CanonicalModel(BaseModel):
    """Base for canonical models: camelCase aliases, snake_case construction."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ObjectSchema(CanonicalModel):
    """An object-typed schema built from a set of parameters.

    Used for path parameters, query strings and headers. ``properties`` maps
    the parameter name to its field schema; ``required`` lists the names that
    must be supplied, in declaration order and without duplicates.
    """

    type: str = "object"
    properties: dict[str, dict[str, Any]] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)

    def add_property(self, name: str, field_schema: dict[str, Any], required: bool) -> None:
        """Register *name*, keeping ``required`` free of duplicates."""
        self.properties[name] = field_schema
        if required and name not in self.required:
            self.required.append(name)

    def merged(self, other: ObjectSchema) -> ObjectSchema:
        """Return a new schema where *other*'s properties override this one's."""
        required = list(self.required)
        required.extend(name for name in other.required if name not in required)
        return ObjectSchema(
            properties={**self.properties, **other.properties},
            required=required,
        )


class RequestBody(CanonicalModel):
    """Request body built from ``body`` or ``formData`` parameters."""

    body: dict[str, Any] = Field(default_factory=dict)
    example: str = ""
    description: Optional[str] = None


class Response(CanonicalModel):
    """A response body declared for one status code.

    ``codes`` is a list so that exporters may group several status codes
    sharing one body; the importer always emits a single code.
    """

    codes: list[str] = Field(default_factory=list)
    body: dict[str, Any] = Field(default_factory=dict)
    example: str = ""
    description: Optional[str] = None


class ExternalDocs(CanonicalModel):
    """A link to external documentation."""

    description: Optional[str] = None
    url: Optional[str] = None


class Contact(CanonicalModel):
    """Contact information from the document's ``info.contact`` object."""

    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None


class License(CanonicalModel):
    """License information from the document's ``info.license`` object."""

    name: Optional[str] = None
    url: Optional[str] = None


class Endpoint(CanonicalModel):
    """A single canonical endpoint (one URL path + HTTP method pair)."""

    method: HTTPMethod
    path: str
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    deprecated: bool = False
    operation_id: str = ""
    external_docs: Optional[ExternalDocs] = None
    consumes: list[str] = Field(default_factory=list)
    produces: list[str] = Field(default_factory=list)
    path_params: ObjectSchema = Field(default_factory=ObjectSchema)
    query_string: ObjectSchema = Field(default_factory=ObjectSchema)
    headers: ObjectSchema = Field(default_factory=ObjectSchema)
    body: Optional[RequestBody] = None
    responses: list[Response] = Field(default_factory=list)
    secured_by: dict[str, Union[bool, list[str]]] = Field(
        default_factory=lambda: {"none": True},
        description="Scheme type -> True, or the oauth2 scope list",
    )
    traits: list[str] = Field(default_factory=list)


class Schema(CanonicalModel):
    """A named schema definition with extensions stripped and example hoisted."""

    name: str
    definition: dict[str, Any] = Field(default_factory=dict)
    example: Optional[str] = None


class TraitRequest(CanonicalModel):
    """The request half of a trait: query string and/or headers."""

    query_string: Optional[ObjectSchema] = None
    headers: Optional[ObjectSchema] = None


class Trait(CanonicalModel):
    """A reusable request/response fragment referenced by several endpoints."""

    id: str = Field(alias="_id")
    name: str
    request: TraitRequest = Field(default_factory=TraitRequest)
    responses: list[Response] = Field(default_factory=list)


class ApiKeyCredential(CanonicalModel):
    """One ``apiKey`` security definition."""

    external_name: str
    name: Optional[str] = None
    value: str = ""
    description: Optional[str] = None


class ApiKeySchemes(CanonicalModel):
    """``apiKey`` definitions bucketed by where the key is sent."""

    headers: list[ApiKeyCredential] = Field(default_factory=list)
    query_string: list[ApiKeyCredential] = Field(default_factory=list)


class OAuth2Scope(CanonicalModel):
    """One oauth2 scope: its name and human-readable description."""

    name: str
    value: Optional[str] = None


class OAuth2Scheme(CanonicalModel):
    """The document's oauth2 security definition."""

    name: str
    authorization_url: str = ""
    token_url: str = ""
    flow: Optional[str] = None
    scopes: Optional[list[OAuth2Scope]] = None


class BasicScheme(CanonicalModel):
    """The document's HTTP basic security definition."""

    name: str
    value: str = ""
    description: str = ""


class SecuritySchemes(CanonicalModel):
    """Security definitions grouped by scheme type."""

    api_key: Optional[ApiKeySchemes] = None
    oauth2: Optional[OAuth2Scheme] = None
    basic: Optional[BasicScheme] = None


class Environment(CanonicalModel):
    """Document-wide settings shared by every endpoint of a project."""

    protocols: list[str] = Field(default_factory=list)
    default_protocol: str = "http"
    base_path: str = ""
    host: str = ""
    version: Optional[str] = None
    summary: str = ""
    external_docs: Optional[ExternalDocs] = None
    contact_info: Optional[Contact] = None
    license: Optional[License] = None
    terms_of_service: Optional[str] = None
    consumes: list[str] = Field(default_factory=list)
    produces: list[str] = Field(default_factory=list)
    security_schemes: SecuritySchemes = Field(default_factory=SecuritySchemes)


class Project(CanonicalModel):
    """Complete canonical representation of an imported API description.

    Produced by :func:`~swagport.importer.project.assemble_project` and
    handed to exporters as a finished value. ``(path, method)`` pairs are
    unique across :attr:`endpoints`.

    See Also:
        :class:`Endpoint`: Individual endpoint within the project.
        :class:`Environment`: Document-wide settings.
    """

    title: str = ""
    description: str = ""
    environment: Environment = Field(default_factory=Environment)
    endpoints: list[Endpoint] = Field(default_factory=list)
    schemas: list[Schema] = Field(default_factory=list)
    traits: list[Trait] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_endpoints(self) -> Project:
        seen: set[tuple[str, HTTPMethod]] = set()
        for endpoint in self.endpoints:
            key = (endpoint.path, endpoint.method)
            if key in seen:
                raise DuplicateEndpointError(
                    f"Duplicate endpoint: {endpoint.method.value.upper()} {endpoint.path}"
                )
            seen.add(key)
        return self

    def add_endpoint(self, endpoint: Endpoint) -> None:
        """Append *endpoint*, rejecting a second endpoint for the same path and method.

        Raises:
            DuplicateEndpointError: If the pair is already registered.
        """
        if self.find_endpoint(endpoint.method, endpoint.path) is not None:
            raise DuplicateEndpointError(
                f"Duplicate endpoint: {endpoint.method.value.upper()} {endpoint.path}"
            )
        self.endpoints.append(endpoint)

    def add_schema(self, schema: Schema) -> None:
        """Append a named schema definition."""
        self.schemas.append(schema)

    def add_trait(self, trait: Trait) -> None:
        self.traits.append(trait)

    def find_endpoint(self, method: Union[HTTPMethod, str], path: str) -> Optional[Endpoint]:
        """Return the endpoint registered for *method* and *path*, if any."""
        method = HTTPMethod(method.lower() if isinstance(method, str) else method)
        for endpoint in self.endpoints:
            if endpoint.method == method and endpoint.path == path:
                return endpoint
        return None

    def find_trait(self, name: str) -> Optional[Trait]:
        """Return the trait named *name*, if any."""
        for trait in self.traits:
            if trait.name == name:
                return trait
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialise the project with camelCase keys, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

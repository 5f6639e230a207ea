"""Tests for swagport.importer.project against the petstore fixture."""

from __future__ import annotations

from typing import Any

import pytest

from swagport.exceptions import DuplicateEndpointError
from swagport.importer.project import assemble_project, map_environment
from swagport.models import Endpoint, HTTPMethod, Project, Schema, Trait
from swagport.parser.document import prepare_document


class TestMapEnvironment:
    def test_petstore_environment(self, petstore_project: Project) -> None:
        env = petstore_project.environment
        assert env.protocols == ["https", "http"]
        assert env.default_protocol == "https"
        assert env.host == "https://petstore.swagger.io"
        assert env.base_path == "/v1"
        assert env.version == "1.0.0"
        assert env.summary == "A sample pet store."
        assert env.terms_of_service == "http://swagger.io/terms/"
        assert env.contact_info.name == "API Team"
        assert env.contact_info.email == "apiteam@swagger.io"
        assert env.contact_info.url is None
        assert env.license.name == "MIT"
        assert env.external_docs.url == "http://swagger.io"
        assert env.consumes == ["application/json"]
        assert env.produces == ["application/json"]

    def test_defaults_for_sparse_document(self) -> None:
        env = map_environment({"swagger": "2.0"})
        assert env.protocols == []
        assert env.default_protocol == "http"
        assert env.host == ""
        assert env.base_path == ""
        assert env.version is None
        assert env.contact_info is None

    def test_host_uses_default_protocol(self) -> None:
        assert map_environment({"host": "api.example.com"}).host == "http://api.example.com"

    def test_security_schemes(self, petstore_project: Project) -> None:
        schemes = petstore_project.environment.security_schemes
        assert [c.name for c in schemes.api_key.headers] == ["X-API-Key"]
        assert [c.external_name for c in schemes.api_key.query_string] == ["query_key"]
        assert schemes.oauth2.name == "petstore_auth"
        assert schemes.oauth2.flow == "implicit"
        assert schemes.basic is None


class TestPetstoreProject:
    def test_project_metadata(self, petstore_project: Project) -> None:
        assert petstore_project.title == "Swagger Petstore"
        assert petstore_project.description == "A sample pet store."

    def test_endpoint_order(self, petstore_project: Project) -> None:
        assert [(e.method.value, e.path) for e in petstore_project.endpoints] == [
            ("get", "/pets"),
            ("post", "/pets"),
            ("get", "/pets/{petId}"),
            ("put", "/pets/{petId}"),
            ("delete", "/pets/{petId}"),
        ]

    def test_list_pets(self, petstore_project: Project) -> None:
        endpoint = petstore_project.find_endpoint("GET", "/pets")

        assert endpoint.operation_id == "listPets"
        assert endpoint.traits == ["paged", "tracked", "errors"]
        assert list(endpoint.query_string.properties) == ["limit", "offset", "status"]
        assert endpoint.query_string.required == ["status"]
        assert list(endpoint.headers.properties) == ["X-Trace"]
        assert endpoint.body is None
        assert endpoint.consumes == []
        assert endpoint.produces == []
        assert endpoint.secured_by == {"oauth2": ["read:pets"]}

        assert len(endpoint.responses) == 1
        ok = endpoint.responses[0]
        assert ok.codes == ["200"]
        assert ok.body == {"type": "array", "items": {"$ref": "#/definitions/Pet"}}
        assert ok.example == '[\n    {\n        "id": 1,\n        "name": "Rex"\n    }\n]'

    def test_create_pet(self, petstore_project: Project) -> None:
        endpoint = petstore_project.find_endpoint(HTTPMethod.POST, "/pets")

        assert endpoint.operation_id == "POST_pets"
        assert endpoint.consumes == ["application/xml"]
        assert endpoint.body.body == {"$ref": "#/definitions/NewPet"}
        assert endpoint.body.description == "Pet to add"
        assert endpoint.secured_by == {"apiKey": True}
        assert [r.codes for r in endpoint.responses] == [["201"]]
        assert endpoint.traits == ["errors"]

    def test_show_pet_uses_path_level_parameters(self, petstore_project: Project) -> None:
        endpoint = petstore_project.find_endpoint("get", "/pets/{petId}")
        assert endpoint.path_params.properties == {
            "petId": {"type": "string", "description": "The id of the pet"}
        }
        assert endpoint.path_params.required == ["petId"]
        assert endpoint.secured_by == {"none": True}
        assert endpoint.traits == ["errors"]

    def test_update_pet(self, petstore_project: Project) -> None:
        endpoint = petstore_project.find_endpoint("put", "/pets/{petId}")

        assert endpoint.deprecated is True
        assert endpoint.path_params.properties["petId"]["description"] == "Overridden id"
        assert endpoint.path_params.required == ["petId"]
        assert endpoint.consumes == ["multipart/form-data"]
        assert endpoint.produces == ["application/xml"]
        assert endpoint.body.body == {
            "properties": {
                "name": {"type": "string", "description": "New name"},
                "photo": {"type": "file", "description": "New photo"},
            },
            "required": ["name"],
        }
        assert endpoint.body.description == "New photo"

    def test_delete_pet(self, petstore_project: Project) -> None:
        endpoint = petstore_project.find_endpoint("delete", "/pets/{petId}")
        assert endpoint.operation_id == "DELETE_pets_petId"
        assert endpoint.body is None
        assert endpoint.responses[0].codes == ["204"]
        assert endpoint.responses[0].body == {}

    def test_traits(self, petstore_project: Project) -> None:
        assert [t.name for t in petstore_project.traits] == ["paged", "tracked", "errors"]

        paged = petstore_project.find_trait("paged")
        assert list(paged.request.query_string.properties) == ["limit", "offset"]
        assert paged.request.query_string.required == []

        tracked = petstore_project.find_trait("tracked")
        assert tracked.request.headers.required == ["X-Request-Id"]

        errors = petstore_project.find_trait("errors")
        assert [r.codes for r in errors.responses] == [["404"], ["500"]]
        assert errors.responses[0].description == "Not found"

    def test_schemas(self, petstore_project: Project) -> None:
        assert [s.name for s in petstore_project.schemas] == ["Pet", "PetInput", "Error"]
        pet = petstore_project.schemas[0]
        assert "x-internal" not in pet.definition
        assert "example" not in pet.definition
        assert pet.example == '{\n    "id": 1,\n    "name": "Rex"\n}'

    def test_no_endpoint_repeats_document_defaults(self, petstore_project: Project) -> None:
        env = petstore_project.environment
        for endpoint in petstore_project.endpoints:
            assert not set(endpoint.consumes) & set(env.consumes)
            assert not set(endpoint.produces) & set(env.produces)

    def test_serialises_with_camel_case(self, petstore_project: Project) -> None:
        data = petstore_project.to_dict()
        endpoint = data["endpoints"][0]
        assert endpoint["operationId"] == "listPets"
        assert endpoint["securedBy"] == {"oauth2": ["read:pets"]}
        assert "queryString" in endpoint
        assert "pathParams" in endpoint
        assert data["environment"]["basePath"] == "/v1"
        assert data["environment"]["securitySchemes"]["apiKey"]["queryString"][0]["externalName"] == "query_key"
        assert data["traits"][0]["_id"] == "paged"
        assert "body" not in endpoint


class TestExpandedProject:
    def test_expand_inlines_traits(self, petstore_raw: dict[str, Any]) -> None:
        project = assemble_project(prepare_document(petstore_raw, expand=True))
        endpoint = project.find_endpoint("get", "/pets")

        assert endpoint.traits == []
        assert list(endpoint.headers.properties) == ["X-Request-Id", "X-Trace"]
        assert [r.codes for r in endpoint.responses] == [["200"], ["404"]]


class TestProjectInvariants:
    def test_duplicate_endpoint_is_rejected(self) -> None:
        project = Project()
        project.add_endpoint(Endpoint(method=HTTPMethod.GET, path="/a"))
        with pytest.raises(DuplicateEndpointError, match="GET /a"):
            project.add_endpoint(Endpoint(method=HTTPMethod.GET, path="/a"))

    def test_duplicate_endpoints_fail_validation(self) -> None:
        endpoint = Endpoint(method=HTTPMethod.GET, path="/a")
        with pytest.raises(DuplicateEndpointError):
            Project(endpoints=[endpoint, endpoint])

    def test_same_path_different_method_is_allowed(self) -> None:
        project = Project()
        project.add_endpoint(Endpoint(method=HTTPMethod.GET, path="/a"))
        project.add_endpoint(Endpoint(method=HTTPMethod.POST, path="/a"))
        assert len(project.endpoints) == 2

    def test_registered_traits_and_schemas_are_findable(self) -> None:
        project = Project()
        project.add_trait(Trait(id="paged", name="paged"))
        project.add_schema(Schema(name="Pet"))
        assert project.find_trait("paged") is project.traits[0]
        assert [schema.name for schema in project.schemas] == ["Pet"]

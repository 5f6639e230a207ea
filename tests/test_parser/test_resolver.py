"""Tests for swagport.parser.resolver."""

from __future__ import annotations

import copy

import pytest

from swagport.exceptions import SpecParseError
from swagport.parser.resolver import (
    escape_pointer_segment,
    lookup_pointer,
    pointer_segments,
    resolve_refs,
)


# ---------------------------------------------------------------------------
# resolve_refs (top-level)
# ---------------------------------------------------------------------------


class TestResolveRefs:
    """Test the top-level resolve_refs function."""

    def test_resolves_definition_ref(self) -> None:
        spec = {
            "definitions": {"Pet": {"type": "object"}},
            "paths": {
                "/pets": {
                    "get": {"responses": {"200": {"schema": {"$ref": "#/definitions/Pet"}}}}
                }
            },
        }
        resolved = resolve_refs(spec)
        schema = resolved["paths"]["/pets"]["get"]["responses"]["200"]["schema"]
        assert schema == {"type": "object"}

    def test_resolves_trait_parameter_keys_with_colons(self) -> None:
        spec = {
            "parameters": {"trait:paged:limit": {"name": "limit", "in": "query"}},
            "paths": {
                "/pets": {"get": {"parameters": [{"$ref": "#/parameters/trait:paged:limit"}]}}
            },
        }
        resolved = resolve_refs(spec)
        assert resolved["paths"]["/pets"]["get"]["parameters"] == [
            {"name": "limit", "in": "query"}
        ]

    def test_does_not_mutate_original(self) -> None:
        spec = {
            "definitions": {"Pet": {"type": "object"}},
            "paths": {"/p": {"get": {"responses": {"200": {"schema": {"$ref": "#/definitions/Pet"}}}}}},
        }
        original = copy.deepcopy(spec)
        resolve_refs(spec)
        assert spec == original

    def test_resolves_nested_chains(self) -> None:
        spec = {
            "definitions": {
                "Owner": {"type": "object", "properties": {"pet": {"$ref": "#/definitions/Pet"}}},
                "Pet": {"type": "string"},
            },
            "root": {"$ref": "#/definitions/Owner"},
        }
        resolved = resolve_refs(spec)
        assert resolved["root"]["properties"]["pet"] == {"type": "string"}

    def test_circular_ref_is_left_in_place(self) -> None:
        spec = {
            "definitions": {
                "Node": {
                    "type": "object",
                    "properties": {"child": {"$ref": "#/definitions/Node"}},
                }
            },
        }
        resolved = resolve_refs(spec)
        child = resolved["definitions"]["Node"]["properties"]["child"]
        assert child["properties"]["child"] == {"$ref": "#/definitions/Node"}

    def test_sibling_refs_to_same_target_both_resolve(self) -> None:
        spec = {
            "definitions": {"Pet": {"type": "object"}},
            "pair": [{"$ref": "#/definitions/Pet"}, {"$ref": "#/definitions/Pet"}],
        }
        assert resolve_refs(spec)["pair"] == [{"type": "object"}, {"type": "object"}]

    def test_missing_target_raises(self) -> None:
        spec = {"root": {"$ref": "#/definitions/Missing"}}
        with pytest.raises(SpecParseError, match="Cannot resolve"):
            resolve_refs(spec)

    def test_external_ref_raises(self) -> None:
        spec = {"root": {"$ref": "other.json#/definitions/Pet"}}
        with pytest.raises(SpecParseError, match="External \\$ref not supported"):
            resolve_refs(spec)


# ---------------------------------------------------------------------------
# Pointer helpers
# ---------------------------------------------------------------------------


class TestPointers:
    def test_segments_are_unescaped(self) -> None:
        assert pointer_segments("#/paths/~1pets~1{id}/a~0b") == ["paths", "/pets/{id}", "a~b"]

    def test_escape_reverses_unescape(self) -> None:
        assert escape_pointer_segment("/pets/{id}") == "~1pets~1{id}"
        assert escape_pointer_segment("a~b") == "a~0b"

    def test_lookup_into_list(self) -> None:
        root = {"items": [{"a": 1}, {"a": 2}]}
        assert lookup_pointer("#/items/1", root) == {"a": 2}

    def test_lookup_invalid_index_raises(self) -> None:
        with pytest.raises(SpecParseError, match="invalid array index"):
            lookup_pointer("#/items/9", {"items": []})

    def test_lookup_into_scalar_raises(self) -> None:
        with pytest.raises(SpecParseError, match="cannot navigate into str"):
            lookup_pointer("#/a/b", {"a": "text"})

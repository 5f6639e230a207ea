"""Tests for swagport.parser.loader."""

from __future__ import annotations

import asyncio
import io
import json
import textwrap
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from swagport.exceptions import ConnectionError_, SpecParseError
from swagport.parser.loader import (
    _load_from_file,
    _load_from_stdin,
    _load_from_url,
    _parse_content,
    aload_spec,
    load_spec,
    load_spec_text,
    validate_swagger_version,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def _response(status_code: int = 200, **kwargs) -> httpx.Response:
    return httpx.Response(
        status_code=status_code,
        request=httpx.Request("GET", "https://example.com/swagger.json"),
        **kwargs,
    )


# ---------------------------------------------------------------------------
# load_spec dispatch
# ---------------------------------------------------------------------------


class TestLoadSpec:
    """Test load_spec dispatcher routes to the correct loader."""

    def test_loads_from_file_json(self) -> None:
        result = load_spec(str(FIXTURES_DIR / "petstore_2.0.json"))
        assert result["swagger"] == "2.0"
        assert result["info"]["title"] == "Swagger Petstore"

    def test_loads_from_file_yaml(self) -> None:
        result = load_spec(str(FIXTURES_DIR / "minimal_2.0.yaml"))
        assert result["info"]["title"] == "Minimal API"
        # YAML loads unquoted status codes as integers.
        assert 200 in result["paths"]["/health"]["get"]["responses"]

    def test_loads_from_stdin(self) -> None:
        doc = json.dumps({"swagger": "2.0", "info": {"title": "stdin test", "version": "1.0"}})
        with patch("swagport.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(doc)
            result = load_spec("-")
        assert result["info"]["title"] == "stdin test"

    def test_loads_from_url(self) -> None:
        doc = {"swagger": "2.0", "info": {"title": "URL test", "version": "1.0"}}
        with patch("swagport.parser.loader.httpx.get", return_value=_response(json=doc)) as mock_get:
            result = load_spec("https://example.com/swagger.json", timeout=5.0)
        assert result["info"]["title"] == "URL test"
        assert mock_get.call_args.kwargs["timeout"] == 5.0


# ---------------------------------------------------------------------------
# load_spec_text
# ---------------------------------------------------------------------------


class TestLoadSpecText:
    def test_parses_json_text(self) -> None:
        assert load_spec_text('{"swagger": "2.0"}') == {"swagger": "2.0"}

    def test_parses_yaml_text(self) -> None:
        result = load_spec_text("swagger: '2.0'\ninfo:\n  title: Y\n")
        assert result["info"]["title"] == "Y"

    def test_blank_text_raises(self) -> None:
        with pytest.raises(SpecParseError, match="empty"):
            load_spec_text("  \n ")


# ---------------------------------------------------------------------------
# _load_from_file
# ---------------------------------------------------------------------------


class TestLoadFromFile:
    """Test loading documents from local files."""

    def test_file_not_found_raises(self) -> None:
        with pytest.raises(SpecParseError, match="not found"):
            _load_from_file("/nonexistent/path/to/swagger.json")

    def test_empty_file_raises(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.json"
        empty.write_text("", encoding="utf-8")
        with pytest.raises(SpecParseError, match="empty"):
            _load_from_file(str(empty))

    def test_invalid_json_file_raises(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{invalid json", encoding="utf-8")
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            _load_from_file(str(bad))

    def test_non_object_json_raises(self, tmp_path: Path) -> None:
        array_file = tmp_path / "array.json"
        array_file.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(SpecParseError, match="must be a JSON/YAML object"):
            _load_from_file(str(array_file))

    def test_unknown_extension_detects_yaml(self, tmp_path: Path) -> None:
        doc = tmp_path / "swagger.txt"
        doc.write_text(
            textwrap.dedent("""\
                swagger: "2.0"
                info:
                  title: Detected
            """),
            encoding="utf-8",
        )
        assert _load_from_file(str(doc))["info"]["title"] == "Detected"


# ---------------------------------------------------------------------------
# _load_from_stdin
# ---------------------------------------------------------------------------


class TestLoadFromStdin:
    def test_reads_yaml_from_stdin(self) -> None:
        with patch("swagport.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("swagger: '2.0'\ninfo:\n  title: YAML stdin\n")
            result = _load_from_stdin()
        assert result["info"]["title"] == "YAML stdin"

    def test_empty_stdin_raises(self) -> None:
        with patch("swagport.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("   \n\t\n  ")
            with pytest.raises(SpecParseError, match="No input"):
                _load_from_stdin()


# ---------------------------------------------------------------------------
# _load_from_url
# ---------------------------------------------------------------------------


class TestLoadFromUrl:
    """Test loading documents from URLs."""

    def test_loads_yaml_from_url(self) -> None:
        response = _response(
            text="swagger: '2.0'\ninfo:\n  title: Remote YAML\n",
            headers={"content-type": "application/x-yaml"},
        )
        with patch("swagport.parser.loader.httpx.get", return_value=response):
            result = _load_from_url("https://example.com/swagger.yaml")
        assert result["info"]["title"] == "Remote YAML"

    def test_http_error_raises_parse_error(self) -> None:
        with patch("swagport.parser.loader.httpx.get", return_value=_response(404, text="nope")):
            with pytest.raises(SpecParseError, match="HTTP 404"):
                _load_from_url("https://example.com/swagger.json")

    def test_connection_failure_raises_connection_error(self) -> None:
        with patch(
            "swagport.parser.loader.httpx.get",
            side_effect=httpx.ConnectError("refused"),
        ):
            with pytest.raises(ConnectionError_, match="Failed to fetch"):
                _load_from_url("https://example.com/swagger.json")


# ---------------------------------------------------------------------------
# aload_spec
# ---------------------------------------------------------------------------


class TestAloadSpec:
    """Test the coroutine loader."""

    def test_loads_file(self) -> None:
        result = asyncio.run(aload_spec(str(FIXTURES_DIR / "petstore_2.0.json")))
        assert result["host"] == "petstore.swagger.io"

    def test_loads_url_with_async_client(self) -> None:
        doc = {"swagger": "2.0", "info": {"title": "Async", "version": "1"}}
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=doc))
        real_client = httpx.AsyncClient

        with patch(
            "swagport.parser.loader.httpx.AsyncClient",
            lambda **kwargs: real_client(transport=transport, **kwargs),
        ):
            result = asyncio.run(aload_spec("https://example.com/swagger.json"))
        assert result["info"]["title"] == "Async"

    def test_url_error_status_raises(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
        real_client = httpx.AsyncClient

        with patch(
            "swagport.parser.loader.httpx.AsyncClient",
            lambda **kwargs: real_client(transport=transport, **kwargs),
        ):
            with pytest.raises(SpecParseError, match="HTTP 500"):
                asyncio.run(aload_spec("https://example.com/swagger.json"))


# ---------------------------------------------------------------------------
# _parse_content
# ---------------------------------------------------------------------------


class TestParseContent:
    def test_json_hint_rejects_yaml(self) -> None:
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            _parse_content("swagger: '2.0'", hint="json")

    def test_empty_yaml_document_raises(self) -> None:
        with pytest.raises(SpecParseError, match="empty document"):
            _parse_content("# only a comment\n", hint="yaml")

    def test_unparseable_content_reports_both_errors(self) -> None:
        with pytest.raises(SpecParseError, match="JSON error") as exc_info:
            _parse_content("key: [unclosed")
        assert "YAML error" in str(exc_info.value)


# ---------------------------------------------------------------------------
# validate_swagger_version
# ---------------------------------------------------------------------------


class TestValidateSwaggerVersion:
    @pytest.mark.parametrize("version", ["2.0", "2", 2.0])
    def test_accepts_swagger_2(self, version) -> None:
        assert validate_swagger_version({"swagger": version}) == "2.0"

    def test_rejects_openapi_3(self) -> None:
        with pytest.raises(SpecParseError, match="OpenAPI 3.0.3 is not supported"):
            validate_swagger_version({"openapi": "3.0.3"})

    def test_rejects_missing_version(self) -> None:
        with pytest.raises(SpecParseError, match="Missing 'swagger' field"):
            validate_swagger_version({"info": {}})

    def test_rejects_other_versions(self) -> None:
        with pytest.raises(SpecParseError, match="Unsupported Swagger version: 1.2"):
            validate_swagger_version({"swagger": "1.2"})

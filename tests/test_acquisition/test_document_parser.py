"""Tests for swagkit.acquisition.parser."""

from __future__ import annotations

import textwrap

import pytest

from swagkit.acquisition.parser import is_yaml_source, parse_document
from swagkit.exceptions import DocumentParseError


class TestIsYamlSource:
    @pytest.mark.parametrize(
        "source",
        [
            "swagger.yaml",
            "swagger.yml",
            "docs/Swagger.YAML",
            "https://example.com/swagger.yaml",
            "https://example.com/swagger.yml?token=abc",
        ],
    )
    def test_yaml_extensions(self, source: str) -> None:
        assert is_yaml_source(source) is True

    @pytest.mark.parametrize(
        "source",
        [
            "swagger.json",
            "api-docs",
            "https://example.com/api-docs",
            "https://example.com/api?format=.yaml",
            "swagger.yaml.json",
        ],
    )
    def test_everything_else_is_json(self, source: str) -> None:
        assert is_yaml_source(source) is False


class TestParseDocument:
    def test_none_passes_through(self) -> None:
        assert parse_document(None, "swagger.json") is None

    def test_json(self) -> None:
        result = parse_document('{"swagger": "2.0", "paths": {}}', "swagger.json")
        assert result == {"swagger": "2.0", "paths": {}}

    def test_json_without_extension(self) -> None:
        assert parse_document('{"swaggerVersion": "1.2"}', "https://example.com/api-docs") == {
            "swaggerVersion": "1.2"
        }

    def test_yaml(self) -> None:
        raw = textwrap.dedent("""\
            swagger: "2.0"
            info:
              title: YAML Test
              version: "1.0.0"
        """)
        result = parse_document(raw, "swagger.yaml")
        assert result["swagger"] == "2.0"
        assert result["info"]["title"] == "YAML Test"

    def test_yaml_content_under_json_name_fails(self) -> None:
        with pytest.raises(DocumentParseError, match="Invalid JSON in swagger.json"):
            parse_document("swagger: '2.0'\n", "swagger.json")

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(DocumentParseError, match="Invalid JSON in broken.json"):
            parse_document("{not json", "broken.json")

    def test_invalid_yaml_raises(self) -> None:
        with pytest.raises(DocumentParseError, match="Invalid YAML in broken.yaml"):
            parse_document("key: [unclosed\n", "broken.yaml")

    def test_empty_yaml_is_empty_dict(self) -> None:
        assert parse_document("", "empty.yml") == {}

    def test_html_error_page_fails_to_parse(self) -> None:
        with pytest.raises(DocumentParseError):
            parse_document("<html>404 Not Found</html>", "https://example.com/api.json")

"""Tests for swagkit.acquisition.orchestrator.

Remote sources are served by :class:`httpx.MockTransport` with async
handlers so that completion order can be shuffled with ``asyncio.sleep``.
"""

from __future__ import annotations

import asyncio
import json
import random
from pathlib import Path

import httpx
import pytest

from swagkit.acquisition import acquire, acquire_documents
from swagkit.exceptions import (
    DocumentParseError,
    FetchError,
    UnknownSchemaVersionError,
)
from swagkit.models import CurrentGeneration, LegacyGeneration, ToolConfig

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"
PETSTORE_12_DIR = FIXTURES_DIR / "petstore_1.2"

BASE_URL = "https://docs.example.com"


def _routes_transport(routes: dict[str, tuple[float, int, str]]) -> httpx.MockTransport:
    """MockTransport serving ``path -> (delay, status, body)``."""

    async def handler(request: httpx.Request) -> httpx.Response:
        delay, status, body = routes[request.url.path]
        await asyncio.sleep(delay)
        return httpx.Response(status, text=body)

    return httpx.MockTransport(handler)


class TestLocalSources:
    def test_legacy_fixture_set(self) -> None:
        sources = [
            str(PETSTORE_12_DIR / "api-docs.json"),
            str(PETSTORE_12_DIR / "pet.json"),
            str(PETSTORE_12_DIR / "store.json"),
        ]
        result = acquire(sources)

        assert isinstance(result, LegacyGeneration)
        assert result.sources == sources
        assert [d["resourcePath"] for d in result.api_declarations] == ["/pet", "/store"]

    def test_current_fixture_yaml(self) -> None:
        result = acquire([str(FIXTURES_DIR / "petstore_2.0.yaml")])
        assert isinstance(result, CurrentGeneration)
        assert result.swagger_object["info"]["title"] == "Swagger Petstore"

    def test_none_sources_are_skipped(self) -> None:
        result = acquire(
            [str(PETSTORE_12_DIR / "api-docs.json"), None, str(PETSTORE_12_DIR / "pet.json")]
        )
        assert isinstance(result, LegacyGeneration)
        assert len(result.api_declarations) == 1

    def test_no_sources(self) -> None:
        with pytest.raises(UnknownSchemaVersionError):
            acquire([])


class TestConcurrentFetch:
    def test_results_keep_input_order(self) -> None:
        count = 8
        routes = {"/api-docs": (random.uniform(0, 0.03), 200, json.dumps({"swaggerVersion": "1.2"}))}
        for i in range(count):
            routes[f"/decl-{i}.json"] = (
                random.uniform(0, 0.03),
                200,
                json.dumps({"resourcePath": f"/r{i}"}),
            )
        sources = [f"{BASE_URL}/api-docs"] + [f"{BASE_URL}/decl-{i}.json" for i in range(count)]

        result = acquire(sources, transport=_routes_transport(routes))

        assert [d["resourcePath"] for d in result.api_declarations] == [
            f"/r{i}" for i in range(count)
        ]
        assert result.declaration_sources == sources[1:]

    def test_reverse_completion_order(self) -> None:
        routes = {
            "/api-docs": (0.05, 200, json.dumps({"swaggerVersion": "1.2"})),
            "/a.json": (0.03, 200, json.dumps({"resourcePath": "/a"})),
            "/b.json": (0.0, 200, json.dumps({"resourcePath": "/b"})),
        }
        sources = [f"{BASE_URL}/api-docs", f"{BASE_URL}/a.json", f"{BASE_URL}/b.json"]

        result = acquire(sources, transport=_routes_transport(routes))

        assert result.resource_listing == {"swaggerVersion": "1.2"}
        assert [d["resourcePath"] for d in result.api_declarations] == ["/a", "/b"]

    def test_mixed_local_and_remote(self) -> None:
        routes = {"/pet.json": (0.0, 200, (PETSTORE_12_DIR / "pet.json").read_text(encoding="utf-8"))}
        sources = [str(PETSTORE_12_DIR / "api-docs.json"), f"{BASE_URL}/pet.json"]

        result = acquire(sources, transport=_routes_transport(routes))

        assert isinstance(result, LegacyGeneration)
        assert result.api_declarations[0]["resourcePath"] == "/pet"

    def test_remote_yaml_by_extension(self) -> None:
        routes = {"/swagger.yaml": (0.0, 200, 'swagger: "2.0"\npaths: {}\n')}
        result = acquire([f"{BASE_URL}/swagger.yaml"], transport=_routes_transport(routes))
        assert isinstance(result, CurrentGeneration)


class TestFailures:
    def test_lowest_index_failure_wins(self) -> None:
        # index 1 fails late, index 2 fails early; index 1 must be reported
        calls: list[str] = []

        async def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            if request.url.path == "/slow-bad.json":
                await asyncio.sleep(0.05)
                return httpx.Response(200, text="{not json")
            raise httpx.ConnectError("refused", request=request)

        sources = [
            str(PETSTORE_12_DIR / "api-docs.json"),
            f"{BASE_URL}/slow-bad.json",
            f"{BASE_URL}/fast-bad.json",
        ]
        with pytest.raises(DocumentParseError, match="slow-bad.json"):
            acquire(sources, transport=httpx.MockTransport(handler))
        assert sorted(calls) == ["/fast-bad.json", "/slow-bad.json"]

    def test_failure_does_not_cancel_siblings(self, tmp_path: Path) -> None:
        finished: list[str] = []

        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0.05)
            finished.append(request.url.path)
            return httpx.Response(200, text="{}")

        sources = [
            str(PETSTORE_12_DIR / "api-docs.json"),
            str(tmp_path / "missing.json"),
            f"{BASE_URL}/slow.json",
        ]
        with pytest.raises(FetchError, match="File not found"):
            acquire(sources, transport=httpx.MockTransport(handler))
        assert finished == ["/slow.json"]

    def test_http_error_body_fails_at_parse(self) -> None:
        routes = {"/api-docs.json": (0.0, 404, "Not Found")}
        with pytest.raises(DocumentParseError, match="Invalid JSON"):
            acquire([f"{BASE_URL}/api-docs.json"], transport=_routes_transport(routes))

    def test_unrecognised_root(self) -> None:
        routes = {"/openapi.json": (0.0, 200, json.dumps({"openapi": "3.0.0"}))}
        with pytest.raises(UnknownSchemaVersionError, match="openapi.json"):
            acquire([f"{BASE_URL}/openapi.json"], transport=_routes_transport(routes))


class TestClientSettings:
    def test_user_agent_header(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers["User-Agent"])
            return httpx.Response(200, json={"swagger": "2.0"})

        config = ToolConfig(user_agent="swagkit-tests/1.0")
        acquire([f"{BASE_URL}/swagger.json"], config, httpx.MockTransport(handler))

        assert seen == ["swagkit-tests/1.0"]

    def test_default_user_agent_names_the_tool(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers["User-Agent"])
            return httpx.Response(200, json={"swagger": "2.0"})

        acquire([f"{BASE_URL}/swagger.json"], transport=httpx.MockTransport(handler))

        assert seen[0].startswith("swagkit/")

    def test_follows_redirects(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old.json":
                return httpx.Response(301, headers={"Location": f"{BASE_URL}/new.json"})
            return httpx.Response(200, json={"swagger": "2.0"})

        result = acquire([f"{BASE_URL}/old.json"], transport=httpx.MockTransport(handler))
        assert isinstance(result, CurrentGeneration)

    def test_async_entry_point(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"swaggerVersion": "1.2", "apis": []})

        result = asyncio.run(
            acquire_documents([f"{BASE_URL}/api-docs"], transport=httpx.MockTransport(handler))
        )
        assert isinstance(result, LegacyGeneration)

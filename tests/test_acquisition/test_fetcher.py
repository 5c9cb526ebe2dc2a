"""Tests for swagkit.acquisition.fetcher."""

from __future__ import annotations

import asyncio
from pathlib import Path

import httpx
import pytest

from swagkit.acquisition.fetcher import fetch_source, is_remote
from swagkit.exceptions import FetchError


def _fetch(source, handler=None) -> str | None:
    """Run fetch_source against a MockTransport-backed client."""

    def _default(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="{}")

    async def _run():
        transport = httpx.MockTransport(handler or _default)
        async with httpx.AsyncClient(transport=transport) as client:
            return await fetch_source(source, client)

    return asyncio.run(_run())


class TestIsRemote:
    @pytest.mark.parametrize(
        "source",
        ["http://example.com/api-docs", "https://example.com/swagger.yaml"],
    )
    def test_http_urls_are_remote(self, source: str) -> None:
        assert is_remote(source) is True

    @pytest.mark.parametrize(
        "source",
        ["swagger.json", "./docs/api.yaml", "/abs/path.json", "ftp://example.com/x.json"],
    )
    def test_everything_else_is_a_file(self, source: str) -> None:
        assert is_remote(source) is False


class TestFetchFromFile:
    def test_reads_file_relative_to_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "docs").mkdir()
        (tmp_path / "docs" / "swagger.json").write_text('{"swagger": "2.0"}', encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert _fetch("docs/swagger.json") == '{"swagger": "2.0"}'

    def test_reads_absolute_path(self, tmp_path: Path) -> None:
        path = tmp_path / "api-docs.json"
        path.write_text("contents", encoding="utf-8")
        assert _fetch(str(path)) == "contents"

    def test_reads_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "unicode.json"
        path.write_text('{"title": "Café"}', encoding="utf-8")
        assert _fetch(str(path)) == '{"title": "Café"}'

    def test_missing_file_raises_fetch_error(self, tmp_path: Path) -> None:
        with pytest.raises(FetchError, match="File not found"):
            _fetch(str(tmp_path / "nope.json"))

    def test_directory_raises_fetch_error(self, tmp_path: Path) -> None:
        with pytest.raises(FetchError):
            _fetch(str(tmp_path))


class TestFetchFromUrl:
    def test_returns_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert str(request.url) == "https://example.com/api-docs.json"
            return httpx.Response(200, text='{"swaggerVersion": "1.2"}')

        assert _fetch("https://example.com/api-docs.json", handler) == '{"swaggerVersion": "1.2"}'

    def test_error_status_body_is_returned(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="Not Found")

        assert _fetch("https://example.com/missing.json", handler) == "Not Found"

    def test_transport_error_raises_fetch_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError, match="Failed to fetch https://example.com/x.json"):
            _fetch("https://example.com/x.json", handler)


class TestNoSource:
    @pytest.mark.parametrize("source", [None, 42])
    def test_non_string_source_yields_none(self, source) -> None:
        assert _fetch(source) is None

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from aiohttp import test_utils, web

from jsonassured import AssertionFailure, SourceError, UsageError
from jsonassured.schema_parsing import AuthConfig, AuthType, SourceConfig, SourceType
from jsonassured.transport import FileSource, HTTPSource, assert_response, create_source


class FakeResponse:
    def __init__(self, body: bytes):
        self._body = body

    async def read(self) -> bytes:
        return self._body


def _serve(handler, path: str = "/doc", **source_kwargs):
    async def scenario() -> bytes:
        app = web.Application()
        app.router.add_get(path, handler)
        async with test_utils.TestServer(app) as server:
            source = HTTPSource(str(server.make_url(path)), **source_kwargs)
            return await source.load()

    return asyncio.run(scenario())


def test_file_source_reads_bytes(payload_file: Path) -> None:
    body = asyncio.run(FileSource(payload_file).load())
    assert b'"stringVal": "sTr"' in body


def test_file_source_missing(tmp_path: Path) -> None:
    source = FileSource(tmp_path / "absent.json")
    with pytest.raises(SourceError, match="Cannot read") as info:
        asyncio.run(source.load())
    assert info.value.data["path"].endswith("absent.json")


def test_create_source_resolves_relative_paths(tmp_path: Path) -> None:
    source = create_source(SourceConfig(type=SourceType.FILE, path="data/p.json"), tmp_path)
    assert isinstance(source, FileSource)
    assert source.path == tmp_path / "data" / "p.json"

    absolute = tmp_path / "abs.json"
    source = create_source(SourceConfig(type=SourceType.FILE, path=str(absolute)), Path("/elsewhere"))
    assert source.path == absolute


def test_create_source_http() -> None:
    source = create_source(
        SourceConfig(type=SourceType.HTTP, url="https://api.example.com/u/1"),
        timeout_ms=1500,
    )
    assert isinstance(source, HTTPSource)
    assert source.timeout_ms == 1500
    assert source.describe() == "https://api.example.com/u/1"


def test_create_source_incomplete_config() -> None:
    with pytest.raises(UsageError):
        create_source(SourceConfig(type=SourceType.FILE))
    with pytest.raises(UsageError):
        create_source(SourceConfig(type=SourceType.HTTP))


@pytest.mark.parametrize(
    ("auth", "header", "value"),
    [
        (AuthConfig(type=AuthType.BEARER, token="t"), "Authorization", "Bearer t"),
        (AuthConfig(type=AuthType.API_KEY, key="k", header="X-Key"), "X-Key", "k"),
        (AuthConfig(type=AuthType.BASIC, username="u", password="p"), "Authorization", "Basic dTpw"),
    ],
)
def test_auth_headers(auth: AuthConfig, header: str, value: str) -> None:
    headers = HTTPSource("https://h", auth_config=auth, headers={"X-Trace": "1"})._build_headers()
    assert headers[header] == value
    assert headers["X-Trace"] == "1"
    assert headers["Accept"] == "application/json"


def test_http_source_loads_body() -> None:
    seen = {}

    async def handler(request: web.Request) -> web.Response:
        seen["auth"] = request.headers.get("Authorization")
        return web.json_response({"id": 7})

    body = _serve(handler, auth_config=AuthConfig(type=AuthType.BEARER, token="abc"))
    assert body == b'{"id": 7}'
    assert seen["auth"] == "Bearer abc"


def test_http_source_non_2xx_is_source_error() -> None:
    async def handler(request: web.Request) -> web.Response:
        return web.Response(status=503, text="down")

    with pytest.raises(SourceError, match="HTTP 503") as info:
        _serve(handler)
    assert info.value.data["body"] == "down"


def test_assert_response_starts_chain() -> None:
    root = asyncio.run(assert_response(FakeResponse(b'{"status": "ok", "n": 3}')))
    root.is_equal("$.status", "ok").int_path("$.n", lambda n: n.is_positive())


def test_assert_response_rejects_empty_body() -> None:
    with pytest.raises(AssertionFailure, match="Response body is empty"):
        asyncio.run(assert_response(FakeResponse(b"")))

"""Shared fixtures: a small OpenAPI document and an httpx client backed by MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

VALID_SPEC = {
    "openapi": "3.0.0",
    "info": {"title": "Test API", "version": "1.0.0"},
}
VALID_JSON = '{"openapi": "3.0.0", "info": {"title": "Test API", "version": "1.0.0"}}'


def spec_server(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/valid":
        return httpx.Response(200, headers={"Content-Type": "application/json"}, content=VALID_JSON.encode())
    if path == "/padded":
        return httpx.Response(200, content=b"\n  " + VALID_JSON.encode() + b"  \n")
    if path == "/empty":
        return httpx.Response(200, content=b"")
    if path == "/error":
        return httpx.Response(500)
    if path == "/not-json":
        return httpx.Response(200, content=b"openapi: 3.0.0\n")
    if path == "/timeout":
        raise httpx.ReadTimeout("timed out", request=request)
    if path == "/echo-headers":
        return httpx.Response(200, json={"headers": dict(request.headers)})
    return httpx.Response(404)


@pytest.fixture()
def spec_client() -> httpx.Client:
    with httpx.Client(transport=httpx.MockTransport(spec_server), timeout=5.0) as client:
        yield client


@pytest.fixture()
def spec_file(tmp_path):
    path = tmp_path / "valid.json"
    path.write_text("  " + VALID_JSON + "\n", encoding="utf-8")
    return path


@pytest.fixture()
def valid_spec() -> dict:
    return json.loads(json.dumps(VALID_SPEC))

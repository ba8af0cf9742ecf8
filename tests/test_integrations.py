"""Tests for scalar_docs.integrations: FastAPI spec documents and docs routes."""

from __future__ import annotations

import json

from fastapi import FastAPI
from fastapi.testclient import TestClient

from scalar_docs import from_content, with_language
from scalar_docs.integrations import FastAPISpecDocument, docs_router, mount_docs

from .conftest import VALID_JSON


def _make_app() -> FastAPI:
    app = FastAPI(title="Pets API", version="2.0.0")

    @app.get("/pets")
    def list_pets():
        return []

    return app


class TestFastAPISpecDocument:
    def test_reads_app_schema(self) -> None:
        app = _make_app()
        doc = json.loads(FastAPISpecDocument(app).read_doc())
        assert doc["info"]["title"] == "Pets API"
        assert "/pets" in doc["paths"]


class TestMountDocs:
    def test_serves_page(self) -> None:
        app = _make_app()
        mount_docs(app, "/scalar", with_language("pt-BR"))
        resp = TestClient(app).get("/scalar")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert "<title>Pets API</title>" in resp.text
        assert '<html lang="pt-BR">' in resp.text
        assert '\\"/pets\\"' in resp.text

    def test_route_not_in_schema(self) -> None:
        app = _make_app()
        mount_docs(app)
        assert "/scalar" not in app.openapi()["paths"]

    def test_page_built_once(self) -> None:
        app = _make_app()
        mount_docs(app, "/docs-page")
        client = TestClient(app)
        first = client.get("/docs-page").text
        second = client.get("/docs-page").text
        assert first == second


class TestDocsRouter:
    def test_serves_prebuilt_scalar(self) -> None:
        app = FastAPI()
        app.include_router(docs_router(from_content(VALID_JSON), path="/reference"))
        resp = TestClient(app).get("/reference")
        assert resp.status_code == 200
        assert "Test API" in resp.text
        assert "/reference" not in app.openapi()["paths"]

"""Tests for the FastAPI service mode."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from htmlimport2esm.migrator import Migrator
from htmlimport2esm.service import create_app
from tests._fixtures.samples import MY_EL_HTML, MY_EL_JS
from tests._fixtures.tree_builder import ComponentTreeBuilder


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(Migrator))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_convert_endpoint_returns_module(client: TestClient) -> None:
    response = client.post("/convert", json={"js": MY_EL_JS, "html": MY_EL_HTML, "filename": "foo.js"})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["identity"] == "my-el"
    assert "import './other.js';" in data["output"]


def test_convert_endpoint_reports_failure(client: TestClient) -> None:
    response = client.post("/convert", json={"js": "class A {}", "html": MY_EL_HTML})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "failed"
    assert data["reason"] == "MissingIdentity"
    assert data["output"] is None


def test_convert_endpoint_library_segment(client: TestClient) -> None:
    response = client.post(
        "/convert",
        json={"js": MY_EL_JS, "html": MY_EL_HTML, "library_segment": "vendor"},
    )
    assert "'../../vendor/@polymer/polymer/polymer-element.js'" in response.json()["output"]


def test_migrate_endpoint_dry_run(client: TestClient, component_tree: ComponentTreeBuilder) -> None:
    component_tree.write(
        {
            "my-el.js": MY_EL_JS,
            "my-el.html": MY_EL_HTML,
            "bad-el.js": "class Bad {}\n",
            "bad-el.html": MY_EL_HTML,
        }
    )

    response = client.post("/migrate", json={"path": str(component_tree.path()), "dry_run": True})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "partial"
    assert data["dry_run"] is True
    assert [entry["reason"] for entry in data["failed"]] == ["MissingIdentity"]
    assert data["converted"][0].endswith("my-el.js")
    assert component_tree.exists("my-el.html")


def test_migrate_endpoint_missing_path(client: TestClient, tmp_path) -> None:
    response = client.post("/migrate", json={"path": str(tmp_path / "missing")})
    assert response.status_code == 404

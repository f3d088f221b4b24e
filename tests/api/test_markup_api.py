"""
Tests for the markup and document API routes.

Test assertions:
- Conversion endpoints sanitize by default
- Removals and dialect warnings are reported to the caller
- Invalid settings documents are rejected with 400 and a stable error code
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from src.api.main import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestMarkupRoutes:
    def test_sanitize(self, client: TestClient) -> None:
        response = client.post(
            "/api/markup/sanitize", json={"html": '<p onclick="x()">hi<script>x</script></p>'}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["html"] == "<p>hi</p>"
        assert {r["code"] for r in body["removals"]} == {"stripped_attribute", "dropped_element"}

    def test_to_html_blocks_script_urls(self, client: TestClient) -> None:
        response = client.post("/api/markup/to-html", json={"bbcode": "[url]javascript:x[/url]"})

        assert response.status_code == 200
        assert 'href="#"' in response.json()["html"]

    def test_to_html_reports_unmatched_tags(self, client: TestClient) -> None:
        response = client.post("/api/markup/to-html", json={"bbcode": "[b]open"})

        assert response.status_code == 200
        assert len(response.json()["warnings"]) == 1

    def test_to_bbcode(self, client: TestClient) -> None:
        response = client.post(
            "/api/markup/to-bbcode", json={"html": "<p><strong>a</strong> b</p>"}
        )

        assert response.json() == {"bbcode": "[b]a[/b] b"}

    def test_text(self, client: TestClient) -> None:
        response = client.post("/api/markup/text", json={"html": "<p>a <i>b</i></p>"})

        assert response.json() == {"text": "a b"}

    def test_missing_field_is_422(self, client: TestClient) -> None:
        response = client.post("/api/markup/sanitize", json={})

        assert response.status_code == 422


class TestDocumentRoutes:
    def test_validate_sanitizes_content(self, client: TestClient) -> None:
        response = client.post(
            "/api/documents/validate", json={"content": "<p>x<script>y</script></p>"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["document"]["content"] == "<p>x</p>"
        assert body["document"]["exportOptions"]["sanitize"] is True
        assert body["removals"]

    def test_invalid_document(self, client: TestClient) -> None:
        response = client.post("/api/documents/validate", json={"images": "nope"})

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_settings"


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "api"}

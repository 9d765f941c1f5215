"""Tests for the FastAPI proxy (fruitlink.server.app) via TestClient."""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from fruitlink.config import AppConfig
from fruitlink.errors import CollaboratorError
from fruitlink.server.app import CERTS_UNAVAILABLE, create_app
from fruitlink.server.givvable import GivvableClient

GIVVABLE_URL = "https://givvable.test/v1/companies/search"
FRONTEND = "http://localhost:5173"


class FakeGenerator:
    def __init__(self, reply: str = "Mango prices rise.", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def _givvable(handler, api_key: str = "k") -> GivvableClient:
    return GivvableClient(
        GIVVABLE_URL,
        api_key=api_key,
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def _companies(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json={"companies": [{"credentialCategories": ["Organic"], "credentialCount": 2}]},
    )


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def client(generator) -> TestClient:
    return TestClient(create_app(AppConfig(), generator=generator, cert_client=_givvable(_companies)))


class TestVertexChat:
    def test_returns_content(self, client, generator):
        resp = client.post("/api/vertexChat", json={"message": "Why are mangoes expensive?"})
        assert resp.status_code == 200
        assert resp.json() == {"content": "Mango prices rise."}
        assert generator.prompts == ["Why are mangoes expensive?"]

    @pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": None}])
    def test_missing_message_is_400(self, client, generator, body):
        resp = client.post("/api/vertexChat", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Message is required"}
        assert generator.prompts == []

    def test_model_failure_is_500_envelope(self):
        app = create_app(
            AppConfig(),
            generator=FakeGenerator(error=RuntimeError("quota exceeded")),
            cert_client=_givvable(_companies),
        )
        resp = TestClient(app).post("/api/vertexChat", json={"message": "hi"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Text model error", "details": "quota exceeded"}

    def test_missing_api_key_is_500_envelope(self):
        app = create_app(
            AppConfig(),
            generator=FakeGenerator(error=CollaboratorError("GEMINI_API_KEY is not set.")),
            cert_client=_givvable(_companies),
        )
        resp = TestClient(app).post("/api/vertexChat", json={"message": "hi"})
        assert resp.status_code == 500
        assert "GEMINI_API_KEY" in resp.json()["details"]


class TestGivvableCerts:
    def test_passes_upstream_json_through(self, client):
        resp = client.post("/api/givvableCerts", json={"name": "Vitassous"})
        assert resp.status_code == 200
        assert resp.json()["companies"][0]["credentialCount"] == 2

    def test_sends_name_and_api_key(self, generator):
        seen: list[httpx.Request] = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"companies": []})

        app = create_app(AppConfig(), generator=generator, cert_client=_givvable(handler, "secret"))
        TestClient(app).post("/api/givvableCerts", json={"name": "Truong Ton"})
        assert seen[0].url.params["name"] == "Truong Ton"
        assert seen[0].headers["x-api-key"] == "secret"

    def test_upstream_error_is_200_envelope(self, generator):
        app = create_app(
            AppConfig(),
            generator=generator,
            cert_client=_givvable(lambda r: httpx.Response(503, text="down")),
        )
        resp = TestClient(app).post("/api/givvableCerts", json={"name": "A"})
        assert resp.status_code == 200
        assert resp.json() == {"error": CERTS_UNAVAILABLE}

    def test_missing_key_is_200_envelope(self, generator):
        app = create_app(AppConfig(), generator=generator, cert_client=_givvable(_companies, ""))
        resp = TestClient(app).post("/api/givvableCerts", json={"name": "A"})
        assert resp.json() == {"error": CERTS_UNAVAILABLE}


def test_cors_allows_frontend_origin(client):
    resp = client.options(
        "/api/vertexChat",
        headers={
            "Origin": FRONTEND,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == FRONTEND


def test_cors_rejects_other_origin(client):
    resp = client.options(
        "/api/vertexChat",
        headers={"Origin": "http://evil.test", "Access-Control-Request-Method": "POST"},
    )
    assert "access-control-allow-origin" not in resp.headers


class TestGivvableClient:
    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.delenv("GIVVABLE_API_KEY", raising=False)
        client = GivvableClient(GIVVABLE_URL, http_client=httpx.Client(transport=httpx.MockTransport(_companies)))
        with pytest.raises(CollaboratorError, match="GIVVABLE_API_KEY"):
            client.search("A")

    def test_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("GIVVABLE_API_KEY", "env-key")
        assert GivvableClient(GIVVABLE_URL).api_key == "env-key"

    def test_non_json_body_raises(self):
        with pytest.raises(CollaboratorError, match="JSON"):
            _givvable(lambda r: httpx.Response(200, text="<html>")).search("A")

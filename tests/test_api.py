"""Tests for the local FastAPI server."""
from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from conftest import TEST_BUCKET, make_handler, make_polly
from speech_lambda.api.dependencies import get_speech_handler
from speech_lambda.api.routes import event_from_request
from speech_lambda.main import create_app


@pytest.fixture
def client():
    app = create_app()
    fake = make_handler()
    app.dependency_overrides[get_speech_handler] = lambda: fake
    with TestClient(app) as c:
        yield c


class TestSpeechEndpoint:
    """POST/OPTIONS /v1/speech relay the handler response unchanged."""

    def test_post_success(self, client):
        r = client.post("/v1/speech", json={"text": "Hello world"})
        assert r.status_code == 200
        body = r.json()
        assert body["voice"] == "Joanna"
        assert body["audioUrl"] == f"https://{TEST_BUCKET}.s3.amazonaws.com/{body['fileName']}"
        assert r.headers["access-control-allow-origin"] == "*"
        assert r.headers["access-control-allow-methods"] == "POST, OPTIONS"
        assert r.headers["content-type"] == "application/json"

    def test_options_preflight(self, client):
        r = client.options("/v1/speech")
        assert r.status_code == 200
        assert r.content == b""
        assert r.headers["access-control-allow-headers"] == "Content-Type"

    def test_invalid_json(self, client):
        r = client.post("/v1/speech", content=b"{oops", headers={"Content-Type": "application/json"})
        assert r.status_code == 400
        assert r.json() == {"error": "Invalid JSON in request body"}

    def test_empty_body(self, client):
        r = client.post("/v1/speech")
        assert r.status_code == 400

    def test_text_required(self, client):
        r = client.post("/v1/speech", json={"text": "  "})
        assert r.status_code == 400
        assert r.json() == {"error": "Text is required"}

    def test_synthesis_failure(self):
        app = create_app()
        fake = make_handler(polly=make_polly(fail_engines=("neural", "standard")))
        app.dependency_overrides[get_speech_handler] = lambda: fake
        with TestClient(app) as c:
            r = c.post("/v1/speech", json={"text": "Hello"})
        assert r.status_code == 500
        assert r.json()["error"] == "Failed to convert text to speech"

    def test_get_not_allowed(self, client):
        assert client.get("/v1/speech").status_code == 405


class TestHealth:
    """GET /health."""

    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        j = r.json()
        assert j["ok"] is True
        assert j["bucket"] == TEST_BUCKET
        assert j["default_voice"] == "Joanna"
        assert j["default_language"] == "en-US"
        assert j["max_text_chars"] == 3000


class TestEventFromRequest:
    """Tests for event_from_request()."""

    def test_text_body(self):
        event = event_from_request("POST", "/v1/speech", {}, json.dumps({"text": "x"}).encode())
        assert event["httpMethod"] == "POST"
        assert event["body"] == '{"text": "x"}'
        assert event["isBase64Encoded"] is False

    def test_empty_body_is_none(self):
        assert event_from_request("POST", "/", {}, b"")["body"] is None

    def test_binary_body_base64(self):
        event = event_from_request("POST", "/", {}, b"\xff\xfe")
        assert event["isBase64Encoded"] is True
        assert event["body"] == "//4="

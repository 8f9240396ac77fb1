"""End-to-end tests for POST /api/json with a scripted generation client."""

import pytest
from fastapi.testclient import TestClient

from structify import config
from structify.errors import GenerationTransportError
from structify.llm.config import get_generation_client
from structify.main import app


@pytest.fixture
def api(scripted_client):
    def use(outcomes):
        client = scripted_client(outcomes)
        app.dependency_overrides[get_generation_client] = lambda: client
        return TestClient(app), client

    yield use
    app.dependency_overrides.clear()


def test_generates_structured_json(api):
    http, client = api(['{"name":"Jane","age":30}'])

    response = http.post(
        "/api/json",
        json={
            "data": "Jane is 30",
            "format": {"name": {"type": "string"}, "age": {"type": "number"}},
        },
    )

    assert response.status_code == 200
    assert response.json() == {"name": "Jane", "age": 30}
    assert client.call_count == 1


@pytest.mark.parametrize(
    "body",
    [
        {"format": {"name": {"type": "string"}}},
        {"data": "Jane"},
        {"data": 42, "format": {}},
        {"data": "Jane", "format": ["not", "an", "object"]},
    ],
)
def test_malformed_body_is_rejected_without_generation(api, body):
    http, client = api(['{}'])

    response = http.post("/api/json", json=body)

    assert response.status_code == 422
    assert response.json()["errors"]
    assert client.call_count == 0


@pytest.mark.parametrize(
    "content",
    [
        b"data=Jane",
        b'{"data": "\xff\xfe", "format": {}}',
    ],
)
def test_body_that_is_not_json(api, content):
    http, client = api(['{}'])

    response = http.post(
        "/api/json",
        content=content,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert client.call_count == 0


def test_unsupported_kind_fails_before_generation(api):
    http, client = api(['{}'])

    response = http.post(
        "/api/json",
        json={"data": "x", "format": {"pair": {"type": "tuple"}}},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Unsupported data type: tuple"
    assert client.call_count == 0


def test_exhausted_budget_maps_to_bad_gateway(api):
    http, client = api([GenerationTransportError("connection reset")])

    response = http.post(
        "/api/json",
        json={"data": "x", "format": {"a": {"type": "string"}}},
    )

    assert response.status_code == 502
    payload = response.json()
    assert payload["attempts"] == 4
    assert payload["last_error"] == "GenerationTransportError"
    assert client.call_count == 4


def test_extra_format_keys_pass_through_to_prompt(api):
    http, client = api(['{"a": "b"}'])
    fmt = {"a": {"type": "string", "description": "free text"}}

    response = http.post("/api/json", json={"data": "x", "format": fmt})

    assert response.status_code == 200
    assert '"description": "free text"' in client.calls[0][-1].text


def test_non_json_number_from_model_is_retried(api):
    http, client = api(['{"age": NaN}', '{"age": 3}'])

    response = http.post(
        "/api/json",
        json={"data": "three", "format": {"age": {"type": "number"}}},
    )

    assert response.status_code == 200
    assert response.json() == {"age": 3}
    assert client.call_count == 2


# ---------------------------------------------------------------------------
# Real client resolution (no overrides)
# ---------------------------------------------------------------------------


@pytest.fixture
def unconfigured_gemini(monkeypatch):
    app.dependency_overrides.clear()
    monkeypatch.setattr(config, "LLM_PROVIDER", "gemini")
    monkeypatch.setattr(config, "GEMINI_AI_KEY", "")
    get_generation_client.cache_clear()
    yield TestClient(app)
    get_generation_client.cache_clear()


def test_malformed_body_is_rejected_before_client_lookup(unconfigured_gemini):
    response = unconfigured_gemini.post("/api/json", json={"data": 1})

    assert response.status_code == 422


def test_unsupported_kind_is_rejected_before_client_lookup(unconfigured_gemini):
    response = unconfigured_gemini.post(
        "/api/json",
        json={"data": "x", "format": {"pair": {"type": "tuple"}}},
    )

    assert response.status_code == 400


def test_missing_key_surfaces_as_configuration_error(unconfigured_gemini):
    response = unconfigured_gemini.post(
        "/api/json",
        json={"data": "x", "format": {"a": {"type": "string"}}},
    )

    assert response.status_code == 500
    assert "GEMINI_AI_KEY" in response.json()["detail"]


def test_generation_client_is_built_once(monkeypatch):
    monkeypatch.setattr(config, "LLM_PROVIDER", "chat")
    get_generation_client.cache_clear()
    try:
        assert get_generation_client() is get_generation_client()
    finally:
        get_generation_client.cache_clear()

"""Tests for the directory API transport client."""

import asyncio
import base64
import json

import httpx
import pytest

from railway_directory.integrations import ApiClient, ApiError
from railway_directory.utils.config_loader import ApiConfig


def make_client(handler, **config):
    config.setdefault("base_url", "http://directory.test")
    return ApiClient(ApiConfig(**config), transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_default_headers_without_credentials():
    seen = {}

    def handler(request):
        seen.update(request.headers)
        return httpx.Response(200, json={"ok": True})

    client = make_client(handler)
    await client.get("/api/contacts/count")

    assert seen["content-type"] == "application/json"
    assert "x-api-key" not in seen
    assert "authorization" not in seen


@pytest.mark.asyncio
async def test_api_key_and_basic_auth_headers():
    seen = {}

    def handler(request):
        seen.update(request.headers)
        return httpx.Response(200, json={})

    client = make_client(handler, api_key="secret-key", username="clerk", password="p@ss")
    await client.get("/api/contacts")

    expected = base64.b64encode(b"clerk:p@ss").decode("ascii")
    assert seen["x-api-key"] == "secret-key"
    assert seen["authorization"] == f"Basic {expected}"


@pytest.mark.asyncio
async def test_blank_api_key_and_partial_credentials_are_not_sent():
    seen = {}

    def handler(request):
        seen.update(request.headers)
        return httpx.Response(200, json={})

    client = make_client(handler, api_key="   ", username="clerk")
    await client.get("/api/contacts")

    assert "x-api-key" not in seen
    assert "authorization" not in seen


@pytest.mark.asyncio
async def test_per_call_headers_override_defaults():
    seen = {}

    def handler(request):
        seen.update(request.headers)
        return httpx.Response(200, json={})

    client = make_client(handler, api_key="default")
    await client.get("/api/contacts", headers={"X-API-Key": "override", "X-Trace": "1"})

    assert seen["x-api-key"] == "override"
    assert seen["x-trace"] == "1"


@pytest.mark.asyncio
async def test_relative_and_absolute_urls():
    urls = []

    def handler(request):
        urls.append(str(request.url))
        return httpx.Response(200, json={})

    client = make_client(handler, base_url="http://directory.test/")
    await client.get("api/contacts")
    await client.get("/api/contacts/count")
    await client.get("https://docs.example.test/documents")

    assert urls == [
        "http://directory.test/api/contacts",
        "http://directory.test/api/contacts/count",
        "https://docs.example.test/documents",
    ]


@pytest.mark.asyncio
async def test_post_serialises_json_body():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"id": "9", "name": "New"})

    client = make_client(handler)
    result = await client.post("/api/contacts", {"name": "New", "lobby": "BZA"})

    assert bodies == [{"name": "New", "lobby": "BZA"}]
    assert result == {"id": "9", "name": "New"}


@pytest.mark.asyncio
async def test_non_json_success_returns_text():
    client = make_client(lambda request: httpx.Response(200, text="pong"))
    assert await client.get("/health") == "pong"


@pytest.mark.asyncio
async def test_error_uses_backend_message_and_body():
    body = {"success": False, "message": "Contact not found", "error": "NOT_FOUND"}
    client = make_client(lambda request: httpx.Response(404, json=body))

    with pytest.raises(ApiError) as exc_info:
        await client.get("/api/contacts/42")

    assert exc_info.value.status == 404
    assert exc_info.value.message == "Contact not found"
    assert exc_info.value.response == body


@pytest.mark.asyncio
async def test_error_without_json_body_uses_generic_message():
    client = make_client(lambda request: httpx.Response(502, text="Bad gateway"))

    with pytest.raises(ApiError) as exc_info:
        await client.get("/api/contacts")

    assert exc_info.value.status == 502
    assert exc_info.value.message == "HTTP error! status: 502"
    assert exc_info.value.response is None


@pytest.mark.asyncio
async def test_unparseable_json_error_body_is_ignored():
    def handler(request):
        return httpx.Response(500, content=b"{not json", headers={"content-type": "application/json"})

    client = make_client(handler)

    with pytest.raises(ApiError) as exc_info:
        await client.get("/api/contacts")

    assert exc_info.value.message == "HTTP error! status: 500"


@pytest.mark.asyncio
async def test_timeout_is_reported_as_408():
    async def slow_handler(request):
        await asyncio.sleep(1)
        return httpx.Response(200, json={})

    client = make_client(slow_handler, timeout_ms=50)

    with pytest.raises(ApiError) as exc_info:
        await client.get("/api/contacts")

    assert exc_info.value.status == 408
    assert exc_info.value.message == "Request timeout"


@pytest.mark.asyncio
async def test_connection_failure_propagates_unwrapped():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)

    with pytest.raises(httpx.ConnectError):
        await client.get("/api/contacts")


@pytest.mark.asyncio
async def test_one_network_call_per_invocation():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503, json={"message": "busy"})

    client = make_client(handler)
    with pytest.raises(ApiError):
        await client.get("/api/contacts")

    assert len(calls) == 1

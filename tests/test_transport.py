import json

import httpx
import pytest

from fbcommerce.errors import TransportFailure
from fbcommerce.helpers import transport as transport_module
from fbcommerce.helpers.transport import HttpxTransport


def patch_client(monkeypatch, handler):
    real_client = httpx.AsyncClient

    def client_factory(**kwargs):
        kwargs.pop("proxy", None)
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(transport_module.httpx, "AsyncClient", client_factory)


@pytest.mark.asyncio
async def test_transport_sends_form_body(monkeypatch):
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["auth"] = request.headers["Authorization"]
        seen["content"] = request.content.decode()
        return httpx.Response(200, json={"handles": ["h1"]})

    patch_client(monkeypatch, handler)

    raw = await HttpxTransport()(
        "POST", "https://graph.facebook.com/v12.0/1/items_batch",
        {"Authorization": "Bearer token"},
        {"allow_upsert": True, "requests": "[]", "item_type": "PRODUCT_ITEM"})

    assert seen["method"] == "POST"
    assert seen["auth"] == "Bearer token"
    assert seen["content"] == \
        "allow_upsert=true&requests=%5B%5D&item_type=PRODUCT_ITEM"
    assert raw.status_code == 200
    assert raw.body == '{"handles":["h1"]}'


@pytest.mark.asyncio
async def test_transport_sends_nested_payload_as_json(monkeypatch):
    seen = {}
    payload = {"data": [{"event_name": "Purchase",
                         "user_data": {"fbc": "fb.1.2.3"}}],
               "partner_agent": "woocommerce-6.5.1-2.6.13",
               "upload_tag": None}

    def handler(request):
        seen["content_type"] = request.headers["Content-Type"]
        seen["payload"] = json.loads(request.content)
        return httpx.Response(200, json={"events_received": 1})

    patch_client(monkeypatch, handler)

    raw = await HttpxTransport()(
        "POST", "https://graph.facebook.com/v12.0/1/events",
        {"Authorization": "Bearer token"}, payload)

    assert seen["content_type"] == "application/json"
    assert seen["payload"] == payload
    assert raw.status_code == 200


@pytest.mark.asyncio
async def test_transport_returns_error_statuses(monkeypatch):
    patch_client(monkeypatch, lambda request: httpx.Response(400, text=""))

    raw = await HttpxTransport()(
        "GET", "https://graph.facebook.com/v12.0/1", {})

    assert raw.status_code == 400
    assert raw.body == ""


@pytest.mark.asyncio
async def test_transport_wraps_request_errors(monkeypatch):
    def handler(request):
        raise httpx.ConnectError("Name or service not known", request=request)

    patch_client(monkeypatch, handler)

    with pytest.raises(TransportFailure) as exc_info:
        await HttpxTransport()("GET", "https://graph.facebook.com/v12.0/me", {})

    assert exc_info.value.message == "Name or service not known"
    assert exc_info.value.code == 0


def test_proxy_from_environment(monkeypatch):
    monkeypatch.setenv("HTTPS_PROXY", "http://proxy.local:3128")

    assert HttpxTransport().proxy == "http://proxy.local:3128"

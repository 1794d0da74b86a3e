"""Pytest fixtures for Graph API client tests."""

import pytest

from fbcommerce import config
from fbcommerce.core.graph_api import GraphAPI
from fbcommerce.core.response import RawResponse


class RecordingTransport:
    """In-memory transport that records requests and replays one answer."""

    def __init__(self, response=None):
        self.response = response if response is not None else \
            RawResponse(200, {}, "{}")
        self.calls = []

    async def __call__(self, method, url, headers, body=None):
        self.calls.append({
            "method": method,
            "url": url,
            "headers": headers,
            "body": body,
        })
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    @property
    def last(self):
        return self.calls[-1]


def ok(body: str, status: int = 200) -> RawResponse:
    return RawResponse(status, {"Content-Type": "application/json"}, body)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Run every test against an empty configuration."""
    monkeypatch.setattr(config, "_config", {})


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def api(transport):
    return GraphAPI("test-api-key-9678djyad552", transport=transport)

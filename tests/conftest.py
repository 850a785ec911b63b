# tests/conftest.py
import json

import httpx
import pytest

from catalog.main import app
from catalog.store import CatalogStore
from sdk.fakestore import AsyncFakeStoreClient

BASE_URL = "http://testserver"


def product(pid, title="A", price=10, **extra):
    p = {
        "id": pid,
        "title": title,
        "price": price,
        "category": "electronics",
        "image": "https://example.com/a.png",
        "description": "a product",
    }
    p.update(extra)
    return p


def dto(title="B", price=5, **extra):
    d = product(0, title, price, **extra)
    del d["id"]
    return d


class Gateway:
    """Scripted stand-in for the remote API, keyed by (method, path)."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method, path, status=200, body=None, exc=None):
        self.routes[(method, path)] = (status, body, exc)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"detail": "not scripted"})
        status, body, exc = self.routes[key]
        if exc is not None:
            raise exc(f"{exc.__name__.lower()} for {request.url}", request=request)
        if callable(body):
            body = body(json.loads(request.content) if request.content else None)
        return httpx.Response(status, json=body)


def mock_store(gateway: Gateway) -> CatalogStore:
    client = AsyncFakeStoreClient(BASE_URL, transport=httpx.MockTransport(gateway.handler))
    return CatalogStore(client)


def gateway_store() -> CatalogStore:
    client = AsyncFakeStoreClient(BASE_URL, transport=httpx.ASGITransport(app=app))
    return CatalogStore(client)


@pytest.fixture
def gateway():
    return Gateway()

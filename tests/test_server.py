"""Lifecycle test for the standalone server object."""

import httpx

from product_search.catalog import InMemoryCatalog
from product_search.config import Settings
from product_search.server import SearchServer


def test_server_starts_serves_and_closes():
    server = SearchServer(Settings(host="127.0.0.1", port=0), InMemoryCatalog([{"id": 1, "name": "A"}]))

    with server:
        assert server.started
        url = f"http://127.0.0.1:{server.bound_port}/products/search"
        response = httpx.post(url, json={})

    assert response.status_code == 200
    assert response.json()["total"] == 1
    assert not server.started

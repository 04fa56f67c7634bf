"""
Pytest configuration and shared fixtures for the Shopify Admin client tests.
"""

import json
from collections import defaultdict
from typing import Any, Callable, Dict, List, Tuple

import httpx
import pytest
import pytest_asyncio

from shopify_admin import ShopifyAdminClient


TIMESTAMP = "2024-01-01T00:00:00Z"

SINGULAR = {
    "customers": "customer",
    "products": "product",
    "variants": "variant",
    "images": "image",
    "metafields": "metafield",
    "webhooks": "webhook",
}


class FakeShopify:
    """
    In-memory Shopify store served through httpx.MockTransport.

    Understands the unversioned ``/admin/...`` REST paths for the six
    resources, including product-scoped images/variants and metafields owned
    by arbitrary objects. Products without a title are rejected with 422.
    """

    def __init__(self):
        self.records: Dict[str, Dict[int, Dict[str, Any]]] = defaultdict(dict)
        self.requests: List[httpx.Request] = []
        self._next_id = 1000

    def _scope(self, segments: List[str]) -> Tuple[str, Dict[str, Any]]:
        resource = segments[-1]
        if len(segments) == 3:
            parent, parent_id = segments[0], int(segments[1])
            if resource == "metafields":
                return resource, {"owner_resource": parent[:-1], "owner_id": parent_id}
            return resource, {f"{parent[:-1]}_id": parent_id}
        return resource, {}

    def _matching(self, resource: str, scope: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [
            record for record in self.records[resource].values()
            if all(record.get(k) == v for k, v in scope.items())
        ]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        assert path.startswith("/admin/") and path.endswith(".json"), path
        segments = path[len("/admin/"):-len(".json")].split("/")

        if segments[-1] == "count":
            resource, scope = self._scope(segments[:-1])
            return httpx.Response(200, json={"count": len(self._matching(resource, scope))})

        if segments[-1].isdigit():
            record_id = int(segments[-1])
            resource, _ = self._scope(segments[:-1])
            singular = SINGULAR[resource]
            store = self.records[resource]
            if record_id not in store:
                return httpx.Response(404, json={"errors": "Not Found"})
            if request.method == "GET":
                return httpx.Response(200, json={singular: store[record_id]})
            if request.method == "PUT":
                body = json.loads(request.content)[singular]
                store[record_id] = {**store[record_id], **body, "id": record_id, "updated_at": TIMESTAMP}
                return httpx.Response(200, json={singular: store[record_id]})
            if request.method == "DELETE":
                del store[record_id]
                return httpx.Response(200, json={})

        resource, scope = self._scope(segments)
        if request.method == "GET":
            return httpx.Response(200, json={resource: self._matching(resource, scope)})
        if request.method == "POST":
            singular = SINGULAR[resource]
            body = json.loads(request.content)[singular]
            if resource == "products" and not body.get("title"):
                return httpx.Response(422, json={"errors": {"title": ["can't be blank"]}})
            self._next_id += 1
            record = {
                **body,
                **scope,
                "id": self._next_id,
                "created_at": TIMESTAMP,
                "updated_at": TIMESTAMP,
            }
            self.records[resource][self._next_id] = record
            return httpx.Response(201, json={singular: record})

        return httpx.Response(405, json={"errors": "Method Not Allowed"})


def build_client(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> ShopifyAdminClient:
    options = {
        "api_version": "",
        "rate_limit_calls": 1000,
        "retry_backoff_base": 0,
    }
    options.update(kwargs)
    return ShopifyAdminClient(
        "test-shop",
        "shpat_test_token",
        transport=httpx.MockTransport(handler),
        **options,
    )


@pytest.fixture
def fake_shop() -> FakeShopify:
    """Fresh in-memory store"""
    return FakeShopify()


@pytest_asyncio.fixture
async def client(fake_shop):
    """Client wired to the in-memory store"""
    shopify = build_client(fake_shop)
    yield shopify
    await shopify.close()


@pytest_asyncio.fixture
async def make_client():
    """Factory for clients backed by an ad-hoc request handler"""
    created: List[ShopifyAdminClient] = []

    def factory(handler, **kwargs) -> ShopifyAdminClient:
        shopify = build_client(handler, **kwargs)
        created.append(shopify)
        return shopify

    yield factory

    for shopify in created:
        await shopify.close()

"""Shared pytest fixtures for gateway_control_client tests."""

from __future__ import annotations

import json
import os
from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
import pytest_asyncio

from gateway_control_client.integrations.admin_api.config import (
    ClusterOptions,
    GatewayClientConfig,
)
from gateway_control_client.services.gateway.cluster import Cluster

ADMIN_PREFIX = "/apisix/admin"
BASE_URL = f"http://gateway.test:9180{ADMIN_PREFIX}"


class FakeAdminAPI:
    """In-memory gateway Admin API served through ``httpx.MockTransport``.

    Collections are stored as ``{collection: {key: value}}``. Every request
    is recorded so tests can count remote calls.
    """

    def __init__(self) -> None:
        self.store: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.disabled: set[str] = set()
        self.failing_lists: set[str] = set()
        self.still_in_use: set[str] = set()
        self.plugins: list[str] = ["limit-count", "cors", "proxy-rewrite"]
        self.schemas: dict[str, str] = {
            "plugins/limit-count": '{"type":"object","properties":{"count":{"type":"integer"}}}',
            "route": '{"type":"object"}',
        }

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def seed(self, collection: str, key: str, value: dict[str, Any]) -> None:
        self.store.setdefault(collection, {})[key] = value

    def count(self, method: str | None = None, path: str | None = None) -> int:
        """Count recorded requests, optionally by method and admin-relative path."""
        return sum(
            1
            for request in self.requests
            if (method is None or request.method == method)
            and (path is None or self._relative(request) == path)
        )

    @staticmethod
    def _relative(request: httpx.Request) -> str:
        return request.url.path.removeprefix(ADMIN_PREFIX).strip("/")

    def _envelope_key(self, collection: str, key: str) -> str:
        return f"/apisix/{collection}/{key}"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = self._relative(request)
        collection, _, key = path.partition("/")

        if collection in self.disabled:
            return httpx.Response(
                400, json={"error_msg": f"{collection} is disabled, can not serve it"}
            )

        if request.method == "GET" and path == "plugins/list":
            return httpx.Response(200, json=self.plugins)
        if request.method == "GET" and path in self.schemas:
            return httpx.Response(200, text=self.schemas[path])

        items = self.store.setdefault(collection, {})

        if request.method == "GET" and not key:
            if collection in self.failing_lists:
                return httpx.Response(503, text="upstream unavailable")
            if collection == "plugin_metadata":
                return httpx.Response(200, json={"value": dict(items)})
            entries = [
                {"key": self._envelope_key(collection, k), "value": v} for k, v in items.items()
            ]
            return httpx.Response(200, json={"total": str(len(entries)), "list": entries or {}})

        if request.method == "GET":
            if key not in items:
                return httpx.Response(404, json={"message": "Key not found"})
            return httpx.Response(
                200, json={"key": self._envelope_key(collection, key), "value": items[key]}
            )

        if request.method == "PUT":
            value = json.loads(request.content)
            status = 200 if key in items else 201
            items[key] = value
            return httpx.Response(
                status, json={"key": self._envelope_key(collection, key), "value": value}
            )

        if request.method == "DELETE":
            if key in self.still_in_use:
                return httpx.Response(
                    400,
                    json={"error_msg": f"can not delete this {collection}, route still using it"},
                )
            if items.pop(key, None) is None:
                return httpx.Response(404, json={"message": "Key not found"})
            return httpx.Response(200, json={"deleted": "1", "key": key})

        return httpx.Response(405, text="method not allowed")


@pytest.fixture
def fake_admin() -> FakeAdminAPI:
    """Create an empty fake Admin API."""
    return FakeAdminAPI()


@pytest.fixture
def cluster_options() -> ClusterOptions:
    """Create options for a test cluster."""
    return ClusterOptions(
        name="g1", base_url=BASE_URL, admin_key="edd1c9f034335f136f87ad84b625c8f1"
    )


@pytest.fixture
def fast_config() -> GatewayClientConfig:
    """Create a client config without retry delays."""
    return GatewayClientConfig(
        sync_attempts=3,
        sync_backoff=0,
        health_check_attempts=2,
        health_check_backoff=0,
        probe_timeout=0.5,
    )


@pytest_asyncio.fixture
async def cluster(
    fake_admin: FakeAdminAPI,
    cluster_options: ClusterOptions,
    fast_config: GatewayClientConfig,
) -> AsyncGenerator[Cluster]:
    """Create a cluster talking to the fake Admin API (no warm-sync)."""
    cluster = Cluster(cluster_options, fast_config, transport=fake_admin.transport)
    cluster.start()
    yield cluster
    await cluster.close()


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("GATEWAY_"):
            monkeypatch.delenv(key, raising=False)


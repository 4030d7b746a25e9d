"""Stand-in for clusters that were never registered.

Looking up an unknown cluster name yields ``NON_EXISTENT_CLUSTER`` instead
of None, so callers can chain ``registry.cluster(name).route.list()`` and get
``ClusterNotExistError`` from the operation itself.
"""

from __future__ import annotations

from typing import Any, NoReturn

from gateway_control_client.integrations.admin_api.exceptions import ClusterNotExistError


def _not_exist() -> NoReturn:
    raise ClusterNotExistError()


class NullResourceClient:
    """Resource client whose every operation raises ClusterNotExistError."""

    async def get(self, name: str) -> Any:
        _not_exist()

    async def list(self, options: Any = None) -> Any:
        _not_exist()

    async def create(self, entity: Any) -> Any:
        _not_exist()

    async def update(self, entity: Any) -> Any:
        _not_exist()

    async def delete(self, entity: Any) -> None:
        _not_exist()


class NullSchemaClient(NullResourceClient):
    """Schema client whose every operation raises ClusterNotExistError."""

    async def get_plugin_schema(self, plugin_name: str) -> Any:
        _not_exist()

    async def get_route_schema(self) -> Any:
        _not_exist()

    async def get_upstream_schema(self) -> Any:
        _not_exist()

    async def get_consumer_schema(self) -> Any:
        _not_exist()

    async def get_ssl_schema(self) -> Any:
        _not_exist()

    async def get_plugin_config_schema(self) -> Any:
        _not_exist()


class NonExistentCluster:
    """Null-object cluster: every operation raises ClusterNotExistError."""

    name = ""
    base_url = ""

    def __init__(self) -> None:
        self._client = NullResourceClient()
        self._schema = NullSchemaClient()

    @property
    def route(self) -> NullResourceClient:
        return self._client

    @property
    def service(self) -> NullResourceClient:
        return self._client

    @property
    def ssl(self) -> NullResourceClient:
        return self._client

    @property
    def stream_route(self) -> NullResourceClient:
        return self._client

    @property
    def global_rule(self) -> NullResourceClient:
        return self._client

    @property
    def consumer(self) -> NullResourceClient:
        return self._client

    @property
    def plugin_config(self) -> NullResourceClient:
        return self._client

    @property
    def plugin_metadata(self) -> NullResourceClient:
        return self._client

    @property
    def schema(self) -> NullSchemaClient:
        return self._schema

    @property
    def plugin(self) -> NullResourceClient:
        return self._client

    def start(self) -> None:
        return None

    async def has_synced(self, timeout: float | None = None) -> None:
        _not_exist()

    async def health_check(self) -> None:
        _not_exist()

    async def close(self) -> None:
        return None

    def __str__(self) -> str:
        return "non-existent cluster"


NON_EXISTENT_CLUSTER = NonExistentCluster()

"""Schema client for gateway clusters.

Schemas are read-only: they are fetched on demand, cached by name and never
written back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

import structlog

from gateway_control_client.integrations.admin_api.exceptions import (
    CacheError,
    NotFoundError,
    describe,
)
from gateway_control_client.integrations.admin_api.models.kinds import ResourceKind
from gateway_control_client.integrations.admin_api.models.schema import Schema

if TYPE_CHECKING:
    from gateway_control_client.services.gateway.cluster import Cluster

logger = structlog.get_logger()


class SchemaClient:
    """Reads object and plugin schemas from the Admin API."""

    def __init__(self, cluster: Cluster) -> None:
        self._cluster = cluster
        self._log = logger.bind(cluster=cluster.name, entity="schema")

    async def get(self, name: str) -> Schema:
        """Get a schema by its path, e.g. "route" or "plugins/limit-count".

        The raw schema text is fetched from ``{base}/{name}`` and cached under
        ``name``.

        Raises:
            NotFoundError: If the Admin API has no such schema.
        """
        try:
            return cast(Schema, self._cluster.cache.get(ResourceKind.SCHEMA, name))
        except NotFoundError:
            self._log.debug("cache_miss_looking_up_remote", name=name)
        except CacheError as e:
            self._log.error("cache_lookup_failed_looking_up_remote", name=name, **describe(e))

        content = await self._cluster.admin.get_text(name)
        schema = Schema(name=name, content=content)
        try:
            self._cluster.cache.insert(ResourceKind.SCHEMA, schema)
        except CacheError as e:
            self._log.error("failed_to_reflect_to_cache", name=name, **describe(e))
            raise
        return schema

    async def get_plugin_schema(self, plugin_name: str) -> Schema:
        return await self.get(f"plugins/{plugin_name}")

    async def get_route_schema(self) -> Schema:
        return await self.get("route")

    async def get_upstream_schema(self) -> Schema:
        return await self.get("upstream")

    async def get_consumer_schema(self) -> Schema:
        return await self.get("consumer")

    async def get_ssl_schema(self) -> Schema:
        return await self.get("ssl")

    async def get_plugin_config_schema(self) -> Schema:
        return await self.get("pluginConfig")

    async def list(self) -> list[Schema]:
        """List the schemas fetched so far (cache only)."""
        return [cast(Schema, item) for item in self._cluster.cache.list(ResourceKind.SCHEMA)]

"""PluginMetadata client for gateway clusters."""

from __future__ import annotations

import builtins
from typing import Any

from gateway_control_client.integrations.admin_api.exceptions import GatewayDecodeError
from gateway_control_client.integrations.admin_api.models.kinds import ResourceKind
from gateway_control_client.integrations.admin_api.models.plugin_metadata import (
    PluginMetadata,
)
from gateway_control_client.services.gateway.base import BaseResourceClient, ListOptions


class PluginMetadataClient(BaseResourceClient[PluginMetadata]):
    """Client for plugin-wide metadata, keyed by plugin name.

    The Admin API body of a plugin metadata object is the metadata document
    itself; the plugin name only appears in the URL.
    """

    _kind = ResourceKind.PLUGIN_METADATA
    _entity_name = "plugin_metadata"
    _model_class = PluginMetadata
    _hash_key = False

    def _decode(self, value: dict[str, Any], key: str = "") -> PluginMetadata:
        return PluginMetadata(name=key, metadata=value)

    async def list(self, options: ListOptions | None = None) -> builtins.list[PluginMetadata]:
        """List plugin metadata.

        The remote collection is answered as ``{"value": {name: metadata}}``
        rather than the usual list envelope.
        """
        if options is not None and options.source == "cache":
            return await super().list(options)

        body = await self._cluster.admin.get_json(self.endpoint)
        value = body.get("value") if isinstance(body, dict) else None
        if value is None or value == []:
            value = {}
        if not isinstance(value, dict):
            raise GatewayDecodeError(
                message="plugin metadata list is not an object", endpoint=self.endpoint
            )
        entries = [
            PluginMetadata(name=name, metadata=metadata) for name, metadata in value.items()
        ]
        self._log.debug("listed_entities", count=len(entries))
        return entries

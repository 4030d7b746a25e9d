"""Plugin name listing for gateway clusters."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from gateway_control_client.integrations.admin_api.exceptions import GatewayDecodeError

if TYPE_CHECKING:
    from gateway_control_client.services.gateway.cluster import Cluster

logger = structlog.get_logger()

PLUGIN_LIST_ENDPOINT = "plugins/list"


class PluginClient:
    """Lists the plugins the gateway has loaded."""

    def __init__(self, cluster: Cluster) -> None:
        self._cluster = cluster
        self._log = logger.bind(cluster=cluster.name, entity="plugin")

    async def list(self) -> list[str]:
        """Return the names of all available plugins.

        The Admin API answers either with a JSON array of names or with an
        object keyed by plugin name; both are accepted.

        Raises:
            GatewayDecodeError: If the body is neither shape.
        """
        body = await self._cluster.admin.get_json(PLUGIN_LIST_ENDPOINT)
        if isinstance(body, dict):
            names = list(body)
        elif isinstance(body, list) and all(isinstance(name, str) for name in body):
            names = body
        else:
            raise GatewayDecodeError(
                message="unexpected plugin list shape", endpoint=PLUGIN_LIST_ENDPOINT
            )
        self._log.debug("listed_plugins", count=len(names))
        return names

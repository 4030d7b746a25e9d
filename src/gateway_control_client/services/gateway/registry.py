"""Registry of gateway clusters addressed by name."""

from __future__ import annotations

import asyncio

import httpx
import structlog

from gateway_control_client.integrations.admin_api.config import (
    ClusterOptions,
    GatewayClientConfig,
)
from gateway_control_client.integrations.admin_api.exceptions import (
    ClusterNotExistError,
    DuplicatedClusterError,
)
from gateway_control_client.integrations.admin_api.models.labels import gen_labels
from gateway_control_client.services.gateway.cluster import Cluster
from gateway_control_client.services.gateway.nonexistent import (
    NON_EXISTENT_CLUSTER,
    NonExistentCluster,
)

logger = structlog.get_logger()


class ClusterRegistry:
    """Holds every cluster the controller talks to.

    The registry is an ordinary object: construct one per controller and
    pass it where it is needed.

    Example:
        ```python
        registry = ClusterRegistry(GatewayClientConfig.from_env())
        options = ClusterOptions(name="g1", base_url="http://gw:9180/apisix/admin")
        await registry.add_cluster(options)

        routes = await registry.cluster("g1").route.list()
        await registry.close()
        ```
    """

    def __init__(
        self,
        config: GatewayClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            config: Settings applied to every cluster.
            transport: Optional httpx transport shared by all clusters. The
                caller keeps ownership of it.
        """
        self.config = config or GatewayClientConfig()
        self._transport = transport
        self._clusters: dict[str, Cluster] = {}
        self._lock = asyncio.Lock()

    async def add_cluster(self, options: ClusterOptions) -> Cluster:
        """Create, start and register a cluster.

        Raises:
            DuplicatedClusterError: If a cluster with that name exists.
        """
        async with self._lock:
            if options.name in self._clusters:
                raise DuplicatedClusterError(f"duplicated cluster: {options.name}")
            cluster = Cluster(options, self.config, transport=self._transport)
            self._clusters[options.name] = cluster
            cluster.start()

        logger.info("cluster_added", cluster=options.name, base_url=options.base_url)
        return cluster

    async def update_cluster(self, options: ClusterOptions) -> Cluster:
        """Replace a registered cluster with one built from ``options``.

        The old cluster is closed once the new one is in place.

        Raises:
            ClusterNotExistError: If no cluster has that name.
        """
        async with self._lock:
            old = self._clusters.get(options.name)
            if old is None:
                raise ClusterNotExistError(f"cluster not exist: {options.name}")
            cluster = Cluster(options, self.config, transport=self._transport)
            self._clusters[options.name] = cluster
            cluster.start()

        await old.close()
        logger.info("cluster_updated", cluster=options.name, base_url=options.base_url)
        return cluster

    async def delete_cluster(self, name: str) -> None:
        """Unregister and close a cluster; unknown names are ignored."""
        async with self._lock:
            cluster = self._clusters.pop(name, None)
        if cluster is None:
            return
        await cluster.close()
        logger.info("cluster_deleted", cluster=name)

    def cluster(self, name: str) -> Cluster | NonExistentCluster:
        """Return the named cluster, or the non-existent cluster stand-in."""
        return self._clusters.get(name, NON_EXISTENT_CLUSTER)

    def list_clusters(self) -> list[Cluster]:
        """Return every registered cluster, ordered by name."""
        return [self._clusters[name] for name in sorted(self._clusters)]

    def owner_labels(self, kind: str, namespace: str, name: str) -> dict[str, str]:
        """Build ownership labels stamped with this registry's controller name."""
        return gen_labels(kind, namespace, name, controller_name=self.config.controller_name)

    async def close(self) -> None:
        """Close every registered cluster."""
        async with self._lock:
            clusters = list(self._clusters.values())
            self._clusters.clear()
        for cluster in clusters:
            await cluster.close()

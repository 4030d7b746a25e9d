"""Gateway service layer - per-cluster resource clients and the cluster registry.

Resource clients coordinate the local cache with the Admin API: reads are
served from the cache when possible, writes go to the Admin API first.
"""

from gateway_control_client.services.gateway.base import (
    BaseResourceClient,
    KindLabel,
    ListOptions,
)
from gateway_control_client.services.gateway.cluster import CacheState, Cluster, SyncState
from gateway_control_client.services.gateway.consumer_client import ConsumerClient
from gateway_control_client.services.gateway.global_rule_client import GlobalRuleClient
from gateway_control_client.services.gateway.nonexistent import (
    NON_EXISTENT_CLUSTER,
    NonExistentCluster,
)
from gateway_control_client.services.gateway.plugin_client import PluginClient
from gateway_control_client.services.gateway.plugin_config_client import PluginConfigClient
from gateway_control_client.services.gateway.plugin_metadata_client import (
    PluginMetadataClient,
)
from gateway_control_client.services.gateway.registry import ClusterRegistry
from gateway_control_client.services.gateway.route_client import RouteClient
from gateway_control_client.services.gateway.schema_client import SchemaClient
from gateway_control_client.services.gateway.service_client import ServiceClient
from gateway_control_client.services.gateway.ssl_client import SSLClient
from gateway_control_client.services.gateway.stream_route_client import StreamRouteClient

__all__ = [
    "NON_EXISTENT_CLUSTER",
    "BaseResourceClient",
    "CacheState",
    "Cluster",
    "ClusterRegistry",
    "ConsumerClient",
    "GlobalRuleClient",
    "KindLabel",
    "ListOptions",
    "NonExistentCluster",
    "PluginClient",
    "PluginConfigClient",
    "PluginMetadataClient",
    "RouteClient",
    "SSLClient",
    "SchemaClient",
    "ServiceClient",
    "StreamRouteClient",
    "SyncState",
]

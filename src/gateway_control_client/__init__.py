"""Async control-plane client for gateway Admin APIs, with a local resource cache."""

from gateway_control_client.__version__ import __version__
from gateway_control_client.integrations.admin_api.config import (
    ClusterOptions,
    GatewayClientConfig,
)
from gateway_control_client.services.gateway.base import KindLabel, ListOptions
from gateway_control_client.services.gateway.cluster import Cluster
from gateway_control_client.services.gateway.registry import ClusterRegistry
from gateway_control_client.utils.idgen import gen_id

__all__ = [
    "Cluster",
    "ClusterOptions",
    "ClusterRegistry",
    "GatewayClientConfig",
    "KindLabel",
    "ListOptions",
    "__version__",
    "gen_id",
]

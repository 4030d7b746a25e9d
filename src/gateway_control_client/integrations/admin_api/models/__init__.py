"""Gateway Admin API entity models.

This package contains Pydantic models for all gateway resource kinds.
"""

from gateway_control_client.integrations.admin_api.models.base import (
    GatewayEntityBase,
    IdentifiedEntity,
)
from gateway_control_client.integrations.admin_api.models.consumer import Consumer
from gateway_control_client.integrations.admin_api.models.global_rule import GlobalRule
from gateway_control_client.integrations.admin_api.models.kinds import ResourceKind
from gateway_control_client.integrations.admin_api.models.labels import (
    LABEL_CONTROLLER_NAME,
    LABEL_KIND,
    LABEL_MANAGED_BY,
    LABEL_NAME,
    LABEL_NAMESPACE,
    OWNER_LABEL_KEYS,
    gen_labels,
)
from gateway_control_client.integrations.admin_api.models.plugin_config import PluginConfig
from gateway_control_client.integrations.admin_api.models.plugin_metadata import (
    PluginMetadata,
)
from gateway_control_client.integrations.admin_api.models.route import Route
from gateway_control_client.integrations.admin_api.models.schema import Schema
from gateway_control_client.integrations.admin_api.models.service import Service
from gateway_control_client.integrations.admin_api.models.ssl import SSL
from gateway_control_client.integrations.admin_api.models.stream_route import StreamRoute

__all__ = [
    "LABEL_CONTROLLER_NAME",
    "LABEL_KIND",
    "LABEL_MANAGED_BY",
    "LABEL_NAME",
    "LABEL_NAMESPACE",
    "OWNER_LABEL_KEYS",
    "SSL",
    "Consumer",
    "GatewayEntityBase",
    "GlobalRule",
    "IdentifiedEntity",
    "PluginConfig",
    "PluginMetadata",
    "ResourceKind",
    "Route",
    "Schema",
    "Service",
    "StreamRoute",
    "gen_labels",
]

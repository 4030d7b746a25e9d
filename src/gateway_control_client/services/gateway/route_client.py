"""Route client for gateway clusters.

Routes are keyed by ``gen_id(name)`` and may reference a Service and a
PluginConfig; those references are what blocks deleting either of them.
"""

from __future__ import annotations

from gateway_control_client.integrations.admin_api.models.kinds import ResourceKind
from gateway_control_client.integrations.admin_api.models.route import Route
from gateway_control_client.services.gateway.base import BaseResourceClient


class RouteClient(BaseResourceClient[Route]):
    """Client for gateway Routes."""

    _kind = ResourceKind.ROUTE
    _entity_name = "route"
    _model_class = Route

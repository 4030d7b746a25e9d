"""StreamRoute client for gateway clusters.

Stream proxying can be switched off on the gateway, in which case every
call raises ``FunctionDisabledError``.
"""

from __future__ import annotations

from gateway_control_client.integrations.admin_api.models.kinds import ResourceKind
from gateway_control_client.integrations.admin_api.models.stream_route import StreamRoute
from gateway_control_client.services.gateway.base import BaseResourceClient


class StreamRouteClient(BaseResourceClient[StreamRoute]):
    """Client for L4 (TCP/UDP) stream routes."""

    _kind = ResourceKind.STREAM_ROUTE
    _entity_name = "stream_route"
    _model_class = StreamRoute

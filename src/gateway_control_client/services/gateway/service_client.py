"""Service client for gateway clusters."""

from __future__ import annotations

from gateway_control_client.integrations.admin_api.models.kinds import ResourceKind
from gateway_control_client.integrations.admin_api.models.service import Service
from gateway_control_client.services.gateway.base import BaseResourceClient


class ServiceClient(BaseResourceClient[Service]):
    """Client for gateway Services (upstream bindings).

    A Service cannot be deleted while any cached Route or StreamRoute still
    points at it; the check runs before any request is sent.
    """

    _kind = ResourceKind.SERVICE
    _entity_name = "service"
    _model_class = Service

    def _check_references(self, entity: Service) -> None:
        self._cluster.cache.check_service_reference(entity)

"""Consumer client for gateway clusters."""

from __future__ import annotations

from gateway_control_client.integrations.admin_api.models.consumer import Consumer
from gateway_control_client.integrations.admin_api.models.kinds import ResourceKind
from gateway_control_client.services.gateway.base import BaseResourceClient


class ConsumerClient(BaseResourceClient[Consumer]):
    """Client for API consumers, keyed by their literal username."""

    _kind = ResourceKind.CONSUMER
    _entity_name = "consumer"
    _model_class = Consumer
    _hash_key = False

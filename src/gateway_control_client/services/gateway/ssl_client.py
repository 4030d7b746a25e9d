"""SSL client for gateway clusters."""

from __future__ import annotations

from gateway_control_client.integrations.admin_api.models.kinds import ResourceKind
from gateway_control_client.integrations.admin_api.models.ssl import SSL
from gateway_control_client.services.gateway.base import BaseResourceClient


class SSLClient(BaseResourceClient[SSL]):
    """Client for TLS certificate/key pairs.

    The caller derives the SSL ID from the certificate content, so ``get``
    takes that content-derived name and hashes it like any other ID.
    """

    _kind = ResourceKind.SSL
    _entity_name = "ssl"
    _model_class = SSL

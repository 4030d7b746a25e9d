"""GlobalRule client for gateway clusters."""

from __future__ import annotations

from gateway_control_client.integrations.admin_api.exceptions import GatewayValidationError
from gateway_control_client.integrations.admin_api.models.global_rule import GlobalRule
from gateway_control_client.integrations.admin_api.models.kinds import ResourceKind
from gateway_control_client.services.gateway.base import BaseResourceClient


class GlobalRuleClient(BaseResourceClient[GlobalRule]):
    """Client for global rules.

    A global rule's ID is the name of its (first) plugin, so ``get`` takes
    the plugin name literally and writes fill the ID in from the plugins.
    """

    _kind = ResourceKind.GLOBAL_RULE
    _entity_name = "global_rule"
    _model_class = GlobalRule
    _hash_key = False

    def _prepare(self, entity: GlobalRule) -> GlobalRule:
        rule_id = entity.derive_id()
        if rule_id is None:
            raise GatewayValidationError("global rule must carry at least one plugin")
        if entity.id != rule_id:
            entity = entity.model_copy(update={"id": rule_id})
        return entity

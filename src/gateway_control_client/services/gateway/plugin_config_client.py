"""PluginConfig client for gateway clusters."""

from __future__ import annotations

from gateway_control_client.integrations.admin_api.models.kinds import ResourceKind
from gateway_control_client.integrations.admin_api.models.plugin_config import PluginConfig
from gateway_control_client.services.gateway.base import BaseResourceClient


class PluginConfigClient(BaseResourceClient[PluginConfig]):
    """Client for reusable plugin bundles referenced by Routes."""

    _kind = ResourceKind.PLUGIN_CONFIG
    _entity_name = "plugin_config"
    _model_class = PluginConfig

    def _check_references(self, entity: PluginConfig) -> None:
        self._cluster.cache.check_plugin_config_reference(entity)

"""Pydantic models for gateway PluginConfigs."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from gateway_control_client.integrations.admin_api.models.base import IdentifiedEntity


class PluginConfig(IdentifiedEntity):
    """Reusable plugin set that Routes reference by ID.

    Attributes:
        name: PluginConfig name (unique within the cluster when set).
        labels: Ownership labels.
        desc: Free-form description.
        plugins: Plugin name to plugin configuration.
    """

    _entity_name: ClassVar[str] = "plugin_config"

    name: str | None = Field(default=None, description="PluginConfig name (unique)")
    labels: dict[str, str] | None = Field(default=None, description="Ownership labels")
    desc: str | None = Field(default=None, description="Description")
    plugins: dict[str, Any] = Field(default_factory=dict, description="Plugins")

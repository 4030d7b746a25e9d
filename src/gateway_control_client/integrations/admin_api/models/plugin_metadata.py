"""Plugin metadata model: plugin-wide settings keyed by plugin name."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from gateway_control_client.integrations.admin_api.models.base import GatewayEntityBase


class PluginMetadata(GatewayEntityBase):
    """Plugin-wide metadata (e.g. a shared log format).

    Attributes:
        name: Plugin name (primary key).
        metadata: Metadata document sent as the request body.
    """

    _entity_name: ClassVar[str] = "plugin_metadata"
    _key_field: ClassVar[str] = "name"

    name: str = Field(..., description="Plugin name")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Plugin metadata")

    def to_payload(self) -> dict[str, Any]:
        """Only the metadata document goes over the wire; the name is in the URL."""
        return dict(self.metadata)

"""Schema model: the raw JSON schema of an Admin API object or plugin."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from gateway_control_client.integrations.admin_api.models.base import GatewayEntityBase


class Schema(GatewayEntityBase):
    """Raw schema document keyed by the schema path.

    Attributes:
        name: Schema path, e.g. "route" or "plugins/limit-count".
        content: Schema JSON text exactly as returned by the Admin API.
    """

    _entity_name: ClassVar[str] = "schema"
    _key_field: ClassVar[str] = "name"

    name: str = Field(..., description="Schema path")
    content: str = Field(default="", description="Raw schema JSON text")

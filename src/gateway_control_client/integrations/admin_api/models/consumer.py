"""Consumer models for gateway entities."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from gateway_control_client.integrations.admin_api.models.base import GatewayEntityBase


class Consumer(GatewayEntityBase):
    """API consumer, keyed by username rather than a generated ID.

    Attributes:
        username: Unique consumer name (primary key).
        labels: Ownership labels.
        desc: Free-form description.
        plugins: Authentication and per-consumer plugins.
    """

    _entity_name: ClassVar[str] = "consumer"
    _key_field: ClassVar[str] = "username"

    username: str | None = Field(default=None, description="Consumer username")
    labels: dict[str, str] | None = Field(default=None, description="Ownership labels")
    desc: str | None = Field(default=None, description="Description")
    plugins: dict[str, Any] | None = Field(default=None, description="Consumer plugins")
    create_time: int | None = Field(default=None, description="Unix timestamp of creation")
    update_time: int | None = Field(default=None, description="Unix timestamp of last update")

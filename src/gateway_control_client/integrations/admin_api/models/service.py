"""Pydantic models for gateway Services.

A Service bundles an upstream (the backend node set plus load-balancing
settings) with service-level plugins. Routes and StreamRoutes reference a
Service by ID, so a Service cannot be deleted while it is still referenced.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from gateway_control_client.integrations.admin_api.models.base import IdentifiedEntity


class Service(IdentifiedEntity):
    """Gateway Service (upstream) entity model.

    Attributes:
        name: Service name (unique within the cluster when set).
        labels: Ownership labels.
        desc: Free-form description.
        hosts: Host names served by this service.
        upstream: Inline upstream definition (nodes, type, timeouts, ...).
        plugins: Plugin name to plugin configuration.
    """

    _entity_name: ClassVar[str] = "service"

    name: str | None = Field(default=None, description="Service name (unique)")
    labels: dict[str, str] | None = Field(default=None, description="Ownership labels")
    desc: str | None = Field(default=None, description="Description")
    hosts: list[str] | None = Field(default=None, description="Served host names")
    upstream: dict[str, Any] | None = Field(default=None, description="Inline upstream")
    plugins: dict[str, Any] | None = Field(default=None, description="Service plugins")

"""Pydantic models for gateway StreamRoutes (L4 TCP/UDP routing)."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from gateway_control_client.integrations.admin_api.models.base import IdentifiedEntity


class StreamRoute(IdentifiedEntity):
    """Layer-4 route forwarding a TCP/UDP stream to a Service.

    Attributes:
        name: StreamRoute name.
        labels: Ownership labels.
        desc: Free-form description.
        server_addr: Local address to match.
        server_port: Local port to match.
        remote_addr: Client address to match.
        sni: TLS SNI to match.
        service_id: Referenced Service ID.
        plugins: Plugin name to plugin configuration.
    """

    _entity_name: ClassVar[str] = "stream_route"

    name: str | None = Field(default=None, description="StreamRoute name")
    labels: dict[str, str] | None = Field(default=None, description="Ownership labels")
    desc: str | None = Field(default=None, description="Description")
    server_addr: str | None = Field(default=None, description="Local address")
    server_port: int | None = Field(default=None, description="Local port")
    remote_addr: str | None = Field(default=None, description="Client address")
    sni: str | None = Field(default=None, description="TLS SNI")
    service_id: str | None = Field(default=None, description="Referenced service")
    plugins: dict[str, Any] | None = Field(default=None, description="Stream plugins")

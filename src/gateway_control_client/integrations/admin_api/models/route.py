"""Pydantic models for gateway Routes.

A Route matches client requests (by URI, host, method, vars) and hands them
to a Service. It may also reference a PluginConfig whose plugins are merged
into the route's own.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field, field_validator

from gateway_control_client.integrations.admin_api.models.base import IdentifiedEntity


class Route(IdentifiedEntity):
    """Gateway Route entity model.

    Attributes:
        name: Route name (unique within the cluster when set).
        labels: Ownership labels.
        desc: Free-form description.
        uris: URI patterns to match.
        hosts: Host headers to match.
        methods: HTTP methods to match.
        priority: Match priority among overlapping routes.
        vars: Expression-style match conditions.
        plugins: Plugin name to plugin configuration.
        timeout: Upstream connect/send/read timeouts.
        enable_websocket: Whether websocket upgrade is proxied.
        status: 1 when enabled, 0 when disabled.
        service_id: Referenced Service ID.
        plugin_config_id: Referenced PluginConfig ID.
    """

    _entity_name: ClassVar[str] = "route"

    name: str | None = Field(default=None, description="Route name (unique)")
    labels: dict[str, str] | None = Field(default=None, description="Ownership labels")
    desc: str | None = Field(default=None, description="Description")

    uris: list[str] | None = Field(default=None, description="URI patterns to match")
    hosts: list[str] | None = Field(default=None, description="Host headers to match")
    methods: list[str] | None = Field(default=None, description="HTTP methods to match")
    priority: int | None = Field(default=None, description="Match priority")
    vars: list[Any] | None = Field(default=None, description="Match expressions")

    plugins: dict[str, Any] | None = Field(default=None, description="Route plugins")
    timeout: dict[str, float] | None = Field(default=None, description="Upstream timeouts")
    enable_websocket: bool | None = Field(default=None, description="Proxy websocket")
    status: int | None = Field(default=None, description="1 enabled, 0 disabled")

    service_id: str | None = Field(default=None, description="Referenced service")
    plugin_config_id: str | None = Field(default=None, description="Referenced plugin config")

    @field_validator("methods", mode="before")
    @classmethod
    def uppercase_methods(cls, v: list[str] | None) -> list[str] | None:
        """Ensure HTTP methods are uppercase."""
        if v is not None:
            return [m.upper() for m in v]
        return v

    @field_validator("vars", mode="before")
    @classmethod
    def normalize_empty_vars(cls, v: Any) -> Any:
        """Accept ``{}`` for an empty vars list.

        The Admin API is backed by lua-cjson, which encodes an empty array
        as an empty object.
        """
        if isinstance(v, dict):
            if v:
                raise ValueError("unexpected non-empty object")
            return []
        return v

"""Resource kinds managed through the gateway Admin API."""

from __future__ import annotations

from enum import StrEnum


class ResourceKind(StrEnum):
    """One cache table and one Admin API collection per kind."""

    ROUTE = "route"
    SERVICE = "service"
    SSL = "ssl"
    STREAM_ROUTE = "stream_route"
    GLOBAL_RULE = "global_rule"
    CONSUMER = "consumer"
    PLUGIN_CONFIG = "plugin_config"
    SCHEMA = "schema"
    PLUGIN_METADATA = "plugin_metadata"

    @property
    def path(self) -> str:
        """Return the Admin API collection path for this kind."""
        return _PATHS[self]


_PATHS: dict[ResourceKind, str] = {
    ResourceKind.ROUTE: "routes",
    ResourceKind.SERVICE: "services",
    ResourceKind.SSL: "ssls",
    ResourceKind.STREAM_ROUTE: "stream_routes",
    ResourceKind.GLOBAL_RULE: "global_rules",
    ResourceKind.CONSUMER: "consumers",
    ResourceKind.PLUGIN_CONFIG: "plugin_configs",
    ResourceKind.SCHEMA: "schema",
    ResourceKind.PLUGIN_METADATA: "plugin_metadata",
}

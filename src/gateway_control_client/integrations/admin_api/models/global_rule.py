"""Pydantic models for gateway GlobalRules."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from gateway_control_client.integrations.admin_api.models.base import IdentifiedEntity


class GlobalRule(IdentifiedEntity):
    """Plugins applied to every request handled by the gateway.

    The Admin API requires the ID to equal the name of the rule's plugin,
    so one global rule carries exactly one logical plugin.

    Attributes:
        plugins: Plugin name to plugin configuration (at least one).
    """

    _entity_name: ClassVar[str] = "global_rule"

    plugins: dict[str, Any] = Field(default_factory=dict, description="Global plugins")

    def derive_id(self) -> str | None:
        """Return the ID dictated by the plugin set (its first plugin name)."""
        return next(iter(self.plugins), None)

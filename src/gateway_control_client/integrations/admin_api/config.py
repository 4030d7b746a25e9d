"""Gateway control-plane configuration models."""

from __future__ import annotations

import os
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_CLUSTER_NAME = "default"


class ClusterOptions(BaseModel):
    """Connection settings for one gateway cluster (admin endpoint)."""

    model_config = ConfigDict(extra="forbid")

    name: str = DEFAULT_CLUSTER_NAME
    base_url: str
    admin_key: str | None = None
    admin_api_version: Literal["v2", "v3"] = "v3"
    timeout: float = 5.0
    connect_timeout: float = 3.0
    verify_ssl: bool = True
    sync_cache: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Fall back to the default cluster name when empty."""
        return v or DEFAULT_CLUSTER_NAME

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base URL format."""
        if not v:
            raise ValueError("empty base url")
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("timeout", "connect_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeouts are positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v


class GatewayClientConfig(BaseModel):
    """Registry-wide settings shared by every cluster.

    Passed explicitly to ``ClusterRegistry``; nothing here is process-global.
    """

    model_config = ConfigDict(extra="forbid")

    sync_attempts: int = 5
    sync_backoff: float = 2.0
    sync_backoff_factor: float = 1.0
    sync_backoff_max: float = 30.0
    health_check_attempts: int = 3
    health_check_backoff: float = 5.0
    probe_timeout: float = 3.0
    controller_name: str = "gateway-control-client"

    @field_validator("sync_attempts", "health_check_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        """Validate retry budgets allow at least one attempt."""
        if v < 1:
            raise ValueError("attempts must be at least 1")
        return v

    @field_validator("sync_backoff", "health_check_backoff", "sync_backoff_max")
    @classmethod
    def validate_backoff(cls, v: float) -> float:
        """Validate backoff durations are non-negative."""
        if v < 0:
            raise ValueError("backoff must be non-negative")
        return v

    @field_validator("sync_backoff_factor")
    @classmethod
    def validate_backoff_factor(cls, v: float) -> float:
        """Validate the backoff growth factor."""
        if v < 1:
            raise ValueError("sync_backoff_factor must be >= 1")
        return v

    @field_validator("probe_timeout")
    @classmethod
    def validate_probe_timeout(cls, v: float) -> float:
        """Validate probe timeout is positive."""
        if v <= 0:
            raise ValueError("probe_timeout must be positive")
        return v

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> GatewayClientConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            GATEWAY_SYNC_ATTEMPTS: Warm-sync attempt budget
            GATEWAY_SYNC_BACKOFF: Initial warm-sync backoff in seconds
            GATEWAY_HEALTH_CHECK_ATTEMPTS: Health probe attempt budget
            GATEWAY_CONTROLLER_NAME: Controller name stamped into labels
        """
        config_dict = base_config.copy() if base_config else {}

        if attempts := os.environ.get("GATEWAY_SYNC_ATTEMPTS"):
            config_dict["sync_attempts"] = attempts

        if backoff := os.environ.get("GATEWAY_SYNC_BACKOFF"):
            config_dict["sync_backoff"] = backoff

        if probes := os.environ.get("GATEWAY_HEALTH_CHECK_ATTEMPTS"):
            config_dict["health_check_attempts"] = probes

        if controller_name := os.environ.get("GATEWAY_CONTROLLER_NAME"):
            config_dict["controller_name"] = controller_name

        return cls.model_validate(config_dict)

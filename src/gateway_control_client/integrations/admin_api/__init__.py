"""Gateway Admin API integration - HTTP client, envelopes and API models."""

from gateway_control_client.integrations.admin_api.client import AdminAPIClient
from gateway_control_client.integrations.admin_api.config import (
    ClusterOptions,
    GatewayClientConfig,
)
from gateway_control_client.integrations.admin_api.exceptions import (
    CacheError,
    CacheIndexError,
    ClusterNotExistError,
    DuplicatedClusterError,
    DuplicateKeyError,
    FunctionDisabledError,
    GatewayAPIError,
    GatewayConnectionError,
    GatewayDecodeError,
    GatewayError,
    GatewayValidationError,
    NotFoundError,
    StillInUseError,
    SyncStateError,
)

__all__ = [
    "AdminAPIClient",
    "CacheError",
    "CacheIndexError",
    "ClusterNotExistError",
    "ClusterOptions",
    "DuplicateKeyError",
    "DuplicatedClusterError",
    "FunctionDisabledError",
    "GatewayAPIError",
    "GatewayClientConfig",
    "GatewayConnectionError",
    "GatewayDecodeError",
    "GatewayError",
    "GatewayValidationError",
    "NotFoundError",
    "StillInUseError",
    "SyncStateError",
]

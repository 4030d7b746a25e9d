"""Gateway Admin API custom exceptions."""

from __future__ import annotations

from typing import Any


class GatewayError(Exception):
    """Base exception for gateway control-plane errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from the Admin API (if applicable).
        response_body: Raw response body text from the Admin API (if available).
        endpoint: The API endpoint that was called.
    """

    default_message = "Gateway control-plane error"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        response_body: str | None = None,
        endpoint: str | None = None,
    ) -> None:
        """Initialize GatewayError.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code from the Admin API.
            response_body: Raw response body from the Admin API.
            endpoint: The API endpoint that was called.
        """
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.endpoint = endpoint

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        if self.endpoint:
            parts.append(f"[endpoint: {self.endpoint}]")
        return " ".join(parts)


class ClusterNotExistError(GatewayError):
    """Raised by every operation on a cluster that was never registered."""

    default_message = "cluster not exist"


class DuplicatedClusterError(GatewayError):
    """Raised when registering a cluster under a name that is already taken."""

    default_message = "duplicated cluster"


class FunctionDisabledError(GatewayError):
    """Raised when the Admin API reports the requested feature as disabled.

    The Admin API answers with a body containing ``is disabled`` instead of
    the usual envelope, e.g. when stream routes are switched off.
    """

    default_message = "function disabled"


class NotFoundError(GatewayError):
    """Raised when a resource is absent from the cache or the Admin API.

    A remote 404 on get and a cache miss are deliberately the same error,
    so callers handle "absent" uniformly.
    """

    default_message = "not found"

    def __init__(
        self,
        message: str | None = None,
        resource_type: str | None = None,
        resource_id: str | None = None,
        response_body: str | None = None,
        endpoint: str | None = None,
    ) -> None:
        """Initialize NotFoundError.

        Args:
            message: Human-readable error message.
            resource_type: Kind of resource (e.g., "route", "consumer").
            resource_id: Key of the resource.
            response_body: Raw response body from the Admin API.
            endpoint: The API endpoint that was called.
        """
        if resource_type and resource_id:
            message = f"{resource_type} '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404 if endpoint else None,
            response_body=response_body,
            endpoint=endpoint,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class StillInUseError(GatewayError):
    """Raised when deleting a service or plugin config that is still referenced."""

    default_message = "still in use"


class GatewayAPIError(GatewayError):
    """Raised for any unexpected non-2xx Admin API response.

    Carries the status code and the response body text.
    """

    default_message = "unexpected Admin API response"


class GatewayConnectionError(GatewayError):
    """Raised when the Admin API cannot be reached.

    This includes network errors, timeouts, and DNS resolution failures.
    """

    default_message = "Failed to connect to Admin API"

    def __init__(
        self,
        message: str | None = None,
        endpoint: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize GatewayConnectionError.

        Args:
            message: Human-readable error message.
            endpoint: The API endpoint that was attempted.
            original_error: The original exception that caused this error.
        """
        super().__init__(message=message, endpoint=endpoint)
        self.original_error = original_error


class GatewayDecodeError(GatewayError):
    """Raised when a response body is not a decodable envelope."""

    default_message = "failed to decode Admin API response"


class GatewayValidationError(GatewayError):
    """Raised when an object fails local validation before any request."""

    default_message = "invalid resource"


class SyncStateError(GatewayError):
    """Internal invariant violation: the cache sync state changed twice."""

    default_message = "dubious state when sync cache"


class CacheError(GatewayError):
    """Base class for local cache errors other than not-found/still-in-use."""

    default_message = "cache error"


class DuplicateKeyError(CacheError):
    """Raised when a unique secondary index value is held by another object."""

    default_message = "duplicate value for unique index"


class CacheIndexError(CacheError):
    """Raised for an unknown table/index or badly shaped index arguments."""

    default_message = "invalid cache index query"


def describe(error: BaseException) -> dict[str, Any]:
    """Flatten an error into log-friendly key/value pairs."""
    info: dict[str, Any] = {"error": str(error), "error_type": type(error).__name__}
    if isinstance(error, GatewayError) and error.status_code:
        info["status_code"] = error.status_code
    return info

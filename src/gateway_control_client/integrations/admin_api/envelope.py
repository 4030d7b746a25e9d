"""Admin API response envelopes.

Single-object responses (get/create/update) are wrapped as
``{"key": ..., "value": {...}}``; collection responses as
``{"total": "<int>", "list": [...]}``. Depending on the admin API version,
list items are either bare objects or ``{"key", "value"}`` wrappers; both
are accepted here so callers never branch on the version.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gateway_control_client.integrations.admin_api.exceptions import GatewayDecodeError
from gateway_control_client.integrations.admin_api.models.base import GatewayEntityBase

T = TypeVar("T", bound=GatewayEntityBase)

FUNCTION_DISABLED_MARKER = "is disabled"


def is_function_disabled(body: str) -> bool:
    """Check whether a response body reports a disabled Admin API feature."""
    return FUNCTION_DISABLED_MARKER in body


class GetResponse(BaseModel):
    """Envelope around a single resource."""

    model_config = ConfigDict(extra="allow")

    key: str = ""
    value: dict[str, Any] = Field(default_factory=dict)


class ListResponse(BaseModel):
    """Envelope around a resource collection.

    Attributes:
        total: Number of items (the Admin API sends it as a string).
        items: Raw list entries.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    total: int = 0
    items: list[dict[str, Any]] = Field(default_factory=list, alias="list")

    @field_validator("total", mode="before")
    @classmethod
    def parse_total(cls, v: Any) -> Any:
        """Accept the total as an int or a quoted int."""
        if isinstance(v, str):
            return int(v.strip().strip('"'))
        return v

    @field_validator("items", mode="before")
    @classmethod
    def normalize_empty_list(cls, v: Any) -> Any:
        """lua-cjson encodes an empty array as ``{}``."""
        if v is None or v == {}:
            return []
        return v

    def values(self) -> Iterator[dict[str, Any]]:
        """Yield each item's resource body, unwrapping ``{key, value}`` entries."""
        for item in self.items:
            value = item.get("value")
            if "key" in item and isinstance(value, dict):
                yield value
            else:
                yield item


def _load(body: str | bytes, endpoint: str) -> Any:
    try:
        return json.loads(body)
    except ValueError as e:
        raise GatewayDecodeError(
            message=f"invalid JSON in Admin API response: {e}",
            response_body=body.decode(errors="replace") if isinstance(body, bytes) else body,
            endpoint=endpoint,
        ) from e


def decode_get(body: str | bytes, endpoint: str = "") -> GetResponse:
    """Decode a single-object envelope.

    Raises:
        GatewayDecodeError: If the body is not a JSON ``{key, value}`` object.
    """
    data = _load(body, endpoint)
    try:
        return GetResponse.model_validate(data)
    except ValidationError as e:
        raise GatewayDecodeError(message=f"bad get envelope: {e}", endpoint=endpoint) from e


def decode_list(body: str | bytes, endpoint: str = "") -> ListResponse:
    """Decode a collection envelope.

    Raises:
        GatewayDecodeError: If the body is not a JSON ``{total, list}`` object.
    """
    data = _load(body, endpoint)
    try:
        return ListResponse.model_validate(data)
    except (ValidationError, ValueError) as e:
        raise GatewayDecodeError(message=f"bad list envelope: {e}", endpoint=endpoint) from e


def decode_object(
    model_class: type[T],
    value: dict[str, Any],
    endpoint: str = "",
) -> T:
    """Convert one resource body into its model.

    Raises:
        GatewayDecodeError: If the body does not match the model.
    """
    try:
        return model_class.model_validate(value)
    except ValidationError as e:
        raise GatewayDecodeError(
            message=f"failed to convert {model_class._entity_name} item: {e}",
            endpoint=endpoint,
        ) from e

"""Base models for gateway Admin API entities.

This module provides common base classes for all resource models. Every
entity exposes a primary key (``primary_key``), an ownership label map
(``owner_labels``), deep cloning, and JSON payload serialization.
"""

from __future__ import annotations

from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field


class GatewayEntityBase(BaseModel):
    """Base class for all gateway entity models.

    Unknown fields returned by the Admin API are kept (``extra="allow"``) so
    that server-side defaults survive a read-modify-write cycle.

    Class Attributes:
        _entity_name: Human-readable entity name for logging and errors.
        _key_field: Name of the field holding the primary key.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
    )

    _entity_name: ClassVar[str] = "entity"
    _key_field: ClassVar[str] = "id"

    @property
    def primary_key(self) -> str:
        """Return the cache/Admin API primary key ("" when unset)."""
        value = getattr(self, self._key_field, None)
        return "" if value is None else str(value)

    @property
    def owner_labels(self) -> dict[str, str]:
        """Return the ownership labels, or an empty map for unlabelled kinds."""
        labels = getattr(self, "labels", None)
        return dict(labels) if labels else {}

    def clone(self) -> Self:
        """Return an independent deep copy."""
        return self.model_copy(deep=True)

    def to_payload(self) -> dict[str, Any]:
        """Convert model to a JSON-ready request body, dropping unset fields."""
        return self.model_dump(mode="json", exclude_none=True)


class IdentifiedEntity(GatewayEntityBase):
    """Entity keyed by an opaque Admin API ID.

    Attributes:
        id: Primary key assigned by the caller (usually a hashed name).
        create_time: Unix timestamp of creation (server-assigned).
        update_time: Unix timestamp of last update (server-assigned).
    """

    id: str | None = Field(default=None, description="Unique identifier")
    create_time: int | None = Field(default=None, description="Unix timestamp of creation")
    update_time: int | None = Field(default=None, description="Unix timestamp of last update")

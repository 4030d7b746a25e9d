"""Base resource client for gateway clusters.

This module provides an abstract base class implementing read-through /
write-through access to one resource kind of one cluster. Reads are served
from the local cache when possible; writes go to the Admin API first and are
reflected into the cache only once the Admin API has confirmed them.
"""

from __future__ import annotations

import builtins
from abc import ABC
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Literal, TypeVar, cast

import structlog
from pydantic import BaseModel, ConfigDict

from gateway_control_client.cache.schema import LABEL_INDEX
from gateway_control_client.integrations.admin_api.envelope import decode_object
from gateway_control_client.integrations.admin_api.exceptions import (
    CacheError,
    GatewayValidationError,
    NotFoundError,
    describe,
)
from gateway_control_client.integrations.admin_api.models.base import GatewayEntityBase
from gateway_control_client.integrations.admin_api.models.kinds import ResourceKind
from gateway_control_client.utils.idgen import gen_id

if TYPE_CHECKING:
    from gateway_control_client.services.gateway.cluster import Cluster

logger = structlog.get_logger()

T = TypeVar("T", bound=GatewayEntityBase)


class KindLabel(BaseModel):
    """Identity of the Kubernetes object that owns a set of resources."""

    model_config = ConfigDict(frozen=True)

    kind: str
    namespace: str
    name: str


class ListOptions(BaseModel):
    """Options for ``list``.

    Attributes:
        source: "remote" lists the Admin API collection; "cache" lists the
            local mirror only.
        kind_label: With ``source="cache"``, restrict the listing to objects
            owned by this Kubernetes object (label index).
    """

    source: Literal["remote", "cache"] = "remote"
    kind_label: KindLabel | None = None


class BaseResourceClient(ABC, Generic[T]):
    """Abstract base class for per-kind resource clients.

    Type Parameters:
        T: The Pydantic model class for this resource kind.

    Class Attributes:
        _kind: Cache table and Admin API collection of this client.
        _entity_name: Human-readable entity name for logging.
        _model_class: Pydantic model class for decoding responses.
        _hash_key: Whether ``get(name)`` looks up ``gen_id(name)`` rather
            than the literal name.

    Example:
        >>> class ServiceClient(BaseResourceClient[Service]):
        ...     _kind = ResourceKind.SERVICE
        ...     _entity_name = "service"
        ...     _model_class = Service
    """

    _kind: ClassVar[ResourceKind]
    _entity_name: ClassVar[str] = ""
    _model_class: type[T]
    _hash_key: ClassVar[bool] = True

    def __init__(self, cluster: Cluster) -> None:
        """Initialize the resource client.

        Args:
            cluster: Owning cluster (provides the HTTP client, cache and
                warm-sync gate).
        """
        self._cluster = cluster
        self._log = logger.bind(cluster=cluster.name, entity=self._entity_name)

    @property
    def endpoint(self) -> str:
        """Return the Admin API collection path for this kind."""
        return self._kind.path

    def _key_for(self, name: str) -> str:
        return gen_id(name) if self._hash_key else name

    def _url(self, key: str) -> str:
        return f"{self.endpoint}/{key}"

    def _decode(self, value: dict[str, Any], key: str = "") -> T:
        """Convert one Admin API resource body into the model."""
        return decode_object(self._model_class, value, self.endpoint)

    def _reflect(self, entity: T) -> None:
        """Insert a remote-confirmed object into the cache."""
        try:
            self._cluster.cache.insert(self._kind, entity)
        except CacheError as e:
            self._log.error("failed_to_reflect_to_cache", key=entity.primary_key, **describe(e))
            raise

    def _check_references(self, entity: T) -> None:
        """Refuse a delete that would orphan referencing objects (no-op by default)."""

    def _prepare(self, entity: T) -> T:
        """Validate an object before it is written (requires a primary key)."""
        if not entity.primary_key:
            raise GatewayValidationError(f"{self._entity_name} has no primary key")
        return entity

    async def get(self, name: str) -> T:
        """Get one object, from the cache if present, else from the Admin API.

        Args:
            name: Object name; hashed into the key for ID-keyed kinds.

        Returns:
            The object. A remote hit is stored in the cache.

        Raises:
            NotFoundError: If the Admin API does not know the object.
        """
        key = self._key_for(name)
        if not key:
            raise NotFoundError(f"{self._entity_name} has no name")
        try:
            return cast(T, self._cluster.cache.get(self._kind, key))
        except NotFoundError:
            self._log.debug("cache_miss_looking_up_remote", name=name, key=key)
        except CacheError as e:
            self._log.error("cache_lookup_failed_looking_up_remote", name=name, **describe(e))

        try:
            envelope = await self._cluster.admin.get_resource(self._url(key))
        except NotFoundError:
            self._log.debug("entity_not_found", name=name, key=key)
            raise
        entity = self._decode(envelope.value, key)
        self._reflect(entity)
        return entity

    async def list(self, options: ListOptions | None = None) -> builtins.list[T]:
        """List objects of this kind.

        Args:
            options: Listing source and filter; defaults to the full remote
                collection.

        Returns:
            Decoded objects (never cached by this call).
        """
        options = options or ListOptions()
        if options.source == "cache":
            label = options.kind_label
            if label is None:
                items = self._cluster.cache.list(self._kind)
            else:
                items = self._cluster.cache.list(
                    self._kind, LABEL_INDEX, label.kind, label.namespace, label.name
                )
            self._log.debug("listed_entities_from_cache", count=len(items))
            return [cast(T, item) for item in items]

        envelope = await self._cluster.admin.list_resource(self.endpoint)
        entities = [self._decode(value) for value in envelope.values()]
        self._log.debug("listed_entities", count=len(entities), total=envelope.total)
        return entities

    async def _write(self, entity: T, event: str) -> T:
        entity = self._prepare(entity)
        await self._cluster.has_synced()

        key = entity.primary_key
        self._log.debug(event, key=key)
        envelope = await self._cluster.admin.put_resource(self._url(key), entity.to_payload())
        confirmed = self._decode(envelope.value, key)
        self._reflect(confirmed)
        return confirmed

    async def create(self, entity: T) -> T:
        """Create an object (PUT by key) and cache the confirmed result.

        Returns:
            The object as confirmed by the Admin API.
        """
        created = await self._write(entity, "creating_entity")
        self._log.info("created_entity", key=created.primary_key)
        return created

    async def update(self, entity: T) -> T:
        """Replace an object (PUT by key) and cache the confirmed result.

        Returns:
            The object as confirmed by the Admin API.
        """
        updated = await self._write(entity, "updating_entity")
        self._log.info("updated_entity", key=updated.primary_key)
        return updated

    async def delete(self, entity: T) -> None:
        """Delete an object remotely, then drop it from the cache.

        Deleting an object the Admin API no longer has is a success.

        Raises:
            GatewayValidationError: If the object has no primary key.
            StillInUseError: If other cached objects still reference it, or
                the Admin API refuses for the same reason.
        """
        if not entity.primary_key:
            raise GatewayValidationError(f"{self._entity_name} has no primary key")
        self._check_references(entity)
        await self._cluster.has_synced()

        key = entity.primary_key
        self._log.debug("deleting_entity", key=key)
        await self._cluster.admin.delete_resource(self._url(key))

        try:
            self._cluster.cache.delete(self._kind, entity)
        except NotFoundError:
            pass
        except CacheError as e:
            self._log.error("failed_to_reflect_delete_to_cache", key=key, **describe(e))
            raise
        self._log.info("deleted_entity", key=key)

"""In-memory, indexed mirror of a cluster's gateway resources.

Each resource kind lives in its own table (see ``cache.schema``). Every
mutation runs under one re-entrant lock, so an insert or delete either fully
applies or leaves the table untouched. Objects are deep-copied on the way in
and on the way out; callers never share state with the cache.
"""

from __future__ import annotations

import builtins
import threading

import structlog

from gateway_control_client.cache.schema import (
    ID_INDEX,
    PLUGIN_CONFIG_ID_INDEX,
    SCHEMA,
    SERVICE_ID_INDEX,
    TableSchema,
)
from gateway_control_client.integrations.admin_api.exceptions import (
    CacheIndexError,
    DuplicateKeyError,
    NotFoundError,
    StillInUseError,
)
from gateway_control_client.integrations.admin_api.models.base import GatewayEntityBase
from gateway_control_client.integrations.admin_api.models.kinds import ResourceKind

logger = structlog.get_logger()


class _Table:
    """Rows keyed by primary key plus one value -> keys map per index."""

    def __init__(self, schema: TableSchema) -> None:
        self.schema = schema
        self.rows: dict[str, GatewayEntityBase] = {}
        self.indexes: dict[str, dict[str, set[str]]] = {name: {} for name in schema.indexes}

    def index_values(self, obj: GatewayEntityBase) -> dict[str, str]:
        values: dict[str, str] = {}
        for name, index in self.schema.indexes.items():
            value = index.indexer.from_object(obj)
            if value is None:
                if not index.allow_missing:
                    raise CacheIndexError(
                        f"missing value for required index '{name}' in table '{self.schema.name}'"
                    )
                continue
            values[name] = value
        return values

    def link(self, key: str, values: dict[str, str]) -> None:
        for name, value in values.items():
            self.indexes[name].setdefault(value, set()).add(key)

    def unlink(self, key: str) -> None:
        obj = self.rows.get(key)
        if obj is None:
            return
        for name, value in self.index_values(obj).items():
            holders = self.indexes[name].get(value)
            if holders is None:
                continue
            holders.discard(key)
            if not holders:
                del self.indexes[name][value]

    def has_value(self, index: str, value: str) -> bool:
        return bool(self.indexes[index].get(value))


class Cache:
    """Indexed local cache of gateway resources.

    Example:
        ```python
        cache = Cache()
        cache.insert(ResourceKind.ROUTE, Route(id="1", name="r1", service_id="s1"))
        route = cache.get(ResourceKind.ROUTE, "1")
        owned = cache.list(ResourceKind.ROUTE, "label", "HTTPRoute", "default", "web")
        ```
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._tables: dict[ResourceKind, _Table] = {
            kind: _Table(schema) for kind, schema in SCHEMA.items()
        }
        self._log = logger.bind(component="cache")

    def _table(self, kind: ResourceKind | str) -> _Table:
        try:
            return self._tables[ResourceKind(kind)]
        except ValueError as e:
            raise CacheIndexError(f"unknown table '{kind}'") from e

    def insert(self, kind: ResourceKind | str, obj: GatewayEntityBase) -> None:
        """Insert or replace an object by its primary key.

        Raises:
            DuplicateKeyError: If a unique index value (e.g. the name) is held
                by another object. The table is left unchanged.
            CacheIndexError: If the kind is unknown or the primary key is missing.
        """
        table = self._table(kind)
        stored = obj.clone()

        with self._lock:
            values = table.index_values(stored)
            key = values[ID_INDEX]

            for name, value in values.items():
                index = table.schema.indexes[name]
                if name == ID_INDEX or not index.unique:
                    continue
                holders = table.indexes[name].get(value, set()) - {key}
                if holders:
                    raise DuplicateKeyError(
                        f"{table.schema.name} {name} '{value}' already used by '{min(holders)}'"
                    )

            table.unlink(key)
            table.rows[key] = stored
            table.link(key, values)

        self._log.debug("cache_insert", table=table.schema.name, key=key)

    def get(self, kind: ResourceKind | str, key: str) -> GatewayEntityBase:
        """Return a copy of the object stored under ``key``.

        Raises:
            NotFoundError: If no object has that key.
        """
        table = self._table(kind)
        with self._lock:
            obj = table.rows.get(key)
            if obj is None:
                raise NotFoundError(resource_type=table.schema.name, resource_id=key)
            return obj.clone()

    def list(
        self,
        kind: ResourceKind | str,
        index: str = ID_INDEX,
        *args: str,
    ) -> builtins.list[GatewayEntityBase]:
        """List objects through an index.

        Without ``args`` every object having a value for ``index`` is returned,
        ordered by that value. With ``args`` only objects whose index value
        equals the one built from ``args`` are returned.

        Raises:
            CacheIndexError: For an unknown kind or index, or badly shaped args.
        """
        table = self._table(kind)
        index_schema = table.schema.indexes.get(index)
        if index_schema is None:
            raise CacheIndexError(f"unknown index '{index}' on table '{table.schema.name}'")

        with self._lock:
            entries = table.indexes[index]
            if args:
                value = index_schema.indexer.from_args(*args)
                keys = sorted(entries.get(value, ()))
            else:
                keys = [key for value in sorted(entries) for key in sorted(entries[value])]
            return [table.rows[key].clone() for key in keys]

    def delete(self, kind: ResourceKind | str, obj: GatewayEntityBase) -> None:
        """Remove an object, refusing while other objects still reference it.

        Raises:
            NotFoundError: If the object is not cached.
            StillInUseError: If a route (or stream route) still references the
                service or plugin config being deleted.
        """
        table = self._table(kind)
        key = obj.primary_key

        with self._lock:
            if key not in table.rows:
                raise NotFoundError(resource_type=table.schema.name, resource_id=key)
            if table.schema.name == ResourceKind.SERVICE:
                self.check_service_reference(obj)
            elif table.schema.name == ResourceKind.PLUGIN_CONFIG:
                self.check_plugin_config_reference(obj)

            table.unlink(key)
            del table.rows[key]

        self._log.debug("cache_delete", table=table.schema.name, key=key)

    def check_service_reference(self, service: GatewayEntityBase) -> None:
        """Raise StillInUseError if any route or stream route uses ``service``."""
        service_id = service.primary_key
        with self._lock:
            for kind in (ResourceKind.ROUTE, ResourceKind.STREAM_ROUTE):
                if self._tables[kind].has_value(SERVICE_ID_INDEX, service_id):
                    raise StillInUseError(f"service '{service_id}' is still used by a {kind}")

    def check_plugin_config_reference(self, plugin_config: GatewayEntityBase) -> None:
        """Raise StillInUseError if any route uses ``plugin_config``."""
        plugin_config_id = plugin_config.primary_key
        with self._lock:
            if self._tables[ResourceKind.ROUTE].has_value(PLUGIN_CONFIG_ID_INDEX, plugin_config_id):
                raise StillInUseError(
                    f"plugin config '{plugin_config_id}' is still used by a route"
                )

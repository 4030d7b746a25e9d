"""Declarative table and index layout of the local cache."""

from __future__ import annotations

from dataclasses import dataclass, field

from gateway_control_client.cache.indexer import FieldIndexer, Indexer, LabelIndexer
from gateway_control_client.integrations.admin_api.models.kinds import ResourceKind

ID_INDEX = "id"
NAME_INDEX = "name"
LABEL_INDEX = "label"
SERVICE_ID_INDEX = "service_id"
PLUGIN_CONFIG_ID_INDEX = "plugin_config_id"


@dataclass(frozen=True)
class IndexSchema:
    """One index of a table.

    Attributes:
        name: Index name used in queries.
        indexer: Extracts the indexed value.
        unique: At most one object per value.
        allow_missing: Objects without a value are allowed (and not indexed).
    """

    name: str
    indexer: Indexer
    unique: bool = False
    allow_missing: bool = False


@dataclass(frozen=True)
class TableSchema:
    """A cache table: its name and indexes (``id`` is the primary key)."""

    name: str
    indexes: dict[str, IndexSchema] = field(default_factory=dict)

    @property
    def primary(self) -> IndexSchema:
        return self.indexes[ID_INDEX]


def _id(attr: str = "primary_key") -> IndexSchema:
    return IndexSchema(ID_INDEX, FieldIndexer(attr), unique=True)


def _name() -> IndexSchema:
    return IndexSchema(NAME_INDEX, FieldIndexer("name"), unique=True, allow_missing=True)


def _ref(attr: str) -> IndexSchema:
    return IndexSchema(attr, FieldIndexer(attr), allow_missing=True)


def _label() -> IndexSchema:
    return IndexSchema(LABEL_INDEX, LabelIndexer(), allow_missing=True)


def _table(kind: ResourceKind, *indexes: IndexSchema) -> TableSchema:
    return TableSchema(name=str(kind), indexes={index.name: index for index in indexes})


SCHEMA: dict[ResourceKind, TableSchema] = {
    ResourceKind.ROUTE: _table(
        ResourceKind.ROUTE,
        _id(),
        _name(),
        _ref(SERVICE_ID_INDEX),
        _ref(PLUGIN_CONFIG_ID_INDEX),
        _label(),
    ),
    ResourceKind.SERVICE: _table(ResourceKind.SERVICE, _id(), _name(), _label()),
    ResourceKind.SSL: _table(ResourceKind.SSL, _id(), _label()),
    ResourceKind.STREAM_ROUTE: _table(
        ResourceKind.STREAM_ROUTE, _id(), _ref(SERVICE_ID_INDEX), _label()
    ),
    ResourceKind.GLOBAL_RULE: _table(ResourceKind.GLOBAL_RULE, _id()),
    ResourceKind.CONSUMER: _table(ResourceKind.CONSUMER, _id(), _label()),
    ResourceKind.PLUGIN_CONFIG: _table(ResourceKind.PLUGIN_CONFIG, _id(), _name(), _label()),
    ResourceKind.SCHEMA: _table(ResourceKind.SCHEMA, _id()),
    ResourceKind.PLUGIN_METADATA: _table(ResourceKind.PLUGIN_METADATA, _id()),
}

"""Local in-memory cache of gateway resources."""

from gateway_control_client.cache.indexer import FieldIndexer, LabelIndexer
from gateway_control_client.cache.memdb import Cache
from gateway_control_client.cache.schema import (
    ID_INDEX,
    LABEL_INDEX,
    NAME_INDEX,
    PLUGIN_CONFIG_ID_INDEX,
    SCHEMA,
    SERVICE_ID_INDEX,
    IndexSchema,
    TableSchema,
)

__all__ = [
    "ID_INDEX",
    "LABEL_INDEX",
    "NAME_INDEX",
    "PLUGIN_CONFIG_ID_INDEX",
    "SCHEMA",
    "SERVICE_ID_INDEX",
    "Cache",
    "FieldIndexer",
    "IndexSchema",
    "LabelIndexer",
    "TableSchema",
]

"""Index key extraction for the local cache.

An indexer turns an object into the value it is indexed under
(``from_object``) and turns query arguments into the same shape
(``from_args``). ``None`` from ``from_object`` means the object has no value
for the index and is left out of it.
"""

from __future__ import annotations

from typing import Any, Protocol

from gateway_control_client.integrations.admin_api.exceptions import CacheIndexError
from gateway_control_client.integrations.admin_api.models.labels import OWNER_LABEL_KEYS

LABEL_SEPARATOR = "/"


class Indexer(Protocol):
    """Extracts index values from objects and query arguments."""

    def from_object(self, obj: Any) -> str | None: ...

    def from_args(self, *args: Any) -> str: ...


class FieldIndexer:
    """Index on a single string attribute; empty strings count as missing."""

    def __init__(self, field: str) -> None:
        self.field = field

    def from_object(self, obj: Any) -> str | None:
        value = getattr(obj, self.field, None)
        if value is None or value == "":
            return None
        return str(value)

    def from_args(self, *args: Any) -> str:
        if len(args) != 1:
            raise CacheIndexError(
                f"expected 1 argument for index on '{self.field}', got {len(args)}"
            )
        value = args[0]
        if not isinstance(value, str):
            raise CacheIndexError(f"argument for index on '{self.field}' is not a string")
        return value

    def __repr__(self) -> str:
        return f"FieldIndexer({self.field!r})"


class LabelIndexer:
    """Index on a fixed sequence of label values joined by ``/``.

    Label keys absent from an object are skipped; an object carrying none of
    them is not indexed. Queries must supply exactly one value per key.
    """

    def __init__(self, label_keys: tuple[str, ...] = OWNER_LABEL_KEYS) -> None:
        self.label_keys = label_keys

    def from_object(self, obj: Any) -> str | None:
        labels = getattr(obj, "owner_labels", None) or {}
        values = [labels[key] for key in self.label_keys if key in labels]
        if not values:
            return None
        return LABEL_SEPARATOR.join(values)

    def from_args(self, *args: Any) -> str:
        if len(args) != len(self.label_keys):
            raise CacheIndexError(
                f"expected {len(self.label_keys)} arguments, got {len(args)}"
            )
        if not all(isinstance(arg, str) for arg in args):
            raise CacheIndexError("argument is not a string")
        return LABEL_SEPARATOR.join(args)

    def __repr__(self) -> str:
        return f"LabelIndexer({self.label_keys!r})"

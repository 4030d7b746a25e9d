"""Unit tests for cache indexers."""

from __future__ import annotations

import pytest

from gateway_control_client.cache.indexer import FieldIndexer, LabelIndexer
from gateway_control_client.integrations.admin_api.exceptions import CacheIndexError
from gateway_control_client.integrations.admin_api.models import (
    LABEL_KIND,
    LABEL_NAME,
    LABEL_NAMESPACE,
    GlobalRule,
    Route,
    gen_labels,
)


class TestFieldIndexer:
    """Tests for FieldIndexer."""

    @pytest.mark.unit
    def test_from_object(self) -> None:
        """from_object should read the attribute; empty counts as missing."""
        indexer = FieldIndexer("service_id")

        assert indexer.from_object(Route(id="1", service_id="s1")) == "s1"
        assert indexer.from_object(Route(id="1", service_id="")) is None
        assert indexer.from_object(Route(id="1")) is None

    @pytest.mark.unit
    def test_from_args(self) -> None:
        """from_args should take exactly one string."""
        indexer = FieldIndexer("name")

        assert indexer.from_args("r1") == "r1"
        with pytest.raises(CacheIndexError):
            indexer.from_args("a", "b")
        with pytest.raises(CacheIndexError):
            indexer.from_args(1)


class TestLabelIndexer:
    """Tests for LabelIndexer."""

    @pytest.mark.unit
    def test_from_object_joins_in_key_order(self) -> None:
        """from_object should join kind/namespace/name with slashes."""
        route = Route(id="1", labels=gen_labels("HTTPRoute", "default", "web"))

        assert LabelIndexer().from_object(route) == "HTTPRoute/default/web"

    @pytest.mark.unit
    def test_from_object_skips_missing_keys(self) -> None:
        """Absent label keys should be skipped."""
        route = Route(id="1", labels={LABEL_KIND: "Ingress", LABEL_NAME: "web"})

        assert LabelIndexer().from_object(route) == "Ingress/web"

    @pytest.mark.unit
    def test_from_object_without_labels(self) -> None:
        """Objects without owner labels should not be indexed."""
        assert LabelIndexer().from_object(Route(id="1", labels={"team": "a"})) is None
        assert LabelIndexer().from_object(GlobalRule(id="cors")) is None

    @pytest.mark.unit
    def test_from_args(self) -> None:
        """from_args should require one value per label key."""
        indexer = LabelIndexer()

        assert indexer.from_args("HTTPRoute", "default", "web") == "HTTPRoute/default/web"
        with pytest.raises(CacheIndexError, match="expected 3 arguments, got 2"):
            indexer.from_args("HTTPRoute", "default")

    @pytest.mark.unit
    def test_custom_keys(self) -> None:
        """LabelIndexer should honour custom label keys."""
        indexer = LabelIndexer((LABEL_NAMESPACE,))

        assert indexer.from_args("ns") == "ns"

"""Unit tests for per-kind gateway resource clients."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from gateway_control_client.integrations.admin_api.exceptions import (
    DuplicateKeyError,
    FunctionDisabledError,
    GatewayAPIError,
    GatewayValidationError,
    NotFoundError,
    StillInUseError,
)
from gateway_control_client.integrations.admin_api.models import (
    SSL,
    Consumer,
    GlobalRule,
    PluginConfig,
    PluginMetadata,
    ResourceKind,
    Route,
    Service,
    StreamRoute,
    gen_labels,
)
from gateway_control_client.services.gateway.base import KindLabel, ListOptions
from gateway_control_client.services.gateway.cluster import Cluster
from gateway_control_client.utils.idgen import gen_id

if TYPE_CHECKING:
    from tests.conftest import FakeAdminAPI


class TestGet:
    """Tests for read-through get."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_remote_once_then_cached(
        self, cluster: Cluster, fake_admin: FakeAdminAPI
    ) -> None:
        """get should hit the Admin API once and serve later gets from the cache."""
        key = gen_id("name-x")
        fake_admin.seed("routes", key, {"id": key, "name": "name-x", "uris": ["/x"]})

        first = await cluster.route.get("name-x")
        second = await cluster.route.get("name-x")

        assert first == second
        assert first.uris == ["/x"]
        assert fake_admin.count() == 1
        assert fake_admin.count("GET", f"routes/{key}") == 1
        assert cluster.cache.get(ResourceKind.ROUTE, key) == first

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_not_found_is_not_cached(
        self, cluster: Cluster, fake_admin: FakeAdminAPI
    ) -> None:
        """A remote 404 should raise NotFoundError every time."""
        with pytest.raises(NotFoundError):
            await cluster.service.get("missing")
        with pytest.raises(NotFoundError):
            await cluster.service.get("missing")

        assert fake_admin.count("GET") == 2

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_empty_name(self, cluster: Cluster, fake_admin: FakeAdminAPI) -> None:
        """get with an empty name should raise NotFoundError without a request."""
        with pytest.raises(NotFoundError):
            await cluster.route.get("")

        assert fake_admin.count() == 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_literal_keys(self, cluster: Cluster, fake_admin: FakeAdminAPI) -> None:
        """Consumers and global rules should be looked up by their literal names."""
        fake_admin.seed("consumers", "jack", {"username": "jack"})
        fake_admin.seed("global_rules", "cors", {"id": "cors", "plugins": {"cors": {}}})

        consumer = await cluster.consumer.get("jack")
        rule = await cluster.global_rule.get("cors")

        assert consumer.username == "jack"
        assert rule.plugins == {"cors": {}}
        assert fake_admin.count("GET", "consumers/jack") == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cache_error_falls_through(
        self, cluster: Cluster, fake_admin: FakeAdminAPI, mocker: Any
    ) -> None:
        """A broken cache lookup should fall through to the Admin API."""
        key = gen_id("r")
        fake_admin.seed("routes", key, {"id": key})
        mocker.patch.object(
            cluster.cache, "get", side_effect=DuplicateKeyError("corrupted index")
        )

        route = await cluster.route.get("r")

        assert route.primary_key == key
        assert fake_admin.count("GET") == 1


class TestWrite:
    """Tests for write-through create, update and delete."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_create_list_delete_round_trip(
        self, cluster: Cluster, fake_admin: FakeAdminAPI
    ) -> None:
        """Created objects should be listed until deleted."""
        route = Route(id=gen_id("web"), name="web", uris=["/web"], methods=["get"])

        created = await cluster.route.create(route)
        assert created.methods == ["GET"]
        assert fake_admin.count("PUT", f"routes/{route.id}") == 1
        assert [r.id for r in await cluster.route.list()] == [route.id]

        await cluster.route.delete(created)
        assert [r.id for r in await cluster.route.list()] == []
        with pytest.raises(NotFoundError):
            cluster.cache.get(ResourceKind.ROUTE, route.id)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_update_replaces_cached(self, cluster: Cluster) -> None:
        """update should store the confirmed object in the cache."""
        service = Service(id="s1", name="svc", upstream={"type": "roundrobin"})
        await cluster.service.create(service)

        updated = await cluster.service.update(service.model_copy(update={"desc": "v2"}))

        assert updated.desc == "v2"
        assert cluster.cache.get(ResourceKind.SERVICE, "s1").desc == "v2"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_create_requires_key(self, cluster: Cluster, fake_admin: FakeAdminAPI) -> None:
        """Writing an object without a key should fail before any request."""
        with pytest.raises(GatewayValidationError):
            await cluster.ssl.create(SSL(cert="CERT", key="KEY"))

        assert fake_admin.count() == 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_delete_requires_key(self, cluster: Cluster, fake_admin: FakeAdminAPI) -> None:
        """Deleting an object without a key should fail before any request."""
        with pytest.raises(GatewayValidationError):
            await cluster.route.delete(Route())

        assert fake_admin.count("DELETE") == 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_delete_absent_is_success(
        self, cluster: Cluster, fake_admin: FakeAdminAPI
    ) -> None:
        """Deleting an object the Admin API no longer has should succeed."""
        await cluster.route.delete(Route(id="gone"))

        assert fake_admin.count("DELETE", "routes/gone") == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_remote_error_leaves_cache(
        self, cluster: Cluster, fake_admin: FakeAdminAPI
    ) -> None:
        """A failed remote delete should keep the cached object."""
        consumer = await cluster.consumer.create(Consumer(username="jack"))
        fake_admin.still_in_use.add("jack")

        with pytest.raises(StillInUseError):
            await cluster.consumer.delete(consumer)

        assert cluster.cache.get(ResourceKind.CONSUMER, "jack") == consumer


class TestReferentialIntegrity:
    """Tests for delete checks on referenced objects."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_service_in_use(self, cluster: Cluster, fake_admin: FakeAdminAPI) -> None:
        """A referenced service should not be deleted, locally or remotely."""
        service = await cluster.service.create(Service(id="s1"))
        route = await cluster.route.create(Route(id="r1", service_id="s1"))
        requests_before = fake_admin.count()

        with pytest.raises(StillInUseError):
            await cluster.service.delete(service)

        assert fake_admin.count() == requests_before
        assert "s1" in fake_admin.store["services"]

        await cluster.route.delete(route)
        await cluster.service.delete(service)
        assert "s1" not in fake_admin.store["services"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_service_used_by_stream_route(self, cluster: Cluster) -> None:
        """A service referenced by a stream route should not be deleted."""
        service = await cluster.service.create(Service(id="s1"))
        await cluster.stream_route.create(StreamRoute(id="sr1", service_id="s1"))

        with pytest.raises(StillInUseError):
            await cluster.service.delete(service)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_plugin_config_in_use(self, cluster: Cluster, fake_admin: FakeAdminAPI) -> None:
        """A referenced plugin config should not be deleted."""
        plugin_config = await cluster.plugin_config.create(
            PluginConfig(id="pc1", plugins={"cors": {}})
        )
        await cluster.route.create(Route(id="r1", plugin_config_id="pc1"))

        with pytest.raises(StillInUseError):
            await cluster.plugin_config.delete(plugin_config)

        assert fake_admin.count("DELETE") == 0


class TestList:
    """Tests for list sources."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_remote_list_does_not_cache(
        self, cluster: Cluster, fake_admin: FakeAdminAPI
    ) -> None:
        """A remote list should decode every item without touching the cache."""
        fake_admin.seed("ssls", "c1", {"id": "c1", "snis": ["a.example.com"]})
        fake_admin.seed("ssls", "c2", {"id": "c2", "snis": ["b.example.com"]})

        ssls = await cluster.ssl.list()

        assert sorted(s.id for s in ssls) == ["c1", "c2"]
        assert cluster.cache.list(ResourceKind.SSL) == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cache_list_by_kind_label(
        self, cluster: Cluster, fake_admin: FakeAdminAPI
    ) -> None:
        """A cache list with a kind label should return only owned objects."""
        await cluster.route.create(Route(id="r1", labels=gen_labels("Ingress", "ns", "app")))
        await cluster.route.create(Route(id="r2", labels=gen_labels("Ingress", "ns", "other")))
        requests_before = fake_admin.count()

        owner = KindLabel(kind="Ingress", namespace="ns", name="app")
        owned = await cluster.route.list(ListOptions(source="cache", kind_label=owner))
        everything = await cluster.route.list(ListOptions(source="cache"))

        assert [r.id for r in owned] == ["r1"]
        assert [r.id for r in everything] == ["r1", "r2"]
        assert fake_admin.count() == requests_before

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_remote_list_error(self, cluster: Cluster, fake_admin: FakeAdminAPI) -> None:
        """A failing remote list should surface the error."""
        fake_admin.failing_lists.add("routes")

        with pytest.raises(GatewayAPIError):
            await cluster.route.list()


class TestGlobalRuleClient:
    """Tests for GlobalRuleClient."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_id_from_plugin(self, cluster: Cluster, fake_admin: FakeAdminAPI) -> None:
        """Creating a global rule should use its plugin name as ID."""
        created = await cluster.global_rule.create(GlobalRule(plugins={"limit-count": {}}))

        assert created.id == "limit-count"
        assert fake_admin.count("PUT", "global_rules/limit-count") == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_requires_plugin(self, cluster: Cluster, fake_admin: FakeAdminAPI) -> None:
        """A global rule without plugins should be rejected before any request."""
        with pytest.raises(GatewayValidationError):
            await cluster.global_rule.create(GlobalRule())

        assert fake_admin.count() == 0


class TestStreamRouteClient:
    """Tests for StreamRouteClient."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_function_disabled(self, cluster: Cluster, fake_admin: FakeAdminAPI) -> None:
        """Stream route calls should raise FunctionDisabledError when disabled."""
        fake_admin.disabled.add("stream_routes")

        with pytest.raises(FunctionDisabledError):
            await cluster.stream_route.list()
        with pytest.raises(FunctionDisabledError):
            await cluster.stream_route.get("tcp-route")


class TestPluginMetadataClient:
    """Tests for PluginMetadataClient."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_create_sends_metadata_only(
        self, cluster: Cluster, fake_admin: FakeAdminAPI
    ) -> None:
        """create should send only the metadata document under the plugin name."""
        metadata = PluginMetadata(name="http-logger", metadata={"log_format": {"host": "$host"}})

        created = await cluster.plugin_metadata.create(metadata)

        assert fake_admin.store["plugin_metadata"]["http-logger"] == {
            "log_format": {"host": "$host"}
        }
        assert created == metadata

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_list(self, cluster: Cluster, fake_admin: FakeAdminAPI) -> None:
        """list should decode the name-keyed metadata object."""
        fake_admin.seed("plugin_metadata", "http-logger", {"log_format": {}})
        fake_admin.seed("plugin_metadata", "syslog", {"host": "127.0.0.1"})

        entries = await cluster.plugin_metadata.list()

        assert {e.name: e.metadata for e in entries} == {
            "http-logger": {"log_format": {}},
            "syslog": {"host": "127.0.0.1"},
        }


class TestSchemaClient:
    """Tests for SchemaClient."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_plugin_schema_cached(self, cluster: Cluster, fake_admin: FakeAdminAPI) -> None:
        """Plugin schemas should be read from plugins/<name> once and cached."""
        first = await cluster.schema.get_plugin_schema("limit-count")
        second = await cluster.schema.get_plugin_schema("limit-count")

        assert first.name == "plugins/limit-count"
        assert first.content == fake_admin.schemas["plugins/limit-count"]
        assert second == first
        assert fake_admin.count("GET", "plugins/limit-count") == 1
        assert [s.name for s in await cluster.schema.list()] == ["plugins/limit-count"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_route_schema(self, cluster: Cluster) -> None:
        """get_route_schema should fetch the route schema."""
        schema = await cluster.schema.get_route_schema()

        assert schema.content == '{"type":"object"}'

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_schema(self, cluster: Cluster) -> None:
        """An unknown schema should raise NotFoundError."""
        with pytest.raises(NotFoundError):
            await cluster.schema.get_plugin_schema("does-not-exist")


class TestPluginClient:
    """Tests for PluginClient."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_list_array(self, cluster: Cluster, fake_admin: FakeAdminAPI) -> None:
        """list should return plugin names from an array."""
        assert await cluster.plugin.list() == fake_admin.plugins

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_list_object(self, cluster: Cluster, fake_admin: FakeAdminAPI) -> None:
        """list should accept an object keyed by plugin name."""
        fake_admin.plugins = {"cors": {}, "limit-req": {}}  # type: ignore[assignment]

        assert await cluster.plugin.list() == ["cors", "limit-req"]

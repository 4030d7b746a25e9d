"""One gateway control-plane instance and its warm-sync lifecycle.

A cluster owns an Admin API HTTP client, a local cache and one resource
client per kind. When ``sync_cache`` is enabled, ``start()`` launches a
background task that lists the remote state once and mirrors it into the
cache; writes wait on ``has_synced()`` until that pass has finished.
"""

from __future__ import annotations

import asyncio
import contextlib
import threading
import time
from enum import IntEnum
from typing import TYPE_CHECKING, Any

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_fixed,
)

from gateway_control_client.cache.memdb import Cache
from gateway_control_client.integrations.admin_api.client import AdminAPIClient
from gateway_control_client.integrations.admin_api.config import (
    ClusterOptions,
    GatewayClientConfig,
)
from gateway_control_client.integrations.admin_api.exceptions import (
    CacheError,
    GatewayConnectionError,
    GatewayError,
    SyncStateError,
    describe,
)
from gateway_control_client.integrations.admin_api.models.kinds import ResourceKind
from gateway_control_client.services.gateway.consumer_client import ConsumerClient
from gateway_control_client.services.gateway.global_rule_client import GlobalRuleClient
from gateway_control_client.services.gateway.plugin_client import PluginClient
from gateway_control_client.services.gateway.plugin_config_client import PluginConfigClient
from gateway_control_client.services.gateway.plugin_metadata_client import (
    PluginMetadataClient,
)
from gateway_control_client.services.gateway.route_client import RouteClient
from gateway_control_client.services.gateway.schema_client import SchemaClient
from gateway_control_client.services.gateway.service_client import ServiceClient
from gateway_control_client.services.gateway.ssl_client import SSLClient
from gateway_control_client.services.gateway.stream_route_client import StreamRouteClient

if TYPE_CHECKING:
    from gateway_control_client.integrations.admin_api.models.base import GatewayEntityBase

logger = structlog.get_logger()


class CacheState(IntEnum):
    """Warm-sync progress of a cluster's cache."""

    SYNCING = 0
    SYNCED = 1


class SyncState:
    """Atomic holder for the cache sync state."""

    def __init__(self, initial: CacheState = CacheState.SYNCING) -> None:
        self._lock = threading.Lock()
        self._value = initial

    @property
    def value(self) -> CacheState:
        with self._lock:
            return self._value

    def compare_and_swap(self, old: CacheState, new: CacheState) -> bool:
        """Set ``new`` only if the current state is ``old``.

        Returns:
            True if the swap happened.
        """
        with self._lock:
            if self._value != old:
                return False
            self._value = new
            return True


class Cluster:
    """A registered gateway control-plane instance.

    Example:
        ```python
        cluster = Cluster(ClusterOptions(name="g1", base_url="http://gw:9180/apisix/admin"))
        cluster.start()

        route = await cluster.route.get("default_web_rule-0")
        await cluster.close()
        ```
    """

    def __init__(
        self,
        options: ClusterOptions,
        config: GatewayClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the cluster.

        Args:
            options: Connection settings of this cluster.
            config: Retry and probe settings shared across clusters.
            transport: Optional shared httpx transport (not closed by the cluster).
        """
        self.options = options
        self.config = config or GatewayClientConfig()
        self._log = logger.bind(cluster=options.name)

        url = httpx.URL(options.base_url)
        self._probe_host = url.host
        self._probe_port = url.port or (443 if url.scheme == "https" else 80)

        self.admin = AdminAPIClient(options, transport=transport)
        self.cache = Cache()

        self._state = SyncState()
        self._synced = asyncio.Event()
        self._sync_error: BaseException | None = None
        self._sync_task: asyncio.Task[None] | None = None

        self._route = RouteClient(self)
        self._service = ServiceClient(self)
        self._ssl = SSLClient(self)
        self._stream_route = StreamRouteClient(self)
        self._global_rule = GlobalRuleClient(self)
        self._consumer = ConsumerClient(self)
        self._plugin_config = PluginConfigClient(self)
        self._plugin_metadata = PluginMetadataClient(self)
        self._schema = SchemaClient(self)
        self._plugin = PluginClient(self)

        self._log.info(
            "cluster_initialized",
            base_url=options.base_url,
            admin_api_version=options.admin_api_version,
            sync_cache=options.sync_cache,
        )

    @property
    def name(self) -> str:
        return self.options.name

    @property
    def base_url(self) -> str:
        return self.options.base_url

    @property
    def route(self) -> RouteClient:
        return self._route

    @property
    def service(self) -> ServiceClient:
        return self._service

    @property
    def ssl(self) -> SSLClient:
        return self._ssl

    @property
    def stream_route(self) -> StreamRouteClient:
        return self._stream_route

    @property
    def global_rule(self) -> GlobalRuleClient:
        return self._global_rule

    @property
    def consumer(self) -> ConsumerClient:
        return self._consumer

    @property
    def plugin_config(self) -> PluginConfigClient:
        return self._plugin_config

    @property
    def plugin_metadata(self) -> PluginMetadataClient:
        return self._plugin_metadata

    @property
    def schema(self) -> SchemaClient:
        return self._schema

    @property
    def plugin(self) -> PluginClient:
        return self._plugin

    def start(self) -> None:
        """Launch the warm-sync task if cache sync is enabled.

        Must be called from a running event loop. Calling it again is a no-op;
        ``has_synced`` calls it when the cluster was never started.
        """
        if not self.options.sync_cache or self._sync_task is not None:
            return
        self._sync_task = asyncio.create_task(
            self._sync_cache(), name=f"gateway-cache-sync-{self.name}"
        )

    async def has_synced(self, timeout: float | None = None) -> None:
        """Wait until the warm-sync pass has finished.

        Returns at once when the cluster does not wait for warm-sync.

        Args:
            timeout: Seconds to wait at most; None waits until the pass ends
                or the calling task is cancelled.

        Raises:
            TimeoutError: If ``timeout`` elapses first.
            Exception: The terminal error recorded by a failed warm-sync.
        """
        if not self.options.sync_cache:
            return
        if self._sync_error is not None:
            raise self._sync_error
        if self._state.value == CacheState.SYNCED:
            return
        self.start()

        started = time.monotonic()
        self._log.warning("waiting_for_cluster_ready")
        try:
            async with asyncio.timeout(timeout):
                await self._synced.wait()
        except TimeoutError:
            self._log.error("failed_to_wait_for_cluster_ready", timeout=timeout)
            raise

        if self._sync_error is not None:
            raise self._sync_error
        self._log.warning("cluster_ready", cost=round(time.monotonic() - started, 3))

    async def health_check(self) -> None:
        """Probe the admin endpoint with a TCP connect, retrying a few times.

        Raises:
            GatewayConnectionError: The last probe failure once the attempt
                budget is exhausted.
        """
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(GatewayConnectionError),
            stop=stop_after_attempt(self.config.health_check_attempts),
            wait=wait_fixed(self.config.health_check_backoff),
            before_sleep=self._log_retry("health_check_failed_will_retry"),
            reraise=True,
        ):
            with attempt:
                await self._probe()

    async def _probe(self) -> None:
        address = f"{self._probe_host}:{self._probe_port}"
        try:
            async with asyncio.timeout(self.config.probe_timeout):
                _, writer = await asyncio.open_connection(self._probe_host, self._probe_port)
        except (OSError, TimeoutError) as e:
            raise GatewayConnectionError(
                message=f"TCP probe to {address} failed: {e!r}",
                endpoint=address,
                original_error=e,
            ) from e
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            self._log.warning("failed_to_close_probe_connection", error=str(e))

    def _log_retry(self, event: str) -> Any:
        def log_attempt(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.exception() if retry_state.outcome else None
            self._log.warning(
                event,
                attempt=retry_state.attempt_number,
                **(describe(error) if error else {}),
            )

        return log_attempt

    async def _sync_cache(self) -> None:
        started = time.monotonic()
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.config.sync_attempts),
                wait=wait_exponential(
                    multiplier=self.config.sync_backoff,
                    exp_base=self.config.sync_backoff_factor,
                    max=self.config.sync_backoff_max,
                ),
                before_sleep=self._log_retry("cache_sync_failed_will_retry"),
                reraise=True,
            ):
                with attempt:
                    await self._sync_cache_once()
        except asyncio.CancelledError:
            self._sync_error = GatewayError("cache sync cancelled")
            raise
        except Exception as e:
            self._sync_error = e
            self._log.error(
                "failed_to_sync_cache",
                cost=round(time.monotonic() - started, 3),
                **describe(e),
            )
        else:
            self._log.info("cache_synced", cost=round(time.monotonic() - started, 3))
        finally:
            self._synced.set()
            if not self._state.compare_and_swap(CacheState.SYNCING, CacheState.SYNCED):
                self._log.critical("cache_sync_state_violation", **describe(SyncStateError()))

    async def _sync_cache_once(self) -> None:
        """List every mirrored kind, then insert everything into the cache."""
        batches: list[tuple[ResourceKind, list[GatewayEntityBase]]] = [
            (ResourceKind.ROUTE, list(await self._route.list())),
            (ResourceKind.SSL, list(await self._ssl.list())),
            (ResourceKind.GLOBAL_RULE, list(await self._global_rule.list())),
            (ResourceKind.CONSUMER, list(await self._consumer.list())),
        ]
        for kind, objects in batches:
            for obj in objects:
                try:
                    self.cache.insert(kind, obj)
                except CacheError as e:
                    if kind != ResourceKind.CONSUMER:
                        raise
                    self._log.error(
                        "failed_to_insert_consumer_to_cache",
                        username=obj.primary_key,
                        **describe(e),
                    )
            self._log.debug("cache_sync_inserted", table=str(kind), count=len(objects))

    async def close(self) -> None:
        """Stop the warm-sync task and close the HTTP client."""
        if self._sync_task is not None and not self._sync_task.done():
            self._sync_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._sync_task
        if self.options.sync_cache and not self._synced.is_set():
            # Never started, or cancelled before its first step.
            self._sync_error = GatewayError("cache sync cancelled")
            self._synced.set()
        await self.admin.close()
        self._log.debug("cluster_closed")

    def __str__(self) -> str:
        return f"name={self.name}; base_url={self.base_url}"

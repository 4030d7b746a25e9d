"""Gateway Admin API HTTP client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import structlog

from gateway_control_client.integrations.admin_api.envelope import (
    GetResponse,
    ListResponse,
    decode_get,
    decode_list,
    is_function_disabled,
)
from gateway_control_client.integrations.admin_api.exceptions import (
    FunctionDisabledError,
    GatewayAPIError,
    GatewayConnectionError,
    GatewayDecodeError,
    NotFoundError,
    StillInUseError,
)

if TYPE_CHECKING:
    from gateway_control_client.integrations.admin_api.config import ClusterOptions

logger = structlog.get_logger()

ADMIN_KEY_HEADER = "X-API-Key"
STILL_IN_USE_MARKER = "still using"


class AdminAPIClient:
    """Async HTTP client for one cluster's Admin API.

    The client never retries: every remote failure surfaces to the caller.
    Cancelling the awaiting task cancels the in-flight request.

    Example:
        ```python
        from gateway_control_client.integrations.admin_api import AdminAPIClient
        from gateway_control_client.integrations.admin_api.config import ClusterOptions

        options = ClusterOptions(name="g1", base_url="http://gw:9180/apisix/admin")

        async with AdminAPIClient(options) as client:
            envelope = await client.get_resource("routes/1")
            print(envelope.value)
        ```
    """

    def __init__(
        self,
        options: ClusterOptions,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Admin API client.

        Args:
            options: Cluster connection settings (URL, admin key, timeouts, TLS).
            transport: Optional transport shared with other clusters for
                connection pooling. The caller keeps ownership of it.
        """
        self.options = options
        self._owns_transport = transport is None

        client_kwargs: dict[str, Any] = {
            "base_url": options.base_url,
            "timeout": httpx.Timeout(options.timeout, connect=options.connect_timeout),
            "verify": options.verify_ssl,
        }

        headers: dict[str, str] = {}
        if options.admin_key:
            headers[ADMIN_KEY_HEADER] = options.admin_key
            logger.debug("Admin API client configured with admin key", cluster=options.name)
        if headers:
            client_kwargs["headers"] = headers
        if transport is not None:
            client_kwargs["transport"] = transport

        self._client = httpx.AsyncClient(**client_kwargs)

        logger.info(
            "Admin API client initialized",
            cluster=options.name,
            base_url=options.base_url,
            verify_ssl=options.verify_ssl,
        )

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> httpx.Response:
        """Send one request and translate transport failures.

        Args:
            method: HTTP method (GET, PUT, DELETE).
            endpoint: Path relative to the cluster base URL.
            **kwargs: Additional arguments to pass to httpx.

        Returns:
            The raw HTTP response.

        Raises:
            GatewayConnectionError: If the Admin API cannot be reached.
        """
        url = endpoint.lstrip("/")
        log = logger.bind(cluster=self.options.name, method=method, endpoint=url)

        try:
            log.debug("Admin API request")
            response = await self._client.request(method, url, **kwargs)
            log.debug("Admin API response", status=response.status_code)
            return response
        except httpx.ConnectError as e:
            log.error("Admin API connection error", error=str(e))
            raise GatewayConnectionError(
                message=f"Failed to connect to Admin API: {e}",
                endpoint=url,
                original_error=e,
            ) from e
        except httpx.TimeoutException as e:
            log.error("Admin API request timeout", error=str(e))
            raise GatewayConnectionError(
                message=f"Admin API request timed out: {e}",
                endpoint=url,
                original_error=e,
            ) from e
        except httpx.TransportError as e:
            log.error("Admin API transport error", error=str(e))
            raise GatewayConnectionError(
                message=f"Admin API transport error: {e}",
                endpoint=url,
                original_error=e,
            ) from e

    def _raise_for_response(
        self,
        response: httpx.Response,
        endpoint: str,
        *,
        absent_is_error: bool = True,
    ) -> None:
        """Map an unexpected status code to the error taxonomy.

        The "is disabled" marker is checked before anything else, since a
        disabled feature does not answer with the usual envelope.

        Raises:
            FunctionDisabledError: If the feature is disabled remotely.
            NotFoundError: On 404 when ``absent_is_error`` is set.
            GatewayAPIError: For any other status code.
        """
        body = response.text
        if is_function_disabled(body):
            raise FunctionDisabledError(status_code=response.status_code, endpoint=endpoint)
        if response.status_code == 404 and absent_is_error:
            raise NotFoundError(response_body=body, endpoint=endpoint)
        raise GatewayAPIError(
            message=f"unexpected status code {response.status_code}; error message: {body}",
            status_code=response.status_code,
            response_body=body,
            endpoint=endpoint,
        )

    @staticmethod
    def _disabled_or_raise(error: GatewayDecodeError, response: httpx.Response) -> None:
        if is_function_disabled(response.text):
            raise FunctionDisabledError(
                status_code=response.status_code, endpoint=error.endpoint
            ) from error
        raise error

    async def get_resource(self, endpoint: str) -> GetResponse:
        """GET a single resource and decode its ``{key, value}`` envelope.

        Raises:
            NotFoundError: If the resource does not exist (404).
        """
        response = await self._request("GET", endpoint)
        if response.status_code != 200:
            self._raise_for_response(response, endpoint)
        try:
            return decode_get(response.content, endpoint)
        except GatewayDecodeError as e:
            self._disabled_or_raise(e, response)
            raise

    async def list_resource(self, endpoint: str) -> ListResponse:
        """GET a collection and decode its ``{total, list}`` envelope."""
        response = await self._request("GET", endpoint)
        if response.status_code != 200:
            self._raise_for_response(response, endpoint, absent_is_error=False)
        try:
            return decode_list(response.content, endpoint)
        except GatewayDecodeError as e:
            self._disabled_or_raise(e, response)
            raise

    async def get_json(self, endpoint: str) -> Any:
        """GET an endpoint whose body is plain JSON (no envelope).

        Raises:
            NotFoundError: If the endpoint does not exist (404).
            GatewayDecodeError: If the body is not JSON.
        """
        response = await self._request("GET", endpoint)
        if response.status_code != 200:
            self._raise_for_response(response, endpoint)
        try:
            return response.json()
        except ValueError as e:
            raise GatewayDecodeError(
                message=f"invalid JSON in Admin API response: {e}",
                response_body=response.text,
                endpoint=endpoint,
            ) from e

    async def get_text(self, endpoint: str) -> str:
        """GET an endpoint and return the body text verbatim.

        Raises:
            NotFoundError: If the endpoint does not exist (404).
        """
        response = await self._request("GET", endpoint)
        if response.status_code != 200:
            self._raise_for_response(response, endpoint)
        return response.text

    async def put_resource(self, endpoint: str, payload: dict[str, Any]) -> GetResponse:
        """PUT a resource body and decode the confirmed envelope.

        Used for both create and update: the Admin API upserts by key.
        """
        logger.debug(
            "writing resource",
            cluster=self.options.name,
            endpoint=endpoint,
            body=payload,
        )
        response = await self._request("PUT", endpoint, json=payload)
        if response.status_code not in (200, 201):
            self._raise_for_response(response, endpoint, absent_is_error=False)
        try:
            return decode_get(response.content, endpoint)
        except GatewayDecodeError as e:
            self._disabled_or_raise(e, response)
            raise

    async def delete_resource(self, endpoint: str) -> None:
        """DELETE a resource; an already-absent resource (404) is success.

        Raises:
            StillInUseError: If the Admin API refuses because of references.
        """
        response = await self._request("DELETE", endpoint)
        if response.status_code in (200, 204, 404):
            return
        if STILL_IN_USE_MARKER in response.text and not is_function_disabled(response.text):
            raise StillInUseError(
                message=f"still in use: {response.text}",
                status_code=response.status_code,
                response_body=response.text,
                endpoint=endpoint,
            )
        self._raise_for_response(response, endpoint, absent_is_error=False)

    async def close(self) -> None:
        """Close the HTTP client; a shared transport is left open."""
        if self._owns_transport:
            await self._client.aclose()
        logger.debug("Admin API client closed", cluster=self.options.name)

    async def __aenter__(self) -> AdminAPIClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()

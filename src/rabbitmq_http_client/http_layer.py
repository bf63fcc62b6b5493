"""
HTTP layer for the RabbitMQ HTTP client.

``Client`` does not talk to the network itself: it asks an ``HttpLayerFactory``
for an ``HttpLayer`` built from the validated ``ClientConfig``. The default
``HttpxLayer`` wraps an ``httpx.AsyncClient`` with basic authentication; pass
your own factory via ``ClientParameters.set_http_layer_factory()`` to change
how requests are sent (headers, proxy, TLS, ...).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Protocol, Self

import httpx
from pydantic import TypeAdapter

from .config import ClientConfig
from .exceptions import ConnectionError, HTTPStatusError, ResponseDecodeError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


class HttpLayer(ABC):
    """
    Abstract base class for HTTP layers.

    Paths are relative to the configured management API URL.
    """

    @abstractmethod
    async def get(self, path: str, response_type: Any = None) -> Any:
        """
        Send a GET request.

        Args:
            path: Path relative to the API URL
            response_type: Optional type the JSON body is validated against

        Returns:
            The decoded body, or None for a 404 response
        """
        ...

    @abstractmethod
    async def put(self, path: str, body: Any = None) -> None:
        """Send a PUT request with an optional JSON body."""
        ...

    @abstractmethod
    async def post(self, path: str, body: Any = None, response_type: Any = None) -> Any:
        """Send a POST request with an optional JSON body."""
        ...

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Send a DELETE request."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release the resources held by this layer."""
        ...

    async def __aenter__(self) -> Self:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()


class HttpLayerFactory(Protocol):
    """Builds the ``HttpLayer`` of a client from its validated configuration."""

    def create(self, config: ClientConfig) -> HttpLayer: ...


class ClientConfigurator(Protocol):
    """
    Post-configures the ``httpx.AsyncClient`` used by ``HttpxLayer``.

    The client already has its base URL, basic authentication, JSON headers and
    timeout when ``configure`` is called. Implementations typically add event
    hooks to set specific headers. The returned client is used from then on;
    usually it is the same instance as the argument.

    Deprecated: use ``HttpLayerFactory`` instead.
    """

    def configure(self, client: httpx.AsyncClient) -> httpx.AsyncClient: ...


class HttpxLayer(HttpLayer):
    """``HttpLayer`` sending requests with ``httpx.AsyncClient``."""

    def __init__(
        self,
        config: ClientConfig,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the layer.

        Args:
            config: Validated client configuration
            timeout: Request timeout in seconds
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests
        """
        base_url = str(config.url)
        if not base_url.endswith("/"):
            base_url += "/"

        client = httpx.AsyncClient(
            base_url=base_url,
            auth=httpx.BasicAuth(config.username, config.password),
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )
        # Clients closed by close(): ours, plus whatever the configurator returned instead.
        # If configure() raises, ours has not opened any connection yet.
        self._clients = [client]
        if config.client_configurator is not None:
            configured = config.client_configurator.configure(client)
            if configured is not client:
                self._clients.append(configured)
            client = configured
        self._client = client
        self.timeout = timeout

    @classmethod
    def factory(
        cls,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> HttpLayerFactory:
        """Return a factory creating ``HttpxLayer`` instances with the given settings."""
        return _HttpxLayerFactory(timeout=timeout, transport=transport)

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def _request(self, method: str, path: str, body: Any = None) -> httpx.Response:
        """
        Send a request and translate httpx errors.

        Raises:
            HTTPStatusError: If the response status is 4xx/5xx
            ConnectionError: If the request could not be sent
        """
        path = path.lstrip("/")
        logger.debug("%s %s", method, path)
        try:
            if body is None:
                response = await self._client.request(method, path)
            else:
                response = await self._client.request(method, path, json=body)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            raise HTTPStatusError(
                message=f"HTTP error: {e.response.status_code} - {e.response.text}",
                code=e.response.status_code,
                body=e.response.text,
            ) from e
        except httpx.RequestError as e:
            raise ConnectionError(f"Request failed: {e}") from e

    @staticmethod
    def _decode(response: httpx.Response, response_type: Any) -> Any:
        """
        Decode the JSON body, validated against ``response_type`` when given.

        Raises:
            ResponseDecodeError: If the body is not JSON or does not match ``response_type``
        """
        if not response.content:
            return None
        try:
            data = response.json()
            if response_type is None:
                return data
            return TypeAdapter(response_type).validate_python(data)
        except ValueError as e:
            raise ResponseDecodeError(
                f"Could not decode response of {response.request.method} {response.request.url.path}: {e}",
                code=response.status_code,
                body=response.text,
            ) from e

    async def get(self, path: str, response_type: Any = None) -> Any:
        try:
            response = await self._request("GET", path)
        except HTTPStatusError as e:
            if e.code == 404:
                return None
            raise
        return self._decode(response, response_type)

    async def put(self, path: str, body: Any = None) -> None:
        await self._request("PUT", path, body)

    async def post(self, path: str, body: Any = None, response_type: Any = None) -> Any:
        response = await self._request("POST", path, body)
        return self._decode(response, response_type)

    async def delete(self, path: str) -> None:
        await self._request("DELETE", path)

    async def close(self) -> None:
        for client in self._clients:
            await client.aclose()


class _HttpxLayerFactory:
    def __init__(self, timeout: float, transport: httpx.AsyncBaseTransport | None):
        self.timeout = timeout
        self.transport = transport

    def create(self, config: ClientConfig) -> HttpLayer:
        return HttpxLayer(config, timeout=self.timeout, transport=self.transport)


__all__ = [
    "ClientConfigurator",
    "DEFAULT_TIMEOUT",
    "HttpLayer",
    "HttpLayerFactory",
    "HttpxLayer",
]

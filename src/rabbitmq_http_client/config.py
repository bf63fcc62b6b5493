"""
Validated client configuration.

Provides the immutable configuration produced by
``ClientParameters._validate()`` and consumed by ``Client``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .http_layer import ClientConfigurator, HttpLayerFactory


@dataclass(frozen=True)
class ClientConfig:
    """
    Immutable configuration for a RabbitMQ management API client.

    Attributes:
        url: Base URL of the management API, without user info.
        username: The username for HTTP basic authentication.
        password: The password for HTTP basic authentication.
        http_layer_factory: Optional factory building the HTTP layer.
        client_configurator: Deprecated post-configuration hook for the httpx client.
    """

    url: httpx.URL
    username: str
    password: str = field(repr=False)
    http_layer_factory: HttpLayerFactory | None = None
    client_configurator: ClientConfigurator | None = None


__all__ = ["ClientConfig"]

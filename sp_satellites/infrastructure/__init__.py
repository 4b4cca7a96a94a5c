"""
Infrastructure package for the satellite list client.

Centralizes HTTP transport concerns (client construction, timeouts,
credentials). Keep this layer focused on I/O and resource management,
decoupled from the client's request/response contract.
"""

from sp_satellites.infrastructure.http_factory import (
    async_client,
    build_base_headers,
    create_async_client,
)

__all__ = [
    "async_client",
    "build_base_headers",
    "create_async_client",
]

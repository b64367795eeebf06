"""
HTTP client factory for standardized AsyncClient configuration
"""
from typing import Optional

import httpx


def get_async_client(
    timeout: float = 30.0,
    max_connections: int = 20,
    max_keepalive: int = 5,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Return an AsyncClient with connection limits, redirects and default timeout.

    Args:
        timeout: request timeout in seconds
        max_connections: maximum number of connections
        max_keepalive: maximum number of keep-alive connections
        transport: optional transport override (tests use httpx.MockTransport)
    """
    limits = httpx.Limits(max_keepalive_connections=max_keepalive, max_connections=max_connections)
    return httpx.AsyncClient(
        limits=limits,
        timeout=timeout,
        follow_redirects=True,
        transport=transport,
    )

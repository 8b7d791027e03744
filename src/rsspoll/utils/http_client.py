"""HTTP client utilities.

Provides configured HTTP client with sensible defaults.
"""

import httpx


def create_http_client(
    timeout: float = 30,
    user_agent: str = "rsspoll/1.0",
    follow_redirects: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create a configured async HTTP client.

    Args:
        timeout: Request timeout in seconds.
        user_agent: User-Agent header value.
        follow_redirects: Whether to follow redirects.
        transport: Optional transport override (used to stub the network).

    Returns:
        Configured httpx.AsyncClient.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": user_agent},
        follow_redirects=follow_redirects,
        transport=transport,
    )

"""Shared outbound HTTP connection pool (tax provider + hosted marketplace).

One AsyncClient per process, created lazily and closed on shutdown. Adapters
receive it explicitly; nothing reads it implicitly.
"""

import httpx

_http_client: httpx.AsyncClient | None = None


async def get_http_client() -> httpx.AsyncClient:
    """Get or create the shared AsyncClient (httpx default timeout applies)."""
    global _http_client  # noqa: PLW0603
    if _http_client is None:
        _http_client = httpx.AsyncClient()
    return _http_client


async def close_http_client() -> None:
    """Close the shared AsyncClient."""
    global _http_client  # noqa: PLW0603
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None

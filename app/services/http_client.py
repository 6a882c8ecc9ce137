"""
Pooled HTTP client for the Spotify and YouTube metadata lookups.

Lookups are rare (the admin fills in one song at a time), so the pool is
small; the client is created on the first lookup and closed on shutdown.
"""
import httpx
from typing import Optional

from app.config import get_settings

PROVIDER_USER_AGENT = "SongRank/1.0 (+metadata lookup)"


def build_metadata_client(timeout_seconds: float) -> httpx.AsyncClient:
    """A client whose read timeout is `timeout_seconds` and connect timeout at most 5s."""
    return httpx.AsyncClient(
        limits=httpx.Limits(max_keepalive_connections=4, max_connections=8),
        timeout=httpx.Timeout(timeout_seconds, connect=min(timeout_seconds, 5.0)),
        headers={"User-Agent": PROVIDER_USER_AGENT},
        http2=True,
        follow_redirects=True,
    )


class HTTPClientManager:
    """Holds the one client shared by both providers."""

    _client: Optional[httpx.AsyncClient] = None

    @classmethod
    def get_client(cls) -> httpx.AsyncClient:
        if cls._client is None or cls._client.is_closed:
            cls._client = build_metadata_client(get_settings().metadata_timeout_seconds)
        return cls._client

    @classmethod
    async def close(cls) -> None:
        """Close the client. Called from the app lifespan on shutdown."""
        if cls._client is not None:
            await cls._client.aclose()
            cls._client = None


def get_http_client() -> httpx.AsyncClient:
    return HTTPClientManager.get_client()

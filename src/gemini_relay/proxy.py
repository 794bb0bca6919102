"""HTTP proxy logic for calling the upstream inference API."""

import logging

import httpx
import logfire

from .config import UPSTREAM_URL, UPSTREAM_TIMEOUT, UPSTREAM_CONNECT_TIMEOUT
from .protocol import Envelope, parse_upstream, to_envelope

logger = logging.getLogger(__name__)

# Persistent client for connection pooling
_client: httpx.AsyncClient | None = None


async def get_client() -> httpx.AsyncClient:
    """Get or create the HTTP client."""
    global _client
    if _client is None:
        _client = httpx.AsyncClient(
            base_url=UPSTREAM_URL,
            timeout=httpx.Timeout(UPSTREAM_TIMEOUT, connect=UPSTREAM_CONNECT_TIMEOUT),
        )
    return _client


async def close():
    """Close the HTTP client."""
    global _client
    if _client:
        await _client.aclose()
        _client = None


async def fetch_and_format_response(path: str, params: dict[str, str]) -> Envelope:
    """GET an upstream path and normalise whatever comes back into an Envelope.

    One call, no retry. The upstream HTTP status is ignored; only the JSON
    body matters. Anything that goes wrong on the way (network, timeout,
    a body that isn't JSON) becomes the "500" envelope.
    """
    try:
        client = await get_client()
        response = await client.get(path, params=params)
        data = response.json()
    except Exception as e:
        logfire.exception("Upstream request failed", path=path, error=str(e))
        return Envelope.upstream_error()

    logger.debug(f"Upstream {path} answered {response.status_code}")
    return to_envelope(parse_upstream(data))

"""
Remote image proxy.

The card builder draws remote images onto a canvas, which browsers only allow
for same-origin or CORS-enabled sources. The proxy re-serves the image with
permissive CORS headers and a short private cache.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import httpx

from gunpla_sekai.core.errors import BadRequestError, GunplaSekaiError
from gunpla_sekai.core.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "image/jpeg"
PROXY_TIMEOUT = 15.0


class UpstreamError(GunplaSekaiError):
    status_code = 502


def proxy_headers(content_type: Optional[str]) -> Dict[str, str]:
    return {
        "content-type": content_type or DEFAULT_CONTENT_TYPE,
        "access-control-allow-origin": "*",
        "cache-control": "private, max-age=60",
    }


async def fetch_image(url: Optional[str], client: Optional[httpx.AsyncClient] = None) -> Tuple[bytes, Dict[str, str]]:
    """
    Download ``url`` and return its body with the headers to serve it under.

    Raises:
        BadRequestError: When no url, or a non-http url, is given.
        UpstreamError: When the remote server answers with an error status.
    """
    if not url:
        raise BadRequestError("url required")
    if not url.startswith(("http://", "https://")):
        raise BadRequestError("url must be an http(s) url")

    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=PROXY_TIMEOUT, follow_redirects=True)
    try:
        response = await client.get(url)
    finally:
        if owns_client:
            await client.aclose()

    if response.is_error:
        logger.warning(f"Image proxy upstream returned {response.status_code} for {url}")
        raise UpstreamError("bad upstream")
    return response.content, proxy_headers(response.headers.get("content-type"))
